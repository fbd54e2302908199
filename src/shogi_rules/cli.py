"""CLI entry point for shogi-rules — 本将棋 in the terminal.

コマンドラインで動く本将棋の対局プログラム。
先手は人間、後手は人間またはランダムに指すプログラム。

起動方法: `shogi-cli --opponent random`
"""

from __future__ import annotations

import argparse
import logging
import random

from shogi_rules.config import DEFAULT_GAME_CONFIG, MANUAL_TERMINATION_CONFIG
from shogi_rules.display import format_move, format_position
from shogi_rules.game import Checkmate, Game, IllegalMove, Resign
from shogi_rules.moves import Move
from shogi_rules.types import Player

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Play 本将棋 in the terminal",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--opponent",
        choices=["human", "random"],
        default="random",
        help="Who plays GOTE",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the random opponent")
    parser.add_argument(
        "--no-checkmate-detection",
        action="store_true",
        help="Do not end the game automatically on checkmate",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every move")
    return parser.parse_args(argv)


def _ask_move(game: Game, moves: list[Move]) -> Move | None:
    """合法手一覧を表示して番号入力を求める。投了・中断なら None。"""
    print("Legal moves:")
    for i, m in enumerate(moves):
        print(f"  {i}: {format_move(m)}")
    print()

    # 入力検証ループ（正しい番号が入力されるまで繰り返す）
    while True:
        try:
            choice = input("Your move (number, r = resign): ").strip()
            if choice == "r":
                game.resign(game.position.turn)
                return None
            idx = int(choice)
            if 0 <= idx < len(moves):
                return moves[idx]
            print(f"Invalid: choose 0-{len(moves) - 1}")
        except ValueError:
            print("Enter a number.")
        except (EOFError, KeyboardInterrupt):
            print("\nGame aborted.")
            game.resign(game.position.turn)
            return None


def _describe_result(game: Game) -> str:
    result = game.result
    if isinstance(result, Checkmate):
        return f"Checkmate. {result.winner.name} wins!"
    if isinstance(result, Resign):
        return f"Resignation. {result.winner.name} wins!"
    if isinstance(result, IllegalMove):
        return f"Illegal move by {result.loser.name} ({result.reason})."
    return "Game over."


def main(argv: list[str] | None = None) -> None:
    """Run a game in the terminal.

    ゲームの流れ:
    1. 盤面を表示
    2. 人間の手番なら合法手一覧から番号で選ぶ
    3. ランダム相手ならすぐに応答する
    4. 終局まで繰り返す
    """
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    rng = random.Random(args.seed)
    config = MANUAL_TERMINATION_CONFIG if args.no_checkmate_detection else DEFAULT_GAME_CONFIG
    game = Game(config=config)

    print("=== 本将棋 ===")
    print("You are SENTE. GOTE pieces are marked with 'v'.")
    print()

    while not game.is_terminal:
        print(format_position(game.position))
        print()

        moves = game.legal_moves()
        if not moves:
            # 詰み判定を切っている場合や、王手でない手詰まり
            print(f"{game.position.turn.name} has no legal moves.")
            game.resign(game.position.turn)
            break

        if game.position.turn == Player.GOTE and args.opponent == "random":
            move = rng.choice(moves)  # 一様ランダムサンプリング
            print(f"GOTE plays: {format_move(move)}")
        else:
            move = _ask_move(game, moves)
            if move is None:
                break
        game.play(move)
        print()

    print(format_position(game.position))
    print()
    print(_describe_result(game))
    logger.info("Game finished after %d moves: %s", len(game.history), game.result)


if __name__ == "__main__":
    main()
