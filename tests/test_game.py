"""Tests for the Game session."""

from __future__ import annotations

import logging

import pytest

from shogi_rules import rules
from shogi_rules.board import Board, Hand, Piece, Square
from shogi_rules.config import GameConfig
from shogi_rules.game import Checkmate, Game, IllegalMove, Ongoing, Resign
from shogi_rules.initial import standard_position
from shogi_rules.moves import Drop, Relocate
from shogi_rules.position import Position
from shogi_rules.types import PieceType, Player


def _corner_mate_position() -> Position:
    """後手玉 1一。先手は金を 1二 に打てば詰み。"""
    board = Board()
    for file, rank, kind, owner in [
        (5, 9, PieceType.KING, Player.SENTE),
        (1, 1, PieceType.KING, Player.GOTE),
        (1, 3, PieceType.GOLD, Player.SENTE),
        (3, 2, PieceType.SILVER, Player.SENTE),
    ]:
        board = board.set_piece(Square(file, rank), Piece(owner, kind))
    hand = Hand().add(Player.SENTE, PieceType.GOLD).add(Player.SENTE, PieceType.PAWN)
    return Position(board=board, hand=hand, turn=Player.SENTE)


class TestNewGame:
    def test_initial_state(self) -> None:
        game = Game()
        assert game.result == Ongoing()
        assert not game.is_terminal
        assert game.history == ()
        assert game.position == standard_position()

    def test_custom_position(self) -> None:
        pos = _corner_mate_position()
        game = Game(pos)
        assert game.position is pos

    def test_default_config_detects_checkmate(self) -> None:
        game = Game(_corner_mate_position(), config=None)
        game.play(Drop(PieceType.GOLD, Square(1, 2)))
        assert game.result == Checkmate(winner=Player.SENTE)


class TestPlay:
    def test_legal_move_is_applied(self) -> None:
        game = Game()
        move = Relocate(Square(7, 7), Square(7, 6))
        game.play(move)
        assert game.history == (move,)
        assert game.position.turn == Player.GOTE
        assert game.result == Ongoing()

    def test_history_is_append_only(self) -> None:
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 6)))
        snapshot = game.history
        game.play(Relocate(Square(3, 3), Square(3, 4)))
        assert len(snapshot) == 1
        assert game.history[:1] == snapshot

    def test_bishop_exchange(self) -> None:
        """７六歩 ３四歩 ２二角成 同銀 — 角交換で互いに角を1枚持つ。"""
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 6)))
        game.play(Relocate(Square(3, 3), Square(3, 4)))
        assert Relocate(Square(8, 8), Square(2, 2)) in game.legal_moves()
        game.play(Relocate(Square(8, 8), Square(2, 2), promote=True))
        game.play(Relocate(Square(3, 1), Square(2, 2)))

        pos = game.position
        assert game.result == Ongoing()
        assert len(game.history) == 4
        assert pos.hand_count(Player.SENTE, PieceType.BISHOP) == 1
        assert pos.hand_count(Player.GOTE, PieceType.BISHOP) == 1
        assert pos.piece_at(Square(2, 2)) == Piece(Player.GOTE, PieceType.SILVER)
        assert pos.piece_count() == 40
        assert pos.turn == Player.SENTE

    def test_illegal_move_loses(self) -> None:
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 5)))  # 歩は2マス進めない
        assert game.result == IllegalMove(loser=Player.SENTE, reason="illegal by current rules")
        assert game.is_terminal
        assert game.history == ()

    def test_moving_opponent_piece_is_illegal(self) -> None:
        game = Game()
        game.play(Relocate(Square(3, 3), Square(3, 4)))
        assert game.result == IllegalMove(loser=Player.SENTE, reason="illegal by current rules")

    def test_drop_without_hand_is_illegal_not_error(self) -> None:
        game = Game()
        game.play(Drop(PieceType.GOLD, Square(5, 5)))
        assert isinstance(game.result, IllegalMove)

    def test_play_after_terminal_is_noop(self) -> None:
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 5)))
        result = game.result
        position = game.position
        game.play(Relocate(Square(7, 7), Square(7, 6)))
        assert game.result == result
        assert game.position == position
        assert game.history == ()
        assert game.legal_moves() == []

    def test_custom_illegal_reason(self) -> None:
        game = Game(config=GameConfig(illegal_move_reason="反則"))
        game.play(Relocate(Square(5, 9), Square(5, 7)))
        assert game.result == IllegalMove(loser=Player.SENTE, reason="反則")

    def test_second_player_illegal_move(self) -> None:
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 6)))
        game.play(Relocate(Square(7, 6), Square(7, 5)))  # 後手番に先手の駒
        assert game.result == IllegalMove(loser=Player.GOTE, reason="illegal by current rules")
        assert len(game.history) == 1


class TestResign:
    def test_resign_gives_win_to_opponent(self) -> None:
        game = Game()
        game.resign(Player.SENTE)
        assert game.result == Resign(winner=Player.GOTE)
        assert game.is_terminal

    def test_second_resign_is_noop(self) -> None:
        game = Game()
        game.resign(Player.GOTE)
        game.resign(Player.SENTE)
        assert game.result == Resign(winner=Player.SENTE)

    def test_resign_after_illegal_move_is_noop(self) -> None:
        game = Game()
        game.play(Relocate(Square(7, 7), Square(7, 5)))
        game.resign(Player.GOTE)
        assert isinstance(game.result, IllegalMove)


class TestCheckmate:
    def test_checkmate_is_detected(self) -> None:
        game = Game(_corner_mate_position())
        game.play(Drop(PieceType.GOLD, Square(1, 2)))
        assert game.result == Checkmate(winner=Player.SENTE)
        assert game.history == (Drop(PieceType.GOLD, Square(1, 2)),)

    def test_checkmate_detection_can_be_disabled(self) -> None:
        game = Game(_corner_mate_position(), config=GameConfig(detect_checkmate=False))
        game.play(Drop(PieceType.GOLD, Square(1, 2)))
        assert game.result == Ongoing()
        assert rules.is_checkmate(game.position)
        assert game.legal_moves() == []

    def test_pawn_drop_mate_is_illegal_move(self) -> None:
        game = Game(_corner_mate_position())
        game.play(Drop(PieceType.PAWN, Square(1, 2)))
        assert game.result == IllegalMove(loser=Player.SENTE, reason="illegal by current rules")

    def test_pawn_drop_check_while_in_check_is_illegal_move(self) -> None:
        board = Board()
        for file, rank, kind, owner in [
            (9, 9, PieceType.KING, Player.SENTE),
            (9, 1, PieceType.ROOK, Player.GOTE),
            (1, 1, PieceType.KING, Player.GOTE),
        ]:
            board = board.set_piece(Square(file, rank), Piece(owner, kind))
        hand = Hand().add(Player.SENTE, PieceType.PAWN)
        game = Game(Position(board=board, hand=hand))
        game.play(Drop(PieceType.PAWN, Square(1, 2)))
        assert game.result == IllegalMove(loser=Player.SENTE, reason="illegal by current rules")
        assert game.history == ()

    def test_check_without_mate_continues(self) -> None:
        board = Board()
        board = board.set_piece(Square(5, 9), Piece(Player.SENTE, PieceType.KING))
        board = board.set_piece(Square(5, 1), Piece(Player.GOTE, PieceType.KING))
        hand = Hand().add(Player.SENTE, PieceType.ROOK)
        game = Game(Position(board=board, hand=hand))
        game.play(Drop(PieceType.ROOK, Square(5, 5)))  # 王手だが横に逃げられる
        assert game.result == Ongoing()
        assert rules.is_in_check(game.position, Player.GOTE)
        game.play(Relocate(Square(5, 1), Square(4, 1)))
        assert game.result == Ongoing()
        assert len(game.history) == 2


class TestLogging:
    def test_illegal_move_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        game = Game()
        with caplog.at_level(logging.INFO, logger="shogi_rules.game"):
            game.play(Relocate(Square(7, 7), Square(7, 5)))
        assert "Illegal move by SENTE" in caplog.text
