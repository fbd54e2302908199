"""Game session for 本将棋.

対局の進行を管理するミュータブルなセッション。
現在の局面・棋譜・対局結果を持ち、指し手は必ず rules の合法手判定を
通してから適用する。

反則手は例外ではなく IllegalMove という終局結果になる。
errors モジュールの例外は不変条件のバグだけを表す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from shogi_rules import rules
from shogi_rules.config import DEFAULT_GAME_CONFIG, GameConfig
from shogi_rules.initial import standard_position
from shogi_rules.moves import Move
from shogi_rules.position import Position
from shogi_rules.types import Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ongoing:
    """対局中。"""


@dataclass(frozen=True)
class Resign:
    winner: Player


@dataclass(frozen=True)
class Checkmate:
    winner: Player


@dataclass(frozen=True)
class IllegalMove:
    loser: Player
    reason: str


GameResult = Union[Ongoing, Resign, Checkmate, IllegalMove]


class Game:
    """A single game session.

    Ongoing 以外の結果はすべて終局（以後の play() / resign() は何もしない）。
    棋譜は追記のみで、過去の手が書き換えられることはない。
    """

    def __init__(
        self,
        position: Position | None = None,
        config: GameConfig | None = None,
    ) -> None:
        self._position = position if position is not None else standard_position()
        self._config = config if config is not None else DEFAULT_GAME_CONFIG
        self._history: list[Move] = []
        self._result: GameResult = Ongoing()

    @property
    def position(self) -> Position:
        return self._position

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def history(self) -> tuple[Move, ...]:
        """適用済みの指し手（古い順）。"""
        return tuple(self._history)

    @property
    def is_terminal(self) -> bool:
        return not isinstance(self._result, Ongoing)

    def legal_moves(self) -> list[Move]:
        """現局面の合法手。終局後は空リスト。"""
        if self.is_terminal:
            return []
        return rules.legal_moves(self._position)

    def resign(self, player: Player) -> None:
        """player が投了する。相手の勝ち。"""
        if self.is_terminal:
            return
        self._result = Resign(winner=player.opponent)
        logger.info("%s resigned after %d moves", player.name, len(self._history))

    def play(self, move: Move) -> None:
        """Play a move for the side to move.

        合法手でなければ手番側の反則負けとして終局する。
        """
        if self.is_terminal:
            return

        mover = self._position.turn
        if not rules.is_legal(self._position, move):
            self._result = IllegalMove(loser=mover, reason=self._config.illegal_move_reason)
            logger.info("Illegal move by %s: %s", mover.name, move)
            return

        self._position = rules.apply_move(self._position, move)
        self._history.append(move)
        logger.debug("Move %d by %s: %s", len(self._history), mover.name, move)

        if self._config.detect_checkmate and rules.is_checkmate(self._position):
            self._result = Checkmate(winner=mover)
            logger.info("Checkmate: %s wins after %d moves", mover.name, len(self._history))
