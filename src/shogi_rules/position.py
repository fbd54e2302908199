"""Position — an immutable snapshot of board, hands and side to move.

局面。手を適用するたびに新しい Position が作られ、元の局面は変化しない。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shogi_rules.board import Board, Hand, Piece, Square
from shogi_rules.types import PieceType, Player


@dataclass(frozen=True)
class Position:
    """Board + hands + turn.

    Board と Hand はどちらもイミュータブルなので、
    過去の局面を保持しておいても後から書き換えられることはない。
    """

    board: Board = field(default_factory=Board)
    hand: Hand = field(default_factory=Hand)
    turn: Player = Player.SENTE

    def piece_at(self, square: Square) -> Piece | None:
        return self.board.piece_at(square)

    def hand_count(self, player: Player, kind: PieceType) -> int:
        return self.hand.count(player, kind)

    def piece_count(self) -> int:
        """盤上と両者の持ち駒を合わせた駒の総数。"""
        on_board = sum(1 for _ in self.board.pieces())
        return on_board + self.hand.total(Player.SENTE) + self.hand.total(Player.GOTE)
