"""Board representation for 本将棋 (9x9).

9×9盤の盤面データ構造。イミュータブルなデータクラスで、
変更メソッドは新しいオブジェクトを返す（元の盤面は変化しない）。

座標は将棋表記に合わせて筋(file)・段(rank)とも 1〜9。
盤面は 81要素のタプルで、Square.index（詰めた整数）をキーにする。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from shogi_rules.errors import InsufficientResourceError, InvalidStateError, StructuralError
from shogi_rules.types import (
    FILES,
    NUM_SQUARES,
    PROMOTABLE_TYPES,
    RANKS,
    PieceType,
    Player,
)


@dataclass(frozen=True, order=True)
class Square:
    """A square on the board, e.g. Square(7, 7) is 7七."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (1 <= self.file <= FILES and 1 <= self.rank <= RANKS):
            raise StructuralError(
                "Square out of range",
                context={"file": self.file, "rank": self.rank},
            )

    @property
    def index(self) -> int:
        """盤面タプル上のインデックス（0〜80）。"""
        return (self.rank - 1) * FILES + (self.file - 1)

    @staticmethod
    def from_index(idx: int) -> Square:
        return Square(idx % FILES + 1, idx // FILES + 1)

    def offset(self, d_file: int, d_rank: int) -> Square | None:
        """Return the square shifted by (d_file, d_rank), or None if off the board."""
        f, r = self.file + d_file, self.rank + d_rank
        if 1 <= f <= FILES and 1 <= r <= RANKS:
            return Square(f, r)
        return None


@dataclass(frozen=True)
class Piece:
    """A piece on the board.

    盤面上の駒。所有者・駒種・成りフラグを持つ。
    変換メソッドはすべて新しい Piece を返す。
    """

    owner: Player
    kind: PieceType
    promoted: bool = False

    def promote(self) -> Piece:
        """成った駒を返す。成れない駒種ならそのまま返す。"""
        if self.kind not in PROMOTABLE_TYPES:
            return self
        return Piece(self.owner, self.kind, True)

    def unpromote(self) -> Piece:
        return Piece(self.owner, self.kind, False)


def _empty_squares() -> tuple[Piece | None, ...]:
    return (None,) * NUM_SQUARES


@dataclass(frozen=True)
class Board:
    """Immutable 9x9 board.

    squares: 81要素のタプル。squares[Square.index] でアクセス。
    1マスに置ける駒は高々1枚（タプルの1要素なので構造上保証される）。
    """

    squares: tuple[Piece | None, ...] = field(default_factory=_empty_squares)

    def piece_at(self, square: Square) -> Piece | None:
        """マスの駒を返す。駒がなければ None。"""
        return self.squares[square.index]

    def set_piece(self, square: Square, piece: Piece | None) -> Board:
        """マスの駒を変更した新しい Board を返す（None で空にする）。"""
        squares = list(self.squares)
        squares[square.index] = piece
        return Board(squares=tuple(squares))

    def pieces(self) -> Iterator[tuple[Square, Piece]]:
        """盤上の全駒を (マス, 駒) の組で列挙する。"""
        for idx, piece in enumerate(self.squares):
            if piece is not None:
                yield Square.from_index(idx), piece

    def find_king(self, player: Player) -> Square | None:
        """プレイヤーの王将のマスを返す。王将がなければ None。"""
        for square, piece in self.pieces():
            if piece.kind == PieceType.KING and piece.owner == player:
                return square
        return None

    def has_unpromoted_pawn_on_file(self, player: Player, file: int) -> bool:
        """Return True if player already has an unpromoted pawn on the file (二歩 check).

        と金（成った歩）は数えない。
        """
        for rank in range(1, RANKS + 1):
            p = self.piece_at(Square(file, rank))
            if (
                p is not None
                and p.owner == player
                and p.kind == PieceType.PAWN
                and not p.promoted
            ):
                return True
        return False


def _empty_counts() -> tuple[tuple[int, ...], tuple[int, ...]]:
    zeros = (0,) * len(PieceType)
    return (zeros, zeros)


@dataclass(frozen=True)
class Hand:
    """Captured pieces of both players.

    持ち駒。counts[player][piece_type] が枚数。
    王将の枚数は常に 0（add() で王将を入れようとすると例外）。
    """

    counts: tuple[tuple[int, ...], tuple[int, ...]] = field(default_factory=_empty_counts)

    def count(self, player: Player, kind: PieceType) -> int:
        return self.counts[player.value][kind.value]

    def add(self, player: Player, kind: PieceType, n: int = 1) -> Hand:
        """持ち駒を n 枚増やした新しい Hand を返す。"""
        if kind == PieceType.KING:
            raise InvalidStateError("King cannot be held in hand", context={"player": player.name})
        return self._with_count(player, kind, self.count(player, kind) + n)

    def remove(self, player: Player, kind: PieceType, n: int = 1) -> Hand:
        """持ち駒を n 枚減らした新しい Hand を返す。"""
        current = self.count(player, kind)
        if current < n:
            raise InsufficientResourceError(
                "Not enough pieces in hand",
                context={"player": player.name, "kind": kind.name, "held": current, "requested": n},
            )
        return self._with_count(player, kind, current - n)

    def kinds(self, player: Player) -> list[PieceType]:
        """1枚以上持っている駒種のリスト。"""
        return [pt for pt in PieceType if self.count(player, pt) > 0]

    def total(self, player: Player) -> int:
        return sum(self.counts[player.value])

    def _with_count(self, player: Player, kind: PieceType, value: int) -> Hand:
        counts = [list(self.counts[0]), list(self.counts[1])]
        counts[player.value][kind.value] = value
        return Hand(counts=(tuple(counts[0]), tuple(counts[1])))
