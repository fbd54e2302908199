"""Terminal display for 本将棋."""

from __future__ import annotations

from shogi_rules.board import Piece, Square
from shogi_rules.moves import Drop, Move
from shogi_rules.position import Position
from shogi_rules.types import FILES, HAND_PIECE_TYPES, RANKS, PieceType, Player

# Display characters for pieces
_PIECE_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "歩",
    PieceType.LANCE: "香",
    PieceType.KNIGHT: "桂",
    PieceType.SILVER: "銀",
    PieceType.GOLD: "金",
    PieceType.BISHOP: "角",
    PieceType.ROOK: "飛",
    PieceType.KING: "玉",
}

_PROMOTED_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "と",
    PieceType.LANCE: "杏",
    PieceType.KNIGHT: "圭",
    PieceType.SILVER: "全",
    PieceType.BISHOP: "馬",
    PieceType.ROOK: "龍",
}

_RANK_LABELS = ["一", "二", "三", "四", "五", "六", "七", "八", "九"]


def piece_char(piece: Piece) -> str:
    if piece.promoted:
        return _PROMOTED_CHARS.get(piece.kind, "？")
    return _PIECE_CHARS.get(piece.kind, "？")


def format_square(square: Square) -> str:
    """例: Square(7, 6) → "7六"。"""
    return f"{square.file}{_RANK_LABELS[square.rank - 1]}"


def format_move(move: Move) -> str:
    """Format a move for display.

    例: 盤上の手 → "7七 -> 7六"、成り → "2三 -> 2二+"
        持ち駒打ち → "drop 歩 -> 5五"
    """
    if isinstance(move, Drop):
        return f"drop {_PIECE_CHARS[move.kind]} -> {format_square(move.to_sq)}"
    suffix = "+" if move.promote else ""
    return f"{format_square(move.from_sq)} -> {format_square(move.to_sq)}{suffix}"


def format_position(position: Position) -> str:
    """Format the board for terminal display."""
    lines: list[str] = []

    lines.append(f"後手持駒: {_format_hand(position, Player.GOTE)}")
    lines.append("  ９ ８ ７ ６ ５ ４ ３ ２ １")
    lines.append("+--+--+--+--+--+--+--+--+--+")

    for rank in range(1, RANKS + 1):
        row_str = "|"
        for file in range(FILES, 0, -1):
            piece = position.piece_at(Square(file, rank))
            if piece is None:
                row_str += "  |"
            elif piece.owner == Player.GOTE:
                row_str += f"v{piece_char(piece)}|"
            else:
                row_str += f" {piece_char(piece)}|"
        lines.append(f"{row_str} {_RANK_LABELS[rank - 1]}")
        lines.append("+--+--+--+--+--+--+--+--+--+")

    lines.append(f"先手持駒: {_format_hand(position, Player.SENTE)}")
    turn = "先手" if position.turn == Player.SENTE else "後手"
    lines.append(f"手番: {turn}")

    return "\n".join(lines)


def _format_hand(position: Position, player: Player) -> str:
    pieces: list[str] = []
    for pt in HAND_PIECE_TYPES:
        count = position.hand_count(player, pt)
        if count == 0:
            continue
        char = _PIECE_CHARS[pt]
        pieces.append(char if count == 1 else f"{char}{count}")
    if not pieces:
        return "なし"
    return " ".join(pieces)
