"""Standard starting position (平手) for 本将棋.

本将棋の標準初期配置を返す。
先手は9段目が後段、後手は1段目が後段。
"""

from __future__ import annotations

from shogi_rules.board import Board, Piece, Square
from shogi_rules.position import Position
from shogi_rules.types import FILES, PieceType, Player

# 後段の並び（9筋 → 1筋）: 香桂銀金王金銀桂香
_BACK_RANK = [
    PieceType.LANCE, PieceType.KNIGHT, PieceType.SILVER,
    PieceType.GOLD, PieceType.KING, PieceType.GOLD,
    PieceType.SILVER, PieceType.KNIGHT, PieceType.LANCE,
]


def standard_board() -> Board:
    """Return the standard starting board (平手)."""
    board = Board()

    for i, pt in enumerate(_BACK_RANK):
        file = FILES - i
        board = board.set_piece(Square(file, 1), Piece(Player.GOTE, pt))
        board = board.set_piece(Square(file, 9), Piece(Player.SENTE, pt))

    # 飛角: 先手は 2八飛・8八角、後手は 8二飛・2二角
    board = board.set_piece(Square(2, 8), Piece(Player.SENTE, PieceType.ROOK))
    board = board.set_piece(Square(8, 8), Piece(Player.SENTE, PieceType.BISHOP))
    board = board.set_piece(Square(8, 2), Piece(Player.GOTE, PieceType.ROOK))
    board = board.set_piece(Square(2, 2), Piece(Player.GOTE, PieceType.BISHOP))

    # 歩: 先手7段目、後手3段目
    for file in range(1, FILES + 1):
        board = board.set_piece(Square(file, 7), Piece(Player.SENTE, PieceType.PAWN))
        board = board.set_piece(Square(file, 3), Piece(Player.GOTE, PieceType.PAWN))

    return board


def standard_position() -> Position:
    """平手の初期局面（持ち駒なし、先手番）。"""
    return Position(board=standard_board(), turn=Player.SENTE)
