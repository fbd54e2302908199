"""本将棋 (Full Shogi) rule engine."""

from shogi_rules.board import Board, Hand, Piece, Square
from shogi_rules.config import GameConfig
from shogi_rules.game import Checkmate, Game, GameResult, IllegalMove, Ongoing, Resign
from shogi_rules.initial import standard_position
from shogi_rules.moves import Drop, Move, Relocate
from shogi_rules.position import Position
from shogi_rules.rules import is_in_check, legal_moves
from shogi_rules.types import PieceType, Player

__all__ = [
    "Board",
    "Checkmate",
    "Drop",
    "Game",
    "GameConfig",
    "GameResult",
    "Hand",
    "IllegalMove",
    "Move",
    "Ongoing",
    "Piece",
    "PieceType",
    "Player",
    "Position",
    "Relocate",
    "Resign",
    "Square",
    "is_in_check",
    "legal_moves",
    "standard_position",
]
