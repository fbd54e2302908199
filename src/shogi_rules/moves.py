"""Move values for 本将棋.

指し手は2種類のタグ付き共用体:
  Relocate — 盤上の駒を動かす（成り宣言つき）
  Drop     — 持ち駒を空きマスに打つ

どちらもイミュータブルでハッシュ可能。等価性は構造比較
（成りフラグも含む）なので、合法手リストへの `in` 判定がそのまま使える。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from shogi_rules.board import Square
from shogi_rules.types import PieceType


@dataclass(frozen=True)
class Relocate:
    """Move a piece from from_sq to to_sq, optionally promoting."""

    from_sq: Square
    to_sq: Square
    promote: bool = False


@dataclass(frozen=True)
class Drop:
    """Drop a piece of the given kind from hand onto to_sq."""

    kind: PieceType
    to_sq: Square


Move = Union[Relocate, Drop]
