"""Action-index and tensor encodings for external engines.

探索・学習を行う外部エンジン向けのエンコーディング。
ルールエンジン自体はこのモジュールに依存しない。

Move encoding (from×to approach):
  Board moves (no promotion):   from_idx * 81 + to_idx          (range 0..6560)
  Board moves (with promotion): 6561 + from_idx * 81 + to_idx   (range 6561..13121)
  Drop moves:                   13122 + hand_idx * 81 + to_idx  (range 13122..13688)
    hand_idx: 0=Pawn..6=Rook (HAND_PIECE_TYPES の順)

  Total action space: 13122 + 567 = 13689
"""

from __future__ import annotations

import torch

from shogi_rules import rules
from shogi_rules.board import Square
from shogi_rules.moves import Drop, Move, Relocate
from shogi_rules.position import Position
from shogi_rules.types import (
    FILES,
    HAND_PIECE_TYPES,
    NUM_SQUARES,
    PROMOTABLE_TYPES,
    RANKS,
    PieceType,
    Player,
)

ACTION_SPACE = 13689

_PROMO_MOVE_BASE = NUM_SQUARES * NUM_SQUARES  # 6561
_DROP_MOVE_BASE = 2 * NUM_SQUARES * NUM_SQUARES  # 13122

# 成り駒のチャンネル: 8〜13（PROMOTABLE_TYPES を値の順に並べる）
_PROMOTED_CHANNEL: dict[PieceType, int] = {
    pt: len(PieceType) + i for i, pt in enumerate(sorted(PROMOTABLE_TYPES))
}
_PIECE_CHANNELS = len(PieceType) + len(PROMOTABLE_TYPES)  # 14
NUM_PLANES = 2 * _PIECE_CHANNELS + 2 * len(HAND_PIECE_TYPES) + 1  # 43


def encode_move(move: Move) -> int:
    if isinstance(move, Drop):
        pt_index = HAND_PIECE_TYPES.index(move.kind)
        return _DROP_MOVE_BASE + pt_index * NUM_SQUARES + move.to_sq.index
    base = _PROMO_MOVE_BASE if move.promote else 0
    return base + move.from_sq.index * NUM_SQUARES + move.to_sq.index


def decode_move(action: int) -> Move:
    if not 0 <= action < ACTION_SPACE:
        raise ValueError(f"Action index out of range: {action}")
    if action >= _DROP_MOVE_BASE:
        adjusted = action - _DROP_MOVE_BASE
        return Drop(
            HAND_PIECE_TYPES[adjusted // NUM_SQUARES],
            Square.from_index(adjusted % NUM_SQUARES),
        )
    promote = action >= _PROMO_MOVE_BASE
    adjusted = action - _PROMO_MOVE_BASE if promote else action
    return Relocate(
        Square.from_index(adjusted // NUM_SQUARES),
        Square.from_index(adjusted % NUM_SQUARES),
        promote=promote,
    )


def legal_move_mask(position: Position) -> torch.Tensor:
    """Boolean mask over the action space, True for legal moves."""
    mask = torch.zeros(ACTION_SPACE, dtype=torch.bool)
    indices = [encode_move(m) for m in rules.legal_moves(position)]
    if indices:
        mask[torch.tensor(indices, dtype=torch.long)] = True
    return mask


def _piece_channel(kind: PieceType, promoted: bool) -> int:
    if promoted:
        return _PROMOTED_CHANNEL[kind]
    return kind.value


def to_tensor_planes(position: Position) -> torch.Tensor:
    """Convert a position to tensor planes (43 channels).

    Planes（チャンネル）の構成:
    ch.0-13:  手番側の駒（未成8種 + 成り6種）
    ch.14-27: 相手の駒
    ch.28-34: 手番側の持ち駒数（7種）
    ch.35-41: 相手の持ち駒数（7種）
    ch.42:    手番インジケータ（先手番なら全1）

    平面上の位置は [段 - 1, 9 - 筋]（盤面表示と同じ向き）。
    """
    planes = torch.zeros(NUM_PLANES, RANKS, FILES)
    cp = position.turn

    for square, piece in position.board.pieces():
        ch = _piece_channel(piece.kind, piece.promoted)
        if piece.owner != cp:
            ch += _PIECE_CHANNELS
        planes[ch, square.rank - 1, FILES - square.file] = 1.0

    hand_base = 2 * _PIECE_CHANNELS
    for i, pt in enumerate(HAND_PIECE_TYPES):
        cp_count = position.hand_count(cp, pt)
        opp_count = position.hand_count(cp.opponent, pt)
        if cp_count > 0:
            planes[hand_base + i, :, :] = float(cp_count)
        if opp_count > 0:
            planes[hand_base + len(HAND_PIECE_TYPES) + i, :, :] = float(opp_count)

    if cp == Player.SENTE:
        planes[NUM_PLANES - 1, :, :] = 1.0

    return planes
