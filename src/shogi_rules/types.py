"""Types and constants for 本将棋 (Full Shogi, 9x9).

本将棋の基本型・定数定義。
駒の種類は8種類（王将を含む）。成り駒は別の駒種ではなく、
Piece.promoted フラグで表現する。
"""

from __future__ import annotations

from enum import IntEnum, unique

FILES = 9
RANKS = 9
NUM_SQUARES = FILES * RANKS  # 81マス


@unique
class Player(IntEnum):
    """Player identifiers.

    先手（SENTE）は段の小さい方へ進む（9段目 → 1段目）。
    後手（GOTE）は段の大きい方へ進む（1段目 → 9段目）。
    """

    SENTE = 0  # 先手
    GOTE = 1   # 後手

    @property
    def opponent(self) -> Player:
        """相手プレイヤーを返す。"""
        return Player(1 - self.value)

    @property
    def forward(self) -> int:
        """「前」方向の段の増減（先手 -1、後手 +1）。"""
        return -1 if self == Player.SENTE else 1


@unique
class PieceType(IntEnum):
    """Piece kinds in 本将棋（8種類）.

    値は持ち駒配列・テンソルチャンネルのインデックスに対応する。
    """

    PAWN = 0    # 歩
    LANCE = 1   # 香
    KNIGHT = 2  # 桂
    SILVER = 3  # 銀
    GOLD = 4    # 金
    BISHOP = 5  # 角
    ROOK = 6    # 飛
    KING = 7    # 玉/王


# 成れる駒種（金・玉は成れない）
PROMOTABLE_TYPES: frozenset[PieceType] = frozenset({
    PieceType.PAWN, PieceType.LANCE, PieceType.KNIGHT,
    PieceType.SILVER, PieceType.BISHOP, PieceType.ROOK,
})

# 成ると金と同じ動きになる駒種（と・成香・成桂・成銀）
GOLD_LIKE_WHEN_PROMOTED: frozenset[PieceType] = frozenset({
    PieceType.PAWN, PieceType.LANCE, PieceType.KNIGHT, PieceType.SILVER,
})

# 持ち駒として使える駒種（玉以外の7種）
HAND_PIECE_TYPES = [
    PieceType.PAWN, PieceType.LANCE, PieceType.KNIGHT,
    PieceType.SILVER, PieceType.GOLD, PieceType.BISHOP, PieceType.ROOK,
]

# 敵陣（成れる領域）の段数
PROMOTION_ZONE_DEPTH = 3

# 方向は (筋の増減, 段の増減) で先手視点。前 = 段の減少方向。
# 後手の場合は段方向を反転して使う。
GOLD_STEPS: list[tuple[int, int]] = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (0, 1),
]

STEP_MOVES: dict[PieceType, list[tuple[int, int]]] = {
    PieceType.PAWN: [(0, -1)],  # 歩: 1マス前のみ
    PieceType.KNIGHT: [(-1, -2), (1, -2)],  # 桂: 間の駒は飛び越える
    PieceType.SILVER: [(-1, -1), (0, -1), (1, -1), (-1, 1), (1, 1)],
    PieceType.GOLD: GOLD_STEPS,
    PieceType.KING: [
        (-1, -1), (0, -1), (1, -1),
        (-1, 0), (1, 0),
        (-1, 1), (0, 1), (1, 1),
    ],
}

SLIDE_MOVES: dict[PieceType, list[tuple[int, int]]] = {
    PieceType.LANCE: [(0, -1)],                               # 香: 前方向のみ
    PieceType.BISHOP: [(-1, -1), (1, -1), (-1, 1), (1, 1)],  # 角: 斜め4方向
    PieceType.ROOK: [(0, -1), (0, 1), (-1, 0), (1, 0)],      # 飛: 縦横4方向
}

# 馬（成り角）の追加1マス移動（縦横）
HORSE_EXTRA_STEPS: list[tuple[int, int]] = [(0, -1), (0, 1), (-1, 0), (1, 0)]
# 龍（成り飛）の追加1マス移動（斜め）
DRAGON_EXTRA_STEPS: list[tuple[int, int]] = [(-1, -1), (1, -1), (-1, 1), (1, 1)]
