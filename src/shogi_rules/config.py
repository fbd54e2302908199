"""Game session configuration.

対局セッションの設定。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Configuration for Game.

    Attributes:
        detect_checkmate:    True なら play() の直後に詰みを判定し、
                             詰んでいれば Checkmate を記録する
        illegal_move_reason: 反則手で終局したときに IllegalMove に残す理由
    """

    detect_checkmate: bool = True
    illegal_move_reason: str = "illegal by current rules"


DEFAULT_GAME_CONFIG = GameConfig()

# 詰みを自動判定しない設定（終局は投了か反則のみ）
MANUAL_TERMINATION_CONFIG = GameConfig(detect_checkmate=False)
