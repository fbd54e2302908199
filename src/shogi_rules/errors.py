"""Exception hierarchy for the shogi rule engine.

ルールエンジンの例外階層。

These are invariant violations, not player mistakes. A player's illegal
move never raises: Game.play() records it as an IllegalMove result.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "InsufficientResourceError",
    "InvalidStateError",
    "ShogiError",
    "StructuralError",
]


class ShogiError(Exception):
    """Base exception for all rule-engine errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """

    code: str = "SHOGI_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"


class StructuralError(ShogiError):
    """Board structure is broken.

    盤外の座標、王将の欠落、空マスからの移動など。
    セットアップか不変条件のバグを示す（プレイヤーの反則ではない）。
    """

    code: str = "STRUCTURAL"


class InsufficientResourceError(ShogiError):
    """A drop asked for a piece that is not in hand."""

    code: str = "INSUFFICIENT_RESOURCE"


class InvalidStateError(ShogiError):
    """An operation would create a state the rules never allow (e.g. king in hand)."""

    code: str = "INVALID_STATE"
