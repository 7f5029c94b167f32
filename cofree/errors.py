from __future__ import annotations

from typing import Any


class CofreeError(Exception):
    """Base class for all errors raised by the cofree package."""


class TrampolineContractError(CofreeError, TypeError):
    """Raised when a continuation hands back something other than a Trampoline."""

    def __init__(self, produced: Any, origin: str) -> None:
        self.produced = produced
        self.origin = origin
        super().__init__(
            f"{origin} must return a Trampoline, got {type(produced).__name__}: {produced!r}\n"
            f"Hint: wrap plain values with `Trampoline.now(value)` or use `map` instead of `flat_map`"
        )


class CobindingError(CofreeError, TypeError):
    """Raised when a cobinding block pulls from something that cannot be extracted."""

    def __init__(self, pulled: Any, step: str | int) -> None:
        self.pulled = pulled
        self.step = step
        super().__init__(
            f"Cobinding step {step!r} pulled {type(pulled).__name__}; "
            f"expected a Cofree or a Trampoline"
        )


__all__ = ["CobindingError", "CofreeError", "TrampolineContractError"]
