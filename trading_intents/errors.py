"""Error taxonomy shared by the position and trade intent models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trading_intents.position_intents import Amount


class IntentError(Exception):
    """Base error for intent construction and decoding failures.

    Errors compare equal when they share a type and arguments, so callers can
    assert on the exact failure they expect.
    """

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class IncompatibleAmountError(IntentError):
    """Raised when non-``Zero`` amounts of different units are merged."""

    def __init__(self, left: Amount, right: Amount) -> None:
        super().__init__(left, right)
        self.left = left
        self.right = right

    def __str__(self) -> str:
        return (
            "Non-Zero amounts of different type cannot be merged. "
            f"Left: {self.left!r}, Right: {self.right!r}"
        )


class InvalidBeforeAfter(IntentError):
    """Raised when a position intent's ``before`` bound precedes its ``after`` bound."""

    def __init__(self, before: datetime, after: datetime) -> None:
        super().__init__(before, after)
        self.before = before
        self.after = after

    def __str__(self) -> str:
        return (
            "Cannot create PositionIntent with before < after. "
            f"Before: {self.before.isoformat()}, After: {self.after.isoformat()}"
        )


class InvalidCombination(IntentError):
    """Raised when identifier ``All`` is paired with a non-``Zero`` amount."""

    def __str__(self) -> str:
        return "Identifier All can only be used with the Zero amount"


class DecodeError(IntentError):
    """Raised when a wire payload cannot be decoded into an intent model."""
