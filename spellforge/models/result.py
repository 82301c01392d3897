"""
Operation results for the rules engine and team movement.

Rule violations are values, not exceptions. Every mutation returns an
OperationResult that is either a success carrying the new state or a
failure carrying a stable ErrorCode that callers can branch on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


class ErrorCode(str, Enum):
    """Stable identifiers for rule violations."""

    EMPTY_SOURCE = "EMPTY_SOURCE"
    INVALID_DECK = "INVALID_DECK"
    INVALID_INDEX = "INVALID_INDEX"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_SHAPE = "INVALID_SHAPE"
    WRONG_SLOT_TYPE = "WRONG_SLOT_TYPE"
    DUPLICATE_UNIT = "DUPLICATE_UNIT"
    DECK_FULL = "DECK_FULL"
    MOVE_FAILED = "MOVE_FAILED"
    SOURCE_FAIL = "SOURCE_FAIL"


# Human-readable defaults. Callers pick their own UI text per code.
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.EMPTY_SOURCE: "No item at source",
    ErrorCode.INVALID_DECK: "Invalid deck index",
    ErrorCode.INVALID_INDEX: "Invalid slot index",
    ErrorCode.INVALID_TYPE: "Spellcasters cannot be placed in card slots",
    ErrorCode.INVALID_SHAPE: "Deck does not have the expected shape",
    ErrorCode.WRONG_SLOT_TYPE: "Card kind is not allowed in this slot",
    ErrorCode.DUPLICATE_UNIT: "Card is already in this deck",
    ErrorCode.DECK_FULL: "Deck is full",
    ErrorCode.MOVE_FAILED: "Failed to move card",
    ErrorCode.SOURCE_FAIL: "Failed to update source",
}


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    """
    Tagged result of a single atomic mutation.

    Attributes:
        success: True when the mutation applied
        data: New state (present on success)
        error: Explanation of the failure (present on failure)
        code: Stable failure identifier (present on failure)
        message: Optional informational text on success
    """

    success: bool
    data: T | None = None
    error: str | None = None
    code: ErrorCode | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T, message: str | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, code: ErrorCode, error: str | None = None) -> "OperationResult[T]":
        return cls(success=False, error=error or ERROR_MESSAGES[code], code=code)

    def propagate(
        self, default_code: ErrorCode, default_error: str | None = None
    ) -> "OperationResult[object]":
        """
        Re-wrap this failure for a caller with a different data type.

        Keeps the original code and error when present, falling back to
        ``default_code`` otherwise.
        """
        code = self.code or default_code
        return OperationResult(
            success=False,
            error=self.error or default_error or ERROR_MESSAGES[code],
            code=code,
        )
