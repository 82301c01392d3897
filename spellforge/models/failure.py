"""
Response envelope for the HTTP layer.

Every JSON endpoint answers with an ApiResponse classified as one of:
- Success: the operation completed
- Refusal: a deck rule rejected the mutation (expected, explainable)
- KnownFailure: the request could not be served and we know why
- UnknownFailure: something unexpected happened

All envelopes leave through ``finalize_response()``. The core never
raises for rule violations or bad tokens; this module is where those
values are turned into user-facing outcomes.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from spellforge.models.result import OperationResult


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Share tokens and links
    DECODE_FAILED = "decode_failed"
    NOT_FOUND = "not_found"
    LINK_EXPIRED = "link_expired"

    # Deck rules
    RULE_VIOLATION = "rule_violation"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"

    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(..., description="Classification of the failure")
    message: str = Field(..., description="User-appropriate explanation")
    code: str | None = Field(
        default=None,
        description="Stable rule error code, for rule violations",
    )
    detail: str | None = Field(default=None, description="Additional technical detail")
    suggestion: str | None = Field(default=None, description="Suggested action for the user")


class ApiResponse(BaseModel, Generic[T]):
    """Universal response envelope for JSON endpoints."""

    outcome: OutcomeType = Field(..., description="High-level classification of the result")
    data: T | None = Field(default=None, description="Response data (present on success)")
    failure: FailureDetail | None = Field(
        default=None, description="Failure details (present on non-success)"
    )


class KnownError(Exception):
    """
    A failure the service can explain.

    Raised inside route handlers and turned into a known-failure envelope
    with the given HTTP status.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        return finalize_response(
            ApiResponse(
                outcome=OutcomeType.KNOWN_FAILURE,
                failure=FailureDetail(
                    kind=self.kind,
                    message=self.message,
                    detail=self.detail,
                    suggestion=self.suggestion,
                ),
            )
        )


class InvalidTokenError(KnownError):
    """A share token that does not decode to any deck or team."""

    def __init__(self, token_type: str):
        super().__init__(
            kind=FailureKind.DECODE_FAILED,
            message=f"This {token_type} link is expired or invalid.",
            suggestion="Ask for a fresh link, or start a new build.",
            status_code=422,
        )


# =============================================================================
# RESPONSE BOUNDARY
# =============================================================================

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.REFUSAL: "That move is not allowed by the deck rules.",
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: "Something went wrong. Please retry.",
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.REFUSAL: "Check which slot accepts the card and try again.",
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}

# Track finalized responses by id()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Validate and mark a response as having passed the boundary.

    Raises:
        ValueError: If success carries failure details or a non-success
            response has none
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    elif response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))
    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Used by tests to check no endpoint bypasses the boundary."""
    return id(response) in _finalized_responses


def create_success(data: T) -> ApiResponse[T]:
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)


def create_known_failure(kind: FailureKind, reason: str) -> ApiResponse[Any]:
    """Known failure with the standard message; only the reason varies."""
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=kind,
            message=STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
            detail=reason,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )
    return finalize_response(response)


def create_rule_refusal(result: OperationResult[Any]) -> ApiResponse[Any]:
    """
    Refusal for a failed rules-engine operation.

    The stable error code is passed through so the client can pick its own
    feedback per code.
    """
    if result.success:
        raise ValueError("Cannot build a refusal from a successful result")

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.REFUSAL,
        failure=FailureDetail(
            kind=FailureKind.RULE_VIOLATION,
            message=STANDARD_MESSAGES[OutcomeType.REFUSAL],
            code=result.code.value if result.code else None,
            detail=result.error,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.REFUSAL],
        ),
    )
    return finalize_response(response)


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """Unknown failure; the message is fixed, only the exception type is reported."""
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )
    return finalize_response(response)
