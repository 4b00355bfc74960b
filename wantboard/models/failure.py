"""
Failure Classification: Errors and the API Response Envelope.

Every failure a wants command can produce is a KnownError subclass with a
FailureKind. The operation executor converts each one into a single
user-facing line for the operation that raised it; siblings in the same
batch are unaffected.

HTTP responses are wrapped in ApiResponse with one of three outcomes:
- success: the command ran (its reply may still report failed operations)
- known_failure: a KnownError escaped the command handler
- unknown_failure: anything else; the message is fixed and never carries
  exception text

AUTHORITY BOUNDARY:
Envelopes are only built by the create_* helpers, which all pass through
`finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr


class FailureKind(str, Enum):
    """What went wrong, as reported to callers."""

    # Input failures
    SYNTAX_ERROR = "syntax_error"
    VALIDATION_FAILED = "validation_failed"

    # Catalog resolution failures
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"

    # Transport failures
    NETWORK_ERROR = "network_error"

    # Want list limits
    CAPACITY_EXCEEDED = "capacity_exceeded"

    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class ResolutionReason(str, Enum):
    """Why the catalog could not resolve an identifier."""

    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"


class NetworkReason(str, Enum):
    """Why a catalog request failed in transport."""

    TIMEOUT = "timeout"
    CONNECT_FAILED = "connect_failed"
    PARSE_FAILED = "parse_failed"
    API_ERROR = "api_error"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Failure payload of a non-success envelope."""

    kind: FailureKind = Field(..., description="Failure classification")
    message: str = Field(..., description="Text safe to show the user as-is")
    detail: str | None = Field(
        default=None,
        description="Machine-oriented detail, e.g. a network reason or exception type",
    )
    suggestion: str | None = Field(default=None, description="What the user can try next")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for every WantBoard API response.

    `data` is set only on success and `failure` only otherwise.
    """

    outcome: OutcomeType = Field(..., description="success, known_failure or unknown_failure")
    data: T | None = Field(default=None, description="Payload on success")
    failure: FailureDetail | None = Field(default=None, description="Set on any failure")

    _finalized: bool = PrivateAttr(default=False)


# =============================================================================
# EXCEPTION HIERARCHY
# =============================================================================


class KnownError(Exception):
    """
    A failure WantBoard can explain.

    `message` is user-facing. `status_code` is used when the error is
    reported over HTTP rather than inside a command reply.
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


class CommandSyntaxError(KnownError):
    """Raised when a command yields no operations at all."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__(
            kind=FailureKind.SYNTAX_ERROR,
            message=(
                "Invalid syntax! Use `+[number] [card name]` to add, "
                "`-[number] [card name]` to remove, or combine them like "
                "`+1 Lightning Bolt (M25, foil) -2 Opt`"
            ),
            detail=f"No operations parsed from {raw_text[:100]!r}",
        )


class OperationValidationError(KnownError):
    """Raised when an operation's quantity or card name is out of bounds."""

    def __init__(self, message: str):
        super().__init__(kind=FailureKind.VALIDATION_FAILED, message=message)


class ResolutionError(KnownError):
    """
    Raised when the catalog cannot map an identifier to a canonical entry.

    The message is user-facing and is reported verbatim.
    """

    def __init__(self, reason: ResolutionReason, message: str):
        self.reason = reason
        kind = (
            FailureKind.AMBIGUOUS
            if reason is ResolutionReason.AMBIGUOUS
            else FailureKind.NOT_FOUND
        )
        super().__init__(kind=kind, message=message, status_code=404)


class CatalogNetworkError(KnownError):
    """Raised when a catalog request fails before a usable answer arrives."""

    def __init__(self, reason: NetworkReason, message: str):
        self.reason = reason
        super().__init__(
            kind=FailureKind.NETWORK_ERROR,
            message=message,
            detail=reason.value,
            suggestion="Scryfall may be unavailable. Try again shortly.",
            status_code=503,
        )


class CapacityError(KnownError):
    """Raised when a new card specification would exceed a user's list capacity."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            kind=FailureKind.CAPACITY_EXCEEDED,
            message=(
                f"You can only want up to {limit} different card specifications. "
                "Use `clear` to reset your list."
            ),
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================


STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The command could not be completed.",
    OutcomeType.UNKNOWN_FAILURE: "An error occurred while processing your command.",
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the command and try again.",
    OutcomeType.UNKNOWN_FAILURE: "Try again later. If it keeps happening, report it.",
}


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check an envelope's shape and mark it as finalized.

    Raises:
        ValueError: Success carrying a failure, or a failure without one
    """
    has_failure = response.failure is not None
    if response.outcome is OutcomeType.SUCCESS and has_failure:
        raise ValueError("success envelope carries failure details")
    if response.outcome is not OutcomeType.SUCCESS and not has_failure:
        raise ValueError(f"{response.outcome.value} envelope is missing failure details")

    response._finalized = True
    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    return response._finalized


def _failure_response(outcome: OutcomeType, failure: FailureDetail) -> ApiResponse[Any]:
    return finalize_response(ApiResponse(outcome=outcome, failure=failure))


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Wrap an unexpected exception.

    Only the exception's type name is exposed (and only with include_type);
    its message stays in the logs.
    """
    return _failure_response(
        OutcomeType.UNKNOWN_FAILURE,
        FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__ if include_type else None,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """Wrap a KnownError, keeping its own message and suggestion."""
    return _failure_response(
        OutcomeType.KNOWN_FAILURE,
        FailureDetail(
            kind=error.kind,
            message=error.message,
            detail=error.detail,
            suggestion=error.suggestion or STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )


def create_success(data: T) -> ApiResponse[T]:
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
