"""
Failure envelope and known error types.

Every user-correctable failure is raised as a KnownError subclass and
rendered by the application as a classified response. Nothing raised here
is fatal: the caller re-prompts and no state is changed.

Response types:
- Success: Operation completed successfully
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_DECK_SIZE = "invalid_deck_size"
    INCOMPLETE_GUESSES = "incomplete_guesses"

    # Resource failures
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    # Play-through ordering
    INVALID_STATE = "invalid_state"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope used for classified failures."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse[Any]":
        """Create an unknown failure response for unexpected exceptions."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong. Please try again.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
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
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvalidDeckSizeError(KnownError):
    """Raised when a parsed deck does not contain exactly the required number of cards."""

    def __init__(self, actual_size: int, required_size: int = 60):
        self.actual_size = actual_size
        self.required_size = required_size
        super().__init__(
            kind=FailureKind.INVALID_DECK_SIZE,
            message=f"Please ensure your deck contains exactly {required_size} cards",
            detail=f"Deck contains {actual_size} cards",
            suggestion="Check the quantities in your decklist and try again.",
            status_code=400,
        )


class IncompleteGuessesError(KnownError):
    """Raised when a submission does not fill every prize guess slot."""

    def __init__(self, filled: int, required: int = 6):
        self.filled = filled
        self.required = required
        super().__init__(
            kind=FailureKind.INCOMPLETE_GUESSES,
            message=f"Please make {required} prize card guesses",
            detail=f"{filled} of {required} guess slots filled",
            suggestion="Fill every guess slot before submitting.",
            status_code=400,
        )


class GameStateError(KnownError):
    """Raised when a play-through operation is called in the wrong phase."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.INVALID_STATE,
            message=message,
            suggestion="Start a new game to continue.",
            status_code=409,
        )


class NotFoundError(KnownError):
    """Raised when a deck or game session does not exist for the user."""

    def __init__(self, resource: str, identifier: object):
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"{resource} not found",
            detail=f"{resource} '{identifier}' not found",
            status_code=404,
        )


class DisplayNameTakenError(KnownError):
    """Raised when another user already holds the requested display name."""

    def __init__(self, display_name: str):
        self.display_name = display_name
        super().__init__(
            kind=FailureKind.CONFLICT,
            message="This display name is already taken",
            detail=f"Display name '{display_name}' is in use",
            suggestion="Choose a different display name.",
            status_code=409,
        )
