"""
Failure classification for everything a user can see go wrong.

Response types:
- Success: Operation completed successfully
- Refusal: System chose not to proceed (a rule was about to be broken)
- KnownFailure: System knows why it failed

Every exception raised on purpose by this package derives from KnownError,
so the API layer can translate it into an ApiResponse envelope without
guessing. The one exception is ConfigurationError, which is fatal at startup
and never reaches a user.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Identity
    AUTH_FAILED = "auth_failed"
    NOT_AUTHENTICATED = "not_authenticated"

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"

    # Constraint violations
    DECK_SIZE_VIOLATION = "deck_size_violation"

    # Remote store failures
    PERSISTENCE_FAILED = "persistence_failed"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"


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


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope for failures and successes alike."""

    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a refusal response (a rule stopped the operation before any write)."""
        return cls(
            outcome=OutcomeType.REFUSAL,
            failure=FailureDetail(kind=kind, message=message, detail=detail),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(kind=kind, message=message, detail=detail),
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
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
        )


class AuthError(KnownError):
    """Sign-up or sign-in was rejected, or the auth service could not be reached."""

    def __init__(self, message: str, detail: str | None = None, status_code: int = 401):
        super().__init__(
            kind=FailureKind.AUTH_FAILED,
            message=message,
            detail=detail,
            status_code=status_code,
        )


class NotAuthenticatedError(KnownError):
    """A table operation was attempted without a signed-in identity."""

    def __init__(self, message: str = "Sign in to continue."):
        super().__init__(
            kind=FailureKind.NOT_AUTHENTICATED,
            message=message,
            status_code=401,
        )


class PersistenceError(KnownError):
    """
    The remote store rejected an insert, delete or query.

    The message is the store's own explanation; views prefix it with the
    operation that was attempted before letting it reach the user.
    """

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.PERSISTENCE_FAILED,
            message=message,
            detail=detail,
            status_code=502,
        )


class DeckFullError(KnownError):
    """
    Raised when a card is added to a deck that already holds 100 cards.

    Nothing is written when this is raised.
    """

    MESSAGE = "Commander decks must have exactly 100 cards!"

    def __init__(self, card_count: int):
        self.card_count = card_count
        super().__init__(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message=self.MESSAGE,
            detail=f"Deck already holds {card_count} cards",
            status_code=409,
        )

    def to_response(self) -> ApiResponse[Any]:
        return ApiResponse.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
        )


class ConfigurationError(Exception):
    """Required startup configuration is missing. Fatal."""

    pass
