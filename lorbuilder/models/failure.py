"""
Failure Explanation Envelope and the deck pipeline's error taxonomy.

Every failure the pipeline knows about is raised as a KnownError subclass.
The API renders them through a single exception handler as an ApiResponse
known-failure envelope. Anything else is rendered as the unknown-failure
envelope with a 500.

Taxonomy:
- Codec: MalformedIdentifier, InvalidCardCount, InvalidDeckCode
- Catalog: CatalogUnavailable, CatalogTooSmall
- Oracle: OracleUnavailable, OracleResponseUnparseable
- Repair engine: InsufficientCardPool, DeckNotConstructible, TooManyChampions
- Persistence: DeckNotFound
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Constraint violations
    VALIDATION_FAILED = "validation_failed"
    DECK_SIZE_VIOLATION = "deck_size_violation"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


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


class ApiResponse(BaseModel):
    """Response envelope for failed outcomes."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="What went wrong",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        """
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
    def unknown_failure(
        cls,
        detail: str | None = None,
    ) -> "ApiResponse":
        """Create the catch-all response for unexpected exceptions."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=("I failed and I don't know why. Try simplifying the request or retrying."),
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

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# CODEC
# =============================================================================


class MalformedIdentifier(KnownError):
    """Raised when card codes cannot be packed into a deck code."""

    def __init__(self, codes: Iterable[str]):
        self.codes = list(codes)
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Invalid card code format: {', '.join(self.codes)}",
            detail="Card codes must be 2 digits, a known 2-letter faction, then 3 digits.",
        )


class InvalidCardCount(KnownError):
    """Raised when a deck entry has a non-positive count."""

    def __init__(self, code: str, count: int):
        self.code = code
        self.count = count
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Invalid count {count} for card {code}",
        )


class InvalidDeckCode(KnownError):
    """Raised when a deck code cannot be parsed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid deck code",
            detail=reason,
            suggestion="Copy the deck code again from the game client.",
        )


# =============================================================================
# CATALOG
# =============================================================================


class CatalogUnavailable(KnownError):
    """Raised when no card catalog can be loaded."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Card database is empty or unreachable.",
            detail=detail,
            suggestion="Refresh the card catalog to fetch cards from Riot's servers.",
            status_code=503,
        )


class CatalogTooSmall(KnownError):
    """Raised when the catalog holds too few cards to build decks."""

    def __init__(self, size: int, minimum: int):
        self.size = size
        self.minimum = minimum
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=f"Card database only has {size} cards (need at least {minimum}).",
            suggestion="Refresh the card catalog to fetch the full database.",
            status_code=503,
        )


# =============================================================================
# ORACLE
# =============================================================================


class OracleUnavailable(KnownError):
    """Raised when the generative model cannot be called."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Deck generation is unavailable.",
            detail=detail,
            suggestion="Configure the Anthropic API key and try again.",
            status_code=503,
        )


class OracleResponseUnparseable(KnownError):
    """Raised when the model reply holds no usable deck JSON."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The deck suggestion could not be read.",
            detail=reason,
            suggestion="Try again or rephrase the request.",
            status_code=502,
        )


# =============================================================================
# REPAIR ENGINE
# =============================================================================


class InsufficientCardPool(KnownError):
    """Raised when no catalog cards can fill the deck."""

    def __init__(self, regions: Iterable[str], total_count: int):
        self.regions = list(regions)
        self.total_count = total_count
        super().__init__(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message="No cards available to fill the deck.",
            detail=(
                f"Fill pool for regions {self.regions or '[]'} is empty "
                f"with {total_count} cards placed."
            ),
            suggestion="Try a different prompt or refresh the card catalog.",
            status_code=422,
        )


class DeckNotConstructible(KnownError):
    """Raised when repair cannot reach the exact deck size."""

    def __init__(self, total_count: int, champion_count: int, entry_count: int, target: int):
        self.total_count = total_count
        self.champion_count = champion_count
        self.entry_count = entry_count
        self.target = target
        super().__init__(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message=(
                f"Deck has {total_count} cards (need {target}) "
                f"with only {entry_count} unique cards."
            ),
            detail=f"total={total_count} champions={champion_count} entries={entry_count}",
            suggestion="Try a different prompt.",
            status_code=422,
        )


class TooManyChampions(KnownError):
    """Raised when the champion cap still fails after repair."""

    def __init__(self, champion_count: int, limit: int, total_count: int, entry_count: int):
        self.champion_count = champion_count
        self.limit = limit
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=f"Too many champion cards: {champion_count}/{limit}.",
            detail=f"total={total_count} champions={champion_count} entries={entry_count}",
            suggestion="Please try again.",
            status_code=422,
        )


# =============================================================================
# PERSISTENCE
# =============================================================================


class DeckNotFound(KnownError):
    """Raised when a deck does not exist or belongs to another user."""

    def __init__(self, deck_id: int):
        self.deck_id = deck_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Deck not found",
            detail=f"deck_id={deck_id}",
            status_code=404,
        )
