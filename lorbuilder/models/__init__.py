from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.deck import Deck, DeckCard, DeckEntry, DeckRecord
from lorbuilder.models.failure import (
    ApiResponse,
    CatalogTooSmall,
    CatalogUnavailable,
    DeckNotConstructible,
    DeckNotFound,
    FailureDetail,
    FailureKind,
    InsufficientCardPool,
    InvalidCardCount,
    InvalidDeckCode,
    KnownError,
    MalformedIdentifier,
    OracleResponseUnparseable,
    OracleUnavailable,
    OutcomeType,
    TooManyChampions,
)
from lorbuilder.models.suggestion import (
    DeckConceptSuggestion,
    FullDeckSuggestion,
    OracleSuggestion,
    SuggestedCard,
)

__all__ = [
    "ApiResponse",
    "CardAttributes",
    "CardCategory",
    "CatalogTooSmall",
    "CatalogUnavailable",
    "Deck",
    "DeckCard",
    "DeckConceptSuggestion",
    "DeckEntry",
    "DeckNotConstructible",
    "DeckNotFound",
    "DeckRecord",
    "FailureDetail",
    "FailureKind",
    "FullDeckSuggestion",
    "InsufficientCardPool",
    "InvalidCardCount",
    "InvalidDeckCode",
    "KnownError",
    "MalformedIdentifier",
    "OracleResponseUnparseable",
    "OracleSuggestion",
    "OracleUnavailable",
    "OutcomeType",
    "SuggestedCard",
    "TooManyChampions",
]
