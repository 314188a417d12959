"""
Deck builder services.

Card catalog, deck codes, oracle handling and deck repair.
"""

from lorbuilder.services.catalog import (
    BundledFallbackCatalog,
    CardCatalog,
    Catalog,
    LiveCatalog,
    select_catalog,
)
from lorbuilder.services.concept_sanitizer import (
    SanitizedConcept,
    SanitizedFullList,
    derive_regions,
    sanitize_concept,
    sanitize_full_list,
)
from lorbuilder.services.deck_codec import decode, encode, is_valid_card_code
from lorbuilder.services.deck_repair import (
    ConceptSeed,
    DeckRepairEngine,
    DeckState,
    FullListSeed,
    SeedStrategy,
)
from lorbuilder.services.oracle import GenerationMode, request_deck_suggestion
from lorbuilder.services.oracle_parser import extract_json_object, parse_oracle_response

__all__ = [
    "BundledFallbackCatalog",
    "CardCatalog",
    "Catalog",
    "ConceptSeed",
    "DeckRepairEngine",
    "DeckState",
    "FullListSeed",
    "GenerationMode",
    "LiveCatalog",
    "SanitizedConcept",
    "SanitizedFullList",
    "SeedStrategy",
    "decode",
    "derive_regions",
    "encode",
    "extract_json_object",
    "is_valid_card_code",
    "parse_oracle_response",
    "request_deck_suggestion",
    "sanitize_concept",
    "sanitize_full_list",
    "select_catalog",
]
