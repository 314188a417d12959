"""
Deck service.

Orchestrates deck generation end to end:

    catalog -> oracle -> parser -> sanitizer -> repair engine -> codec -> store

and the deck-code side of the application (parse, import, regenerate).
Each request loads its own catalog; nothing is shared between requests.
"""

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lorbuilder.db.operations import (
    catalog_card_to_model,
    create_deck,
    deck_to_record,
    delete_deck,
    get_deck,
    list_catalog_cards,
    list_user_decks,
    update_deck_code,
)
from lorbuilder.models.db import DeckDB
from lorbuilder.models.deck import Deck, DeckCard, DeckRecord
from lorbuilder.models.failure import CatalogUnavailable, DeckNotFound
from lorbuilder.models.suggestion import FullDeckSuggestion, OracleSuggestion
from lorbuilder.services import deck_codec
from lorbuilder.services.catalog import Catalog, CardCatalog, select_catalog
from lorbuilder.services.concept_sanitizer import sanitize_concept, sanitize_full_list
from lorbuilder.services.deck_repair import ConceptSeed, DeckRepairEngine, FullListSeed
from lorbuilder.services.oracle import GenerationMode, request_deck_suggestion
from lorbuilder.services.oracle_parser import parse_oracle_response

logger = logging.getLogger(__name__)

DEFAULT_DECK_NAME = "Generated Deck"

# Faction code -> region display name, for decks read from a deck code
REGION_NAMES: dict[str, str] = {
    "DE": "Demacia",
    "FR": "Freljord",
    "IO": "Ionia",
    "NX": "Noxus",
    "PZ": "Piltover & Zaun",
    "SI": "Shadow Isles",
    "BW": "Bilgewater",
    "MT": "Targon",
    "SH": "Shurima",
    "BC": "Bandle City",
    "RU": "Runeterra",
}

OracleCall = Callable[[str, Catalog, GenerationMode], str]


@dataclass
class BuiltDeck:
    """A repaired deck with its deck code, not yet stored."""

    deck: Deck
    deck_code: str
    name: str
    description: str = ""

    @property
    def cards(self) -> list[DeckCard]:
        return [DeckCard.from_entry(entry) for entry in self.deck.entries]


@dataclass
class ParsedDeck:
    """A deck read back from a deck code."""

    cards: list[DeckCard]
    regions: list[str] = field(default_factory=list)
    champions: list[str] = field(default_factory=list)

    @property
    def total_cards(self) -> int:
        return sum(card.count for card in self.cards)


async def load_catalog(session: AsyncSession, require_usable: bool = True) -> CardCatalog:
    """
    Load the catalog for one request.

    Raises:
        CatalogUnavailable: If the catalog cannot be read or is empty
        CatalogTooSmall: If it is below the minimum size (when required)
    """
    try:
        rows = await list_catalog_cards(session)
    except SQLAlchemyError as e:
        raise CatalogUnavailable(f"{type(e).__name__} while reading the catalog") from e

    catalog = select_catalog(catalog_card_to_model(row) for row in rows)
    if require_usable:
        catalog.ensure_usable()
    return catalog


def build_deck_from_suggestion(
    suggestion: OracleSuggestion,
    catalog: Catalog,
    rng: random.Random | None = None,
) -> BuiltDeck:
    """
    Sanitize a suggestion, repair it into a legal deck and encode it.

    Full card lists seed the engine as pre-built entries; concepts seed
    it with their champions and core cards.
    """
    engine = DeckRepairEngine(catalog, rng=rng)

    if isinstance(suggestion, FullDeckSuggestion):
        full_list = sanitize_full_list(suggestion, catalog)
        deck = engine.repair(FullListSeed(full_list.entries), full_list.regions)
        name, description = full_list.name, full_list.description
    else:
        concept = sanitize_concept(suggestion, catalog)
        deck = engine.repair(ConceptSeed(concept.champions, concept.core_cards), concept.regions)
        name, description = concept.name, concept.description

    deck_code = deck_codec.encode(deck.code_counts())
    logger.info(
        "deck_encoded",
        extra={"deck_code": deck_code, "cards": [f"{c} x{n}" for c, n in deck.code_counts()]},
    )
    return BuiltDeck(
        deck=deck,
        deck_code=deck_code,
        name=name.strip() or DEFAULT_DECK_NAME,
        description=description.strip(),
    )


async def generate_deck(
    session: AsyncSession,
    user_id: str,
    prompt: str,
    mode: GenerationMode = GenerationMode.CONCEPT,
    rng: random.Random | None = None,
    oracle: OracleCall = request_deck_suggestion,
) -> DeckRecord:
    """
    Generate, repair, encode and store a deck from a natural-language prompt.

    Catalog and oracle failures abort before anything is stored.
    """
    catalog = await load_catalog(session)

    reply = oracle(prompt, catalog, mode)
    suggestion = parse_oracle_response(reply)
    built = build_deck_from_suggestion(suggestion, catalog, rng=rng)

    db_deck = await create_deck(
        session,
        user_id=user_id,
        name=built.name,
        description=built.description,
        cards=built.cards,
        deck_code=built.deck_code,
        regions=built.deck.regions,
        champions=built.deck.champions,
    )
    return deck_to_record(db_deck)


def parse_deck_code(code: str, catalog: Catalog) -> ParsedDeck:
    """
    Decode a deck code and attach catalog attributes.

    Cards the catalog does not know are kept with Unknown attributes.
    Regions come from the faction part of each card code.

    Raises:
        InvalidDeckCode: If the code cannot be decoded
    """
    cards: list[DeckCard] = []
    for card_code, count in deck_codec.decode(code):
        card = catalog.resolve_or_unknown(card_code)
        cards.append(
            DeckCard(
                card_code=card_code,
                count=count,
                name=card.name,
                cost=card.cost,
                type=card.category.value,
                region=card.region,
            )
        )

    factions = dict.fromkeys(card.card_code[2:4] for card in cards)
    regions = [REGION_NAMES.get(faction, faction) for faction in factions]
    champions = list(dict.fromkeys(card.name for card in cards if card.type == "Champion"))

    return ParsedDeck(cards=cards, regions=regions, champions=champions)


async def import_deck_from_code(
    session: AsyncSession,
    user_id: str,
    code: str,
    name: str = "Imported Deck",
    description: str = "Imported from deck code",
) -> DeckRecord:
    """Parse a deck code and store it as a new deck."""
    catalog = await load_catalog(session, require_usable=False)
    parsed = parse_deck_code(code, catalog)

    db_deck = await create_deck(
        session,
        user_id=user_id,
        name=name,
        description=description,
        cards=parsed.cards,
        deck_code=code.strip(),
        regions=parsed.regions,
        champions=parsed.champions,
    )
    return deck_to_record(db_deck)


async def save_deck(
    session: AsyncSession,
    user_id: str,
    name: str,
    description: str,
    cards: Iterable[tuple[str, int]],
) -> DeckRecord:
    """
    Store a deck the user put together.

    The cards are encoded first, so a deck with a malformed card code
    is rejected before anything is stored.
    """
    pairs = [(code.strip().upper(), count) for code, count in cards]
    deck_code = deck_codec.encode(pairs)

    catalog = await load_catalog(session, require_usable=False)
    parsed = parse_deck_code(deck_code, catalog)

    db_deck = await create_deck(
        session,
        user_id=user_id,
        name=name,
        description=description,
        cards=parsed.cards,
        deck_code=deck_code,
        regions=parsed.regions,
        champions=parsed.champions,
    )
    return deck_to_record(db_deck)


async def get_user_deck(session: AsyncSession, deck_id: int, user_id: str) -> DeckDB:
    """
    Get a deck owned by the user.

    Raises:
        DeckNotFound: If the deck does not exist or belongs to someone else
    """
    db_deck = await get_deck(session, deck_id)
    if db_deck is None or db_deck.user_id != user_id:
        raise DeckNotFound(deck_id)
    return db_deck


async def list_decks(session: AsyncSession, user_id: str) -> list[DeckRecord]:
    """The user's decks, newest first."""
    return [deck_to_record(db_deck) for db_deck in await list_user_decks(session, user_id)]


async def delete_user_deck(session: AsyncSession, deck_id: int, user_id: str) -> None:
    """Delete a deck owned by the user."""
    await get_user_deck(session, deck_id, user_id)
    await delete_deck(session, deck_id)


async def regenerate_deck_code(session: AsyncSession, deck_id: int, user_id: str) -> str:
    """
    Re-encode a stored deck's cards and store the new deck code.

    Raises:
        DeckNotFound: If the deck does not exist or belongs to someone else
        MalformedIdentifier: If a stored card code can no longer be encoded
    """
    db_deck = await get_user_deck(session, deck_id, user_id)
    record = deck_to_record(db_deck)

    deck_code = deck_codec.encode((card.card_code, card.count) for card in record.cards)
    await update_deck_code(session, db_deck, deck_code)
    return deck_code
