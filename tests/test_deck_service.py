"""Tests for the deck service pipeline."""

import json
import random

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import build_test_cards, make_card
from lorbuilder.db.operations import list_user_decks, replace_catalog_cards
from lorbuilder.models.failure import (
    CatalogTooSmall,
    DeckNotFound,
    InvalidDeckCode,
    MalformedIdentifier,
    OracleResponseUnparseable,
    OracleUnavailable,
)
from lorbuilder.models.suggestion import DeckConceptSuggestion, FullDeckSuggestion, SuggestedCard
from lorbuilder.services.catalog import BundledFallbackCatalog, Catalog, LiveCatalog
from lorbuilder.services.deck_codec import decode, encode
from lorbuilder.services.deck_service import (
    build_deck_from_suggestion,
    delete_user_deck,
    generate_deck,
    get_user_deck,
    import_deck_from_code,
    list_decks,
    load_catalog,
    parse_deck_code,
    regenerate_deck_code,
    save_deck,
)
from lorbuilder.services.oracle import GenerationMode

CONCEPT_REPLY = """```json
{
  "name": "Demacian Might",
  "description": "Go wide and rally",
  "champions": ["Garen", "Lux"],
  "coreCards": ["Demacia Soldier 1", "Demacia Tactic 0", "Made Up Card"],
  "regions": ["Demacia"],
}
```"""


def _oracle(reply: str):
    calls: list[tuple[str, GenerationMode]] = []

    def oracle(prompt: str, catalog: Catalog, mode: GenerationMode) -> str:
        calls.append((prompt, mode))
        return reply

    oracle.calls = calls  # type: ignore[attr-defined]
    return oracle


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """A session whose live catalog holds the test cards."""
    await replace_catalog_cards(session, build_test_cards())
    await session.commit()
    return session


class TestLoadCatalog:
    async def test_live_catalog(self, seeded_session: AsyncSession) -> None:
        catalog = await load_catalog(seeded_session)

        assert isinstance(catalog, LiveCatalog)
        assert len(catalog) == 108

    async def test_empty_store_uses_bundled_cards(self, session: AsyncSession) -> None:
        catalog = await load_catalog(session)

        assert isinstance(catalog, BundledFallbackCatalog)

    async def test_small_live_catalog(self, session: AsyncSession) -> None:
        await replace_catalog_cards(session, [make_card("01DE010", "Lonely", 2)])

        with pytest.raises(CatalogTooSmall):
            await load_catalog(session)

    async def test_small_live_catalog_allowed_for_lookups(self, session: AsyncSession) -> None:
        await replace_catalog_cards(session, [make_card("01DE010", "Lonely", 2)])

        catalog = await load_catalog(session, require_usable=False)

        assert len(catalog) == 1


class TestBuildDeckFromSuggestion:
    def test_concept(self, catalog: Catalog, rng: random.Random) -> None:
        suggestion = DeckConceptSuggestion(
            name="  ",
            champions=["Braum"],
            core_cards=["Freljord Raider 0"],
            regions=["Freljord"],
        )

        built = build_deck_from_suggestion(suggestion, catalog, rng=rng)

        assert built.deck.total_count == 40
        assert built.name == "Generated Deck"
        assert built.deck.champions == ["Braum"]
        assert sorted(decode(built.deck_code)) == sorted(built.deck.code_counts())

    def test_full_list(self, catalog: Catalog, rng: random.Random) -> None:
        suggestion = FullDeckSuggestion(
            name="Soldiers",
            cards=[SuggestedCard(card_code=f"01DE{10 + i:03d}", count=3) for i in range(15)],
        )

        built = build_deck_from_suggestion(suggestion, catalog, rng=rng)

        assert built.deck.total_count == 40
        assert built.name == "Soldiers"
        # Trim takes the five cheapest copies: all of soldier 0, two of soldier 8
        assert "01DE010" not in {card.card_code for card in built.cards}
        assert sorted(card.count for card in built.cards) == [1] + [3] * 13
        assert built.cards[0].type == "Unit"


class TestGenerateDeck:
    async def test_concept_pipeline(self, seeded_session: AsyncSession) -> None:
        """A concept reply becomes a stored, legal, encoded deck."""
        oracle = _oracle(CONCEPT_REPLY)

        record = await generate_deck(
            seeded_session,
            "user-123",
            "Demacia go wide",
            rng=random.Random(3),
            oracle=oracle,
        )

        assert oracle.calls == [("Demacia go wide", GenerationMode.CONCEPT)]
        assert record.id is not None
        assert record.name == "Demacian Might"
        assert record.total_cards == 40
        assert record.regions == ["Demacia"]
        assert record.champions == ["Garen", "Lux"]
        assert sum(count for _, count in decode(record.deck_code)) == 40
        stored = await list_user_decks(seeded_session, "user-123")
        assert [deck.id for deck in stored] == [record.id]

    async def test_full_list_pipeline(self, seeded_session: AsyncSession) -> None:
        reply = json.dumps(
            {
                "name": "Freljord Control",
                "cards": [{"cardCode": f"01FR{10 + i:03d}", "count": 3} for i in range(20)],
                "regions": ["Freljord"],
            }
        )

        record = await generate_deck(
            seeded_session,
            "user-123",
            "Freljord",
            mode=GenerationMode.FULL_LIST,
            rng=random.Random(3),
            oracle=_oracle(reply),
        )

        assert record.total_cards == 40
        assert record.regions == ["Freljord"]
        assert all(card.count <= 3 for card in record.cards)

    async def test_fallback_catalog(self, session: AsyncSession) -> None:
        """With no live catalog the bundled cards still build a deck."""
        reply = '{"champions": ["Garen"], "coreCards": ["Single Combat"], "regions": ["Demacia"]}'

        record = await generate_deck(
            session, "user-123", "Garen", rng=random.Random(1), oracle=_oracle(reply)
        )

        assert record.total_cards == 40
        assert record.champions == ["Garen"]

    async def test_unparseable_reply_stores_nothing(self, seeded_session: AsyncSession) -> None:
        with pytest.raises(OracleResponseUnparseable):
            await generate_deck(
                seeded_session, "user-123", "Anything", oracle=_oracle("Sorry, no deck today.")
            )

        assert await list_user_decks(seeded_session, "user-123") == []

    async def test_oracle_unavailable(self, seeded_session: AsyncSession) -> None:
        def oracle(prompt: str, catalog: Catalog, mode: GenerationMode) -> str:
            raise OracleUnavailable("Anthropic API key not configured")

        with pytest.raises(OracleUnavailable):
            await generate_deck(seeded_session, "user-123", "Anything", oracle=oracle)

    async def test_small_catalog_aborts_before_oracle(self, session: AsyncSession) -> None:
        await replace_catalog_cards(session, [make_card("01DE010", "Lonely", 2)])
        oracle = _oracle(CONCEPT_REPLY)

        with pytest.raises(CatalogTooSmall):
            await generate_deck(session, "user-123", "Anything", oracle=oracle)

        assert oracle.calls == []


class TestParseDeckCode:
    def test_enriches_cards(self, catalog: Catalog) -> None:
        code = encode([("01DE001", 3), ("01FR010", 2), ("09DE999", 1)])

        parsed = parse_deck_code(code, catalog)

        assert [(card.card_code, card.count) for card in parsed.cards] == [
            ("01DE001", 3),
            ("01FR010", 2),
            ("09DE999", 1),
        ]
        assert parsed.cards[0].name == "Garen"
        assert parsed.cards[2].name == "09DE999"
        assert parsed.cards[2].type == "Unknown"
        assert parsed.regions == ["Demacia", "Freljord"]
        assert parsed.champions == ["Garen"]
        assert parsed.total_cards == 6

    def test_region_display_names(self, catalog: Catalog) -> None:
        code = encode([("01PZ001", 1), ("01SI001", 1), ("06RU001", 1)])

        parsed = parse_deck_code(code, catalog)

        assert sorted(parsed.regions) == ["Piltover & Zaun", "Runeterra", "Shadow Isles"]

    def test_invalid_code(self, catalog: Catalog) -> None:
        with pytest.raises(InvalidDeckCode):
            parse_deck_code("not a deck code", catalog)


class TestStoredDecks:
    async def test_import(self, seeded_session: AsyncSession) -> None:
        code = encode([("01DE001", 3), ("01DE010", 2)])

        record = await import_deck_from_code(seeded_session, "user-123", f" {code} ")

        assert record.deck_code == code
        assert record.name == "Imported Deck"
        assert record.champions == ["Garen"]
        assert record.total_cards == 5

    async def test_save_deck(self, seeded_session: AsyncSession) -> None:
        record = await save_deck(
            seeded_session, "user-123", "Mine", "", [("01de001", 2), ("01FR010", 1)]
        )

        assert record.regions == ["Demacia", "Freljord"]
        assert sorted(decode(record.deck_code)) == [("01DE001", 2), ("01FR010", 1)]

    async def test_save_deck_rejects_malformed_codes(self, seeded_session: AsyncSession) -> None:
        with pytest.raises(MalformedIdentifier):
            await save_deck(seeded_session, "user-123", "Mine", "", [("GAREN", 3)])

        assert await list_decks(seeded_session, "user-123") == []

    async def test_owner_checks(self, seeded_session: AsyncSession) -> None:
        """Another user's deck is reported as missing."""
        record = await import_deck_from_code(seeded_session, "owner", encode([("01DE001", 3)]))

        assert (await get_user_deck(seeded_session, record.id, "owner")).id == record.id
        with pytest.raises(DeckNotFound):
            await get_user_deck(seeded_session, record.id, "intruder")
        with pytest.raises(DeckNotFound):
            await delete_user_deck(seeded_session, record.id, "intruder")
        with pytest.raises(DeckNotFound):
            await regenerate_deck_code(seeded_session, record.id, "intruder")

    async def test_regenerate_code(self, seeded_session: AsyncSession) -> None:
        original = encode([("01DE001", 3), ("01DE010", 2)])
        record = await import_deck_from_code(seeded_session, "user-123", original.lower())

        new_code = await regenerate_deck_code(seeded_session, record.id, "user-123")

        assert new_code == original
        stored = await get_user_deck(seeded_session, record.id, "user-123")
        assert stored.deck_code == original

    async def test_list_and_delete(self, seeded_session: AsyncSession) -> None:
        first = await import_deck_from_code(seeded_session, "user-123", encode([("01DE001", 1)]))
        second = await import_deck_from_code(seeded_session, "user-123", encode([("01DE002", 1)]))

        assert [deck.id for deck in await list_decks(seeded_session, "user-123")] == [
            second.id,
            first.id,
        ]

        await delete_user_deck(seeded_session, first.id, "user-123")

        assert [deck.id for deck in await list_decks(seeded_session, "user-123")] == [second.id]
        with pytest.raises(DeckNotFound):
            await get_user_deck(seeded_session, first.id, "user-123")
