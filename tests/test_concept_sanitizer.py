"""Tests for oracle suggestion sanitization."""

from conftest import make_card
from lorbuilder.models.card import CardCategory
from lorbuilder.models.suggestion import (
    DeckConceptSuggestion,
    FullDeckSuggestion,
    SuggestedCard,
)
from lorbuilder.services.catalog import Catalog, LiveCatalog
from lorbuilder.services.concept_sanitizer import (
    derive_regions,
    sanitize_concept,
    sanitize_full_list,
)


def _concept(
    champions: list[str] | None = None,
    core_cards: list[str] | None = None,
    regions: list[str] | None = None,
) -> DeckConceptSuggestion:
    return DeckConceptSuggestion(
        name="Test Concept",
        champions=champions or [],
        core_cards=core_cards or [],
        regions=regions or [],
    )


class TestDeriveRegions:
    def test_most_frequent_first(self) -> None:
        cards = [
            make_card("01FR010", "A", 1, region="Freljord"),
            make_card("01DE010", "B", 1),
            make_card("01DE011", "C", 1),
        ]

        assert derive_regions(cards) == ["Demacia", "Freljord"]

    def test_ties_keep_first_seen(self) -> None:
        cards = [
            make_card("01IO010", "A", 1, region="Ionia"),
            make_card("01FR010", "B", 1, region="Freljord"),
            make_card("01DE010", "C", 1),
        ]

        assert derive_regions(cards) == ["Ionia", "Freljord"]

    def test_wildcard_never_counts(self) -> None:
        cards = [
            make_card("06RU001", "Jax", 4, CardCategory.CHAMPION, "Runeterra"),
            make_card("06RU002", "Bard", 4, CardCategory.CHAMPION, "Runeterra"),
            make_card("01DE010", "C", 1),
        ]

        assert derive_regions(cards) == ["Demacia"]

    def test_no_cards(self) -> None:
        assert derive_regions([]) == []


class TestSanitizeConcept:
    def test_resolves_names(self, catalog: Catalog) -> None:
        """Names resolve case-insensitively to catalog cards."""
        result = sanitize_concept(
            _concept(["garen", "LUX"], ["Demacia Soldier 1", "demacia tactic 0"]),
            catalog,
        )

        assert [card.code for card in result.champions] == ["01DE001", "01DE002"]
        assert [card.code for card in result.core_cards] == ["01DE011", "01DE050"]
        assert result.regions == ["Demacia"]
        assert result.dropped_names == []
        assert result.name == "Test Concept"

    def test_drops_unknown_duplicate_and_misplaced_names(self, catalog: Catalog) -> None:
        """Unknown names, repeats and cards in the wrong slot are dropped."""
        result = sanitize_concept(
            _concept(
                ["Garen", "Demacia Soldier 2", "Nobody"],
                ["Demacia Soldier 1", "Demacia Soldier 1", "Lux", "Garen"],
            ),
            catalog,
        )

        assert [card.name for card in result.champions] == ["Garen"]
        assert [card.name for card in result.core_cards] == ["Demacia Soldier 1"]
        assert result.dropped_names == [
            "Demacia Soldier 2",
            "Nobody",
            "Demacia Soldier 1",
            "Lux",
            "Garen",
        ]

    def test_unencodable_cards_dropped(self) -> None:
        catalog = Catalog(
            [
                make_card("SET1-XX", "Odd Champion", 3, CardCategory.CHAMPION),
                make_card("01DE010", "Soldier", 1),
            ]
        )

        result = sanitize_concept(_concept(["Odd Champion"], ["Soldier"]), catalog)

        assert result.champions == []
        assert [card.name for card in result.core_cards] == ["Soldier"]

    def test_filters_cards_outside_derived_regions(self, catalog: Catalog) -> None:
        """With declared regions, a third region's cards are dropped."""
        result = sanitize_concept(
            _concept(
                ["Garen", "Lux", "Yasuo"],
                ["Demacia Soldier 1", "Freljord Raider 0", "Freljord Raider 1"],
                regions=["Demacia"],
            ),
            catalog,
        )

        assert result.regions == ["Demacia", "Freljord"]
        assert [card.name for card in result.champions] == ["Garen", "Lux"]
        assert "Yasuo" in result.dropped_names

    def test_wildcard_cards_survive_region_filter(self, catalog: Catalog) -> None:
        result = sanitize_concept(
            _concept(["Garen", "Jax"], ["Demacia Soldier 1"], regions=["Demacia"]),
            catalog,
        )

        assert result.regions == ["Demacia"]
        assert [card.name for card in result.champions] == ["Garen", "Jax"]

    def test_no_declared_regions_keeps_everything(self, catalog: Catalog) -> None:
        """Without declared regions nothing is filtered by region."""
        result = sanitize_concept(
            _concept(["Garen", "Ashe", "Yasuo"], ["Demacia Soldier 1"]),
            catalog,
        )

        assert result.regions == ["Demacia", "Freljord"]
        assert [card.name for card in result.champions] == ["Garen", "Ashe", "Yasuo"]

    def test_nothing_resolves_falls_back_to_declared_regions(self, catalog: Catalog) -> None:
        """Declared regions the catalog knows are used when no card resolves."""
        result = sanitize_concept(
            _concept(["Nobody"], ["Nothing"], regions=["demacia", "Atlantis", "Runeterra"]),
            catalog,
        )

        assert result.champions == []
        assert result.core_cards == []
        assert result.regions == ["Demacia"]

    def test_nothing_resolves_and_no_regions(self, catalog: Catalog) -> None:
        result = sanitize_concept(_concept(["Nobody"]), catalog)

        assert result.regions == []
        assert result.dropped_names == ["Nobody"]


class TestSanitizeFullList:
    def test_merges_and_normalizes_codes(self, catalog: Catalog) -> None:
        suggestion = FullDeckSuggestion(
            name="Full",
            cards=[
                SuggestedCard(card_code=" 01de010 ", count=2),
                SuggestedCard(card_code="01DE010", count=2),
                SuggestedCard(card_code="01DE001", count=3),
            ],
        )

        result = sanitize_full_list(suggestion, catalog)

        assert [(card.code, count) for card, count in result.entries] == [
            ("01DE010", 4),
            ("01DE001", 3),
        ]
        assert result.regions == ["Demacia"]
        assert result.name == "Full"

    def test_drops_unknown_codes_and_bad_counts(self, catalog: Catalog) -> None:
        suggestion = FullDeckSuggestion(
            cards=[
                SuggestedCard(card_code="09XX999", count=3),
                SuggestedCard(card_code="01DE011", count=0),
                SuggestedCard(card_code="01FR010", count=2),
            ],
        )

        result = sanitize_full_list(suggestion, catalog)

        assert [(card.code, count) for card, count in result.entries] == [("01FR010", 2)]
        assert result.dropped_codes == ["09XX999", "01DE011"]
        assert result.regions == ["Freljord"]

    def test_empty_list_uses_declared_regions(self) -> None:
        catalog = LiveCatalog([make_card("01PZ010", "Gadgeteer", 2, region="PiltoverZaun")])

        result = sanitize_full_list(
            FullDeckSuggestion(cards=[], regions=["Piltover & Zaun"]), catalog
        )

        assert result.entries == []
        assert result.regions == ["PiltoverZaun"]
