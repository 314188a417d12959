"""
Card catalog adapter.

Maps card codes and names to immutable card attributes. Two variants
exist and one is selected per request:

- LiveCatalog: cards loaded from the database by a catalog refresh
- BundledFallbackCatalog: the bundled card table, used while the live
  catalog is empty

A card is encodable only if its code passes the codec's shape check and
the catalog holds it. Catalog rows with malformed codes are kept for
lookups but never reach the codec.
"""

import logging
import re
from collections.abc import Iterable
from typing import ClassVar

from lorbuilder.config import settings
from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.failure import CatalogTooSmall, CatalogUnavailable
from lorbuilder.services.deck_codec import is_valid_card_code
from lorbuilder.services.fallback_cards import BUNDLED_CARDS

logger = logging.getLogger(__name__)

_REGION_KEY_PATTERN = re.compile(r"[^a-z0-9]")


def region_key(region: str) -> str:
    """Comparable form of a region name ("Piltover & Zaun" == "PiltoverZaun")."""
    return _REGION_KEY_PATTERN.sub("", region.lower())


class Catalog:
    """Lookup service over a fixed set of cards."""

    source: ClassVar[str] = "catalog"

    def __init__(self, cards: Iterable[CardAttributes]) -> None:
        self._by_code: dict[str, CardAttributes] = {}
        self._by_name: dict[str, CardAttributes] = {}
        self._by_folded_name: dict[str, CardAttributes] = {}

        for card in cards:
            if card.code in self._by_code:
                continue
            self._by_code[card.code] = card
            self._by_name.setdefault(card.name, card)
            self._by_folded_name.setdefault(card.name.casefold(), card)

    def __len__(self) -> int:
        return len(self._by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    @property
    def cards(self) -> list[CardAttributes]:
        return list(self._by_code.values())

    @property
    def champions(self) -> list[CardAttributes]:
        return self._by_category(CardCategory.CHAMPION)

    @property
    def units(self) -> list[CardAttributes]:
        return self._by_category(CardCategory.UNIT)

    @property
    def spells(self) -> list[CardAttributes]:
        return self._by_category(CardCategory.SPELL)

    @property
    def regions(self) -> list[str]:
        """Regions present in the catalog, sorted."""
        return sorted({card.region for card in self._by_code.values()})

    def resolve_by_code(self, code: str) -> CardAttributes | None:
        """Attributes for a card code, or None if unknown."""
        return self._by_code.get(code)

    def resolve_by_name(self, name: str, case_insensitive: bool = True) -> CardAttributes | None:
        """
        Attributes for a card name, or None if unknown.

        Surrounding whitespace is ignored. When several cards share a
        name, the first one loaded wins.
        """
        cleaned = name.strip()
        if not cleaned:
            return None
        if case_insensitive:
            return self._by_folded_name.get(cleaned.casefold())
        return self._by_name.get(cleaned)

    def resolve_or_unknown(self, code: str) -> CardAttributes:
        """Attributes for a card code, or an Unknown placeholder."""
        return self._by_code.get(code) or CardAttributes.unknown(code)

    def is_encodable(self, code: str) -> bool:
        """True if the code is valid for the codec and the catalog holds it."""
        return is_valid_card_code(code) and code in self._by_code

    def match_region(self, region: str) -> str | None:
        """Catalog spelling of a region name, ignoring case and punctuation."""
        wanted = region_key(region)
        if not wanted:
            return None
        for known in self.regions:
            if region_key(known) == wanted:
                return known
        return None

    def ensure_usable(self, min_size: int | None = None) -> None:
        """
        Refuse to build decks from an empty or undersized catalog.

        Raises:
            CatalogUnavailable: If the catalog is empty
            CatalogTooSmall: If it holds fewer than min_size cards
        """
        minimum = settings.min_catalog_size if min_size is None else min_size
        size = len(self)
        if size == 0:
            raise CatalogUnavailable(f"{self.source} catalog has no cards")
        if size < minimum:
            raise CatalogTooSmall(size, minimum)

    def render_card_pool(self) -> str:
        """
        Card listing for the oracle prompt.

        Grouped by region, then by category, one "CODE (Name, N mana)"
        item per encodable card.
        """
        lines = ["AVAILABLE CARD POOLS BY REGION:", ""]
        for region in self.regions:
            region_cards = [
                card
                for card in self._by_code.values()
                if card.region == region and self.is_encodable(card.code)
            ]
            if not region_cards:
                continue
            lines.append(f"{region.upper()}:")
            for category, label in (
                (CardCategory.CHAMPION, "Champions"),
                (CardCategory.UNIT, "Units"),
                (CardCategory.SPELL, "Spells"),
            ):
                listed = [
                    f"{card.code} ({card.name}, {card.cost} mana)"
                    for card in region_cards
                    if card.category is category
                ]
                if listed:
                    lines.append(f"{label}: {', '.join(listed)}")
            lines.append("")
        return "\n".join(lines)

    def _by_category(self, category: CardCategory) -> list[CardAttributes]:
        return [card for card in self._by_code.values() if card.category is category]


class LiveCatalog(Catalog):
    """Catalog built from the cards stored by the last refresh."""

    source = "live"


class BundledFallbackCatalog(Catalog):
    """Catalog built from the bundled card table."""

    source = "bundled"

    def __init__(self, cards: Iterable[CardAttributes] = BUNDLED_CARDS) -> None:
        super().__init__(cards)


CardCatalog = LiveCatalog | BundledFallbackCatalog


def select_catalog(live_cards: Iterable[CardAttributes]) -> CardCatalog:
    """
    Pick the catalog variant for this request.

    Uses the live cards when there are any, the bundled table otherwise.
    """
    live = LiveCatalog(live_cards)
    catalog: CardCatalog = live if len(live) > 0 else BundledFallbackCatalog()

    logger.info(
        "catalog_selected",
        extra={
            "source": catalog.source,
            "total": len(catalog),
            "champions": len(catalog.champions),
            "units": len(catalog.units),
            "spells": len(catalog.spells),
        },
    )
    return catalog
