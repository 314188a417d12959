"""
Oracle suggestion sanitization.

Resolves what the oracle named against the catalog and discards
everything that does not resolve. Oracle-declared regions are
unreliable, so the deck's regions are derived from the cards the oracle
actually named: the two most frequent regions among resolved cards,
ties broken by first appearance, wildcard regions excluded.

INVARIANT: every card in a sanitized result is in the catalog and
encodable.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from lorbuilder.config import MAX_DECK_REGIONS, WILDCARD_REGIONS
from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.suggestion import DeckConceptSuggestion, FullDeckSuggestion
from lorbuilder.services.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass
class SanitizedConcept:
    """A concept whose names all resolved to catalog cards."""

    champions: list[CardAttributes]
    core_cards: list[CardAttributes]
    regions: list[str]
    name: str = ""
    description: str = ""
    playstyle: str = ""
    dropped_names: list[str] = field(default_factory=list)


@dataclass
class SanitizedFullList:
    """A full card list whose codes all resolved to catalog cards."""

    entries: list[tuple[CardAttributes, int]]
    regions: list[str]
    name: str = ""
    description: str = ""
    dropped_codes: list[str] = field(default_factory=list)


def derive_regions(cards: Iterable[CardAttributes], limit: int = MAX_DECK_REGIONS) -> list[str]:
    """
    Most frequent regions among cards, at most `limit`.

    Ties keep first-seen order. Wildcard regions never count.
    """
    counts: Counter[str] = Counter()
    for card in cards:
        if card.region not in WILDCARD_REGIONS:
            counts[card.region] += 1

    # Counter preserves insertion order, and sorted() is stable
    ranked = sorted(counts, key=lambda region: -counts[region])
    return ranked[:limit]


def sanitize_concept(concept: DeckConceptSuggestion, catalog: Catalog) -> SanitizedConcept:
    """
    Resolve a concept's champion and core card names.

    A name is dropped when it does not resolve, is not encodable, repeats
    an earlier card, or sits in the wrong slot (champion slot takes only
    Champions, core slot takes only Units and Spells). When the concept
    declared regions, cards outside the derived region set are dropped
    too.

    If nothing resolves, the derived regions fall back to the declared
    regions the catalog knows.
    """
    dropped: list[str] = []
    seen: set[str] = set()

    def resolve(names: list[str], allowed: set[CardCategory]) -> list[CardAttributes]:
        resolved: list[CardAttributes] = []
        for name in names:
            card = catalog.resolve_by_name(name, case_insensitive=True)
            if (
                card is None
                or not catalog.is_encodable(card.code)
                or card.category not in allowed
                or card.code in seen
            ):
                dropped.append(name)
                continue
            seen.add(card.code)
            resolved.append(card)
        return resolved

    champions = resolve(concept.champions, {CardCategory.CHAMPION})
    core_cards = resolve(concept.core_cards, {CardCategory.UNIT, CardCategory.SPELL})

    regions = derive_regions([*champions, *core_cards])

    if concept.regions and regions:
        allowed_regions = set(regions) | WILDCARD_REGIONS
        for card in [*champions, *core_cards]:
            if card.region not in allowed_regions:
                dropped.append(card.name)
        champions = [card for card in champions if card.region in allowed_regions]
        core_cards = [card for card in core_cards if card.region in allowed_regions]

    if not regions:
        regions = _declared_regions(concept.regions, catalog)

    logger.info(
        "oracle_concept_sanitized",
        extra={
            "champions": [card.name for card in champions],
            "core_card_count": len(core_cards),
            "regions": regions,
            "dropped_count": len(dropped),
            "dropped_names": dropped[:10],
        },
    )

    return SanitizedConcept(
        champions=champions,
        core_cards=core_cards,
        regions=regions,
        name=concept.name,
        description=concept.description,
        playstyle=concept.playstyle,
        dropped_names=dropped,
    )


def sanitize_full_list(suggestion: FullDeckSuggestion, catalog: Catalog) -> SanitizedFullList:
    """
    Resolve a full card list's codes.

    Unknown or non-encodable codes and non-positive counts are dropped.
    Repeated codes are merged. Counts are left as given; the repair
    engine enforces copy limits.
    """
    dropped: list[str] = []
    merged: dict[str, int] = {}
    cards: dict[str, CardAttributes] = {}

    for entry in suggestion.cards:
        code = entry.card_code.strip().upper()
        card = catalog.resolve_by_code(code)
        if card is None or not catalog.is_encodable(code) or entry.count < 1:
            dropped.append(entry.card_code)
            continue
        cards[code] = card
        merged[code] = merged.get(code, 0) + entry.count

    entries = [(cards[code], count) for code, count in merged.items()]
    regions = derive_regions(card for card, _ in entries)
    if not regions:
        regions = _declared_regions(suggestion.regions, catalog)

    logger.info(
        "oracle_card_list_sanitized",
        extra={
            "entry_count": len(entries),
            "card_count": sum(count for _, count in entries),
            "regions": regions,
            "dropped_count": len(dropped),
            "dropped_codes": dropped[:10],
        },
    )

    return SanitizedFullList(
        entries=entries,
        regions=regions,
        name=suggestion.name,
        description=suggestion.description,
        dropped_codes=dropped,
    )


def _declared_regions(declared: list[str], catalog: Catalog) -> list[str]:
    regions: list[str] = []
    for name in declared:
        region = catalog.match_region(name)
        if region and region not in WILDCARD_REGIONS and region not in regions:
            regions.append(region)
    return regions[:MAX_DECK_REGIONS]
