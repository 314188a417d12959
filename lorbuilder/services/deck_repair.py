"""
Deck repair engine.

Turns an unreliable candidate card list into a legal deck:

    1. total cards == 40
    2. 1 <= copies <= 3 for every card
    3. champion copies <= 6
    4. every card comes from the catalog

Repair is a fixed sequence of greedy passes over one mutable deck state:

    seed -> fill -> trim -> champion cap -> top-up -> validate

The seeding strategy is pluggable. ConceptSeed grows the deck one copy
at a time through try_add and can never exceed a limit. FullListSeed
places a pre-built list as-is, which is the only way the deck can
overshoot 40 cards or 6 champions, and the trim and champion cap passes
exist for that path.

The fill shuffle is the only source of nondeterminism. Pass a seeded
random.Random to make it reproducible.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from lorbuilder.config import (
    CHAMPION_SEED_COPIES,
    CORE_CARD_COPIES,
    DECK_SIZE,
    FILL_SCAN_PASSES,
    MAX_CHAMPIONS,
    MAX_COPIES_PER_CARD,
)
from lorbuilder.models.card import CardAttributes
from lorbuilder.models.deck import Deck, DeckEntry
from lorbuilder.models.failure import (
    DeckNotConstructible,
    InsufficientCardPool,
    TooManyChampions,
)
from lorbuilder.services.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass
class _Slot:
    card: CardAttributes
    count: int


class DeckState:
    """
    Cards placed so far, with running totals.

    Slots keep insertion order, which is the tie-breaker for the trim
    and champion cap passes.
    """

    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}
        self.total_count = 0
        self.champion_count = 0

    def __len__(self) -> int:
        return len(self._slots)

    def count_of(self, code: str) -> int:
        slot = self._slots.get(code)
        return slot.count if slot else 0

    def try_add(self, card: CardAttributes, max_copies: int) -> bool:
        """
        Add one copy of a card if every limit allows it.

        Fails when the deck is full, the card already has max_copies
        (never more than 3), or the card is a Champion and the champion
        cap is reached.
        """
        if self.total_count >= DECK_SIZE:
            return False
        if card.is_champion and self.champion_count >= MAX_CHAMPIONS:
            return False

        slot = self._slots.get(card.code)
        if slot is not None:
            if slot.count >= min(max_copies, MAX_COPIES_PER_CARD):
                return False
            slot.count += 1
        else:
            self._slots[card.code] = _Slot(card=card, count=1)

        self._record(card, 1)
        return True

    def place(self, card: CardAttributes, count: int) -> None:
        """
        Place copies without checking the deck or champion limits.

        Used for pre-built lists. Copies are still capped per card.
        """
        slot = self._slots.get(card.code)
        current = slot.count if slot else 0
        added = min(count, MAX_COPIES_PER_CARD - current)
        if added <= 0:
            return
        if slot is None:
            self._slots[card.code] = _Slot(card=card, count=added)
        else:
            slot.count += added
        self._record(card, added)

    def remove_one(self, code: str) -> None:
        """Remove one copy of a card, dropping the slot at zero."""
        slot = self._slots[code]
        slot.count -= 1
        self._record(slot.card, -1)
        if slot.count <= 0:
            del self._slots[code]

    def cheapest(self, champions: bool) -> _Slot | None:
        """Lowest-cost slot of the given kind, earliest inserted on ties."""
        candidates = [s for s in self._slots.values() if s.card.is_champion is champions]
        if not candidates:
            return None
        return min(candidates, key=lambda s: s.card.cost)

    def largest_champion(self) -> _Slot | None:
        """Champion slot with the most copies, earliest inserted on ties."""
        candidates = [s for s in self._slots.values() if s.card.is_champion]
        if not candidates:
            return None
        return max(candidates, key=lambda s: s.count)

    def recount(self) -> tuple[int, int]:
        """Totals recomputed from the live slots."""
        total = sum(s.count for s in self._slots.values())
        champions = sum(s.count for s in self._slots.values() if s.card.is_champion)
        return total, champions

    def to_deck(self) -> Deck:
        return Deck(entries=tuple(DeckEntry(card=s.card, count=s.count) for s in self._slots.values()))

    def _record(self, card: CardAttributes, delta: int) -> None:
        self.total_count += delta
        if card.is_champion:
            self.champion_count += delta


# =============================================================================
# SEEDING STRATEGIES
# =============================================================================


class SeedStrategy(Protocol):
    """Places the oracle's cards before the repair passes run."""

    def seed(self, state: DeckState) -> None: ...


@dataclass
class ConceptSeed:
    """
    Seed from a concept: champions and core cards, grown copy by copy.

    Each champion gets up to 3 copies (subject to the champion cap),
    each core card up to 2.
    """

    champions: Sequence[CardAttributes] = field(default_factory=list)
    core_cards: Sequence[CardAttributes] = field(default_factory=list)

    def seed(self, state: DeckState) -> None:
        for champion in self.champions:
            for _ in range(CHAMPION_SEED_COPIES):
                state.try_add(champion, CHAMPION_SEED_COPIES)
        for card in self.core_cards:
            for _ in range(CORE_CARD_COPIES):
                state.try_add(card, CORE_CARD_COPIES)


@dataclass
class FullListSeed:
    """Seed from a pre-built (card, count) list, placed as given."""

    entries: Sequence[tuple[CardAttributes, int]] = field(default_factory=list)

    def seed(self, state: DeckState) -> None:
        for card, count in self.entries:
            if count > 0:
                state.place(card, count)


# =============================================================================
# ENGINE
# =============================================================================


@dataclass
class RepairReport:
    """What each pass changed, for logging and diagnostics."""

    seeded: int = 0
    filled: int = 0
    trimmed: int = 0
    champions_removed: int = 0
    topped_up: int = 0


class DeckRepairEngine:
    """
    Repairs candidate card lists into legal decks.

    Args:
        catalog: Source of fill candidates
        rng: Random source for the fill shuffle (unseeded if omitted)
    """

    def __init__(self, catalog: Catalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self.rng = rng or random.Random()

    def repair(self, seed: SeedStrategy, regions: Sequence[str]) -> Deck:
        """
        Run every repair pass and return a legal deck.

        Args:
            seed: Seeding strategy holding the oracle's cards
            regions: Regions the fill pass may draw from

        Returns:
            A deck satisfying every legality invariant

        Raises:
            InsufficientCardPool: If the deck needs filling and no candidates exist
            DeckNotConstructible: If the deck cannot reach exactly 40 cards
            TooManyChampions: If the champion cap still fails after repair
        """
        state = DeckState()
        report = RepairReport()

        seed.seed(state)
        report.seeded = state.total_count

        pool = self.fill_pool(regions)
        report.filled = self._fill(state, pool, regions)
        report.trimmed = self._trim(state)
        report.champions_removed = self._cap_champions(state)
        report.topped_up = self._fill(state, pool, regions)

        deck = self._validate(state)

        logger.info(
            "deck_repaired",
            extra={
                "seed": type(seed).__name__,
                "regions": list(regions),
                "seeded": report.seeded,
                "filled": report.filled,
                "trimmed": report.trimmed,
                "champions_removed": report.champions_removed,
                "topped_up": report.topped_up,
                "entries": len(deck.entries),
                "champion_count": deck.champion_count,
            },
        )
        return deck

    def fill_pool(self, regions: Sequence[str]) -> list[CardAttributes]:
        """
        Shuffled fill candidates.

        Every encodable non-Champion card with a non-zero cost whose
        region is in the region set.
        """
        wanted = set(regions)
        pool = [
            card
            for card in self.catalog.cards
            if not card.is_champion
            and card.cost > 0
            and card.region in wanted
            and self.catalog.is_encodable(card.code)
        ]
        self.rng.shuffle(pool)
        return pool

    def _fill(self, state: DeckState, pool: list[CardAttributes], regions: Sequence[str]) -> int:
        if state.total_count >= DECK_SIZE:
            return 0
        if not pool:
            raise InsufficientCardPool(regions, state.total_count)

        before = state.total_count
        for _ in range(FILL_SCAN_PASSES):
            for candidate in pool:
                if state.total_count >= DECK_SIZE:
                    return state.total_count - before
                state.try_add(candidate, MAX_COPIES_PER_CARD)
        return state.total_count - before

    def _trim(self, state: DeckState) -> int:
        removed = 0
        while state.total_count > DECK_SIZE:
            slot = state.cheapest(champions=False) or state.cheapest(champions=True)
            if slot is None:
                break
            state.remove_one(slot.card.code)
            removed += 1
        return removed

    def _cap_champions(self, state: DeckState) -> int:
        removed = 0
        while state.champion_count > MAX_CHAMPIONS:
            slot = state.largest_champion()
            if slot is None:
                break
            state.remove_one(slot.card.code)
            removed += 1
        return removed

    def _validate(self, state: DeckState) -> Deck:
        total, champions = state.recount()
        if total != DECK_SIZE:
            raise DeckNotConstructible(
                total_count=total,
                champion_count=champions,
                entry_count=len(state),
                target=DECK_SIZE,
            )
        if champions > MAX_CHAMPIONS:
            raise TooManyChampions(
                champion_count=champions,
                limit=MAX_CHAMPIONS,
                total_count=total,
                entry_count=len(state),
            )
        return state.to_deck()
