from dataclasses import dataclass, field
from datetime import datetime

from lorbuilder.models.card import CardAttributes


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """A card and its number of copies in a deck."""

    card: CardAttributes
    count: int

    @property
    def code(self) -> str:
        return self.card.code


@dataclass(frozen=True)
class Deck:
    """
    A repaired deck.

    Entry order is insertion order from the repair engine and only
    matters for display.
    """

    entries: tuple[DeckEntry, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        """Total cards, counting copies."""
        return sum(entry.count for entry in self.entries)

    @property
    def champion_count(self) -> int:
        """Champion copies in the deck."""
        return sum(entry.count for entry in self.entries if entry.card.is_champion)

    @property
    def regions(self) -> list[str]:
        """Regions of the entries, in first-seen order."""
        return list(dict.fromkeys(entry.card.region for entry in self.entries))

    @property
    def champions(self) -> list[str]:
        """Unique champion names, in first-seen order."""
        return list(
            dict.fromkeys(entry.card.name for entry in self.entries if entry.card.is_champion)
        )

    def code_counts(self) -> list[tuple[str, int]]:
        """(card code, count) pairs, the shape the codec consumes."""
        return [(entry.code, entry.count) for entry in self.entries]


@dataclass
class DeckCard:
    """A card row as stored on a deck record."""

    card_code: str
    count: int
    name: str | None = None
    cost: int | None = None
    type: str | None = None
    region: str | None = None

    @classmethod
    def from_entry(cls, entry: DeckEntry) -> "DeckCard":
        return cls(
            card_code=entry.card.code,
            count=entry.count,
            name=entry.card.name,
            cost=entry.card.cost,
            type=entry.card.category.value,
            region=entry.card.region,
        )

    def to_dict(self) -> dict[str, object]:
        """Serialize using the deck-record JSON keys."""
        return {
            "cardCode": self.card_code,
            "count": self.count,
            "name": self.name,
            "cost": self.cost,
            "type": self.type,
            "region": self.region,
        }


@dataclass
class DeckRecord:
    """
    A persisted deck.

    Attributes:
        id: Opaque deck identifier assigned by the store
        user_id: Owner of the deck
        name: Deck name
        description: Strategy description
        cards: Card rows with resolved attributes
        deck_code: Deck code for the game client
        regions: Regions the deck uses
        champions: Champion names in the deck
    """

    id: int
    user_id: str
    name: str
    description: str
    cards: list[DeckCard]
    deck_code: str
    regions: list[str] = field(default_factory=list)
    champions: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def total_cards(self) -> int:
        return sum(card.count for card in self.cards)
