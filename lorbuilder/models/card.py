from dataclasses import dataclass
from enum import Enum


class CardCategory(str, Enum):
    """Deck-building category of a card."""

    CHAMPION = "Champion"
    UNIT = "Unit"
    SPELL = "Spell"
    UNKNOWN = "Unknown"

    @classmethod
    def from_type(cls, value: str | None) -> "CardCategory":
        """Map a raw type string to a category, defaulting to UNKNOWN."""
        for category in cls:
            if value == category.value:
                return category
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class CardAttributes:
    """
    Immutable catalog attributes of a card.

    Attributes:
        code: 7-character card identifier (e.g., "01DE012")
        name: Display name exactly as it appears in the client
        cost: Mana cost (non-negative)
        category: Champion, Unit, Spell or Unknown
        region: Region reference (e.g., "Demacia", "PiltoverZaun")
        rarity: Rarity label from the card data, if known
    """

    code: str
    name: str
    cost: int
    category: CardCategory
    region: str
    rarity: str = ""

    @property
    def is_champion(self) -> bool:
        return self.category is CardCategory.CHAMPION

    @classmethod
    def unknown(cls, code: str) -> "CardAttributes":
        """Placeholder for a code the catalog does not know."""
        return cls(
            code=code,
            name=code,
            cost=0,
            category=CardCategory.UNKNOWN,
            region="Unknown",
        )
