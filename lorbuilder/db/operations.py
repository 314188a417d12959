"""
Database CRUD operations.

Provides async functions for the card catalog and for user decks.
"""

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.db import CatalogCardDB, DeckDB
from lorbuilder.models.deck import DeckCard, DeckRecord

# --- Catalog Operations ---


async def list_catalog_cards(session: AsyncSession) -> list[CatalogCardDB]:
    """Get every catalog card, ordered by card code."""
    result = await session.execute(select(CatalogCardDB).order_by(CatalogCardDB.card_code))
    return list(result.scalars().all())


async def count_catalog_cards(session: AsyncSession) -> int:
    """Number of cards in the live catalog."""
    result = await session.execute(select(func.count()).select_from(CatalogCardDB))
    return int(result.scalar_one())


async def count_catalog_cards_by_type(session: AsyncSession) -> dict[str, int]:
    """Catalog size per card type."""
    result = await session.execute(
        select(CatalogCardDB.type, func.count()).group_by(CatalogCardDB.type)
    )
    return {card_type: int(count) for card_type, count in result.all()}


async def replace_catalog_cards(session: AsyncSession, cards: Iterable[CardAttributes]) -> int:
    """
    Replace the whole catalog with new card data.

    Later duplicates of a card code are ignored. Returns the number stored.
    """
    await session.execute(delete(CatalogCardDB))

    seen: set[str] = set()
    for card in cards:
        if card.code in seen:
            continue
        seen.add(card.code)
        session.add(
            CatalogCardDB(
                card_code=card.code,
                name=card.name,
                cost=card.cost,
                type=card.category.value,
                region=card.region,
                rarity=card.rarity,
            )
        )

    await session.flush()
    return len(seen)


def catalog_card_to_model(row: CatalogCardDB) -> CardAttributes:
    """Convert a catalog row to card attributes."""
    return CardAttributes(
        code=row.card_code,
        name=row.name,
        cost=row.cost,
        category=CardCategory.from_type(row.type),
        region=row.region,
        rarity=row.rarity or "",
    )


# --- Deck Operations ---


async def create_deck(
    session: AsyncSession,
    user_id: str,
    name: str,
    description: str,
    cards: list[DeckCard],
    deck_code: str,
    regions: list[str],
    champions: list[str],
) -> DeckDB:
    """Insert a new deck and return it with its assigned id."""
    db_deck = DeckDB(
        user_id=user_id,
        name=name,
        description=description,
        cards=[card.to_dict() for card in cards],
        deck_code=deck_code,
        regions=list(regions),
        champions=list(champions),
    )
    session.add(db_deck)
    await session.flush()
    await session.refresh(db_deck)
    return db_deck


async def get_deck(session: AsyncSession, deck_id: int) -> DeckDB | None:
    """Get a deck by id. Returns None if it does not exist."""
    result = await session.execute(select(DeckDB).where(DeckDB.id == deck_id))
    return result.scalar_one_or_none()


async def list_user_decks(session: AsyncSession, user_id: str, limit: int = 100) -> list[DeckDB]:
    """Get a user's decks, newest first."""
    result = await session.execute(
        select(DeckDB)
        .where(DeckDB.user_id == user_id)
        .order_by(DeckDB.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def update_deck_code(session: AsyncSession, db_deck: DeckDB, deck_code: str) -> DeckDB:
    """Store a new deck code on an existing deck."""
    db_deck.deck_code = deck_code
    await session.flush()
    return db_deck


async def delete_deck(session: AsyncSession, deck_id: int) -> bool:
    """
    Delete a deck.

    Returns True if deleted, False if not found.
    """
    db_deck = await get_deck(session, deck_id)
    if not db_deck:
        return False

    await session.delete(db_deck)
    return True


def deck_to_record(db_deck: DeckDB) -> DeckRecord:
    """Convert a database deck to a domain record."""
    cards = [
        DeckCard(
            card_code=card["cardCode"],
            count=int(card["count"]),
            name=card.get("name"),
            cost=card.get("cost"),
            type=card.get("type"),
            region=card.get("region"),
        )
        for card in db_deck.cards or []
    ]
    return DeckRecord(
        id=db_deck.id,
        user_id=db_deck.user_id,
        name=db_deck.name,
        description=db_deck.description or "",
        cards=cards,
        deck_code=db_deck.deck_code,
        regions=list(db_deck.regions or []),
        champions=list(db_deck.champions or []),
        created_at=db_deck.created_at,
    )
