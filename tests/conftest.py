import random

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.db import Base
from lorbuilder.services.catalog import Catalog, LiveCatalog


def make_card(
    code: str,
    name: str,
    cost: int,
    category: CardCategory = CardCategory.UNIT,
    region: str = "Demacia",
) -> CardAttributes:
    """Build card attributes for tests."""
    return CardAttributes(code=code, name=name, cost=cost, category=category, region=region)


def build_test_cards() -> list[CardAttributes]:
    """
    A 108-card catalog over three regions plus one wildcard champion.

    Demacia:  Garen, Lux, Fiora (cost 5), 40 soldiers (01DE010-01DE049,
              cost 1 + i % 8), 15 tactics (01DE050-01DE064, cost 2 + i % 4),
              one 0-cost token (01DE099)
    Freljord: Braum, Ashe, Tryndamere, 30 raiders, 10 rituals
    Ionia:    Yasuo and 4 students
    Runeterra: Jax
    """
    cards = [
        make_card("01DE001", "Garen", 5, CardCategory.CHAMPION),
        make_card("01DE002", "Lux", 5, CardCategory.CHAMPION),
        make_card("01DE003", "Fiora", 5, CardCategory.CHAMPION),
    ]
    cards += [make_card(f"01DE{10 + i:03d}", f"Demacia Soldier {i}", 1 + i % 8) for i in range(40)]
    cards += [
        make_card(f"01DE{50 + i:03d}", f"Demacia Tactic {i}", 2 + i % 4, CardCategory.SPELL)
        for i in range(15)
    ]
    cards.append(make_card("01DE099", "Demacia Token", 0))

    cards += [
        make_card("01FR001", "Braum", 3, CardCategory.CHAMPION, "Freljord"),
        make_card("01FR002", "Ashe", 4, CardCategory.CHAMPION, "Freljord"),
        make_card("01FR003", "Tryndamere", 8, CardCategory.CHAMPION, "Freljord"),
    ]
    cards += [
        make_card(f"01FR{10 + i:03d}", f"Freljord Raider {i}", 1 + i % 6, region="Freljord")
        for i in range(30)
    ]
    cards += [
        make_card(f"01FR{50 + i:03d}", f"Freljord Ritual {i}", 2 + i % 5, CardCategory.SPELL, "Freljord")
        for i in range(10)
    ]

    cards.append(make_card("01IO001", "Yasuo", 4, CardCategory.CHAMPION, "Ionia"))
    cards += [make_card(f"01IO{10 + i:03d}", f"Ionia Student {i}", 2, region="Ionia") for i in range(4)]

    cards.append(make_card("06RU001", "Jax", 4, CardCategory.CHAMPION, "Runeterra"))
    return cards


@pytest.fixture
def test_cards() -> list[CardAttributes]:
    return build_test_cards()


@pytest.fixture
def catalog(test_cards: list[CardAttributes]) -> Catalog:
    """A usable live catalog over the test cards."""
    return LiveCatalog(test_cards)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so fill results are reproducible."""
    return random.Random(1234)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
