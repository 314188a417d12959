"""
Card catalog API endpoints.

Lists the catalog the deck pipeline sees and triggers catalog refreshes
from Data Dragon.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from lorbuilder.db import count_catalog_cards, count_catalog_cards_by_type
from lorbuilder.db.database import get_session
from lorbuilder.models.card import CardAttributes
from lorbuilder.services.card_fetcher import refresh_catalog
from lorbuilder.services.catalog import region_key
from lorbuilder.services.deck_service import load_catalog

router = APIRouter(prefix="/cards", tags=["cards"])


class CardResponse(BaseModel):
    """Response model for a catalog card."""

    card_code: str
    name: str
    cost: int
    type: str
    region: str

    @classmethod
    def from_card(cls, card: CardAttributes) -> "CardResponse":
        return cls(
            card_code=card.code,
            name=card.name,
            cost=card.cost,
            type=card.category.value,
            region=card.region,
        )


class CardListResponse(BaseModel):
    """Response model for the catalog listing."""

    source: str = Field(..., description="live (refreshed from Data Dragon) or bundled")
    cards: list[CardResponse]
    count: int


class CatalogStatsResponse(BaseModel):
    """Response model for stored catalog statistics."""

    total_cards: int
    has_data: bool
    by_type: dict[str, int] = Field(default_factory=dict)


class RefreshResponse(BaseModel):
    """Response model for a catalog refresh."""

    stored: int


@router.get("", response_model=CardListResponse)
async def list_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    region: Annotated[str | None, Query()] = None,
    card_type: Annotated[str | None, Query(alias="type")] = None,
) -> CardListResponse:
    """
    List the catalog used for deck building.

    Falls back to the bundled card table while no live catalog is stored.
    """
    catalog = await load_catalog(session, require_usable=False)

    cards = catalog.cards
    if region:
        cards = [card for card in cards if region_key(card.region) == region_key(region)]
    if card_type:
        cards = [card for card in cards if card.category.value.lower() == card_type.lower()]

    return CardListResponse(
        source=catalog.source,
        cards=[CardResponse.from_card(card) for card in cards],
        count=len(cards),
    )


@router.get("/stats", response_model=CatalogStatsResponse)
async def catalog_stats(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogStatsResponse:
    """Size of the stored live catalog."""
    total = await count_catalog_cards(session)
    by_type = await count_catalog_cards_by_type(session)
    return CatalogStatsResponse(total_cards=total, has_data=total > 0, by_type=by_type)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RefreshResponse:
    """
    Replace the live catalog with fresh Data Dragon data.

    Returns 503 if no set bundle could be fetched.
    """
    stored = await refresh_catalog(session)
    return RefreshResponse(stored=stored)
