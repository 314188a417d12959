"""
Deck API endpoints.

Generates decks from prompts, reads and imports deck codes, and manages
a user's saved decks. Known failures propagate as KnownError and are
rendered by the application's exception handler.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from lorbuilder.db.database import get_session
from lorbuilder.db.operations import deck_to_record
from lorbuilder.models.deck import DeckCard, DeckRecord
from lorbuilder.services.deck_service import (
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

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckCardResponse(BaseModel):
    """One card row of a deck."""

    card_code: str
    count: int
    name: str | None = None
    cost: int | None = None
    type: str | None = None
    region: str | None = None

    @classmethod
    def from_card(cls, card: DeckCard) -> "DeckCardResponse":
        return cls(
            card_code=card.card_code,
            count=card.count,
            name=card.name,
            cost=card.cost,
            type=card.type,
            region=card.region,
        )


class DeckResponse(BaseModel):
    """Response model for a stored deck."""

    id: int
    user_id: str
    name: str
    description: str
    deck_code: str
    cards: list[DeckCardResponse] = Field(default_factory=list)
    regions: list[str] = Field(default_factory=list)
    champions: list[str] = Field(default_factory=list)
    total_cards: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: DeckRecord) -> "DeckResponse":
        return cls(
            id=record.id,
            user_id=record.user_id,
            name=record.name,
            description=record.description,
            deck_code=record.deck_code,
            cards=[DeckCardResponse.from_card(card) for card in record.cards],
            regions=record.regions,
            champions=record.champions,
            total_cards=record.total_cards,
            created_at=record.created_at,
        )


class DeckListResponse(BaseModel):
    """Response model for a user's decks."""

    user_id: str
    decks: list[DeckResponse]
    count: int


class ParsedDeckResponse(BaseModel):
    """Response model for a decoded deck code."""

    deck_code: str
    cards: list[DeckCardResponse]
    regions: list[str]
    champions: list[str]
    total_cards: int


class GenerateDeckRequest(BaseModel):
    """Request model for generating a deck from a prompt."""

    user_id: str = Field(..., min_length=1)
    prompt: str = Field(
        ...,
        min_length=1,
        description="What the deck should do",
        examples=["An aggressive Demacia deck built around Garen"],
    )
    mode: GenerationMode = Field(
        default=GenerationMode.CONCEPT,
        description="concept: the model names champions and core cards; "
        "full_list: the model lists all 40 cards",
    )


class ImportDeckRequest(BaseModel):
    """Request model for importing a deck code."""

    user_id: str = Field(..., min_length=1)
    deck_code: str = Field(..., min_length=1, examples=["CEAQCAIAAIAAA"])
    name: str = "Imported Deck"
    description: str = "Imported from deck code"


class SaveDeckCard(BaseModel):
    """A card of a manually saved deck."""

    card_code: str = Field(..., examples=["01DE012"])
    count: int = Field(..., ge=1)


class SaveDeckRequest(BaseModel):
    """Request model for saving a deck."""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    cards: list[SaveDeckCard] = Field(..., min_length=1)


class DeckCodeResponse(BaseModel):
    """Response model for a regenerated deck code."""

    id: int
    deck_code: str


@router.post("/generate", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def generate(
    request: GenerateDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Generate a legal 40-card deck from a prompt and store it.

    Returns 503 when the catalog or the model is unavailable, 502 when the
    model's reply cannot be read and 422 when no legal deck can be built.
    """
    record = await generate_deck(session, request.user_id, request.prompt, mode=request.mode)
    return DeckResponse.from_record(record)


@router.post("/import", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def import_deck(
    request: ImportDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Store a deck read from a deck code."""
    record = await import_deck_from_code(
        session,
        request.user_id,
        request.deck_code,
        name=request.name,
        description=request.description,
    )
    return DeckResponse.from_record(record)


@router.get("/code/{deck_code}", response_model=ParsedDeckResponse)
async def read_deck_code(
    deck_code: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ParsedDeckResponse:
    """Decode a deck code without storing it."""
    catalog = await load_catalog(session, require_usable=False)
    parsed = parse_deck_code(deck_code, catalog)
    return ParsedDeckResponse(
        deck_code=deck_code,
        cards=[DeckCardResponse.from_card(card) for card in parsed.cards],
        regions=parsed.regions,
        champions=parsed.champions,
        total_cards=parsed.total_cards,
    )


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def save(
    request: SaveDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Store a deck from card codes and counts."""
    record = await save_deck(
        session,
        request.user_id,
        request.name,
        request.description,
        [(card.card_code, card.count) for card in request.cards],
    )
    return DeckResponse.from_record(record)


@router.get("", response_model=DeckListResponse)
async def list_user_decks(
    user_id: Annotated[str, Query(min_length=1)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckListResponse:
    """Get the user's decks, newest first."""
    records = await list_decks(session, user_id)
    decks = [DeckResponse.from_record(record) for record in records]
    return DeckListResponse(user_id=user_id, decks=decks, count=len(decks))


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck(
    deck_id: int,
    user_id: Annotated[str, Query(min_length=1)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Get one of the user's decks.

    Returns 404 if the deck does not exist or belongs to another user.
    """
    db_deck = await get_user_deck(session, deck_id, user_id)
    return DeckResponse.from_record(deck_to_record(db_deck))


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deck(
    deck_id: int,
    user_id: Annotated[str, Query(min_length=1)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    """Delete one of the user's decks."""
    await delete_user_deck(session, deck_id, user_id)


@router.post("/{deck_id}/regenerate-code", response_model=DeckCodeResponse)
async def regenerate_code(
    deck_id: int,
    user_id: Annotated[str, Query(min_length=1)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckCodeResponse:
    """Re-encode a stored deck and store the new deck code."""
    deck_code = await regenerate_deck_code(session, deck_id, user_id)
    return DeckCodeResponse(id=deck_id, deck_code=deck_code)
