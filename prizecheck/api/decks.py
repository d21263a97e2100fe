"""
Deck API endpoints.

Provides CRUD operations for saved decklists, a printable layout and
per-deck practice statistics.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.db import (
    create_decklist,
    delete_decklist,
    get_decklist,
    list_decklists,
    list_game_sessions,
    rename_decklist,
    session_to_record,
)
from prizecheck.db.database import get_session
from prizecheck.models.db import DecklistDB
from prizecheck.models.failure import NotFoundError
from prizecheck.parsers.decklist import parse_decklist
from prizecheck.services.analytics import accuracy_timeline, prize_recall_rates, summarize
from prizecheck.services.dealer import DECK_SIZE
from prizecheck.services.print_list import build_printable, render_text
from prizecheck.services.sample_deck import get_sample_deck

router = APIRouter(prefix="/decks", tags=["decks"])


class DecklistLineResponse(BaseModel):
    """One decklist line."""

    quantity: int
    name: str


class DeckResponse(BaseModel):
    """Response model for a single deck."""

    id: int
    user_id: str
    name: str
    cards: str
    lines: list[DecklistLineResponse] = Field(default_factory=list)
    total_cards: int = 0
    unique_cards: int = 0
    dropped_lines: list[str] = Field(default_factory=list)
    is_playable: bool = Field(
        default=False,
        description="True when the decklist totals exactly 60 cards",
    )
    created_at: datetime | None = None


class DeckListResponse(BaseModel):
    """Response model for a list of decks."""

    user_id: str
    decks: list[DeckResponse]
    count: int


class DeckCreateRequest(BaseModel):
    """Request model for saving a deck."""

    name: str = Field(..., examples=["Pikachu ex"])
    cards: str = Field(
        ...,
        description="Decklist text, one '<quantity> <card name>' per line",
        examples=["4 Pikachu ex SSP 57\n56 Basic Lightning Energy"],
    )


class DeckRenameRequest(BaseModel):
    """Request model for renaming a deck."""

    name: str


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    deck_id: int
    deleted: bool
    message: str = ""


class PrintSectionResponse(BaseModel):
    """One section of a printable decklist."""

    category: str
    total: int
    lines: list[DecklistLineResponse]


class PrintResponse(BaseModel):
    """A decklist laid out for printing."""

    name: str
    created_at: datetime | None = None
    sections: list[PrintSectionResponse]
    total_cards: int
    text: str


class AccuracyPointResponse(BaseModel):
    """One game on an accuracy chart."""

    created_at: datetime | None = None
    accuracy: float = Field(ge=0.0, le=100.0)
    deck_name: str | None = None
    time_spent_ms: int


class CardRateResponse(BaseModel):
    """Success rate for one card."""

    card: str
    correct: int
    total: int
    success_rate: float = Field(ge=0.0, le=100.0)


class DeckStatsResponse(BaseModel):
    """Practice statistics for one deck."""

    deck_id: int
    name: str
    games_played: int
    average_accuracy: float
    best_score: int
    accuracy_timeline: list[AccuracyPointResponse]
    top_cards: list[CardRateResponse]


def _require_text(value: str, message: str) -> str:
    if not value or not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return value.strip()


def _deck_response(decklist: DecklistDB) -> DeckResponse:
    parsed = parse_decklist(decklist.cards)
    return DeckResponse(
        id=decklist.id,
        user_id=decklist.user_id,
        name=decklist.name,
        cards=decklist.cards,
        lines=[DecklistLineResponse(quantity=line.quantity, name=line.name) for line in parsed.lines],
        total_cards=parsed.total_cards(),
        unique_cards=parsed.unique_cards(),
        dropped_lines=list(parsed.dropped_lines),
        is_playable=parsed.total_cards() == DECK_SIZE,
        created_at=decklist.created_at,
    )


async def _get_owned_deck(session: AsyncSession, user_id: str, deck_id: int) -> DecklistDB:
    decklist = await get_decklist(session, user_id, deck_id)
    if decklist is None:
        raise NotFoundError("Deck", deck_id)
    return decklist


@router.post("/{user_id}", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    user_id: str,
    request: DeckCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Save a decklist.

    Decks that do not total 60 cards are saved but reported as not playable;
    dealing them fails until they are fixed.
    """
    name = _require_text(request.name, "Deck name cannot be empty")
    cards = _require_text(request.cards, "Please enter a decklist")

    decklist = await create_decklist(session, user_id, name, cards)
    return _deck_response(decklist)


@router.post("/{user_id}/sample", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_sample_deck(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Save the sample deck to a user's decks."""
    name, cards = get_sample_deck()
    decklist = await create_decklist(session, user_id, name, cards)
    return _deck_response(decklist)


@router.get("/{user_id}", response_model=DeckListResponse)
async def get_user_decks(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> DeckListResponse:
    """Get a user's decks, newest first, optionally filtered by name."""
    decklists = await list_decklists(session, user_id, search=search)
    decks = [_deck_response(d) for d in decklists]
    return DeckListResponse(user_id=user_id, decks=decks, count=len(decks))


@router.get("/{user_id}/{deck_id}", response_model=DeckResponse)
async def get_deck(
    user_id: str,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Get one deck. Returns 404 if it does not exist for this user."""
    return _deck_response(await _get_owned_deck(session, user_id, deck_id))


@router.patch("/{user_id}/{deck_id}", response_model=DeckResponse)
async def rename_deck(
    user_id: str,
    deck_id: int,
    request: DeckRenameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Rename a deck."""
    name = _require_text(request.name, "Deck name cannot be empty")

    decklist = await rename_decklist(session, user_id, deck_id, name)
    if decklist is None:
        raise NotFoundError("Deck", deck_id)
    return _deck_response(decklist)


@router.delete("/{user_id}/{deck_id}", response_model=DeleteResponse)
async def delete_deck(
    user_id: str,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Delete a deck.

    Games played with the deck are deleted with it.
    """
    deleted = await delete_decklist(session, user_id, deck_id)

    if deleted:
        message = "Deck deleted successfully"
    else:
        message = "No deck found to delete."

    return DeleteResponse(deck_id=deck_id, deleted=deleted, message=message)


@router.get("/{user_id}/{deck_id}/print", response_model=PrintResponse)
async def print_deck(
    user_id: str,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PrintResponse:
    """Get a deck grouped into Pokémon, Trainer and Energy sections for printing."""
    decklist = await _get_owned_deck(session, user_id, deck_id)
    printable = build_printable(decklist.name, decklist.cards, decklist.created_at)

    return PrintResponse(
        name=printable.name,
        created_at=printable.created_at,
        sections=[
            PrintSectionResponse(
                category=section.category,
                total=section.total(),
                lines=[
                    DecklistLineResponse(quantity=line.quantity, name=line.name)
                    for line in section.lines
                ],
            )
            for section in printable.sections
        ],
        total_cards=printable.total_cards(),
        text=render_text(printable),
    )


@router.get("/{user_id}/{deck_id}/stats", response_model=DeckStatsResponse)
async def get_deck_stats(
    user_id: str,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    top: Annotated[int, Query(ge=1, le=60)] = 10,
) -> DeckStatsResponse:
    """
    Get practice statistics for a deck.

    Includes the accuracy of every game played with it and the prize cards
    recalled most reliably.
    """
    decklist = await _get_owned_deck(session, user_id, deck_id)
    records = [session_to_record(g) for g in await list_game_sessions(session, user_id, deck_id)]
    stats = summarize(records)

    return DeckStatsResponse(
        deck_id=decklist.id,
        name=decklist.name,
        games_played=stats.games_played,
        average_accuracy=stats.average_accuracy,
        best_score=stats.best_score,
        accuracy_timeline=[
            AccuracyPointResponse(
                created_at=point.created_at,
                accuracy=point.accuracy,
                deck_name=point.deck_name,
                time_spent_ms=point.time_spent_ms,
            )
            for point in accuracy_timeline(records)
        ],
        top_cards=[
            CardRateResponse(
                card=rate.card,
                correct=rate.correct,
                total=rate.total,
                success_rate=rate.success_rate,
            )
            for rate in prize_recall_rates(records, limit=top)
        ],
    )
