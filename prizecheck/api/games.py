"""
Game API endpoints.

Deals hands from decklist text or stored decks, scores prize guesses and
records finished games in the user's history.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.db import (
    get_decklist,
    get_game_session,
    list_game_sessions,
    record_game_session,
    session_to_record,
)
from prizecheck.db.database import get_session
from prizecheck.models.failure import NotFoundError
from prizecheck.models.game import Deal, ScoreResult
from prizecheck.services.dealer import PRIZE_COUNT, parse_and_deal
from prizecheck.services.scoring import guess_breakdown, score_guesses, suggest_cards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])

UNKNOWN_DECK = "Unknown Deck"


class DealRequest(BaseModel):
    """Request model for dealing from raw decklist text."""

    decklist: str = Field(
        ...,
        description="Decklist text, one '<quantity> <card name>' per line",
        examples=["4 Pikachu SVI 54\n4 Raichu SVI 55\n52 Basic Lightning Energy"],
    )


class DealResponse(BaseModel):
    """A fresh deal."""

    hand: list[str]
    prizes: list[str]
    remaining_deck: list[str]
    unique_card_names: list[str]
    dropped_lines: list[str] = Field(
        default_factory=list,
        description="Decklist lines that were ignored because they could not be parsed",
    )


class ScoreRequest(BaseModel):
    """Request model for scoring guesses without recording them."""

    guesses: list[str | None] = Field(..., description="The six guess slots")
    prizes: list[str] = Field(..., description="The six actual prize cards")


class ScoreResponse(BaseModel):
    """Score for one set of guesses."""

    correct_count: int = Field(ge=0, le=PRIZE_COUNT)
    total_prizes: int = PRIZE_COUNT


class SuggestRequest(BaseModel):
    """Request model for guess autocompletion."""

    query: str
    unique_card_names: list[str]
    limit: int | None = Field(default=None, ge=1)


class SuggestResponse(BaseModel):
    """Card names matching a partial guess."""

    suggestions: list[str]


class SubmitRequest(BaseModel):
    """Request model for submitting a finished game."""

    deck_id: int
    guesses: list[str | None] = Field(..., description="The six guess slots")
    prizes: list[str] = Field(..., description="The six prize cards from the deal")
    time_spent_ms: int = Field(default=0, ge=0, description="Elapsed time since the deal")


class GuessOutcomeResponse(BaseModel):
    """Scoring detail for one guess slot."""

    guessed_card: str
    actual_card: str
    correct: bool


class SessionResponse(BaseModel):
    """A recorded game."""

    id: int
    deck_id: int
    deck_name: str
    correct_count: int
    total_prizes: int
    guesses: list[str]
    actual_prizes: list[str]
    time_spent_ms: int
    created_at: datetime | None = None


class SessionDetailResponse(SessionResponse):
    """A recorded game with per-slot scoring."""

    accuracy: float
    breakdown: list[GuessOutcomeResponse] = Field(default_factory=list)


class HistoryEntry(BaseModel):
    """One row of the game history."""

    id: int
    deck_name: str
    correct_guesses: int
    total_prizes: int
    time_spent_seconds: int
    created_at: datetime | None = None


class HistoryResponse(BaseModel):
    """A user's game history."""

    user_id: str
    sessions: list[HistoryEntry]
    count: int


def _deal_response(deal: Deal) -> DealResponse:
    return DealResponse(
        hand=list(deal.hand),
        prizes=list(deal.prizes),
        remaining_deck=list(deal.remaining_deck),
        unique_card_names=list(deal.unique_card_names),
        dropped_lines=list(deal.dropped_lines),
    )


def _require_prizes(prizes: list[str]) -> None:
    if len(prizes) != PRIZE_COUNT or any(not prize.strip() for prize in prizes):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Exactly {PRIZE_COUNT} prize cards are required",
        )


@router.post("/deal", response_model=DealResponse)
async def deal_from_text(request: DealRequest) -> DealResponse:
    """
    Shuffle a decklist and deal a hand and prizes.

    Fails with invalid_deck_size unless the decklist totals exactly 60 cards.
    """
    if not request.decklist.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter a decklist",
        )

    return _deal_response(parse_and_deal(request.decklist))


@router.post("/score", response_model=ScoreResponse)
async def score(request: ScoreRequest) -> ScoreResponse:
    """
    Score six guesses against six prizes.

    Nothing is recorded. Fails with incomplete_guesses if any slot is empty.
    """
    _require_prizes(request.prizes)
    correct = score_guesses(request.guesses, request.prizes)
    return ScoreResponse(correct_count=correct, total_prizes=PRIZE_COUNT)


@router.post("/suggest", response_model=SuggestResponse)
async def suggest(request: SuggestRequest) -> SuggestResponse:
    """Autocomplete a guess from the deck's card names."""
    return SuggestResponse(
        suggestions=suggest_cards(request.query, request.unique_card_names, request.limit)
    )


@router.post("/{user_id}/decks/{deck_id}/deal", response_model=DealResponse)
async def deal_saved_deck(
    user_id: str,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DealResponse:
    """Deal a fresh shuffle of one of the user's saved decks."""
    decklist = await get_decklist(session, user_id, deck_id)
    if decklist is None:
        raise NotFoundError("Deck", deck_id)

    return _deal_response(parse_and_deal(decklist.cards))


@router.post(
    "/{user_id}/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_game(
    user_id: str,
    request: SubmitRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """
    Score a finished game and record it.

    The guesses are validated and scored before anything is written, so an
    incomplete submission leaves the history untouched.
    """
    _require_prizes(request.prizes)

    decklist = await get_decklist(session, user_id, request.deck_id)
    if decklist is None:
        raise NotFoundError("Deck", request.deck_id)

    correct = score_guesses(request.guesses, request.prizes)
    result = ScoreResult(
        correct_count=correct,
        guesses=tuple(guess or "" for guess in request.guesses),
        actual_prizes=tuple(request.prizes),
        time_spent_ms=request.time_spent_ms,
        total_prizes=PRIZE_COUNT,
    )

    game = await record_game_session(session, user_id, decklist.id, result)
    logger.info(
        "Recorded game %d for user %s: %d/%d in %dms",
        game.id,
        user_id,
        result.correct_count,
        result.total_prizes,
        result.time_spent_ms,
    )

    return SessionResponse(
        id=game.id,
        deck_id=decklist.id,
        deck_name=decklist.name,
        correct_count=result.correct_count,
        total_prizes=result.total_prizes,
        guesses=list(result.guesses),
        actual_prizes=list(result.actual_prizes),
        time_spent_ms=result.time_spent_ms,
        created_at=game.created_at,
    )


@router.get("/{user_id}/sessions", response_model=HistoryResponse)
async def get_history(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HistoryResponse:
    """Get a user's game history, newest first."""
    games = await list_game_sessions(session, user_id)

    entries: list[HistoryEntry] = []
    for game in games:
        record = session_to_record(game)
        entries.append(
            HistoryEntry(
                id=record.id,
                deck_name=record.deck_name or UNKNOWN_DECK,
                correct_guesses=record.correct_guesses,
                total_prizes=record.total_prizes,
                time_spent_seconds=round(record.time_spent_ms / 1000),
                created_at=record.created_at,
            )
        )

    return HistoryResponse(user_id=user_id, sessions=entries, count=len(entries))


@router.get("/{user_id}/sessions/{session_id}", response_model=SessionDetailResponse)
async def get_game_details(
    user_id: str,
    session_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionDetailResponse:
    """Get one recorded game with the per-slot breakdown."""
    game = await get_game_session(session, user_id, session_id)
    if game is None:
        raise NotFoundError("Game session", session_id)

    record = session_to_record(game)
    breakdown = guess_breakdown(record.guessed_cards, record.actual_prizes)

    return SessionDetailResponse(
        id=record.id,
        deck_id=record.deck_id,
        deck_name=record.deck_name or UNKNOWN_DECK,
        correct_count=record.correct_guesses,
        total_prizes=record.total_prizes,
        guesses=record.guessed_cards,
        actual_prizes=record.actual_prizes,
        time_spent_ms=record.time_spent_ms,
        created_at=record.created_at,
        accuracy=record.accuracy,
        breakdown=[
            GuessOutcomeResponse(
                guessed_card=outcome.guessed_card,
                actual_card=outcome.actual_card,
                correct=outcome.correct,
            )
            for outcome in breakdown
        ],
    )
