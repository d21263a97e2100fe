"""
Analytics API endpoint.

Summarizes a user's recorded games for charts: accuracy over time and how
often each guessed card turned out to be prized.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.db import list_game_sessions, session_to_record
from prizecheck.db.database import get_session
from prizecheck.services.analytics import (
    accuracy_timeline,
    guessed_card_success_rates,
    summarize,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


class SummaryResponse(BaseModel):
    """Aggregate figures over all games."""

    games_played: int = 0
    average_accuracy: float = 0.0
    best_score: int = 0
    average_time_seconds: float = 0.0


class AccuracyPointResponse(BaseModel):
    """One game on the accuracy chart."""

    created_at: datetime | None = None
    accuracy: int = Field(ge=0, le=100, description="Rounded percentage")
    deck_name: str | None = None


class CardSuccessResponse(BaseModel):
    """Success rate for one guessed card."""

    card: str
    correct: int
    total: int
    success_rate: int = Field(ge=0, le=100, description="Rounded percentage")


class AnalyticsResponse(BaseModel):
    """Response model for a user's analytics."""

    user_id: str
    summary: SummaryResponse
    accuracy_over_time: list[AccuracyPointResponse] = Field(default_factory=list)
    card_success_rates: list[CardSuccessResponse] = Field(default_factory=list)


@router.get("/{user_id}", response_model=AnalyticsResponse)
async def get_analytics(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AnalyticsResponse:
    """
    Get analytics over all of a user's games.

    Returns empty series when the user has not played yet.
    """
    records = [session_to_record(g) for g in await list_game_sessions(session, user_id)]
    stats = summarize(records)

    return AnalyticsResponse(
        user_id=user_id,
        summary=SummaryResponse(
            games_played=stats.games_played,
            average_accuracy=stats.average_accuracy,
            best_score=stats.best_score,
            average_time_seconds=stats.average_time_ms / 1000,
        ),
        accuracy_over_time=[
            AccuracyPointResponse(
                created_at=point.created_at,
                accuracy=round(point.accuracy),
                deck_name=point.deck_name,
            )
            for point in accuracy_timeline(records)
        ],
        card_success_rates=[
            CardSuccessResponse(
                card=rate.card,
                correct=rate.correct,
                total=rate.total,
                success_rate=round(rate.success_rate),
            )
            for rate in guessed_card_success_rates(records)
        ],
    )
