"""
Leaderboard API endpoint.

Ranks players who opted in by their average prize-recall accuracy.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.config import settings
from prizecheck.db import (
    get_leaderboard_participants,
    list_sessions_for_users,
    session_to_record,
)
from prizecheck.db.database import get_session
from prizecheck.services.analytics import rank_players

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


class LeaderboardEntryResponse(BaseModel):
    """A ranked player."""

    rank: int = Field(ge=1)
    display_name: str
    profile_picture_url: str | None = None
    games_played: int
    average_accuracy: float = Field(ge=0.0, le=100.0)
    best_score: int


class LeaderboardResponse(BaseModel):
    """Response model for the leaderboard."""

    entries: list[LeaderboardEntryResponse]
    count: int
    min_games: int


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=100)] = 25,
) -> LeaderboardResponse:
    """
    Get the leaderboard.

    Only players who enabled "show on leaderboard" and have played at least
    the configured number of games are listed. User ids are not exposed.
    """
    participants = await get_leaderboard_participants(session)
    user_ids = [p.user_id for p in participants]

    games = await list_sessions_for_users(session, user_ids)
    records = {
        user_id: [session_to_record(g) for g in user_games]
        for user_id, user_games in games.items()
    }

    ranked = rank_players(
        records,
        display_names={p.user_id: p.display_name for p in participants},
        profile_pictures={p.user_id: p.profile_picture_url for p in participants},
        min_games=settings.leaderboard_min_games,
        limit=limit,
    )

    entries = [
        LeaderboardEntryResponse(
            rank=entry.rank,
            display_name=entry.display_name,
            profile_picture_url=entry.profile_picture_url,
            games_played=entry.stats.games_played,
            average_accuracy=entry.stats.average_accuracy,
            best_score=entry.stats.best_score,
        )
        for entry in ranked
    ]
    return LeaderboardResponse(
        entries=entries, count=len(entries), min_games=settings.leaderboard_min_games
    )
