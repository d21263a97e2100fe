"""
Health check endpoints.

/health says the process is up. /ready says PrizeCheck can serve players:
the database answers and the decklist, game session and preference tables
exist, so decks can be loaded and games recorded.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.config import settings
from prizecheck.db.database import get_session
from prizecheck.models.db import DecklistDB, GameSessionDB, UserPreferencesDB

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Tables every deck and game endpoint reads from
_REQUIRED_TABLES = (DecklistDB, GameSessionDB, UserPreferencesDB)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str = settings.app_name
    database: str | None = None
    missing_tables: list[str] | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Process is up. Does not touch the database."""
    return HealthResponse(status="healthy")


async def _missing_tables(session: AsyncSession) -> list[str]:
    missing = []
    for table in _REQUIRED_TABLES:
        try:
            await session.execute(select(table).limit(1))
        except SQLAlchemyError as e:
            logger.warning("Table %s is not usable: %s", table.__tablename__, e)
            await session.rollback()
            missing.append(table.__tablename__)
    return missing


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Ready to deal and record games.

    503 with database "disconnected" when the database cannot be reached,
    and 503 with the missing table names when it answers but the schema
    has not been created.
    """
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    missing = await _missing_tables(session)
    if missing:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="connected", missing_tables=missing)

    return HealthResponse(status="ready", database="connected")
