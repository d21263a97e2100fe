import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prizecheck.api import (
    analytics_router,
    cards_router,
    decks_router,
    games_router,
    health_router,
    leaderboard_router,
    profile_router,
)
from prizecheck.config import settings
from prizecheck.db.database import close_db, init_db
from prizecheck.models.failure import KnownError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

try:
    __version__ = pkg_version("prizecheck")
except PackageNotFoundError:
    __version__ = "0.0.0"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    logger.info("%s %s started", settings.app_name, __version__)
    yield
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render user-correctable failures as a classified response."""
    logger.info("Known failure (%s): %s", exc.kind.value, exc.detail or exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


app.include_router(analytics_router)
app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(games_router)
app.include_router(health_router)
app.include_router(leaderboard_router)
app.include_router(profile_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
