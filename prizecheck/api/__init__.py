from prizecheck.api.analytics import router as analytics_router
from prizecheck.api.cards import router as cards_router
from prizecheck.api.decks import router as decks_router
from prizecheck.api.games import router as games_router
from prizecheck.api.health import router as health_router
from prizecheck.api.leaderboard import router as leaderboard_router
from prizecheck.api.profile import router as profile_router

__all__ = [
    "analytics_router",
    "cards_router",
    "decks_router",
    "games_router",
    "health_router",
    "leaderboard_router",
    "profile_router",
]
