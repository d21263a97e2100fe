from prizecheck.models.analytics import (
    AccuracyPoint,
    CardSuccessRate,
    LeaderboardEntry,
    SessionStats,
)
from prizecheck.models.card import CardImage, DecklistLine
from prizecheck.models.deck import ParsedDecklist, PrintableDecklist, PrintSection
from prizecheck.models.failure import (
    ApiResponse,
    DisplayNameTakenError,
    FailureDetail,
    FailureKind,
    GameStateError,
    IncompleteGuessesError,
    InvalidDeckSizeError,
    KnownError,
    NotFoundError,
    OutcomeType,
)
from prizecheck.models.game import Deal, GamePhase, GuessOutcome, ScoreResult, SessionRecord

__all__ = [
    "AccuracyPoint",
    "ApiResponse",
    "CardImage",
    "CardSuccessRate",
    "Deal",
    "DecklistLine",
    "DisplayNameTakenError",
    "FailureDetail",
    "FailureKind",
    "GamePhase",
    "GameStateError",
    "GuessOutcome",
    "IncompleteGuessesError",
    "InvalidDeckSizeError",
    "KnownError",
    "LeaderboardEntry",
    "NotFoundError",
    "OutcomeType",
    "ParsedDecklist",
    "PrintSection",
    "PrintableDecklist",
    "ScoreResult",
    "SessionRecord",
    "SessionStats",
]
