from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AccuracyPoint:
    """One game on the accuracy timeline."""

    created_at: datetime | None
    accuracy: float  # 0-100
    deck_name: str | None
    time_spent_ms: int


@dataclass(frozen=True)
class CardSuccessRate:
    """How often a card was guessed (or recalled) correctly."""

    card: str
    correct: int
    total: int

    @property
    def success_rate(self) -> float:
        """Percentage of attempts that were correct."""
        return self.correct / self.total * 100 if self.total else 0.0


@dataclass(frozen=True)
class SessionStats:
    """Aggregate figures over a set of games."""

    games_played: int = 0
    average_accuracy: float = 0.0
    best_score: int = 0
    total_correct: int = 0
    average_time_ms: float = 0.0


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked player."""

    rank: int
    user_id: str
    display_name: str
    profile_picture_url: str | None
    stats: SessionStats
