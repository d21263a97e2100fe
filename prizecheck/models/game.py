from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class GamePhase(str, Enum):
    """Phase of a single play-through."""

    NOT_STARTED = "not_started"
    DEALT = "dealt"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class Deal:
    """
    One shuffled deal of a 60-card deck.

    Attributes:
        hand: The 7 cards of the opening hand
        prizes: The 6 face-down prize cards
        remaining_deck: The other 47 cards, in shuffled order
        unique_card_names: Sorted distinct identifiers from the original deck
        dropped_lines: Decklist lines ignored while parsing (empty when dealt from a list)
    """

    hand: tuple[str, ...]
    prizes: tuple[str, ...]
    remaining_deck: tuple[str, ...]
    unique_card_names: tuple[str, ...]
    dropped_lines: tuple[str, ...] = ()

    def all_cards(self) -> list[str]:
        """Every card in the deal, hand first then prizes then deck."""
        return [*self.hand, *self.prizes, *self.remaining_deck]


@dataclass(frozen=True)
class ScoreResult:
    """Terminal artifact of one completed play-through."""

    correct_count: int
    guesses: tuple[str, ...]
    actual_prizes: tuple[str, ...]
    time_spent_ms: int = 0
    total_prizes: int = 6

    @property
    def accuracy(self) -> float:
        """Percentage of prizes recalled."""
        if self.total_prizes == 0:
            return 0.0
        return self.correct_count / self.total_prizes * 100


@dataclass(frozen=True)
class GuessOutcome:
    """Per-slot scoring detail for analytics."""

    guessed_card: str
    actual_card: str
    correct: bool


@dataclass
class SessionRecord:
    """
    A stored game session, detached from the database.

    Attributes:
        id: Session id
        user_id: Owner of the session
        deck_id: Decklist the game was played with
        deck_name: Name of that decklist, None if it no longer resolves
        correct_guesses: Score
        total_prizes: Always 6 for games recorded by this service
        time_spent_ms: Elapsed time from deal to submission
        guessed_cards: The six guesses in slot order
        actual_prizes: The six prize cards in slot order
        created_at: When the game was recorded
    """

    id: int
    user_id: str
    deck_id: int
    deck_name: str | None
    correct_guesses: int
    total_prizes: int
    time_spent_ms: int
    guessed_cards: list[str] = field(default_factory=list)
    actual_prizes: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def accuracy(self) -> float:
        """Percentage of prizes recalled."""
        if self.total_prizes == 0:
            return 0.0
        return self.correct_guesses / self.total_prizes * 100
