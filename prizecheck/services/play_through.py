"""
Play-through state machine.

One play-through moves NOT_STARTED -> DEALT -> SUBMITTED. A restart from
any phase throws the current deal and guesses away and deals a fresh
shuffle of the same deck.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from prizecheck.models.failure import GameStateError, IncompleteGuessesError
from prizecheck.models.game import Deal, GamePhase, ScoreResult
from prizecheck.services.dealer import PRIZE_COUNT, deal
from prizecheck.services.scoring import score_guesses

logger = logging.getLogger(__name__)


def _empty_guesses() -> list[str]:
    return [""] * PRIZE_COUNT


@dataclass
class PlayThrough:
    """
    Mutable holder for the single live game of one player.

    Attributes:
        deck: The original 60-card multiset, reused on restart
        phase: Current phase
        current_deal: The live deal (None before the first start)
        guesses: Six guess slots, "" when empty
        result: The score once submitted
    """

    deck: tuple[str, ...]
    rng: random.Random | None = None
    phase: GamePhase = GamePhase.NOT_STARTED
    current_deal: Deal | None = None
    guesses: list[str] = field(default_factory=_empty_guesses)
    result: ScoreResult | None = None

    @classmethod
    def from_cards(cls, cards: Sequence[str], rng: random.Random | None = None) -> "PlayThrough":
        return cls(deck=tuple(cards), rng=rng)

    def start(self) -> Deal:
        """
        Deal a fresh shuffle and open the guessing phase.

        Raises:
            InvalidDeckSizeError: If the deck is not 60 cards; state is unchanged
        """
        new_deal = deal(self.deck, rng=self.rng)

        self.current_deal = new_deal
        self.guesses = _empty_guesses()
        self.result = None
        self.phase = GamePhase.DEALT
        return new_deal

    def restart(self) -> Deal:
        """Discard the current round and deal again."""
        logger.debug("Restarting play-through from %s", self.phase.value)
        return self.start()

    def set_guess(self, index: int, value: str) -> None:
        """Fill or clear one guess slot."""
        if self.phase is not GamePhase.DEALT:
            raise GameStateError("Guesses can only be changed while a game is in progress")
        if not 0 <= index < PRIZE_COUNT:
            raise IndexError(f"Guess slot {index} out of range 0-{PRIZE_COUNT - 1}")
        self.guesses[index] = value

    def submit(self, time_spent_ms: int = 0) -> ScoreResult:
        """
        Score the guesses and close the round.

        Raises:
            GameStateError: If no game is in progress
            IncompleteGuessesError: If a slot is empty; state is unchanged
            ValueError: If time_spent_ms is negative; state is unchanged
        """
        if self.phase is not GamePhase.DEALT or self.current_deal is None:
            raise GameStateError("There is no game in progress to submit")
        if time_spent_ms < 0:
            raise ValueError(f"time_spent_ms must be >= 0, got {time_spent_ms}")

        try:
            correct = score_guesses(self.guesses, self.current_deal.prizes)
        except IncompleteGuessesError:
            logger.debug("Rejected submission with empty guess slots")
            raise

        self.result = ScoreResult(
            correct_count=correct,
            guesses=tuple(self.guesses),
            actual_prizes=self.current_deal.prizes,
            time_spent_ms=time_spent_ms,
            total_prizes=PRIZE_COUNT,
        )
        self.phase = GamePhase.SUBMITTED
        return self.result
