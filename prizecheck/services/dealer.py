"""
Shuffling and dealing.

Turns a 60-card multiset into an opening hand, six prize cards and the
remaining deck. The shuffle is a Fisher–Yates shuffle so every permutation
is equally likely.
"""

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from prizecheck.models.failure import InvalidDeckSizeError
from prizecheck.models.game import Deal
from prizecheck.parsers.decklist import parse_decklist

logger = logging.getLogger(__name__)

DECK_SIZE = 60
HAND_SIZE = 7
PRIZE_COUNT = 6

T = TypeVar("T")

_system_random = random.SystemRandom()


def shuffle(cards: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Return a uniformly shuffled copy of cards.

    Args:
        cards: Cards to shuffle. Not modified.
        rng: Source of randomness. Defaults to the OS entropy source.

    Returns:
        A new list holding a random permutation of cards
    """
    rng = rng or _system_random
    shuffled = list(cards)

    # Walk down from the end, swapping each slot with a random earlier one
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def deal(
    deck: Sequence[str],
    rng: random.Random | None = None,
    dropped_lines: Sequence[str] = (),
) -> Deal:
    """
    Shuffle a deck and split it into hand, prizes and remaining deck.

    Args:
        deck: The 60-card multiset
        rng: Source of randomness
        dropped_lines: Parse warnings to carry through to the caller

    Returns:
        A fresh Deal

    Raises:
        InvalidDeckSizeError: If the deck does not hold exactly 60 cards
    """
    if len(deck) != DECK_SIZE:
        raise InvalidDeckSizeError(actual_size=len(deck), required_size=DECK_SIZE)

    permutation = shuffle(deck, rng)
    prize_end = HAND_SIZE + PRIZE_COUNT

    result = Deal(
        hand=tuple(permutation[:HAND_SIZE]),
        prizes=tuple(permutation[HAND_SIZE:prize_end]),
        remaining_deck=tuple(permutation[prize_end:]),
        unique_card_names=tuple(sorted(set(deck))),
        dropped_lines=tuple(dropped_lines),
    )

    logger.debug(
        "Dealt %d cards: hand=%d prizes=%d remaining=%d",
        len(deck),
        len(result.hand),
        len(result.prizes),
        len(result.remaining_deck),
    )
    return result


def parse_and_deal(text: str, rng: random.Random | None = None) -> Deal:
    """
    Parse decklist text and deal it.

    Raises:
        InvalidDeckSizeError: If the well-formed lines do not total 60 cards
    """
    parsed = parse_decklist(text)

    if parsed.dropped_lines:
        logger.info("Ignored %d unparseable decklist lines", len(parsed.dropped_lines))

    return deal(parsed.cards, rng=rng, dropped_lines=parsed.dropped_lines)
