"""
Prize guess scoring.

Guesses are compared with the actual prize cards as multisets: a card
counts as many times as it appears in both, no more. Card names are
normalized first so "Pikachu SVI 54" and "Pikachu" are the same card.
All print variants of a same-named card are therefore treated as equal.
"""

import re
from collections import Counter
from collections.abc import Sequence

from prizecheck.models.failure import IncompleteGuessesError
from prizecheck.models.game import GuessOutcome
from prizecheck.services.dealer import PRIZE_COUNT

# Name suffixes that look like set codes but belong to the card name
_MECHANIC_SUFFIXES = ("VMAX", "VSTAR", "VUNION", "GX", "EX", "BREAK", "LEGEND")

# Trailing "<SET> <number>" as in Pokémon TCG Live exports: "SVI 54", "PR-SV 12", "PAL 185a"
_SET_AND_NUMBER_PATTERN = re.compile(
    r"\s+(?!(?:" + "|".join(_MECHANIC_SUFFIXES) + r")\s)"
    r"[A-Z][A-Z0-9]{1,4}(?:-[A-Z0-9]+)?\s+\d+[A-Za-z]?$"
)

# Anything from the first whitespace followed by "(" or a digit
_SUFFIX_PATTERN = re.compile(r"\s+(?:\(|\d)")


def normalize_card_name(raw: str) -> str:
    """
    Reduce a card identifier to its bare card name.

    Examples:
        "Pikachu SVI 54"   -> "Pikachu"
        "Pikachu (SVI) 54" -> "Pikachu"
        "Pikachu 54"       -> "Pikachu"
        "Arceus VSTAR 123" -> "Arceus VSTAR"
        "  Pikachu  "      -> "Pikachu"
    """
    name = _SET_AND_NUMBER_PATTERN.sub("", raw.strip())
    return _SUFFIX_PATTERN.split(name, maxsplit=1)[0].strip()


def _require_complete(guesses: Sequence[str | None]) -> list[str]:
    filled = [guess for guess in guesses if guess and guess.strip()]
    if len(guesses) != PRIZE_COUNT or len(filled) != PRIZE_COUNT:
        raise IncompleteGuessesError(filled=len(filled), required=PRIZE_COUNT)
    return filled


def score_guesses(guesses: Sequence[str | None], prizes: Sequence[str]) -> int:
    """
    Count how many prize cards were guessed.

    Args:
        guesses: The six guess slots; every slot must be filled
        prizes: The six actual prize cards

    Returns:
        Number of correct guesses, 0 to 6

    Raises:
        IncompleteGuessesError: If any guess slot is empty
    """
    filled = _require_complete(guesses)

    prize_counts = Counter(normalize_card_name(prize) for prize in prizes)
    guess_counts = Counter(normalize_card_name(guess) for guess in filled)

    return sum(min(count, guess_counts[name]) for name, count in prize_counts.items())


def guess_breakdown(guesses: Sequence[str | None], prizes: Sequence[str]) -> list[GuessOutcome]:
    """
    Mark each guess slot as correct or not.

    A guess is correct while copies of its card remain unclaimed among the
    prizes, so the number of correct slots always equals score_guesses().
    actual_card is the prize dealt into the same slot.

    Raises:
        IncompleteGuessesError: If any guess slot is empty
    """
    filled = _require_complete(guesses)
    remaining = Counter(normalize_card_name(prize) for prize in prizes)

    outcomes: list[GuessOutcome] = []
    for index, guess in enumerate(filled):
        name = normalize_card_name(guess)
        correct = remaining[name] > 0
        if correct:
            remaining[name] -= 1
        actual = prizes[index] if index < len(prizes) else ""
        outcomes.append(GuessOutcome(guessed_card=guess, actual_card=actual, correct=correct))

    return outcomes


def prize_recall(guesses: Sequence[str], prizes: Sequence[str]) -> list[tuple[str, bool]]:
    """
    Mark each actual prize card as recalled or not.

    Uses the same multiset matching as score_guesses(), seen from the prize side.
    """
    remaining = Counter(normalize_card_name(guess) for guess in guesses if guess)

    recalled: list[tuple[str, bool]] = []
    for prize in prizes:
        name = normalize_card_name(prize)
        hit = remaining[name] > 0
        if hit:
            remaining[name] -= 1
        recalled.append((prize, hit))

    return recalled


def suggest_cards(query: str, unique_card_names: Sequence[str], limit: int | None = None) -> list[str]:
    """Case-insensitive substring match against the deck's card names."""
    needle = query.strip().lower()
    matches = [name for name in unique_card_names if needle in name.lower()]
    return matches[:limit] if limit is not None else matches
