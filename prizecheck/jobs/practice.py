"""
Terminal practice mode.

Plays prize-guessing rounds against a decklist file without the web
service: shows the opening hand, reads six guesses, prints the score and
the actual prizes, and offers a fresh shuffle.

Usage:
    prizecheck-practice my_deck.txt
"""

import argparse
import logging
import random
import time
from collections.abc import Callable
from pathlib import Path

from prizecheck.models.failure import InvalidDeckSizeError
from prizecheck.parsers.decklist import parse_decklist
from prizecheck.services.dealer import PRIZE_COUNT
from prizecheck.services.play_through import PlayThrough
from prizecheck.services.scoring import suggest_cards

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _read_guesses(play: PlayThrough, ask: InputFn, say: OutputFn) -> None:
    names = play.current_deal.unique_card_names if play.current_deal else ()
    for index in range(PRIZE_COUNT):
        while True:
            guess = ask(f"Prize {index + 1}: ").strip()
            if guess.endswith("?"):
                matches = suggest_cards(guess[:-1], names, limit=10)
                say("  " + (", ".join(matches) if matches else "no matching cards"))
                continue
            if guess:
                play.set_guess(index, guess)
                break
            say("  Please enter a card name (end with ? to search)")


def play_rounds(
    decklist_text: str,
    ask: InputFn | None = None,
    say: OutputFn | None = None,
    rng: random.Random | None = None,
) -> int:
    """
    Run practice rounds until the player declines another.

    Returns:
        Number of rounds completed
    """
    ask = ask or input
    say = say or print

    parsed = parse_decklist(decklist_text)
    for line in parsed.dropped_lines:
        say(f"Skipped line: {line}")

    play = PlayThrough.from_cards(parsed.cards, rng=rng)
    rounds = 0

    while True:
        deal = play.restart() if rounds else play.start()
        started = time.monotonic()

        say("")
        say("Your hand:")
        for card in deal.hand:
            say(f"  {card}")
        say(f"Guess the {PRIZE_COUNT} prize cards (end a guess with ? to search).")

        _read_guesses(play, ask, say)
        result = play.submit(time_spent_ms=int((time.monotonic() - started) * 1000))

        rounds += 1
        say("")
        say(f"Score: {result.correct_count}/{result.total_prizes}")
        say("Prizes were:")
        for card in result.actual_prizes:
            say(f"  {card}")

        again = ask("Play again? [y/N] ").strip().lower()
        if again not in ("y", "yes"):
            return rounds


def main() -> None:
    """CLI entry point for practice mode."""
    parser = argparse.ArgumentParser(description="Practice recalling prize cards")
    parser.add_argument(
        "decklist",
        type=Path,
        help="Path to a decklist text file ('<quantity> <card name>' per line)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the shuffle for repeatable deals",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.decklist.exists():
        print(f"Error: Decklist file not found: {args.decklist}")
        return

    rng = random.Random(args.seed) if args.seed is not None else None
    text = args.decklist.read_text(encoding="utf-8")

    try:
        rounds = play_rounds(text, rng=rng)
    except InvalidDeckSizeError as e:
        print(f"Error: {e.message} ({e.detail})")
        return
    except (EOFError, KeyboardInterrupt):
        print()
        return

    logger.info("Practice finished after %d rounds", rounds)


if __name__ == "__main__":
    main()
