"""
PrizeCheck services.

Business logic for dealing, scoring, analytics and card lookups.
"""

from prizecheck.services.analytics import (
    accuracy_timeline,
    guessed_card_success_rates,
    prize_recall_rates,
    rank_players,
    summarize,
)
from prizecheck.services.card_images import CardImageLookup, get_card_image_lookup
from prizecheck.services.dealer import (
    DECK_SIZE,
    HAND_SIZE,
    PRIZE_COUNT,
    deal,
    parse_and_deal,
    shuffle,
)
from prizecheck.services.play_through import PlayThrough
from prizecheck.services.print_list import build_printable, categorize, group_lines, render_text
from prizecheck.services.sample_deck import get_sample_deck
from prizecheck.services.scoring import (
    guess_breakdown,
    normalize_card_name,
    prize_recall,
    score_guesses,
    suggest_cards,
)

__all__ = [
    "DECK_SIZE",
    "HAND_SIZE",
    "PRIZE_COUNT",
    "CardImageLookup",
    "PlayThrough",
    "accuracy_timeline",
    "build_printable",
    "categorize",
    "deal",
    "get_card_image_lookup",
    "get_sample_deck",
    "group_lines",
    "guess_breakdown",
    "guessed_card_success_rates",
    "normalize_card_name",
    "parse_and_deal",
    "prize_recall",
    "prize_recall_rates",
    "rank_players",
    "render_text",
    "score_guesses",
    "shuffle",
    "suggest_cards",
    "summarize",
]
