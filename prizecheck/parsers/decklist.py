"""
Parser for Pokémon TCG decklist text.

Decklist format, one card per line:
    <quantity> <card name>

Example:
    4 Pikachu SVI 54
    2 Professor's Research SVI 189
    10 Basic Lightning Energy

The card name is kept exactly as written, including any set code and
collector number. Lines that do not match (section headers such as
"Pokémon: 12", comments, stray text) are skipped and reported back.
"""

import re

from prizecheck.models.card import DecklistLine
from prizecheck.models.deck import ParsedDecklist

# Pattern: "4 Pikachu SVI 54"
# Groups: (quantity, card_name)
DECKLIST_LINE_PATTERN = re.compile(r"^(\d+)\s+(.+)$")


def parse_decklist(text: str) -> ParsedDecklist:
    """
    Parse decklist text into an expanded card multiset.

    Args:
        text: Raw decklist text (clipboard paste or stored deck)

    Returns:
        ParsedDecklist with one card entry per physical copy, in line order
        then copy order. Malformed lines are listed in dropped_lines.
    """
    if not text or not text.strip():
        return ParsedDecklist()

    cards: list[str] = []
    lines: list[DecklistLine] = []
    dropped: list[str] = []

    for line in text.split("\n"):
        line = line.strip()

        # Skip empty lines
        if not line:
            continue

        match = DECKLIST_LINE_PATTERN.match(line)
        if match is None:
            dropped.append(line)
            continue

        quantity, name = match.groups()
        count = int(quantity)
        lines.append(DecklistLine(quantity=count, name=name))
        cards.extend([name] * count)

    return ParsedDecklist(cards=tuple(cards), lines=tuple(lines), dropped_lines=tuple(dropped))


def parse(text: str) -> list[str]:
    """Parse decklist text to the flat card multiset only."""
    return list(parse_decklist(text).cards)


def decklist_entries(text: str) -> list[DecklistLine]:
    """Parse decklist text to its well-formed lines (quantity and name)."""
    return list(parse_decklist(text).lines)
