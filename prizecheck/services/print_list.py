"""
Printable decklists.

Groups decklist lines into Pokémon, Trainer and Energy sections and renders
them as plain text for printing.

Pokémon TCG Live exports carry section headers ("Pokémon: 14",
"Trainer: 32", "Energy: 14"); when present they decide the section. Lines
before any header fall back to a name-based guess.
"""

import re
from datetime import datetime

from prizecheck.models.card import DecklistLine
from prizecheck.models.deck import PrintableDecklist, PrintSection
from prizecheck.parsers.decklist import DECKLIST_LINE_PATTERN

SECTION_ORDER = ("Pokemon", "Trainer", "Energy")

# Pattern: "Pokémon: 14", "Trainer: 32", "Energy" (count optional)
SECTION_HEADER_PATTERN = re.compile(r"^(pok[eé]mon|trainer|energy)\s*:?\s*\d*$", re.IGNORECASE)


def categorize(card_name: str) -> str:
    """
    Guess a card's category from its name.

    Basic energies start with "Basic "; trainers are only recognized when
    the name says so. Everything else is treated as a Pokémon.
    """
    if card_name.startswith("Basic "):
        return "Energy"
    if "Trainer" in card_name:
        return "Trainer"
    return "Pokemon"


def _header_category(header: str) -> str:
    word = header.lower()
    if word.startswith("pok"):
        return "Pokemon"
    return word.capitalize()


def group_lines(decklist_text: str) -> dict[str, list[DecklistLine]]:
    """Split decklist lines by category, keeping their order within each."""
    grouped: dict[str, list[DecklistLine]] = {category: [] for category in SECTION_ORDER}
    current: str | None = None

    for raw in decklist_text.split("\n"):
        line = raw.strip()
        if not line:
            continue

        header = SECTION_HEADER_PATTERN.match(line)
        if header:
            current = _header_category(header.group(1))
            continue

        match = DECKLIST_LINE_PATTERN.match(line)
        if match is None:
            continue

        quantity, name = match.groups()
        category = current or categorize(name)
        grouped[category].append(DecklistLine(quantity=int(quantity), name=name))

    return grouped


def build_printable(
    name: str, decklist_text: str, created_at: datetime | None = None
) -> PrintableDecklist:
    """Lay out a stored decklist for printing. Empty sections are omitted."""
    sections = [
        PrintSection(category=category, lines=lines)
        for category, lines in group_lines(decklist_text).items()
        if lines
    ]
    return PrintableDecklist(name=name, created_at=created_at, sections=sections)


def render_text(printable: PrintableDecklist) -> str:
    """Render a printable decklist as plain text."""
    out: list[str] = [printable.name, ""]

    for section in printable.sections:
        out.append(f"{section.category} ({section.total()})")
        out.extend(f"{line.quantity} {line.name}" for line in section.lines)
        out.append("")

    if printable.created_at is not None:
        out.append(f"Created: {printable.created_at.date().isoformat()}")
    out.append(f"Total: {printable.total_cards()} cards")

    return "\n".join(out)
