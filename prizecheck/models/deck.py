from dataclasses import dataclass, field
from datetime import datetime

from prizecheck.models.card import DecklistLine


@dataclass(frozen=True)
class ParsedDecklist:
    """
    Result of parsing raw decklist text.

    Attributes:
        cards: Expanded multiset, one entry per physical copy, in line order
        lines: Well-formed lines in the order they appeared
        dropped_lines: Non-blank lines that did not match the line grammar
    """

    cards: tuple[str, ...] = ()
    lines: tuple[DecklistLine, ...] = ()
    dropped_lines: tuple[str, ...] = ()

    def total_cards(self) -> int:
        """Total number of physical cards."""
        return len(self.cards)

    def unique_cards(self) -> int:
        """Number of distinct card identifiers."""
        return len(set(self.cards))


@dataclass
class PrintSection:
    """A group of decklist lines sharing a card category."""

    category: str  # Pokemon, Trainer, Energy
    lines: list[DecklistLine] = field(default_factory=list)

    def total(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass
class PrintableDecklist:
    """A decklist laid out for printing."""

    name: str
    created_at: datetime | None
    sections: list[PrintSection] = field(default_factory=list)

    def total_cards(self) -> int:
        """Total cards across all sections."""
        return sum(section.total() for section in self.sections)
