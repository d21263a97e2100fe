from prizecheck.parsers.decklist import (
    DECKLIST_LINE_PATTERN,
    decklist_entries,
    parse,
    parse_decklist,
)

__all__ = [
    "DECKLIST_LINE_PATTERN",
    "decklist_entries",
    "parse",
    "parse_decklist",
]
