from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DecklistLine:
    """
    A single well-formed decklist line.

    Attributes:
        quantity: Number of copies
        name: Card identifier exactly as written (may include set code and number)
    """

    quantity: int
    name: str


@dataclass(frozen=True, slots=True)
class CardImage:
    """Image metadata for a card from the Pokémon TCG API."""

    id: str
    name: str
    small: str
    large: str
