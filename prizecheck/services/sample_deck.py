"""
Sample deck for first-time players.

A 60-card Pikachu ex list in Pokémon TCG Live export format, so a new
player can start practicing before pasting a deck of their own. Section
headers and the total line are part of real exports; the parser skips them.
"""

SAMPLE_DECK_NAME = "Pikachu ex (Sample)"

SAMPLE_DECKLIST = """Pokémon: 14
4 Pikachu ex SSP 57
2 Magnemite SSP 58
2 Magneton SSP 59
2 Raichu V BRS 45
2 Iron Hands ex PAR 70
2 Squawkabilly ex PAL 169

Trainer: 32
4 Professor's Research SVI 189
4 Iono PAL 185
3 Boss's Orders PAL 172
4 Ultra Ball SVI 196
4 Nest Ball SVI 181
4 Electric Generator SVI 170
3 Switch SVI 194
2 Superior Energy Retrieval PAL 189
2 Earthen Vessel PAR 163
2 Levincia PAL 259

Energy: 14
14 Basic Lightning Energy SVE 4

Total Cards: 60"""


def get_sample_deck() -> tuple[str, str]:
    """Return (name, decklist text) for the sample deck."""
    return SAMPLE_DECK_NAME, SAMPLE_DECKLIST
