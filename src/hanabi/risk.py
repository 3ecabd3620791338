"""Risk assessment for plays.

A play is risky when it succeeded although the acting player, going only
by what hints told them about the card, could not rule out that it was
unplayable. The table is the one before the play is applied.
"""

from __future__ import annotations

from itertools import product

from .models import Card, CardKnowledge, Color
from .table import is_playable


def could_fail(colors: list[Color], ranks: list[int], played_cards: dict[Color, int]) -> bool:
    """Whether any (color, rank) combination would have been unplayable."""
    return any(
        not is_playable(Card(color=color, rank=rank), played_cards)
        for color, rank in product(colors, ranks)
    )


def is_risky_play(knowledge: CardKnowledge, card: Card, played_cards: dict[Color, int]) -> bool:
    """
    Decide whether playing `card` was a gamble for its owner.

    Args:
        knowledge: The acting player's knowledge of the card
        card: The card actually played
        played_cards: The table before the play

    Returns:
        True if the player could not have been sure the play was safe
    """
    if knowledge.knows_color and knowledge.knows_rank:
        return False

    if knowledge.knows_color:
        return len(knowledge.unknown_values("rank")) > 1

    if knowledge.knows_rank:
        return could_fail(knowledge.unknown_values("color"), [card.rank], played_cards)

    return could_fail(
        knowledge.unknown_values("color"),
        knowledge.unknown_values("rank"),
        played_cards,
    )
