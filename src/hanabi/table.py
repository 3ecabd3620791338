"""Table tracking: the highest rank played so far for each color."""

from __future__ import annotations

from .models import Card, Color, COLORS, MAX_RANK, MAX_SCORE


def new_table() -> dict[Color, int]:
    """An empty table (0 for each color)."""
    return {color: 0 for color in COLORS}


def is_playable(card: Card, played_cards: dict[Color, int]) -> bool:
    """Check if a card can be legally played.

    Only the next rank of its color fits; duplicates never do.
    """
    return card.rank == played_cards[card.color] + 1


def place_card(card: Card, played_cards: dict[Color, int]) -> None:
    """Put a playable card on the table."""
    if not is_playable(card, played_cards):
        raise ValueError(
            f"{card} cannot be placed (table has {played_cards[card.color]} for {card.color})"
        )
    played_cards[card.color] += 1


def table_score(played_cards: dict[Color, int]) -> int:
    return sum(played_cards.values())


def table_is_full(played_cards: dict[Color, int]) -> bool:
    """True once every color has reached the top rank."""
    return table_score(played_cards) >= MAX_SCORE


def playable_next(played_cards: dict[Color, int]) -> dict[Color, int]:
    """Get the next playable rank for each unfinished color."""
    return {color: played + 1 for color, played in played_cards.items() if played < MAX_RANK}
