"""Parsing of turn-log command lines."""

from __future__ import annotations

import re

from pydantic import ValidationError

from .models import (
    Card,
    Color,
    Command,
    DropAction,
    PlayAction,
    StartGameAction,
    TellColorAction,
    TellRankAction,
)

# Card letters used in deck descriptions
COLOR_BY_LETTER: dict[str, Color] = {
    "R": "red",
    "G": "green",
    "B": "blue",
    "W": "white",
    "Y": "yellow",
}

# Color names used in hints
COLOR_BY_NAME: dict[str, Color] = {
    "Red": "red",
    "Green": "green",
    "Blue": "blue",
    "White": "white",
    "Yellow": "yellow",
}

MIN_START_CARDS = 11

_CARD = r"[RGBWY][1-5]"
_INDEXES = r"[0-9]+(?: [0-9]+)*"

# Each rule owns a distinct leading phrase, so at most one can match a line.
START_RE = re.compile(rf"Start new game with deck (?P<deck>{_CARD}(?: {_CARD}){{{MIN_START_CARDS - 1},}})")
PLAY_RE = re.compile(r"Play card (?P<index>[0-9]+)")
DROP_RE = re.compile(r"Drop card (?P<index>[0-9]+)")
TELL_COLOR_RE = re.compile(
    rf"Tell color (?P<color>{'|'.join(COLOR_BY_NAME)}) for cards (?P<indexes>{_INDEXES})"
)
TELL_RANK_RE = re.compile(rf"Tell rank (?P<rank>[1-5]) for cards (?P<indexes>{_INDEXES})")


def parse_card(text: str) -> Card | None:
    """
    Parse a two-character card such as "R3".

    Returns None for anything that is not a color letter followed by a
    rank digit.
    """
    if len(text) != 2 or text[0] not in COLOR_BY_LETTER or text[1] not in "12345":
        return None
    return Card(color=COLOR_BY_LETTER[text[0]], rank=int(text[1]))  # type: ignore[arg-type]


def parse_deck(text: str) -> list[Card] | None:
    """Parse space-separated cards; None if any of them is malformed."""
    cards: list[Card] = []
    for token in text.split():
        card = parse_card(token)
        if card is None:
            return None
        cards.append(card)
    return cards


def _parse_indexes(text: str) -> list[int]:
    return [int(token) for token in text.split()]


def parse_command(line: str) -> Command | None:
    """
    Parse one line of a turn log.

    Recognized forms:
        Start new game with deck R1 G1 B1 ...
        Play card 0
        Drop card 4
        Tell color Red for cards 0 2
        Tell rank 3 for cards 1

    Returns:
        A typed command, or None if the line is not a command
    """
    text = line.strip()

    try:
        if text.startswith("Start "):
            match = START_RE.fullmatch(text)
            if match:
                cards = parse_deck(match.group("deck"))
                return StartGameAction(cards=cards) if cards is not None else None

        elif text.startswith("Play "):
            match = PLAY_RE.fullmatch(text)
            if match:
                return PlayAction(card_position=int(match.group("index")))

        elif text.startswith("Drop "):
            match = DROP_RE.fullmatch(text)
            if match:
                return DropAction(card_position=int(match.group("index")))

        elif text.startswith("Tell color "):
            match = TELL_COLOR_RE.fullmatch(text)
            if match:
                return TellColorAction(
                    color=COLOR_BY_NAME[match.group("color")],
                    card_positions=_parse_indexes(match.group("indexes")),
                )

        elif text.startswith("Tell rank "):
            match = TELL_RANK_RE.fullmatch(text)
            if match:
                return TellRankAction(
                    rank=int(match.group("rank")),  # type: ignore[arg-type]
                    card_positions=_parse_indexes(match.group("indexes")),
                )
    except ValidationError:
        return None

    return None
