"""Data models for the Hanabi turn-log engine."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Card colors and ranks
Color = Literal["red", "green", "blue", "white", "yellow"]
Rank = Literal[1, 2, 3, 4, 5]
Dimension = Literal["color", "rank"]

COLORS: list[Color] = ["red", "green", "blue", "white", "yellow"]
RANKS: list[Rank] = [1, 2, 3, 4, 5]

MAX_RANK = 5
MAX_SCORE = len(COLORS) * MAX_RANK


class EmptyDeckError(RuntimeError):
    """Raised when a card is drawn from an empty deck."""


class CardIndexError(IndexError):
    """Raised when a hand position does not exist."""


class Belief(str, Enum):
    """What a player believes about one value of one of their cards."""
    UNKNOWN = "UNKNOWN"
    CONFIRMED_TRUE = "CONFIRMED_TRUE"
    CONFIRMED_FALSE = "CONFIRMED_FALSE"


class Card(BaseModel):
    """A Hanabi card with color and rank."""

    model_config = ConfigDict(frozen=True)

    color: Color
    rank: Rank

    def __str__(self) -> str:
        return f"{self.color[0].upper()}{self.rank}"


def _unknown_colors() -> dict[Color, Belief]:
    return {color: Belief.UNKNOWN for color in COLORS}


def _unknown_ranks() -> dict[Rank, Belief]:
    return {rank: Belief.UNKNOWN for rank in RANKS}


class CardKnowledge(BaseModel):
    """What a player knows about one of their own cards from hints received.

    Every color and every rank has an entry at all times. A dimension is
    known once one of its values is CONFIRMED_TRUE.
    """

    colors: dict[Color, Belief] = Field(default_factory=_unknown_colors)
    ranks: dict[Rank, Belief] = Field(default_factory=_unknown_ranks)

    def beliefs(self, dimension: Dimension) -> dict[Any, Belief]:
        return self.colors if dimension == "color" else self.ranks

    def confirm(self, dimension: Dimension, value: Any) -> None:
        """Mark `value` as the card's value and rule out every other one."""
        beliefs = self.beliefs(dimension)
        for key in beliefs:
            beliefs[key] = Belief.CONFIRMED_TRUE if key == value else Belief.CONFIRMED_FALSE

    def exclude(self, dimension: Dimension, value: Any) -> None:
        self.beliefs(dimension)[value] = Belief.CONFIRMED_FALSE

    def knows(self, dimension: Dimension) -> bool:
        return any(b == Belief.CONFIRMED_TRUE for b in self.beliefs(dimension).values())

    @property
    def knows_color(self) -> bool:
        return self.knows("color")

    @property
    def knows_rank(self) -> bool:
        return self.knows("rank")

    def unknown_values(self, dimension: Dimension) -> list[Any]:
        """Values of a dimension neither confirmed nor ruled out."""
        return [key for key, b in self.beliefs(dimension).items() if b == Belief.UNKNOWN]


class HandSlot(BaseModel):
    """One position in a hand: the card and its owner's knowledge of it."""

    card: Card
    knowledge: CardKnowledge = Field(default_factory=CardKnowledge)


class Hand(BaseModel):
    """A player's cards, ordered by position.

    Cards and knowledge live in the same slot, so removing a card shifts
    the knowledge of every later position along with it.
    """

    slots: list[HandSlot] = Field(default_factory=list)

    @classmethod
    def from_cards(cls, cards: list[Card]) -> "Hand":
        return cls(slots=[HandSlot(card=card) for card in cards])

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def cards(self) -> list[Card]:
        return [slot.card for slot in self.slots]

    def _slot(self, position: int) -> HandSlot:
        if position < 0 or position >= len(self.slots):
            raise CardIndexError(
                f"Invalid card position: {position} (hand has {len(self.slots)} cards)"
            )
        return self.slots[position]

    def card_at(self, position: int) -> Card:
        return self._slot(position).card

    def knowledge_at(self, position: int) -> CardKnowledge:
        return self._slot(position).knowledge

    def pop(self, position: int) -> Card:
        """Remove a card (and its knowledge) and close the gap."""
        self._slot(position)
        return self.slots.pop(position).card

    def add(self, card: Card) -> None:
        """Append a freshly drawn card the owner knows nothing about."""
        self.slots.append(HandSlot(card=card))

    def positions_matching(self, dimension: Dimension, value: Any) -> list[int]:
        return [
            i for i, slot in enumerate(self.slots)
            if getattr(slot.card, dimension) == value
        ]

    def record_hint(self, dimension: Dimension, value: Any, positions: set[int]) -> None:
        """Apply a hint to the owner's knowledge.

        Indicated cards get `value` confirmed; every other card has `value`
        ruled out, since a hint always points at all matching cards.
        """
        for i, slot in enumerate(self.slots):
            if i in positions:
                slot.knowledge.confirm(dimension, value)
            else:
                slot.knowledge.exclude(dimension, value)


# Actions

class StartGameAction(BaseModel):
    """Start a new game with an explicit deck order."""

    action_type: Literal["start"] = "start"
    cards: list[Card]


class PlayAction(BaseModel):
    """Play a card from hand by position (0-indexed)."""

    action_type: Literal["play"] = "play"
    card_position: int = Field(ge=0)


class DropAction(BaseModel):
    """Drop a card from hand by position (0-indexed)."""

    action_type: Literal["drop"] = "drop"
    card_position: int = Field(ge=0)


class TellColorAction(BaseModel):
    """Tell the other player which of their cards have a color."""

    action_type: Literal["tell_color"] = "tell_color"
    color: Color
    card_positions: list[int] = Field(min_length=1)

    @field_validator("card_positions")
    @classmethod
    def _non_negative(cls, value: list[int]) -> list[int]:
        if any(p < 0 for p in value):
            raise ValueError("card positions must be non-negative")
        return value


class TellRankAction(BaseModel):
    """Tell the other player which of their cards have a rank."""

    action_type: Literal["tell_rank"] = "tell_rank"
    rank: Rank
    card_positions: list[int] = Field(min_length=1)

    @field_validator("card_positions")
    @classmethod
    def _non_negative(cls, value: list[int]) -> list[int]:
        if any(p < 0 for p in value):
            raise ValueError("card positions must be non-negative")
        return value


TurnAction = PlayAction | DropAction | TellColorAction | TellRankAction
Command = StartGameAction | TurnAction


class ActionResult(BaseModel):
    """Result of applying an action."""

    legal: bool
    message: str
    card_played: Card | None = None  # For play actions
    card_dropped: Card | None = None  # For drop actions
    risky: bool | None = None  # For successful plays
    positions_touched: list[int] | None = None  # For valid hints


class TurnLog(BaseModel):
    """Log of a single turn."""

    turn_number: int
    player_id: str
    action: TurnAction
    result: ActionResult

    # State snapshot after action
    score_after: int
    deck_size_after: int


class HanabiConfig(BaseModel):
    """Configuration for a Hanabi game."""

    player_ids: list[str] = Field(default_factory=lambda: ["player_1", "player_2"])
    hand_size: int = Field(default=5, ge=1)
    min_deck_size: int = Field(default=1, ge=1)  # cards left in deck after dealing

    @field_validator("player_ids")
    @classmethod
    def _two_players(cls, value: list[str]) -> list[str]:
        if len(value) != 2 or len(set(value)) != 2:
            raise ValueError("Hanabi turn logs are played by exactly two distinct players")
        return value

    @property
    def min_cards(self) -> int:
        """Smallest deck a Start command may name."""
        return len(self.player_ids) * self.hand_size + self.min_deck_size


class HanabiState(BaseModel):
    """The current state of a Hanabi game."""

    config: HanabiConfig

    # Hands: player_id -> cards plus what the owner knows about them
    hands: dict[str, Hand]

    # Table: color -> highest successfully played rank (0 if none)
    played_cards: dict[Color, int]

    # Remaining deck, drawn from the front
    deck: deque[Card]

    # Turn tracking
    current_player_idx: int = 0
    player_order: list[str]

    # Counters reported when the game ends
    turn_count: int = 0
    cards_played: int = 0
    risky_turns: int = 0

    # Set by an illegal play or an invalid hint
    busted: bool = False
    bust_reason: str | None = None

    @property
    def current_player(self) -> str:
        return self.player_order[self.current_player_idx]

    @property
    def other_player(self) -> str:
        return self.player_order[1 - self.current_player_idx]

    @property
    def score(self) -> int:
        """Sum of the highest played rank per color."""
        return sum(self.played_cards.values())

    @property
    def deck_size(self) -> int:
        return len(self.deck)

    @property
    def game_over(self) -> bool:
        return self.busted or self.score >= MAX_SCORE or not self.deck
