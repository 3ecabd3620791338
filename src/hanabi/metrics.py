"""Statistics reported when a Hanabi game ends."""

from __future__ import annotations

from pydantic import BaseModel

from .game import check_terminal
from .models import HanabiState


class GameSummary(BaseModel):
    """The three published statistics of a finished game."""

    turns: int
    cards: int
    risky_turns: int
    game_over_reason: str | None = None

    def to_line(self) -> str:
        return f"Turn: {self.turns}, cards: {self.cards}, with risk: {self.risky_turns}"


def summarize_game(state: HanabiState) -> GameSummary:
    """Collect the end-of-game counters from a game state."""
    _, reason = check_terminal(state)
    return GameSummary(
        turns=state.turn_count,
        cards=state.cards_played,
        risky_turns=state.risky_turns,
        game_over_reason=reason,
    )
