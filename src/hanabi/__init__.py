"""Hanabi turn-log engine: replays two-player games and scores them."""

from .models import (
    Belief,
    Card,
    CardKnowledge,
    CardIndexError,
    EmptyDeckError,
    Hand,
    HandSlot,
    StartGameAction,
    PlayAction,
    DropAction,
    TellColorAction,
    TellRankAction,
    TurnAction,
    Command,
    ActionResult,
    TurnLog,
    HanabiState,
    HanabiConfig,
)
from .game import (
    create_game,
    apply_action,
    check_terminal,
    draw_card,
)
from .metrics import GameSummary, summarize_game
from .orchestrator import process_command, run_session
from .parsing import parse_card, parse_command

__all__ = [
    # Models
    "Belief",
    "Card",
    "CardKnowledge",
    "CardIndexError",
    "EmptyDeckError",
    "Hand",
    "HandSlot",
    "StartGameAction",
    "PlayAction",
    "DropAction",
    "TellColorAction",
    "TellRankAction",
    "TurnAction",
    "Command",
    "ActionResult",
    "TurnLog",
    "HanabiState",
    "HanabiConfig",
    # Game
    "create_game",
    "apply_action",
    "check_terminal",
    "draw_card",
    # Session
    "GameSummary",
    "summarize_game",
    "process_command",
    "run_session",
    "parse_card",
    "parse_command",
]
