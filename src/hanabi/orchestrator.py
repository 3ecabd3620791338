"""Orchestrator for replaying Hanabi turn logs."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

from .game import apply_action, create_game
from .metrics import GameSummary, summarize_game
from .models import (
    CardIndexError,
    Command,
    HanabiConfig,
    HanabiState,
    StartGameAction,
)
from .parsing import parse_command
from .table import playable_next

logger = logging.getLogger(__name__)

EmitFn = Callable[[str, dict[str, Any]], None]


def process_command(
    game: HanabiState | None,
    command: Command,
    config: HanabiConfig | None = None,
    emit_fn: EmitFn | None = None,
) -> HanabiState | None:
    """
    Apply one parsed command to the current game.

    Args:
        game: The game in progress, if any
        command: Parsed command
        config: Configuration for newly started games
        emit_fn: Optional callback for emitting events

    Returns:
        The game to continue with. A Start command always replaces the
        current game; other commands are ignored without a live game.
    """
    if isinstance(command, StartGameAction):
        new_game = create_game(command.cards, config)
        logger.info(
            "Started new game: %s | %s, %d cards in deck",
            " ".join(str(c) for c in new_game.hands[new_game.player_order[0]].cards),
            " ".join(str(c) for c in new_game.hands[new_game.player_order[1]].cards),
            new_game.deck_size,
        )
        if emit_fn is not None:
            emit_fn("init", {
                "player_order": list(new_game.player_order),
                "hands": {
                    pid: [str(c) for c in hand.cards]
                    for pid, hand in new_game.hands.items()
                },
                "deck_remaining": new_game.deck_size,
            })
        return new_game

    if game is None or game.game_over:
        logger.debug("No game in progress, ignoring %s", command.action_type)
        return game

    new_game, result, turn_log = apply_action(game, command)

    if emit_fn is not None:
        emit_fn("turn", {
            **turn_log.model_dump(mode="json"),
            "played_cards": dict(new_game.played_cards),
            "playable_next": playable_next(new_game.played_cards),
            "cards_played": new_game.cards_played,
            "risky_turns": new_game.risky_turns,
            "current_player": new_game.current_player,
        })

    return new_game


def run_session(
    lines: Iterable[str],
    config: HanabiConfig | None = None,
    emit_fn: EmitFn | None = None,
) -> Iterator[GameSummary]:
    """
    Replay a turn log, yielding a summary each time a game ends.

    Lines that are not commands are skipped. A command the engine rejects
    (for example a card position outside the hand) is logged and skipped,
    leaving the current game as it was.
    """
    game: HanabiState | None = None

    for line_number, line in enumerate(lines, 1):
        command = parse_command(line)
        if command is None:
            if line.strip():
                logger.debug("Line %d ignored: %r", line_number, line.rstrip("\n"))
            continue

        try:
            game = process_command(game, command, config, emit_fn)
        except (CardIndexError, ValueError) as e:
            logger.warning(f"Line {line_number} rejected: {e}")
            continue

        if game is not None and game.game_over:
            summary = summarize_game(game)
            logger.info(
                "Game over (%s) after %d turns: %d cards, %d risky",
                summary.game_over_reason, summary.turns, summary.cards, summary.risky_turns,
            )
            if emit_fn is not None:
                emit_fn("done", summary.model_dump())
            yield summary
            game = None
