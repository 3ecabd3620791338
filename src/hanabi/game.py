"""Core game logic for Hanabi turn logs."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from .models import (
    ActionResult,
    Card,
    CardIndexError,
    Dimension,
    DropAction,
    EmptyDeckError,
    Hand,
    HanabiConfig,
    HanabiState,
    PlayAction,
    TellColorAction,
    TellRankAction,
    TurnAction,
    TurnLog,
)
from .risk import is_risky_play
from .table import is_playable, new_table, place_card, table_is_full

logger = logging.getLogger(__name__)


def create_game(cards: list[Card], config: HanabiConfig | None = None) -> HanabiState:
    """
    Create a new Hanabi game from an explicit deck order.

    Args:
        cards: The whole deck, in order. The first `hand_size` cards go to
            the first player, the next `hand_size` to the second player and
            the rest stay in the deck.
        config: Game configuration

    Returns:
        Initial game state with dealt hands
    """
    config = config or HanabiConfig()

    if len(cards) < config.min_cards:
        raise ValueError(f"Expected at least {config.min_cards} cards, got {len(cards)}")

    hands: dict[str, Hand] = {}
    for i, pid in enumerate(config.player_ids):
        start = i * config.hand_size
        hands[pid] = Hand.from_cards(list(cards[start:start + config.hand_size]))

    dealt = len(config.player_ids) * config.hand_size

    return HanabiState(
        config=config,
        hands=hands,
        played_cards=new_table(),
        deck=deque(cards[dealt:]),
        current_player_idx=0,
        player_order=list(config.player_ids),
    )


def draw_card(state: HanabiState, player_id: str) -> Card:
    """Move the front card of the deck into a player's hand."""
    if not state.deck:
        raise EmptyDeckError("Cannot draw from an empty deck")

    card = state.deck.popleft()
    state.hands[player_id].add(card)
    return card


def validate_hint(
    hand: Hand,
    dimension: Dimension,
    value: Any,
    positions: set[int],
) -> tuple[bool, str | None]:
    """
    Validate a hint against the hand it is about.

    Returns:
        (is_valid, error_message)
    """
    for position in sorted(positions):
        card = hand.card_at(position)
        if getattr(card, dimension) != value:
            return False, f"Card at position {position} ({card}) does not have {dimension} {value}"

    matching = set(hand.positions_matching(dimension, value))
    if matching != positions:
        missing = sorted(matching - positions)
        return False, f"Hint is incomplete: positions {missing} also have {dimension} {value}"

    return True, None


def apply_play(state: HanabiState, player_id: str, action: PlayAction) -> ActionResult:
    """Apply a play action in place."""
    hand = state.hands[player_id]
    card = hand.card_at(action.card_position)

    if not is_playable(card, state.played_cards):
        state.busted = True
        state.bust_reason = "illegal_play"
        logger.debug("%s played unplayable %s (table %s)", player_id, card, state.played_cards)
        return ActionResult(
            legal=False,
            message=f"Played {card} but it was not playable (needed {state.played_cards[card.color] + 1})",
            card_played=card,
        )

    # Risk is judged on the player's knowledge and the table before the play
    risky = is_risky_play(hand.knowledge_at(action.card_position), card, state.played_cards)

    state.cards_played += 1
    if risky:
        state.risky_turns += 1

    hand.pop(action.card_position)
    place_card(card, state.played_cards)
    draw_card(state, player_id)

    return ActionResult(
        legal=True,
        message=f"Played {card} successfully" + (" (risky)" if risky else ""),
        card_played=card,
        risky=risky,
    )


def apply_drop(state: HanabiState, player_id: str, action: DropAction) -> ActionResult:
    """Apply a drop action in place."""
    hand = state.hands[player_id]
    card = hand.pop(action.card_position)
    draw_card(state, player_id)

    return ActionResult(
        legal=True,
        message=f"Dropped {card}",
        card_dropped=card,
    )


def apply_hint(
    state: HanabiState,
    target_player: str,
    dimension: Dimension,
    value: Any,
    card_positions: list[int],
) -> ActionResult:
    """Apply a color or rank hint about `target_player`'s hand in place."""
    hand = state.hands[target_player]
    # Repeated positions collapse: "0 0" names the same card once
    positions = set(card_positions)

    # Out-of-range positions are an error, not a bad hint
    for position in positions:
        hand.card_at(position)

    is_valid, error = validate_hint(hand, dimension, value, positions)
    if not is_valid:
        state.busted = True
        state.bust_reason = "invalid_hint"
        logger.debug("Invalid hint for %s: %s", target_player, error)
        return ActionResult(legal=False, message=error or "Invalid hint")

    hand.record_hint(dimension, value, positions)

    return ActionResult(
        legal=True,
        message=f"Told {target_player} {dimension}={value} for positions {sorted(positions)}",
        positions_touched=sorted(positions),
    )


def apply_action(
    state: HanabiState,
    action: TurnAction,
) -> tuple[HanabiState, ActionResult, TurnLog]:
    """
    Apply the current player's action to the game state.

    The state is updated in place and returned. Card positions are checked
    before anything changes, so a CardIndexError leaves the game as it was.

    Returns:
        (state, result, turn_log)
    """
    if state.game_over:
        raise ValueError("Game is already over")

    player_id = state.current_player

    if isinstance(action, PlayAction):
        result = apply_play(state, player_id, action)
    elif isinstance(action, DropAction):
        result = apply_drop(state, player_id, action)
    elif isinstance(action, TellColorAction):
        result = apply_hint(state, state.other_player, "color", action.color, action.card_positions)
    elif isinstance(action, TellRankAction):
        result = apply_hint(state, state.other_player, "rank", action.rank, action.card_positions)
    else:
        raise TypeError(f"Unknown action type: {type(action)}")

    # Every processed action passes the turn, legal or not
    state.current_player_idx = 1 - state.current_player_idx
    state.turn_count += 1

    turn_log = TurnLog(
        turn_number=state.turn_count,
        player_id=player_id,
        action=action,
        result=result,
        score_after=state.score,
        deck_size_after=state.deck_size,
    )
    return state, result, turn_log


def check_terminal(state: HanabiState) -> tuple[bool, str | None]:
    """
    Check if the game has ended.

    Returns:
        (is_game_over, reason)
        Reasons: "illegal_play", "invalid_hint", "perfect_score", "deck_empty", None (not over)
    """
    if state.busted:
        return True, state.bust_reason

    if table_is_full(state.played_cards):
        return True, "perfect_score"

    if not state.deck:
        return True, "deck_empty"

    return False, None
