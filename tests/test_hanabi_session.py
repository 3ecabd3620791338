"""Tests for replaying whole turn logs."""

from __future__ import annotations

import io
import time
from pathlib import Path

from src.hanabi.metrics import GameSummary, summarize_game
from src.hanabi.models import PlayAction, StartGameAction
from src.hanabi.orchestrator import process_command, run_session
from src.hanabi.parsing import parse_deck

from scripts.score_hanabi_log import main


START = "Start new game with deck R1 G1 B1 W1 Y1 R2 G2 B2 W2 Y2 R3 G3 B3"


def summary_lines(lines: list[str]) -> list[str]:
    return [summary.to_line() for summary in run_session(lines)]


class TestRunSession:
    """End-to-end replay of turn logs."""

    def test_game_in_progress_prints_nothing(self):
        assert summary_lines([START, "Play card 0", "Play card 0"]) == []

    def test_deck_exhaustion_reports_counters(self):
        """Three blind plays empty the deck."""
        lines = [START, "Play card 0", "Play card 0", "Play card 0"]

        assert summary_lines(lines) == ["Turn: 3, cards: 3, with risk: 3"]

    def test_bust_reports_counters(self):
        """An unplayable card ends the game; the bust turn is counted."""
        lines = [START, "Drop card 0", "Play card 0"]

        summaries = list(run_session(lines))

        assert [s.to_line() for s in summaries] == ["Turn: 2, cards: 0, with risk: 0"]
        assert summaries[0].game_over_reason == "illegal_play"

    def test_invalid_hint_ends_game(self):
        lines = [START, "Tell rank 2 for cards 0 1"]

        assert summary_lines(lines) == ["Turn: 1, cards: 0, with risk: 0"]

    def test_informed_play_is_not_risky(self):
        lines = [
            "Start new game with deck R2 G2 B2 W2 Y2 G1 B1 W1 Y1 R1 R3 G3",
            "Tell rank 1 for cards 0 1 2 3 4",
            "Play card 0",
            "Drop card 0",
        ]

        assert summary_lines(lines) == ["Turn: 3, cards: 1, with risk: 0"]

    def test_commands_without_game_are_ignored(self):
        lines = ["Play card 0", "Tell color Red for cards 0", START, "Drop card 0", "Drop card 0", "Drop card 0"]

        assert summary_lines(lines) == ["Turn: 3, cards: 0, with risk: 0"]

    def test_garbage_and_bad_indexes_are_skipped(self):
        """Unparseable lines and out-of-range positions leave the game as it was."""
        lines = [
            START,
            "what is this",
            "Play card 9",
            "Tell color Red for cards 0 8",
            "Drop card 0",
            "Drop card 0",
            "Drop card 0",
        ]

        assert summary_lines(lines) == ["Turn: 3, cards: 0, with risk: 0"]

    def test_several_games_in_one_log(self):
        lines = [START, "Drop card 0", "Play card 0", "Play card 0", START, "Tell rank 3 for cards 0"]

        assert summary_lines(lines) == [
            "Turn: 2, cards: 0, with risk: 0",
            "Turn: 1, cards: 0, with risk: 0",
        ]

    def test_start_replaces_running_game(self):
        lines = [START, "Play card 0", START, "Drop card 0", "Drop card 0", "Drop card 0"]

        assert summary_lines(lines) == ["Turn: 3, cards: 0, with risk: 0"]

    def test_repeated_hint_position_keeps_game_going(self):
        lines = [START, "Tell color Red for cards 0 0", "Drop card 0", "Drop card 0", "Drop card 0"]

        assert summary_lines(lines) == ["Turn: 4, cards: 0, with risk: 0"]

    def test_long_deck_replays_in_linear_time(self):
        """A few thousand drops finish quickly and keep exact counters."""
        n = 3000
        lines = ["Start new game with deck " + " ".join(["R2"] * n)]
        lines += ["Drop card 0"] * (n - 10)

        started = time.perf_counter()
        result = summary_lines(lines)
        elapsed = time.perf_counter() - started

        assert result == [f"Turn: {n - 10}, cards: 0, with risk: 0"]
        assert elapsed < 5.0

    def test_emits_events(self):
        events: list[tuple[str, dict]] = []

        list(run_session([START, "Drop card 0", "Play card 0"], emit_fn=lambda t, p: events.append((t, p))))

        assert [t for t, _ in events] == ["init", "turn", "turn", "done"]
        assert events[0][1]["hands"]["player_1"] == ["R1", "G1", "B1", "W1", "Y1"]
        assert events[1][1]["player_id"] == "player_1"
        assert events[2][1]["result"]["legal"] is False
        assert events[3][1]["turns"] == 2


class TestProcessCommand:
    """Tests for single command dispatch."""

    def test_start_creates_game(self):
        game = process_command(None, StartGameAction(cards=parse_deck("R1 G1 B1 W1 Y1 R2 G2 B2 W2 Y2 R3")))

        assert game is not None
        assert game.deck_size == 1

    def test_turn_without_game_is_ignored(self):
        assert process_command(None, PlayAction(card_position=0)) is None

    def test_summary_from_state(self):
        game = process_command(None, StartGameAction(cards=parse_deck("R1 G1 B1 W1 Y1 R2 G2 B2 W2 Y2 R3")))
        game = process_command(game, PlayAction(card_position=0))

        assert game.game_over
        assert summarize_game(game) == GameSummary(
            turns=1, cards=1, risky_turns=1, game_over_reason="deck_empty"
        )


class TestScript:
    """Tests for the command-line entry point."""

    def test_reads_stdin(self):
        stdin = io.StringIO("\n".join([START, "Drop card 0", "Play card 0"]) + "\n")
        stdout = io.StringIO()

        assert main([], stdin=stdin, stdout=stdout) == 0
        assert stdout.getvalue() == "Turn: 2, cards: 0, with risk: 0\n"

    def test_reads_file(self, tmp_path: Path):
        log = tmp_path / "games.txt"
        log.write_text("\n".join([START, "Play card 0", "Play card 0", "Play card 0"]) + "\n")
        stdout = io.StringIO()

        main([str(log)], stdout=stdout)

        assert stdout.getvalue() == "Turn: 3, cards: 3, with risk: 3\n"
