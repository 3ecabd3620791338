#!/usr/bin/env python3
"""Replay Hanabi turn logs and print a summary line for every finished game."""

import argparse
import logging
import os
import sys
from dotenv import load_dotenv
from pathlib import Path

load_dotenv(Path(__file__).parent.parent / ".env")

from src.hanabi import run_session


def configure_logging(verbose: bool) -> None:
    """Send logs to stderr so stdout only carries summaries."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )
    else:
        level = os.environ.get("HANABI_LOG_LEVEL", "WARNING").upper()
        logging.basicConfig(level=getattr(logging, level, logging.WARNING), stream=sys.stderr)


def main(argv: list[str] | None = None, stdin=None, stdout=None) -> int:
    parser = argparse.ArgumentParser(description="Score Hanabi turn logs")
    parser.add_argument("input", nargs="?", help="Turn log file (default: stdin)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if stdout is None:
        stdout = sys.stdout

    if args.input:
        with open(args.input) as f:
            for summary in run_session(f):
                print(summary.to_line(), file=stdout, flush=True)
    else:
        for summary in run_session(stdin if stdin is not None else sys.stdin):
            print(summary.to_line(), file=stdout, flush=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
