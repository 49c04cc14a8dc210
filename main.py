"""
Puzzle AI - Entry Point

Analyses a single puzzle snapshot and prints the result as JSON.

Example:
    python main.py snapshot.json
    python main.py --rows 3 --cols 3 --slots 3,0,1,6,4,2,7,8,5 --moves 14
    python main.py snapshot.json --strategy cycle --debug
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from puzzle_ai.engine import (
    InvalidPuzzleError,
    PuzzleAnalyzer,
    PuzzleSnapshot,
    get_strategy_info,
    get_strategy_names,
)
from puzzle_ai.settings import SETTINGS_FILE, load_settings


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Configure console logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler()]
    )


def load_snapshot(args: argparse.Namespace) -> PuzzleSnapshot:
    """
    Build the snapshot from a JSON file or from --slots.

    Raises:
        InvalidPuzzleError: If the input is malformed
    """
    if args.snapshot:
        try:
            with open(args.snapshot, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise InvalidPuzzleError(f"Cannot read snapshot {args.snapshot}: {e}") from e
        if not isinstance(data, dict):
            raise InvalidPuzzleError(
                f"Snapshot {args.snapshot} must be a JSON object, got {type(data).__name__}"
            )

        moves = args.moves if args.moves is not None else data.get("moves", 0)
        return PuzzleSnapshot.from_dicts(
            data.get("pieces", []),
            rows=data.get("rows"),
            cols=data.get("cols"),
            moves=moves,
        )

    if not args.slots:
        raise InvalidPuzzleError("Provide a snapshot file or --slots")
    try:
        slots = [int(s) for s in args.slots.split(",")]
    except ValueError as e:
        raise InvalidPuzzleError(f"--slots must be comma-separated integers: {e}") from e
    if args.rows is None or args.cols is None:
        raise InvalidPuzzleError("--slots requires --rows and --cols")
    return PuzzleSnapshot.from_slots(slots, rows=args.rows, cols=args.cols,
                                     moves=args.moves or 0)


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Puzzle AI - Difficulty, stuck level and hints for a puzzle snapshot"
    )
    parser.add_argument(
        "snapshot",
        nargs="?",
        help="JSON file with rows, cols, moves and pieces"
    )
    parser.add_argument(
        "--slots",
        help="Comma-separated goal slot of the piece in each slot (row-major)"
    )
    parser.add_argument("--rows", type=int, help="Grid rows")
    parser.add_argument("--cols", type=int, help="Grid columns")
    parser.add_argument("--moves", type=int, help="Moves made so far")
    parser.add_argument(
        "--strategy", "-s",
        choices=get_strategy_names(),
        help="Search strategy (default: from settings)"
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=SETTINGS_FILE,
        help=f"Settings file (default: {SETTINGS_FILE})"
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List available search strategies and exit"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Analyse one snapshot and print the result."""
    args = parse_args(argv)

    if args.list_strategies:
        for info in get_strategy_info():
            print(f"{info['name']:10} {info['description']}")
        return 0

    settings = load_settings(args.settings)
    configure_logging(args.debug or settings.get("debug_enabled", False))

    if args.strategy:
        settings["strategy_name"] = args.strategy

    try:
        snapshot = load_snapshot(args)
    except InvalidPuzzleError as e:
        logger.error(f"Invalid puzzle: {e}")
        return 2

    analyzer = PuzzleAnalyzer.from_settings(settings)
    result = analyzer.analyze(snapshot)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
