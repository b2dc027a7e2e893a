"""
Main entry point for playing WordsLand in a terminal.

Usage:
    python -m wordsland.main
    python -m wordsland.main config.yaml --dictionary words.txt --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import yaml

from .commands import HELP_TEXT, execute, format_result, parse_command
from .dictionary import load_dictionary
from .engine import GameConfig, WordsLandGame
from .utils.board_visualizer import render_board, render_hand


def load_config(config_path: Optional[str]) -> GameConfig:
    """Load game configuration from a YAML file (defaults when no path is given)."""
    if config_path is None:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def print_status(game: WordsLandGame, out: TextIO) -> None:
    state = game.get_state()
    print(render_board(game.board), file=out)
    print(file=out)
    print(f"Round {state['round_number']}  |  Bag: {state['tiles_remaining']} tiles", file=out)
    selected = set(game.swap_selection()) if game.is_swap_mode_active() else None
    print(f"Hand: {render_hand(game.hand_letters(), selected)}", file=out)


def play(game: WordsLandGame, stdin: TextIO = sys.stdin, out: TextIO = sys.stdout) -> int:
    """Read commands line by line until quit or end of input."""
    print_status(game, out)

    for line in stdin:
        command, errors = parse_command(line)
        if errors:
            print(errors[0].message, file=out)
            continue

        if command.verb == "quit":
            break
        if command.verb == "help":
            print(HELP_TEXT, file=out)
            continue
        if command.verb == "show":
            print_status(game, out)
            continue

        result = execute(game, command)
        print(format_result(result), file=out)
        if result.ok and command.verb in ("commit", "confirm", "new"):
            print_status(game, out)

    return game.round_number()


def main():
    parser = argparse.ArgumentParser(
        description="Play WordsLand in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  rows: 24
  columns: 15
  hand_size: 8
  obstacle_count: 10
  reward_count: 4
  seed: 42
  dictionary_path: words.txt
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--dictionary", "-d",
        help="Path to a word list, one word per line (overrides the config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible game (overrides the config)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine activity to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("wordsland")

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})
    dictionary_path = args.dictionary or config.dictionary_path

    try:
        game = WordsLandGame.create(config=config)
    except ValueError as e:
        print(f"Error creating game: {e}", file=sys.stderr)
        sys.exit(1)

    if dictionary_path:
        try:
            game.set_dictionary(load_dictionary(dictionary_path))
        except FileNotFoundError as e:
            print(f"Error loading dictionary: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        log.warning("No dictionary given; every word will be rejected.")

    print(HELP_TEXT)
    print()

    try:
        rounds = play(game)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        rounds = game.round_number()

    print()
    print("=== Game Summary ===")
    print(f"Reached round: {rounds}")
    print(f"Tiles left in bag: {game.tile_bag_remaining()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
