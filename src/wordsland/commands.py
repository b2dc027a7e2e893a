"""Terminal command parsing and dispatch."""

import re
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field

from .engine import Coord, Failure, WordsLandGame, CommandResult


Verb = Literal[
    "place", "move", "recall", "recall_all", "commit", "swap",
    "select", "confirm", "new", "show", "help", "quit",
]

HELP_TEXT = """Commands:
  place I R C      -- put hand tile I on row R, column C
  move R C R C     -- move an uncommitted letter
  recall [R C]     -- return one letter (or all letters) to the hand
  commit           -- enter the word
  swap             -- start selecting tiles to swap
  select I         -- toggle hand tile I for the swap
  confirm          -- swap the selected tiles
  new              -- start a new round
  show             -- print the board and hand
  help             -- this text
  quit             -- leave the game"""


class Command(BaseModel):
    """A parsed terminal command."""
    verb: Verb
    args: List[int] = Field(default_factory=list)


PATTERNS: List[Tuple[str, str]] = [
    (r'^place\s+(\d+)\s+(\d+)\s+(\d+)$', "place"),
    (r'^move\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)$', "move"),
    (r'^recall\s+(\d+)\s+(\d+)$', "recall"),
    (r'^recall$', "recall_all"),
    (r'^(?:commit|enter)$', "commit"),
    (r'^swap$', "swap"),
    (r'^select\s+(\d+)$', "select"),
    (r'^confirm$', "confirm"),
    (r'^new$', "new"),
    (r'^show$', "show"),
    (r'^(?:help|\?)$', "help"),
    (r'^(?:quit|exit|q)$', "quit"),
]


def parse_command(line: str) -> Tuple[Optional[Command], List[Failure]]:
    """
    Parse one line of input into a Command with error collection.

    Returns a tuple of (command, errors).
    """
    text = " ".join(line.strip().split())
    errors: List[Failure] = []

    if not text:
        errors.append(Failure(
            code="EMPTY_COMMAND",
            message="Type a command (or 'help')",
        ))
        return None, errors

    for pattern, verb in PATTERNS:
        match = re.match(pattern, text, re.IGNORECASE)
        if match:
            return Command(verb=verb, args=[int(g) for g in match.groups()]), errors

    errors.append(Failure(
        code="INVALID_COMMAND",
        message=f"Invalid command: '{text}'",
    ))
    return None, errors


def execute(game: WordsLandGame, command: Command) -> Optional[CommandResult]:
    """
    Run a game command against the engine.

    Returns None for commands that do not touch the engine (show, help, quit).
    """
    args = command.args
    if command.verb == "place":
        return game.place_letter(args[0], Coord(args[1], args[2]))
    if command.verb == "move":
        return game.move_letter(Coord(args[0], args[1]), Coord(args[2], args[3]))
    if command.verb == "recall":
        return game.recall_letter(Coord(args[0], args[1]))
    if command.verb == "recall_all":
        return game.recall_all()
    if command.verb == "commit":
        return game.commit_word()
    if command.verb == "swap":
        return game.enter_swap_mode()
    if command.verb == "select":
        return game.toggle_swap_selection(args[0])
    if command.verb == "confirm":
        return game.confirm_swap()
    if command.verb == "new":
        return game.start_new_round()
    return None


def format_result(result: CommandResult) -> str:
    """User-facing message for a command result."""
    if not result.ok:
        return result.failure.message

    if result.command == "commit":
        message = f"'{result.word}' is a valid word!"
        if result.rewards_applied:
            bonus = sum(r.count for r in result.rewards_applied)
            message += f" Reward: {bonus} bonus tiles added to the bag."
        if result.round_won:
            message += f" Target reached! Round {result.round_number} begins."
        return message
    if result.command == "recall_all":
        return "Tiles returned."
    if result.command == "swap":
        return "Swap mode: select tiles, then confirm."
    if result.command == "confirm":
        if result.drawn:
            return f"Swapped for: {' '.join(result.drawn)}"
        return "Swap cancelled."
    if result.command == "new_round":
        return f"Round {result.round_number} begins."
    return "OK"
