"""Text rendering of the board and hand."""

from typing import Dict, List, Optional, Set, Tuple

from ..engine.board import Board
from ..engine.models import CellState, Letter, LockedLetter, Reward


SYMBOLS: Dict[str, str] = {
    "empty": ".",
    "start": "S",
    "target": "T",
    "obstacle": "#",
    "reward": "+",
}


def cell_symbol(cell: CellState) -> str:
    """
    Single-character symbol for a cell.

    Locked letters are uppercase, uncommitted letters lowercase.
    """
    if isinstance(cell, LockedLetter):
        return cell.char
    if isinstance(cell, Letter):
        return cell.char.lower()
    return SYMBOLS[cell.kind]


def render_board(board: Board, coordinates: bool = True) -> str:
    """Render the board to a string, optionally with row/column headers."""
    rows = [
        " ".join(cell_symbol(cell) for cell in row)
        for row in board.cells
    ]

    if not coordinates:
        return "\n".join(rows)

    header = "    " + " ".join(str(c % 10) for c in range(board.columns))
    lines = [header]
    for r, row in enumerate(rows):
        lines.append(f"{r:>2}  {row}")
    return "\n".join(lines)


def render_hand(letters: List[str], selected: Optional[Set[int]] = None) -> str:
    """
    Render the hand with positions, marking swap selections with '*'.

    Example: "0:C 1:A* 2:T"
    """
    selected = selected or set()
    return " ".join(
        f"{i}:{letter}{'*' if i in selected else ''}"
        for i, letter in enumerate(letters)
    )


def describe_rewards(board: Board) -> List[Tuple[Tuple[int, int], Reward]]:
    """Reward cells still visible on the board."""
    return [
        (tuple(coord), cell)
        for coord, cell in board.cells_of_kind(lambda cell: isinstance(cell, Reward))
    ]
