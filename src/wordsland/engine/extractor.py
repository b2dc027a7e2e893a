"""Word extraction: expand the uncommitted letters into the full word they form."""

from typing import List, Optional, Tuple

from .board import Board
from .models import (
    Coord,
    ExtractedWord,
    Failure,
    LockedLetter,
    Orientation,
    WordCell,
    is_letter,
    INVALID_PLACEMENT_GEOMETRY,
    NO_LETTERS_PLACED,
)


STEPS = {"H": (0, 1), "V": (1, 0)}


def scan_run(board: Board, origin: Coord, orientation: Orientation) -> List[WordCell]:
    """Get the contiguous run of letters through `origin` along one axis."""
    dr, dc = STEPS[orientation]

    # Walk back to the first letter of the run
    row, col = origin
    while is_letter(board.get(Coord(row - dr, col - dc))):
        row -= dr
        col -= dc

    # Read forward until anything that is not a letter, or the edge
    cells: List[WordCell] = []
    cell = board.get(Coord(row, col))
    while is_letter(cell):
        cells.append(WordCell(
            coord=Coord(row, col),
            char=cell.char,
            locked=isinstance(cell, LockedLetter),
        ))
        row += dr
        col += dc
        cell = board.get(Coord(row, col))

    return cells


def determine_orientation(coords: List[Coord]) -> Optional[Orientation]:
    """H if all coords share a row, V if they share a column, else None."""
    first_row, first_col = coords[0]
    if all(row == first_row for row, _ in coords):
        return "H"
    if all(col == first_col for _, col in coords):
        return "V"
    return None


def extract_word(board: Board) -> Tuple[Optional[ExtractedWord], Optional[Failure]]:
    """
    Extract the word formed by the letters placed this turn.

    Returns a tuple of (extracted word, failure); exactly one is set.
    """
    new_coords = [coord for coord, _ in board.uncommitted()]

    if not new_coords:
        return None, Failure(
            code=NO_LETTERS_PLACED,
            message="Place some letters before entering a word",
        )

    orientation = determine_orientation(new_coords)
    if orientation is None:
        return None, Failure(
            code=INVALID_PLACEMENT_GEOMETRY,
            message="Letters must be in a single straight line",
        )

    origin = new_coords[0]
    cells = scan_run(board, origin, orientation)

    # A lone letter counts as both horizontal and vertical; take whichever
    # axis actually forms a word.
    if len(new_coords) == 1 and len(cells) < 2:
        vertical = scan_run(board, origin, "V")
        if len(vertical) > len(cells):
            orientation, cells = "V", vertical

    covered = {cell.coord for cell in cells}
    stray = [coord for coord in new_coords if coord not in covered]
    if stray:
        return None, Failure(
            code=INVALID_PLACEMENT_GEOMETRY,
            message=f"Letters must form one unbroken word; {tuple(stray[0])} is separated by a gap",
            coord=stray[0],
        )

    return ExtractedWord(
        word="".join(cell.char for cell in cells),
        orientation=orientation,
        cells=cells,
    ), None
