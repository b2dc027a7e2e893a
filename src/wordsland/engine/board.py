"""Game board: a fixed grid of cell states plus covered-cell bookkeeping."""

import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

from .models import (
    CellState,
    Coord,
    Failure,
    Letter,
    LockedLetter,
    Reward,
    EMPTY,
    START,
    TARGET,
    OBSTACLE,
    TILE_CLASS_ALPHABETS,
    CELL_OCCUPIED_ILLEGALLY,
    COORD_OUT_OF_BOUNDS,
    is_placeable,
)


log = logging.getLogger("wordsland")

ORTHOGONAL: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Board:
    """
    Fixed-size grid of cell states.

    Besides the grid itself the board owns the `covered` map: for every
    uncommitted Letter it records what the cell held before the letter was
    dropped on it, so Start/Target/Reward cells survive a recall.
    """

    def __init__(self, rows: int, columns: int, start: Coord, target: Coord) -> None:
        self.rows = rows
        self.columns = columns
        self.cells: List[List[CellState]] = [[EMPTY] * columns for _ in range(rows)]
        self.covered: Dict[Coord, CellState] = {}

        self.start = Coord(*start)
        self.target = Coord(*target)
        if self.start == self.target:
            raise ValueError(f"Start and target must differ, both are {self.start}")
        for coord in (self.start, self.target):
            if not self.in_bounds(coord):
                raise ValueError(f"{coord} is outside a {rows}x{columns} board")

        self._set(self.start, START)
        self._set(self.target, TARGET)

    @classmethod
    def empty(cls, rows: int, columns: int, start: Coord, target: Coord) -> "Board":
        """A board with only the start and target cells marked."""
        return cls(rows, columns, start, target)

    @classmethod
    def generate(
        cls,
        rows: int,
        columns: int,
        rng: random.Random,
        obstacle_count: int = 10,
        reward_count: int = 4,
        reward_min: int = 1,
        reward_max: int = 3,
    ) -> "Board":
        """
        Build a random round layout.

        All coordinates are shuffled; start, target, the obstacles and then
        the rewards are taken from the front so none of them overlap.

        Raises:
            ValueError: If the grid cannot hold every special cell
        """
        needed = 2 + obstacle_count + reward_count
        if rows * columns < needed:
            raise ValueError(
                f"Grid is too small ({rows}x{columns}) to place start, target, "
                f"{obstacle_count} obstacles and {reward_count} rewards"
            )

        available = [Coord(r, c) for r in range(rows) for c in range(columns)]
        rng.shuffle(available)

        board = cls(rows, columns, available.pop(0), available.pop(0))

        for _ in range(obstacle_count):
            board._set(available.pop(0), OBSTACLE)

        tile_classes = sorted(TILE_CLASS_ALPHABETS)
        for _ in range(reward_count):
            reward = Reward(
                count=rng.randint(reward_min, max(reward_min, reward_max)),
                tile_class=rng.choice(tile_classes),
            )
            board._set(available.pop(0), reward)

        log.debug(
            "Generated %dx%d board: start=%s target=%s",
            rows, columns, board.start, board.target,
        )
        return board

    def in_bounds(self, coord: Coord) -> bool:
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.columns

    def get(self, coord: Coord) -> Optional[CellState]:
        """Cell state at `coord`, or None outside the grid."""
        if not self.in_bounds(coord):
            return None
        return self.cells[coord[0]][coord[1]]

    def _set(self, coord: Coord, state: CellState) -> None:
        self.cells[coord[0]][coord[1]] = state

    def set_cell(self, coord: Coord, state: CellState) -> None:
        """Overwrite a cell directly. Intended for building fixed layouts."""
        if not self.in_bounds(coord):
            raise ValueError(f"{coord} is outside a {self.rows}x{self.columns} board")
        self._set(Coord(*coord), state)

    def neighbors(self, coord: Coord) -> List[Coord]:
        """Orthogonal in-bounds neighbours of a cell."""
        row, col = coord
        candidates = (Coord(row + dr, col + dc) for dr, dc in ORTHOGONAL)
        return [c for c in candidates if self.in_bounds(c)]

    def place(self, coord: Coord, letter: str) -> Optional[Failure]:
        """
        Drop an uncommitted letter on a cell.

        Returns:
            None on success, otherwise the Failure describing why not
        """
        coord = Coord(*coord)
        if not self.in_bounds(coord):
            return Failure(
                code=COORD_OUT_OF_BOUNDS,
                message=f"{tuple(coord)} is outside the {self.rows}x{self.columns} board",
                coord=coord,
            )

        existing = self.get(coord)
        if not is_placeable(existing):
            return Failure(
                code=CELL_OCCUPIED_ILLEGALLY,
                message=f"Cannot place a letter on {existing.kind} cell {tuple(coord)}",
                coord=coord,
            )

        self.covered.setdefault(coord, existing)
        self._set(coord, Letter(char=letter.upper()))
        return None

    def uncover(self, coord: Coord) -> Optional[str]:
        """
        Lift an uncommitted letter and restore what it covered.

        Returns:
            The lifted letter, or None if the cell held no uncommitted letter
        """
        coord = Coord(*coord)
        cell = self.get(coord)
        if not isinstance(cell, Letter):
            return None

        self._set(coord, self.covered.pop(coord, EMPTY))
        return cell.char

    def commit(self, coords: List[Coord]) -> Dict[Coord, CellState]:
        """
        Lock the letters at `coords`.

        The covered entries are dropped since a locked letter replaces them
        for good; they are returned so the caller can act on rewards.
        """
        underneath: Dict[Coord, CellState] = {}
        for coord in coords:
            coord = Coord(*coord)
            cell = self.get(coord)
            if not isinstance(cell, Letter):
                continue
            self._set(coord, LockedLetter(char=cell.char))
            underneath[coord] = self.covered.pop(coord, EMPTY)
        return underneath

    def cells_of_kind(
        self, predicate: Callable[[CellState], bool]
    ) -> List[Tuple[Coord, CellState]]:
        """All (coord, cell) pairs matching `predicate`, in row-major order."""
        return [
            (Coord(r, c), self.cells[r][c])
            for r in range(self.rows)
            for c in range(self.columns)
            if predicate(self.cells[r][c])
        ]

    def uncommitted(self) -> List[Tuple[Coord, Letter]]:
        return self.cells_of_kind(lambda cell: isinstance(cell, Letter))

    def letter_count(self) -> int:
        """Letters on the board, locked or not."""
        return len(self.cells_of_kind(lambda cell: isinstance(cell, (Letter, LockedLetter))))

    def snapshot(self) -> Dict[Coord, CellState]:
        """Coordinate -> cell state for the whole grid."""
        return {
            Coord(r, c): self.cells[r][c]
            for r in range(self.rows)
            for c in range(self.columns)
        }

    def __str__(self) -> str:
        from ..utils.board_visualizer import render_board

        return render_board(self)
