"""
Pydantic models for the game-rules engine.

This module contains the value types (cell states, coordinates, failures,
command results) and the game configuration. The stateful classes
(TileBag, Board, Hand, SwapController, WordsLandGame) live in their own files.
"""

from typing import Annotated, List, Optional, Literal, NamedTuple, Union
from pydantic import BaseModel, Field, ConfigDict


# Type aliases
TileClass = Literal["VOWELS", "CONSONANTS", "ANY"]
Orientation = Literal["H", "V"]

VOWELS = "AEIOU"
CONSONANTS = "BCDFGHJKLMNPQRSTVWXYZ"
TILE_CLASS_ALPHABETS = {
    "VOWELS": VOWELS,
    "CONSONANTS": CONSONANTS,
    "ANY": VOWELS + CONSONANTS,
}

# Failure codes
NO_LETTERS_PLACED = "NO_LETTERS_PLACED"
INVALID_PLACEMENT_GEOMETRY = "INVALID_PLACEMENT_GEOMETRY"
WORD_TOO_SHORT = "WORD_TOO_SHORT"
MUST_COVER_START = "MUST_COVER_START"
DISCONNECTED_PLACEMENT = "DISCONNECTED_PLACEMENT"
WORD_NOT_IN_DICTIONARY = "WORD_NOT_IN_DICTIONARY"
CELL_OCCUPIED_ILLEGALLY = "CELL_OCCUPIED_ILLEGALLY"
INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
COORD_OUT_OF_BOUNDS = "COORD_OUT_OF_BOUNDS"
NO_LETTER_AT_CELL = "NO_LETTER_AT_CELL"
SWAP_MODE_INACTIVE = "SWAP_MODE_INACTIVE"


class Coord(NamedTuple):
    """A cell position on the board."""
    row: int
    col: int


class _Cell(BaseModel):
    model_config = ConfigDict(frozen=True)


class Empty(_Cell):
    kind: Literal["empty"] = "empty"


class Start(_Cell):
    kind: Literal["start"] = "start"


class Target(_Cell):
    kind: Literal["target"] = "target"


class Obstacle(_Cell):
    kind: Literal["obstacle"] = "obstacle"


class Reward(_Cell):
    """Bonus cell: locking a letter on it adds `count` tiles of `tile_class` to the bag."""
    kind: Literal["reward"] = "reward"
    count: int = Field(..., ge=1)
    tile_class: TileClass = "ANY"


class Letter(_Cell):
    """A letter placed this turn, not yet validated."""
    kind: Literal["letter"] = "letter"
    char: str = Field(..., pattern=r'^[A-Z]$')


class LockedLetter(_Cell):
    """A letter whose word passed validation. Permanent."""
    kind: Literal["locked"] = "locked"
    char: str = Field(..., pattern=r'^[A-Z]$')


CellState = Annotated[
    Union[Empty, Start, Target, Obstacle, Reward, Letter, LockedLetter],
    Field(discriminator="kind"),
]

EMPTY = Empty()
START = Start()
TARGET = Target()
OBSTACLE = Obstacle()


def is_letter(cell: CellState) -> bool:
    """True for both uncommitted and locked letters."""
    return isinstance(cell, (Letter, LockedLetter))


def is_placeable(cell: CellState) -> bool:
    """True if a new letter may be dropped on the cell."""
    return not isinstance(cell, (Obstacle, Letter, LockedLetter))


class Failure(BaseModel):
    """A single rule failure reported back to the caller."""
    code: str
    message: str
    coord: Optional[Coord] = None
    word: Optional[str] = None


class WordCell(BaseModel):
    """One letter of an extracted word."""
    coord: Coord
    char: str
    locked: bool = False


class ExtractedWord(BaseModel):
    """The full contiguous word formed by the uncommitted letters."""
    word: str
    orientation: Orientation
    cells: List[WordCell] = Field(default_factory=list)

    @property
    def locked_count(self) -> int:
        """Cells that were already locked before this turn."""
        return sum(1 for cell in self.cells if cell.locked)

    @property
    def new_count(self) -> int:
        """Cells placed this turn."""
        return sum(1 for cell in self.cells if not cell.locked)

    @property
    def coords(self) -> List[Coord]:
        return [cell.coord for cell in self.cells]

    @property
    def new_coords(self) -> List[Coord]:
        return [cell.coord for cell in self.cells if not cell.locked]


class RoundState(BaseModel):
    """Progress of the active round."""
    round_number: int = Field(default=1, ge=1)
    first_word_played: bool = False
    start: Optional[Coord] = None
    target: Optional[Coord] = None


class CommandResult(BaseModel):
    """Outcome of a single engine command."""
    ok: bool
    command: str
    failures: List[Failure] = Field(default_factory=list)
    word: Optional[str] = None
    round_won: bool = False
    round_number: int = 1
    drawn: List[str] = Field(default_factory=list)
    rewards_applied: List[Reward] = Field(default_factory=list)

    @property
    def failure(self) -> Optional[Failure]:
        """The primary failure, if any."""
        return self.failures[0] if self.failures else None


class GameConfig(BaseModel):
    """Configuration for a game session."""
    rows: int = Field(default=24, ge=2)
    columns: int = Field(default=15, ge=2)
    hand_size: int = Field(default=8, ge=1)
    obstacle_count: int = Field(default=10, ge=0)
    reward_count: int = Field(default=4, ge=0)
    reward_min: int = Field(default=1, ge=1)
    reward_max: int = Field(default=3, ge=1)
    seed: Optional[int] = None
    dictionary_path: Optional[str] = None
