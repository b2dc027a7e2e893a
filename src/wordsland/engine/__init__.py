"""Game-rules engine for WordsLand."""

from .models import (
    CellState,
    Empty,
    Start,
    Target,
    Obstacle,
    Reward,
    Letter,
    LockedLetter,
    EMPTY,
    START,
    TARGET,
    OBSTACLE,
    Coord,
    TileClass,
    Failure,
    WordCell,
    ExtractedWord,
    RoundState,
    CommandResult,
    GameConfig,
)
from .bag import TileBag, TILE_DISTRIBUTION, TOTAL_TILES
from .board import Board
from .extractor import extract_word
from .validator import validate_placement
from .hand import Hand
from .swap import SwapController
from .game import WordsLandGame

__all__ = [
    # Cell states
    "CellState",
    "Empty",
    "Start",
    "Target",
    "Obstacle",
    "Reward",
    "Letter",
    "LockedLetter",
    "EMPTY",
    "START",
    "TARGET",
    "OBSTACLE",
    # Models
    "Coord",
    "TileClass",
    "Failure",
    "WordCell",
    "ExtractedWord",
    "RoundState",
    "CommandResult",
    "GameConfig",
    # Components
    "TileBag",
    "TILE_DISTRIBUTION",
    "TOTAL_TILES",
    "Board",
    "extract_word",
    "validate_placement",
    "Hand",
    "SwapController",
    "WordsLandGame",
]
