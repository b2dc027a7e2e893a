"""Shared fixtures for WordsLand engine tests."""

import pytest

from wordsland.engine import Board, Coord, GameConfig, WordsLandGame


START_COORD = Coord(5, 5)
TARGET_COORD = Coord(20, 10)


@pytest.fixture
def small_dictionary() -> set:
    """Hand-picked words. No file I/O."""
    return {
        "AT", "AN", "AS", "CS", "IS", "IT", "TA", "TO",
        "CAT", "CATS", "COT", "DOG", "EAT", "SAT", "TEA", "TEN",
        "SCAT", "ACTS", "EATS",
    }


@pytest.fixture
def board() -> Board:
    """24x15 board, start at (5, 5), target far away at (20, 10)."""
    return Board.empty(24, 15, start=START_COORD, target=TARGET_COORD)


@pytest.fixture
def game(board, small_dictionary) -> WordsLandGame:
    """Game on the fixed board with a known hand."""
    game = WordsLandGame.create(GameConfig(seed=7), dictionary=small_dictionary, board=board)
    game.hand.set_letters(list("CATSEOND"))
    return game


@pytest.fixture
def place_word():
    """Place a word's letters from the hand, one cell at a time."""
    def _place(game: WordsLandGame, word: str, start: Coord, direction: str = "H"):
        dr, dc = (0, 1) if direction == "H" else (1, 0)
        results = []
        for i, ch in enumerate(word):
            index = game.hand.letters.index(ch)
            coord = Coord(start[0] + i * dr, start[1] + i * dc)
            results.append(game.place_letter(index, coord))
        return results
    return _place
