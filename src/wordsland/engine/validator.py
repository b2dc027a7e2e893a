"""
Placement validation for extracted words.

Validates, in this order:
1. Length (words must be at least 2 letters)
2. Opening move (the first word of a round must cover the start cell)
3. Connectivity (later words must use or touch a locked letter)
4. Dictionary membership

Every rule is checked and failures are collected in the order above, so the
first entry is always the most fundamental problem.
"""

from typing import AbstractSet, List, Optional

from .board import Board
from .models import (
    ExtractedWord,
    Failure,
    LockedLetter,
    RoundState,
    DISCONNECTED_PLACEMENT,
    MUST_COVER_START,
    WORD_NOT_IN_DICTIONARY,
    WORD_TOO_SHORT,
)


MIN_WORD_LENGTH = 2


def validate_length(extracted: ExtractedWord) -> Optional[Failure]:
    if len(extracted.word) < MIN_WORD_LENGTH:
        return Failure(
            code=WORD_TOO_SHORT,
            message=f"Words must be at least {MIN_WORD_LENGTH} letters long",
            word=extracted.word,
        )
    return None


def validate_opening(extracted: ExtractedWord, round_state: RoundState) -> Optional[Failure]:
    """The first word of a round has to cover the start cell."""
    if round_state.start not in extracted.coords:
        return Failure(
            code=MUST_COVER_START,
            message="The first word must cover the Start (S) tile",
            coord=round_state.start,
            word=extracted.word,
        )
    return None


def is_adjacent_to_locked(extracted: ExtractedWord, board: Board) -> bool:
    """True if any newly placed cell touches a locked letter orthogonally."""
    return any(
        isinstance(board.get(neighbor), LockedLetter)
        for coord in extracted.new_coords
        for neighbor in board.neighbors(coord)
    )


def validate_connection(extracted: ExtractedWord, board: Board) -> Optional[Failure]:
    """Later words must include a locked letter or sit next to one."""
    if extracted.locked_count > 0 or is_adjacent_to_locked(extracted, board):
        return None
    return Failure(
        code=DISCONNECTED_PLACEMENT,
        message="New words must connect to an existing letter",
        word=extracted.word,
    )


def validate_dictionary(extracted: ExtractedWord, dictionary: AbstractSet[str]) -> Optional[Failure]:
    # An empty or not-yet-loaded dictionary rejects everything
    if extracted.word.upper() not in dictionary:
        return Failure(
            code=WORD_NOT_IN_DICTIONARY,
            message=f"'{extracted.word}' is not a valid word",
            word=extracted.word,
        )
    return None


def validate_placement(
    extracted: ExtractedWord,
    board: Board,
    round_state: RoundState,
    dictionary: AbstractSet[str],
) -> List[Failure]:
    """
    Main validation function: checks an extracted word against every rule.

    Returns:
        List of failures in rule order; empty if the word may be committed
    """
    if round_state.first_word_played:
        placement = validate_connection(extracted, board)
    else:
        placement = validate_opening(extracted, round_state)

    checks = [
        validate_length(extracted),
        placement,
        validate_dictionary(extracted, dictionary),
    ]
    return [failure for failure in checks if failure is not None]
