"""
Hand class for the player's rack of letters.

Letters leave the hand by position when placed or swapped, come back when
recalled from the board, and are replenished from the tile bag.
"""

from typing import List, Dict
from pydantic import BaseModel, Field

from .bag import TileBag


class Hand(BaseModel):
    """
    The player's current rack.

    Attributes:
        letters: Letters in rack order
        capacity: How many letters a full hand holds
    """

    letters: List[str] = Field(default_factory=list)
    capacity: int = Field(default=8, ge=1)

    def __len__(self) -> int:
        return len(self.letters)

    @property
    def tiles_in_hand(self) -> int:
        """Number of tiles currently in hand."""
        return len(self.letters)

    @property
    def deficit(self) -> int:
        """How many letters short of a full hand."""
        return max(0, self.capacity - len(self.letters))

    @property
    def hand_summary(self) -> Dict[str, int]:
        """Get a count of each letter in hand."""
        summary: Dict[str, int] = {}
        for tile in self.letters:
            summary[tile] = summary.get(tile, 0) + 1
        return dict(sorted(summary.items()))

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self.letters)

    def take(self, index: int) -> str:
        """Remove and return the letter at `index`."""
        return self.letters.pop(index)

    def add_tiles(self, tiles: List[str]) -> None:
        """
        Add tiles to the end of the hand.

        Args:
            tiles: List of tiles to add
        """
        self.letters.extend([t.upper() for t in tiles])

    def remove_indices(self, indices: List[int]) -> List[str]:
        """
        Remove several positions at once.

        Positions are removed highest first so earlier removals do not shift
        later ones. Returns the removed letters in ascending position order.
        """
        removed = []
        for index in sorted(set(indices), reverse=True):
            removed.append(self.letters.pop(index))
        removed.reverse()
        return removed

    def refill(self, bag: TileBag) -> List[str]:
        """Draw from the bag up to capacity; returns the drawn tiles."""
        drawn = bag.draw(min(self.deficit, bag.tiles_remaining))
        self.add_tiles(drawn)
        return drawn

    def set_letters(self, tiles: List[str]) -> None:
        """
        Replace the hand's contents.

        Args:
            tiles: The new letters
        """
        self.letters = [t.upper() for t in tiles]

    def clear(self) -> None:
        self.letters = []
