import logging
import random
from collections import Counter
from typing import List, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict

from .models import TileClass, TILE_CLASS_ALPHABETS


log = logging.getLogger("wordsland")


# WordsLand tile distribution (196 tiles total)
TILE_DISTRIBUTION: Dict[str, int] = {
    "A": 18, "B": 4, "C": 4, "D": 8, "E": 24, "F": 4, "G": 6,
    "H": 4, "I": 18, "J": 2, "K": 2, "L": 8, "M": 4, "N": 12,
    "O": 16, "P": 4, "Q": 2, "R": 12, "S": 8, "T": 12, "U": 8,
    "V": 4, "W": 4, "X": 2, "Y": 4, "Z": 2
}

TOTAL_TILES = sum(TILE_DISTRIBUTION.values())  # 196


class TileBag(BaseModel):
    """
    The draw pile of unused letters.

    Tiles are drawn from the front. Any tiles added back (rewards, swaps)
    are appended and the whole bag is reshuffled.

    Attributes:
        tiles: The letters remaining in the bag, in draw order
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tiles: List[str] = Field(default_factory=list)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(
        cls,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        distribution: Optional[Dict[str, int]] = None,
    ) -> "TileBag":
        """
        Factory method to create a full, shuffled tile bag.

        Args:
            seed: Optional random seed, used when no generator is given
            rng: Optional shared random generator (takes precedence over seed)
            distribution: Letter frequency table (defaults to TILE_DISTRIBUTION)

        Returns:
            A new TileBag holding every tile of the distribution
        """
        distribution = distribution or TILE_DISTRIBUTION

        tiles = []
        for letter, count in distribution.items():
            tiles.extend([letter] * count)

        bag = cls(tiles=tiles, seed=seed)
        if rng is not None:
            bag._rng = rng
        bag._rng.shuffle(bag.tiles)

        log.debug("Initialized tile bag with %d tiles", len(bag.tiles))
        return bag

    @property
    def tiles_remaining(self) -> int:
        """Number of tiles remaining in the bag."""
        return len(self.tiles)

    def remaining(self) -> int:
        return len(self.tiles)

    def draw(self, n: int) -> List[str]:
        """
        Draw up to `n` tiles from the front of the bag.

        Never raises: an exhausted bag simply returns fewer tiles,
        so callers should check the length of the result.
        """
        if n <= 0:
            return []

        drawn = self.tiles[:n]
        self.tiles = self.tiles[n:]
        return drawn

    def return_tiles(self, letters: List[str]) -> None:
        """Put letters back in the bag and reshuffle."""
        self.tiles.extend(letter.upper() for letter in letters)
        self._rng.shuffle(self.tiles)

    def add_tiles(self, count: int, tile_class: TileClass) -> List[str]:
        """
        Add freshly generated letters to the bag.

        Args:
            count: How many letters to generate
            tile_class: Alphabet to choose from (VOWELS, CONSONANTS or ANY)

        Returns:
            The generated letters
        """
        alphabet = TILE_CLASS_ALPHABETS[tile_class]
        added = [self._rng.choice(alphabet) for _ in range(max(0, count))]
        if added:
            self.return_tiles(added)
            log.debug("Added %d %s tiles to the bag: %s", len(added), tile_class, "".join(added))
        return added

    def letter_counts(self) -> Dict[str, int]:
        """Get a count of each letter in the bag."""
        return dict(sorted(Counter(self.tiles).items()))

    def get_state(self) -> Dict:
        return {
            "tiles_remaining": self.tiles_remaining,
            "letter_counts": self.letter_counts(),
        }
