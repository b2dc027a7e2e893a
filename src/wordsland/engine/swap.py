"""Swap mode: exchange selected hand tiles for fresh ones from the bag."""

import logging
from typing import List, Optional, Set
from pydantic import BaseModel, Field

from .bag import TileBag
from .hand import Hand
from .models import Failure, INDEX_OUT_OF_RANGE, SWAP_MODE_INACTIVE


log = logging.getLogger("wordsland")


class SwapController(BaseModel):
    """
    Tracks swap mode and the hand positions selected for exchange.

    Attributes:
        active: Whether swap mode is on
        selected: Hand positions picked for the swap
    """

    active: bool = False
    selected: Set[int] = Field(default_factory=set)

    def enter(self) -> None:
        """Turn swap mode on with an empty selection."""
        self.active = True
        self.selected = set()

    def toggle(self, index: int, hand_size: int) -> Optional[Failure]:
        """
        Select or deselect a hand position.

        Returns:
            None on success, otherwise the Failure
        """
        if not self.active:
            return Failure(
                code=SWAP_MODE_INACTIVE,
                message="Enter swap mode before selecting tiles",
            )

        if not 0 <= index < hand_size:
            return Failure(
                code=INDEX_OUT_OF_RANGE,
                message=f"Hand index {index} out of range (hand has {hand_size} tiles)",
            )

        if index in self.selected:
            self.selected.discard(index)
        else:
            self.selected.add(index)
        return None

    def confirm(self, hand: Hand, bag: TileBag) -> List[str]:
        """
        Execute the swap: return the selected letters, draw replacements.

        Swap mode ends and the selection is cleared even when nothing was
        selected.

        Returns:
            The replacement tiles drawn into the hand
        """
        indices = [i for i in self.selected if hand.is_valid_index(i)]
        self.active = False
        self.selected = set()

        if not indices:
            return []

        returned = hand.remove_indices(indices)
        bag.return_tiles(returned)

        drawn = bag.draw(min(len(returned), bag.tiles_remaining))
        hand.add_tiles(drawn)

        log.debug("Swapped %s for %s", "".join(returned), "".join(drawn))
        return drawn
