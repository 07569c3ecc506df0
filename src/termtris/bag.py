"""Seven-bag piece randomizer.

Two bags are kept at all times: the one currently being dealt from and the
one that follows it.  The lookahead preview therefore never has to reach
into a bag that has not been generated yet.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .tetromino import TetrominoType

LOGGER = logging.getLogger(__name__)

Bag = Tuple[TetrominoType, ...]

BAG_SIZE = len(TetrominoType)


def new_bag(rng: random.Random) -> Bag:
    """Return all seven kinds in a uniformly random order."""

    bag = list(TetrominoType)
    rng.shuffle(bag)
    return tuple(bag)


class PieceBag:
    """Deal tetromino kinds from a pair of shuffled bags."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self._rng = rng or random.Random(seed)
        self.current: Bag = new_bag(self._rng)
        self.upcoming: Bag = new_bag(self._rng)
        self.index = 0

    def deal(self) -> TetrominoType:
        """Return the next kind, rolling over to the following bag if needed."""

        if self.index >= BAG_SIZE:
            self.current = self.upcoming
            self.upcoming = new_bag(self._rng)
            self.index = 0
            LOGGER.debug("Bag exhausted, next bag: %s", _letters(self.upcoming))
        kind = self.current[self.index]
        self.index += 1
        return kind

    def peek(self, count: int = 5) -> List[TetrominoType]:
        """Return the next ``count`` kinds without consuming them."""

        if not 0 <= count <= BAG_SIZE:
            raise ValueError(f"Cannot preview {count} pieces")
        queue = self.current[self.index :] + self.upcoming
        return list(queue[:count])


def _letters(bag: Bag) -> str:
    return "".join(kind.value for kind in bag)


__all__ = ["Bag", "BAG_SIZE", "PieceBag", "new_bag"]
