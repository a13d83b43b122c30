"""Random source shared by the maze builder and the explorer."""

import random
from typing import MutableSequence, Optional, Protocol


class RandomSource(Protocol):
    """The subset of random.Random the labyrinth relies on.

    Tests can pass any object with these two methods to script exact choices.
    """

    def randrange(self, stop: int) -> int: ...

    def shuffle(self, x: MutableSequence) -> None: ...


def create_random(seed: Optional[int] = None) -> random.Random:
    """Create the process random source, seeded once."""
    return random.Random(seed)
