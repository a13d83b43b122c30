"""
Labyrinth Maze Engine

Server-side maze session: one occupant (Icarus) walking through a generated
maze towards a hidden treasure.

- Wall- and bounds-checked single-step movement
- Step counting (only accepted moves count)
- Victory detection on look_around()
"""

import logging
from typing import Optional

from .builder import DEFAULT_CUT_LIMIT, build_maze
from .grid import Coordinate, Direction, Grid, MazeError, OutOfBoundsError, Survey
from .rng import RandomSource

logger = logging.getLogger(__name__)


class WallBlockedError(MazeError):
    """The occupant tried to walk through a wall."""
    pass


class PlacementError(MazeError):
    """Start and treasure cannot share a room."""
    pass


class Victory(Exception):
    """Raised when the occupant stands on the treasure.

    Not an error: it ends the attempt.
    """

    def __init__(self, steps: int):
        super().__init__(f"Victory achieved in {steps} steps")
        self.steps = steps


class MazeSession:
    """
    A single maze being solved.

    Example usage:
        session = create_maze(15, 10, random.Random(7))
        survey = session.look_around()
        session.move(Direction.EAST)
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.start: Optional[Coordinate] = None
        self.treasure: Optional[Coordinate] = None
        self.position: Optional[Coordinate] = None
        self.steps_taken: int = 0

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def set_start_point(self, c: Coordinate) -> None:
        """Set the location where the occupant wakes up."""
        room = self.grid.room(c)
        if room.is_treasure:
            raise PlacementError("Can't start in the treasure")
        room.is_start = True
        self.start = c
        self.position = c

    def set_treasure(self, c: Coordinate) -> None:
        """Set the location of the treasure."""
        room = self.grid.room(c)
        if room.is_start:
            raise PlacementError("Can't have the treasure at the start")
        room.is_treasure = True
        self.treasure = c

    def discover(self, x: int, y: int) -> Survey:
        """Survey the room at (x, y)."""
        return self.grid.room(Coordinate(x, y)).survey

    def look_around(self) -> Survey:
        """
        Survey the occupant's room.

        Raises:
            Victory: If the occupant is standing on the treasure.
        """
        if self.position == self.treasure:
            raise Victory(self.steps_taken)
        return self.discover(self.position.x, self.position.y)

    def move(self, direction: Direction) -> Coordinate:
        """
        Move the occupant one room. Does not check for victory.

        Returns:
            The new position.

        Raises:
            WallBlockedError: If a wall is in the way.
            OutOfBoundsError: If the step leaves the grid.
        """
        if self.grid.room(self.position).has_wall(direction):
            raise WallBlockedError(f"Can't walk through walls ({direction.token})")

        target = self.position.neighbor(direction)
        if not self.grid.contains(target):
            raise OutOfBoundsError(f"Room {tuple(target)} is outside of maze boundaries")

        self.position = target
        self.steps_taken += 1
        return target


def create_maze(
    width: int,
    height: int,
    rng: RandomSource,
    cut_limit: int = DEFAULT_CUT_LIMIT,
    start: Optional[Coordinate] = None,
    treasure: Optional[Coordinate] = None,
) -> MazeSession:
    """
    Create a new perfect maze with a start and a treasure.

    Start and treasure are drawn at random unless given.
    """
    if width * height < 2:
        raise ValueError("A maze needs at least two rooms")

    session = MazeSession(Grid(width, height))
    if start is None:
        start = Coordinate(rng.randrange(width), rng.randrange(height))
    if treasure is None:
        treasure = Coordinate(rng.randrange(width), rng.randrange(height))
        while treasure == start:
            treasure = Coordinate(rng.randrange(width), rng.randrange(height))

    session.set_start_point(start)
    session.set_treasure(treasure)
    build_maze(session.grid, start, treasure, rng, cut_limit)

    logger.info(f"Created {width}x{height} maze")
    logger.debug(f"Start at {tuple(start)}, treasure at {tuple(treasure)}")
    return session
