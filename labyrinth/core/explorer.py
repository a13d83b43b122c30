"""
Labyrinth Explorer

Blind depth-first maze solver. Only the walls of the occupied room are
visible; every room ever surveyed is remembered so it is never entered twice
going forward. When the top of the active path has no unexplored opening the
explorer walks back to the nearest branch point along known passages.

Coordinates are relative to where the explorer woke up, which is (0, 0).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .backtrack import BacktrackError, ExplorationError, plan_return_route
from .grid import ALL_DIRECTIONS, Coordinate, Direction, Survey
from .rng import RandomSource

logger = logging.getLogger(__name__)

ORIGIN = Coordinate(0, 0)


class MoveStatus(Enum):
    """Outcome of a move request."""
    OK = "ok"
    REJECTED = "rejected"
    VICTORY = "victory"


@dataclass
class MoveOutcome:
    """Result of a move request as seen by the solver."""
    status: MoveStatus
    survey: Survey
    message: Optional[str] = None
    steps: Optional[int] = None

    @property
    def is_victory(self) -> bool:
        return self.status == MoveStatus.VICTORY


class MazeConnection(Protocol):
    """What the explorer needs from a maze server."""

    def awake(self) -> Survey: ...

    def move(self, direction: Direction) -> MoveOutcome: ...


@dataclass
class SolveResult:
    """Summary of one solve attempt."""
    steps: int
    moves: int
    backtracks: int
    explored: int


class ActivePath:
    """Stack of coordinates from the origin to the explorer's position.

    Backtracking drops several entries at once with truncate().
    """

    def __init__(self):
        self.coordinates: list[Coordinate] = []

    def push(self, c: Coordinate) -> None:
        self.coordinates.append(c)

    def top(self) -> Coordinate:
        if not self.coordinates:
            raise ExplorationError("There's no top coordinate in an empty path")
        return self.coordinates[-1]

    def truncate(self, index: int) -> None:
        """Keep entries up to and including index."""
        del self.coordinates[index + 1:]

    def __len__(self) -> int:
        return len(self.coordinates)

    def __getitem__(self, index: int) -> Coordinate:
        return self.coordinates[index]


class Explorer:
    """
    Solves one maze through a MazeConnection.

    Example usage:
        explorer = Explorer(LocalMazeClient(service), random.Random(3))
        result = explorer.solve()
        print(result.steps)
    """

    def __init__(self, connection: MazeConnection, rng: RandomSource):
        self.connection = connection
        self.rng = rng
        self.explored: dict[Coordinate, Survey] = {}
        self.path = ActivePath()
        self.position = ORIGIN
        self.moves = 0
        self.backtracks = 0

    def pick_neighbor(self, c: Coordinate) -> Optional[tuple[Coordinate, Direction]]:
        """Pick a random open, unexplored neighbor of an explored room."""
        survey = self.explored[c]
        directions = list(ALL_DIRECTIONS)
        self.rng.shuffle(directions)
        for direction in directions:
            if survey.has_wall(direction):
                continue
            nb = c.neighbor(direction)
            if nb not in self.explored:
                return nb, direction
        return None

    def find_branch_point(self) -> int:
        """
        Find the nearest room below the path top with an unexplored opening.

        Returns:
            Its index in the active path.

        Raises:
            BacktrackError: If every room on the path is exhausted.
        """
        for i in range(len(self.path) - 2, -1, -1):
            if self._has_opening(self.path[i]):
                return i
        raise BacktrackError("Couldn't find a room on the path that is not fully explored")

    def _has_opening(self, c: Coordinate) -> bool:
        survey = self.explored[c]
        return any(
            not survey.has_wall(d) and c.neighbor(d) not in self.explored
            for d in ALL_DIRECTIONS
        )

    def backtrack(self) -> Optional[MoveOutcome]:
        """Walk back to the nearest branch point and truncate the path there."""
        index = self.find_branch_point()
        target = self.path[index]
        route = plan_return_route(self.position, target, self.explored)
        logger.debug(f"Backtracking {len(route)} steps to {tuple(target)}")
        self.backtracks += 1
        for direction in route:
            outcome = self._move(direction)
            if outcome.is_victory:
                return outcome
        self.path.truncate(index)
        return None

    def _move(self, direction: Direction) -> MoveOutcome:
        outcome = self.connection.move(direction)
        if outcome.status == MoveStatus.REJECTED:
            raise ExplorationError(
                f"Move {direction.token} from {tuple(self.position)} was rejected: "
                f"{outcome.message}"
            )
        self.moves += 1
        self.position = self.position.neighbor(direction)
        return outcome

    def solve(self) -> SolveResult:
        """
        Explore until the treasure is found.

        Raises:
            ExplorationError: If the maze turns out not to be a connected tree.
        """
        self.explored = {ORIGIN: self.connection.awake()}
        self.path = ActivePath()
        self.path.push(ORIGIN)
        self.position = ORIGIN
        self.moves = 0
        self.backtracks = 0

        while True:
            current = self.path.top()
            picked = self.pick_neighbor(current)
            if picked is None:
                outcome = self.backtrack()
            else:
                nb, direction = picked
                outcome = self._move(direction)
                if not outcome.is_victory:
                    self.explored[nb] = outcome.survey
                    self.path.push(nb)
            if outcome is not None and outcome.is_victory:
                steps = outcome.steps if outcome.steps is not None else self.moves
                logger.info(f"Treasure found in {steps} steps ({self.backtracks} backtracks)")
                return SolveResult(
                    steps=steps,
                    moves=self.moves,
                    backtracks=self.backtracks,
                    explored=len(self.explored),
                )
