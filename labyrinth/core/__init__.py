# Core module
from .grid import (
    ALL_DIRECTIONS,
    Coordinate,
    Direction,
    Grid,
    InvalidDirectionError,
    MazeError,
    OutOfBoundsError,
    Room,
    Survey,
)
from .builder import DEFAULT_CUT_LIMIT, build_maze, find_route
from .maze_engine import (
    MazeSession,
    PlacementError,
    Victory,
    WallBlockedError,
    create_maze,
)
from .backtrack import BacktrackError, ExplorationError, plan_return_route
from .explorer import (
    ActivePath,
    Explorer,
    MazeConnection,
    MoveOutcome,
    MoveStatus,
    SolveResult,
)
from .rng import RandomSource, create_random

__all__ = [
    "ALL_DIRECTIONS",
    "Coordinate",
    "Direction",
    "Grid",
    "InvalidDirectionError",
    "MazeError",
    "OutOfBoundsError",
    "Room",
    "Survey",
    "DEFAULT_CUT_LIMIT",
    "build_maze",
    "find_route",
    "MazeSession",
    "PlacementError",
    "Victory",
    "WallBlockedError",
    "create_maze",
    "BacktrackError",
    "ExplorationError",
    "plan_return_route",
    "ActivePath",
    "Explorer",
    "MazeConnection",
    "MoveOutcome",
    "MoveStatus",
    "SolveResult",
    "RandomSource",
    "create_random",
]
