"""
Labyrinth grid model

Rooms, walls, coordinates and direction algebra shared by the maze builder,
the server-side session and the client-side explorer.

Coordinates follow screen orientation: x grows to the east, y grows to the
south, so NORTH is (0, -1).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple


class MazeError(Exception):
    """Base exception for rejected maze operations."""
    pass


class OutOfBoundsError(MazeError):
    """A coordinate lies outside the grid."""
    pass


class InvalidDirectionError(MazeError):
    """A direction token could not be understood."""
    pass


class Direction(Enum):
    """Movement directions."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.NORTH: (0, -1),
            Direction.SOUTH: (0, 1),
            Direction.EAST: (1, 0),
            Direction.WEST: (-1, 0),
        }
        return deltas[self]

    @property
    def reverse(self) -> "Direction":
        """Get the opposite direction."""
        opposites = {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }
        return opposites[self]

    @property
    def token(self) -> str:
        """Wire token used by the move endpoint."""
        return _TOKENS[self]

    @classmethod
    def from_token(cls, token: str) -> "Direction":
        """Convert a wire token (up, down, left, right) to a Direction."""
        for direction, value in _TOKENS.items():
            if value == token:
                return direction
        raise InvalidDirectionError(
            f"Invalid direction '{token}'. Must be one of: {tuple(_TOKENS.values())}"
        )


_TOKENS = {
    Direction.NORTH: "up",
    Direction.SOUTH: "down",
    Direction.EAST: "right",
    Direction.WEST: "left",
}

# Fixed iteration order for anything that scans all four sides.
ALL_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


class Coordinate(NamedTuple):
    """2D position in the maze."""
    x: int
    y: int

    def neighbor(self, direction: Direction) -> "Coordinate":
        """Return the coordinate one step away in direction."""
        dx, dy = direction.delta
        return Coordinate(self.x + dx, self.y + dy)

    def neighbors(self) -> list["Coordinate"]:
        """Return the four adjacent coordinates (N, S, W, E)."""
        return [
            self.neighbor(direction)
            for direction in (Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST)
        ]

    def direction_to(self, other: "Coordinate") -> Direction:
        """Direction leading to an adjacent coordinate."""
        for direction in ALL_DIRECTIONS:
            if self.neighbor(direction) == other:
                return direction
        raise ValueError(f"{other} is not adjacent to {self}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Survey:
    """Walls around a single room, as seen from inside it."""
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def has_wall(self, direction: Direction) -> bool:
        """Check whether the room is walled towards direction."""
        sides = {
            Direction.NORTH: self.top,
            Direction.SOUTH: self.bottom,
            Direction.EAST: self.right,
            Direction.WEST: self.left,
        }
        return sides[direction]

    def openings(self) -> list[Direction]:
        """Directions without a wall."""
        return [d for d in ALL_DIRECTIONS if not self.has_wall(d)]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass
class Room:
    """A single grid cell: four walls plus start/treasure markers."""
    walls: dict[Direction, bool] = field(
        default_factory=lambda: {d: False for d in ALL_DIRECTIONS}
    )
    is_start: bool = False
    is_treasure: bool = False

    def add_wall(self, direction: Direction) -> None:
        self.walls[direction] = True

    def remove_wall(self, direction: Direction) -> None:
        self.walls[direction] = False

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[direction]

    @property
    def survey(self) -> Survey:
        """Read-only snapshot of this room's walls."""
        return Survey(
            top=self.walls[Direction.NORTH],
            right=self.walls[Direction.EAST],
            bottom=self.walls[Direction.SOUTH],
            left=self.walls[Direction.WEST],
        )


class Grid:
    """
    Rectangular array of rooms.

    Every wall mutation goes through add_wall / remove_wall_between, which
    update both sides of an inner wall so that adjacent rooms always agree.

    Example usage:
        grid = Grid(4, 3)
        grid.add_boundary()
        grid.seal_room(Coordinate(1, 1))
        grid.remove_wall_between(Coordinate(1, 1), Coordinate(2, 1))
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rooms: list[list[Room]] = [
            [Room() for _ in range(width)] for _ in range(height)
        ]

    def contains(self, c: Coordinate) -> bool:
        """Check whether a coordinate lies inside the grid."""
        return 0 <= c.x < self.width and 0 <= c.y < self.height

    def room(self, c: Coordinate) -> Room:
        """Get the room at a coordinate."""
        if not self.contains(c):
            raise OutOfBoundsError(f"Room {tuple(c)} is outside of maze boundaries")
        return self.rooms[c.y][c.x]

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every coordinate, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def add_wall(self, c: Coordinate, direction: Direction) -> None:
        """Wall off one side of a room, mirrored onto the neighbor if any."""
        self.room(c).add_wall(direction)
        nb = c.neighbor(direction)
        if self.contains(nb):
            self.room(nb).add_wall(direction.reverse)

    def seal_room(self, c: Coordinate) -> None:
        """Close all four walls of a room."""
        for direction in Direction:
            self.add_wall(c, direction)

    def remove_wall_between(self, a: Coordinate, b: Coordinate) -> None:
        """Open the passage between two adjacent rooms."""
        direction = a.direction_to(b)
        self.room(a).remove_wall(direction)
        self.room(b).remove_wall(direction.reverse)

    def add_boundary(self) -> None:
        """Wall in the outer perimeter of the grid."""
        for x in range(self.width):
            self.room(Coordinate(x, 0)).add_wall(Direction.NORTH)
            self.room(Coordinate(x, self.height - 1)).add_wall(Direction.SOUTH)
        for y in range(self.height):
            self.room(Coordinate(0, y)).add_wall(Direction.WEST)
            self.room(Coordinate(self.width - 1, y)).add_wall(Direction.EAST)

    def passages(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        """Yield each open pair of adjacent rooms once."""
        for c in self.coordinates():
            for direction in (Direction.EAST, Direction.SOUTH):
                nb = c.neighbor(direction)
                if self.contains(nb) and not self.room(c).has_wall(direction):
                    yield c, nb

    def is_symmetric(self) -> bool:
        """Check that every inner wall is seen identically from both sides."""
        for c in self.coordinates():
            for direction in (Direction.EAST, Direction.SOUTH):
                nb = c.neighbor(direction)
                if not self.contains(nb):
                    continue
                if self.room(c).has_wall(direction) != self.room(nb).has_wall(direction.reverse):
                    return False
        return True
