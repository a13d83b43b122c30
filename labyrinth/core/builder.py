"""
Labyrinth Maze Builder

Builds a perfect maze (a spanning tree of open passages) in three passes:

1. Route carving: the grid is cut recursively into rectangles so that the
   start and the treasure end up in different pieces, until the pieces are too
   small to cut; the pieces are joined with naive axis-aligned routes.
2. Paving: every room on the route is sealed, then the walls between
   consecutive route rooms are removed.
3. Flood fill: starting from the route rooms in random order, every remaining
   room is sealed and opened towards the room it was reached from.

Both the cutting and the flood fill run on explicit work stacks so that large
grids do not hit the interpreter's recursion limit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .grid import Coordinate, Direction, Grid
from .rng import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_CUT_LIMIT = 3


@dataclass(frozen=True)
class Rect:
    """Axis-aligned region of the grid."""
    x: int
    y: int
    w: int
    h: int

    def contains(self, c: Coordinate) -> bool:
        return self.x <= c.x < self.x + self.w and self.y <= c.y < self.y + self.h


@dataclass(frozen=True)
class Cut:
    """Result of splitting a region between src and dst."""
    src_rect: Rect
    src_exit: Coordinate
    dst_rect: Rect
    dst_entry: Coordinate


def find_naive_route(
    src: Coordinate, dst: Coordinate, rng: RandomSource
) -> list[Coordinate]:
    """Walk from src to dst one unit step at a time.

    Once the two share a column or row the walk stays on it; otherwise the
    axis is picked at random at each step.
    """
    route = []
    c = src
    while c != dst:
        route.append(c)
        vertical = rng.randrange(2) == 0
        if c.x == dst.x:
            vertical = True
        if c.y == dst.y:
            vertical = False
        if vertical:
            c = c.neighbor(Direction.SOUTH if c.y < dst.y else Direction.NORTH)
        else:
            c = c.neighbor(Direction.EAST if c.x < dst.x else Direction.WEST)
    route.append(dst)
    return route


def _crossing(start: int, size: int, avoid: tuple[int, int], rng: RandomSource) -> int:
    pos = rng.randrange(size) + start
    if pos in avoid:
        pos = rng.randrange(size) + start
    return pos


def cut_horizontal(
    region: Rect, src: Coordinate, dst: Coordinate, rng: RandomSource, cut_limit: int
) -> Optional[Cut]:
    """Split region with a horizontal line between src and dst."""
    if src.y == dst.y or region.h <= cut_limit:
        return None
    cy = (src.y + dst.y) // 2 + 1
    cx = _crossing(region.x, region.w, (src.x, dst.x), rng)
    top = Rect(region.x, region.y, region.w, cy - region.y)
    bottom = Rect(region.x, cy, region.w, region.h - top.h)
    if top.contains(src):
        return Cut(top, Coordinate(cx, cy - 1), bottom, Coordinate(cx, cy))
    return Cut(bottom, Coordinate(cx, cy), top, Coordinate(cx, cy - 1))


def cut_vertical(
    region: Rect, src: Coordinate, dst: Coordinate, rng: RandomSource, cut_limit: int
) -> Optional[Cut]:
    """Split region with a vertical line between src and dst."""
    if src.x == dst.x or region.w <= cut_limit:
        return None
    cx = (src.x + dst.x) // 2 + 1
    cy = _crossing(region.y, region.h, (src.y, dst.y), rng)
    left = Rect(region.x, region.y, cx - region.x, region.h)
    right = Rect(cx, region.y, region.w - left.w, region.h)
    if left.contains(src):
        return Cut(left, Coordinate(cx - 1, cy), right, Coordinate(cx, cy))
    return Cut(right, Coordinate(cx, cy), left, Coordinate(cx - 1, cy))


def cut(
    region: Rect,
    src: Coordinate,
    dst: Coordinate,
    rng: RandomSource,
    cut_limit: int = DEFAULT_CUT_LIMIT,
) -> Optional[Cut]:
    """Cut region so src and dst land in different pieces, if possible.

    Prefers cutting across the longer side. Returns None when neither
    orientation is valid.
    """
    horizontal = cut_horizontal(region, src, dst, rng, cut_limit)
    vertical = cut_vertical(region, src, dst, rng, cut_limit)
    if horizontal is None:
        return vertical
    if vertical is None:
        return horizontal
    if region.w > region.h:
        return vertical
    return horizontal


def find_route(
    region: Rect,
    src: Coordinate,
    dst: Coordinate,
    rng: RandomSource,
    cut_limit: int = DEFAULT_CUT_LIMIT,
) -> list[Coordinate]:
    """Find a route from src to dst inside region by recursive cutting."""
    route: list[Coordinate] = []
    # Pending (region, src, dst) triples; the src-side piece is popped first
    # so the pieces are emitted in route order.
    stack = [(region, src, dst)]
    while stack:
        rect, a, b = stack.pop()
        piece = cut(rect, a, b, rng, cut_limit)
        if piece is None:
            route.extend(find_naive_route(a, b, rng))
            continue
        stack.append((piece.dst_rect, piece.dst_entry, b))
        stack.append((piece.src_rect, a, piece.src_exit))
    return route


def pave_route(grid: Grid, route: list[Coordinate]) -> None:
    """Seal every room on the route, then open consecutive rooms to each other."""
    for c in route:
        grid.seal_room(c)
    for prev, c in zip(route, route[1:]):
        grid.remove_wall_between(prev, c)


def flood_fill(
    grid: Grid, root: Coordinate, explored: set[Coordinate]
) -> None:
    """Grow a tree from root into every unexplored room reachable from it."""
    stack = [
        (nb, root) for nb in reversed(root.neighbors())
        if grid.contains(nb) and nb not in explored
    ]
    while stack:
        c, parent = stack.pop()
        if c in explored:
            continue
        grid.seal_room(c)
        grid.remove_wall_between(c, parent)
        explored.add(c)
        for nb in reversed(c.neighbors()):
            if grid.contains(nb) and nb not in explored:
                stack.append((nb, c))


def build_maze(
    grid: Grid,
    src: Coordinate,
    dst: Coordinate,
    rng: RandomSource,
    cut_limit: int = DEFAULT_CUT_LIMIT,
) -> list[Coordinate]:
    """
    Turn grid into a perfect maze containing a route from src to dst.

    Args:
        grid: Grid to carve; its walls are overwritten.
        src: Start coordinate.
        dst: Treasure coordinate.
        rng: Random source for every tie-break.
        cut_limit: Regions this thin or thinner are not cut further.

    Returns:
        The carved route from src to dst.
    """
    grid.add_boundary()
    route = find_route(Rect(0, 0, grid.width, grid.height), src, dst, rng, cut_limit)
    pave_route(grid, route)

    explored = set(route)
    order = list(range(len(route)))
    rng.shuffle(order)
    for idx in order:
        flood_fill(grid, route[idx], explored)

    logger.debug(f"Carved route of {len(route)} rooms from {tuple(src)} to {tuple(dst)}")
    return route
