"""Return-route planning over rooms the explorer has already surveyed."""

from collections import deque
from typing import Mapping

from .grid import ALL_DIRECTIONS, Coordinate, Direction, Survey


class ExplorationError(RuntimeError):
    """The explorer reached a state a perfect maze cannot produce."""
    pass


class BacktrackError(ExplorationError):
    """No known route leads back to the requested room."""
    pass


def plan_return_route(
    src: Coordinate,
    dst: Coordinate,
    explored: Mapping[Coordinate, Survey],
) -> list[Direction]:
    """
    Find the shortest known route from src back to dst.

    The search runs breadth-first from dst and only crosses walls-free sides
    of explored rooms. Each reached room remembers the direction that leads
    one step closer to dst, so the route is read off by walking from src.

    Returns:
        Directions to move, in order, starting at src.

    Raises:
        BacktrackError: If src cannot be reached from dst through explored rooms.
    """
    if src == dst:
        return []

    toward_dst: dict[Coordinate, Direction] = {}
    seen = {dst}
    queue = deque([dst])
    found = False
    while queue and not found:
        c = queue.popleft()
        survey = explored[c]
        for direction in ALL_DIRECTIONS:
            if survey.has_wall(direction):
                continue
            nb = c.neighbor(direction)
            if nb not in explored or nb in seen:
                continue
            seen.add(nb)
            toward_dst[nb] = direction.reverse
            queue.append(nb)
            if nb == src:
                found = True
                break

    if not found:
        raise BacktrackError(f"No known way back from {tuple(src)} to {tuple(dst)}")

    route = []
    c = src
    while c != dst:
        direction = toward_dst[c]
        route.append(direction)
        c = c.neighbor(direction)
    return route
