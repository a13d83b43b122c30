"""Pytest configuration and fixtures."""

import random
from collections import deque
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from labyrinth.core.grid import Coordinate, Grid
from labyrinth.main import app
from labyrinth.services.maze_service import MazeService, get_maze_service
from labyrinth.services.scoreboard import Scoreboard


def reachable_rooms(grid: Grid, start: Coordinate) -> set[Coordinate]:
    """All rooms reachable from start through open passages."""
    adjacency: dict[Coordinate, list[Coordinate]] = {c: [] for c in grid.coordinates()}
    for a, b in grid.passages():
        adjacency[a].append(b)
        adjacency[b].append(a)

    seen = {start}
    queue = deque([start])
    while queue:
        c = queue.popleft()
        for nb in adjacency[c]:
            if nb not in seen:
                seen.add(nb)
                queue.append(nb)
    return seen


@pytest.fixture
def scoreboard() -> Scoreboard:
    """Fresh scoreboard for each test."""
    return Scoreboard()


@pytest.fixture
def maze_service(scoreboard) -> MazeService:
    """Small, seeded maze service."""
    return MazeService(width=6, height=5, rng=random.Random(1234), scoreboard=scoreboard)


@pytest_asyncio.fixture(scope="function")
async def client(maze_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to the seeded maze service."""
    app.dependency_overrides[get_maze_service] = lambda: maze_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
