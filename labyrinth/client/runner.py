"""Solve the maze repeatedly, then tell the server we are done."""

import logging
from typing import Protocol

from labyrinth.core.explorer import Explorer, MazeConnection, SolveResult
from labyrinth.core.rng import RandomSource
from labyrinth.services.scoreboard import ScoreSummary

logger = logging.getLogger(__name__)


class SessionConnection(MazeConnection, Protocol):
    """A maze connection that can also end the session."""

    def done(self) -> ScoreSummary: ...


def run_icarus(
    connection: SessionConnection, times: int, rng: RandomSource
) -> tuple[list[SolveResult], ScoreSummary]:
    """
    Solve a fresh maze `times` times.

    Returns:
        Tuple of (per-attempt results, server summary)
    """
    logger.info(f"Solving {times} times")
    results = []
    for attempt in range(times):
        logger.info(f"Solving attempt {attempt + 1}/{times}")
        results.append(Explorer(connection, rng).solve())

    summary = connection.done()
    logger.info(str(summary))
    return results, summary
