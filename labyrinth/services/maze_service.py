"""Maze service owning the server's single active maze session."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from labyrinth.config import Settings, get_settings
from labyrinth.core.builder import DEFAULT_CUT_LIMIT
from labyrinth.core.grid import Direction, MazeError, Survey
from labyrinth.core.maze_engine import MazeSession, Victory, create_maze
from labyrinth.core.rng import RandomSource, create_random
from labyrinth.services.scoreboard import ScoreSummary, Scoreboard, get_scoreboard

logger = logging.getLogger(__name__)


class NoActiveMazeError(MazeError):
    """A move arrived before any maze was created."""
    pass


@dataclass
class MoveReply:
    """Result of a move handled by the service."""

    survey: Survey
    victory: bool
    steps: int
    message: Optional[str] = None


class MazeService:
    """
    Holds at most one maze session at a time.

    The session is created by awake(), replaced by the next awake() and
    dropped by done(). Only one solver may use the service at a time.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: RandomSource,
        scoreboard: Scoreboard,
        cut_limit: int = DEFAULT_CUT_LIMIT,
    ):
        self.width = width
        self.height = height
        self.rng = rng
        self.scoreboard = scoreboard
        self.cut_limit = cut_limit
        self.session: Optional[MazeSession] = None

    def awake(self) -> Survey:
        """Create a new maze and survey the starting room."""
        self.session = create_maze(self.width, self.height, self.rng, self.cut_limit)
        return self.session.look_around()

    def _require_session(self) -> MazeSession:
        if self.session is None:
            raise NoActiveMazeError("No active maze. Call /awake first.")
        return self.session

    def move(self, direction: Direction) -> MoveReply:
        """
        Move the occupant and survey the new room.

        Raises:
            MazeError: If the move is rejected; nothing changes.
        """
        session = self._require_session()
        session.move(direction)
        try:
            survey = session.look_around()
        except Victory as victory:
            self.scoreboard.record(victory.steps)
            logger.info(str(victory))
            return MoveReply(
                survey=Survey(),
                victory=True,
                steps=victory.steps,
                message=str(victory),
            )
        return MoveReply(survey=survey, victory=False, steps=session.steps_taken)

    def done(self) -> ScoreSummary:
        """Report the session summary, then reset scores and drop the maze."""
        summary = self.scoreboard.summary()
        logger.info(str(summary))
        self.scoreboard.reset()
        self.session = None
        return summary


def create_maze_service(
    settings: Settings, scoreboard: Scoreboard, rng: RandomSource
) -> MazeService:
    """Build a maze service from settings around the given random source."""
    return MazeService(
        width=settings.width,
        height=settings.height,
        rng=rng,
        scoreboard=scoreboard,
        cut_limit=settings.cut_limit,
    )


@lru_cache
def get_maze_service() -> MazeService:
    """Get the process-wide maze service."""
    settings = get_settings()
    return create_maze_service(settings, get_scoreboard(), create_random(settings.seed))
