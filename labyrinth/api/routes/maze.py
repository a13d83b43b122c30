"""Maze routes: wake up in a new maze, move around, finish the session."""

import logging
import signal

from fastapi import APIRouter, BackgroundTasks

from labyrinth.api.deps import AppSettings, CurrentMaze
from labyrinth.core.grid import Direction
from labyrinth.schemas.maze import DoneResponse, Reply, SurveySchema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Maze"])


def request_shutdown() -> None:
    """Ask the server process to stop, as if Ctrl+C was pressed."""
    logger.info("Shutting down after /done")
    signal.raise_signal(signal.SIGINT)


@router.get("/awake", response_model=Reply)
async def awake(maze: CurrentMaze) -> Reply:
    """Create a new maze and place Icarus in his awakening room.

    Any previous maze is discarded.
    """
    survey = maze.awake()
    return Reply(survey=SurveySchema.from_survey(survey), steps=0)


@router.get("/move/{direction}", response_model=Reply)
async def move(direction: str, maze: CurrentMaze) -> Reply:
    """Move one room in a direction (up, down, left or right).

    Rejected moves (walls, maze edge, unknown direction) are answered with
    an error reply by the MazeError handler and leave the maze unchanged.
    """
    result = maze.move(Direction.from_token(direction))
    return Reply(
        survey=SurveySchema.from_survey(result.survey),
        victory=result.victory,
        message=result.message or "",
        steps=result.steps,
    )


@router.get("/done", response_model=DoneResponse)
async def done(
    maze: CurrentMaze,
    settings: AppSettings,
    background_tasks: BackgroundTasks,
) -> DoneResponse:
    """End the session and report the average number of steps."""
    summary = maze.done()
    if settings.shutdown_on_done:
        background_tasks.add_task(request_shutdown)
    return DoneResponse(
        solved=summary.solved,
        average_steps=summary.average_steps,
        message=str(summary),
    )
