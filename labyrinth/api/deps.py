"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from labyrinth.config import Settings, get_settings
from labyrinth.services.maze_service import MazeService, get_maze_service

# Type aliases for cleaner route signatures
CurrentMaze = Annotated[MazeService, Depends(get_maze_service)]
AppSettings = Annotated[Settings, Depends(get_settings)]
