"""Labyrinth API (Daedalus) - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from labyrinth.api.routes import maze
from labyrinth.config import get_settings
from labyrinth.core.grid import InvalidDirectionError, MazeError
from labyrinth.schemas.maze import Reply
from labyrinth.services.scoreboard import get_scoreboard

logger = logging.getLogger("labyrinth")

settings = get_settings()


def configure_logging(level: str) -> None:
    """Configure root logging once for the server and the solver."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def maze_error_handler(request: Request, exc: MazeError):
    """Answer rejected moves with an error reply instead of a crash."""
    status_code = 400 if isinstance(exc, InvalidDirectionError) else 409
    logger.info(f"Rejected {request.url.path}: {exc}")
    reply = Reply(error=True, message=str(exc))
    return JSONResponse(status_code=status_code, content=reply.model_dump())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests with correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        request.state.request_id = request_id

        logger.debug(f"[{request_id}] --> {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.debug(
                f"[{request_id}] <-- {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.app_name} server (Daedalus)...")

    yield

    # Scores left unreported by /done, e.g. on Ctrl+C.
    summary = get_scoreboard().summary()
    if summary.solved:
        logger.info(str(summary))
    logger.info(f"Shutting down {settings.app_name} server...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Maze-building server for blind maze solvers",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_exception_handler(MazeError, maze_error_handler)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


app.include_router(maze.router)
