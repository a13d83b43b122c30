"""
Labyrinth Maze Client (Icarus)

Connects the explorer to a maze server.

Usage:
    from labyrinth.client.maze_client import MazeClient
    from labyrinth.core import Direction

    client = MazeClient("http://127.0.0.1:8001")
    survey = client.awake()
    if not survey.right:
        outcome = client.move(Direction.EAST)
    client.done()
"""

import logging

import requests

from labyrinth.core.grid import Direction, MazeError, Survey
from labyrinth.core.explorer import MoveOutcome, MoveStatus
from labyrinth.schemas.maze import Reply
from labyrinth.services.maze_service import MazeService
from labyrinth.services.scoreboard import ScoreSummary

logger = logging.getLogger(__name__)


class MazeClientError(Exception):
    """Base exception for maze client errors."""
    pass


class MazeClient:
    """
    HTTP client for a Labyrinth server.

    Rejected moves (HTTP 409 or 400) come back as MoveOutcome values with
    status REJECTED; anything else unexpected raises MazeClientError.
    """

    REJECTED_STATUS_CODES = (400, 409)

    def __init__(self, base_url: str, timeout: float = 5.0):
        """
        Initialize the maze client.

        Args:
            base_url: Server base URL, e.g. http://127.0.0.1:8001
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = requests.Session()

    def _request(self, endpoint: str) -> tuple[int, dict]:
        """Make a GET request and decode the JSON body."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self._http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise MazeClientError(f"Request failed: {e}")

        if response.status_code != 200 and response.status_code not in self.REJECTED_STATUS_CODES:
            raise MazeClientError(
                f"API error: {response.status_code} - {response.text}"
            )
        try:
            return response.status_code, response.json()
        except ValueError as e:
            raise MazeClientError(f"Invalid JSON from {url}: {e}")

    def awake(self) -> Survey:
        """Ask the server for a new maze and survey the starting room."""
        status_code, data = self._request("/awake")
        reply = Reply.model_validate(data)
        if status_code != 200 or reply.error:
            raise MazeClientError(f"Could not wake up: {reply.message}")
        return reply.survey.to_survey()

    def move(self, direction: Direction) -> MoveOutcome:
        """Move one room in direction."""
        status_code, data = self._request(f"/move/{direction.token}")
        reply = Reply.model_validate(data)

        if status_code != 200 or reply.error:
            return MoveOutcome(
                status=MoveStatus.REJECTED,
                survey=reply.survey.to_survey(),
                message=reply.message,
                steps=reply.steps,
            )
        if reply.victory:
            logger.info(reply.message.strip())
            return MoveOutcome(
                status=MoveStatus.VICTORY,
                survey=reply.survey.to_survey(),
                message=reply.message,
                steps=reply.steps,
            )
        return MoveOutcome(
            status=MoveStatus.OK,
            survey=reply.survey.to_survey(),
            steps=reply.steps,
        )

    def done(self) -> ScoreSummary:
        """Tell the server we are finished and fetch the summary."""
        _, data = self._request("/done")
        return ScoreSummary(solved=data["solved"], average_steps=data["average_steps"])

    def close(self) -> None:
        self._http.close()


class LocalMazeClient:
    """
    In-process client driving a MazeService directly.

    Same interface as MazeClient, without a server.

    Example:
        service = MazeService(5, 5, random.Random(1), Scoreboard())
        client = LocalMazeClient(service)
        survey = client.awake()
    """

    def __init__(self, service: MazeService):
        self.service = service

    def awake(self) -> Survey:
        return self.service.awake()

    def move(self, direction: Direction) -> MoveOutcome:
        try:
            result = self.service.move(direction)
        except MazeError as e:
            return MoveOutcome(status=MoveStatus.REJECTED, survey=Survey(), message=str(e))
        if result.victory:
            return MoveOutcome(
                status=MoveStatus.VICTORY,
                survey=result.survey,
                message=result.message,
                steps=result.steps,
            )
        return MoveOutcome(status=MoveStatus.OK, survey=result.survey, steps=result.steps)

    def done(self) -> ScoreSummary:
        return self.service.done()

    def close(self) -> None:
        pass
