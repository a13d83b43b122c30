"""Tests for the summary logged when the server shuts down."""

import logging
import random

import pytest
from fastapi.testclient import TestClient

from labyrinth.main import app
from labyrinth.services.maze_service import MazeService, get_maze_service
from labyrinth.services.scoreboard import get_scoreboard


@pytest.fixture
def shared_scoreboard():
    """The process scoreboard, emptied before and after the test."""
    scoreboard = get_scoreboard()
    scoreboard.reset()
    service = MazeService(4, 4, random.Random(3), scoreboard)
    app.dependency_overrides[get_maze_service] = lambda: service
    yield scoreboard
    app.dependency_overrides.clear()
    scoreboard.reset()


def summary_lines(caplog) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.getMessage().startswith("Labyrinth solved")]


def test_no_summary_after_done(shared_scoreboard, caplog):
    """Test shutdown stays quiet once /done has reported the scores."""
    caplog.set_level(logging.INFO)
    with TestClient(app) as client:
        shared_scoreboard.record(12)
        response = client.get("/done")
        assert response.status_code == 200

    assert summary_lines(caplog) == ["Labyrinth solved 1 times with an avg of 12 steps"]


def test_unreported_scores_logged_on_shutdown(shared_scoreboard, caplog):
    """Test scores recorded without a /done are summarised at shutdown."""
    caplog.set_level(logging.INFO)
    with TestClient(app):
        shared_scoreboard.record(6)
        shared_scoreboard.record(9)

    assert summary_lines(caplog) == ["Labyrinth solved 2 times with an avg of 7 steps"]


def test_idle_shutdown_logs_no_summary(shared_scoreboard, caplog):
    """Test a server that solved nothing does not claim zero solves."""
    caplog.set_level(logging.INFO)
    with TestClient(app):
        pass

    assert summary_lines(caplog) == []
    assert any("Shutting down" in r.getMessage() for r in caplog.records)
