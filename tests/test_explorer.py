"""Tests for the blind explorer and the backtrack planner."""

import random

import pytest

from labyrinth.client.maze_client import LocalMazeClient
from labyrinth.core.backtrack import BacktrackError, plan_return_route
from labyrinth.core.explorer import (
    ActivePath,
    Explorer,
    ExplorationError,
    MoveOutcome,
    MoveStatus,
)
from labyrinth.core.grid import Coordinate, Direction, Survey
from labyrinth.core.maze_engine import create_maze
from labyrinth.services.maze_service import MazeService
from labyrinth.services.scoreboard import Scoreboard


# A "T" seen from the explorer's side, origin at the junction:
#
#   (0,0) -- (1,0) -- (2,0)
#     |                 |
#   (0,1)?            (2,1)  dead end
#
# (0,1) is open from the junction but has not been visited yet.
T_JUNCTION = {
    Coordinate(0, 0): Survey(top=True, right=False, bottom=False, left=True),
    Coordinate(1, 0): Survey(top=True, right=False, bottom=True, left=False),
    Coordinate(2, 0): Survey(top=True, right=True, bottom=False, left=False),
    Coordinate(2, 1): Survey(top=False, right=True, bottom=True, left=True),
}


class RecordingConnection:
    """Connection that accepts every move and remembers it."""

    def __init__(self, awake_survey=None, status=MoveStatus.OK):
        self.awake_survey = awake_survey or Survey()
        self.status = status
        self.moves: list[Direction] = []

    def awake(self) -> Survey:
        return self.awake_survey

    def move(self, direction: Direction) -> MoveOutcome:
        self.moves.append(direction)
        return MoveOutcome(status=self.status, survey=Survey(), message="nope")


class FixedMazeClient(LocalMazeClient):
    """Local client that keeps serving one prebuilt maze."""

    def __init__(self, session):
        super().__init__(MazeService(session.width, session.height, random.Random(0), Scoreboard()))
        self.prebuilt = session

    def awake(self) -> Survey:
        self.service.session = self.prebuilt
        return self.prebuilt.look_around()


class TestActivePath:
    """Tests for the active path stack."""

    def test_push_top_truncate(self):
        """Test push, top and truncate."""
        path = ActivePath()
        for i in range(4):
            path.push(Coordinate(i, 0))
        assert path.top() == Coordinate(3, 0)
        path.truncate(1)
        assert len(path) == 2
        assert path.top() == Coordinate(1, 0)

    def test_empty_top_raises(self):
        """Test an empty path has no top."""
        with pytest.raises(ExplorationError):
            ActivePath().top()


class TestPlanReturnRoute:
    """Tests for the backtrack planner."""

    def test_t_junction_route(self):
        """Test the route back through a T junction."""
        route = plan_return_route(Coordinate(2, 1), Coordinate(0, 0), T_JUNCTION)
        assert route == [Direction.NORTH, Direction.WEST, Direction.WEST]

    def test_same_room(self):
        """Test no moves are needed to stay put."""
        assert plan_return_route(Coordinate(1, 0), Coordinate(1, 0), T_JUNCTION) == []

    def test_ignores_unexplored_rooms(self):
        """Test unexplored rooms are never routed through."""
        explored = dict(T_JUNCTION)
        del explored[Coordinate(1, 0)]
        with pytest.raises(BacktrackError):
            plan_return_route(Coordinate(2, 1), Coordinate(0, 0), explored)

    def test_respects_recorded_walls(self):
        """Test recorded walls block the route back."""
        explored = dict(T_JUNCTION)
        explored[Coordinate(1, 0)] = Survey(top=True, right=True, bottom=True, left=False)
        with pytest.raises(BacktrackError, match="No known way back"):
            plan_return_route(Coordinate(2, 1), Coordinate(0, 0), explored)


class TestBacktrack:
    """Tests for dead-end handling in the explorer."""

    def test_backtrack_to_branch_point(self):
        """Test a dead end walks back to the branch point."""
        connection = RecordingConnection()
        explorer = Explorer(connection, random.Random(0))
        explorer.explored = dict(T_JUNCTION)
        for c in [Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0), Coordinate(2, 1)]:
            explorer.path.push(c)
        explorer.position = Coordinate(2, 1)

        assert explorer.find_branch_point() == 0
        assert explorer.backtrack() is None

        assert connection.moves == [Direction.NORTH, Direction.WEST, Direction.WEST]
        assert explorer.path.coordinates == [Coordinate(0, 0)]
        assert explorer.position == Coordinate(0, 0)
        assert explorer.backtracks == 1
        # Abandoned rooms stay explored
        assert Coordinate(2, 1) in explorer.explored

    def test_exhausted_path_raises(self):
        """Test a fully walled start cannot be solved."""
        connection = RecordingConnection(awake_survey=Survey(True, True, True, True))
        with pytest.raises(BacktrackError):
            Explorer(connection, random.Random(0)).solve()

    def test_rejected_move_is_fatal(self):
        """Test a rejected move stops the explorer."""
        connection = RecordingConnection(status=MoveStatus.REJECTED)
        with pytest.raises(ExplorationError, match="rejected"):
            Explorer(connection, random.Random(0)).solve()


class TestSolve:
    """End-to-end solving against generated mazes."""

    def test_one_by_two_single_down_move(self):
        """Test a 1x2 maze is solved with one move down."""
        session = create_maze(
            1, 2, random.Random(0),
            start=Coordinate(0, 0), treasure=Coordinate(0, 1),
        )
        client = FixedMazeClient(session)
        moves = []
        original_move = client.move

        def recording_move(direction):
            moves.append(direction)
            return original_move(direction)

        client.move = recording_move
        result = Explorer(client, random.Random(0)).solve()

        assert moves == [Direction.SOUTH]
        assert result.steps == 1
        assert result.backtracks == 0

    @pytest.mark.parametrize(
        "width,height,seed",
        [(2, 2, 0), (3, 3, 1), (6, 5, 2), (10, 10, 3), (15, 10, 4), (30, 20, 5), (1, 12, 6)],
    )
    def test_reaches_treasure_within_bound(self, width, height, seed):
        """Test the treasure is reached within twice the room count."""
        session = create_maze(width, height, random.Random(seed))
        client = FixedMazeClient(session)

        result = Explorer(client, random.Random(seed + 100)).solve()

        assert session.position == session.treasure
        assert result.steps == session.steps_taken
        assert result.moves == session.steps_taken
        assert result.moves <= 2 * width * height
        assert result.explored <= width * height

    def test_fresh_state_each_attempt(self):
        """Test each solve starts from a clean state."""
        session = create_maze(8, 8, random.Random(11))
        explorer = Explorer(FixedMazeClient(session), random.Random(12))
        explorer.solve()

        second = create_maze(8, 8, random.Random(13))
        explorer.connection = FixedMazeClient(second)
        result = explorer.solve()

        assert second.position == second.treasure
        assert result.moves == second.steps_taken
