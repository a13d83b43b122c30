"""Scoreboard service tracking steps per solved maze."""

from dataclasses import dataclass
from functools import lru_cache


@dataclass
class ScoreSummary:
    """Aggregate of the scores recorded so far."""

    solved: int
    average_steps: int

    def __str__(self) -> str:
        return (
            f"Labyrinth solved {self.solved} times "
            f"with an avg of {self.average_steps} steps"
        )


class Scoreboard:
    """Process-wide record of victories. Lower step counts are better."""

    def __init__(self):
        self._scores: list[int] = []

    def record(self, steps: int) -> None:
        """Record the step count of a solved maze."""
        self._scores.append(steps)

    @property
    def scores(self) -> list[int]:
        return list(self._scores)

    def summary(self) -> ScoreSummary:
        """Number of solves and the integer mean of their step counts."""
        if not self._scores:
            return ScoreSummary(solved=0, average_steps=0)
        return ScoreSummary(
            solved=len(self._scores),
            average_steps=sum(self._scores) // len(self._scores),
        )

    def reset(self) -> None:
        """Forget every recorded score."""
        self._scores.clear()


@lru_cache
def get_scoreboard() -> Scoreboard:
    """Get the process-wide scoreboard."""
    return Scoreboard()
