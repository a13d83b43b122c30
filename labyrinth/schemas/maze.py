"""Maze schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field

from labyrinth.core.grid import Survey


class SurveySchema(BaseModel):
    """Schema for the walls around the occupant's room."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    @classmethod
    def from_survey(cls, survey: Survey) -> "SurveySchema":
        return cls(**survey.to_dict())

    def to_survey(self) -> Survey:
        return Survey(top=self.top, right=self.right, bottom=self.bottom, left=self.left)


class Reply(BaseModel):
    """Schema for awake and move responses."""

    survey: SurveySchema = Field(default_factory=SurveySchema)
    victory: bool = False
    message: str = ""
    error: bool = False
    steps: Optional[int] = None


class DoneResponse(BaseModel):
    """Schema for the end-of-session summary."""

    solved: int
    average_steps: int
    message: str
