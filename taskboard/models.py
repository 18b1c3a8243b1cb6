from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    """A task record as stored by the front end (camelCase keys accepted)."""

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    name: str
    project: str = "other"
    importance: int
    length: int
    difficulty: int
    created_at: datetime = Field(alias="createdAt")
    deadline: Optional[str] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def blank_deadline_is_none(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def has_deadline(self) -> bool:
        return self.deadline is not None

    @property
    def has_time(self) -> bool:
        # "YYYY-MM-DDTHH:MM" vs "YYYY-MM-DD"
        return self.deadline is not None and "T" in self.deadline


class Project(BaseModel):
    name: str
    color: str


class CalendarDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    day: int
    current_month: bool = Field(alias="currentMonth")


class WorkloadSummary(BaseModel):
    message: str
    advice: str
    workload: str
    score: float = 0.0
    high_priority_count: int = 0
    upcoming_deadline_count: int = 0
