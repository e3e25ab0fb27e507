import uuid
from datetime import date, datetime
from pydantic import BaseModel, Field

from stride.models.enums import ProjectStatus


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""
    name: str = Field(min_length=1)
    description: str | None = None
    timeframe: int = Field(ge=1)  # days
    start_date: date | None = None  # Defaults to today
    target_date: date | None = None  # Defaults to start_date + timeframe
    goals: list[str] = Field(default_factory=list)
    long_term_goal: str | None = None
    weekly_goals: list[str] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    """
    Schema for updating a project.

    Scheduling state (days ahead, current week) is changed only through
    the advance-week endpoint.
    """
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ProjectStatus | None = None
    timeframe: int | None = Field(default=None, ge=1)
    target_date: date | None = None
    goals: list[str] | None = None
    long_term_goal: str | None = None


class WeeklyGoalRead(BaseModel):
    """Schema for reading a weekly goal."""
    id: uuid.UUID
    text: str
    completed: bool
    week_start_date: date

    model_config = {"from_attributes": True}


class ProjectRead(BaseModel):
    """Schema for reading a project with its current week's goals."""
    id: uuid.UUID
    name: str
    description: str | None
    status: ProjectStatus
    long_term_goal: str | None
    goals: list[str]
    timeframe: int
    start_date: date
    target_date: date
    current_week_start_date: date
    days_ahead: int
    last_week_completed_date: date | None
    weekly_goals: list[WeeklyGoalRead]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DaysAheadRead(BaseModel):
    """Decayed days-ahead reading alongside the raw signed tally."""
    days_ahead: int
    raw_days_ahead: int
    next_week_start: date


class ProjectProgressRead(BaseModel):
    """Completion statistics for a project."""
    project_id: uuid.UUID
    total_tasks: int
    completed_tasks: int
    missed_tasks: int
    today_tasks: int
    today_completed_tasks: int
    completion_percent: int
    goals_total: int
    goals_completed: int
    week_complete: bool
    days_ahead: int
    raw_days_ahead: int

    model_config = {"from_attributes": True}
