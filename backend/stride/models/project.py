import uuid
from datetime import date, datetime
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from stride.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """
    Project model - a long-range goal with daily tasks and weekly goals.

    Scheduling fields owned by the weekly tracker:
    - current_week_start_date: Sunday of the week being worked on
    - days_ahead: signed tally, positive = ahead of schedule
    - last_week_completed_date: day the last week was advanced
    """

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    description: str | None = Field(default=None)
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING)
    long_term_goal: str | None = Field(default=None)
    goals: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    timeframe: int = Field(ge=1)  # days
    start_date: date
    target_date: date

    current_week_start_date: date | None = Field(default=None)
    days_ahead: int = Field(default=0)
    last_week_completed_date: date | None = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class WeeklyGoal(SQLModel, table=True):
    """A goal for the project's current week; position keeps list order."""

    __tablename__ = "weekly_goals"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)
    text: str
    completed: bool = Field(default=False)
    week_start_date: date
    position: int = Field(default=0)
