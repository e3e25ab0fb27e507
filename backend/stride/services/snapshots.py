"""
Immutable snapshots the scheduling services operate on.

The ordering engine and the weekly tracker never touch ORM rows: the
record store loads a ProjectSnapshot, the services return new snapshots
via dataclasses.replace(), and the store commits the result.

Defaults are filled when a snapshot is constructed (importance 3, week
start derived from the project start date, zero days ahead) so the
services never branch on missing values.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable

from stride.models.enums import EffortEstimate, ProjectStatus, TaskStatus
from stride.services.week import week_start

DEFAULT_IMPORTANCE = 3

IdFactory = Callable[[], uuid.UUID]


@dataclass(frozen=True)
class TaskSnapshot:
    """A single task scheduled for one calendar day."""
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    scheduled_date: date
    order: int
    status: TaskStatus = TaskStatus.PENDING
    importance: int = DEFAULT_IMPORTANCE
    description: str | None = None
    effort_estimate: EffortEstimate | None = None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


@dataclass(frozen=True)
class WeeklyGoalSnapshot:
    id: uuid.UUID
    text: str
    week_start_date: date
    completed: bool = False


@dataclass(frozen=True)
class ProjectSnapshot:
    """
    A project with its tasks and the current week's goals.

    days_ahead is the raw signed accumulator (negative = behind); the
    decayed, display-ready reading comes from calculate_days_ahead().
    """
    id: uuid.UUID
    name: str
    start_date: date
    target_date: date
    timeframe: int
    current_week_start_date: date | None = None
    days_ahead: int = 0
    last_week_completed_date: date | None = None
    weekly_goals: tuple[WeeklyGoalSnapshot, ...] = ()
    tasks: tuple[TaskSnapshot, ...] = ()
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    long_term_goal: str | None = None
    goals: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        # frozen dataclass: fill defaults through object.__setattr__
        if self.current_week_start_date is None:
            object.__setattr__(self, "current_week_start_date", week_start(self.start_date))
        if self.days_ahead is None:
            object.__setattr__(self, "days_ahead", 0)
        object.__setattr__(self, "weekly_goals", tuple(self.weekly_goals))
        object.__setattr__(self, "tasks", tuple(self.tasks))
        object.__setattr__(self, "goals", tuple(self.goals))


def new_task(
    project_id: uuid.UUID,
    title: str,
    scheduled_date: date,
    *,
    importance: int | None = None,
    description: str | None = None,
    effort_estimate: EffortEstimate | None = None,
    id_factory: IdFactory = uuid.uuid4,
) -> TaskSnapshot:
    """
    Build a pending task that has not been placed yet.

    The order is a placeholder; insert_task() assigns the real one.
    Only a missing importance is defaulted, out-of-range values pass
    through untouched.
    """
    return TaskSnapshot(
        id=id_factory(),
        project_id=project_id,
        title=title,
        scheduled_date=scheduled_date,
        order=0,
        importance=DEFAULT_IMPORTANCE if importance is None else importance,
        description=description,
        effort_estimate=effort_estimate,
    )


def new_weekly_goals(
    texts: list[str],
    week_start_date: date,
    id_factory: IdFactory = uuid.uuid4,
) -> tuple[WeeklyGoalSnapshot, ...]:
    return tuple(
        WeeklyGoalSnapshot(id=id_factory(), text=text, week_start_date=week_start_date)
        for text in texts
    )
