from stride.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectRead,
    WeeklyGoalRead,
    DaysAheadRead,
    ProjectProgressRead,
)
from stride.schemas.task import TaskCreate, TaskUpdate, TaskReorder, TaskRead

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectRead",
    "WeeklyGoalRead",
    "DaysAheadRead",
    "ProjectProgressRead",
    "TaskCreate",
    "TaskUpdate",
    "TaskReorder",
    "TaskRead",
]
