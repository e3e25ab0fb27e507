from stride.models.enums import EffortEstimate, ProjectStatus, TaskStatus
from stride.models.project import Project, WeeklyGoal
from stride.models.task import Task

__all__ = [
    "EffortEstimate",
    "ProjectStatus",
    "TaskStatus",
    "Project",
    "WeeklyGoal",
    "Task",
]
