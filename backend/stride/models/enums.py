from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"
    MISSED = "missed"  # set by the overdue sweep, never by the ordering engine


class EffortEstimate(str, Enum):
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
