import uuid
from datetime import date
from pydantic import BaseModel, Field

from stride.models.enums import EffortEstimate, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a new task."""
    title: str = Field(min_length=1)
    description: str | None = None
    scheduled_date: date | None = None  # Defaults to today if not provided
    effort_estimate: EffortEstimate | None = None
    importance: int | None = Field(default=None, ge=1, le=5)  # None -> 3


class TaskUpdate(BaseModel):
    """Schema for updating a task."""
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    scheduled_date: date | None = None
    status: TaskStatus | None = None
    effort_estimate: EffortEstimate | None = None
    importance: int | None = Field(default=None, ge=1, le=5)


class TaskReorder(BaseModel):
    """Full ordering of task ids, e.g. after a drag and drop."""
    task_ids: list[uuid.UUID]


class TaskRead(BaseModel):
    """Schema for reading a task."""
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: str | None
    scheduled_date: date
    status: TaskStatus
    effort_estimate: EffortEstimate | None
    importance: int
    order: int

    model_config = {"from_attributes": True}
