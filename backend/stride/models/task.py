import uuid
from datetime import date, datetime
from sqlalchemy import BigInteger, Column
from sqlmodel import SQLModel, Field

from stride.models.enums import EffortEstimate, TaskStatus


class Task(SQLModel, table=True):
    """
    Daily task model.

    Key fields:
    - scheduled_date: the calendar day the task belongs to
    - importance: 1-5, higher sorts first among pending tasks
    - order: sort key among tasks sharing a day and done/pending state
    """

    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True)
    description: str | None = Field(default=None)
    scheduled_date: date = Field(index=True)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    effort_estimate: EffortEstimate | None = Field(default=None)
    importance: int = Field(default=3)
    # Epoch milliseconds for new and completed tasks, beyond int4 range
    order: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))

    # Foreign keys
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
