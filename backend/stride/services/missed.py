"""
Overdue task sweep.

A pending task whose day has passed becomes missed. The ordering engine
never sets this status; it only treats missed tasks as not done.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Sequence

from stride.database import get_session_context
from stride.models.enums import TaskStatus
from stride.services.snapshots import TaskSnapshot
from stride.services.week import as_date
from stride import store
from stride.logging_config import get_logger

logger = get_logger(__name__)


def mark_missed(
    tasks: Sequence[TaskSnapshot],
    today: date | datetime,
) -> tuple[TaskSnapshot, ...]:
    """Mark pending tasks scheduled before today as missed. Orders are kept."""
    cutoff = as_date(today)
    return tuple(
        replace(t, status=TaskStatus.MISSED)
        if t.status == TaskStatus.PENDING and t.scheduled_date < cutoff
        else t
        for t in tasks
    )


async def sweep_missed_tasks(ctx: dict) -> str:
    """
    ARQ cron job: mark overdue pending tasks as missed in every project.

    Each project is committed in its own session so one failure does not
    roll back the others.
    """
    clock = ctx.get("clock", datetime.utcnow)
    today = as_date(clock())

    async with get_session_context() as session:
        project_ids = await store.list_project_ids(session)

    marked = 0
    for project_id in project_ids:
        async with get_session_context() as session:
            project = await store.load_project(session, project_id)
            if project is None:
                continue

            tasks = mark_missed(project.tasks, today)
            changed = sum(1 for before, after in zip(project.tasks, tasks) if before != after)
            if not changed:
                continue

            await store.commit_project(session, replace(project, tasks=tasks))
            logger.info(f"Marked {changed} tasks missed in project {project_id}")
            marked += changed

    return f"Marked {marked} tasks missed across {len(project_ids)} projects"
