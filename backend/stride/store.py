"""
Record store: loads and commits whole project snapshots.

Routes and the worker read a ProjectSnapshot, hand it to the scheduling
services, and commit the returned snapshot as a full replacement. Task
and goal rows missing from a committed snapshot are deleted; new ones are
inserted.
"""

import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from sqlmodel import select

from stride.models import Project, Task, WeeklyGoal
from stride.services.snapshots import ProjectSnapshot, TaskSnapshot, WeeklyGoalSnapshot
from stride.logging_config import get_logger

logger = get_logger(__name__)

PROJECT_FIELDS = (
    "name",
    "description",
    "status",
    "long_term_goal",
    "timeframe",
    "start_date",
    "target_date",
    "current_week_start_date",
    "days_ahead",
    "last_week_completed_date",
)

TASK_FIELDS = (
    "title",
    "description",
    "scheduled_date",
    "status",
    "effort_estimate",
    "importance",
    "order",
)


def task_to_snapshot(row: Task) -> TaskSnapshot:
    return TaskSnapshot(
        id=row.id,
        project_id=row.project_id,
        title=row.title,
        description=row.description,
        scheduled_date=row.scheduled_date,
        status=row.status,
        effort_estimate=row.effort_estimate,
        importance=row.importance,
        order=row.order,
    )


def goal_to_snapshot(row: WeeklyGoal) -> WeeklyGoalSnapshot:
    return WeeklyGoalSnapshot(
        id=row.id,
        text=row.text,
        completed=row.completed,
        week_start_date=row.week_start_date,
    )


def project_to_snapshot(
    row: Project,
    tasks: list[Task],
    goals: list[WeeklyGoal],
) -> ProjectSnapshot:
    return ProjectSnapshot(
        id=row.id,
        name=row.name,
        description=row.description,
        status=row.status,
        long_term_goal=row.long_term_goal,
        goals=tuple(row.goals or ()),
        timeframe=row.timeframe,
        start_date=row.start_date,
        target_date=row.target_date,
        current_week_start_date=row.current_week_start_date,
        days_ahead=row.days_ahead or 0,
        last_week_completed_date=row.last_week_completed_date,
        weekly_goals=tuple(goal_to_snapshot(g) for g in goals),
        tasks=tuple(task_to_snapshot(t) for t in tasks),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


async def _fetch_children(
    session: AsyncSession,
    project_id: uuid.UUID,
) -> tuple[list[Task], list[WeeklyGoal]]:
    tasks_result = await session.execute(
        select(Task).where(Task.project_id == project_id)
    )
    goals_result = await session.execute(
        select(WeeklyGoal)
        .where(WeeklyGoal.project_id == project_id)
        .order_by(WeeklyGoal.position)
    )
    return list(tasks_result.scalars().all()), list(goals_result.scalars().all())


async def load_project(
    session: AsyncSession,
    project_id: uuid.UUID,
) -> ProjectSnapshot | None:
    """Read a project with its tasks and goals, or None if it does not exist."""
    row = await session.get(Project, project_id)
    if row is None:
        return None

    tasks, goals = await _fetch_children(session, project_id)
    return project_to_snapshot(row, tasks, goals)


async def list_project_ids(session: AsyncSession) -> list[uuid.UUID]:
    result = await session.execute(select(Project.id))
    return [row[0] for row in result.all()]


async def list_projects(session: AsyncSession) -> list[ProjectSnapshot]:
    result = await session.execute(select(Project).order_by(Project.created_at))
    projects = []
    for row in result.scalars().all():
        tasks, goals = await _fetch_children(session, row.id)
        projects.append(project_to_snapshot(row, tasks, goals))

    logger.debug(f"Loaded {len(projects)} projects")
    return projects


async def create_project(session: AsyncSession, snapshot: ProjectSnapshot) -> None:
    """Insert a new project; its tasks and goals follow via commit_project()."""
    row = Project(
        id=snapshot.id,
        goals=list(snapshot.goals),
        created_at=snapshot.created_at,
        updated_at=snapshot.updated_at,
        **{name: getattr(snapshot, name) for name in PROJECT_FIELDS},
    )
    session.add(row)
    await session.flush()
    await commit_project(session, snapshot)


async def commit_project(session: AsyncSession, snapshot: ProjectSnapshot) -> None:
    """
    Persist a snapshot as the full state of its project.

    Does nothing if the project row has been deleted in the meantime.
    """
    row = await session.get(Project, snapshot.id)
    if row is None:
        logger.warning(f"Commit skipped: project {snapshot.id} no longer exists")
        return

    for name in PROJECT_FIELDS:
        setattr(row, name, getattr(snapshot, name))
    row.goals = list(snapshot.goals)
    row.updated_at = datetime.utcnow()

    task_rows, goal_rows = await _fetch_children(session, snapshot.id)
    await _sync_tasks(session, snapshot, {t.id: t for t in task_rows})
    await _sync_goals(session, snapshot, {g.id: g for g in goal_rows})

    await session.flush()


async def _sync_tasks(
    session: AsyncSession,
    snapshot: ProjectSnapshot,
    existing: dict[uuid.UUID, Task],
) -> None:
    keep = set()
    for task in snapshot.tasks:
        keep.add(task.id)
        values = {name: getattr(task, name) for name in TASK_FIELDS}
        row = existing.get(task.id)
        if row is None:
            session.add(Task(id=task.id, project_id=snapshot.id, **values))
            continue
        if any(getattr(row, name) != value for name, value in values.items()):
            for name, value in values.items():
                setattr(row, name, value)
            row.updated_at = datetime.utcnow()

    for task_id, row in existing.items():
        if task_id not in keep:
            await session.delete(row)


async def _sync_goals(
    session: AsyncSession,
    snapshot: ProjectSnapshot,
    existing: dict[uuid.UUID, WeeklyGoal],
) -> None:
    keep = set()
    for position, goal in enumerate(snapshot.weekly_goals):
        keep.add(goal.id)
        row = existing.get(goal.id)
        if row is None:
            row = WeeklyGoal(id=goal.id, project_id=snapshot.id, text=goal.text,
                             week_start_date=goal.week_start_date)
            session.add(row)
        row.text = goal.text
        row.completed = goal.completed
        row.week_start_date = goal.week_start_date
        row.position = position

    for goal_id, row in existing.items():
        if goal_id not in keep:
            await session.delete(row)


async def delete_project(session: AsyncSession, project_id: uuid.UUID) -> bool:
    """Delete a project with its tasks and goals. Returns False if it did not exist."""
    row = await session.get(Project, project_id)
    if row is None:
        return False

    await session.execute(delete(Task).where(Task.project_id == project_id))
    await session.execute(delete(WeeklyGoal).where(WeeklyGoal.project_id == project_id))
    await session.delete(row)
    await session.flush()
    return True
