"""
Task routes for the Stride API.

Tasks live under their project. Every mutation returns the project's
full task list in display order; an unknown task id leaves the list
unchanged rather than failing.
"""

import uuid
from dataclasses import replace
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stride import store
from stride.clock import Clock, get_clock
from stride.database import get_session
from stride.routes.projects import load_project_or_404
from stride.schemas import TaskCreate, TaskUpdate, TaskReorder, TaskRead
from stride.services import ordering
from stride.services.snapshots import ProjectSnapshot, TaskSnapshot, new_task
from stride.services.week import as_date
from stride.exceptions import ERROR_RESPONSES
from stride.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)

NULLABLE_TASK_FIELDS = {"description", "effort_estimate"}


async def commit_tasks(
    session: AsyncSession,
    project: ProjectSnapshot,
    tasks: tuple[TaskSnapshot, ...],
) -> list[TaskSnapshot]:
    if tasks != project.tasks:
        await store.commit_project(session, replace(project, tasks=tasks))
    return ordering.sort_for_display(tasks)


@router.get("/", response_model=list[TaskRead])
async def list_tasks(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> list[TaskSnapshot]:
    """List a project's tasks in display order."""
    project = await load_project_or_404(session, project_id)

    logger.debug(f"Listed {len(project.tasks)} tasks for project={project_id}")

    return ordering.sort_for_display(project.tasks)


@router.post("/", response_model=list[TaskRead], status_code=status.HTTP_201_CREATED)
async def create_task(
    project_id: uuid.UUID,
    task_in: TaskCreate,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> list[TaskSnapshot]:
    """
    Create a task and rank it among the tasks of its day.

    scheduled_date defaults to today and importance to 3.
    """
    project = await load_project_or_404(session, project_id)
    now = clock()

    task = new_task(
        project_id,
        task_in.title,
        task_in.scheduled_date or as_date(now),
        importance=task_in.importance,
        description=task_in.description,
        effort_estimate=task_in.effort_estimate,
    )
    tasks = ordering.insert_task(project.tasks, task, now)

    logger.info(f"Created task: id={task.id} title='{task.title}' project={project_id}")

    return await commit_tasks(session, project, tasks)


@router.patch("/{task_id}", response_model=list[TaskRead])
async def update_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    task_in: TaskUpdate,
    session: AsyncSession = Depends(get_session),
) -> list[TaskSnapshot]:
    """Update a task's fields. Order is only changed by toggle and reorder."""
    project = await load_project_or_404(session, project_id)

    update_data = {
        field: value
        for field, value in task_in.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_TASK_FIELDS
    }

    logger.info(f"Updating task {task_id}: {update_data}")

    tasks = ordering.update_task(project.tasks, task_id, update_data)
    return await commit_tasks(session, project, tasks)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a task. Deleting an unknown task is a no-op."""
    project = await load_project_or_404(session, project_id)

    logger.info(f"Deleting task {task_id} from project {project_id}")

    await commit_tasks(session, project, ordering.delete_task(project.tasks, task_id))


@router.post("/{task_id}/toggle", response_model=list[TaskRead])
async def toggle_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> list[TaskSnapshot]:
    """Mark a task done, or reopen a done task at the top of its day."""
    project = await load_project_or_404(session, project_id)
    tasks = ordering.toggle_task(project.tasks, task_id, clock())
    return await commit_tasks(session, project, tasks)


@router.put("/order", response_model=list[TaskRead])
async def reorder_tasks(
    project_id: uuid.UUID,
    reorder_in: TaskReorder,
    session: AsyncSession = Depends(get_session),
) -> list[TaskSnapshot]:
    """Renumber tasks to follow the given id order (e.g. after a drag)."""
    project = await load_project_or_404(session, project_id)

    logger.info(f"Reordering {len(reorder_in.task_ids)} tasks in project {project_id}")

    tasks = ordering.reorder_tasks(project.tasks, reorder_in.task_ids)
    return await commit_tasks(session, project, tasks)
