"""
Project routes for the Stride API.
"""

import uuid
from dataclasses import replace
from datetime import timedelta
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stride import store
from stride.clock import Clock, get_clock
from stride.database import get_session
from stride.schemas import (
    DaysAheadRead,
    ProjectCreate,
    ProjectProgressRead,
    ProjectRead,
    ProjectUpdate,
)
from stride.services.progress import (
    advance_week,
    calculate_days_ahead,
    current_next_week_start,
    summarize_progress,
)
from stride.services.snapshots import ProjectSnapshot, new_weekly_goals
from stride.services.week import as_date, week_start
from stride.exceptions import ERROR_RESPONSES, NotFoundError, ValidationError
from stride.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)

NULLABLE_PROJECT_FIELDS = {"description", "long_term_goal"}


async def load_project_or_404(session: AsyncSession, project_id: uuid.UUID) -> ProjectSnapshot:
    project = await store.load_project(session, project_id)
    if project is None:
        raise NotFoundError("Project", str(project_id))
    return project


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> ProjectSnapshot:
    """
    Create a new project.

    start_date defaults to today and target_date to start_date + timeframe.
    weekly_goals become the goals of the week containing start_date.
    """
    start_date = project_in.start_date or as_date(clock())
    target_date = project_in.target_date or start_date + timedelta(days=project_in.timeframe)
    if target_date < start_date:
        raise ValidationError(
            "target_date must not be before start_date",
            details=[{
                "loc": ["body", "target_date"],
                "msg": f"{target_date} is before {start_date}",
                "type": "date_order",
            }],
        )

    first_week = week_start(start_date)
    project = ProjectSnapshot(
        id=uuid.uuid4(),
        name=project_in.name,
        description=project_in.description,
        long_term_goal=project_in.long_term_goal,
        goals=tuple(project_in.goals),
        timeframe=project_in.timeframe,
        start_date=start_date,
        target_date=target_date,
        current_week_start_date=first_week,
        weekly_goals=new_weekly_goals(project_in.weekly_goals, first_week),
    )
    await store.create_project(session, project)

    logger.info(f"Created project: id={project.id} name='{project.name}'")

    return project


@router.get("/", response_model=list[ProjectRead])
async def list_projects(
    session: AsyncSession = Depends(get_session),
) -> list[ProjectSnapshot]:
    """List all projects."""
    return await store.list_projects(session)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> ProjectSnapshot:
    """Get a project by ID."""
    return await load_project_or_404(session, project_id)


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
) -> ProjectSnapshot:
    """Update a project's descriptive fields."""
    project = await load_project_or_404(session, project_id)

    update_data = {
        field: value
        for field, value in project_in.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_PROJECT_FIELDS
    }

    logger.info(f"Updating project {project_id}: {update_data}")

    if "goals" in update_data:
        update_data["goals"] = tuple(update_data["goals"])
    project = replace(project, **update_data)
    if project.target_date < project.start_date:
        raise ValidationError("target_date must not be before start_date")

    await store.commit_project(session, project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a project with all its tasks and weekly goals."""
    deleted = await store.delete_project(session, project_id)
    if not deleted:
        raise NotFoundError("Project", str(project_id))

    logger.info(f"Deleted project {project_id}")


@router.post("/{project_id}/advance-week", response_model=ProjectRead)
async def advance_project_week(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> ProjectSnapshot:
    """
    Move the project to its next week.

    Days left until the current week's natural end are banked into
    days_ahead (negative when late) and the weekly goals are reset.
    """
    project = advance_week(await load_project_or_404(session, project_id), clock())
    await store.commit_project(session, project)
    return project


@router.get("/{project_id}/days-ahead", response_model=DaysAheadRead)
async def get_days_ahead(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> DaysAheadRead:
    """Decayed days-ahead reading plus the raw signed tally."""
    project = await load_project_or_404(session, project_id)
    return DaysAheadRead(
        days_ahead=calculate_days_ahead(project, clock()),
        raw_days_ahead=project.days_ahead,
        next_week_start=current_next_week_start(project),
    )


@router.get("/{project_id}/progress", response_model=ProjectProgressRead)
async def get_progress(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Task and weekly goal completion statistics."""
    project = await load_project_or_404(session, project_id)
    return summarize_progress(project, clock())
