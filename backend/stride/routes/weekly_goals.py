"""
Weekly goal routes for the Stride API.
"""

import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stride import store
from stride.database import get_session
from stride.routes.projects import load_project_or_404
from stride.schemas import WeeklyGoalRead
from stride.services.progress import toggle_weekly_goal
from stride.services.snapshots import WeeklyGoalSnapshot
from stride.exceptions import ERROR_RESPONSES
from stride.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/", response_model=list[WeeklyGoalRead])
async def list_weekly_goals(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> list[WeeklyGoalSnapshot]:
    """List the current week's goals in order."""
    project = await load_project_or_404(session, project_id)
    return list(project.weekly_goals)


@router.post("/{goal_id}/toggle", response_model=list[WeeklyGoalRead])
async def toggle_goal(
    project_id: uuid.UUID,
    goal_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
) -> list[WeeklyGoalSnapshot]:
    """
    Flip a goal's completed flag.

    Completing every goal does not advance the week; clients call
    advance-week when they decide to move on.
    """
    project = await load_project_or_404(session, project_id)
    updated = toggle_weekly_goal(project, goal_id)

    if updated is not project:
        logger.info(f"Toggled weekly goal {goal_id} in project {project_id}")
        await store.commit_project(session, updated)

    return list(updated.weekly_goals)
