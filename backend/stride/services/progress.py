"""
Weekly progress tracker.

Tracks completion of the current week's goals, advances projects to the
next week, and reports how far ahead of schedule a project is.

Days ahead
----------
project.days_ahead is a signed running tally. Every advance adds the
number of days left until the week would have ended naturally:

    advance 3 days early  -> +3
    advance 2 days late   -> -2

calculate_days_ahead() turns the tally into a non-negative reading that
decays over time: before the next week boundary the lead can never exceed
the days actually left, and after the boundary it shrinks by one per day.
The raw tally is the only place a behind-schedule value is kept.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime

from stride.models.enums import TaskStatus
from stride.services.snapshots import ProjectSnapshot
from stride.services.week import as_date, as_datetime, days_between, next_week_start
from stride.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ProjectProgress:
    """Completion statistics for one project."""
    project_id: uuid.UUID
    total_tasks: int
    completed_tasks: int
    missed_tasks: int
    today_tasks: int
    today_completed_tasks: int
    completion_percent: int
    goals_total: int
    goals_completed: int
    week_complete: bool
    days_ahead: int  # Decayed, never negative
    raw_days_ahead: int  # Signed accumulator


def current_next_week_start(project: ProjectSnapshot) -> date:
    return next_week_start(project.current_week_start_date)


def toggle_weekly_goal(project: ProjectSnapshot, goal_id: uuid.UUID) -> ProjectSnapshot:
    """Flip one goal's completed flag. Does not touch days_ahead."""
    if not any(goal.id == goal_id for goal in project.weekly_goals):
        return project

    goals = tuple(
        replace(goal, completed=not goal.completed) if goal.id == goal_id else goal
        for goal in project.weekly_goals
    )
    return replace(project, weekly_goals=goals)


def is_week_complete(project: ProjectSnapshot) -> bool:
    """True when the week has goals and all of them are completed."""
    return bool(project.weekly_goals) and all(goal.completed for goal in project.weekly_goals)


def advance_week(project: ProjectSnapshot, now: date | datetime) -> ProjectSnapshot:
    """
    Move the project on to the next week.

    Banks the days remaining until the current week's natural end into
    days_ahead (negative when advancing late), records today as the
    completion date, and carries the goals forward unchecked.
    """
    next_start = current_next_week_start(project)
    gained = days_between(now, next_start)

    goals = tuple(
        replace(goal, completed=False, week_start_date=next_start)
        for goal in project.weekly_goals
    )

    logger.info(
        f"Advancing project {project.id} to week of {next_start}: "
        f"days_ahead {project.days_ahead} -> {project.days_ahead + gained}"
    )

    return replace(
        project,
        days_ahead=project.days_ahead + gained,
        last_week_completed_date=as_date(now),
        current_week_start_date=next_start,
        weekly_goals=goals,
    )


def calculate_days_ahead(project: ProjectSnapshot, now: date | datetime) -> int:
    """
    Decayed days-ahead reading for display.

    Returns the raw tally until a week has been completed early at least
    once. After that:
      - before the next week boundary: min(tally, days left), floored at 0
      - on or after it: tally minus days elapsed since, floored at 0
    """
    base = project.days_ahead
    if project.last_week_completed_date is None:
        return base

    next_start = current_next_week_start(project)
    if as_datetime(now) < as_datetime(next_start):
        until_next = days_between(now, next_start)
        return max(0, min(base, until_next))

    past = days_between(next_start, now)
    return max(0, base - past)


def summarize_progress(project: ProjectSnapshot, now: date | datetime) -> ProjectProgress:
    today = as_date(now)
    tasks = project.tasks
    todays = [t for t in tasks if t.scheduled_date == today]
    completed = sum(1 for t in tasks if t.is_done)

    return ProjectProgress(
        project_id=project.id,
        total_tasks=len(tasks),
        completed_tasks=completed,
        missed_tasks=sum(1 for t in tasks if t.status == TaskStatus.MISSED),
        today_tasks=len(todays),
        today_completed_tasks=sum(1 for t in todays if t.is_done),
        completion_percent=round(100 * completed / len(tasks)) if tasks else 0,
        goals_total=len(project.weekly_goals),
        goals_completed=sum(1 for goal in project.weekly_goals if goal.completed),
        week_complete=is_week_complete(project),
        days_ahead=calculate_days_ahead(project, now),
        raw_days_ahead=project.days_ahead,
    )
