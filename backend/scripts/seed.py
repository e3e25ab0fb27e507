#!/usr/bin/env python3
"""
Seed script creating a sample project for local development.

Builds the same starter plan the app shows while real plan generation is
stubbed out: three weekly goals and a week of daily tasks. Extra tasks
with random importance can be added to exercise the ordering engine.

Usage:
    python -m scripts.seed [--name NAME] [--days 7] [--extra 0] [--seed 1]
"""

import argparse
import asyncio
import random
import time
import uuid
from datetime import date, datetime, timedelta

from stride import store
from stride.database import async_session_maker, init_db
from stride.models.enums import EffortEstimate, ProjectStatus
from stride.services.ordering import insert_task, sort_for_display
from stride.services.snapshots import ProjectSnapshot, new_task, new_weekly_goals
from stride.services.week import week_start

SAMPLE_WEEKLY_GOALS = [
    "Complete initial research and planning",
    "Set up necessary resources and tools",
    "Begin executing core tasks",
]

EFFORT_CYCLE = [EffortEstimate.SMALL, EffortEstimate.MEDIUM, EffortEstimate.LARGE]


def build_sample_project(
    name: str,
    start: date,
    days: int = 7,
    extra: int = 0,
    timeframe: int = 90,
    rng: random.Random | None = None,
) -> ProjectSnapshot:
    """
    Build a sample project snapshot.

    One task per day for `days` days, then `extra` tasks spread over the
    same days with random importance, all placed through insert_task().
    """
    rng = rng or random.Random()
    project_id = uuid.uuid4()
    now = datetime.combine(start, datetime.min.time())

    tasks = ()
    for i in range(days):
        task = new_task(
            project_id,
            f"Task {i + 1} for {name}",
            start + timedelta(days=i),
            description=f"Complete this task as part of your {name} project",
            effort_estimate=EFFORT_CYCLE[i % len(EFFORT_CYCLE)],
        )
        tasks = insert_task(tasks, task, now)

    for i in range(extra):
        task = new_task(
            project_id,
            f"Extra task {i + 1}",
            start + timedelta(days=rng.randrange(max(days, 1))),
            importance=rng.randint(1, 5),
        )
        tasks = insert_task(tasks, task, now)

    return ProjectSnapshot(
        id=project_id,
        name=name,
        description=f"Sample plan for {name}",
        status=ProjectStatus.ACTIVE,
        long_term_goal=f"Successfully achieve: {name} within {timeframe} days.",
        timeframe=timeframe,
        start_date=start,
        target_date=start + timedelta(days=timeframe),
        weekly_goals=new_weekly_goals(SAMPLE_WEEKLY_GOALS, week_start(start)),
        tasks=tasks,
    )


async def main():
    parser = argparse.ArgumentParser(description="Seed the database with a sample project")
    parser.add_argument("--name", type=str, default="Sample Project", help="Project name")
    parser.add_argument("--days", type=int, default=7, help="Days of starter tasks")
    parser.add_argument("--extra", type=int, default=0, help="Extra tasks with random importance")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    print("=== Stride Seed Script ===")

    await init_db()

    start_time = time.time()
    project = build_sample_project(
        args.name,
        date.today(),
        days=args.days,
        extra=args.extra,
        rng=random.Random(args.seed),
    )
    print(f"Built {len(project.tasks)} tasks in {time.time() - start_time:.2f}s")

    async with async_session_maker() as session:
        await store.create_project(session, project)
        await session.commit()

    print(f"Created project: {project.name} ({project.id})")
    for task in sort_for_display(project.tasks)[:10]:
        print(f"  {task.scheduled_date}  imp={task.importance}  {task.title}")


if __name__ == "__main__":
    asyncio.run(main())
