"""
Tests for the record store round trip against SQLite.
"""

import uuid
from dataclasses import replace
from datetime import date, datetime

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from stride import store
from stride.models import Task
from stride.models.enums import EffortEstimate, ProjectStatus, TaskStatus
from stride.services.snapshots import ProjectSnapshot, TaskSnapshot, new_weekly_goals
from stride.services.week import epoch_millis


def make_project(**overrides):
    values = dict(
        id=uuid.uuid4(),
        name="Learn piano",
        start_date=date(2024, 1, 1),
        target_date=date(2024, 3, 1),
        timeframe=60,
        goals=("Play a song",),
        weekly_goals=new_weekly_goals(["Scales", "Chords", "Rhythm"], date(2023, 12, 31)),
    )
    values.update(overrides)
    return ProjectSnapshot(**values)


def make_task(project_id, title, order, **overrides):
    return TaskSnapshot(
        id=uuid.uuid4(),
        project_id=project_id,
        title=title,
        scheduled_date=date(2024, 1, 2),
        order=order,
        **overrides,
    )


class TestRecordStore:

    @pytest.mark.asyncio
    async def test_create_and_load(self, session_maker):
        project = make_project()
        task = make_task(
            project.id, "Practice", 7,
            importance=5, effort_estimate=EffortEstimate.LARGE, description="30 minutes",
        )
        project = replace(project, tasks=(task,))

        async with session_maker() as session:
            await store.create_project(session, project)
            await session.commit()

        async with session_maker() as session:
            loaded = await store.load_project(session, project.id)

        assert loaded.name == "Learn piano"
        assert loaded.goals == ("Play a song",)
        assert loaded.current_week_start_date == date(2023, 12, 31)
        assert loaded.days_ahead == 0
        assert loaded.status == ProjectStatus.PLANNING
        assert [g.text for g in loaded.weekly_goals] == ["Scales", "Chords", "Rhythm"]
        assert loaded.tasks == (task,)

    @pytest.mark.asyncio
    async def test_load_unknown_project(self, session_maker):
        async with session_maker() as session:
            assert await store.load_project(session, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_commit_replaces_tasks_and_goals(self, session_maker):
        project = make_project()
        keep = make_task(project.id, "keep", 1)
        drop = make_task(project.id, "drop", 2)
        project = replace(project, tasks=(keep, drop))

        async with session_maker() as session:
            await store.create_project(session, project)
            await session.commit()

        added = make_task(project.id, "added", 3)
        goals = tuple(reversed(project.weekly_goals[1:]))
        updated = replace(
            project,
            tasks=(replace(keep, status=TaskStatus.DONE, order=99), added),
            weekly_goals=goals,
            days_ahead=-4,
            last_week_completed_date=date(2024, 1, 9),
        )

        async with session_maker() as session:
            await store.commit_project(session, updated)
            await session.commit()

        async with session_maker() as session:
            loaded = await store.load_project(session, project.id)

        assert {t.title for t in loaded.tasks} == {"keep", "added"}
        kept = next(t for t in loaded.tasks if t.id == keep.id)
        assert kept.status == TaskStatus.DONE
        assert kept.order == 99
        assert [g.text for g in loaded.weekly_goals] == ["Rhythm", "Chords"]
        assert loaded.days_ahead == -4
        assert loaded.last_week_completed_date == date(2024, 1, 9)

    @pytest.mark.asyncio
    async def test_delete_project(self, session_maker):
        project = make_project()
        project = replace(project, tasks=(make_task(project.id, "t", 1),))

        async with session_maker() as session:
            await store.create_project(session, project)
            await session.commit()

        async with session_maker() as session:
            assert await store.delete_project(session, project.id) is True
            await session.commit()

        async with session_maker() as session:
            assert await store.load_project(session, project.id) is None
            assert await store.list_projects(session) == []
            assert await store.delete_project(session, project.id) is False

    @pytest.mark.asyncio
    async def test_epoch_millisecond_order_round_trips(self, session_maker):
        order = epoch_millis(datetime(2024, 1, 4, 9, 30))
        project = make_project()
        task = make_task(project.id, "first of the day", order)
        project = replace(project, tasks=(task,))

        async with session_maker() as session:
            await store.create_project(session, project)
            await session.commit()

        async with session_maker() as session:
            loaded = await store.load_project(session, project.id)

        assert loaded.tasks[0].order == order == 1704360600000


class TestTaskTable:

    def test_order_column_is_bigint_on_postgres(self):
        ddl = str(CreateTable(Task.__table__).compile(dialect=postgresql.dialect()))

        assert '"order" BIGINT NOT NULL' in ddl
