"""
Tests for the weekly progress tracker and the days-ahead decay.
"""

import random
import uuid
from datetime import date, datetime, timedelta

import pytest

from stride.models.enums import TaskStatus
from stride.services.progress import (
    advance_week,
    calculate_days_ahead,
    current_next_week_start,
    is_week_complete,
    summarize_progress,
    toggle_weekly_goal,
)
from stride.services.snapshots import ProjectSnapshot, TaskSnapshot, new_weekly_goals
from stride.services.week import days_between


def make_project(**overrides):
    """Project starting Monday 2024-01-01; first week starts 2023-12-31."""
    values = dict(
        id=uuid.uuid4(),
        name="Run a marathon",
        start_date=date(2024, 1, 1),
        target_date=date(2024, 4, 1),
        timeframe=91,
        weekly_goals=new_weekly_goals(["Plan", "Buy shoes"], date(2023, 12, 31)),
    )
    values.update(overrides)
    return ProjectSnapshot(**values)


class TestProjectDefaults:

    def test_week_start_derived_from_start_date(self):
        assert make_project().current_week_start_date == date(2023, 12, 31)

    def test_days_ahead_starts_at_zero(self):
        project = make_project(days_ahead=None)
        assert project.days_ahead == 0


class TestToggleWeeklyGoal:

    def test_flips_one_goal(self):
        project = make_project()
        goal = project.weekly_goals[0]

        updated = toggle_weekly_goal(project, goal.id)

        assert updated.weekly_goals[0].completed is True
        assert updated.weekly_goals[1].completed is False
        assert updated.days_ahead == project.days_ahead

        again = toggle_weekly_goal(updated, goal.id)
        assert again.weekly_goals[0].completed is False

    def test_unknown_goal_returns_project_unchanged(self):
        project = make_project()
        assert toggle_weekly_goal(project, uuid.uuid4()) is project

    def test_week_complete_only_when_all_goals_done(self):
        project = make_project()
        assert not is_week_complete(project)

        for goal in project.weekly_goals:
            project = toggle_weekly_goal(project, goal.id)
        assert is_week_complete(project)

    def test_week_without_goals_is_not_complete(self):
        assert not is_week_complete(make_project(weekly_goals=()))


class TestAdvanceWeek:

    def test_early_advance_banks_remaining_days(self):
        """Advancing on Thursday 2024-01-04 leaves 3 days until 2024-01-07."""
        project = advance_week(make_project(), date(2024, 1, 4))

        assert project.days_ahead == 3
        assert project.current_week_start_date == date(2024, 1, 7)
        assert project.last_week_completed_date == date(2024, 1, 4)

    def test_late_advance_goes_negative(self):
        project = advance_week(make_project(), date(2024, 1, 9))

        assert project.days_ahead == -2
        assert project.current_week_start_date == date(2024, 1, 7)

    def test_gains_accumulate(self):
        project = advance_week(make_project(days_ahead=4), date(2024, 1, 4))
        assert project.days_ahead == 7

    def test_time_of_day_rounds_up(self):
        # 2.5 days before the boundary counts as 3
        project = advance_week(make_project(), datetime(2024, 1, 4, 12))

        assert project.days_ahead == 3
        assert project.last_week_completed_date == date(2024, 1, 4)

    def test_goals_reset_and_carried_forward(self):
        project = make_project()
        for goal in project.weekly_goals:
            project = toggle_weekly_goal(project, goal.id)

        advanced = advance_week(project, date(2024, 1, 4))

        assert [g.text for g in advanced.weekly_goals] == ["Plan", "Buy shoes"]
        assert [g.id for g in advanced.weekly_goals] == [g.id for g in project.weekly_goals]
        assert all(not g.completed for g in advanced.weekly_goals)
        assert all(g.week_start_date == date(2024, 1, 7) for g in advanced.weekly_goals)

    def test_tasks_are_untouched(self):
        task = TaskSnapshot(
            id=uuid.uuid4(),
            project_id=uuid.uuid4(),
            title="Run 5k",
            scheduled_date=date(2024, 1, 3),
            order=1,
        )
        project = make_project(tasks=(task,))

        assert advance_week(project, date(2024, 1, 4)).tasks == (task,)


class TestCalculateDaysAhead:

    def test_no_completed_week_returns_base(self):
        assert calculate_days_ahead(make_project(days_ahead=5), date(2024, 2, 1)) == 5

    def test_on_next_week_start_no_decay_yet(self):
        """
        Scenario: advanced 3 days early; read exactly on the following
        week boundary (2024-01-14): nothing elapsed past it, still 3.
        """
        project = advance_week(make_project(), date(2024, 1, 4))
        assert current_next_week_start(project) == date(2024, 1, 14)

        assert calculate_days_ahead(project, date(2024, 1, 14)) == 3

    def test_decays_one_per_day_after_boundary(self):
        """Scenario: two days past the boundary, 3 - 2 = 1."""
        project = advance_week(make_project(), date(2024, 1, 4))

        assert calculate_days_ahead(project, date(2024, 1, 16)) == 1

    def test_floors_at_zero(self):
        project = advance_week(make_project(), date(2024, 1, 4))

        assert calculate_days_ahead(project, date(2024, 2, 1)) == 0

    def test_lead_capped_by_days_remaining(self):
        project = advance_week(make_project(), date(2024, 1, 4))

        assert calculate_days_ahead(project, date(2024, 1, 7)) == 3
        assert calculate_days_ahead(project, date(2024, 1, 12)) == 2
        assert calculate_days_ahead(project, date(2024, 1, 13)) == 1

    def test_behind_schedule_reads_zero(self):
        project = advance_week(make_project(), date(2024, 1, 9))

        assert project.days_ahead == -2
        assert calculate_days_ahead(project, date(2024, 1, 10)) == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_bounds(self, seed):
        rng = random.Random(seed)
        for _ in range(200):
            project = make_project(
                days_ahead=rng.randint(-20, 20),
                last_week_completed_date=date(2024, 1, 1),
            )
            now = datetime(2023, 12, 20) + timedelta(hours=rng.randint(0, 24 * 40))
            next_start = current_next_week_start(project)

            result = calculate_days_ahead(project, now)

            assert result >= 0
            assert result <= max(project.days_ahead, 0)
            if now < datetime(next_start.year, next_start.month, next_start.day):
                assert result <= days_between(now, next_start)


class TestSummarizeProgress:

    def test_counts(self):
        project_id = uuid.uuid4()
        today = date(2024, 1, 4)

        def task(status, day=today):
            return TaskSnapshot(
                id=uuid.uuid4(), project_id=project_id, title="t",
                scheduled_date=day, order=0, status=status,
            )

        tasks = (
            task(TaskStatus.DONE),
            task(TaskStatus.PENDING),
            task(TaskStatus.MISSED, day=date(2024, 1, 2)),
            task(TaskStatus.DONE, day=date(2024, 1, 3)),
        )
        project = make_project(id=project_id, tasks=tasks)
        project = toggle_weekly_goal(project, project.weekly_goals[0].id)

        progress = summarize_progress(project, datetime(2024, 1, 4, 15))

        assert progress.total_tasks == 4
        assert progress.completed_tasks == 2
        assert progress.missed_tasks == 1
        assert progress.today_tasks == 2
        assert progress.today_completed_tasks == 1
        assert progress.completion_percent == 50
        assert progress.goals_total == 2
        assert progress.goals_completed == 1
        assert progress.week_complete is False
        assert progress.days_ahead == 0
        assert progress.raw_days_ahead == 0

    def test_empty_project(self):
        progress = summarize_progress(make_project(weekly_goals=()), date(2024, 1, 4))

        assert progress.total_tasks == 0
        assert progress.completion_percent == 0
