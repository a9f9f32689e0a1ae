"""Tests for goal creation, progress and completion."""

from datetime import date

import pytest

from fittrack.core.exceptions import InvalidGoal
from fittrack.engine.goals import (
    create_goal,
    effective_status,
    is_active,
    progress_percentage,
    update_progress,
)
from fittrack.engine.metric_types import GoalStatus, GoalType

START = date(2026, 3, 1)
END = date(2026, 3, 31)


@pytest.fixture
def steps_goal():
    return create_goal(1, GoalType.STEPS, 10000, START, END)


class TestCreateGoal:
    def test_new_goal_starts_in_progress_at_zero(self, steps_goal):
        assert steps_goal.status is GoalStatus.IN_PROGRESS
        assert steps_goal.current_value == 0
        assert steps_goal.id is None

    @pytest.mark.parametrize("target", [0, -5])
    def test_rejects_non_positive_target(self, target):
        with pytest.raises(InvalidGoal):
            create_goal(1, GoalType.STEPS, target, START, END)

    def test_rejects_end_before_start(self):
        with pytest.raises(InvalidGoal) as exc_info:
            create_goal(1, GoalType.STEPS, 100, END, START)
        assert exc_info.value.code == "INVALID_GOAL"

    def test_single_day_goal_allowed(self):
        goal = create_goal(1, GoalType.WEIGHT, 70, START, START)
        assert goal.start_date == goal.end_date


class TestUpdateProgress:
    """Completion happens once, on the transition."""

    def test_below_target_stays_in_progress(self, steps_goal):
        update = update_progress(steps_goal, 4000)
        assert update.goal.current_value == 4000
        assert update.goal.status is GoalStatus.IN_PROGRESS
        assert update.completed is False

    def test_reaching_target_completes(self, steps_goal):
        update = update_progress(steps_goal, 10000)
        assert update.goal.status is GoalStatus.COMPLETED
        assert update.completed is True
        assert progress_percentage(update.goal) == 100.0

    def test_completion_reported_once(self, steps_goal):
        first = update_progress(steps_goal, 10000)
        second = update_progress(first.goal, 12000)
        assert second.completed is False
        assert second.goal.status is GoalStatus.COMPLETED
        assert second.goal.current_value == 12000

    def test_completed_goal_stays_completed_when_value_drops(self, steps_goal):
        completed = update_progress(steps_goal, 10000).goal
        lowered = update_progress(completed, 2000)
        assert lowered.goal.status is GoalStatus.COMPLETED
        assert lowered.completed is False

    def test_negative_value_rejected(self, steps_goal):
        with pytest.raises(InvalidGoal):
            update_progress(steps_goal, -50)

    def test_original_goal_unchanged(self, steps_goal):
        update_progress(steps_goal, 10000)
        assert steps_goal.current_value == 0
        assert steps_goal.status is GoalStatus.IN_PROGRESS


class TestProgressPercentage:
    def test_partial(self, steps_goal):
        goal = update_progress(steps_goal, 2500).goal
        assert progress_percentage(goal) == 25.0

    def test_clamped_at_100(self, steps_goal):
        goal = update_progress(steps_goal, 25000).goal
        assert progress_percentage(goal) == 100.0

    @pytest.mark.parametrize(
        "values",
        [
            [0, 1, 2500, 9999, 10000, 15000],
            [0.5, 0.5, 300.25, 7000, 7000.5],
            [100, 5000, 10000, 10001, 50000],
        ],
    )
    def test_never_decreases_as_value_rises(self, steps_goal, values):
        percentages = [progress_percentage(update_progress(steps_goal, v).goal) for v in values]
        assert percentages == sorted(percentages)
        assert all(0 <= p <= 100 for p in percentages)


class TestEffectiveStatus:
    """Past-due in-progress goals read as failed without being rewritten."""

    def test_in_window(self, steps_goal):
        assert effective_status(steps_goal, date(2026, 3, 15)) is GoalStatus.IN_PROGRESS
        assert is_active(steps_goal, date(2026, 3, 31))

    def test_past_end_date_reads_failed(self, steps_goal):
        assert effective_status(steps_goal, date(2026, 4, 1)) is GoalStatus.FAILED
        assert not is_active(steps_goal, date(2026, 4, 1))
        assert steps_goal.status is GoalStatus.IN_PROGRESS

    def test_completed_goal_never_fails(self, steps_goal):
        completed = update_progress(steps_goal, 10000).goal
        assert effective_status(completed, date(2026, 5, 1)) is GoalStatus.COMPLETED
