"""
Tests for the dashboard aggregates.
"""
import pytest

from tasklist.endpoints import categories, dashboard, tasks
from tasklist.endpoints.dashboard import completion_rate
from tasklist.helpers.constants import ONE_HOUR_MS, ONE_WEEK_MS
from tasklist.models import CategoryCreate, TaskCreate


class TestCompletionRate:
    """Tests for the completion rate formula."""

    def test_half_completed(self):
        assert completion_rate(completed=1, total=3, archived=1) == 50

    def test_all_archived_is_zero(self):
        assert completion_rate(completed=0, total=2, archived=2) == 0

    def test_no_tasks_is_zero(self):
        assert completion_rate(0, 0, 0) == 0

    @pytest.mark.parametrize("completed,total,expected", [(1, 3, 33), (2, 3, 67), (1, 8, 13)])
    def test_rounds_to_nearest_percent(self, completed, total, expected):
        assert completion_rate(completed, total, 0) == expected


class TestSummary:
    """Tests for dashboard.summary and friends."""

    def test_three_task_example(self, make_ctx):
        """A high todo, B low completed, C archived: 3 tasks, 50% complete."""
        with make_ctx() as ctx:
            tasks.create_task(ctx, TaskCreate(title="A", priority="high"))
            b = tasks.create_task(ctx, TaskCreate(title="B", priority="low"))
            c = tasks.create_task(ctx, TaskCreate(title="C"))
            tasks.complete_task(ctx, b)
            tasks.archive_task(ctx, c)

        with make_ctx() as ctx:
            result = dashboard.summary(ctx)
        assert result.total_tasks == 3
        assert result.todo_tasks == 1
        assert result.completed_tasks == 1
        assert result.archived_tasks == 1
        assert result.high_priority_tasks == 1
        assert result.completion_rate == 50

    def test_overdue_and_categories(self, make_ctx, add_task, clock):
        add_task(title="Due soon", due_date=clock.now + ONE_HOUR_MS)
        with make_ctx() as ctx:
            categories.create_category(ctx, CategoryCreate(name="Work", color="#000000"))

        clock.advance(2 * ONE_HOUR_MS)
        with make_ctx() as ctx:
            result = dashboard.summary(ctx)
        assert result.overdue_tasks == 1
        assert result.total_categories == 1

    def test_recent_activity_window(self, make_ctx, add_task, clock):
        add_task(title="Old")
        clock.advance(ONE_WEEK_MS + 1)
        add_task(title="New")

        with make_ctx() as ctx:
            result = dashboard.summary(ctx)
        assert result.recent_activity_count == 1
        assert result.per_table["task_activity"] == 2
        assert result.per_table["tasks"] == 2

    def test_empty_dashboard(self, make_ctx):
        with make_ctx() as ctx:
            result = dashboard.summary(ctx)
            assert dashboard.recent_tasks(ctx) == []
        assert result.total_tasks == 0
        assert result.completion_rate == 0

    def test_counts_by_status_and_priority(self, make_ctx, add_task):
        add_task(priority="urgent")
        add_task(priority="urgent")
        done = add_task(priority="low")
        with make_ctx() as ctx:
            tasks.complete_task(ctx, done)
            by_status = dashboard.tasks_by_status(ctx)
            by_priority = dashboard.tasks_by_priority(ctx)

        assert by_status.todo == 2
        assert by_status.completed == 1
        assert by_status.archived == 0
        assert by_priority.urgent == 2
        assert by_priority.low == 1
        assert by_priority.medium == 0

    def test_recent_tasks_limited_to_ten(self, make_ctx, clock):
        with make_ctx() as ctx:
            for i in range(12):
                tasks.create_task(ctx, TaskCreate(title=f"Task {i}"))
                clock.advance(1)
            recent = dashboard.recent_tasks(ctx)
            activity = dashboard.recent_activity(ctx)
        assert len(recent) == 10
        assert recent[0].title == "Task 11"
        assert len(activity) == 12

    def test_other_users_not_counted(self, add_task, make_ctx):
        add_task("user-b")
        with make_ctx("user-a") as ctx:
            assert dashboard.summary(ctx).total_tasks == 0
