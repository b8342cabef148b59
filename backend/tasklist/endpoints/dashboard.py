"""
Dashboard aggregates.

Read-only. Counts are computed from a single scan of the caller's tasks;
that is a full scan per load, acceptable at per-user task volumes.
"""

from collections import Counter

from ..context import Context
from ..helpers.constants import (
    CLOSED_STATUSES,
    HIGH_PRIORITIES,
    ONE_WEEK_MS,
    RECENT_ACTIVITY_LIMIT,
    RECENT_TASKS_LIMIT,
)
from ..models import DashboardSummary, PriorityCounts, StatusCounts, Task, TaskActivity


def completion_rate(completed: int, total: int, archived: int) -> int:
    """Whole-percent share of completed tasks among non-archived ones; 0 when there are none."""
    active = total - archived
    if active <= 0:
        return 0
    # halves round up: 12.5% -> 13
    return int(completed * 100 / active + 0.5)


def summary(ctx: Context) -> DashboardSummary:
    user_id = ctx.require_user()
    now = ctx.now()

    tasks = ctx.repos.tasks.list_by_user(user_id)
    by_status = Counter(task.status for task in tasks)

    overdue = sum(
        1 for task in tasks
        if task.due_date is not None and task.due_date < now and task.status not in CLOSED_STATUSES
    )
    high_priority = sum(
        1 for task in tasks
        if task.priority in HIGH_PRIORITIES and task.status not in CLOSED_STATUSES
    )

    total_categories = ctx.repos.categories.count_by_user(user_id)

    return DashboardSummary(
        total_tasks=len(tasks),
        todo_tasks=by_status["todo"],
        in_progress_tasks=by_status["in_progress"],
        completed_tasks=by_status["completed"],
        archived_tasks=by_status["archived"],
        overdue_tasks=overdue,
        high_priority_tasks=high_priority,
        total_categories=total_categories,
        completion_rate=completion_rate(by_status["completed"], len(tasks), by_status["archived"]),
        recent_activity_count=ctx.repos.activity.count_by_user_since(user_id, now - ONE_WEEK_MS),
        per_table={
            "tasks": len(tasks),
            "task_comments": ctx.repos.comments.count_by_user(user_id),
            "task_activity": ctx.repos.activity.count_by_user(user_id),
            "user_preferences": ctx.repos.preferences.count_by_user(user_id),
        },
    )


def recent_tasks(ctx: Context) -> list[Task]:
    user_id = ctx.require_user()
    return ctx.repos.tasks.list_by_user(user_id)[:RECENT_TASKS_LIMIT]


def tasks_by_status(ctx: Context) -> StatusCounts:
    user_id = ctx.require_user()
    counts = Counter(task.status for task in ctx.repos.tasks.list_by_user(user_id))
    return StatusCounts(**counts)


def tasks_by_priority(ctx: Context) -> PriorityCounts:
    user_id = ctx.require_user()
    counts = Counter(task.priority for task in ctx.repos.tasks.list_by_user(user_id))
    return PriorityCounts(**counts)


def recent_activity(ctx: Context) -> list[TaskActivity]:
    user_id = ctx.require_user()
    return ctx.repos.activity.list_recent_by_user(user_id, RECENT_ACTIVITY_LIMIT)
