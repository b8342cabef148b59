from fastapi import APIRouter, Depends

from ..context import Context
from ..endpoints import dashboard
from ..models import DashboardSummary, PriorityCounts, StatusCounts, Task, TaskActivity
from .deps import get_context

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary")
def summary(ctx: Context = Depends(get_context)) -> DashboardSummary:
    return dashboard.summary(ctx)


@router.get("/recent")
def recent_tasks(ctx: Context = Depends(get_context)) -> list[Task]:
    return dashboard.recent_tasks(ctx)


@router.get("/by-status")
def tasks_by_status(ctx: Context = Depends(get_context)) -> StatusCounts:
    return dashboard.tasks_by_status(ctx)


@router.get("/by-priority")
def tasks_by_priority(ctx: Context = Depends(get_context)) -> PriorityCounts:
    return dashboard.tasks_by_priority(ctx)


@router.get("/activity")
def recent_activity(ctx: Context = Depends(get_context)) -> list[TaskActivity]:
    return dashboard.recent_activity(ctx)
