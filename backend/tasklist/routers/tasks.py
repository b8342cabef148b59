from typing import Optional

from fastapi import APIRouter, Depends

from ..context import Context
from ..endpoints import tasks
from ..models import ReorderRequest, Task, TaskActivity, TaskCreate, TaskUpdate
from .deps import get_context

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)


@router.get("")
def list_tasks(ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_tasks(ctx)


# Static paths come before /{task_id}

@router.get("/by-status/{status}")
def list_by_status(status: str, ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_by_status(ctx, status)


@router.get("/by-category/{category_id}")
def list_by_category(category_id: str, ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_by_category(ctx, category_id)


@router.get("/by-priority/{priority}")
def list_by_priority(priority: str, ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_by_priority(ctx, priority)


@router.get("/due")
def list_with_due_dates(ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_with_due_dates(ctx)


@router.get("/overdue")
def list_overdue(ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.list_overdue(ctx)


@router.get("/search")
def search_tasks(q: str = "", status: Optional[str] = None, ctx: Context = Depends(get_context)) -> list[Task]:
    return tasks.search(ctx, q, status)


@router.post("/reorder")
def reorder_tasks(body: ReorderRequest, ctx: Context = Depends(get_context)) -> dict:
    tasks.reorder_tasks(ctx, body.updates)
    return {"success": True}


@router.post("")
def create_task(body: TaskCreate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": tasks.create_task(ctx, body)}


@router.get("/{task_id}")
def get_task(task_id: str, ctx: Context = Depends(get_context)) -> Task:
    return tasks.get_task(ctx, task_id)


@router.get("/{task_id}/activity")
def list_activity(task_id: str, ctx: Context = Depends(get_context)) -> list[TaskActivity]:
    return tasks.list_activity(ctx, task_id)


@router.patch("/{task_id}")
def update_task(task_id: str, body: TaskUpdate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": tasks.update_task(ctx, task_id, body)}


@router.post("/{task_id}/complete")
def complete_task(task_id: str, ctx: Context = Depends(get_context)) -> dict:
    return {"id": tasks.complete_task(ctx, task_id)}


@router.post("/{task_id}/reopen")
def reopen_task(task_id: str, ctx: Context = Depends(get_context)) -> dict:
    return {"id": tasks.reopen_task(ctx, task_id)}


@router.post("/{task_id}/archive")
def archive_task(task_id: str, ctx: Context = Depends(get_context)) -> dict:
    return {"id": tasks.archive_task(ctx, task_id)}


@router.delete("/{task_id}")
def delete_task(task_id: str, ctx: Context = Depends(get_context)) -> dict:
    tasks.delete_task(ctx, task_id)
    return {"success": True}
