from fastapi import APIRouter, Depends

from ..context import Context
from ..endpoints import categories
from ..models import Category, CategoryCreate, CategoryUpdate, ReorderRequest
from .deps import get_context

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)


@router.get("")
def list_categories(ctx: Context = Depends(get_context)) -> list[Category]:
    return categories.list_categories(ctx)


@router.post("")
def create_category(body: CategoryCreate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": categories.create_category(ctx, body)}


@router.post("/reorder")
def reorder_categories(body: ReorderRequest, ctx: Context = Depends(get_context)) -> dict:
    categories.reorder_categories(ctx, body.updates)
    return {"success": True}


@router.get("/{category_id}")
def get_category(category_id: str, ctx: Context = Depends(get_context)) -> Category:
    return categories.get_category(ctx, category_id)


@router.get("/{category_id}/task-count")
def get_task_count(category_id: str, ctx: Context = Depends(get_context)) -> dict:
    return {"count": categories.get_task_count(ctx, category_id)}


@router.patch("/{category_id}")
def update_category(category_id: str, body: CategoryUpdate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": categories.update_category(ctx, category_id, body)}


@router.delete("/{category_id}")
def delete_category(category_id: str, mode: str = "unlink", ctx: Context = Depends(get_context)) -> dict:
    """``mode`` is "unlink" (keep tasks, clear their category) or "deleteTasks"."""
    categories.delete_category(ctx, category_id, mode)
    return {"success": True}
