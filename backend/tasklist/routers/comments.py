from fastapi import APIRouter, Depends

from ..context import Context
from ..endpoints import comments
from ..models import CommentCreate, CommentUpdate, TaskComment
from .deps import get_context

router = APIRouter(tags=["comments"])


@router.get("/tasks/{task_id}/comments")
def list_comments(task_id: str, ctx: Context = Depends(get_context)) -> list[TaskComment]:
    return comments.list_by_task(ctx, task_id)


@router.post("/tasks/{task_id}/comments")
def create_comment(task_id: str, body: CommentCreate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": comments.create_comment(ctx, task_id, body.content)}


@router.patch("/comments/{comment_id}")
def update_comment(comment_id: str, body: CommentUpdate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": comments.update_comment(ctx, comment_id, body.content)}


@router.delete("/comments/{comment_id}")
def delete_comment(comment_id: str, ctx: Context = Depends(get_context)) -> dict:
    comments.delete_comment(ctx, comment_id)
    return {"success": True}
