from typing import Optional

from fastapi import APIRouter, Depends

from ..assistant import Assistant, get_assistant
from ..auth import get_current_user_id
from ..context import Context, open_context
from ..endpoints import chat
from ..models import Message, MessageCreate, Thread, ThreadCreate, ThreadUpdate
from .deps import get_context

router = APIRouter(
    prefix="/threads",
    tags=["threads"],
    responses={404: {"description": "Not found"}},
)


@router.get("")
def list_threads(status: Optional[str] = None, ctx: Context = Depends(get_context)) -> list[Thread]:
    return chat.list_threads(ctx, status)


@router.post("")
def create_thread(body: ThreadCreate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": chat.create_thread(ctx, body.title)}


@router.get("/{thread_id}")
def get_thread(thread_id: str, ctx: Context = Depends(get_context)) -> Thread:
    return chat.get_thread(ctx, thread_id)


@router.patch("/{thread_id}")
def rename_thread(thread_id: str, body: ThreadUpdate, ctx: Context = Depends(get_context)) -> dict:
    return {"id": chat.rename_thread(ctx, thread_id, body.title)}


@router.post("/{thread_id}/archive")
def archive_thread(thread_id: str, ctx: Context = Depends(get_context)) -> dict:
    return {"id": chat.archive_thread(ctx, thread_id)}


@router.delete("/{thread_id}")
def delete_thread(thread_id: str, ctx: Context = Depends(get_context)) -> dict:
    chat.delete_thread(ctx, thread_id)
    return {"success": True}


@router.get("/{thread_id}/messages")
def list_messages(thread_id: str, ctx: Context = Depends(get_context)) -> list[Message]:
    return chat.list_messages(ctx, thread_id)


@router.post("/{thread_id}/messages")
async def send_message(
    thread_id: str,
    body: MessageCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    assistant: Assistant = Depends(get_assistant),
) -> Message:
    """Store the message, ask the assistant, store and return its reply."""
    # no request-wide transaction here: the assistant call must not hold the write lock
    return await chat.send_message(lambda: open_context(user_id), assistant, thread_id, body.content)
