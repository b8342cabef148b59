"""
Assistant chat: threads and their messages.

``send_message`` is the one handler that spans more than one transaction:
the user's message is stored first, the assistant is called with no
transaction open, and the reply is stored in a second transaction.
"""

import logging
from typing import Any, Callable, ContextManager, Optional

from fastapi.concurrency import run_in_threadpool

from ..assistant import Assistant, ChatMessage
from ..context import Context
from ..errors import InvalidInput
from ..helpers import validation
from ..helpers.constants import ASSISTANT_HISTORY_LIMIT, THREAD_AUTO_TITLE_LENGTH
from ..models import Message, Thread
from .guards import require_owner

logger = logging.getLogger(__name__)

TITLE_ERROR = "Thread title must be between 1 and 100 characters"
MESSAGE_ERROR = "Message must be between 1 and 4000 characters"


def _clean_title(title: Optional[str]) -> str:
    title = validation.sanitize_input(title or "")
    if not validation.is_valid_thread_title(title):
        raise InvalidInput(TITLE_ERROR)
    return title


def list_threads(ctx: Context, status: Optional[str] = None) -> list[Thread]:
    user_id = ctx.require_user()
    if status is not None and status not in ("active", "archived"):
        raise InvalidInput(f"Invalid thread status: {status}")
    return ctx.repos.threads.list_by_user(user_id, status)


def get_thread(ctx: Context, thread_id: str) -> Thread:
    user_id = ctx.require_user()
    return require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "view")


def create_thread(ctx: Context, title: Optional[str] = None) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("createThread", user_id)

    # untitled threads take their title from the first message
    clean = _clean_title(title) if title is not None and title.strip() else None
    thread_id = ctx.repos.threads.create(user_id, ctx.now(), title=clean)
    logger.info("Created thread %s for user %s", thread_id, user_id)
    return thread_id


def rename_thread(ctx: Context, thread_id: str, title: str) -> str:
    user_id = ctx.require_user()
    require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "update")
    ctx.repos.threads.update(thread_id, {"title": _clean_title(title)}, ctx.now())
    return thread_id


def archive_thread(ctx: Context, thread_id: str) -> str:
    user_id = ctx.require_user()
    require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "update")
    ctx.repos.threads.update(thread_id, {"status": "archived"}, ctx.now())
    return thread_id


def delete_thread(ctx: Context, thread_id: str) -> str:
    user_id = ctx.require_user()
    require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "delete")
    ctx.repos.messages.delete_by_thread(thread_id)
    ctx.repos.threads.delete(thread_id)
    return thread_id


def list_messages(ctx: Context, thread_id: str) -> list[Message]:
    user_id = ctx.require_user()
    require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "view")
    return ctx.repos.messages.list_by_thread(thread_id)


def _to_history(messages: list[Message]) -> list[ChatMessage]:
    history = [{"role": m.role, "content": m.content} for m in messages]
    # a truncated window can start mid-exchange; the model expects a user turn first
    while history and history[0]["role"] != "user":
        history.pop(0)
    return history


def record_user_message(ctx: Context, thread_id: str, content: str) -> list[ChatMessage]:
    """First transaction of send_message: store the prompt, return the history to send."""
    user_id = ctx.require_user()
    ctx.rate_limit("sendMessage", user_id)
    thread = require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "post to")
    if thread.status == "archived":
        raise InvalidInput("Thread is archived")

    content = validation.sanitize_input(content or "")
    if not validation.is_valid_message_content(content):
        raise InvalidInput(MESSAGE_ERROR)

    now = ctx.now()
    ctx.repos.messages.create(thread_id, user_id, "user", content, now)
    if thread.title is None:
        ctx.repos.threads.update(thread_id, {"title": content[:THREAD_AUTO_TITLE_LENGTH]}, now)
    else:
        ctx.repos.threads.touch(thread_id, now)

    return _to_history(ctx.repos.messages.list_recent_by_thread(thread_id, ASSISTANT_HISTORY_LIMIT))


def record_assistant_reply(ctx: Context, thread_id: str, reply: str) -> Message:
    """Second transaction of send_message."""
    user_id = ctx.require_user()
    # the thread may have been deleted while the assistant was thinking
    require_owner(ctx.repos.threads.get_by_id(thread_id), user_id, "Thread", "post to")

    now = ctx.now()
    message_id = ctx.repos.messages.create(thread_id, user_id, "assistant", reply, now)
    ctx.repos.threads.touch(thread_id, now)
    return ctx.repos.messages.get_by_id(message_id)


def _in_transaction(open_ctx: Callable[[], ContextManager[Context]], handler: Callable[..., Any], *args: Any) -> Any:
    # runs on a worker thread; BEGIN IMMEDIATE may block on another writer
    with open_ctx() as ctx:
        return handler(ctx, *args)


async def send_message(
    open_ctx: Callable[[], ContextManager[Context]],
    assistant: Assistant,
    thread_id: str,
    content: str,
) -> Message:
    """
    Post a user message and store the assistant's reply.

    If the assistant fails, the user's message stays stored and
    AssistantUnavailable propagates to the caller.
    """
    history = await run_in_threadpool(_in_transaction, open_ctx, record_user_message, thread_id, content)

    reply = await assistant.reply(history)

    message = await run_in_threadpool(_in_transaction, open_ctx, record_assistant_reply, thread_id, reply)
    logger.info("Assistant replied in thread %s (%d chars)", thread_id, len(reply))
    return message
