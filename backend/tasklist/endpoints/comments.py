import logging

from ..context import Context
from ..errors import InvalidInput
from ..helpers import validation
from ..models import TaskComment
from .guards import require_owner

logger = logging.getLogger(__name__)

CONTENT_ERROR = "Comment must be between 1 and 2000 characters"


def _clean_content(content: str) -> str:
    content = validation.sanitize_input(content or "")
    if not validation.is_valid_comment_content(content):
        raise InvalidInput(CONTENT_ERROR)
    return content


def list_by_task(ctx: Context, task_id: str) -> list[TaskComment]:
    user_id = ctx.require_user()
    require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "view comments for")
    return ctx.repos.comments.list_by_task(task_id)


def create_comment(ctx: Context, task_id: str, content: str) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("createComment", user_id)
    require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "comment on")

    content = _clean_content(content)
    now = ctx.now()
    comment_id = ctx.repos.comments.create(task_id, user_id, content, now)
    ctx.repos.activity.log_commented(task_id, user_id, comment_id, now)
    logger.info("Comment %s added to task %s", comment_id, task_id)
    return comment_id


def update_comment(ctx: Context, comment_id: str, content: str) -> str:
    user_id = ctx.require_user()
    require_owner(ctx.repos.comments.get_by_id(comment_id), user_id, "Comment", "update")

    ctx.repos.comments.update(comment_id, _clean_content(content), ctx.now())
    return comment_id


def delete_comment(ctx: Context, comment_id: str) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("deleteComment", user_id)
    require_owner(ctx.repos.comments.get_by_id(comment_id), user_id, "Comment", "delete")

    ctx.repos.comments.delete(comment_id)
    return comment_id
