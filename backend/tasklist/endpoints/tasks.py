import logging
from typing import Any, Optional

from ..context import Context
from ..errors import InvalidInput
from ..helpers import validation
from ..helpers.constants import DEFAULT_PRIORITY, DEFAULT_STATUS, MAX_SEARCH_RESULTS
from ..models import FieldChange, OrderUpdate, Task, TaskActivity, TaskChanges, TaskCreate, TaskUpdate
from .guards import require_owner

logger = logging.getLogger(__name__)

TITLE_ERROR = "Title must be between 1 and 200 characters"
DESCRIPTION_ERROR = "Description must be less than 5000 characters"
TAGS_ERROR = "Invalid tags: maximum 10 tags, each up to 30 characters"
DUE_DATE_ERROR = "Invalid due date"


def _clean_title(title: Optional[str]) -> str:
    title = validation.sanitize_input(title or "")
    if not validation.is_valid_task_title(title):
        raise InvalidInput(TITLE_ERROR)
    return title


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    description = validation.sanitize_input(description)
    if not validation.is_valid_task_description(description):
        raise InvalidInput(DESCRIPTION_ERROR)
    return description or None


def _clean_tags(tags: Optional[list[str]]) -> Optional[list[str]]:
    if tags is None:
        return None
    tags = [validation.sanitize_input(tag) for tag in tags]
    if not validation.is_valid_tags(tags):
        raise InvalidInput(TAGS_ERROR)
    return tags


def _check_due_date(due_date: Optional[int], now: int) -> None:
    if due_date is not None and not validation.is_valid_due_date(due_date, now):
        raise InvalidInput(DUE_DATE_ERROR)


def _check_category(ctx: Context, category_id: Optional[str], user_id: str) -> None:
    if category_id is not None:
        require_owner(ctx.repos.categories.get_by_id(category_id), user_id, "Category", "use")


# Queries

def list_tasks(ctx: Context) -> list[Task]:
    user_id = ctx.require_user()
    return ctx.repos.tasks.list_by_user(user_id)


def list_by_status(ctx: Context, status: str) -> list[Task]:
    user_id = ctx.require_user()
    if not validation.is_valid_status(status):
        raise InvalidInput(f"Invalid status: {status}")
    return ctx.repos.tasks.list_by_user_and_status(user_id, status)


def list_by_category(ctx: Context, category_id: str) -> list[Task]:
    user_id = ctx.require_user()
    return ctx.repos.tasks.list_by_user_and_category(user_id, category_id)


def list_by_priority(ctx: Context, priority: str) -> list[Task]:
    user_id = ctx.require_user()
    if not validation.is_valid_priority(priority):
        raise InvalidInput(f"Invalid priority: {priority}")
    return ctx.repos.tasks.list_by_user_and_priority(user_id, priority)


def list_with_due_dates(ctx: Context) -> list[Task]:
    user_id = ctx.require_user()
    return ctx.repos.tasks.list_with_due_dates(user_id)


def list_overdue(ctx: Context) -> list[Task]:
    user_id = ctx.require_user()
    return ctx.repos.tasks.list_overdue(user_id, ctx.now())


def search(ctx: Context, query: str, status: Optional[str] = None) -> list[Task]:
    user_id = ctx.require_user()
    if status is not None and not validation.is_valid_status(status):
        raise InvalidInput(f"Invalid status: {status}")
    query = validation.sanitize_input(query or "")
    if not query:
        return []
    return ctx.repos.tasks.search(user_id, query, status, limit=MAX_SEARCH_RESULTS)


def get_task(ctx: Context, task_id: str) -> Task:
    user_id = ctx.require_user()
    return require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "view")


def list_activity(ctx: Context, task_id: str) -> list[TaskActivity]:
    user_id = ctx.require_user()
    require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "view")
    return ctx.repos.activity.list_by_task(task_id)


# Mutations

def create_task(ctx: Context, args: TaskCreate) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("createTask", user_id)

    now = ctx.now()
    title = _clean_title(args.title)
    description = _clean_description(args.description)
    tags = _clean_tags(args.tags)
    _check_due_date(args.due_date, now)
    _check_category(ctx, args.category_id, user_id)

    max_order = ctx.repos.tasks.max_order(user_id)
    next_order = 0 if max_order is None else max_order + 1

    task_id = ctx.repos.tasks.create(
        user_id=user_id,
        title=title,
        description=description,
        category_id=args.category_id,
        priority=args.priority or DEFAULT_PRIORITY,
        status=DEFAULT_STATUS,
        due_date=args.due_date,
        tags=tags,
        order=next_order,
        now=now,
    )
    ctx.repos.activity.log_created(task_id, user_id, now)
    logger.info("Created task %s for user %s", task_id, user_id)
    return task_id


def update_task(ctx: Context, task_id: str, args: TaskUpdate) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("updateTask", user_id)
    task = require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "update")

    now = ctx.now()
    requested = args.model_dump(exclude_unset=True)
    fields: dict[str, Any] = {}

    if "title" in requested:
        fields["title"] = _clean_title(requested["title"])
    if "description" in requested:
        fields["description"] = _clean_description(requested["description"])
    if "tags" in requested:
        fields["tags"] = _clean_tags(requested["tags"])
    if "due_date" in requested:
        _check_due_date(requested["due_date"], now)
        fields["due_date"] = requested["due_date"]
    if "category_id" in requested:
        _check_category(ctx, requested["category_id"], user_id)
        fields["category_id"] = requested["category_id"]
    # priority and status cannot be cleared; an explicit null is ignored
    for name in ("priority", "status"):
        if requested.get(name) is not None:
            fields[name] = requested[name]

    changes = TaskChanges()
    for name in ("title", "priority", "status"):
        if name in fields and fields[name] != getattr(task, name):
            setattr(changes, name, FieldChange(old=getattr(task, name), new=fields[name]))

    status_changed = changes.status is not None
    if status_changed:
        if fields["status"] == "completed":
            fields["completed_at"] = now
        elif task.status == "completed":
            fields["completed_at"] = None

    if fields:
        ctx.repos.tasks.update(task_id, fields, now)

    if status_changed:
        ctx.repos.activity.log_status_changed(task_id, user_id, task.status, fields["status"], now)
    elif not changes.is_empty():
        ctx.repos.activity.log_updated(task_id, user_id, changes, now)

    logger.info("Updated task %s fields=%s", task_id, sorted(fields))
    return task_id


def complete_task(ctx: Context, task_id: str) -> str:
    user_id = ctx.require_user()
    require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "update")

    now = ctx.now()
    ctx.repos.tasks.complete(task_id, now)
    ctx.repos.activity.log_completed(task_id, user_id, now)
    return task_id


def reopen_task(ctx: Context, task_id: str) -> str:
    user_id = ctx.require_user()
    task = require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "update")

    now = ctx.now()
    ctx.repos.tasks.reopen(task_id, now)
    ctx.repos.activity.log_status_changed(task_id, user_id, task.status, "todo", now)
    return task_id


def archive_task(ctx: Context, task_id: str) -> str:
    user_id = ctx.require_user()
    task = require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "update")

    now = ctx.now()
    ctx.repos.tasks.archive(task_id, now)
    ctx.repos.activity.log_status_changed(task_id, user_id, task.status, "archived", now)
    return task_id


def delete_task_cascade(ctx: Context, task_id: str) -> None:
    """Children first: comments, activity, then the task itself."""
    ctx.repos.comments.delete_by_task(task_id)
    ctx.repos.activity.delete_by_task(task_id)
    ctx.repos.tasks.delete(task_id)


def delete_task(ctx: Context, task_id: str) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("deleteTask", user_id)
    task = require_owner(ctx.repos.tasks.get_by_id(task_id), user_id, "Task", "delete")

    ctx.repos.activity.log_deleted(task_id, user_id, task.title, ctx.now())
    delete_task_cascade(ctx, task_id)
    logger.info("Deleted task %s (%r) for user %s", task_id, task.title, user_id)
    return task_id


def reorder_tasks(ctx: Context, updates: list[OrderUpdate]) -> None:
    """Validate every entry before writing any of them."""
    user_id = ctx.require_user()

    for update in updates:
        task = ctx.repos.tasks.get_by_id(update.id)
        require_owner(task, user_id, f"Task {update.id}", "reorder")
        if not validation.is_valid_order(update.order):
            raise InvalidInput(f"Invalid order for task {update.id}")

    ctx.repos.tasks.update_orders([(u.id, u.order) for u in updates], ctx.now())
