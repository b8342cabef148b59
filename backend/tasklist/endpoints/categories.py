import logging
from typing import Any, Optional

from ..context import Context
from ..errors import InvalidInput
from ..helpers import validation
from ..helpers.constants import MAX_CATEGORIES_PER_USER, CategoryDeleteMode
from ..models import Category, CategoryCreate, CategoryUpdate, OrderUpdate
from .guards import require_owner
from .tasks import delete_task_cascade

logger = logging.getLogger(__name__)

NAME_ERROR = "Category name must be between 1 and 50 characters"
COLOR_ERROR = "Invalid color format. Must be a hex color (e.g., #FF0000)"
ICON_ERROR = "Invalid icon name"


def _clean_name(name: Optional[str]) -> str:
    name = validation.sanitize_input(name or "")
    if not validation.is_valid_category_name(name):
        raise InvalidInput(NAME_ERROR)
    return name


def _check_color(color: Optional[str]) -> str:
    if color is None or not validation.is_valid_hex_color(color):
        raise InvalidInput(COLOR_ERROR)
    return color


def _clean_icon(icon: Optional[str]) -> Optional[str]:
    if icon is None:
        return None
    icon = validation.sanitize_input(icon)
    if not icon:
        return None
    if not validation.is_valid_icon_name(icon):
        raise InvalidInput(ICON_ERROR)
    return icon


def list_categories(ctx: Context) -> list[Category]:
    user_id = ctx.require_user()
    return ctx.repos.categories.list_by_user(user_id)


def get_category(ctx: Context, category_id: str) -> Category:
    user_id = ctx.require_user()
    return require_owner(ctx.repos.categories.get_by_id(category_id), user_id, "Category", "view")


def get_task_count(ctx: Context, category_id: str) -> int:
    user_id = ctx.require_user()
    require_owner(ctx.repos.categories.get_by_id(category_id), user_id, "Category", "view")
    return len(ctx.repos.tasks.list_by_category(category_id))


def create_category(ctx: Context, args: CategoryCreate) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("createCategory", user_id)

    if ctx.repos.categories.count_by_user(user_id) >= MAX_CATEGORIES_PER_USER:
        raise InvalidInput(f"Maximum {MAX_CATEGORIES_PER_USER} categories allowed per user")

    name = _clean_name(args.name)
    color = _check_color(args.color)
    icon = _clean_icon(args.icon)

    category_id = ctx.repos.categories.create(
        user_id=user_id,
        name=name,
        color=color,
        icon=icon,
        order=ctx.repos.categories.next_order(user_id),
        now=ctx.now(),
    )
    logger.info("Created category %s for user %s", category_id, user_id)
    return category_id


def update_category(ctx: Context, category_id: str, args: CategoryUpdate) -> str:
    user_id = ctx.require_user()
    ctx.rate_limit("updateCategory", user_id)
    require_owner(ctx.repos.categories.get_by_id(category_id), user_id, "Category", "update")

    requested = args.model_dump(exclude_unset=True)
    fields: dict[str, Any] = {}
    if "name" in requested:
        fields["name"] = _clean_name(requested["name"])
    if "color" in requested:
        fields["color"] = _check_color(requested["color"])
    if "icon" in requested:
        fields["icon"] = _clean_icon(requested["icon"])

    if fields:
        ctx.repos.categories.update(category_id, fields, ctx.now())
    return category_id


def delete_category(ctx: Context, category_id: str, mode: CategoryDeleteMode = "unlink") -> str:
    """
    Delete a category. ``mode`` decides what happens to its tasks:
    "unlink" keeps them without a category, "deleteTasks" deletes them
    together with their comments and activity.
    """
    user_id = ctx.require_user()
    ctx.rate_limit("deleteCategory", user_id)
    require_owner(ctx.repos.categories.get_by_id(category_id), user_id, "Category", "delete")
    if mode not in ("unlink", "deleteTasks"):
        raise InvalidInput(f"Invalid delete mode: {mode}")

    now = ctx.now()
    tasks = ctx.repos.tasks.list_by_category(category_id)
    if mode == "deleteTasks":
        for task in tasks:
            delete_task_cascade(ctx, task.id)
    else:
        for task in tasks:
            ctx.repos.tasks.update(task.id, {"category_id": None}, now)

    ctx.repos.categories.delete(category_id)
    logger.info("Deleted category %s (%s, %d tasks)", category_id, mode, len(tasks))
    return category_id


def reorder_categories(ctx: Context, updates: list[OrderUpdate]) -> None:
    user_id = ctx.require_user()

    for update in updates:
        category = ctx.repos.categories.get_by_id(update.id)
        require_owner(category, user_id, f"Category {update.id}", "reorder")
        if not validation.is_valid_order(update.order):
            raise InvalidInput(f"Invalid order for category {update.id}")

    ctx.repos.categories.update_orders([(u.id, u.order) for u in updates], ctx.now())
