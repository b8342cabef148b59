from fastapi import APIRouter

from ..helpers import constants
from ..rate_limiter import RATE_LIMITS

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("")
def get_meta() -> dict:
    """Enumerations, labels and limits for clients to build forms from. No auth required."""
    return {
        "priorities": list(constants.TASK_PRIORITIES),
        "statuses": list(constants.TASK_STATUSES),
        "priority_labels": constants.PRIORITY_LABELS,
        "status_labels": constants.STATUS_LABELS,
        "activity_labels": constants.ACTIVITY_LABELS,
        "view_types": list(constants.VIEW_TYPES),
        "themes": list(constants.THEME_TYPES),
        "category_colors": list(constants.DEFAULT_CATEGORY_COLORS),
        "category_icons": list(constants.DEFAULT_CATEGORY_ICONS),
        "limits": {
            "title": constants.MAX_TITLE_LENGTH,
            "description": constants.MAX_DESCRIPTION_LENGTH,
            "comment": constants.MAX_COMMENT_LENGTH,
            "category_name": constants.MAX_CATEGORY_NAME_LENGTH,
            "tag": constants.MAX_TAG_LENGTH,
            "tags_per_task": constants.MAX_TAGS_PER_TASK,
            "categories_per_user": constants.MAX_CATEGORIES_PER_USER,
            "thread_title": constants.MAX_THREAD_TITLE_LENGTH,
            "message": constants.MAX_MESSAGE_LENGTH,
            "reminder_hours": constants.MAX_REMINDER_HOURS,
        },
        "rate_limits": {
            name: {"rate": limit.rate, "period_ms": limit.period, "capacity": limit.max_tokens}
            for name, limit in RATE_LIMITS.items()
        },
    }
