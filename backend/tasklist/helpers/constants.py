"""Shared enumerations, limits and defaults."""

from typing import Literal

# Result caps
MAX_SEARCH_RESULTS = 100
RECENT_TASKS_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 20
ASSISTANT_HISTORY_LIMIT = 50

# Tasks
TaskPriority = Literal["low", "medium", "high", "urgent"]
TaskStatus = Literal["todo", "in_progress", "completed", "archived"]

TASK_PRIORITIES = ("low", "medium", "high", "urgent")
TASK_STATUSES = ("todo", "in_progress", "completed", "archived")

PRIORITY_LABELS = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "urgent": "Urgent",
}

STATUS_LABELS = {
    "todo": "To Do",
    "in_progress": "In Progress",
    "completed": "Completed",
    "archived": "Archived",
}

HIGH_PRIORITIES = ("high", "urgent")
# Statuses that no longer count as open work
CLOSED_STATUSES = ("completed", "archived")

# Validation limits
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000
MAX_COMMENT_LENGTH = 2000
MAX_CATEGORY_NAME_LENGTH = 50
MAX_ICON_NAME_LENGTH = 50
MAX_TAG_LENGTH = 30
MAX_TAGS_PER_TASK = 10
MAX_CATEGORIES_PER_USER = 50
MAX_THREAD_TITLE_LENGTH = 100
MAX_MESSAGE_LENGTH = 4000
MAX_REMINDER_HOURS = 168
THREAD_AUTO_TITLE_LENGTH = 50

# Defaults
DEFAULT_PRIORITY = "medium"
DEFAULT_STATUS = "todo"
DEFAULT_VIEW = "list"
DEFAULT_THEME = "system"
DEFAULT_REMINDER_HOURS = 24

# Time
ONE_HOUR_MS = 60 * 60 * 1000
ONE_DAY_MS = 24 * ONE_HOUR_MS
ONE_WEEK_MS = 7 * ONE_DAY_MS
MINUTE_MS = 60 * 1000

# Activity log
ACTIVITY_LABELS = {
    "created": "Created task",
    "updated": "Updated task",
    "status_changed": "Changed status",
    "completed": "Completed task",
    "deleted": "Deleted task",
    "commented": "Added comment",
}

# Preferences
ViewType = Literal["list", "board", "calendar"]
ThemeType = Literal["light", "dark", "system"]

VIEW_TYPES = ("list", "board", "calendar")
THEME_TYPES = ("light", "dark", "system")

# Categories
CategoryDeleteMode = Literal["unlink", "deleteTasks"]

DEFAULT_CATEGORY_COLORS = (
    "#ef4444",  # red
    "#f97316",  # orange
    "#f59e0b",  # amber
    "#eab308",  # yellow
    "#84cc16",  # lime
    "#22c55e",  # green
    "#10b981",  # emerald
    "#14b8a6",  # teal
    "#06b6d4",  # cyan
    "#0ea5e9",  # sky
    "#3b82f6",  # blue
    "#6366f1",  # indigo
    "#8b5cf6",  # violet
    "#a855f7",  # purple
    "#d946ef",  # fuchsia
    "#ec4899",  # pink
)

DEFAULT_CATEGORY_ICONS = (
    "folder", "briefcase", "home", "heart", "star", "flag", "bookmark", "tag",
    "inbox", "archive", "clipboard", "calendar", "target", "zap", "trophy",
)

# Assistant chat
ThreadStatus = Literal["active", "archived"]
MessageRole = Literal["user", "assistant"]
