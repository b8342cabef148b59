"""
Input validation predicates.

Pure functions over primitive values: no database access, no context.
Each returns a bool; callers turn False into an InvalidInput error.
"""

import re
from typing import Iterable

from .constants import (
    MAX_CATEGORY_NAME_LENGTH,
    MAX_COMMENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_ICON_NAME_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_REMINDER_HOURS,
    MAX_TAG_LENGTH,
    MAX_TAGS_PER_TASK,
    MAX_THREAD_TITLE_LENGTH,
    MAX_TITLE_LENGTH,
    ONE_DAY_MS,
    TASK_PRIORITIES,
    TASK_STATUSES,
    THEME_TYPES,
    VIEW_TYPES,
)

HEX_COLOR_RE = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)
ICON_NAME_RE = re.compile(r"^[a-z-]+$", re.IGNORECASE)


def sanitize_input(value: str) -> str:
    """Strip leading/trailing whitespace."""
    return value.strip()


def _length_between(value: str, low: int, high: int) -> bool:
    return low <= len(value) <= high


# Tasks

def is_valid_task_title(title: str) -> bool:
    return _length_between(title, 1, MAX_TITLE_LENGTH)


def is_valid_task_description(description: str) -> bool:
    return len(description) <= MAX_DESCRIPTION_LENGTH


def is_valid_priority(priority: str) -> bool:
    return priority in TASK_PRIORITIES


def is_valid_status(status: str) -> bool:
    return status in TASK_STATUSES


def is_valid_due_date(due_date: int, now: int) -> bool:
    """Due dates may not lie more than a day in the past."""
    return due_date >= now - ONE_DAY_MS


def is_valid_tags(tags: Iterable[str]) -> bool:
    tags = list(tags)
    if len(tags) > MAX_TAGS_PER_TASK:
        return False
    return all(_length_between(tag, 1, MAX_TAG_LENGTH) for tag in tags)


# Categories

def is_valid_category_name(name: str) -> bool:
    return _length_between(name, 1, MAX_CATEGORY_NAME_LENGTH)


def is_valid_hex_color(color: str) -> bool:
    return bool(HEX_COLOR_RE.match(color))


def is_valid_icon_name(icon: str) -> bool:
    return _length_between(icon, 1, MAX_ICON_NAME_LENGTH) and bool(ICON_NAME_RE.match(icon))


# Comments

def is_valid_comment_content(content: str) -> bool:
    return _length_between(content, 1, MAX_COMMENT_LENGTH)


# Preferences

def is_valid_view_type(view: str) -> bool:
    return view in VIEW_TYPES


def is_valid_theme(theme: str) -> bool:
    return theme in THEME_TYPES


def is_valid_reminder_hours(hours: int) -> bool:
    return 0 <= hours <= MAX_REMINDER_HOURS


# Chat

def is_valid_thread_title(title: str) -> bool:
    return _length_between(title, 1, MAX_THREAD_TITLE_LENGTH)


def is_valid_message_content(content: str) -> bool:
    return _length_between(content, 1, MAX_MESSAGE_LENGTH)


# General

def is_valid_order(order) -> bool:
    # bool is an int subclass; an order of True is a caller bug
    return isinstance(order, int) and not isinstance(order, bool) and order >= 0
