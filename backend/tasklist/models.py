from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from .helpers.constants import (
    MessageRole,
    TaskPriority,
    TaskStatus,
    ThemeType,
    ThreadStatus,
    ViewType,
)


# Stored records

class Task(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[int] = None  # epoch ms
    completed_at: Optional[int] = None  # epoch ms, set only while completed
    tags: Optional[list[str]] = None
    order: int
    created_at: int
    updated_at: int


class Category(BaseModel):
    id: str
    user_id: str
    name: str
    color: str  # #RRGGBB
    icon: Optional[str] = None  # Lucide icon name
    order: int
    created_at: int
    updated_at: int


class TaskComment(BaseModel):
    id: str
    task_id: str
    user_id: str
    content: str
    created_at: int
    updated_at: int


class UserPreferences(BaseModel):
    id: Optional[str] = None  # None until the user saves anything
    user_id: str
    default_view: ViewType = "list"
    default_filter: Optional[str] = None
    default_sort: Optional[str] = None
    theme: ThemeType = "system"
    compact_mode: bool = False
    email_notifications: bool = True
    due_date_reminders: bool = True
    reminder_hours_before: int = 24
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Thread(BaseModel):
    id: str
    user_id: str
    title: Optional[str] = None
    status: ThreadStatus = "active"
    created_at: int
    updated_at: int


class Message(BaseModel):
    id: str
    thread_id: str
    user_id: str
    role: MessageRole
    content: str
    created_at: int


# Activity log: one variant per action

class FieldChange(BaseModel):
    old: Optional[str] = None
    new: Optional[str] = None


class TaskChanges(BaseModel):
    title: Optional[FieldChange] = None
    priority: Optional[FieldChange] = None
    status: Optional[FieldChange] = None

    def is_empty(self) -> bool:
        return self.title is None and self.priority is None and self.status is None


class StatusChange(BaseModel):
    old_status: TaskStatus
    new_status: TaskStatus


class DeletedMetadata(BaseModel):
    title: str


class CommentedMetadata(BaseModel):
    comment_id: str


class _ActivityBase(BaseModel):
    id: str
    task_id: str
    user_id: str
    created_at: int


class CreatedActivity(_ActivityBase):
    action: Literal["created"] = "created"


class UpdatedActivity(_ActivityBase):
    action: Literal["updated"] = "updated"
    changes: TaskChanges


class StatusChangedActivity(_ActivityBase):
    action: Literal["status_changed"] = "status_changed"
    changes: StatusChange


class CompletedActivity(_ActivityBase):
    action: Literal["completed"] = "completed"


class DeletedActivity(_ActivityBase):
    action: Literal["deleted"] = "deleted"
    metadata: DeletedMetadata


class CommentedActivity(_ActivityBase):
    action: Literal["commented"] = "commented"
    metadata: CommentedMetadata


TaskActivity = Annotated[
    Union[
        CreatedActivity,
        UpdatedActivity,
        StatusChangedActivity,
        CompletedActivity,
        DeletedActivity,
        CommentedActivity,
    ],
    Field(discriminator="action"),
]

activity_adapter = TypeAdapter(TaskActivity)


# Request payloads

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[int] = None
    tags: Optional[list[str]] = None


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[int] = None
    tags: Optional[list[str]] = None


class OrderUpdate(BaseModel):
    id: str
    order: int


class ReorderRequest(BaseModel):
    updates: list[OrderUpdate]


class CategoryCreate(BaseModel):
    name: str
    color: str
    icon: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class CommentCreate(BaseModel):
    content: str


class CommentUpdate(BaseModel):
    content: str


class PreferencesUpdate(BaseModel):
    default_view: Optional[ViewType] = None
    default_filter: Optional[str] = None
    default_sort: Optional[str] = None
    theme: Optional[ThemeType] = None
    compact_mode: Optional[bool] = None
    email_notifications: Optional[bool] = None
    due_date_reminders: Optional[bool] = None
    reminder_hours_before: Optional[int] = None


class ThreadCreate(BaseModel):
    title: Optional[str] = None


class ThreadUpdate(BaseModel):
    title: str


class MessageCreate(BaseModel):
    content: str


# Dashboard aggregates

class DashboardSummary(BaseModel):
    total_tasks: int
    todo_tasks: int
    in_progress_tasks: int
    completed_tasks: int
    archived_tasks: int
    overdue_tasks: int
    high_priority_tasks: int
    total_categories: int
    completion_rate: int  # whole percent
    recent_activity_count: int
    per_table: dict[str, int]


class StatusCounts(BaseModel):
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    archived: int = 0


class PriorityCounts(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    urgent: int = 0
