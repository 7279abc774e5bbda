"""Data models for conversations and extracted tasks.

Wire names used by the remote model are camelCase (taskName, dueDate);
the Python side uses snake_case and accepts both on input.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Intent(str, Enum):
    """Classification the remote model assigns to a user message."""

    TASK = "task"
    INCOMPLETE_TASK = "incomplete_task"
    CHAT = "chat"


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TaskCategory(str, Enum):
    """Well-known task categories.

    The model may invent other categories, so Task.category stays a plain string.
    """

    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    OTHER = "other"


class Message(BaseModel):
    """A single line of the transcript."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Message text")
    is_user: bool = Field(description="True for user messages, False for assistant replies")
    timestamp: datetime = Field(default_factory=datetime.now)


class Task(BaseModel):
    """A task extracted from a user message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    task_name: str = Field(alias="taskName", min_length=1)
    due_date: str | None = Field(default=None, alias="dueDate")
    priority: Priority = Field(default=Priority.NORMAL)
    category: str = Field(default=TaskCategory.OTHER.value)

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        return Priority.NORMAL if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return TaskCategory.OTHER.value
        return value

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the camelCase names of the wire contract."""
        return self.model_dump(mode="json", by_alias=True)


class TaggedResponse(BaseModel):
    """Parsed reply from the remote model.

    A task payload is only kept when the intent is "task"; partial payloads
    attached to other intents are dropped before validation.
    """

    model_config = ConfigDict(frozen=True)

    intent: Intent
    response: str
    task: Task | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_task_unless_task_intent(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("intent") != Intent.TASK.value:
            data = {key: value for key, value in data.items() if key != "task"}
        return data

    @property
    def has_task(self) -> bool:
        return self.intent is Intent.TASK and self.task is not None
