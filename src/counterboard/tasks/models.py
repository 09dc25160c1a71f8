"""Task models."""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def new_task_id() -> str:
    return uuid.uuid4().hex


class ExtractedTask(BaseModel):
    """A task candidate as returned by the language model."""

    title: str
    description: str
    priority: TaskPriority

    @field_validator("priority", mode="before")
    @classmethod
    def _normalise_priority(cls, value: object) -> object:
        # Models often answer "high" / "Medium"; the enum is upper-case.
        if isinstance(value, str):
            return value.strip().upper()
        return value


class Task(BaseModel):
    """A to-do item on the board. Replaced, never mutated in place."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_task_id)
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM

    @classmethod
    def from_extracted(cls, extracted: ExtractedTask, *, task_id: str) -> Task:
        return cls(
            id=task_id,
            title=extracted.title,
            description=extracted.description,
            status=TaskStatus.TODO,
            priority=extracted.priority,
        )
