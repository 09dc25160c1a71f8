"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field

from counterboard.tasks.models import Task, TaskPriority, TaskStatus


class CounterState(BaseModel):
    count: float


class OperandRequest(BaseModel):
    value: float = Field(allow_inf_nan=False)


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class MessageRequest(BaseModel):
    message: str


class ExtractResponse(BaseModel):
    added: list[Task] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str | None
    transcript: list[str]
    added: list[Task] = Field(default_factory=list)
