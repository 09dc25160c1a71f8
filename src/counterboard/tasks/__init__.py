"""Task manager: models, board and LLM-backed extraction."""

from counterboard.tasks.board import TaskBoard
from counterboard.tasks.extraction import TaskExtractor
from counterboard.tasks.models import ExtractedTask, Task, TaskPriority, TaskStatus

__all__ = [
    "ExtractedTask",
    "Task",
    "TaskBoard",
    "TaskExtractor",
    "TaskPriority",
    "TaskStatus",
]
