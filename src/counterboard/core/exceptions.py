"""Error taxonomy for counterboard.

Nothing here is fatal to the process. Register and calculator errors are either
raised to the caller (bad operand) or reported and skipped (division by zero).
LLM-facing errors are logged and downgraded to an empty or placeholder result.
"""

from __future__ import annotations


class CounterboardError(Exception):
    """Base class for all counterboard errors."""


class DivisionByZero(CounterboardError):
    """Reported (not raised) when a divide operation receives a zero divisor."""

    def __init__(self, operation: str = "divide") -> None:
        super().__init__("Cannot divide by zero")
        self.operation = operation


class InvalidOperand(CounterboardError, ValueError):
    """Raised when a transition would leave the register non-finite."""


class ExtractionFailure(CounterboardError):
    """Transport, decode or schema failure while extracting tasks."""


class ChatFailure(CounterboardError):
    """Failure of a general chat call."""


class UnknownAction(CounterboardError, ValueError):
    """Raised by dispatchers for a button label they do not know."""


class SubmissionInProgress(CounterboardError):
    """Raised when a submission is attempted while another one is outstanding."""


class TaskNotFound(CounterboardError, KeyError):
    """Raised when a task id is not on the board."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id!r}"
