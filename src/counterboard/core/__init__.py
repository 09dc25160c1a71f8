"""Core package initialization."""

from counterboard.core.config import AppConfig, LLMConfig
from counterboard.core.exceptions import (
    ChatFailure,
    CounterboardError,
    DivisionByZero,
    ExtractionFailure,
    InvalidOperand,
)

__all__ = [
    "AppConfig",
    "ChatFailure",
    "CounterboardError",
    "DivisionByZero",
    "ExtractionFailure",
    "InvalidOperand",
    "LLMConfig",
]
