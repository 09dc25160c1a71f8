"""LLM package initialization."""

from counterboard.llm.factory import LLMFactory
from counterboard.llm.provider import LLMProvider

__all__ = [
    "LLMFactory",
    "LLMProvider",
]
