"""Chat session package."""

from counterboard.chat.session import ChatSession

__all__ = ["ChatSession"]
