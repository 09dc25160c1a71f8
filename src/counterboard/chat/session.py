"""General chat with the language model, kept as a plain-text transcript."""

from __future__ import annotations

import logging

from counterboard.core.exceptions import ChatFailure
from counterboard.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

USER_PREFIX = "You: "
AI_PREFIX = "AI: "
ERROR_REPLY = "Sorry, I encountered an error."


class ChatSession:
    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider
        self._transcript: list[str] = []

    @property
    def transcript(self) -> tuple[str, ...]:
        return tuple(self._transcript)

    def send(self, message: str) -> str | None:
        """Send one message verbatim and append both sides to the transcript.

        Returns:
            The reply text that was appended, or None for a blank message.
        """
        if not message.strip():
            return None

        self._transcript.append(f"{USER_PREFIX}{message}")
        try:
            reply = self.provider.generate(message)
        except Exception as e:
            failure = ChatFailure(f"Chat call failed: {e}")
            logger.error(str(failure), extra={"error_type": type(e).__name__})
            reply = ERROR_REPLY

        self._transcript.append(f"{AI_PREFIX}{reply}")
        return reply

    def clear(self) -> None:
        self._transcript.clear()
