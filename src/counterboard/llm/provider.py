"""The model interface used by task extraction and chat."""

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """A text-in, text-out language model.

    `TaskExtractor` and `ChatSession` see nothing but this interface, so the
    OpenAI backend, the offline backend and test doubles are interchangeable.
    Implementations block until the reply is complete and raise on transport or
    API errors; callers decide how to degrade.
    """

    @abstractmethod
    def generate(self, prompt: str, temperature: float | None = None, **kwargs: Any) -> str:
        """Answer one prompt sent as a single user message.

        Args:
            prompt: Message text, e.g. an extraction prompt or a chat line.
            temperature: Overrides the configured sampling temperature.
            **kwargs: Passed through to the backend request.

        Returns:
            The reply text; empty if the model returned no content.
        """

    @abstractmethod
    def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        """Answer a conversation given as `{"role": ..., "content": ...}` dicts.

        Returns:
            The text of the assistant's next message.
        """
