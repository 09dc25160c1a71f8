"""Chat-completions backend for the OpenAI API (or any compatible endpoint)."""

import logging
from typing import Any

from openai import OpenAI

from counterboard.core.config import LLMConfig
from counterboard.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Sends every request to `chat.completions` with the configured model."""

    def __init__(self, config: LLMConfig, client: OpenAI | None = None) -> None:
        """Build the provider from settings.

        Args:
            config: Model, temperature, key, base URL and timeout.
            client: Ready-made client, e.g. a test double. Built from `config`
                when omitted.

        Raises:
            ValueError: If no client is given and `config` has no API key.
        """
        if client is None and not config.openai_api_key:
            raise ValueError("OpenAI API key is required")

        self.config = config
        self.client = client or OpenAI(
            api_key=config.openai_api_key,
            base_url=config.openai_base_url,
            timeout=config.timeout_seconds,
        )
        self.model = config.openai_model
        self.temperature = config.openai_temperature

        logger.info(f"Using OpenAI model {self.model}")

    def generate(self, prompt: str, temperature: float | None = None, **kwargs: Any) -> str:
        logger.debug(f"Prompt ({len(prompt)} chars): {prompt[:100]}")
        return self.chat([{"role": "user", "content": prompt}], temperature=temperature, **kwargs)

    def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,  # type: ignore
            temperature=self.temperature if temperature is None else temperature,
            **kwargs,
        )

        content = response.choices[0].message.content or ""
        logger.debug(f"Reply of {len(content)} chars to {len(messages)} messages")
        return content
