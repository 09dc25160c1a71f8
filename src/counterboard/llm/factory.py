"""Picks the model backend named in the settings."""

import logging

from counterboard.core.config import LLMConfig
from counterboard.llm.offline_provider import OfflineProvider
from counterboard.llm.openai_provider import OpenAIProvider
from counterboard.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class LLMFactory:
    @staticmethod
    def create(config: LLMConfig) -> LLMProvider:
        """Return the backend selected by `config.provider`.

        Raises:
            ValueError: For an unknown backend name, or for `openai` without an
                API key.
        """
        logger.info(f"LLM backend: {config.provider}")

        if config.provider == "openai":
            return OpenAIProvider(config)
        if config.provider == "offline":
            return OfflineProvider()
        raise ValueError(f"Unsupported LLM provider: {config.provider}")
