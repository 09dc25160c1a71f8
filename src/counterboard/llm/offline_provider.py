"""Offline deterministic provider used for demos when no API key is configured."""

from __future__ import annotations

import json
import logging
from typing import Any

from counterboard.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

# Returned for task-extraction prompts. Mirrors what the remote model is asked to
# fabricate when it finds no real task in the input.
PLACEHOLDER_TASKS: list[dict[str, str]] = [
    {
        "title": "Teach the houseplants to whistle",
        "description": "Start with the fern; it seems the most musical.",
        "priority": "LOW",
    },
    {
        "title": "Alphabetize the clouds",
        "description": "Cumulus before nimbus. Ignore the contrails.",
        "priority": "MEDIUM",
    },
    {
        "title": "Negotiate a treaty with the toaster",
        "description": "It keeps burning the left slice on purpose.",
        "priority": "HIGH",
    },
    {
        "title": "Count the grains in the sugar bowl",
        "description": "Twice, in case the first count was sloppy.",
        "priority": "LOW",
    },
    {
        "title": "Return the moon to its original orbit",
        "description": "Leave a polite note for whoever borrowed it.",
        "priority": "MEDIUM",
    },
]

EXTRACTION_MARKER = "JSON array"


class OfflineProvider(LLMProvider):
    """Deterministic LLM stand-in.

    Behavior:
    - Task extraction prompts -> the five placeholder tasks as a JSON array
    - Anything else -> a short reply echoing the last user message
    """

    def __init__(self) -> None:
        logger.info("Offline LLM provider initialized; no external calls will be made")

    def generate(self, prompt: str, temperature: float | None = None, **kwargs: Any) -> str:
        return self.chat([{"role": "user", "content": prompt}])

    def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        user_text = ""
        for m in reversed(messages):
            if m.get("role") == "user":
                user_text = m.get("content", "")
                break

        if EXTRACTION_MARKER in user_text:
            return json.dumps(PLACEHOLDER_TASKS)

        return (
            "Offline demo mode: no external LLM is configured.\n"
            "Set COUNTERBOARD_LLM_OPENAI_API_KEY to enable real responses.\n\n"
            f"You said: {user_text}"
        )
