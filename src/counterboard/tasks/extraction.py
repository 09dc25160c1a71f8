"""Task extraction: free text in, schema-validated task candidates out.

The adapter never raises for a failed call. Transport errors, unparsable replies
and schema violations are logged as an ExtractionFailure and produce an empty list.
"""

from __future__ import annotations

import json
import logging
import re

from pydantic import TypeAdapter, ValidationError

from counterboard.core.exceptions import ExtractionFailure
from counterboard.llm.provider import LLMProvider
from counterboard.tasks.models import ExtractedTask

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = (
    "Analyze the following text and extract any tasks it implies. "
    "Return ONLY a JSON array of objects with the keys "
    '"title" (string), "description" (string) and "priority" '
    '(one of "HIGH", "MEDIUM", "LOW"). '
    "If the text does not imply any task, return a JSON array of five absurd, "
    "humorous placeholder tasks in the same format instead.\n\n"
    "Text:\n"
)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)

_TASKS_ADAPTER = TypeAdapter(list[ExtractedTask])


def build_extraction_prompt(message: str) -> str:
    return f"{EXTRACTION_PROMPT}{message}"


def parse_extracted_tasks(raw: str) -> list[ExtractedTask]:
    """Parse and validate a model reply.

    Accepts a bare JSON array, an array inside a Markdown code fence, or an object
    holding the array under "tasks".

    Raises:
        ExtractionFailure: If the reply is not JSON or does not match the schema.
    """
    text = raw.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionFailure(f"Reply is not valid JSON: {e}") from e

    if isinstance(data, dict) and "tasks" in data:
        data = data["tasks"]

    try:
        return _TASKS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ExtractionFailure(
            f"Reply does not match the task schema ({e.error_count()} errors)"
        ) from e


class TaskExtractor:
    """Requests structured task candidates from an LLM provider."""

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    def extract(self, message: str) -> list[ExtractedTask]:
        """Extract task candidates from `message`.

        Returns:
            The validated candidates in model order, or an empty list on failure.
        """
        try:
            raw = self.provider.generate(build_extraction_prompt(message))
        except Exception as e:
            failure = ExtractionFailure(f"Extraction call failed: {e}")
            logger.error(str(failure), extra={"error_type": type(e).__name__})
            return []

        try:
            tasks = parse_extracted_tasks(raw)
        except ExtractionFailure as failure:
            logger.error(str(failure), extra={"reply_preview": raw[:200]})
            return []

        logger.info(f"Extracted {len(tasks)} tasks")
        return tasks
