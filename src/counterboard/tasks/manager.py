"""Task manager controller: one chat submission feeds both the transcript and the board."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from counterboard.chat.session import ChatSession
from counterboard.core.exceptions import SubmissionInProgress
from counterboard.llm.provider import LLMProvider
from counterboard.tasks.board import TaskBoard
from counterboard.tasks.extraction import TaskExtractor
from counterboard.tasks.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    reply: str | None
    added: list[Task] = field(default_factory=list)


class TaskManager:
    """Runs at most one model call at a time.

    `busy` plays the role of the disabled input box: while a submission, chat
    turn or extraction is running, the others are refused with
    `SubmissionInProgress`.
    """

    def __init__(
        self,
        provider: LLMProvider,
        board: TaskBoard | None = None,
    ) -> None:
        self.board = board if board is not None else TaskBoard()
        self.chat = ChatSession(provider)
        self.extractor = TaskExtractor(provider)
        # Not re-entrant: a nested call from the same thread is refused too.
        self._gate = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._gate.locked()

    @contextmanager
    def reserve(self) -> Iterator[None]:
        """Claim the manager for one model call or raise `SubmissionInProgress`."""
        if not self._gate.acquire(blocking=False):
            raise SubmissionInProgress("A submission is already in progress")
        try:
            yield
        finally:
            self._gate.release()

    def submit(self, message: str) -> SubmissionResult:
        with self.reserve():
            if not message.strip():
                return SubmissionResult(reply=None)
            reply = self.chat.send(message)
            added = self.board.add_extracted(self.extractor.extract(message))

        logger.info("Submission processed", extra={"tasks_added": len(added)})
        return SubmissionResult(reply=reply, added=added)

    def send_chat(self, message: str) -> str | None:
        with self.reserve():
            return self.chat.send(message)

    def extract(self, message: str) -> list[Task]:
        with self.reserve():
            return self.board.add_extracted(self.extractor.extract(message))
