"""Unit tests for the chat session and the task manager controller."""

from __future__ import annotations

import logging
import threading
from unittest.mock import Mock

import pytest

from counterboard.chat.session import ERROR_REPLY, ChatSession
from counterboard.core.exceptions import SubmissionInProgress
from counterboard.tasks.manager import TaskManager
from counterboard.tasks.models import TaskStatus


def test_chat_appends_prefixed_transcript(provider: Mock) -> None:
    provider.generate.return_value = "Hello there"
    session = ChatSession(provider)

    reply = session.send("hi")

    provider.generate.assert_called_once_with("hi")
    assert reply == "Hello there"
    assert session.transcript == ("You: hi", "AI: Hello there")


def test_chat_failure_appends_placeholder(
    provider: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    provider.generate.side_effect = RuntimeError("quota exceeded")
    session = ChatSession(provider)

    with caplog.at_level(logging.ERROR):
        reply = session.send("hi")

    assert reply == ERROR_REPLY
    assert session.transcript == ("You: hi", "AI: Sorry, I encountered an error.")
    assert "Chat call failed" in caplog.text


def test_chat_ignores_blank_messages(provider: Mock) -> None:
    session = ChatSession(provider)
    assert session.send("   ") is None
    provider.generate.assert_not_called()
    assert session.transcript == ()


def test_submit_chats_and_adds_extracted_tasks(provider: Mock) -> None:
    manager = TaskManager(provider)

    result = manager.submit("buy milk, call mum")

    assert provider.generate.call_count == 2
    assert len(result.added) == 2
    assert all(t.status is TaskStatus.TODO for t in manager.board.tasks)
    assert manager.chat.transcript[0] == "You: buy milk, call mum"
    assert manager.busy is False


def test_submit_refused_while_busy(provider: Mock) -> None:
    manager = TaskManager(provider)
    nested: list[Exception] = []

    def reentrant(prompt: str) -> str:
        try:
            manager.submit("again")
        except SubmissionInProgress as e:
            nested.append(e)
        return "[]"

    provider.generate.side_effect = reentrant
    manager.submit("first")

    assert len(nested) == 2
    assert manager.busy is False


def test_extract_adds_todo_tasks_to_board(provider: Mock) -> None:
    manager = TaskManager(provider)

    added = manager.extract("buy milk, call mum")

    assert [t.title for t in added] == ["Buy milk", "Call mum"]
    assert manager.board.tasks == tuple(added)
    assert manager.chat.transcript == ()


def test_model_calls_are_exclusive_across_threads(provider: Mock) -> None:
    manager = TaskManager(provider)
    started = threading.Event()
    release = threading.Event()

    def slow_reply(prompt: str) -> str:
        started.set()
        assert release.wait(timeout=5)
        return "done"

    provider.generate.side_effect = slow_reply
    worker = threading.Thread(target=manager.send_chat, args=("first",))
    worker.start()
    try:
        assert started.wait(timeout=5)
        assert manager.busy is True
        for call in (manager.send_chat, manager.extract, manager.submit):
            with pytest.raises(SubmissionInProgress):
                call("second")
    finally:
        release.set()
        worker.join(timeout=5)

    provider.generate.assert_called_once_with("first")
    assert manager.busy is False
    assert manager.chat.transcript == ("You: first", "AI: done")
