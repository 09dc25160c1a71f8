#!/usr/bin/env python3
"""Programmatic usage example.

This wires the components together directly:

* one register store shared by a counter view and a calculator view
* a task manager that chats with the configured LLM and extracts tasks

Without `COUNTERBOARD_LLM_OPENAI_API_KEY` the offline provider is used.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from counterboard.bindings import CalculatorView, CounterDispatcher, CounterView
from counterboard.core.config import AppConfig
from counterboard.llm.factory import LLMFactory
from counterboard.llm.offline_provider import OfflineProvider
from counterboard.store.register import RegisterStore
from counterboard.tasks.manager import TaskManager


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="counterboard programmatic example.")
    parser.add_argument(
        "--message",
        default="Remind me to renew my passport and book the dentist next week",
        help="Message submitted to the task manager",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    config = AppConfig()
    config.setup_logging()

    store = RegisterStore()
    counter = CounterView(store)
    calculator = CalculatorView(store)
    dispatcher = CounterDispatcher(store)

    for label in ("Increment", "Increment", "Double", "+1", "÷2", "÷2"):
        dispatcher.dispatch(label)
    print(counter.text)
    print(calculator.text)

    if config.llm.provider == "openai" and not config.llm.openai_api_key:
        provider = OfflineProvider()
    else:
        provider = LLMFactory.create(config.llm)

    manager = TaskManager(provider)
    result = manager.submit(args.message)

    for line in manager.chat.transcript:
        print(line)
    for task in result.added:
        print(f"[{task.priority.value}] {task.title}: {task.description}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
