"""CLI entrypoint.

Subcommands:
- counter: press a sequence of counter/calculator buttons and print the result
- extract: extract tasks from a message and print them as JSON
- chat: send one chat message and print the transcript
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from counterboard import __version__
from counterboard.bindings import CounterDispatcher, CounterView
from counterboard.chat.session import ChatSession
from counterboard.core.config import AppConfig
from counterboard.core.exceptions import DivisionByZero, InvalidOperand, UnknownAction
from counterboard.llm.factory import LLMFactory
from counterboard.llm.provider import LLMProvider
from counterboard.store.register import RegisterStore
from counterboard.tasks.board import TaskBoard
from counterboard.tasks.extraction import TaskExtractor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="counterboard",
        description="Counter widget, mini calculator and LLM-backed task manager",
    )
    parser.add_argument("--version", action="version", version=f"counterboard {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    counter = subparsers.add_parser(
        "counter",
        help="Press counter/calculator buttons in order and print the final count",
    )
    counter.add_argument(
        "buttons",
        nargs="*",
        help="Button labels, e.g. Increment Double +1 ÷2 Clear",
    )
    counter.add_argument(
        "--list",
        action="store_true",
        help="List the available button labels and exit",
    )

    extract = subparsers.add_parser("extract", help="Extract tasks from a message")
    extract.add_argument("message", help="Free-text message")

    chat = subparsers.add_parser("chat", help="Send one chat message")
    chat.add_argument("message", help="Message sent verbatim to the model")

    return parser


def _cmd_counter(args: argparse.Namespace) -> int:
    store = RegisterStore()
    dispatcher = CounterDispatcher(store)
    view = CounterView(store)

    if args.list:
        for label in dispatcher.labels:
            print(label)
        return 0

    for label in args.buttons:
        try:
            error = dispatcher.dispatch(label)
        except UnknownAction as e:
            print(str(e), file=sys.stderr)
            return 2
        except InvalidOperand as e:
            print(f"{label}: {e}", file=sys.stderr)
            continue
        if isinstance(error, DivisionByZero):
            print(f"{label}: {error}", file=sys.stderr)

    print(view.text)
    return 0


def _cmd_extract(args: argparse.Namespace, provider: LLMProvider) -> int:
    board = TaskBoard()
    added = board.add_extracted(TaskExtractor(provider).extract(args.message))
    print(json.dumps([t.model_dump(mode="json") for t in added], indent=2, ensure_ascii=False))
    return 0 if added else 1


def _cmd_chat(args: argparse.Namespace, provider: LLMProvider) -> int:
    session = ChatSession(provider)
    session.send(args.message)
    for line in session.transcript:
        print(line)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    config.setup_logging()

    if args.command == "counter":
        return _cmd_counter(args)

    try:
        provider = LLMFactory.create(config.llm)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.command == "extract":
        return _cmd_extract(args, provider)
    if args.command == "chat":
        return _cmd_chat(args, provider)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
