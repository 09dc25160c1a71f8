"""Test configuration and fixtures."""

import json
import logging
import sys
from unittest.mock import Mock

import pytest

from counterboard.core.config import AppConfig, LLMConfig
from counterboard.llm.provider import LLMProvider
from counterboard.store.register import RegisterStore


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's `.env` and shell variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "COUNTERBOARD_LOG_LEVEL",
        "COUNTERBOARD_LOG_FORMAT",
        "COUNTERBOARD_DEBUG",
        "COUNTERBOARD_LLM_PROVIDER",
        "COUNTERBOARD_LLM_OPENAI_API_KEY",
        "COUNTERBOARD_LLM_OPENAI_MODEL",
        "COUNTERBOARD_CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """`configure_logging` replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def llm_config() -> LLMConfig:
    """Provide a test LLM configuration."""
    return LLMConfig(
        provider="openai",
        openai_api_key="test-key",
        openai_model="gpt-4o-mini",
    )


@pytest.fixture
def app_config(llm_config: LLMConfig) -> AppConfig:
    """Provide a test application configuration."""
    return AppConfig(log_level="DEBUG", log_format="text", llm=llm_config)


@pytest.fixture
def store() -> RegisterStore:
    return RegisterStore()


@pytest.fixture
def store_at_10(store: RegisterStore) -> RegisterStore:
    store.add(10)
    return store


@pytest.fixture
def provider() -> Mock:
    """A provider double; tests set `generate.return_value` / `side_effect`."""
    mock = Mock(spec=LLMProvider)
    mock.generate.return_value = json.dumps(
        [
            {"title": "Buy milk", "description": "Two litres", "priority": "HIGH"},
            {"title": "Call mum", "description": "Sunday", "priority": "LOW"},
        ]
    )
    return mock


@pytest.fixture
def fast_thread_switching():
    """Make the interpreter switch threads often so unlocked read-modify-write races show up."""
    interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    yield
    sys.setswitchinterval(interval)
