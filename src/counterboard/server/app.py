"""FastAPI app factory.

Each app owns exactly one register store, calculator and task manager, stored on
`app.state`. Nothing is shared between app instances.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from counterboard import __version__
from counterboard.core.config import AppConfig
from counterboard.llm.factory import LLMFactory
from counterboard.llm.offline_provider import OfflineProvider
from counterboard.llm.provider import LLMProvider
from counterboard.server.config import ServerSettings
from counterboard.server.router import router
from counterboard.store.calculator import Calculator
from counterboard.store.register import RegisterStore
from counterboard.tasks.manager import TaskManager

logger = logging.getLogger(__name__)


def _default_provider(config: AppConfig) -> LLMProvider:
    if config.llm.provider == "openai" and not config.llm.openai_api_key:
        logger.warning("No OpenAI API key configured; using the offline provider")
        return OfflineProvider()
    return LLMFactory.create(config.llm)


def create_app(
    config: AppConfig | None = None,
    provider: LLMProvider | None = None,
) -> FastAPI:
    config = config or AppConfig()
    settings = ServerSettings()

    app = FastAPI(
        title="counterboard",
        version=__version__,
        description="REST API over the counter, mini calculator and task manager.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    store = RegisterStore()
    app.state.config = config
    app.state.store = store
    app.state.calculator = Calculator(store)
    app.state.task_manager = TaskManager(provider or _default_provider(config))

    # Minimal dev-friendly CORS so a Vite dev server can call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")
    return app
