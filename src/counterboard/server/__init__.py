"""FastAPI server adapter for counterboard.

Design intent:
- Keep state transitions and LLM calls in `counterboard.store` / `counterboard.tasks`
- Keep server-specific concerns (routing, CORS, status codes) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from counterboard.server.app import create_app
