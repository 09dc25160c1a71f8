"""counterboard.

Two small demo applications over one shared pattern:
- a counter widget and mini calculator driven by an explicitly owned register store
- a task manager that extracts structured tasks from chat input via an LLM
"""

__version__ = "0.1.0"

from counterboard.core.config import AppConfig
from counterboard.store.register import RegisterStore

__all__ = ["__version__", "AppConfig", "RegisterStore"]
