"""Register store and derived calculator operations."""

from counterboard.store.calculator import Calculator
from counterboard.store.register import RegisterState, RegisterStore

__all__ = [
    "Calculator",
    "RegisterState",
    "RegisterStore",
]
