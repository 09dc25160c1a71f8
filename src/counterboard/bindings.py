"""Presentation bindings for the counter widget and mini calculator.

Views subscribe to a store and keep their last rendered text; the dispatcher turns
button labels into store operations. Neither holds state of its own beyond that.
"""

from __future__ import annotations

from collections.abc import Callable

from counterboard.core.exceptions import DivisionByZero, UnknownAction
from counterboard.store.calculator import Calculator
from counterboard.store.register import RegisterStore


def format_count(value: float) -> str:
    # Whole numbers render without a trailing ".0".
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class _StoreView:
    template = "{count}"

    def __init__(self, store: RegisterStore) -> None:
        self.renders = 0
        self.text = ""
        self._render(store.count)
        self._unsubscribe = store.subscribe(self._render)

    def _render(self, value: float) -> None:
        self.text = self.template.format(count=format_count(value))
        self.renders += 1

    def close(self) -> None:
        self._unsubscribe()


class CounterView(_StoreView):
    template = "Count: {count}"


class CalculatorView(_StoreView):
    template = "Current value: {count}"


class CounterDispatcher:
    """Maps the counter and calculator button labels to store operations."""

    def __init__(self, store: RegisterStore, calculator: Calculator | None = None) -> None:
        self.store = store
        self.calculator = calculator or Calculator(store)
        self._actions: dict[str, Callable[[], DivisionByZero | None]] = {
            # Counter card
            "Increment": store.increment,
            "Decrement": store.decrement,
            "Reset": store.reset,
            "Double": lambda: store.multiply(2),
            # Mini calculator
            "+1": lambda: self.calculator.add_by_ratio(1),
            "-1": lambda: self.calculator.subtract_by_ratio(1),
            "×2": self.calculator.double,
            "÷2": lambda: self.calculator.divide_by_constant(2),
            "Clear": self.calculator.clear,
        }

    @property
    def labels(self) -> list[str]:
        return list(self._actions)

    def dispatch(self, label: str) -> DivisionByZero | None:
        try:
            action = self._actions[label]
        except KeyError:
            raise UnknownAction(f"Unknown action: {label!r}") from None
        return action()
