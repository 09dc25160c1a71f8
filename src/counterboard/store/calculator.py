"""Derived calculator operations built on the register store's `multiply`."""

from __future__ import annotations

import logging
from collections.abc import Callable

from counterboard.core.exceptions import DivisionByZero, InvalidOperand
from counterboard.store.register import RegisterStore, require_finite

logger = logging.getLogger(__name__)


class Calculator:
    """Percentage-style adjustments expressed against the current register value.

    Args:
        store: The register store to operate on.
        on_calculate: Optional callback invoked with the register value after each
            successful operation.
    """

    def __init__(
        self,
        store: RegisterStore,
        on_calculate: Callable[[float], None] | None = None,
    ) -> None:
        self.store = store
        self.on_calculate = on_calculate

    def add_by_ratio(self, a: float) -> None:
        """Add `a` by scaling the register with `1 + a / count`."""
        with self.store.transaction():
            self.store.multiply(1 + a / self._nonzero_count("add_by_ratio"))
            self._report()

    def subtract_by_ratio(self, a: float) -> None:
        """Subtract `a` by scaling the register with `1 - a / count`."""
        with self.store.transaction():
            self.store.multiply(1 - a / self._nonzero_count("subtract_by_ratio"))
            self._report()

    def divide_by_constant(self, a: float) -> DivisionByZero | None:
        require_finite(a, name="divisor")
        if a == 0:
            error = DivisionByZero("divide_by_constant")
            logger.error(
                str(error), extra={"operation": "divide_by_constant", "count": self.store.count}
            )
            return error
        with self.store.transaction():
            self.store.multiply(1 / a)
            self._report()
        return None

    def double(self) -> None:
        with self.store.transaction():
            self.store.multiply(2)
            self._report()

    def clear(self) -> None:
        with self.store.transaction():
            self.store.reset()
            self._report()

    def _nonzero_count(self, operation: str) -> float:
        count = self.store.count
        if count == 0:
            raise InvalidOperand(f"{operation} is undefined while the register is 0")
        return count

    def _report(self) -> None:
        if self.on_calculate is not None:
            self.on_calculate(self.store.count)
