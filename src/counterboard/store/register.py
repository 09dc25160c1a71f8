"""Register store: a single numeric `count` with named transitions.

The store is an explicitly owned object. Anything that needs the value (views,
dispatchers, the REST app) is handed the store instance; there is no module-level
instance.

Observers are plain callables receiving the new value. They are notified
synchronously, in subscription order, after every committed transition.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from counterboard.core.exceptions import DivisionByZero, InvalidOperand

logger = logging.getLogger(__name__)

Observer = Callable[[float], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class RegisterState:
    count: float = 0


def require_finite(value: float, *, name: str) -> float:
    if not math.isfinite(value):
        raise InvalidOperand(f"{name} must be a finite number, got {value!r}")
    return value


class RegisterStore:
    """Owns `count` and provides atomic, synchronous transitions.

    Each transition reads the current value, computes the next one and notifies
    observers while holding the store lock, so transitions issued from several
    threads (e.g. an ASGI worker pool) never interleave.
    """

    def __init__(self) -> None:
        self._state = RegisterState()
        self._observers: list[Observer] = []
        # Re-entrant so an observer may itself trigger a transition.
        self._lock = threading.RLock()

    @property
    def count(self) -> float:
        return self._state.count

    def snapshot(self) -> RegisterState:
        return self._state

    @contextmanager
    def transaction(self) -> Iterator[RegisterStore]:
        """Hold the store lock across several reads and transitions."""
        with self._lock:
            yield self

    def subscribe(self, observer: Observer) -> Unsubscribe:
        """Register an observer and return a callable that removes it.

        The returned callable may be invoked more than once.
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    # Transitions

    def increment(self) -> None:
        self._update(lambda count: count + 1)

    def decrement(self) -> None:
        self._update(lambda count: count - 1)

    def reset(self) -> None:
        self._update(lambda _count: 0)

    def multiply(self, factor: float) -> None:
        require_finite(factor, name="factor")
        self._update(lambda count: count * factor)

    def add(self, a: float) -> None:
        require_finite(a, name="operand")
        self._update(lambda count: count + a)

    def subtract(self, a: float) -> None:
        require_finite(a, name="operand")
        self._update(lambda count: count - a)

    def divide(self, a: float) -> DivisionByZero | None:
        """Divide the register by `a`.

        A zero divisor is reported, not raised: the error is logged and returned,
        and the register is left unchanged.
        """
        require_finite(a, name="divisor")
        if a == 0:
            error = DivisionByZero("divide")
            logger.error(str(error), extra={"operation": "divide", "count": self.count})
            return error
        self._update(lambda count: count / a)
        return None

    def _update(self, step: Callable[[float], float]) -> None:
        with self._lock:
            value = step(self._state.count)
            if not math.isfinite(value):
                raise InvalidOperand(
                    f"Transition would leave the register non-finite: {value!r}"
                )

            self._state = RegisterState(count=value)
            logger.debug(f"count={value}")

            # Snapshot so observers may unsubscribe while being notified.
            for observer in list(self._observers):
                try:
                    observer(value)
                except Exception:
                    logger.exception("Register observer failed", extra={"count": value})
