"""Trailing-edge debouncer driven by polling.

Callers push every new value and poll from their event loop; a value is
released once no newer value has been pushed for the configured delay.
The clock is injectable so tests can advance time by hand.
"""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Release the latest pushed value after delay_ms of quiet."""

    def __init__(
        self, delay_ms: int, clock: Callable[[], float] = time.monotonic
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must not be negative, got: {delay_ms}")
        self.delay = delay_ms / 1000.0
        self._clock = clock
        self._pending: Optional[T] = None
        self._has_pending = False
        self._deadline = 0.0

    @property
    def has_pending(self) -> bool:
        return self._has_pending

    def push(self, value: T) -> None:
        """Replace any pending value and restart the quiet period."""
        self._pending = value
        self._has_pending = True
        self._deadline = self._clock() + self.delay

    def cancel(self) -> None:
        self._pending = None
        self._has_pending = False

    def poll(self) -> tuple[bool, Optional[T]]:
        """Check whether the pending value has settled.

        Returns:
            (settled, value) - value is released at most once
        """
        if not self._has_pending or self._clock() < self._deadline:
            return False, None
        value = self._pending
        self.cancel()
        return True, value
