"""Retrying of fallible operations with a growing delay between attempts."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class BasicRetryer:
    """Calls an operation up to ``max_attempts`` times until it succeeds.

    Before attempt ``n`` (from the second on) it waits ``n - multiplier``
    seconds, never less than zero.
    """

    max_attempts: int
    multiplier: int

    def retry(self, func: Callable[[int], T]) -> T:
        """Run ``func(attempt)`` until it returns; re-raise the last error."""
        try:
            return func(1)
        except Exception as exc:  # noqa: BLE001 - any failure triggers a retry
            last_error = exc

        for attempt in range(2, self.max_attempts + 1):
            time.sleep(max(0, attempt - self.multiplier))
            try:
                return func(attempt)
            except Exception as exc:  # noqa: BLE001
                last_error = exc

        raise last_error