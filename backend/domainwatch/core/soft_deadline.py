"""Soft Deadline — advisory wall-clock budget for one reconciliation pass.

Invariants:
    - t0 is captured at construction
    - exceeded() is True only strictly past the budget
    - Never cancels or interrupts anything: callers check it between dispatches

Design Decisions:
    - Injected clock (default time.monotonic): deterministic tests, immune to
      wall-clock adjustments
"""

import time
from collections.abc import Callable


class SoftDeadline:
    """Budget checked between units of work, never enforced mid-operation."""

    def __init__(
        self, budget_seconds: float, clock: Callable[[], float] = time.monotonic,
    ):
        self.budget_seconds = budget_seconds
        self._clock = clock
        self._t0 = clock()

    def elapsed_seconds(self) -> float:
        return self._clock() - self._t0

    def elapsed_ms(self) -> int:
        return int(self.elapsed_seconds() * 1000)

    def exceeded(self) -> bool:
        return self.elapsed_seconds() > self.budget_seconds
