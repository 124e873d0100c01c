"""Tick-driven animation for the header's expand/collapse.

The controller does not own a timer: it is handed a ``schedule`` /
``cancel`` pair (``root.after`` / ``root.after_cancel`` in the app) and a
clock, so it can be driven by any event loop.
"""

import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

EXPAND_DURATION_MS = 200
FRAME_MS = 16


class Cubic:
    """Cubic Bezier easing curve through (0, 0) and (1, 1)."""

    __slots__ = ("a", "b", "c", "d")

    _EPS = 0.001

    def __init__(self, a: float, b: float, c: float, d: float) -> None:
        self.a, self.b, self.c, self.d = a, b, c, d

    @staticmethod
    def _evaluate(p1: float, p2: float, m: float) -> float:
        return 3 * p1 * (1 - m) * (1 - m) * m + 3 * p2 * (1 - m) * m * m + m * m * m

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        # Bisect on the x polynomial, then read y at the same parameter.
        lo, hi = 0.0, 1.0
        while True:
            mid = (lo + hi) / 2
            x = self._evaluate(self.a, self.c, mid)
            if abs(t - x) < self._EPS:
                return self._evaluate(self.b, self.d, mid)
            if x < t:
                lo = mid
            else:
                hi = mid


ease_in = Cubic(0.42, 0.0, 1.0, 1.0)


def icon_turns(value: float) -> float:
    """Rotation of the expand arrow in turns (0 closed, 0.5 open)."""
    return 0.5 * ease_in(value)


class AnimationController:
    """Animates ``value`` between 0.0 and 1.0 over ``duration_ms``."""

    def __init__(
        self,
        schedule: Callable[[int, Callable[[], None]], Any],
        cancel: Callable[[Any], None],
        duration_ms: int = EXPAND_DURATION_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._schedule = schedule
        self._cancel = cancel
        self.duration_ms = duration_ms
        self._clock = clock
        self.value = 0.0
        self._listeners: list[Callable[[float], None]] = []
        self._target = 0.0
        self._from = 0.0
        self._started_at = 0.0
        self._span_s = 0.0
        self._after_id = None
        self._on_done: Callable[[], None] | None = None

    def add_listener(self, callback: Callable[[float], None]) -> None:
        self._listeners.append(callback)

    @property
    def target(self) -> float:
        return self._target

    @property
    def is_animating(self) -> bool:
        return self._after_id is not None

    def forward(self, on_done: Callable[[], None] | None = None) -> None:
        self._animate_to(1.0, on_done)

    def reverse(self, on_done: Callable[[], None] | None = None) -> None:
        self._animate_to(0.0, on_done)

    def set_value(self, value: float) -> None:
        """Jump to *value* without animating."""
        self.stop()
        self.value = min(1.0, max(0.0, value))
        self._target = self.value
        self._notify()

    def stop(self) -> None:
        if self._after_id is not None:
            self._cancel(self._after_id)
            self._after_id = None
        self._on_done = None

    def dispose(self) -> None:
        self.stop()
        self._listeners.clear()

    # ------------------------------------------------------------------
    def _animate_to(self, target: float, on_done: Callable[[], None] | None) -> None:
        self.stop()
        self._target = target
        self._from = self.value
        self._on_done = on_done
        # Partial runs take a proportional share of the full duration
        self._span_s = abs(target - self.value) * self.duration_ms / 1000.0
        self._started_at = self._clock()
        if self._span_s <= 0:
            self._finish()
            return
        self._after_id = self._schedule(FRAME_MS, self._tick)

    def _tick(self) -> None:
        self._after_id = None
        elapsed = self._clock() - self._started_at
        progress = min(1.0, elapsed / self._span_s)
        self.value = self._from + (self._target - self._from) * progress
        if progress >= 1.0:
            self._finish()
            return
        self._notify()
        self._after_id = self._schedule(FRAME_MS, self._tick)

    def _finish(self) -> None:
        self.value = self._target
        self._notify()
        on_done, self._on_done = self._on_done, None
        if on_done is not None:
            on_done()

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb(self.value)
