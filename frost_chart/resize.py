from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

from frost_chart.canvas import CanvasSizer, RangeResolver
from frost_chart.state import ChartLayoutState

LOGGER = logging.getLogger(__name__)

DEFAULT_RESIZE_DELAY_S = 1.0 / 60.0


@dataclass(frozen=True)
class ResizeSignal:
    width: float
    height: float


class ResizeDebouncer:
    """Coalesces container resize signals into one delayed canvas recompute.

    Keep-latest semantics: each new signal replaces the pending one and restarts
    the delay. The host drives it by calling ``poll`` from its frame loop.

    A resize is not gated on the axis report cycle. One that fires before the
    first measurement, or after ``remeasure`` while axes are still reporting,
    recomputes canvas and ranges from whatever margins are present at that
    moment; ``axes.initialized`` is left untouched and the next completed
    report cycle recomputes again with the full margins.
    """

    def __init__(
        self,
        state: ChartLayoutState,
        sizer: CanvasSizer,
        ranges: RangeResolver,
        *,
        delay_s: float = DEFAULT_RESIZE_DELAY_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        self._state = state
        self._sizer = sizer
        self._ranges = ranges
        self._delay_s = float(delay_s)
        self._clock = clock
        self._pending: ResizeSignal | None = None
        self._due_at: float | None = None
        self._dropped = 0

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def pending(self) -> ResizeSignal | None:
        return self._pending

    @property
    def dropped(self) -> int:
        return self._dropped

    def submit(self, width: float, height: float, now: float | None = None) -> bool:
        """Queue a resize; returns False when both ranges are pinned and the signal is ignored."""
        if not self._ranges.has_dynamic_range():
            return False
        now = self._clock() if now is None else now
        if self._pending is not None:
            self._dropped += 1
        self._pending = ResizeSignal(width=width, height=height)
        self._due_at = now + self._delay_s
        return True

    def cancel(self) -> None:
        self._pending = None
        self._due_at = None

    def time_until_due(self, now: float | None = None) -> float | None:
        if self._due_at is None:
            return None
        now = self._clock() if now is None else now
        return max(0.0, self._due_at - now)

    def poll(self, now: float | None = None) -> bool:
        """Apply the pending resize if its delay elapsed; returns True when the canvas was recomputed."""
        if self._pending is None or self._due_at is None:
            return False
        now = self._clock() if now is None else now
        if now < self._due_at:
            return False
        signal = self._pending
        self.cancel()
        return self.apply(signal)

    def apply(self, signal: ResizeSignal) -> bool:
        chart = self._state.chart
        height_changed = chart.height != signal.height
        width_changed = chart.width != signal.width
        if height_changed:
            chart.height = signal.height
        if width_changed:
            chart.width = signal.width
        if not (height_changed or width_changed):
            return False
        self._sizer.recompute()
        LOGGER.debug(
            "resized chart to %sx%s; canvas=%sx%s",
            chart.width,
            chart.height,
            self._state.canvas.width,
            self._state.canvas.height,
        )
        return True
