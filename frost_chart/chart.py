from __future__ import annotations

import logging
import time
from typing import Any, Callable, Literal, Mapping

from frost_chart.actions import AxisReport, ChartAction
from frost_chart.axis_layout import AxisLayoutCalculator
from frost_chart.canvas import CanvasSizer, RangeResolver
from frost_chart.config import ChartConfig
from frost_chart.dispatcher import ActionDispatcher
from frost_chart.measure import ElementProbe
from frost_chart.registration import RegistrationTracker
from frost_chart.resize import ResizeDebouncer
from frost_chart.scales import linear_scale
from frost_chart.state import AxisState, ChartLayoutState
from frost_chart.sync_queue import SyncQueue

LOGGER = logging.getLogger(__name__)

ChartPhase = Literal[
    "uninitialized",
    "properties_set",
    "chart_measured",
    "axes_registering",
    "axes_rendering",
    "canvas_ready",
    "resize_pending",
    "disposed",
]


class FrostChart:
    """Owns the layout state of one chart and runs its axis layout protocol.

    Setup and axis reports are deferred onto a sync queue; the host drains it,
    and fires any due resize, by calling ``pump`` from its frame loop.
    """

    def __init__(self, config: ChartConfig, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._config = config
        self._clock = clock
        self._state = ChartLayoutState()
        self._queue = SyncQueue()
        self._probe: ElementProbe | None = None
        self._held_reports: list[tuple[AxisLayoutCalculator, AxisReport]] = []
        self._properties_set = False
        self._disposed = False

        self._ranges = RangeResolver(self._state, x_range=config.x_range, y_range=config.y_range)
        self._sizer = CanvasSizer(self._state, self._ranges)
        self._tracker = RegistrationTracker(self._state)
        self._x_axis = AxisLayoutCalculator("x", self._state, self._tracker, self._sizer)
        self._y_axis = AxisLayoutCalculator("y", self._state, self._tracker, self._sizer)
        self._dispatcher = ActionDispatcher(
            self._tracker,
            self._x_axis,
            self._y_axis,
            schedule_report=self._schedule_report,
        )
        self._resizer = ResizeDebouncer(
            self._state,
            self._sizer,
            self._ranges,
            delay_s=config.resize_delay_s,
            clock=clock,
        )
        self._queue.schedule_once("setup_properties", self._setup_properties)

    @property
    def state(self) -> ChartLayoutState:
        return self._state

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def resizer(self) -> ResizeDebouncer:
        return self._resizer

    @property
    def phase(self) -> ChartPhase:
        if self._disposed:
            return "disposed"
        if not self._properties_set:
            return "uninitialized"
        if not self._state.chart.initialized:
            return "properties_set"
        axes = self._state.axes
        if axes.initialized:
            return "resize_pending" if self._resizer.pending is not None else "canvas_ready"
        if axes.rendered > 0:
            return "axes_rendering"
        if axes.registered:
            return "axes_registering"
        return "chart_measured"

    def has_dynamic_range(self) -> bool:
        return self._ranges.has_dynamic_range()

    def mount(self, probe: ElementProbe) -> None:
        self._require_live()
        self._probe = probe
        self._queue.schedule_once("setup_chart", self._setup_chart)

    def remeasure(self, *, registered: int | None = None) -> None:
        """Start a new layout cycle; every registered axis must report again.

        Pass ``registered`` when axes were removed since the last cycle.
        """
        self._require_live()
        if self._probe is None:
            raise RuntimeError("chart is not mounted")
        self._tracker.reset_cycle()
        if registered is not None:
            if registered < 0:
                raise ValueError("registered must be >= 0")
            self._state.axes.registered = registered
        self._state.chart.initialized = False
        self._queue.schedule_once("setup_chart", self._setup_chart)

    def dispatch(self, action: ChartAction | Mapping[str, Any]) -> None:
        self._require_live()
        self._dispatcher.dispatch(action)

    def did_resize(self, width: float, height: float, now: float | None = None) -> bool:
        self._require_live()
        return self._resizer.submit(width, height, now=now)

    def pump(self, now: float | None = None) -> bool:
        """Drain deferred work and fire a due resize; returns True if a resize recomputed the canvas."""
        self._require_live()
        self._queue.flush()
        resized = self._resizer.poll(now)
        self._queue.flush()
        return resized

    def dispose(self) -> None:
        if self._disposed:
            return
        self._resizer.cancel()
        self._queue.clear()
        self._held_reports.clear()
        self._probe = None
        self._disposed = True
        LOGGER.debug("chart disposed")

    def x_scale(self) -> Callable:
        return self._build_scale(self._state.scale.x, self._state.domain.x, self._state.range.x)

    def y_scale(self) -> Callable:
        return self._build_scale(self._state.scale.y, self._state.domain.y, self._state.range.y)

    def snapshot(self) -> dict[str, Any]:
        state = self._state
        padding = state.chart.padding
        return {
            "phase": self.phase,
            "chart": {
                "height": state.chart.height,
                "width": state.chart.width,
                "padding": {
                    "top": padding.top,
                    "right": padding.right,
                    "bottom": padding.bottom,
                    "left": padding.left,
                },
                "initialized": state.chart.initialized,
            },
            "canvas": {"height": state.canvas.height, "width": state.canvas.width},
            "axes": {
                "registered": state.axes.registered,
                "rendered": state.axes.rendered,
                "initialized": state.axes.initialized,
                "x": _axis_snapshot(state.axes.x),
                "y": _axis_snapshot(state.axes.y),
            },
            "domain": {"x": _as_list(state.domain.x), "y": _as_list(state.domain.y)},
            "range": {"x": _as_list(state.range.x), "y": _as_list(state.range.y)},
        }

    def _setup_properties(self) -> None:
        config = self._config
        self._state.domain.x = config.x_domain
        self._state.domain.y = config.y_domain
        if config.x_range:
            self._state.range.x = config.x_range
        if config.y_range:
            self._state.range.y = config.y_range
        self._state.scale.x = config.x_scale
        self._state.scale.y = config.y_scale
        self._properties_set = True
        LOGGER.debug("chart properties set: x_domain=%s y_domain=%s", config.x_domain, config.y_domain)

    def _setup_chart(self) -> None:
        if self._probe is None:
            return
        metrics = self._probe.measure()
        chart = self._state.chart
        chart.height = metrics.height
        chart.width = metrics.width
        chart.padding.top = metrics.padding_top
        chart.padding.right = metrics.padding_right
        chart.padding.bottom = metrics.padding_bottom
        chart.padding.left = metrics.padding_left
        self._tracker.ensure_registered_known()
        chart.initialized = True
        LOGGER.debug(
            "chart measured at %sx%s with %s registered axes",
            chart.width,
            chart.height,
            self._state.axes.registered,
        )
        held, self._held_reports = self._held_reports, []
        for calculator, report in held:
            self._queue.schedule(self._run_report, calculator, report)

    def _schedule_report(self, calculator: AxisLayoutCalculator, report: AxisReport) -> None:
        self._queue.schedule(self._run_report, calculator, report)

    def _run_report(self, calculator: AxisLayoutCalculator, report: AxisReport) -> None:
        # Reports wait for the chart box; finalizing against an unmeasured chart is not allowed.
        if not self._state.chart.initialized:
            self._held_reports.append((calculator, report))
            return
        calculator.apply(report)

    def _build_scale(self, factory, domain, range_) -> Callable:
        if domain is None or range_ is None:
            raise RuntimeError("chart layout is not ready")
        return (factory or linear_scale)(domain, range_)

    def _require_live(self) -> None:
        if self._disposed:
            raise RuntimeError("chart is disposed")


def _axis_snapshot(axis: AxisState) -> dict[str, Any]:
    return {
        "alignment": axis.alignment,
        "height": axis.height,
        "width": axis.width,
        "tick_height": axis.tick_height,
        "first_tick_margin": axis.first_tick_margin,
        "last_tick_margin": axis.last_tick_margin,
        "rendered_ticks": len(axis.rendered_ticks),
    }


def _as_list(value) -> list[Any] | None:
    if value is None:
        return None
    return list(value)
