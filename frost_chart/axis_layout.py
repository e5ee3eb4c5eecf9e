from __future__ import annotations

import logging
from typing import Sequence

from frost_chart.actions import AxisReport
from frost_chart.canvas import CanvasSizer
from frost_chart.registration import RegistrationTracker
from frost_chart.state import AxisName, ChartLayoutState, TickMetric

LOGGER = logging.getLogger(__name__)


def edge_tick_margins(rendered_ticks: Sequence[TickMetric], orientation: AxisName) -> tuple[float, float]:
    """Half the cross-axis size of the first and last rendered tick.

    Labels are centred on their tick, so half of an edge label hangs past the
    axis end. x ticks overflow by their width, y ticks by their height.
    """
    if not rendered_ticks:
        return (0.0, 0.0)
    attr = "width" if orientation == "x" else "height"
    first = getattr(rendered_ticks[0], attr, None) or 0.0
    last = getattr(rendered_ticks[-1], attr, None) or 0.0
    return (float(first) / 2.0, float(last) / 2.0)


class AxisLayoutCalculator:
    """Turns one axis report into margins and a trimmed extent, then runs the finalization gate."""

    def __init__(
        self,
        orientation: AxisName,
        state: ChartLayoutState,
        tracker: RegistrationTracker,
        sizer: CanvasSizer,
    ) -> None:
        if orientation not in ("x", "y"):
            raise ValueError("orientation must be 'x' or 'y'")
        self._orientation = orientation
        self._state = state
        self._tracker = tracker
        self._sizer = sizer

    @property
    def orientation(self) -> AxisName:
        return self._orientation

    def apply(self, report: AxisReport) -> bool:
        """Store the report; returns True when this report completed the layout cycle."""
        axis = self._state.axes.axis(self._orientation)
        first_margin, last_margin = edge_tick_margins(axis.rendered_ticks, self._orientation)

        axis.alignment = report.alignment
        axis.ticks = report.ticks
        axis.first_tick_margin = first_margin
        axis.last_tick_margin = last_margin
        if self._orientation == "x":
            axis.tick_height = report.tick_height
            axis.height = report.height
            axis.width = report.width - first_margin - last_margin
        else:
            axis.height = report.height - first_margin - last_margin
            axis.width = report.width

        counted = self._tracker.mark_rendered()
        # With zero registered axes an uncounted report is the normal shortcut.
        if not counted and self._state.axes.registered:
            LOGGER.warning(
                "%s axis reported again after all %s registered axes reported",
                self._orientation,
                self._state.axes.registered,
            )

        if not self._tracker.all_reported():
            return False

        self._sizer.recompute()
        axes = self._state.axes
        if axes.initialized:
            return False
        axes.initialized = True
        LOGGER.debug(
            "axes initialized after %d/%s reports; canvas=%sx%s",
            axes.rendered,
            axes.registered,
            self._state.canvas.width,
            self._state.canvas.height,
        )
        return True
