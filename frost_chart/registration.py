from __future__ import annotations

from frost_chart.state import AxisName, ChartLayoutState, TickMetric


class RegistrationTracker:
    """Counts registered axes and collects the ticks they render."""

    def __init__(self, state: ChartLayoutState) -> None:
        self._state = state

    def on_register_axis(self) -> int:
        axes = self._state.axes
        axes.registered = (axes.registered or 0) + 1
        return axes.registered

    def on_tick_rendered(self, axis_name: AxisName, tick: TickMetric) -> None:
        self._state.axes.axis(axis_name).rendered_ticks.append(tick)

    def ensure_registered_known(self) -> None:
        # Called once the chart is measured: no registrations so far means zero axes.
        if self._state.axes.registered is None:
            self._state.axes.registered = 0

    def mark_rendered(self) -> bool:
        """Count one axis report; returns False when every registered axis already reported."""
        axes = self._state.axes
        if axes.registered is not None and axes.rendered >= axes.registered:
            return False
        axes.rendered += 1
        return True

    def all_reported(self) -> bool:
        axes = self._state.axes
        return axes.registered == 0 or axes.rendered == axes.registered

    def reset_cycle(self) -> None:
        axes = self._state.axes
        axes.rendered = 0
        axes.initialized = False
        axes.x.rendered_ticks.clear()
        axes.y.rendered_ticks.clear()
