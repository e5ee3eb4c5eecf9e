from __future__ import annotations

from frost_chart.state import ChartLayoutState, Interval


class RangeResolver:
    """Fills in output ranges the caller left open, from the current canvas size."""

    def __init__(self, state: ChartLayoutState, *, x_range: Interval | None = None, y_range: Interval | None = None) -> None:
        self._state = state
        self._x_fixed = bool(x_range)
        self._y_fixed = bool(y_range)

    def has_dynamic_range(self) -> bool:
        return not self._x_fixed or not self._y_fixed

    def resolve(self) -> None:
        canvas = self._state.canvas
        if not self._x_fixed:
            self._state.range.x = (0, canvas.width)
        if not self._y_fixed:
            # Screen y grows downward, chart y grows upward.
            self._state.range.y = (canvas.height, 0)


class CanvasSizer:
    def __init__(self, state: ChartLayoutState, ranges: RangeResolver) -> None:
        self._state = state
        self._ranges = ranges

    def recompute(self) -> tuple[float, float]:
        """Derive the plot canvas from the chart box minus axis extents and edge tick margins.

        The result is not clamped: a container smaller than its margins yields a
        negative canvas, which renderers are expected to tolerate.
        """
        state = self._state
        x_axis = state.axes.x
        y_axis = state.axes.y

        chart_height = state.chart.height or 0
        state.canvas.height = (
            chart_height - (x_axis.height or 0) - (y_axis.first_tick_margin or 0) - (y_axis.last_tick_margin or 0)
        )

        chart_width = state.chart.width or 0
        state.canvas.width = (
            chart_width - (y_axis.width or 0) - (x_axis.first_tick_margin or 0) - (x_axis.last_tick_margin or 0)
        )

        self._ranges.resolve()
        return (state.canvas.width, state.canvas.height)
