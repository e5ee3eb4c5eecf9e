from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal


AxisName = Literal["x", "y"]
Interval = tuple[float, float]
ScaleFactory = Callable[[Interval, Interval], Callable]


@dataclass(frozen=True)
class TickMetric:
    """Rendered size of one tick label, as measured by the axis that drew it."""

    width: float | None = None
    height: float | None = None
    label: str | None = None


@dataclass
class Padding:
    top: float | None = None
    right: float | None = None
    bottom: float | None = None
    left: float | None = None


@dataclass
class ChartBox:
    height: float | None = None
    width: float | None = None
    padding: Padding = field(default_factory=Padding)
    initialized: bool = False


@dataclass
class CanvasBox:
    height: float | None = None
    width: float | None = None


@dataclass
class AxisState:
    # tick_height is only reported by the x axis.
    alignment: str | None = None
    height: float | None = None
    width: float | None = None
    tick_height: float | None = None
    ticks: object = None
    rendered_ticks: list[TickMetric] = field(default_factory=list)
    first_tick_margin: float | None = None
    last_tick_margin: float | None = None


@dataclass
class AxesState:
    x: AxisState = field(default_factory=AxisState)
    y: AxisState = field(default_factory=AxisState)
    # None until the chart is measured or the first axis registers.
    registered: int | None = None
    rendered: int = 0
    initialized: bool = False

    def axis(self, name: AxisName) -> AxisState:
        if name == "x":
            return self.x
        if name == "y":
            return self.y
        raise KeyError(name)


@dataclass
class DomainState:
    x: Interval | None = None
    y: Interval | None = None


@dataclass
class RangeState:
    x: Interval | None = None
    y: Interval | None = None


@dataclass
class ScaleState:
    x: ScaleFactory | None = None
    y: ScaleFactory | None = None


@dataclass
class ChartLayoutState:
    """Layout data for one chart instance; never shared between charts."""

    chart: ChartBox = field(default_factory=ChartBox)
    canvas: CanvasBox = field(default_factory=CanvasBox)
    axes: AxesState = field(default_factory=AxesState)
    domain: DomainState = field(default_factory=DomainState)
    range: RangeState = field(default_factory=RangeState)
    scale: ScaleState = field(default_factory=ScaleState)

    def is_canvas_ready(self) -> bool:
        return self.chart.initialized and self.axes.initialized
