from frost_chart.actions import (
    AxisReport,
    RegisterAxis,
    RenderedTick,
    RenderedXAxis,
    RenderedYAxis,
    UnknownAction,
    action_from_payload,
)
from frost_chart.chart import ChartPhase, FrostChart
from frost_chart.config import ChartConfig, load_chart_config
from frost_chart.errors import ChartActionError, ChartConfigError
from frost_chart.measure import ElementMetrics, ElementProbe, StaticElementProbe, measure_tick_label
from frost_chart.scales import LinearScale, linear_scale
from frost_chart.state import ChartLayoutState, TickMetric
from frost_chart.validation import is_domain_valid

__all__ = [
    "AxisReport",
    "ChartActionError",
    "ChartConfig",
    "ChartConfigError",
    "ChartLayoutState",
    "ChartPhase",
    "ElementMetrics",
    "ElementProbe",
    "FrostChart",
    "LinearScale",
    "RegisterAxis",
    "RenderedTick",
    "RenderedXAxis",
    "RenderedYAxis",
    "StaticElementProbe",
    "TickMetric",
    "UnknownAction",
    "action_from_payload",
    "is_domain_valid",
    "linear_scale",
    "load_chart_config",
    "measure_tick_label",
]
