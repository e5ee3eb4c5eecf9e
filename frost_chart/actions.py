from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union

from frost_chart.errors import ChartActionError
from frost_chart.state import AxisName, TickMetric


REGISTER_AXIS = "REGISTER_AXIS"
RENDERED_TICK = "RENDERED_TICK"
RENDERED_X_AXIS = "RENDERED_X_AXIS"
RENDERED_Y_AXIS = "RENDERED_Y_AXIS"

ActionType = Literal["REGISTER_AXIS", "RENDERED_TICK", "RENDERED_X_AXIS", "RENDERED_Y_AXIS"]
_AXIS_NAMES = ("x", "y")


@dataclass(frozen=True)
class AxisReport:
    """Geometry an axis child reports once its own layout pass is complete."""

    alignment: str | None = None
    height: float = 0.0
    width: float = 0.0
    ticks: Any = None
    tick_height: float | None = None


@dataclass(frozen=True)
class RegisterAxis:
    type: Literal["REGISTER_AXIS"] = REGISTER_AXIS


@dataclass(frozen=True)
class RenderedTick:
    axis: AxisName
    tick: TickMetric
    type: Literal["RENDERED_TICK"] = RENDERED_TICK

    def __post_init__(self) -> None:
        if self.axis not in _AXIS_NAMES:
            raise ChartActionError(f"RENDERED_TICK axis must be 'x' or 'y', got {self.axis!r}")


@dataclass(frozen=True)
class RenderedXAxis:
    axis: AxisReport
    type: Literal["RENDERED_X_AXIS"] = RENDERED_X_AXIS


@dataclass(frozen=True)
class RenderedYAxis:
    axis: AxisReport
    type: Literal["RENDERED_Y_AXIS"] = RENDERED_Y_AXIS


@dataclass(frozen=True)
class UnknownAction:
    type: str
    payload: Mapping[str, Any] | None = None


ChartAction = Union[RegisterAxis, RenderedTick, RenderedXAxis, RenderedYAxis, UnknownAction]


def action_from_payload(payload: Mapping[str, Any]) -> ChartAction:
    """Build a typed action from an untyped ``{"type": ...}`` message, e.g. decoded JSON."""
    if not isinstance(payload, Mapping):
        raise ChartActionError("action payload must be an object")
    action_type = payload.get("type")
    if action_type == REGISTER_AXIS:
        return RegisterAxis()
    if action_type == RENDERED_TICK:
        return RenderedTick(axis=payload.get("axis"), tick=_coerce_tick(payload.get("tick")))
    if action_type == RENDERED_X_AXIS:
        return RenderedXAxis(axis=_coerce_axis_report(payload.get("axis"), "RENDERED_X_AXIS.axis"))
    if action_type == RENDERED_Y_AXIS:
        return RenderedYAxis(axis=_coerce_axis_report(payload.get("axis"), "RENDERED_Y_AXIS.axis"))
    return UnknownAction(type=str(action_type), payload=dict(payload))


def _coerce_tick(value: object) -> TickMetric:
    if isinstance(value, TickMetric):
        return value
    if not isinstance(value, Mapping):
        raise ChartActionError("RENDERED_TICK.tick must be an object")
    label = value.get("label")
    return TickMetric(
        width=_coerce_optional_number(value.get("width"), "RENDERED_TICK.tick.width"),
        height=_coerce_optional_number(value.get("height"), "RENDERED_TICK.tick.height"),
        label=None if label is None else str(label),
    )


def _coerce_axis_report(value: object, field_name: str) -> AxisReport:
    if isinstance(value, AxisReport):
        return value
    if not isinstance(value, Mapping):
        raise ChartActionError(f"{field_name} must be an object")
    alignment = value.get("alignment")
    tick_height = value.get("tick_height", value.get("tickHeight"))
    return AxisReport(
        alignment=None if alignment is None else str(alignment),
        height=_coerce_optional_number(value.get("height"), f"{field_name}.height") or 0.0,
        width=_coerce_optional_number(value.get("width"), f"{field_name}.width") or 0.0,
        ticks=value.get("ticks"),
        tick_height=_coerce_optional_number(tick_height, f"{field_name}.tick_height"),
    )


def _coerce_optional_number(value: object, field_name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChartActionError(f"{field_name} must be a number if provided")
    return float(value)
