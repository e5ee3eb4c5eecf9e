from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any, Mapping, Sequence

from frost_chart.errors import ChartConfigError
from frost_chart.resize import DEFAULT_RESIZE_DELAY_S
from frost_chart.scales import linear_scale
from frost_chart.state import Interval, ScaleFactory


KNOWN_SCALES: dict[str, ScaleFactory] = {"linear": linear_scale}


@dataclass(frozen=True)
class ChartConfig:
    """Caller-facing chart options.

    Domains are copied in as given; their numeric validity is the caller's
    concern (see ``frost_chart.validation.is_domain_valid``). Omitting a range
    makes it follow the canvas size.
    """

    x_domain: Sequence[Any]
    y_domain: Sequence[Any]
    x_range: Sequence[float] | None = None
    y_range: Sequence[float] | None = None
    x_scale: ScaleFactory = linear_scale
    y_scale: ScaleFactory = linear_scale
    resize_delay_s: float = DEFAULT_RESIZE_DELAY_S

    def __post_init__(self) -> None:
        object.__setattr__(self, "x_domain", _coerce_pair(self.x_domain, "x_domain"))
        object.__setattr__(self, "y_domain", _coerce_pair(self.y_domain, "y_domain"))
        object.__setattr__(self, "x_range", _coerce_optional_range(self.x_range, "x_range"))
        object.__setattr__(self, "y_range", _coerce_optional_range(self.y_range, "y_range"))
        if not callable(self.x_scale):
            raise ChartConfigError("x_scale must be callable")
        if not callable(self.y_scale):
            raise ChartConfigError("y_scale must be callable")
        if self.resize_delay_s < 0:
            raise ChartConfigError("resize_delay_s must be >= 0")


def load_chart_config(path: str | Path) -> ChartConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    try:
        x_domain = raw["x_domain"]
        y_domain = raw["y_domain"]
    except KeyError as exc:
        raise ChartConfigError(f"chart config missing required field: {exc.args[0]}") from exc
    delay_ms = raw.get("resize_delay_ms")
    if delay_ms is None:
        delay_s = DEFAULT_RESIZE_DELAY_S
    elif isinstance(delay_ms, (int, float)) and not isinstance(delay_ms, bool):
        delay_s = float(delay_ms) / 1000.0
    else:
        raise ChartConfigError("resize_delay_ms must be a number if provided")
    return ChartConfig(
        x_domain=x_domain,
        y_domain=y_domain,
        x_range=raw.get("x_range"),
        y_range=raw.get("y_range"),
        x_scale=_resolve_scale(raw.get("x_scale", "linear"), "x_scale"),
        y_scale=_resolve_scale(raw.get("y_scale", "linear"), "y_scale"),
        resize_delay_s=delay_s,
    )


def _resolve_scale(name: object, field_name: str) -> ScaleFactory:
    if not isinstance(name, str):
        raise ChartConfigError(f"{field_name} must be a string")
    try:
        return KNOWN_SCALES[name]
    except KeyError as exc:
        raise ChartConfigError(f"unknown {field_name}: {name}") from exc


def _as_tuple(value: object, field_name: str) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes, Mapping)):
        raise ChartConfigError(f"{field_name} must be a 2-item sequence")
    try:
        return tuple(value)
    except TypeError as exc:
        raise ChartConfigError(f"{field_name} must be a 2-item sequence") from exc


def _coerce_pair(value: object, field_name: str) -> tuple[Any, Any]:
    items = _as_tuple(value, field_name)
    if len(items) != 2:
        raise ChartConfigError(f"{field_name} must be a 2-item sequence")
    return (items[0], items[1])


def _coerce_optional_range(value: object, field_name: str) -> Interval | None:
    if value is None:
        return None
    items = _as_tuple(value, field_name)
    if not items:
        return None
    lo, hi = _coerce_pair(items, field_name)
    try:
        return (float(lo), float(hi))
    except (TypeError, ValueError) as exc:
        raise ChartConfigError(f"{field_name} entries must be numbers") from exc
