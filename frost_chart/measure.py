from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from PIL import ImageFont

from frost_chart.state import TickMetric


DEFAULT_FONT_SIZE_PX = 10.0


@dataclass(frozen=True)
class ElementMetrics:
    height: float
    width: float
    padding_top: float = 0.0
    padding_right: float = 0.0
    padding_bottom: float = 0.0
    padding_left: float = 0.0


class ElementProbe(Protocol):
    def measure(self) -> ElementMetrics:
        ...


class StaticElementProbe:
    """Probe for hosts that already know the container box."""

    def __init__(self, metrics: ElementMetrics) -> None:
        self.metrics = metrics
        self.calls = 0

    def measure(self) -> ElementMetrics:
        self.calls += 1
        return self.metrics


def measure_tick_label(
    label: str,
    *,
    font_path: str | None = None,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> TickMetric:
    """Measure a tick label the way a renderer would lay it out.

    Without ``font_path`` Pillow's bundled scalable default font is used.
    """
    font = _load_font(font_path, font_size_px)
    if not label:
        _, top, _, bottom = font.getbbox("Ag")
        return TickMetric(width=0.0, height=float(max(1, int(bottom - top))), label=label)
    left, top, right, bottom = font.getbbox(label)
    return TickMetric(
        width=float(max(0, int(right - left))),
        height=float(max(1, int(bottom - top))),
        label=label,
    )


@lru_cache(maxsize=64)
def _load_font(font_path: str | None, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    if font_path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(font_path, size=size)
