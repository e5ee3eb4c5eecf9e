from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from frost_chart.actions import (
    AxisReport,
    ChartAction,
    RegisterAxis,
    RenderedTick,
    RenderedXAxis,
    RenderedYAxis,
    action_from_payload,
)
from frost_chart.axis_layout import AxisLayoutCalculator
from frost_chart.registration import RegistrationTracker

LOGGER = logging.getLogger(__name__)

AxisReportScheduler = Callable[[AxisLayoutCalculator, AxisReport], None]


def _apply_now(calculator: AxisLayoutCalculator, report: AxisReport) -> None:
    calculator.apply(report)


class ActionDispatcher:
    """Single reducer for messages sent by axis children.

    Axis reports go through ``schedule_report`` so the owner can defer them to
    its sync phase; by default they are applied immediately.
    """

    def __init__(
        self,
        tracker: RegistrationTracker,
        x_axis: AxisLayoutCalculator,
        y_axis: AxisLayoutCalculator,
        *,
        schedule_report: AxisReportScheduler = _apply_now,
    ) -> None:
        self._tracker = tracker
        self._x_axis = x_axis
        self._y_axis = y_axis
        self._schedule_report = schedule_report

    def dispatch(self, action: ChartAction | Mapping[str, Any]) -> None:
        if isinstance(action, Mapping):
            action = action_from_payload(action)

        if isinstance(action, RegisterAxis):
            self._tracker.on_register_axis()
        elif isinstance(action, RenderedTick):
            self._tracker.on_tick_rendered(action.axis, action.tick)
        elif isinstance(action, RenderedXAxis):
            self._schedule_report(self._x_axis, action.axis)
        elif isinstance(action, RenderedYAxis):
            self._schedule_report(self._y_axis, action.axis)
        else:
            LOGGER.warning("Unknown action type dispatched: %s", getattr(action, "type", action))
