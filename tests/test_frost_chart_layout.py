from __future__ import annotations

import unittest
from unittest import mock

from frost_chart.actions import AxisReport
from frost_chart.axis_layout import AxisLayoutCalculator, edge_tick_margins
from frost_chart.canvas import CanvasSizer, RangeResolver
from frost_chart.registration import RegistrationTracker
from frost_chart.state import ChartLayoutState, TickMetric


def _build(*, x_range=None, y_range=None, width=800.0, height=600.0):
    state = ChartLayoutState()
    state.chart.width = width
    state.chart.height = height
    state.chart.initialized = True
    ranges = RangeResolver(state, x_range=x_range, y_range=y_range)
    sizer = CanvasSizer(state, ranges)
    tracker = RegistrationTracker(state)
    x_axis = AxisLayoutCalculator("x", state, tracker, sizer)
    y_axis = AxisLayoutCalculator("y", state, tracker, sizer)
    return state, tracker, sizer, x_axis, y_axis


class ChartLayoutStateTests(unittest.TestCase):
    def test_defaults(self) -> None:
        state = ChartLayoutState()
        self.assertIsNone(state.axes.registered)
        self.assertEqual(state.axes.rendered, 0)
        self.assertFalse(state.axes.initialized)
        self.assertFalse(state.chart.initialized)
        self.assertIsNone(state.canvas.width)
        self.assertEqual(state.axes.x.rendered_ticks, [])
        self.assertIsNot(state.axes.x.rendered_ticks, state.axes.y.rendered_ticks)
        self.assertFalse(state.is_canvas_ready())

    def test_states_are_not_shared(self) -> None:
        a = ChartLayoutState()
        b = ChartLayoutState()
        a.axes.x.rendered_ticks.append(TickMetric(width=1.0))
        self.assertEqual(b.axes.x.rendered_ticks, [])

    def test_axis_lookup_rejects_unknown_name(self) -> None:
        with self.assertRaises(KeyError):
            ChartLayoutState().axes.axis("z")


class RegistrationTrackerTests(unittest.TestCase):
    def test_register_initializes_unknown_count(self) -> None:
        state = ChartLayoutState()
        tracker = RegistrationTracker(state)
        self.assertEqual(tracker.on_register_axis(), 1)
        self.assertEqual(tracker.on_register_axis(), 2)
        self.assertEqual(state.axes.registered, 2)

    def test_ensure_registered_known_keeps_existing_count(self) -> None:
        state = ChartLayoutState()
        tracker = RegistrationTracker(state)
        tracker.ensure_registered_known()
        self.assertEqual(state.axes.registered, 0)
        tracker.on_register_axis()
        tracker.ensure_registered_known()
        self.assertEqual(state.axes.registered, 1)

    def test_ticks_keep_arrival_order(self) -> None:
        state = ChartLayoutState()
        tracker = RegistrationTracker(state)
        ticks = [TickMetric(width=30.0), TickMetric(width=10.0), TickMetric(width=20.0)]
        for tick in ticks:
            tracker.on_tick_rendered("x", tick)
        self.assertEqual(state.axes.x.rendered_ticks, ticks)
        self.assertEqual(state.axes.y.rendered_ticks, [])

    def test_mark_rendered_never_exceeds_registered(self) -> None:
        state = ChartLayoutState()
        state.axes.registered = 1
        tracker = RegistrationTracker(state)
        self.assertTrue(tracker.mark_rendered())
        self.assertFalse(tracker.mark_rendered())
        self.assertEqual(state.axes.rendered, 1)

    def test_reset_cycle_clears_reports(self) -> None:
        state = ChartLayoutState()
        state.axes.registered = 2
        state.axes.rendered = 2
        state.axes.initialized = True
        state.axes.y.rendered_ticks.append(TickMetric(height=4.0))
        RegistrationTracker(state).reset_cycle()
        self.assertEqual(state.axes.rendered, 0)
        self.assertFalse(state.axes.initialized)
        self.assertEqual(state.axes.y.rendered_ticks, [])
        self.assertEqual(state.axes.registered, 2)


class EdgeTickMarginTests(unittest.TestCase):
    def test_empty_ticks_give_zero_margins(self) -> None:
        self.assertEqual(edge_tick_margins([], "x"), (0.0, 0.0))
        self.assertEqual(edge_tick_margins([], "y"), (0.0, 0.0))

    def test_uses_cross_axis_size_of_first_and_last(self) -> None:
        ticks = [TickMetric(width=20.0, height=8.0), TickMetric(width=99.0, height=99.0), TickMetric(width=30.0, height=12.0)]
        self.assertEqual(edge_tick_margins(ticks, "x"), (10.0, 15.0))
        self.assertEqual(edge_tick_margins(ticks, "y"), (4.0, 6.0))

    def test_missing_size_counts_as_zero(self) -> None:
        self.assertEqual(edge_tick_margins([TickMetric(height=8.0)], "x"), (0.0, 0.0))


class AxisLayoutCalculatorTests(unittest.TestCase):
    def test_rejects_unknown_orientation(self) -> None:
        state, tracker, sizer, _, _ = _build()
        with self.assertRaises(ValueError):
            AxisLayoutCalculator("z", state, tracker, sizer)

    def test_reference_layout(self) -> None:
        state, tracker, _, x_axis, y_axis = _build()
        tracker.on_register_axis()
        tracker.on_register_axis()
        tracker.on_tick_rendered("x", TickMetric(width=20.0, height=12.0))
        tracker.on_tick_rendered("x", TickMetric(width=20.0, height=12.0))
        tracker.on_tick_rendered("y", TickMetric(width=40.0, height=10.0))
        tracker.on_tick_rendered("y", TickMetric(width=40.0, height=10.0))

        self.assertFalse(x_axis.apply(AxisReport(alignment="bottom", height=30.0, width=780.0, tick_height=6.0)))
        self.assertFalse(state.axes.initialized)
        self.assertEqual(state.axes.x.width, 760.0)
        self.assertEqual(state.axes.x.height, 30.0)
        self.assertEqual(state.axes.x.tick_height, 6.0)
        self.assertEqual((state.axes.x.first_tick_margin, state.axes.x.last_tick_margin), (10.0, 10.0))

        self.assertTrue(y_axis.apply(AxisReport(alignment="left", height=560.0, width=50.0)))
        self.assertTrue(state.axes.initialized)
        self.assertEqual(state.axes.y.height, 550.0)
        self.assertEqual(state.axes.y.width, 50.0)
        self.assertIsNone(state.axes.y.tick_height)
        self.assertEqual(state.canvas.height, 560.0)
        self.assertEqual(state.canvas.width, 730.0)
        self.assertEqual(state.range.x, (0, 730.0))
        self.assertEqual(state.range.y, (560.0, 0))

    def test_initialized_flips_once_after_last_report(self) -> None:
        for registered in (1, 2, 3, 5):
            state, tracker, _, x_axis, y_axis = _build()
            for _ in range(registered):
                tracker.on_register_axis()
            transitions = 0
            for i in range(registered):
                calculator = x_axis if i % 2 == 0 else y_axis
                before = state.axes.initialized
                finished = calculator.apply(AxisReport(height=10.0, width=10.0))
                if finished:
                    transitions += 1
                    self.assertFalse(before)
                if i < registered - 1:
                    self.assertFalse(state.axes.initialized)
            self.assertEqual(transitions, 1, registered)
            self.assertTrue(state.axes.initialized)
            self.assertEqual(state.axes.rendered, registered)

    def test_zero_registered_finalizes_on_first_report(self) -> None:
        for orientation in ("x", "y"):
            state, tracker, _, x_axis, y_axis = _build()
            tracker.ensure_registered_known()
            calculator = x_axis if orientation == "x" else y_axis
            self.assertTrue(calculator.apply(AxisReport(height=20.0, width=40.0)))
            self.assertTrue(state.axes.initialized)
            self.assertEqual(state.axes.rendered, 0)

    def test_rerender_after_ready_recomputes_without_counting(self) -> None:
        state, tracker, _, x_axis, _ = _build()
        tracker.on_register_axis()
        x_axis.apply(AxisReport(height=30.0, width=780.0))
        self.assertEqual(state.canvas.height, 570.0)
        self.assertFalse(x_axis.apply(AxisReport(height=40.0, width=780.0)))
        self.assertEqual(state.axes.rendered, 1)
        self.assertEqual(state.canvas.height, 560.0)

    def test_report_beyond_registered_count_warns(self) -> None:
        state, tracker, _, x_axis, _ = _build()
        tracker.on_register_axis()
        x_axis.apply(AxisReport(height=30.0, width=780.0))
        with self.assertLogs("frost_chart.axis_layout", level="WARNING") as logs:
            x_axis.apply(AxisReport(height=30.0, width=780.0))
        self.assertIn("x axis reported again", logs.output[0])
        self.assertEqual(state.axes.rendered, 1)

    def test_zero_registered_report_does_not_warn(self) -> None:
        state, tracker, _, x_axis, _ = _build()
        tracker.ensure_registered_known()
        with mock.patch("frost_chart.axis_layout.LOGGER") as logger:
            x_axis.apply(AxisReport(height=30.0, width=780.0))
        logger.warning.assert_not_called()
        self.assertTrue(state.axes.initialized)

    def test_empty_ticks_do_not_produce_nan(self) -> None:
        state, tracker, _, x_axis, _ = _build()
        tracker.on_register_axis()
        x_axis.apply(AxisReport(height=30.0, width=780.0))
        self.assertEqual(state.axes.x.width, 780.0)
        self.assertEqual(state.canvas.width, 800.0)


class CanvasSizerTests(unittest.TestCase):
    def test_width_and_height_laws(self) -> None:
        cases = [
            (800.0, 600.0, 30.0, 50.0, (10.0, 12.0), (5.0, 7.0)),
            (0.0, 0.0, 0.0, 0.0, (0.0, 0.0), (0.0, 0.0)),
            (1024.0, 512.0, 44.0, 81.5, (3.5, 0.0), (0.0, 9.25)),
        ]
        for chart_w, chart_h, x_h, y_w, x_margins, y_margins in cases:
            state, _, sizer, _, _ = _build(width=chart_w, height=chart_h)
            state.axes.x.height = x_h
            state.axes.x.first_tick_margin, state.axes.x.last_tick_margin = x_margins
            state.axes.y.width = y_w
            state.axes.y.first_tick_margin, state.axes.y.last_tick_margin = y_margins
            width, height = sizer.recompute()
            self.assertEqual(width, chart_w - y_w - x_margins[0] - x_margins[1])
            self.assertEqual(height, chart_h - x_h - y_margins[0] - y_margins[1])

    def test_unreported_axes_count_as_zero(self) -> None:
        state, _, sizer, _, _ = _build(width=300.0, height=200.0)
        self.assertEqual(sizer.recompute(), (300.0, 200.0))

    def test_negative_canvas_is_not_clamped(self) -> None:
        state, _, sizer, _, _ = _build(width=40.0, height=20.0)
        state.axes.x.height = 30.0
        state.axes.y.width = 50.0
        sizer.recompute()
        self.assertEqual(state.canvas.width, -10.0)
        self.assertEqual(state.canvas.height, -10.0)
        self.assertEqual(state.range.y, (-10.0, 0))


class RangeResolverTests(unittest.TestCase):
    def test_fixed_ranges_are_never_overwritten(self) -> None:
        state, _, sizer, _, _ = _build(x_range=(5.0, 25.0), y_range=(1.0, 2.0))
        state.range.x = (5.0, 25.0)
        state.range.y = (1.0, 2.0)
        sizer.recompute()
        self.assertEqual(state.range.x, (5.0, 25.0))
        self.assertEqual(state.range.y, (1.0, 2.0))

    def test_only_open_range_is_derived(self) -> None:
        state = ChartLayoutState()
        state.canvas.width = 120.0
        state.canvas.height = 80.0
        state.range.x = (0.0, 10.0)
        ranges = RangeResolver(state, x_range=(0.0, 10.0))
        self.assertTrue(ranges.has_dynamic_range())
        ranges.resolve()
        self.assertEqual(state.range.x, (0.0, 10.0))
        self.assertEqual(state.range.y, (80.0, 0))

    def test_dynamic_range_flag(self) -> None:
        state = ChartLayoutState()
        self.assertTrue(RangeResolver(state).has_dynamic_range())
        self.assertTrue(RangeResolver(state, y_range=(0.0, 1.0)).has_dynamic_range())
        self.assertFalse(RangeResolver(state, x_range=(0.0, 1.0), y_range=(0.0, 1.0)).has_dynamic_range())


if __name__ == "__main__":
    unittest.main()
