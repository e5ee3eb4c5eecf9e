from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from frost_chart.chart import FrostChart
from frost_chart.config import load_chart_config
from frost_chart.measure import ElementMetrics, StaticElementProbe
from frost_chart.validation import is_domain_valid


class _StepClock:
    """Manual clock so resize debouncing is replayed deterministically."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="frost-chart")
    parser.add_argument("--verbose", action="store_true", help="Log layout lifecycle at DEBUG level.")
    sub = parser.add_subparsers(dest="command", required=True)

    layout = sub.add_parser("layout", help="Replay an axis action log against a chart and print its layout.")
    layout.add_argument("config", type=Path, help="Chart config TOML (x_domain, y_domain, ...).")
    layout.add_argument("--width", type=float, required=True)
    layout.add_argument("--height", type=float, required=True)
    layout.add_argument("--padding", type=float, default=0.0)
    layout.add_argument(
        "--actions",
        type=Path,
        default=None,
        help="JSON list of {\"type\": ...} actions as sent by axis children.",
    )
    layout.add_argument(
        "--resize",
        nargs=2,
        type=float,
        action="append",
        metavar=("WIDTH", "HEIGHT"),
        default=[],
        help="Container resize applied after layout; repeatable, applied in order.",
    )

    check = sub.add_parser("check-domain", help="Report whether a [min, max] domain is usable.")
    check.add_argument("min")
    check.add_argument("max")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "check-domain":
        valid = is_domain_valid([args.min, args.max])
        print(json.dumps({"domain": [args.min, args.max], "valid": valid}))
        return 0 if valid else 1

    return _run_layout(args)


def _run_layout(args: argparse.Namespace) -> int:
    config = load_chart_config(args.config)
    actions: list[dict] = []
    if args.actions is not None:
        actions = json.loads(args.actions.read_text(encoding="utf-8"))
        if not isinstance(actions, list):
            raise ValueError("actions file must contain a JSON list")

    clock = _StepClock()
    chart = FrostChart(config, clock=clock)
    pad = args.padding
    chart.mount(
        StaticElementProbe(
            ElementMetrics(
                height=args.height,
                width=args.width,
                padding_top=pad,
                padding_right=pad,
                padding_bottom=pad,
                padding_left=pad,
            )
        )
    )
    try:
        chart.pump()
        for action in actions:
            chart.dispatch(action)
        chart.pump()
        for width, height in args.resize:
            chart.did_resize(width, height)
            clock.now += config.resize_delay_s
            chart.pump()
        print(json.dumps(chart.snapshot(), indent=2, sort_keys=True))
    finally:
        chart.dispose()
    return 0
