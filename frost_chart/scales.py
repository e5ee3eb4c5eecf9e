from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from frost_chart.state import Interval


@dataclass(frozen=True)
class LinearScale:
    domain: Interval
    range: Interval

    def __call__(self, value):
        return _map_linear(value, self.domain, self.range)

    def invert(self, value):
        return _map_linear(value, self.range, self.domain)


def linear_scale(domain: Interval, range: Interval) -> LinearScale:
    d0, d1 = domain
    r0, r1 = range
    return LinearScale(domain=(float(d0), float(d1)), range=(float(r0), float(r1)))


def _map_linear(value, src: Interval, dst: Interval):
    s0, s1 = src
    t0, t1 = dst
    arr = np.asarray(value, dtype=np.float64)
    span = s1 - s0
    if span == 0:
        # Degenerate source interval collapses onto the start of the target.
        out = np.full(arr.shape, t0, dtype=np.float64)
    else:
        out = t0 + (arr - s0) * ((t1 - t0) / span)
    if out.ndim == 0:
        return float(out)
    return out
