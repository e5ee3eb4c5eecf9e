from __future__ import annotations


class ChartConfigError(ValueError):
    pass


class ChartActionError(ValueError):
    pass
