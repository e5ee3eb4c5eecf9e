from __future__ import annotations

from frost_chart.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
