from __future__ import annotations

import logging
import math
from typing import Sequence

LOGGER = logging.getLogger(__name__)


def is_domain_valid(domain: Sequence[object] | None) -> bool:
    """True when both bounds are present and numeric.

    Callers use this to decide whether to build a chart at all; the layout
    core itself never consults it.
    """
    if not domain:
        return False
    try:
        lo, hi = domain[0], domain[1]
    except (IndexError, TypeError):
        LOGGER.debug("Invalid domain: %r", domain)
        return False
    valid = _is_number(lo) and _is_number(hi)
    if not valid:
        LOGGER.debug("Invalid domain: [%s, %s]", lo, hi)
    return valid


def _is_number(value: object) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        if not value.strip():
            return False
        try:
            value = float(value)
        except ValueError:
            return False
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False
