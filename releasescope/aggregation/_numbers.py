"""Numeric helpers shared by the aggregators."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity.

    ``round`` uses banker's rounding, which would turn a 12.5% branch share
    into 12; display figures round 0.5 up.

    >>> round_half_up(12.5)
    13
    >>> round_half_up(2.4)
    2

    """
    return math.floor(value + 0.5)
