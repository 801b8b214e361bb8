"""
Numeric helpers shared by the aggregator, comparator and formatters.

All rounding in the engine goes through ``round_half_away`` so that a mean
ending in exactly ``.x5`` rounds away from zero (``88.25 -> 88.3``,
``-0.25 -> -0.3``) instead of Python's default round-half-to-even.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import numpy as np
import pandas as pd


def round_half_away(value: float, digits: int = 1) -> float:
    """
    Round to ``digits`` decimal places, halves away from zero.

    The float is converted through its shortest repr so that values such as
    ``88.25`` are rounded as written rather than by their binary expansion.
    Re-rounding an already rounded value returns it unchanged.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_to_int(value: float) -> int:
    """Round half away from zero to an integer."""
    return int(round_half_away(value, 0))


def present_values(values: Iterable) -> np.ndarray:
    """Return the recorded (non-null, non-NaN) values as a float array."""
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors='raise')
    array = series.to_numpy(dtype=float, na_value=np.nan)
    return array[~np.isnan(array)]


def mean_of_present(values: Iterable) -> Optional[float]:
    """
    Arithmetic mean of the recorded values, rounded to one decimal.

    Returns None when nothing was recorded. Summation is exact so the result
    does not depend on the order of the input.
    """
    valid = present_values(values)
    if valid.size == 0:
        return None
    return round_half_away(math.fsum(valid) / valid.size, 1)
