"""Piecewise-linear transition weights used to cross-fade two measures."""

import datetime
import numpy as np
import pandas as pd

_DATE_TYPES = (datetime.date, np.datetime64, pd.Timestamp)


def _month_number(dates) -> np.ndarray:
    """Months elapsed since year 0 for each date."""
    index = pd.DatetimeIndex(np.atleast_1d(pd.to_datetime(dates)))
    return np.asarray(index.year * 12 + index.month - 1, dtype=float)


def _positions(x, a, b):
    """Express ``x`` and the interval limits on a common numeric axis."""
    if isinstance(a, _DATE_TYPES) or isinstance(b, _DATE_TYPES):
        return _month_number(x), _month_number(a)[0], _month_number(b)[0]
    return np.asarray(x, dtype=float), float(a), float(b)


def ramp_up(x, a, b) -> np.ndarray:
    """Weight rising linearly from 0 at ``min(a, b)`` to 1 at ``max(a, b)``.

    Points before the interval weigh 0 and points after it weigh 1. ``x``
    may be a range of integers or a monthly date axis, in which case ``a``
    and ``b`` are dates and positions are counted in months. The interval
    limits may lie outside ``x``.

    Args:
        x: Points at which to evaluate the ramp
        a: One limit of the transition interval
        b: The other limit of the transition interval

    Returns:
        Weights in [0, 1], one per point of ``x``
    """
    x, a, b = _positions(x, a, b)
    lower, upper = min(a, b), max(a, b)
    if upper == lower:
        raise ValueError("Ramp interval limits must differ")
    return np.clip((x - lower) / (upper - lower), 0.0, 1.0)


def ramp_down(x, a, b) -> np.ndarray:
    """Complement of :func:`ramp_up`: 1 before the interval, 0 after it."""
    return 1.0 - ramp_up(x, a, b)
