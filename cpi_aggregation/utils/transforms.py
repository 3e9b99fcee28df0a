"""Basic price index transforms: chaining and percent-change computations.

All variations are expressed in percent. Inputs may be vectors (one series)
or matrices (periods in rows, series in columns).
"""

from typing import Union
import numpy as np
import pandas as pd

from ..config.constants import BASE_INDEX_VALUE, MONTHS_PER_YEAR

BaseIndex = Union[float, np.ndarray]


def capitalize(v: np.ndarray, base_index: BaseIndex = BASE_INDEX_VALUE) -> np.ndarray:
    """
    Chain month-over-month variations into an index.

    idx[0] = base_index * (1 + v[0]/100), idx[t] = idx[t-1] * (1 + v[t]/100)

    Parameters
    ----------
    v : np.ndarray
        Vector or matrix of month-over-month percent changes
    base_index : float or np.ndarray, default 100
        Index value of the period before the first observation. For
        matrices it may hold one value per column.

    Returns
    -------
    np.ndarray
        Index levels with the same shape as ``v``
    """
    v = np.asarray(v, dtype=float)
    return np.asarray(base_index, dtype=float) * np.cumprod(1 + v / 100, axis=0)


def varinterm(idx: np.ndarray, base_index: BaseIndex = BASE_INDEX_VALUE) -> np.ndarray:
    """
    Compute month-over-month percent changes of an index.

    Inverse of :func:`capitalize`: the first variation is taken against
    ``base_index``.

    Parameters
    ----------
    idx : np.ndarray
        Vector or matrix of index levels
    base_index : float or np.ndarray, default 100
        Index value of the period before the first observation

    Returns
    -------
    np.ndarray
        Month-over-month variations with the same shape as ``idx``
    """
    idx = np.asarray(idx, dtype=float)
    v = np.empty_like(idx)
    v[0] = 100 * (idx[0] / np.asarray(base_index, dtype=float) - 1)
    v[1:] = 100 * (idx[1:] / idx[:-1] - 1)
    return v


def varinteran(idx: np.ndarray, base_index: BaseIndex = BASE_INDEX_VALUE) -> np.ndarray:
    """
    Compute year-over-year percent changes of an index.

    The output has ``len(idx) - 11`` periods: the first one compares the
    twelfth observation with ``base_index`` and each following one compares
    ``idx[t]`` with ``idx[t - 12]``.

    Parameters
    ----------
    idx : np.ndarray
        Vector or matrix of index levels, at least 12 periods long
    base_index : float or np.ndarray, default 100
        Index value of the period before the first observation

    Returns
    -------
    np.ndarray
        Year-over-year variations
    """
    idx = np.asarray(idx, dtype=float)
    lag = MONTHS_PER_YEAR
    if idx.shape[0] < lag:
        raise ValueError(
            f"At least {lag} periods are needed for year-over-year variations, "
            f"got {idx.shape[0]}"
        )

    v = np.empty((idx.shape[0] - lag + 1,) + idx.shape[1:])
    v[0] = 100 * (idx[lag - 1] / np.asarray(base_index, dtype=float) - 1)
    v[1:] = 100 * (idx[lag:] / idx[:-lag] - 1)
    return v


def getdates(start_date, periods: int) -> pd.DatetimeIndex:
    """
    Monthly date axis starting at ``start_date``.

    Parameters
    ----------
    start_date : date-like
        First period; normalized to the first day of its month
    periods : int
        Number of monthly periods

    Returns
    -------
    pd.DatetimeIndex
        Month-start dates
    """
    start = pd.Timestamp(start_date).to_period("M").to_timestamp()
    return pd.date_range(start=start, periods=periods, freq="MS")
