"""CPI base containers: per-period x per-item matrices of a single base period."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union
import numpy as np
import pandas as pd
import logging

from .schemas import validate_items
from ..config.constants import BASE_INDEX_VALUE
from ..utils.exceptions import DataValidationError
from ..utils.transforms import capitalize, varinterm, getdates

logger = logging.getLogger(__name__)

BaseIndex = Union[float, np.ndarray]


def _as_matrix(values, label: str) -> np.ndarray:
    matrix = np.asarray(values, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise DataValidationError(f"`{label}` must be a 2-dimensional matrix, got {matrix.ndim} dimensions")
    return matrix


def _as_dates(dates) -> pd.DatetimeIndex:
    """Coerce ``dates`` to a contiguous monthly DatetimeIndex."""
    dates = pd.DatetimeIndex(dates)
    if len(dates) > 1:
        expected = getdates(dates[0], len(dates))
        if not dates.equals(expected):
            raise DataValidationError(
                f"Dates must be a contiguous monthly range starting at {dates[0]:%Y-%m}"
            )
    return dates


def _normalize_baseindex(baseindex) -> BaseIndex:
    """Collapse a uniform base index vector into a scalar."""
    arr = np.asarray(baseindex, dtype=float)
    if arr.ndim == 0:
        return float(arr)
    if np.unique(arr).size == 1:
        return float(arr[0])
    return arr


def _check_columns(n_items: int, w: np.ndarray, baseindex: BaseIndex) -> None:
    if n_items != len(w):
        raise DataValidationError(
            f"Number of columns ({n_items}) must match the weights vector ({len(w)})"
        )
    if np.ndim(baseindex) == 1 and len(baseindex) != n_items:
        raise DataValidationError(
            f"Base index vector ({len(baseindex)}) must have one value per item ({n_items})"
        )


def _check_rows(n_periods: int, dates: pd.DatetimeIndex) -> None:
    if n_periods != len(dates):
        raise DataValidationError(
            f"Number of rows ({n_periods}) must match the dates vector ({len(dates)})"
        )


def _format_range(dates: pd.DatetimeIndex) -> str:
    return f"{dates[0]:%b-%y}-{dates[-1]:%b-%y}"


@dataclass(eq=False)
class VarCPIBase:
    """Month-over-month variations of the items of one CPI base period.

    Attributes:
        v: Matrix of month-over-month percent changes (periods x items)
        w: Item weights
        dates: Monthly dates of the rows
        baseindex: Index value of the period before the first row, either a
            scalar or one value per item
    """

    v: np.ndarray
    w: np.ndarray
    dates: pd.DatetimeIndex
    baseindex: BaseIndex = BASE_INDEX_VALUE

    def __post_init__(self):
        self.v = _as_matrix(self.v, "v")
        self.w = np.asarray(self.w, dtype=float)
        self.dates = _as_dates(self.dates)
        self.baseindex = _normalize_baseindex(self.baseindex)
        _check_columns(self.v.shape[1], self.w, self.baseindex)
        _check_rows(self.v.shape[0], self.dates)

    @property
    def periods(self) -> int:
        return self.v.shape[0]

    @property
    def items(self) -> int:
        return self.v.shape[1]

    @classmethod
    def from_full(cls, base: "FullCPIBase") -> "VarCPIBase":
        """Copy the variations view out of a full base."""
        return cls(base.v.copy(), base.w.copy(), base.dates.copy(), np.copy(base.baseindex))

    def to_index(self) -> "IndexCPIBase":
        """Chain the variations into a new :class:`IndexCPIBase`."""
        return IndexCPIBase(
            capitalize(self.v, self.baseindex),
            self.w.copy(),
            self.dates.copy(),
            np.copy(self.baseindex)
        )

    def __repr__(self) -> str:
        return (f"VarCPIBase: {self.periods} periods × {self.items} items "
                f"{_format_range(self.dates)}")


@dataclass(eq=False)
class IndexCPIBase:
    """Index levels of the items of one CPI base period.

    Attributes:
        ipc: Matrix of index levels (periods x items)
        w: Item weights
        dates: Monthly dates of the rows
        baseindex: Index value of the period before the first row
    """

    ipc: np.ndarray
    w: np.ndarray
    dates: pd.DatetimeIndex
    baseindex: BaseIndex = BASE_INDEX_VALUE

    def __post_init__(self):
        self.ipc = _as_matrix(self.ipc, "ipc")
        self.w = np.asarray(self.w, dtype=float)
        self.dates = _as_dates(self.dates)
        self.baseindex = _normalize_baseindex(self.baseindex)
        _check_columns(self.ipc.shape[1], self.w, self.baseindex)
        _check_rows(self.ipc.shape[0], self.dates)

    @property
    def periods(self) -> int:
        return self.ipc.shape[0]

    @property
    def items(self) -> int:
        return self.ipc.shape[1]

    @classmethod
    def from_full(cls, base: "FullCPIBase") -> "IndexCPIBase":
        """Copy the index view out of a full base."""
        return cls(base.ipc.copy(), base.w.copy(), base.dates.copy(), np.copy(base.baseindex))

    def to_var(self) -> VarCPIBase:
        """Compute a new :class:`VarCPIBase` from the index levels."""
        return VarCPIBase(
            varinterm(self.ipc, self.baseindex),
            self.w.copy(),
            self.dates.copy(),
            np.copy(self.baseindex)
        )

    def __repr__(self) -> str:
        return (f"IndexCPIBase: {self.periods} periods × {self.items} items "
                f"{_format_range(self.dates)}")


@dataclass(eq=False)
class FullCPIBase:
    """Complete data of one CPI base period.

    Holds index levels and variations side by side, together with the
    codes and names of the elementary items. It is the single source of
    numeric series for the nodes of a classification tree.

    Attributes:
        ipc: Matrix of index levels (periods x items)
        v: Matrix of month-over-month percent changes (periods x items)
        w: Item weights
        dates: Monthly dates of the rows
        baseindex: Index value of the period before the first row
        codes: Item classification codes
        names: Item descriptions
    """

    ipc: np.ndarray
    v: np.ndarray
    w: np.ndarray
    dates: pd.DatetimeIndex
    baseindex: BaseIndex = BASE_INDEX_VALUE
    codes: Optional[List[str]] = None
    names: Optional[List[str]] = None
    _positions: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.ipc = _as_matrix(self.ipc, "ipc")
        self.v = _as_matrix(self.v, "v")
        self.w = np.asarray(self.w, dtype=float)
        self.dates = _as_dates(self.dates)
        self.baseindex = _normalize_baseindex(self.baseindex)

        logger.debug(f"FullCPIBase sizes: ipc={self.ipc.shape}, v={self.v.shape}, "
                     f"dates={len(self.dates)}")

        if self.ipc.shape[1] != self.v.shape[1]:
            raise DataValidationError(
                f"Index and variation matrices must have the same number of columns "
                f"({self.ipc.shape[1]} vs {self.v.shape[1]})"
            )
        if self.ipc.shape[0] != self.v.shape[0]:
            raise DataValidationError(
                f"Index and variation matrices must have the same number of rows "
                f"({self.ipc.shape[0]} vs {self.v.shape[0]})"
            )
        _check_columns(self.ipc.shape[1], self.w, self.baseindex)
        _check_rows(self.ipc.shape[0], self.dates)

        if self.codes is not None:
            self.codes = [str(c) for c in self.codes]
            if len(self.codes) != self.items:
                raise DataValidationError(
                    f"Number of codes ({len(self.codes)}) must match the number of items ({self.items})"
                )
            self._positions = {code: i for i, code in enumerate(self.codes)}
            if len(self._positions) != len(self.codes):
                raise DataValidationError("Item codes must be unique")

        if self.names is not None:
            self.names = [str(n) for n in self.names]
            if len(self.names) != self.items:
                raise DataValidationError(
                    f"Number of names ({len(self.names)}) must match the number of items ({self.items})"
                )

    @property
    def periods(self) -> int:
        return self.ipc.shape[0]

    @property
    def items(self) -> int:
        return self.ipc.shape[1]

    def position(self, code: str) -> Optional[int]:
        """Column of the item with ``code``, or None if absent."""
        return self._positions.get(code)

    def _require(self, code: str) -> int:
        i = self.position(code)
        if i is None:
            raise KeyError(f"Item code {code!r} not found in base")
        return i

    def index_for(self, code: str) -> np.ndarray:
        """Copy of the index levels of the item with ``code``."""
        return self.ipc[:, self._require(code)].copy()

    def weight_for(self, code: str) -> float:
        return float(self.w[self._require(code)])

    def name_for(self, code: str) -> str:
        i = self._require(code)
        return self.names[i] if self.names is not None else code

    @classmethod
    def from_dataframes(cls, df: pd.DataFrame, gb: pd.DataFrame) -> "FullCPIBase":
        """Build a full base from an index table and an item description table.

        Args:
            df: First column holds monthly dates, remaining columns hold the
                index levels of each item, named by item code. The first row
                is the base period and supplies the base index.
            gb: Item descriptions with code, name and weight columns (by
                position).

        Returns:
            FullCPIBase covering every row of ``df`` after the first
        """
        items = validate_items(gb)

        codes_df = [str(c) for c in df.columns[1:]]
        codes_gb = items["code"].tolist()
        if codes_df != codes_gb:
            raise DataValidationError(
                "Codes in the columns of the index table must match the codes of the description table"
            )

        ipc_all = df.iloc[:, 1:].to_numpy(dtype=float)
        if ipc_all.shape[0] < 2:
            raise DataValidationError("Index table needs a base row and at least one period")

        v = 100 * (ipc_all[1:] / ipc_all[:-1] - 1)
        dates = getdates(df.iloc[1, 0], ipc_all.shape[0] - 1)

        logger.info(f"Loaded base with {len(codes_gb)} items, "
                    f"{len(dates)} periods from {dates[0]:%Y-%m}")

        return cls(
            ipc=ipc_all[1:],
            v=v,
            w=items["weight"].to_numpy(dtype=float),
            dates=dates,
            baseindex=ipc_all[0],
            codes=codes_gb,
            names=items["name"].tolist()
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Index levels as a DataFrame indexed by date with item codes as columns."""
        columns = self.codes if self.codes is not None else list(range(self.items))
        return pd.DataFrame(self.ipc, index=self.dates, columns=columns)

    def __repr__(self) -> str:
        return (f"FullCPIBase: {self.periods} periods × {self.items} items "
                f"{_format_range(self.dates)}")
