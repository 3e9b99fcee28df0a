"""Common interface of inflation measures."""

from enum import Enum
from typing import Any, Optional, Union
import numpy as np
import logging

from ..config.constants import BASE_INDEX_VALUE
from ..data.bases import FullCPIBase, IndexCPIBase, VarCPIBase
from ..data.country import CountryStructure
from ..utils.transforms import capitalize, varinteran

logger = logging.getLogger(__name__)


class ResultType(Enum):
    """Kinds of series an inflation measure can produce."""
    MOM = "mom"      # Month-over-month percent change
    INDEX = "index"  # Index chained from 100
    YOY = "yoy"      # Year-over-year percent change

    @classmethod
    def parse(cls, value: Union[str, "ResultType"]) -> "ResultType":
        """Convert a string such as ``"yoy"`` to a ResultType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown result type: {value}")


def derive_result(mom: np.ndarray, result: ResultType) -> np.ndarray:
    """Turn a month-over-month series into the requested result type."""
    if result == ResultType.MOM:
        return mom
    index = capitalize(mom, BASE_INDEX_VALUE)
    if result == ResultType.INDEX:
        return index
    return varinteran(index)


def measure_name(inflfn: Any) -> str:
    """Display name of an inflation measure or any callable."""
    if hasattr(inflfn, "measure_name"):
        return inflfn.measure_name()
    return getattr(inflfn, "__name__", type(inflfn).__name__)


def measure_tag(inflfn: Any) -> str:
    """Short tag of an inflation measure or any callable."""
    if hasattr(inflfn, "measure_tag"):
        return inflfn.measure_tag()
    return getattr(inflfn, "__name__", type(inflfn).__name__)


class InflationFunction:
    """Base class for inflation measures.

    Subclasses implement :meth:`evaluate_base`, the month-over-month
    measure over a single base period. Calling the measure dispatches on
    the data:

    - ``f(base)`` with a :class:`VarCPIBase` returns month-over-month changes;
      full and index bases are converted to their variations first
    - ``f(cs, result, date)`` with a :class:`CountryStructure` evaluates every
      base and returns the requested :class:`ResultType` (year-over-year by
      default). ``date`` anchors measures whose computation depends on a
      reference date.
    """

    name: Optional[str] = None
    tag: Optional[str] = None

    def measure_name(self) -> str:
        return self.name if self.name is not None else type(self).__name__

    def measure_tag(self) -> str:
        return self.tag if self.tag is not None else type(self).__name__

    def evaluate_base(self, base: VarCPIBase) -> np.ndarray:
        raise NotImplementedError(f"{type(self).__name__} must implement evaluate_base")

    def evaluate_country(self, cs: CountryStructure, date=None) -> np.ndarray:
        """Month-over-month measure over every base of ``cs``, concatenated."""
        if date is not None:
            logger.debug(f"{self.measure_tag()} is not date-anchored, ignoring date {date}")
        return np.concatenate([np.asarray(self.evaluate_base(base), dtype=float) for base in cs])

    def __call__(self, data, result=None, date=None) -> np.ndarray:
        if isinstance(data, CountryStructure):
            result = ResultType.YOY if result is None else ResultType.parse(result)
            return derive_result(self.evaluate_country(data, date), result)

        if isinstance(data, FullCPIBase):
            data = VarCPIBase.from_full(data)
        elif isinstance(data, IndexCPIBase):
            data = data.to_var()

        if isinstance(data, VarCPIBase):
            if date is not None:
                raise ValueError("Date-anchored evaluation requires a CountryStructure")
            result = ResultType.MOM if result is None else ResultType.parse(result)
            return derive_result(np.asarray(self.evaluate_base(data), dtype=float), result)

        raise TypeError(f"Cannot evaluate {self.measure_tag()} on {type(data).__name__}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.measure_name()!r})"
