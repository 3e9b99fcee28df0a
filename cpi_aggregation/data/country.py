"""Multi-era CPI data: consecutive base periods of one country."""

from typing import Iterator, List, Tuple, Union
import numpy as np
import pandas as pd
import logging

from .bases import VarCPIBase, FullCPIBase, IndexCPIBase
from ..utils.exceptions import DataValidationError

logger = logging.getLogger(__name__)


class CountryStructure:
    """Ordered collection of consecutive, non-overlapping CPI base periods.

    Each base keeps its own items and weights; the structure only provides
    the combined monthly date axis and the slicing of that axis by base.
    """

    def __init__(self, *bases: Union[VarCPIBase, FullCPIBase, IndexCPIBase]):
        if len(bases) == 1 and isinstance(bases[0], (list, tuple)):
            bases = tuple(bases[0])
        if not bases:
            raise DataValidationError("A country structure needs at least one base")

        self._bases = tuple(self._as_var(base) for base in bases)

        for i in range(len(self._bases) - 1):
            last = self._bases[i].dates[-1]
            following = self._bases[i + 1].dates[0]
            if following != last + pd.offsets.MonthBegin(1):
                raise DataValidationError(
                    f"Base {i + 1} must start the month after base {i} ends: "
                    f"{last:%Y-%m} vs {following:%Y-%m}"
                )

        logger.debug(f"CountryStructure with {len(self._bases)} bases, "
                     f"{self.periods} periods")

    @staticmethod
    def _as_var(base) -> VarCPIBase:
        if isinstance(base, VarCPIBase):
            return base
        if isinstance(base, FullCPIBase):
            return VarCPIBase.from_full(base)
        if isinstance(base, IndexCPIBase):
            return base.to_var()
        raise DataValidationError(f"Unsupported base type: {type(base).__name__}")

    @property
    def bases(self) -> Tuple[VarCPIBase, ...]:
        return self._bases

    @property
    def periods_per_base(self) -> List[int]:
        return [base.periods for base in self._bases]

    @property
    def periods(self) -> int:
        return sum(self.periods_per_base)

    @property
    def dates(self) -> pd.DatetimeIndex:
        """Combined monthly date axis spanning every base."""
        return self._bases[0].dates.append([b.dates for b in self._bases[1:]])

    def base_slices(self) -> List[slice]:
        """Row slices of each base on the combined date axis."""
        ends = np.cumsum(self.periods_per_base)
        starts = np.concatenate([[0], ends[:-1]])
        return [slice(int(s), int(e)) for s, e in zip(starts, ends)]

    def __len__(self) -> int:
        return len(self._bases)

    def __getitem__(self, i: int) -> VarCPIBase:
        return self._bases[i]

    def __iter__(self) -> Iterator[VarCPIBase]:
        return iter(self._bases)

    def __repr__(self) -> str:
        dates = self.dates
        return (f"CountryStructure: {len(self)} bases, {self.periods} periods "
                f"{dates[0]:%b-%y}-{dates[-1]:%b-%y}")
