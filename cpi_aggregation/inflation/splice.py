"""Splicing of inflation measures across CPI base periods.

An :class:`InflationSplice` joins the results of several inflation measures
into one continuous series. Without transition dates, each measure covers
exactly one base of a :class:`CountryStructure` and the pieces are
concatenated. With transition dates, consecutive measures are cross-faded
with linear ramps over each transition interval.
"""

from typing import Callable, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
import logging

from .base import InflationFunction, ResultType, measure_name, measure_tag
from .ramps import ramp_down
from ..config.constants import SPLICE_SEPARATOR
from ..data.bases import VarCPIBase
from ..data.country import CountryStructure
from ..utils.exceptions import SpliceDefinitionError, SpliceEvaluationError

logger = logging.getLogger(__name__)

Interval = Tuple[pd.Timestamp, pd.Timestamp]


def validate_dates(dates: Sequence[Interval]) -> None:
    """Check a sequence of transition intervals.

    Each interval must satisfy ``start < end`` and consecutive intervals
    must be in ascending order without overlap: ``end[i] < start[i + 1]``.

    Raises:
        SpliceDefinitionError: Naming the first violated constraint
    """
    for i, (start, end) in enumerate(dates):
        if not start < end:
            raise SpliceDefinitionError(
                f"Each interval must satisfy start < end; interval {i} is "
                f"({start:%Y-%m}, {end:%Y-%m})"
            )

    for i in range(len(dates) - 1):
        if not dates[i][1] < dates[i + 1][0]:
            raise SpliceDefinitionError(
                f"Overlapping or unordered intervals between {i} and {i + 1}: "
                f"{dates[i][1]:%Y-%m} vs {dates[i + 1][0]:%Y-%m}"
            )


def _as_intervals(dates) -> List[Interval]:
    intervals = []
    for i, interval in enumerate(dates):
        try:
            start, end = interval
        except (TypeError, ValueError):
            raise SpliceDefinitionError(f"Interval {i} must be a (start, end) pair, got: {interval!r}")
        intervals.append((pd.Timestamp(start), pd.Timestamp(end)))
    return intervals


class InflationSplice(InflationFunction):
    """Inflation measure splicing several measures over base periods.

    Args:
        *measures: Inflation measures in chronological order. A single
            list or tuple of measures is also accepted.
        dates: Optional transition intervals, one ``(start, end)`` pair
            between each pair of consecutive measures
        name: Custom display name
        tag: Custom short name
    """

    def __init__(self,
                 *measures,
                 dates: Optional[Sequence[Tuple]] = None,
                 name: Optional[str] = None,
                 tag: Optional[str] = None):
        if len(measures) == 1 and isinstance(measures[0], (list, tuple)):
            measures = tuple(measures[0])
        if not measures:
            raise SpliceDefinitionError("A splice needs at least one inflation measure")
        for i, f in enumerate(measures):
            if not callable(f):
                raise SpliceDefinitionError(f"Measure {i} is not callable: {f!r}")

        intervals = None
        if dates is not None:
            intervals = _as_intervals(dates)
            validate_dates(intervals)
            if len(intervals) != len(measures) - 1:
                raise SpliceDefinitionError(
                    f"The number of date intervals ({len(intervals)}) must be one less "
                    f"than the number of measures ({len(measures)})"
                )

        self._measures = tuple(measures)
        self._dates = tuple(intervals) if intervals is not None else None
        self.name = name
        self.tag = tag

        logger.debug(f"Created splice {self.measure_tag()} with {len(self._measures)} measures")

    @property
    def measures(self) -> Tuple[Callable, ...]:
        return self._measures

    @property
    def dates(self) -> Optional[Tuple[Interval, ...]]:
        return self._dates

    def splice_length(self) -> int:
        """Number of transitions, or of measures when concatenating bases."""
        if self._dates is None:
            return len(self._measures)
        return len(self._dates)

    def splice_functions(self) -> Tuple[Callable, ...]:
        return self._measures

    def splice_dates(self) -> Optional[Tuple[Interval, ...]]:
        """Transition intervals, or None when concatenating bases."""
        return self._dates

    def measure_name(self) -> str:
        if self.name is not None:
            return self.name
        return SPLICE_SEPARATOR.join(measure_name(f) for f in self._measures)

    def measure_tag(self) -> str:
        if self.tag is not None:
            return self.tag
        return SPLICE_SEPARATOR.join(measure_tag(f) for f in self._measures)

    def _blend(self,
               axis: pd.DatetimeIndex,
               transitions: List[int],
               evaluate: Callable) -> np.ndarray:
        """Cross-fade the measures over ``transitions``, applied in order.

        For the first transition i the result is
        ``f[i] * down_i + f[i + 1] * up_i``; every later transition j updates
        it as ``out * down_j + f[j + 1] * up_j``.
        """
        first = transitions[0]
        out = np.asarray(evaluate(self._measures[first]), dtype=float)

        for i in transitions:
            start, end = self._dates[i]
            down = ramp_down(axis, start, end)
            following = np.asarray(evaluate(self._measures[i + 1]), dtype=float)
            out = out * down + following * (1.0 - down)

        return out

    def evaluate_base(self, base: VarCPIBase) -> np.ndarray:
        """Month-over-month splice over a single base period.

        Only the transition intervals overlapping the dates of ``base`` take
        part in the blend.
        """
        if self._dates is None:
            raise SpliceEvaluationError(
                "Splices without transition dates can only be evaluated over a CountryStructure"
            )

        first_date, last_date = base.dates[0], base.dates[-1]
        transitions = [
            i for i, (start, end) in enumerate(self._dates)
            if start <= last_date and end >= first_date
        ]
        if not transitions:
            raise SpliceEvaluationError(
                f"No transition interval overlaps the base dates "
                f"{first_date:%Y-%m} to {last_date:%Y-%m}"
            )

        return self._blend(base.dates, transitions, lambda f: f(base))

    def evaluate_country(self, cs: CountryStructure, date=None) -> np.ndarray:
        """Month-over-month splice over every base of ``cs``."""
        if date is None:
            evaluate = lambda f: f(cs, ResultType.MOM)
        else:
            evaluate = lambda f: f(cs, ResultType.MOM, date)

        if self._dates is None:
            return self._concatenate(cs, evaluate)

        return self._blend(cs.dates, list(range(len(self._dates))), evaluate)

    def _concatenate(self, cs: CountryStructure, evaluate: Callable) -> np.ndarray:
        """Stack measure i over the periods of base i."""
        n_bases = len(cs)
        if len(self._measures) < n_bases:
            raise SpliceEvaluationError(
                f"The number of measures ({len(self._measures)}) must be at least "
                f"the number of bases ({n_bases})"
            )
        if len(self._measures) > n_bases:
            logger.warning(f"The number of measures ({len(self._measures)}) is greater than "
                           f"the number of bases ({n_bases}); extra measures will be ignored.")

        pieces = [
            np.asarray(evaluate(f), dtype=float)[rows]
            for f, rows in zip(self._measures, cs.base_slices())
        ]
        return np.concatenate(pieces)

    def components(self) -> pd.DataFrame:
        """Table of the measures in the splice.

        One row per measure, with the transition interval that brings it in
        when dates are defined. Measures exposing ``ensemble_components``
        are expanded into one row per sub-measure with its weight.
        """
        rows = []
        has_ensemble = False
        for position, f in enumerate(self._measures):
            transition = None
            if self._dates is not None and position > 0:
                transition = self._dates[position - 1]

            expand = getattr(f, "ensemble_components", None)
            if callable(expand):
                has_ensemble = True
                sub = expand()
                entries = [
                    {"measure": m, "tag": t, "weights": w}
                    for m, t, w in zip(sub["measure"], sub["tag"], sub["weights"])
                ]
            else:
                entries = [{"measure": measure_name(f), "tag": measure_tag(f), "weights": np.nan}]

            for entry in entries:
                entry["position"] = position
                if self._dates is not None:
                    entry["transition_start"] = transition[0] if transition else pd.NaT
                    entry["transition_end"] = transition[1] if transition else pd.NaT
                rows.append(entry)

        columns = ["position", "measure", "tag"]
        if has_ensemble:
            columns.append("weights")
        if self._dates is not None:
            columns += ["transition_start", "transition_end"]
        return pd.DataFrame(rows)[columns]
