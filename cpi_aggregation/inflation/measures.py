"""Reference inflation measures: headline CPI and weighted combinations."""

from typing import Optional, Sequence
import numpy as np
import pandas as pd
import logging

from .base import InflationFunction, ResultType, measure_name, measure_tag
from ..config.constants import COMBINATION_TAG, WEIGHT_TOLERANCE
from ..data.bases import VarCPIBase
from ..data.country import CountryStructure
from ..utils.exceptions import SpliceDefinitionError
from ..utils.transforms import capitalize, varinterm

logger = logging.getLogger(__name__)


class InflationTotalCPI(InflationFunction):
    """Headline CPI: the weighted index of all items of a base."""

    def __init__(self, name: Optional[str] = None, tag: Optional[str] = None):
        self.name = name if name is not None else "Headline CPI"
        self.tag = tag if tag is not None else "Total"

    def evaluate_base(self, base: VarCPIBase) -> np.ndarray:
        weights = base.w / base.w.sum()
        item_index = capitalize(base.v, base.baseindex)
        base_level = float(np.dot(np.broadcast_to(base.baseindex, weights.shape), weights))
        return varinterm(item_index @ weights, base_level)


class InflationCombination(InflationFunction):
    """Linear combination of inflation measures with fixed weights.

    Weights are applied to the measures' results as is; they are not
    normalized, so weights summing to 1.5 scale the combined result.
    """

    def __init__(self,
                 *measures,
                 weights: Sequence[float],
                 name: Optional[str] = None,
                 tag: Optional[str] = None):
        """Initialize the combination.

        Args:
            *measures: Inflation measures to combine
            weights: One weight per measure
            name: Display name (defaults to a description of the average)
            tag: Short tag (defaults to "COMBFN")
        """
        if len(measures) == 1 and isinstance(measures[0], (list, tuple)):
            measures = tuple(measures[0])
        if not measures:
            raise SpliceDefinitionError("A combination needs at least one measure")

        weights = np.asarray(weights, dtype=float)
        if len(weights) != len(measures):
            raise SpliceDefinitionError(
                f"Number of weights ({len(weights)}) must match number of measures ({len(measures)})"
            )
        if abs(weights.sum() - 1.0) > WEIGHT_TOLERANCE:
            logger.warning(f"Combination weights sum to {weights.sum():.4f}, not 1")

        self.ensemble = tuple(measures)
        self.weights = weights
        self.name = name if name is not None else "Weighted average of " + ", ".join(
            measure_name(f) for f in self.ensemble
        )
        self.tag = tag if tag is not None else COMBINATION_TAG

    def evaluate_base(self, base: VarCPIBase) -> np.ndarray:
        return sum(w * np.asarray(f(base), dtype=float) for f, w in zip(self.ensemble, self.weights))

    def __call__(self, data, result=None, date=None) -> np.ndarray:
        if not isinstance(data, CountryStructure):
            return super().__call__(data, result, date)

        result = ResultType.YOY if result is None else ResultType.parse(result)
        args = (data, result) if date is None else (data, result, date)
        return sum(w * np.asarray(f(*args), dtype=float) for f, w in zip(self.ensemble, self.weights))

    def ensemble_components(self) -> pd.DataFrame:
        """Constituent measures and their weights."""
        return pd.DataFrame({
            "measure": [measure_name(f) for f in self.ensemble],
            "tag": [measure_tag(f) for f in self.ensemble],
            "weights": self.weights
        })

    def components(self) -> pd.DataFrame:
        return self.ensemble_components()
