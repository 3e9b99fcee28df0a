"""Inflation measures and splicing across CPI base periods.

This module provides functionality for:
- A common interface for inflation measures over bases and country structures
- Reference measures (headline CPI, weighted combinations)
- Linear ramps used as transition weights
- Splicing several measures by concatenation or by cross-fading
"""

from .base import InflationFunction, ResultType, derive_result, measure_name, measure_tag
from .measures import InflationTotalCPI, InflationCombination
from .ramps import ramp_up, ramp_down
from .splice import InflationSplice, validate_dates

__all__ = [
    'InflationFunction',
    'ResultType',
    'derive_result',
    'measure_name',
    'measure_tag',
    'InflationTotalCPI',
    'InflationCombination',
    'ramp_up',
    'ramp_down',
    'InflationSplice',
    'validate_dates'
]
