"""Utilities for CPI aggregation: exceptions, logging and series transforms."""

from .exceptions import (
    CPIError,
    ConfigurationError,
    DataValidationError,
    TreeConstructionError,
    SpliceDefinitionError,
    SpliceEvaluationError
)
from .logging_config import setup_logging
from .transforms import capitalize, varinterm, varinteran, getdates

__all__ = [
    "CPIError",
    "ConfigurationError",
    "DataValidationError",
    "TreeConstructionError",
    "SpliceDefinitionError",
    "SpliceEvaluationError",
    "setup_logging",
    "capitalize",
    "varinterm",
    "varinteran",
    "getdates"
]
