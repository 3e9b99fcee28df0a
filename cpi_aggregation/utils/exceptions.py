"""Custom exceptions for CPI aggregation."""


class CPIError(Exception):
    """Base exception for the cpi_aggregation package."""
    pass


class ConfigurationError(CPIError, ValueError):
    """Raised when configuration is invalid."""
    pass


class DataValidationError(CPIError, ValueError):
    """Raised when a CPI table has inconsistent dimensions or contents."""
    pass


class TreeConstructionError(CPIError, ValueError):
    """Raised when a classification tree cannot be built."""
    pass


class SpliceDefinitionError(CPIError, ValueError):
    """Raised when an inflation splice is defined with invalid measures or dates."""
    pass


class SpliceEvaluationError(CPIError):
    """Raised when an inflation splice cannot be evaluated on the given data."""
    pass
