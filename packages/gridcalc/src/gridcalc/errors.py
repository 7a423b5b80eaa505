"""Exceptions raised by the grid estimator.

Per-field validation problems are not exceptions; see
``gridcalc.validation.FieldError``.
"""


class GridEstimatorError(ValueError):
    """Base class for estimator computation errors."""


class InvalidRangeError(GridEstimatorError):
    """Grid spacing is undefined for the given price range or line count."""


class InvalidConfigurationError(GridEstimatorError):
    """Investment amount, profit rate or crossing frequency is not usable."""
