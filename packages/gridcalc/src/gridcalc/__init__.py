"""
gridcalc - Pure grid bot estimation logic with zero exchange dependencies.

This package derives grid price levels, projects expected profit and
validates create-bot drafts. It performs no I/O and is safe to call on every
form edit from any thread.
"""

from gridcalc.errors import GridEstimatorError, InvalidRangeError, InvalidConfigurationError
from gridcalc.config import GridConfiguration, GridType, to_decimal
from gridcalc.grid import (
    GridPriceLine,
    GridStepSummary,
    compute_grid_levels,
    suggest_price_range,
    grid_price_lines,
    grid_step_summary,
)
from gridcalc.projection import (
    ProfitProjection,
    project_profit,
    DEFAULT_DAILY_GRID_CROSSINGS,
    DAYS_PER_MONTH,
)
from gridcalc.validation import BotDraft, FieldError, ValidationResult, validate
from gridcalc.formatting import format_price, format_percent, format_amount, format_range

__version__ = "0.1.0"

__all__ = [
    "GridEstimatorError",
    "InvalidRangeError",
    "InvalidConfigurationError",
    "GridConfiguration",
    "GridType",
    "to_decimal",
    "GridPriceLine",
    "GridStepSummary",
    "compute_grid_levels",
    "suggest_price_range",
    "grid_price_lines",
    "grid_step_summary",
    "ProfitProjection",
    "project_profit",
    "DEFAULT_DAILY_GRID_CROSSINGS",
    "DAYS_PER_MONTH",
    "BotDraft",
    "FieldError",
    "ValidationResult",
    "validate",
    "format_price",
    "format_percent",
    "format_amount",
    "format_range",
]
