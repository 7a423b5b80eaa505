"""Profit projection for grid bots.

Projects daily and monthly profit from the per-grid profit target, the
investment and an assumed number of completed grid trades per day. All
functions are pure and use Decimal; nothing is rounded here (see
gridcalc.formatting).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from gridcalc.config import GridConfiguration, to_decimal
from gridcalc.errors import InvalidConfigurationError, InvalidRangeError
from gridcalc.formatting import NOT_AVAILABLE, format_percent, format_price
from gridcalc.grid import check_grid_range

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# Completed buy/sell cycles per day assumed by the estimate. Override per call
# with daily_grid_crossings=... or with estimator.daily_grid_crossings in the
# planner config.
DEFAULT_DAILY_GRID_CROSSINGS = Decimal("1")

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class ProfitProjection:
    """
    Estimated bot performance.

    Attributes:
        daily_profit: Expected profit per day, quote currency
        monthly_profit: daily_profit * 30
        daily_profit_percentage: daily_profit relative to the investment, percent
        monthly_profit_percentage: monthly_profit relative to the investment, percent
        estimable: False for the zeroed projection of a degenerate grid
    """
    daily_profit: Decimal
    monthly_profit: Decimal
    daily_profit_percentage: Decimal
    monthly_profit_percentage: Decimal
    estimable: bool = True

    @classmethod
    def zero(cls) -> "ProfitProjection":
        return cls(_ZERO, _ZERO, _ZERO, _ZERO, estimable=False)

    def display(self, places: int = 2) -> dict[str, str]:
        """Values rounded for display; NOT_AVAILABLE when not estimable."""
        if not self.estimable:
            return {
                "daily_profit": NOT_AVAILABLE,
                "monthly_profit": NOT_AVAILABLE,
                "daily_profit_percentage": NOT_AVAILABLE,
                "monthly_profit_percentage": NOT_AVAILABLE,
            }
        return {
            "daily_profit": format_price(self.daily_profit, places),
            "monthly_profit": format_price(self.monthly_profit, places),
            "daily_profit_percentage": format_percent(self.daily_profit_percentage, places),
            "monthly_profit_percentage": format_percent(self.monthly_profit_percentage, places),
        }


def project_profit(config: GridConfiguration, daily_grid_crossings=DEFAULT_DAILY_GRID_CROSSINGS) -> ProfitProjection:
    """Project daily and monthly profit for a grid configuration.

    daily_profit   = investment * profit_per_grid / 100 * daily_grid_crossings
    monthly_profit = daily_profit * 30
    *_percentage   = profit / investment * 100

    A degenerate grid (empty range, too few lines, geometric grid starting at
    zero) yields ProfitProjection.zero() instead of an error, so a live preview
    never shows NaN while the user is still typing a range.

    Args:
        config: Grid configuration
        daily_grid_crossings: Completed grid trades assumed per day (>= 0)

    Returns:
        ProfitProjection with unrounded Decimal values

    Raises:
        InvalidConfigurationError: a value is NaN or infinite,
            investment_amount <= 0, profit_per_grid <= 0 or daily_grid_crossings < 0
    """
    investment = config.investment_amount
    profit_per_grid = config.profit_per_grid
    crossings = to_decimal(daily_grid_crossings)

    for name, value in (
        ("investment_amount", investment),
        ("profit_per_grid", profit_per_grid),
        ("daily_grid_crossings", crossings),
    ):
        if not value.is_finite():
            raise InvalidConfigurationError(f"{name} must be a finite number, got {value}")
    if investment <= _ZERO:
        raise InvalidConfigurationError(f"investment_amount must be positive, got {investment}")
    if profit_per_grid <= _ZERO:
        raise InvalidConfigurationError(f"profit_per_grid must be positive, got {profit_per_grid}")
    if crossings < _ZERO:
        raise InvalidConfigurationError(f"daily_grid_crossings must not be negative, got {crossings}")

    try:
        check_grid_range(config.lower_price, config.upper_price, config.grid_lines, config.grid_type)
    except InvalidRangeError as e:
        logger.debug("Degenerate grid, returning zero projection: %s", e)
        return ProfitProjection.zero()

    daily_profit = investment * profit_per_grid / _HUNDRED * crossings
    monthly_profit = daily_profit * DAYS_PER_MONTH

    return ProfitProjection(
        daily_profit=daily_profit,
        monthly_profit=monthly_profit,
        daily_profit_percentage=daily_profit / investment * _HUNDRED,
        monthly_profit_percentage=monthly_profit / investment * _HUNDRED,
    )
