"""
Configuration models for grid bot estimation.

This module defines the grid configuration dataclass consumed by the level
calculator and the profit projector, plus the form limits and defaults shared
with the validator.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

# Form limits
MIN_GRID_LINES = 5
MAX_GRID_LINES = 100
MIN_PROFIT_PER_GRID = Decimal("0.1")
MAX_PROFIT_PER_GRID = Decimal("2")
MIN_INVESTMENT = Decimal("10")

# Defaults for a new bot draft
DEFAULT_INVESTMENT = Decimal("100")
DEFAULT_PROFIT_PER_GRID = Decimal("0.53")


class GridType(StrEnum):
    """Spacing between adjacent grid lines."""
    ARITHMETIC = "arithmetic"
    GEOMETRIC = "geometric"


DEFAULT_GRID_TYPE = GridType.GEOMETRIC


def to_decimal(value) -> Decimal:
    """
    Convert a number to Decimal.

    Floats go through str() so that 0.53 becomes Decimal('0.53') rather than
    its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class GridConfiguration:
    """
    Parameters of one grid bot, as needed by the estimator.

    Attributes:
        lower_price: Bottom of the grid range
        upper_price: Top of the grid range
        grid_lines: Number of price levels, endpoints included
        grid_type: Arithmetic or geometric spacing
        profit_per_grid: Target profit per completed grid trade, in percent (0.53 = 0.53%)
        investment_amount: Capital allocated to the bot, in quote currency

    Invariants (lower < upper, grid_lines in range, ...) are checked by
    gridcalc.validation before a configuration is built, not here.
    """
    lower_price: Decimal
    upper_price: Decimal
    grid_lines: int
    grid_type: GridType = DEFAULT_GRID_TYPE
    profit_per_grid: Decimal = DEFAULT_PROFIT_PER_GRID
    investment_amount: Decimal = DEFAULT_INVESTMENT

    def __post_init__(self):
        """Normalize numeric fields to Decimal and grid_type to GridType."""
        object.__setattr__(self, 'lower_price', to_decimal(self.lower_price))
        object.__setattr__(self, 'upper_price', to_decimal(self.upper_price))
        object.__setattr__(self, 'grid_lines', int(self.grid_lines))
        object.__setattr__(self, 'grid_type', GridType(self.grid_type))
        object.__setattr__(self, 'profit_per_grid', to_decimal(self.profit_per_grid))
        object.__setattr__(self, 'investment_amount', to_decimal(self.investment_amount))
