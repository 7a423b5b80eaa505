"""
Grid level calculations for grid bot estimation.

Derives the price levels of a grid from its range, line count and spacing
type. All functions are pure and use Decimal so that the levels shown in the
dashboard and the levels submitted with a bot are identical.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from gridcalc.config import GridType, to_decimal
from gridcalc.errors import InvalidRangeError

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")

DEFAULT_SPREAD_PCT = Decimal("10")


@dataclass(frozen=True)
class GridPriceLine:
    """One grid level as overlaid on a price chart."""
    title: str
    price: Decimal


@dataclass(frozen=True)
class GridStepSummary:
    """Smallest and largest distance between adjacent grid levels."""
    min_step: Decimal
    max_step: Decimal
    min_step_pct: Decimal
    max_step_pct: Decimal


def check_grid_range(lower_price: Decimal, upper_price: Decimal, grid_lines: int, grid_type: GridType) -> None:
    """
    Raise InvalidRangeError if grid spacing is undefined.

    Args:
        lower_price: Bottom of the range
        upper_price: Top of the range
        grid_lines: Number of levels, endpoints included
        grid_type: Spacing type

    Raises:
        InvalidRangeError: a price is NaN or infinite, upper <= lower,
            grid_lines < 2, lower < 0, or lower <= 0 for a geometric grid
    """
    for name, price in (("lower_price", lower_price), ("upper_price", upper_price)):
        if not price.is_finite():
            raise InvalidRangeError(f"{name} must be a finite number, got {price}")
    if upper_price <= lower_price:
        raise InvalidRangeError(
            f"upper_price must be greater than lower_price, got lower={lower_price} upper={upper_price}"
        )
    if grid_lines < 2:
        raise InvalidRangeError(f"grid_lines must be at least 2, got {grid_lines}")
    if lower_price < _ZERO:
        raise InvalidRangeError(f"lower_price must not be negative, got {lower_price}")
    if grid_type == GridType.GEOMETRIC and lower_price <= _ZERO:
        raise InvalidRangeError(f"geometric grid needs a positive lower_price, got {lower_price}")


def compute_grid_levels(lower_price, upper_price, grid_lines: int, grid_type: GridType | str) -> list[Decimal]:
    """
    Compute the price levels of a grid.

    Arithmetic: level[i] = lower + i * (upper - lower) / (grid_lines - 1)
    Geometric:  level[i] = lower * (upper / lower) ** (i / (grid_lines - 1))

    The first level equals lower_price and the last equals upper_price exactly.

    Args:
        lower_price: Bottom of the range (Decimal, int, float or numeric str)
        upper_price: Top of the range
        grid_lines: Number of levels, endpoints included
        grid_type: 'arithmetic' or 'geometric'

    Returns:
        Strictly increasing list of grid_lines prices

    Raises:
        InvalidRangeError: If spacing is undefined for the inputs
    """
    lower = to_decimal(lower_price)
    upper = to_decimal(upper_price)
    grid_type = GridType(grid_type)
    check_grid_range(lower, upper, grid_lines, grid_type)

    intervals = Decimal(grid_lines - 1)
    levels = [lower]

    if grid_type == GridType.ARITHMETIC:
        step = (upper - lower) / intervals
        for i in range(1, grid_lines - 1):
            levels.append(lower + step * i)
    else:
        ratio = upper / lower
        for i in range(1, grid_lines - 1):
            levels.append(lower * ratio ** (Decimal(i) / intervals))

    levels.append(upper)
    return levels


def suggest_price_range(last_price, spread_pct=DEFAULT_SPREAD_PCT) -> tuple[Decimal, Decimal]:
    """
    Default grid range around the current market price.

    Args:
        last_price: Current ticker price
        spread_pct: Distance of each bound from last_price, in percent (default 10)

    Returns:
        (lower_price, upper_price)

    Raises:
        InvalidRangeError: last_price not a positive number or spread_pct outside (0, 100)
    """
    price = to_decimal(last_price)
    spread = to_decimal(spread_pct)
    if not price.is_finite() or price <= _ZERO:
        raise InvalidRangeError(f"last_price must be positive, got {price}")
    if not (spread.is_finite() and _ZERO < spread < _HUNDRED):
        raise InvalidRangeError(f"spread_pct must be between 0 and 100, got {spread}")

    fraction = spread / _HUNDRED
    return price * (_ONE - fraction), price * (_ONE + fraction)


def grid_price_lines(levels: list[Decimal]) -> list[GridPriceLine]:
    """Label levels 'Grid 1' .. 'Grid N' from the bottom up."""
    return [GridPriceLine(title=f"Grid {i + 1}", price=price) for i, price in enumerate(levels)]


def grid_step_summary(levels: list[Decimal]) -> GridStepSummary:
    """
    Summarize spacing between adjacent levels.

    Step percentage is measured from the lower level of each pair, which is
    what a buy at that level has to gain before the sell one level up fills.

    Raises:
        InvalidRangeError: If fewer than two levels are given
    """
    if len(levels) < 2:
        raise InvalidRangeError(f"need at least 2 levels to measure spacing, got {len(levels)}")

    steps = [upper - lower for lower, upper in zip(levels, levels[1:])]
    step_pcts = [
        (upper - lower) / lower * _HUNDRED
        for lower, upper in zip(levels, levels[1:])
        if lower > _ZERO
    ]
    if not step_pcts:
        # Only happens when the single interval starts at zero
        step_pcts = [_ZERO]

    return GridStepSummary(
        min_step=min(steps),
        max_step=max(steps),
        min_step_pct=min(step_pcts),
        max_step_pct=max(step_pcts),
    )
