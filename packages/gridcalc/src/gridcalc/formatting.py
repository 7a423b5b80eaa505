"""Presentation rounding for estimator output.

Estimator values stay unrounded Decimals; these helpers are the only place
where they are quantized, right before display.
"""

from decimal import Decimal, ROUND_HALF_UP

from gridcalc.config import to_decimal

NOT_AVAILABLE = "—"


def _quantize(value, places: int) -> Decimal:
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_price(value, places: int = 2) -> str:
    """Format a price or currency amount with fixed decimals (100.005 -> '100.01')."""
    return f"{_quantize(value, places):f}"


def format_percent(value, places: int = 2) -> str:
    """Format a percentage with fixed decimals, without the % sign."""
    return f"{_quantize(value, places):f}"


def format_amount(value, places: int = 4) -> str:
    """Format a base-asset quantity."""
    return f"{_quantize(value, places):f}"


def format_range(lower_price, upper_price, places: int = 2) -> str:
    """Format a price range as '$lower - $upper'."""
    return f"${format_price(lower_price, places)} - ${format_price(upper_price, places)}"
