"""Live preview of a bot draft.

Mirrors what the create-bot form shows while the user types: field errors,
the grid levels overlaid on the chart and the estimated performance. The
estimate is attempted from the raw values even while unrelated fields are
still invalid; estimator errors degrade to a "cannot estimate" state.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from gridcalc.config import DEFAULT_GRID_TYPE, MAX_GRID_LINES, GridConfiguration, to_decimal
from gridcalc.errors import GridEstimatorError, InvalidConfigurationError
from gridcalc.grid import (
    GridPriceLine,
    GridStepSummary,
    compute_grid_levels,
    grid_price_lines,
    grid_step_summary,
    suggest_price_range,
)
from gridcalc.projection import ProfitProjection, project_profit
from gridcalc.validation import ValidationResult, normalize_keys, validate

from bot_planner.config import EstimatorSettings

logger = logging.getLogger(__name__)


@dataclass
class GridPreview:
    """Everything the form displays for one draft."""

    label: str
    validation: ValidationResult
    projection: ProfitProjection = field(default_factory=ProfitProjection.zero)
    levels: list[Decimal] = field(default_factory=list)
    price_lines: list[GridPriceLine] = field(default_factory=list)
    step_summary: Optional[GridStepSummary] = None
    reason: Optional[str] = None  # why no estimate could be made
    seeded_range: bool = False
    last_price: Optional[Decimal] = None

    @property
    def valid(self) -> bool:
        return self.validation.ok

    @property
    def can_estimate(self) -> bool:
        return self.reason is None and self.projection.estimable

    @property
    def create_request(self) -> Optional[dict[str, Any]]:
        return self.validation.draft.to_create_request() if self.valid else None


def _is_unset(value) -> bool:
    if value is None or value == "":
        return True
    try:
        return to_decimal(value) == 0
    except (InvalidOperation, TypeError, ValueError):
        return False


def _seed_range(data: dict, last_price: Optional[Decimal], spread_pct: Decimal) -> bool:
    """Fill lower/upper price from the ticker when the draft leaves both unset."""
    if last_price is None:
        return False
    if not (_is_unset(data.get("lower_price")) and _is_unset(data.get("upper_price"))):
        return False
    lower, upper = suggest_price_range(last_price, spread_pct)
    data["lower_price"] = lower
    data["upper_price"] = upper
    return True


def _grid_lines(value) -> int:
    """Line count for the estimate; the preview never builds more levels than the form allows."""
    lines = to_decimal(value)
    if not lines.is_finite() or lines != lines.to_integral_value():
        raise InvalidConfigurationError(f"grid_lines must be a whole number, got {value}")
    if lines > MAX_GRID_LINES:
        raise InvalidConfigurationError(f"grid_lines must be at most {MAX_GRID_LINES}, got {value}")
    return int(lines)


def _draft_configuration(data: dict) -> GridConfiguration:
    missing = [key for key in ("lower_price", "upper_price", "grid_lines", "profit_per_grid", "investment_amount")
               if key not in data]
    if missing:
        raise ValueError(f"missing {', '.join(missing)}")
    return GridConfiguration(
        lower_price=data["lower_price"],
        upper_price=data["upper_price"],
        grid_lines=_grid_lines(data["grid_lines"]),
        grid_type=data.get("grid_type", DEFAULT_GRID_TYPE),
        profit_per_grid=data["profit_per_grid"],
        investment_amount=data["investment_amount"],
    )


def build_preview(
    raw: Mapping[str, Any],
    settings: EstimatorSettings,
    api_key_ids: Optional[list[int]] = None,
    last_price: Optional[Decimal] = None,
    label: Optional[str] = None,
) -> GridPreview:
    """
    Validate a draft and estimate its grid.

    Args:
        raw: Draft values as typed into the form (camelCase or snake_case)
        settings: Estimator assumptions (crossings per day, seeding spread)
        api_key_ids: Stored API key ids, None to skip the existence check
        last_price: Ticker price of the draft's trading pair, used to seed an
            unset price range
        label: Display name, defaults to the draft's name

    Returns:
        GridPreview; never raises for bad draft values
    """
    data = normalize_keys(raw)
    seeded = _seed_range(data, last_price, settings.default_spread_pct)
    if seeded:
        logger.debug("Seeded range %s-%s from last price %s", data["lower_price"], data["upper_price"], last_price)

    preview = GridPreview(
        label=str(label or data.get("name") or "unnamed draft"),
        validation=validate(data, api_key_ids),
        seeded_range=seeded,
        last_price=last_price,
    )

    try:
        config = _draft_configuration(data)
    except (InvalidOperation, TypeError, ValueError) as e:
        preview.reason = f"Cannot estimate: {e}"
        logger.info("%s: %s", preview.label, preview.reason)
        return preview

    try:
        preview.projection = project_profit(config, settings.daily_grid_crossings)
        preview.levels = compute_grid_levels(config.lower_price, config.upper_price, config.grid_lines, config.grid_type)
    except GridEstimatorError as e:
        preview.reason = f"Cannot estimate: {e}"
        logger.info("%s: %s", preview.label, preview.reason)
        return preview

    preview.price_lines = grid_price_lines(preview.levels)
    preview.step_summary = grid_step_summary(preview.levels)
    return preview
