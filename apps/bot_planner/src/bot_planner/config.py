"""Configuration models for bot_planner.

Loads planner configuration from YAML file with Pydantic validation.
Bot drafts are kept as raw mappings; they are validated by gridcalc so that
every field error can be reported, not just the first.
"""

import os
import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from gridcalc.grid import DEFAULT_SPREAD_PCT
from gridcalc.projection import DEFAULT_DAILY_GRID_CROSSINGS

CONFIG_PATH_ENV = "BOT_PLANNER_CONFIG_PATH"

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{4,20}$")


class EstimatorSettings(BaseModel):
    """Assumptions behind the profit estimate and range seeding."""

    daily_grid_crossings: Decimal = Field(
        default=DEFAULT_DAILY_GRID_CROSSINGS,
        ge=0,
        description="Completed grid trades assumed per day",
    )
    default_spread_pct: Decimal = Field(
        default=DEFAULT_SPREAD_PCT,
        gt=0,
        lt=100,
        description="Seeded range distance from last price, percent",
    )


class ApiKeyRef(BaseModel):
    """A stored exchange API key, referenced by id from bot drafts."""

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)


class PlannerConfig(BaseModel):
    """Root configuration for bot_planner."""

    estimator: EstimatorSettings = Field(default_factory=EstimatorSettings)
    api_keys: list[ApiKeyRef] = Field(default_factory=list)
    market: dict[str, Decimal] = Field(default_factory=dict, description="Last price per trading pair")
    bots: list[dict[str, Any]] = Field(default_factory=list, description="Raw create-bot drafts")

    @field_validator("market")
    @classmethod
    def validate_market(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        for symbol, price in v.items():
            if not _SYMBOL_PATTERN.match(symbol):
                raise ValueError(
                    f"Invalid symbol format '{symbol}'. "
                    "Expected uppercase alphanumeric, 4-20 chars (e.g., BTCUSDT)."
                )
            if price <= 0:
                raise ValueError(f"Last price for {symbol} must be positive, got {price}")
        return v

    @property
    def api_key_ids(self) -> list[int]:
        return [key.id for key in self.api_keys]

    def last_price(self, trading_pair: Optional[str]) -> Optional[Decimal]:
        if not trading_pair:
            return None
        return self.market.get(str(trading_pair).upper())


def load_config(config_path: Optional[str] = None) -> PlannerConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, checks:
            1. BOT_PLANNER_CONFIG_PATH environment variable
            2. apps/bot_planner/conf/bot_planner.yaml

    Returns:
        Validated PlannerConfig

    Raises:
        FileNotFoundError: If no config file found
        ValueError: If config validation fails
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV)

    if config_path is None:
        search_paths = [
            Path(__file__).resolve().parents[2] / "conf" / "bot_planner.yaml",
            Path("apps/bot_planner/conf/bot_planner.yaml"),
            Path("conf/bot_planner.yaml"),
            Path("bot_planner.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is None:
        raise FileNotFoundError(
            f"No config file found. Set {CONFIG_PATH_ENV} or create apps/bot_planner/conf/bot_planner.yaml"
        )

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return PlannerConfig(**data)
