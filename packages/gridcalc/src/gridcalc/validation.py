"""Validation of raw bot drafts.

Turns the values typed into the create-bot form into a GridConfiguration,
or into the full list of field errors. Errors are collected, not raised, so
every problem can be shown next to its field at once.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Annotated, Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from gridcalc.config import (
    DEFAULT_GRID_TYPE,
    MAX_GRID_LINES,
    MAX_PROFIT_PER_GRID,
    MIN_GRID_LINES,
    MIN_INVESTMENT,
    MIN_PROFIT_PER_GRID,
    GridConfiguration,
    GridType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A validation failure attached to one input field."""
    field: str
    message: str


class BotDraft(BaseModel):
    """A create-bot form submission that passed per-field validation."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Bot display name")
    trading_pair: str = Field(..., min_length=1, description="Symbol, e.g. BTCUSDT")
    investment_amount: Decimal = Field(..., ge=MIN_INVESTMENT, description="Capital in USDT")
    api_key_id: int = Field(..., ge=1, description="Id of a stored exchange API key")
    grid_type: GridType = Field(default=DEFAULT_GRID_TYPE)
    upper_price: Decimal = Field(..., ge=0)
    lower_price: Decimal = Field(..., ge=0)
    grid_lines: int = Field(..., ge=MIN_GRID_LINES, le=MAX_GRID_LINES)
    profit_per_grid: Decimal = Field(..., ge=MIN_PROFIT_PER_GRID, le=MAX_PROFIT_PER_GRID)
    is_active: bool = True

    @field_validator("api_key_id")
    @classmethod
    def check_api_key_exists(cls, v: int, info: ValidationInfo) -> int:
        known_ids = (info.context or {}).get("api_key_ids")
        if known_ids is not None and v not in known_ids:
            raise ValueError(f"API key {v} does not exist")
        return v

    def to_grid_configuration(self) -> GridConfiguration:
        return GridConfiguration(
            lower_price=self.lower_price,
            upper_price=self.upper_price,
            grid_lines=self.grid_lines,
            grid_type=self.grid_type,
            profit_per_grid=self.profit_per_grid,
            investment_amount=self.investment_amount,
        )

    def to_create_request(self) -> dict[str, Any]:
        """Payload for the bot-management API: camelCase keys, decimals as strings."""
        return {to_camel(key): value for key, value in self.model_dump(mode="json").items()}


# Messages for constraint failures, keyed by (field, pydantic error type).
# A (field, None) entry is the fallback for any constraint on that field.
_MESSAGES: dict[tuple[str, Optional[str]], str] = {
    ("name", None): "Bot name is required",
    ("trading_pair", None): "Trading pair is required",
    ("investment_amount", None): "Investment must be at least 10 USDT",
    ("api_key_id", None): "API key is required",
    ("upper_price", None): "Upper price is required",
    ("lower_price", None): "Lower price is required",
    ("grid_lines", None): "Must have at least 5 grid lines",
    ("grid_lines", "less_than_equal"): "Cannot exceed 100 grid lines",
    ("profit_per_grid", None): "Profit per grid must be at least 0.1%",
    ("profit_per_grid", "less_than_equal"): "Profit per grid cannot exceed 2%",
}

_CONSTRAINT_ERRORS = {"missing", "string_too_short", "greater_than_equal", "less_than_equal"}

_FIELD_BY_ALIAS = {to_camel(name): name for name in BotDraft.model_fields}

_PRICE = TypeAdapter(Annotated[Decimal, Field(ge=0)])
_GRID_TYPE = TypeAdapter(GridType)


@dataclass
class ValidationResult:
    """Outcome of validate(): a draft when ok, otherwise every field error."""
    draft: Optional[BotDraft] = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.draft is not None and not self.errors

    @property
    def config(self) -> Optional[GridConfiguration]:
        return self.draft.to_grid_configuration() if self.ok else None

    def errors_by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


def normalize_keys(raw_input: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase form keys to field names; drop None (treated as missing)."""
    return {
        _FIELD_BY_ALIAS.get(key, key): value
        for key, value in raw_input.items()
        if value is not None
    }


def _to_field_error(error: dict) -> FieldError:
    field_name = str(error["loc"][0]) if error["loc"] else "__root__"
    error_type = error["type"]
    if error_type in _CONSTRAINT_ERRORS:
        message = _MESSAGES.get((field_name, error_type)) or _MESSAGES.get((field_name, None))
        if message:
            return FieldError(field_name, message)
    if error_type == "value_error" and "error" in error.get("ctx", {}):
        # Custom validators: pydantic prefixes "Value error, "
        return FieldError(field_name, str(error["ctx"]["error"]))
    return FieldError(field_name, error["msg"])


def _parse_or_none(adapter: TypeAdapter, data: dict, key: str, default=None):
    if key not in data:
        return default
    try:
        return adapter.validate_python(data[key])
    except ValidationError:
        return None


def _cross_field_errors(data: dict, failed_fields: set[str]) -> list[FieldError]:
    """
    Checks spanning several fields.

    Run on the individually parsed prices even when unrelated fields failed,
    so the range error is reported together with the rest.
    """
    if {"lower_price", "upper_price"} & failed_fields:
        return []
    lower = _parse_or_none(_PRICE, data, "lower_price")
    upper = _parse_or_none(_PRICE, data, "upper_price")
    if lower is None or upper is None:
        return []

    errors = []
    if lower >= upper:
        errors.append(FieldError("lower_price", "Lower price must be below upper price"))
    grid_type = _parse_or_none(_GRID_TYPE, data, "grid_type", default=DEFAULT_GRID_TYPE)
    if grid_type == GridType.GEOMETRIC and lower <= 0:
        errors.append(FieldError("lower_price", "Geometric grid needs a lower price above 0"))
    return errors


def validate(raw_input: Mapping[str, Any], api_key_ids: Optional[Iterable[int]] = None) -> ValidationResult:
    """
    Validate a raw create-bot form submission.

    Every field is checked independently and all failures are returned in one
    result; nothing is raised for bad input.

    Args:
        raw_input: Form values, snake_case or camelCase keys. Numeric strings
            are accepted.
        api_key_ids: Ids of the stored API keys. When given, api_key_id must
            be one of them; when None only api_key_id >= 1 is checked.

    Returns:
        ValidationResult with .draft/.config on success, .errors otherwise
    """
    data = normalize_keys(raw_input)
    context = {"api_key_ids": set(api_key_ids) if api_key_ids is not None else None}

    draft = None
    errors: list[FieldError] = []
    try:
        draft = BotDraft.model_validate(data, context=context)
    except ValidationError as e:
        errors = [_to_field_error(err) for err in e.errors()]

    errors.extend(_cross_field_errors(data, {err.field for err in errors}))

    if errors:
        logger.debug("Bot draft rejected: %s", ", ".join(f"{e.field}: {e.message}" for e in errors))
        return ValidationResult(draft=None, errors=errors)
    return ValidationResult(draft=draft)
