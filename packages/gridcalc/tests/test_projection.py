"""Tests for profit projection."""

from decimal import Decimal

import pytest

from gridcalc.config import GridConfiguration, GridType
from gridcalc.errors import InvalidConfigurationError
from gridcalc.projection import DAYS_PER_MONTH, DEFAULT_DAILY_GRID_CROSSINGS, ProfitProjection, project_profit


def _config(**overrides) -> GridConfiguration:
    data = {
        "lower_price": Decimal("45000"),
        "upper_price": Decimal("55000"),
        "grid_lines": 20,
        "grid_type": GridType.GEOMETRIC,
        "profit_per_grid": Decimal("0.53"),
        "investment_amount": Decimal("100"),
    }
    data.update(overrides)
    return GridConfiguration(**data)


class TestProjectProfit:
    """Core projection formulas."""

    def test_reference_scenario(self):
        """100 USDT at 0.53% per grid and one crossing per day."""
        result = project_profit(_config(), daily_grid_crossings=1)

        assert result.daily_profit == Decimal("0.53")
        assert result.monthly_profit == Decimal("15.90")
        assert result.daily_profit_percentage == Decimal("0.53")
        assert result.monthly_profit_percentage == Decimal("15.90")
        assert result.estimable is True

    def test_default_crossings(self):
        assert DEFAULT_DAILY_GRID_CROSSINGS == Decimal("1")
        assert project_profit(_config()) == project_profit(_config(), daily_grid_crossings=1)

    def test_crossings_scale_profit(self):
        result = project_profit(_config(), daily_grid_crossings=4)

        assert result.daily_profit == Decimal("2.12")
        assert result.daily_profit_percentage == Decimal("2.12")

    def test_zero_crossings_gives_zero_but_estimable(self):
        result = project_profit(_config(), daily_grid_crossings=0)

        assert result.daily_profit == 0
        assert result.estimable is True

    def test_float_inputs(self):
        result = project_profit(_config(investment_amount=100.0, profit_per_grid=0.53))

        assert result.daily_profit == Decimal("0.53")

    @pytest.mark.parametrize("investment", ["10", "100", "1234.56", "99999.99"])
    @pytest.mark.parametrize("crossings", ["0.5", "1", "3", "12.25"])
    def test_doubling_investment_doubles_profit(self, investment, crossings):
        base = project_profit(_config(investment_amount=Decimal(investment)), daily_grid_crossings=Decimal(crossings))
        doubled = project_profit(_config(investment_amount=Decimal(investment) * 2), daily_grid_crossings=Decimal(crossings))

        assert doubled.daily_profit == base.daily_profit * 2
        assert doubled.monthly_profit == base.monthly_profit * 2

    @pytest.mark.parametrize("profit_per_grid", ["0.1", "0.53", "1.37", "2"])
    @pytest.mark.parametrize("crossings", ["0.5", "1", "7"])
    def test_monthly_is_thirty_days(self, profit_per_grid, crossings):
        result = project_profit(_config(profit_per_grid=Decimal(profit_per_grid)), daily_grid_crossings=Decimal(crossings))

        assert DAYS_PER_MONTH == 30
        assert result.monthly_profit == result.daily_profit * 30

    def test_not_rounded_internally(self):
        """Sub-cent daily profit keeps full precision through the monthly figure."""
        result = project_profit(_config(investment_amount=Decimal("10"), profit_per_grid=Decimal("0.13")))

        assert result.daily_profit == Decimal("0.013")
        assert result.monthly_profit == Decimal("0.39")


class TestProjectProfitErrors:
    """Hard errors and the zeroed soft fallback."""

    @pytest.mark.parametrize("investment", ["0", "-100"])
    def test_non_positive_investment(self, investment):
        with pytest.raises(InvalidConfigurationError):
            project_profit(_config(investment_amount=Decimal(investment)))

    @pytest.mark.parametrize("profit", ["0", "-0.5"])
    def test_non_positive_profit_rate(self, profit):
        with pytest.raises(InvalidConfigurationError):
            project_profit(_config(profit_per_grid=Decimal(profit)))

    def test_negative_crossings(self):
        with pytest.raises(InvalidConfigurationError):
            project_profit(_config(), daily_grid_crossings=-1)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"investment_amount": Decimal("Infinity")},
            {"investment_amount": Decimal("NaN")},
            {"profit_per_grid": Decimal("NaN")},
        ],
    )
    def test_non_finite_values(self, overrides):
        with pytest.raises(InvalidConfigurationError, match="finite"):
            project_profit(_config(**overrides))

    @pytest.mark.parametrize("crossings", ["Infinity", "NaN"])
    def test_non_finite_crossings(self, crossings):
        with pytest.raises(InvalidConfigurationError, match="finite"):
            project_profit(_config(), daily_grid_crossings=Decimal(crossings))

    def test_non_finite_price_returns_zero(self):
        assert project_profit(_config(upper_price=Decimal("Infinity"))) == ProfitProjection.zero()

    def test_investment_error_wins_over_degenerate_range(self):
        with pytest.raises(InvalidConfigurationError):
            project_profit(_config(investment_amount=Decimal("0"), lower_price=Decimal("100"), upper_price=Decimal("100")))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"lower_price": Decimal("100"), "upper_price": Decimal("100")},
            {"lower_price": Decimal("200"), "upper_price": Decimal("100")},
            {"grid_lines": 1},
            {"lower_price": Decimal("0"), "grid_type": GridType.GEOMETRIC},
        ],
    )
    def test_degenerate_grid_returns_zero(self, overrides):
        result = project_profit(_config(**overrides))

        assert result == ProfitProjection.zero()
        assert result.estimable is False
        assert result.daily_profit == 0
        assert result.monthly_profit_percentage == 0

    def test_zero_lower_is_fine_for_arithmetic(self):
        result = project_profit(_config(lower_price=Decimal("0"), grid_type=GridType.ARITHMETIC))

        assert result.estimable is True


class TestProjectionDisplay:
    """Rounding at presentation time."""

    def test_display_two_places(self):
        result = project_profit(_config())

        assert result.display() == {
            "daily_profit": "0.53",
            "monthly_profit": "15.90",
            "daily_profit_percentage": "0.53",
            "monthly_profit_percentage": "15.90",
        }

    def test_display_rounds_half_up(self):
        result = project_profit(_config(investment_amount=Decimal("10"), profit_per_grid=Decimal("0.15")))

        # 0.015 -> 0.02, monthly 0.45
        assert result.display()["daily_profit"] == "0.02"
        assert result.display()["monthly_profit"] == "0.45"

    def test_display_not_estimable(self):
        display = ProfitProjection.zero().display()

        assert set(display.values()) == {"—"}
