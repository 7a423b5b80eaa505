"""Tests for GridConfiguration normalization."""

from decimal import Decimal

import pytest

from gridcalc.config import GridConfiguration, GridType, to_decimal


class TestGridConfiguration:

    def test_defaults(self):
        config = GridConfiguration(lower_price=Decimal("100"), upper_price=Decimal("200"), grid_lines=20)

        assert config.grid_type == GridType.GEOMETRIC
        assert config.profit_per_grid == Decimal("0.53")
        assert config.investment_amount == Decimal("100")

    def test_numbers_normalized_to_decimal(self):
        config = GridConfiguration(lower_price=100, upper_price=200.5, grid_lines="10", profit_per_grid="1.5", investment_amount=0.1)

        assert config.lower_price == Decimal("100")
        assert config.upper_price == Decimal("200.5")
        assert config.grid_lines == 10
        assert config.profit_per_grid == Decimal("1.5")
        assert config.investment_amount == Decimal("0.1")

    def test_grid_type_from_string(self):
        config = GridConfiguration(lower_price=1, upper_price=2, grid_lines=5, grid_type="arithmetic")

        assert config.grid_type is GridType.ARITHMETIC

    def test_unknown_grid_type(self):
        with pytest.raises(ValueError):
            GridConfiguration(lower_price=1, upper_price=2, grid_lines=5, grid_type="spiral")

    def test_frozen(self):
        config = GridConfiguration(lower_price=1, upper_price=2, grid_lines=5)

        with pytest.raises(Exception):
            config.grid_lines = 6

    def test_hashable(self):
        """Hosts can memoize estimates on the configuration value."""
        a = GridConfiguration(lower_price=1, upper_price=2, grid_lines=5)
        b = GridConfiguration(lower_price=Decimal("1"), upper_price=Decimal("2"), grid_lines=5)

        assert {a: "cached"}[b] == "cached"


class TestToDecimal:

    def test_float_uses_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_passthrough(self):
        value = Decimal("3.14")
        assert to_decimal(value) is value

    def test_string(self):
        assert to_decimal("42.5") == Decimal("42.5")
