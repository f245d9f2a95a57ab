"""
Unit tests for record pricing.
"""
import pytest
from decimal import Decimal

from models import ServiceStatus
from services.pricing import PriceResolver, ValueCalculator, money_to_float, quantize_money
from tests.conftest import make_price


class TestPriceResolver:
    """Test price configuration lookup."""

    def test_no_config_for_procedure(self):
        prices = [make_price("pr1", "p1")]
        assert PriceResolver.resolve_price(prices, "p2") is None

    def test_empty_configs(self):
        assert PriceResolver.resolve_price([], "p1") is None

    def test_active_config_wins_over_inactive(self):
        prices = [
            make_price("old", "p1", value_done="40.00", active=False),
            make_price("new", "p1", value_done="55.00", active=True),
        ]
        assert PriceResolver.resolve_price(prices, "p1").id == "new"

    def test_first_config_used_when_none_active(self):
        prices = [
            make_price("a", "p1", active=False),
            make_price("b", "p1", active=False),
        ]
        assert PriceResolver.resolve_price(prices, "p1").id == "a"


class TestValueCalculator:
    """Test the value frozen into a new record."""

    def test_done_without_extras(self):
        config = make_price(value_done="50.00", value_not_done="20.00", value_additional="10.00")
        assert ValueCalculator.compute_value(config, ServiceStatus.DONE, []) == Decimal('50.00')

    def test_done_with_extras_adds_surcharge_once(self):
        config = make_price(value_done="50.00", value_not_done="20.00", value_additional="10.00")
        value = ValueCalculator.compute_value(config, ServiceStatus.DONE, ["Limpeza", "Toalhas"])
        assert value == Decimal('60.00')

    def test_two_extras_cost_the_same_as_one(self):
        config = make_price(value_done="50.00", value_additional="10.00")
        one = ValueCalculator.compute_value(config, ServiceStatus.DONE, ["Limpeza"])
        two = ValueCalculator.compute_value(config, ServiceStatus.DONE, ["Limpeza", "São Miguel"])
        assert one == two

    def test_not_done_with_extras(self):
        config = make_price(value_done="50.00", value_not_done="20.00", value_additional="10.00")
        value = ValueCalculator.compute_value(config, ServiceStatus.NOT_DONE, ["Limpeza"])
        assert value == Decimal('30.00')

    def test_not_done_without_extras(self):
        config = make_price(value_done="50.00", value_not_done="20.00", value_additional="10.00")
        assert ValueCalculator.compute_value(config, ServiceStatus.NOT_DONE, []) == Decimal('20.00')

    def test_no_config_is_zero(self):
        assert ValueCalculator.compute_value(None, ServiceStatus.DONE, ["Limpeza"]) == Decimal('0.00')

    def test_result_has_two_decimal_places(self):
        config = make_price(value_done="50", value_additional="0")
        value = ValueCalculator.compute_value(config, ServiceStatus.DONE, [])
        assert value.as_tuple().exponent == -2


class TestMoneyHelpers:
    """Test cent rounding."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal('10.005'), Decimal('10.01')),
        (Decimal('10.004'), Decimal('10.00')),
        (Decimal('0'), Decimal('0.00')),
    ])
    def test_quantize_money_half_up(self, amount, expected):
        assert quantize_money(amount) == expected

    def test_money_to_float(self):
        assert money_to_float(Decimal('33.333')) == 33.33
        assert isinstance(money_to_float(Decimal('1')), float)
