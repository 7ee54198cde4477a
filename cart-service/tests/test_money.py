"""
Tests for money rounding helpers
"""

from decimal import Decimal

import pytest

from cart_manager.config import Settings
from cart_manager.core.config import CartConfig, RoundOff, parse_round_off
from cart_manager.core.money import ROUNDING_POLICIES, apply_round_off, round_money, to_decimal


class TestRoundMoney:
    """Tests for round_money()."""

    def test_half_away_from_zero(self):
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("-2.675")) == Decimal("-2.68")

    def test_float_goes_through_str(self):
        # float 2.675 is 2.67499999... in binary
        assert round_money(2.675) == Decimal("2.68")

    def test_to_decimal_none(self):
        assert to_decimal(None) == 0


class TestApplyRoundOff:
    """Tests for apply_round_off()."""

    def test_every_policy_has_a_handler(self):
        assert set(ROUNDING_POLICIES) == set(RoundOff)

    def test_unset_keeps_total(self):
        assert apply_round_off(Decimal("27.43"), None) == Decimal("27.43")

    def test_half_gives_nearest_multiple(self):
        """Payable is the multiple of 0.5 nearest to the total."""
        for cents in range(0, 10000, 7):
            total = Decimal(cents) / 100
            payable = apply_round_off(total, RoundOff.HALF)

            assert (payable * 2) % 1 == 0
            assert abs(total - payable) <= Decimal("0.25")

    def test_five_cents_gives_multiple_of_five_cents(self):
        for cents in range(0, 1000, 3):
            total = Decimal(cents) / 100
            payable = apply_round_off(total, RoundOff.FIVE_CENTS)

            assert (payable * 20) % 1 == 0
            assert abs(total - payable) <= Decimal("0.025")


class TestCartConfig:
    """Tests for CartConfig parsing."""

    def test_round_off_from_string(self):
        config = CartConfig(round_off_to="0.05", tax_percentage="12.5")

        assert config.round_off_to is RoundOff.FIVE_CENTS
        assert config.tax_percentage == Decimal("12.5")

    def test_defaults(self):
        config = CartConfig()

        assert config.round_off_to is None
        assert config.shipping_charges == 0

    @pytest.mark.parametrize("value,expected", [
        (0.05, RoundOff.FIVE_CENTS),
        (0.1, RoundOff.TEN_CENTS),
        ("0.10", RoundOff.TEN_CENTS),
        (0.5, RoundOff.HALF),
        (Decimal("0.50"), RoundOff.HALF),
        (1, RoundOff.WHOLE),
        ("1.0", RoundOff.WHOLE),
    ])
    def test_numeric_round_off(self, value, expected):
        """Rounding steps may be given as numbers."""
        assert CartConfig(round_off_to=value).round_off_to is expected

    @pytest.mark.parametrize("value", [0.25, "2", "abc", ""])
    def test_unrecognised_round_off_means_no_rounding(self, value):
        assert CartConfig(round_off_to=value).round_off_to is None
        assert parse_round_off(value) is None

    def test_settings_accept_numeric_round_off(self, monkeypatch):
        monkeypatch.setenv("CART_ROUND_OFF_TO", "1.0")

        assert Settings().cart_config().round_off_to is RoundOff.WHOLE

    def test_settings_ignore_unrecognised_round_off(self, monkeypatch):
        monkeypatch.setenv("CART_ROUND_OFF_TO", "0.25")

        assert Settings().cart_round_off_to is None
