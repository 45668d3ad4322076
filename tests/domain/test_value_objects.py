"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from codstore.domain.exceptions import ValidationError
from codstore.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "BDT"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_digits(self):
        assert Money.of(69.7).amount == Decimal("69.7")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_of_rejects_bool(self):
        with pytest.raises(ValidationError):
            Money.of(True)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("450") * 3 == Money.of("1350")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "BDT") + Money(Decimal("1"), "USD")

    def test_rounded_is_half_up(self):
        assert Money.of("10.005").rounded().amount == Decimal("10.01")
        assert Money.of("10.004").rounded().amount == Decimal("10.00")

    def test_to_whole_taka_is_half_up(self):
        assert Money.of("969.50").to_whole_taka() == 970
        assert Money.of("969.49").to_whole_taka() == 969

    def test_to_float(self):
        assert Money.of("1070.707").to_float() == 1070.71

    def test_str(self):
        assert str(Money.of("1234.5")) == "Tk 1,234.50"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            Quantity(True)
