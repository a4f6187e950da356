"""Unit tests for x402_solana.core.units."""

from decimal import Decimal

import pytest

from x402_solana.core.units import (
    LAMPORTS_PER_SOL,
    format_decimal,
    lamports_to_sol,
    sol_to_lamports,
    to_decimal_unit,
    to_smallest_unit,
)


class TestToSmallestUnit:
    def test_one_and_a_half_sol(self):
        assert to_smallest_unit(Decimal("1.5")) == 1_500_000_000

    def test_float_input_does_not_drift(self):
        # 0.1 * 1e9 in binary floating point is 100000000.00000001
        assert to_smallest_unit(0.1) == 100_000_000
        assert to_smallest_unit(1.005) == 1_005_000_000

    def test_string_and_int_inputs(self):
        assert to_smallest_unit("2") == 2 * LAMPORTS_PER_SOL
        assert to_smallest_unit(3) == 3 * LAMPORTS_PER_SOL

    def test_custom_exponent(self):
        assert to_smallest_unit("1.25", exponent=6) == 1_250_000

    def test_extra_digits_round_half_up(self):
        assert to_smallest_unit("0.0000000005") == 1
        assert to_smallest_unit("0.0000000004") == 0

    def test_large_amount_is_exact(self):
        assert to_smallest_unit("123456789.123456789") == 123456789123456789

    @pytest.mark.parametrize("bad", ["-1", "abc", "NaN", "Infinity", float("inf")])
    def test_rejects_invalid_amounts(self, bad):
        with pytest.raises(ValueError):
            to_smallest_unit(bad)


class TestToDecimalUnit:
    def test_converts_lamports(self):
        assert to_decimal_unit(1_500_000_000) == Decimal("1.5")

    def test_accepts_integer_strings(self):
        assert to_decimal_unit("250000000") == Decimal("0.25")

    def test_rejects_non_integers(self):
        with pytest.raises(ValueError):
            to_decimal_unit("1.5")

    @pytest.mark.parametrize(
        "amount",
        ["0", "0.000000001", "1", "1.5", "0.123456789", "42.000000007", "987654.321"],
    )
    def test_round_trip(self, amount):
        value = Decimal(amount)
        assert to_decimal_unit(to_smallest_unit(value)) == value


class TestFormatDecimal:
    def test_default_precision_is_four(self):
        assert format_decimal(Decimal("1.5")) == "1.5000"

    def test_rounds_half_up(self):
        assert format_decimal("0.00005", 4) == "0.0001"
        assert format_decimal("2.5", 0) == "3"

    def test_pads_trailing_zeros(self):
        assert format_decimal(1, 2) == "1.00"

    def test_precision_beyond_default_context(self):
        assert format_decimal(1, 30) == "1." + "0" * 30
        assert format_decimal("123456789012345678901234567.5", 2) == (
            "123456789012345678901234567.50"
        )

    def test_negative_precision_rejected(self):
        with pytest.raises(ValueError):
            format_decimal(1, -1)


def test_sol_lamport_helpers():
    assert sol_to_lamports("0.5") == 500_000_000
    assert lamports_to_sol(500_000_000) == Decimal("0.5")
