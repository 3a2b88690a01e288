"""Unit tests for fixed-precision amount helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.amounts import format_amount, parse_amount


def test_parse_amount_keeps_four_decimal_places() -> None:
    """Parsed amounts should carry four fractional digits."""
    amount = parse_amount("1.5")

    assert amount == Decimal("1.5") and str(amount) == "1.5000"


def test_parse_amount_accepts_trailing_zeros_beyond_precision() -> None:
    """Extra zeros do not lose precision and should be accepted."""
    assert parse_amount("2.500000") == Decimal("2.5")


@pytest.mark.parametrize("raw_value", ["abc", "", "NaN", "inf", "0", "0.0000", "-1.0", "1.00001"])
def test_parse_amount_rejects_invalid_values(raw_value: str) -> None:
    """Malformed, non-positive, and over-precise amounts should fail."""
    with pytest.raises(ValueError):
        parse_amount(raw_value)


def test_format_amount_pads_to_four_places() -> None:
    """Formatting should always render four fractional digits."""
    assert [format_amount(Decimal("3")), format_amount(Decimal("0.25"))] == [
        "3.0000",
        "0.2500",
    ]


def test_parse_amount_rejects_values_above_balance_ceiling() -> None:
    """Amounts past the balance ceiling should fail instead of rounding later."""
    with pytest.raises(ValueError, match="maximum amount"):
        parse_amount("999999999999999999999999")
