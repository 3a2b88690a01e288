"""Fixed-precision amount helpers.

Amounts are Decimals with four fractional digits. Input with more
precision is rejected rather than rounded.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from core.constants import AMOUNT_DECIMAL_PLACES, AMOUNT_QUANTUM, MAX_BALANCE


def parse_amount(raw_value: str) -> Decimal:
    """Parse a positive amount string.

    Args:
        raw_value: Trimmed amount text, e.g. ``"1.5"``.

    Returns:
        Amount quantized to four decimal places.

    Raises:
        ValueError: If the value is not a finite positive decimal with
            at most four fractional digits, or exceeds the balance ceiling.
    """
    try:
        amount = Decimal(raw_value)
    except InvalidOperation as error:
        raise ValueError(f"'{raw_value}' is not a decimal number") from error
    if not amount.is_finite():
        raise ValueError(f"'{raw_value}' is not a finite number")
    if amount <= 0:
        raise ValueError(f"'{raw_value}' must be greater than zero")
    if amount > MAX_BALANCE:
        raise ValueError(f"'{raw_value}' exceeds the maximum amount {MAX_BALANCE}")
    quantized = amount.quantize(AMOUNT_QUANTUM)
    if quantized != amount:
        raise ValueError(
            f"'{raw_value}' has more than {AMOUNT_DECIMAL_PLACES} decimal places"
        )
    return quantized


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly four fractional digits."""
    return f"{amount.quantize(AMOUNT_QUANTUM):f}"
