"""Helpers for converting between user input, cents and display strings."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


_STRIPPED_SYMBOLS = ("₹", "$", "€", ",")


def parse_to_cents(raw: str | None) -> int | None:
    """Parse a user-entered amount into integer cents.

    Args:
        raw: Text such as ``"1,234.5"`` or ``"₹ 20"``.

    Returns:
        int | None: Amount in cents rounded half-up, or None when the input
        is blank or not a number.
    """
    if raw is None:
        return None
    cleaned = raw.strip()
    for symbol in _STRIPPED_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
        if not amount.is_finite():
            return None
        quantized = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    return int(quantized.scaleb(2))


def format_cents(amount_cents: int) -> str:
    """Format integer cents with two fixed decimals."""
    return f"{Decimal(amount_cents).scaleb(-2):.2f}"


def coerce_cents(value) -> int:
    """Normalize raw numeric values from storage to int cents.

    Args:
        value: Raw value from SQL rows or adapters.

    Returns:
        int: Normalized cents, 0 for missing values.
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return int(Decimal(str(value)))


__all__ = ["parse_to_cents", "format_cents", "coerce_cents"]
