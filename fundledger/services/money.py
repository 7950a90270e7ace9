"""Minor-unit currency helpers for operator input and display."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fundledger.services.errors import InvalidInputError

# A dot followed by exactly three digits and then a non-digit (or end) is a thousands separator
_THOUSANDS_DOT = re.compile(r"\.(?=\d{3}(\D|$))")


def parse_amount_to_cents(value: str | int | float | Decimal | None) -> int:
    """Parse an operator-entered major-unit amount into minor units.

    Accepts "1.234,50", "1234.5", "40", " 12,3 ". Empty input is zero.

    Raises:
        InvalidInputError: If the text is not a number
    """
    if value is None:
        return 0
    text = re.sub(r"\s", "", str(value))
    if not text:
        return 0
    text = _THOUSANDS_DOT.sub("", text).replace(",", ".")
    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise InvalidInputError(f"Not a valid amount: {value!r}") from e
    if not amount.is_finite():
        raise InvalidInputError(f"Not a valid amount: {value!r}")
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_cents(cents: int | None) -> str:
    """Render minor units as a two-decimal major-unit string (12345 -> "123.45")."""
    cents = cents or 0
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    return f"{sign}{whole}.{frac:02d}"


__all__ = ["parse_amount_to_cents", "format_cents"]
