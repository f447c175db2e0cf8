"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Largest amount accepted anywhere in the calculator (one trillion PLN)
MAX_AMOUNT = Decimal("1000000000000")

CURRENCY_SUFFIX = re.compile(r"\s*(pln|zł|zl)\s*$", re.IGNORECASE)
AMBIGUOUS_COMMA = re.compile(r"^-?\d{1,3},\d{3}$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "12500"
    - "12500.50"
    - "12 500,50" (Polish decimal comma, space grouping)
    - "1.234,56" / "1,234.56"
    - "12500 PLN" / "12500 zł"

    A single comma followed by exactly three digits ("18,000") could be
    either a decimal comma or a thousands separator, so it is rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed, is ambiguous or is
            not finite
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    # Remove a trailing currency marker
    amount_str = CURRENCY_SUFFIX.sub("", amount_str)

    # Remove grouping spaces (including non-breaking ones)
    amount_str = re.sub(r"\s", "", amount_str)

    if "," in amount_str and "." in amount_str:
        # Whichever separator comes last is the decimal one
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif AMBIGUOUS_COMMA.match(amount_str):
        raise ValueError(
            f"Ambiguous amount '{amount_str}': use '{amount_str.replace(',', '')}' "
            f"or '{amount_str.replace(',', '.')}'"
        )
    elif amount_str.count(",") == 1:
        # "12500,50": decimal comma
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return amount


def parse_amount_or_zero(amount_str: str | None) -> Decimal:
    """Parse an optional amount, falling back to zero.

    Missing, unparseable, non-finite, negative and out-of-range inputs all
    yield ``Decimal(0)``.
    """
    try:
        amount = parse_amount(amount_str)
    except ValueError:
        return Decimal(0)
    if amount < 0 or amount > MAX_AMOUNT:
        return Decimal(0)
    return amount
