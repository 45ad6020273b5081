"""
Monetary Input Formatting

Turns whatever the user typed into a cents-style amount string:

    ""           -> "0.00"
    "5"          -> "0.05"
    "12345"      -> "123.45"
    "123456789"  -> "1,234,567.89"

DESIGN DECISION: The input is treated as a string of digits typed from the
right (like a cash register). Non-digits are dropped, the amount is capped
to what fits a signed 64-bit integer, and the last two digits are cents.
No floating point is involved at any step.
"""

from decimal import Decimal


MAX_CENTS = 2**63 - 1


def filter_digits(text: str) -> str:
    """Keep ASCII digits only."""
    return "".join(c for c in text if c in "0123456789")


def truncate_to_valid_i64(text: str) -> str:
    """
    Digits of text without leading zeros, cut from the right until they
    fit a signed 64-bit integer. Returns "0" when nothing is left.
    """
    digits = filter_digits(text).lstrip("0") or "0"
    digits = digits[:len(str(MAX_CENTS))]
    while int(digits) > MAX_CENTS:
        digits = digits[:-1]
    return digits


def add_thousands_separator(digits: str) -> str:
    """Insert a comma every three digits, counting from the right."""
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ",".join(groups)


def convert_digit_string_to_monetary(text: str) -> str:
    """Format typed input as an amount with two decimal places."""
    digits = truncate_to_valid_i64(text)

    if len(digits) == 1:
        return f"0.0{digits}"
    if len(digits) == 2:
        return f"0.{digits}"
    return f"{add_thousands_separator(digits[:-2])}.{digits[-2:]}"


def parse_monetary(text: str) -> Decimal:
    """
    Read a formatted amount back as a Decimal with two places.

    Accepts anything convert_digit_string_to_monetary accepts, so
    "1,234.50" and "123450" both give Decimal("1234.50").
    """
    cents = int(truncate_to_valid_i64(text))
    return Decimal(cents).scaleb(-2).quantize(Decimal("0.01"))
