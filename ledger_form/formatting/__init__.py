"""Text formatting helpers for form inputs."""

from ledger_form.formatting.monetary import (
    add_thousands_separator,
    convert_digit_string_to_monetary,
    filter_digits,
    parse_monetary,
    truncate_to_valid_i64,
)

__all__ = [
    "add_thousands_separator",
    "convert_digit_string_to_monetary",
    "filter_digits",
    "parse_monetary",
    "truncate_to_valid_i64",
]
