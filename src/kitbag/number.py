"""Number parsing and formatting helpers."""

import math
import re
from typing import Any

from kitbag.common import UNDEFINED

_SEPARATORS = re.compile(r"[, ]+")
_NUMBER = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_DIGIT = re.compile(r"[0-9]")
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def parse_number(v: Any) -> float:
    """Parse a value into a number, ignoring commas and spaces.

    Args:
        v: The value to parse.

    Returns:
        The first number found in the value, or nan if there is none.

    Examples:
        >>> parse_number("1,234")
        1234.0
        >>> parse_number("  -12.5 kg")
        -12.5
    """
    if v is None or v is UNDEFINED:
        return math.nan

    text = str(v).strip()
    if not text:
        return math.nan

    match = _NUMBER.search(_SEPARATORS.sub("", text))
    if match is None:
        return math.nan

    return float(match.group(0))


def extract_numeric(v: Any) -> str:
    """Return all ASCII digits of `v` joined together.

    Examples:
        >>> extract_numeric("12.34")
        '1234'
    """
    if v is None or v is UNDEFINED:
        return ""
    return "".join(_DIGIT.findall(str(v)))


def unify_separator(v: Any, separator: str) -> str:
    """Replace every run of non-numeric characters with `separator`.

    Digits, dots and minus signs are kept.

    Examples:
        >>> unify_separator("1,234.56", "_")
        '1_234.56'
    """
    if v is None or v is UNDEFINED:
        return ""
    return _NON_NUMERIC.sub(lambda _: separator, str(v))


def format_number(v: Any, separator: str = ",") -> str:
    """Format a number with thousands separators.

    Uses en-US grouping with at most three fraction digits, then swaps the
    comma for `separator` when a different one is given.

    Args:
        v: The value to format. Strings are parsed with `parse_number`.
        separator: The thousands separator.

    Returns:
        The formatted number, or an empty string if `v` is not a number.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
        >>> format_number("1234.5678", ".")
        '1.234.568'
    """
    n = parse_number(v)
    if math.isnan(n):
        return ""

    text = f"{n:,.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"

    if separator != ",":
        text = text.replace(",", separator)

    return text
