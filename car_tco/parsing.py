"""
Numeric text input and display formatting.

Parsing never raises: text that does not start with a number reads as
zero so a half-typed value never blocks editing.
"""

import math
import re

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(text) -> float:
    """
    Parse comma-grouped numeric text.

    Args:
        text: User input such as '1,000,000' or '12.5'

    Returns:
        The leading number in the text, or 0.0 when there is none
    """
    if text is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(text).replace(",", ""))
    if match is None:
        return 0.0
    value = float(match.group(1))
    if not math.isfinite(value):
        return 0.0
    return value


def parse_int(text) -> int:
    """Parse numeric text for an integer field, truncating any fraction."""
    return int(parse_number(text))


def format_number(value: float, decimals: int = 0) -> str:
    """Format a value with thousands separators and fixed decimals."""
    text = f"{value:,.{decimals}f}"
    # -0 after rounding
    if text.lstrip("-").strip("0.,") == "":
        text = text.lstrip("-")
    return text


def format_input(value: float) -> str:
    """Format a value for a text input: grouped, at most 3 decimals."""
    text = format_number(value, 3)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
