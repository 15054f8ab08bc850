"""
Numerical Safeguards — finite-float guards for coordinates and extents

Shared primitives used wherever raw numbers enter the library:
- Envelope text parsing (strict decimal syntax, finite result)
- Coordinate-array codecs (numeric, finite ordinates)

CRITICAL INVARIANTS:
1. NaN/Inf never enter a Position or an Envelope through a parser
2. bool is never accepted as a number (json gives True/False, not 1/0)
3. Decimal syntax is locale invariant: '.' separator, no grouping
"""

import math
import re
from typing import Any, Final

# =============================================================================
# DECIMAL SYNTAX
# =============================================================================

# Sign, digits with optional fraction (or a bare fraction), optional exponent.
# Rejects 'inf', 'nan', '1_000' and ',' grouping, all of which float() or
# other locales would accept.
DECIMAL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)


# =============================================================================
# NaN/Inf CHECKS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is finite (not NaN, not +/-Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite
    """
    return math.isfinite(value)


def is_number(value: Any) -> bool:
    """
    Check that a value is a real JSON number (int or float, but not bool).

    Examples:
        >>> is_number(1)
        True
        >>> is_number(2.5)
        True
        >>> is_number(True)
        False
        >>> is_number("1")
        False
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_finite(value: Any, name: str = "value") -> float:
    """
    Coerce a JSON number to float and require it to be finite.

    Args:
        value: Raw number
        name: Label used in the error message

    Returns:
        float(value)

    Raises:
        ValueError: If value is not a number or is NaN/Inf
    """
    if not is_number(value):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}")

    result = float(value)
    if not is_valid_float(result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


# =============================================================================
# DECIMAL PARSING
# =============================================================================


def parse_finite_decimal(text: str) -> float:
    """
    Parse a locale-invariant decimal literal into a finite float.

    Surrounding whitespace is ignored. Exponent notation is accepted so that
    every value produced by repr() of a finite float parses back.

    Args:
        text: Decimal literal (e.g. '1', '-0.5', '1e+20')

    Returns:
        Parsed float

    Raises:
        ValueError: If the text is empty, not a decimal literal, or overflows

    Examples:
        >>> parse_finite_decimal(" 1.5 ")
        1.5
        >>> parse_finite_decimal("-2e3")
        -2000.0
    """
    literal = text.strip()
    if not literal:
        raise ValueError("value is missing")

    if DECIMAL_PATTERN.fullmatch(literal) is None:
        raise ValueError(f"'{literal}' is not a decimal number")

    result = float(literal)
    if not is_valid_float(result):
        raise ValueError(f"'{literal}' is not finite")
    return result


def format_round_trip(value: float) -> str:
    """
    Shortest decimal text that parses back to the identical float.

    Integral values drop the trailing '.0' (5.0 -> '5').

    Examples:
        >>> format_round_trip(5.0)
        '5'
        >>> format_round_trip(0.1)
        '0.1'
        >>> format_round_trip(1e20)
        '1e+20'
    """
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text
