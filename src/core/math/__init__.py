"""
Core math modules for geoobject

Numeric primitives guarding coordinates and extents against invalid floats.
"""

from src.core.math.numerical_safeguards import (
    DECIMAL_PATTERN,
    format_round_trip,
    is_number,
    is_valid_float,
    parse_finite_decimal,
    validate_finite,
)

__all__ = [
    # Decimal syntax
    "DECIMAL_PATTERN",
    # NaN/Inf checks
    "is_number",
    "is_valid_float",
    "validate_finite",
    # Text round-trip
    "format_round_trip",
    "parse_finite_decimal",
]
