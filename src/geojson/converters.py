"""
Coordinate-array codecs

Translate between GeoJSON wire arrays and lists of Position:

    depth 0  [x, y(, z)]                    Point
    depth 1  [[x, y], ...]                  LineString, MultiPoint
    depth 2  [[[x, y], ...], ...]           Polygon, MultiLineString
    depth 3  [[[[x, y], ...], ...], ...]    MultiPolygon (members decoded as depth 2)

Decoding accepts already-typed Position values unchanged, so the geometry
models can be built from either wire data or Python objects. Model-level
wrapping (LineString, Polygon, ...) is done by the geometry validators.
"""

from typing import Any, Callable, Sequence

from src.core.geometry.position import Position
from src.core.math.numerical_safeguards import validate_finite


# =============================================================================
# EXCEPTIONS
# =============================================================================


class GeoJSONParseError(ValueError):
    """
    GeoJSON input cannot be mapped to the object model.

    Raised for coordinate arrays of the wrong shape or with non-numeric /
    non-finite ordinates, and for unknown object types.
    """


# =============================================================================
# HELPERS
# =============================================================================


def _require_array(value: Any, what: str) -> Sequence[Any]:
    if isinstance(value, (list, tuple)):
        return value
    raise GeoJSONParseError(f"{what} must be an array, got {type(value).__name__}")


# =============================================================================
# DECODERS
# =============================================================================


def position_from_array(coordinate: Any) -> Position:
    """
    Decode [x, y] or [x, y, z] into a Position.

    Raises:
        GeoJSONParseError: If the array is not 2 or 3 finite numbers
    """
    if isinstance(coordinate, Position):
        return coordinate

    values = _require_array(coordinate, "position")
    if len(values) not in (2, 3):
        raise GeoJSONParseError(
            "Could not parse GeoJSON position. (Y or X missing from Point geometry?) "
            f"expected 2 or 3 ordinates, got {len(values)}"
        )

    try:
        x = validate_finite(values[0], "x")
        y = validate_finite(values[1], "y")
        z = validate_finite(values[2], "z") if len(values) == 3 else None
    except ValueError as e:
        raise GeoJSONParseError(f"Could not parse GeoJSON position {list(values)!r}: {e}") from e

    return Position(x, y, z)


def positions_from_array(coordinates: Any) -> list[Position]:
    """Decode a depth-1 array (LineString / MultiPoint coordinates)."""
    values = _require_array(coordinates, "coordinates")
    return [position_from_array(value) for value in values]


def rings_from_array(coordinates: Any) -> list[list[Position]]:
    """Decode a depth-2 array (Polygon rings / MultiLineString members)."""
    values = _require_array(coordinates, "coordinates")
    return [positions_from_array(value) for value in values]


def members_from_array(
    coordinates: Any, member_type: type, decode: Callable[[Any], Any]
) -> list[Any]:
    """
    Prepare the members of a multi-part geometry for model validation.

    Typed members (instances of member_type) pass through; raw arrays are
    decoded and wrapped as {"coordinates": ...} for the member model.
    """
    values = _require_array(coordinates, "coordinates")
    return [
        value if isinstance(value, member_type) else {"coordinates": decode(value)}
        for value in values
    ]


# =============================================================================
# ENCODERS
# =============================================================================


def position_to_array(position: Position) -> list[float]:
    """
    Encode a Position as [x, y] or [x, y, z].
    """
    return list(position.to_tuple())


def positions_to_array(positions: Sequence[Position]) -> list[list[float]]:
    return [position_to_array(position) for position in positions]


def rings_to_array(rings: Sequence[Sequence[Position]]) -> list[list[list[float]]]:
    return [positions_to_array(ring) for ring in rings]


def polygons_to_array(
    polygons: Sequence[Sequence[Sequence[Position]]],
) -> list[list[list[list[float]]]]:
    return [rings_to_array(polygon) for polygon in polygons]

