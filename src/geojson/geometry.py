"""
Geometry — GeoJSON geometry objects

Immutable Pydantic models for Point, LineString, Polygon, MultiPoint,
MultiLineString and MultiPolygon. The 'coordinates' member is decoded from
and encoded to nested numeric arrays by the codecs in converters.py, so

    Point.model_validate({"type": "Point", "coordinates": [1.0, 2.0]})

and

    Point(coordinates=Position(1.0, 2.0))

build the same object, and model_dump(mode="json") gives the wire form back.
"""

from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import Field, field_serializer, field_validator

from src.core.geometry.position import Position
from src.geojson.base import GeoJSONObject
from src.geojson.converters import (
    members_from_array,
    polygons_to_array,
    position_from_array,
    position_to_array,
    positions_from_array,
    positions_to_array,
    rings_from_array,
    rings_to_array,
)


# =============================================================================
# ENUMS
# =============================================================================


class GeoJSONObjectType(str, Enum):
    """Value of the 'type' member"""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    FEATURE = "Feature"
    FEATURE_COLLECTION = "FeatureCollection"


# Minimum positions of a closed LinearRing (first == last)
LINEAR_RING_MIN_POSITIONS = 4


# =============================================================================
# SINGLE-PART GEOMETRIES
# =============================================================================


class Point(GeoJSONObject):
    """
    Single position.
    """

    type: Literal["Point"] = "Point"
    coordinates: Position = Field(..., description="[x, y] or [x, y, z]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> Position:
        return position_from_array(v)

    @field_serializer("coordinates")
    def encode_coordinates(self, coordinates: Position) -> list[float]:
        return position_to_array(coordinates)

    @property
    def x(self) -> float:
        return self.coordinates.x

    @property
    def y(self) -> float:
        return self.coordinates.y

    def positions(self) -> Iterator[Position]:
        yield self.coordinates


class LineString(GeoJSONObject):
    """
    Two or more positions joined by straight segments.

    A closed LineString with at least 4 positions is a LinearRing, the
    building block of Polygon.
    """

    type: Literal["LineString"] = "LineString"
    coordinates: list[Position] = Field(..., description="[[x, y], ...]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> list[Position]:
        return positions_from_array(v)

    @field_validator("coordinates")
    @classmethod
    def validate_min_positions(cls, v: list[Position]) -> list[Position]:
        """LineString needs two or more positions"""
        if len(v) < 2:
            raise ValueError(f"LineString requires at least 2 positions, got {len(v)}")
        return v

    @field_serializer("coordinates")
    def encode_coordinates(self, coordinates: list[Position]) -> list[list[float]]:
        return positions_to_array(coordinates)

    def is_closed(self) -> bool:
        """
        First and last positions are identical (exact comparison).
        """
        return self.coordinates[0] == self.coordinates[-1]

    def is_linear_ring(self) -> bool:
        return len(self.coordinates) >= LINEAR_RING_MIN_POSITIONS and self.is_closed()

    def positions(self) -> Iterator[Position]:
        yield from self.coordinates


class Polygon(GeoJSONObject):
    """
    Exterior ring followed by optional holes; every ring is a LinearRing.
    """

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[LineString] = Field(..., description="[[[x, y], ...], ...]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> list[Any]:
        return members_from_array(v, LineString, positions_from_array)

    @field_validator("coordinates")
    @classmethod
    def validate_rings(cls, v: list[LineString]) -> list[LineString]:
        """
        Every ring must be closed and hold at least 4 positions.
        """
        for index, ring in enumerate(v):
            if not ring.is_linear_ring():
                raise ValueError(
                    f"Polygon ring {index} must be closed with at least "
                    f"{LINEAR_RING_MIN_POSITIONS} positions"
                )
        return v

    @field_serializer("coordinates")
    def encode_coordinates(self, coordinates: list[LineString]) -> list[list[list[float]]]:
        return rings_to_array([ring.coordinates for ring in coordinates])

    def positions(self) -> Iterator[Position]:
        for ring in self.coordinates:
            yield from ring.coordinates


# =============================================================================
# MULTI-PART GEOMETRIES
# =============================================================================


class MultiPoint(GeoJSONObject):
    """Collection of points."""

    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: list[Point] = Field(..., description="[[x, y], ...]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> list[Any]:
        return members_from_array(v, Point, position_from_array)

    @field_serializer("coordinates")
    def encode_coordinates(self, coordinates: list[Point]) -> list[list[float]]:
        return positions_to_array([point.coordinates for point in coordinates])

    def positions(self) -> Iterator[Position]:
        for point in self.coordinates:
            yield point.coordinates


class MultiLineString(GeoJSONObject):
    """Collection of line strings."""

    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: list[LineString] = Field(..., description="[[[x, y], ...], ...]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> list[Any]:
        return members_from_array(v, LineString, positions_from_array)

    @field_serializer("coordinates")
    def encode_coordinates(self, coordinates: list[LineString]) -> list[list[list[float]]]:
        return rings_to_array([line.coordinates for line in coordinates])

    def positions(self) -> Iterator[Position]:
        for line in self.coordinates:
            yield from line.coordinates


class MultiPolygon(GeoJSONObject):
    """Collection of polygons."""

    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: list[Polygon] = Field(..., description="[[[[x, y], ...], ...], ...]")

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, v: Any) -> list[Any]:
        return members_from_array(v, Polygon, rings_from_array)

    @field_serializer("coordinates")
    def encode_coordinates(
        self, coordinates: list[Polygon]
    ) -> list[list[list[list[float]]]]:
        return polygons_to_array(
            [[ring.coordinates for ring in polygon.coordinates] for polygon in coordinates]
        )

    def positions(self) -> Iterator[Position]:
        for polygon in self.coordinates:
            yield from polygon.positions()


Geometry = Annotated[
    Union[Point, LineString, Polygon, MultiPoint, MultiLineString, MultiPolygon],
    Field(discriminator="type"),
]

GEOMETRY_TYPES: dict[str, type[GeoJSONObject]] = {
    GeoJSONObjectType.POINT.value: Point,
    GeoJSONObjectType.LINE_STRING.value: LineString,
    GeoJSONObjectType.POLYGON.value: Polygon,
    GeoJSONObjectType.MULTI_POINT.value: MultiPoint,
    GeoJSONObjectType.MULTI_LINE_STRING.value: MultiLineString,
    GeoJSONObjectType.MULTI_POLYGON.value: MultiPolygon,
}
