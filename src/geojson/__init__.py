"""
GeoJSON object model.

Geometries, Feature, FeatureCollection and CRS members as immutable Pydantic
models, the coordinate-array codecs behind them, and dict/text serialization.
"""

from src.geojson.base import GeoJSONObject
from src.geojson.converters import (
    GeoJSONParseError,
    position_from_array,
    position_to_array,
    positions_from_array,
    positions_to_array,
    rings_from_array,
    rings_to_array,
)
from src.geojson.crs import CRS, CRSType, LinkedCRS, NamedCRS
from src.geojson.feature import Feature, FeatureCollection
from src.geojson.geometry import (
    GeoJSONObjectType,
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from src.geojson.serialization import (
    GeoJSONConfig,
    dumps,
    from_geojson,
    loads,
    to_geojson,
)

__all__ = [
    # Base
    "GeoJSONObject",
    "GeoJSONObjectType",
    # Geometries
    "Geometry",
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    # Features
    "Feature",
    "FeatureCollection",
    # CRS
    "CRS",
    "CRSType",
    "NamedCRS",
    "LinkedCRS",
    # Codecs
    "GeoJSONParseError",
    "position_from_array",
    "position_to_array",
    "positions_from_array",
    "positions_to_array",
    "rings_from_array",
    "rings_to_array",
    # Serialization
    "GeoJSONConfig",
    "to_geojson",
    "from_geojson",
    "dumps",
    "loads",
]
