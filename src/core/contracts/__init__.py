"""
Contract Validation Module

JSON Schema validation of GeoJSON documents.
"""

from .validators import (
    ContractValidator,
    FeatureCollectionValidator,
    FeatureValidator,
    GeoJSONValidator,
    GeometryValidator,
    SchemaLoader,
    validate_feature,
    validate_feature_collection,
    validate_geojson,
    validate_geometry,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GeoJSONValidator",
    "GeometryValidator",
    "FeatureValidator",
    "FeatureCollectionValidator",
    # Functions
    "validate_geojson",
    "validate_geometry",
    "validate_feature",
    "validate_feature_collection",
]
