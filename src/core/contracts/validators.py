"""
JSON Schema Contract Validators

Validates GeoJSON documents (already decoded to dicts) against the formal
JSON Schema contract in contracts/schema/geojson.json.
Uses the jsonschema library; the GeoJSON models do the semantic checks
(closed rings, finite ordinates), the schema checks document structure.

Definitions:
- Geometry (Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon)
- Feature
- FeatureCollection
- the root schema accepts any of the three
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

from src.core.log import get_logger

logger = get_logger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for JSON Schema files.

    Schemas live in the 'schema' directory next to this module.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Cache of loaded schemas
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'geojson')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("Loaded schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema

    def definition_schema(self, schema_name: str, definition: str) -> Dict[str, Any]:
        """
        Schema that validates against a single $defs entry of a loaded schema.

        Raises:
            KeyError: If the definition does not exist
        """
        schema = self.load_schema(schema_name)
        definitions = schema["$defs"]
        if definition not in definitions:
            raise KeyError(f"Definition '{definition}' not found in {schema_name}.json")

        return {
            "$schema": schema["$schema"],
            "$defs": definitions,
            "$ref": f"#/$defs/{definition}",
        }


# Global loader instance
_SCHEMA_LOADER = SchemaLoader()

GEOJSON_SCHEMA = "geojson"


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for contract validators.

    Wraps a Draft 2020-12 validator for a whole schema or one of its
    definitions.
    """

    def __init__(self, schema_name: str, definition: Optional[str] = None):
        """
        Args:
            schema_name: Schema file to validate against
            definition: Optional $defs entry to validate against instead of the root
        """
        self.schema_name = schema_name
        self.definition = definition
        if definition is None:
            self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        else:
            self.schema = _SCHEMA_LOADER.definition_schema(schema_name, definition)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate data against the schema.

        Raises:
            jsonschema.ValidationError: If data does not match
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Iterate over every validation error.

        Yields:
            jsonschema.ValidationError for each problem found
        """
        return self.validator.iter_errors(data)


class GeoJSONValidator(ContractValidator):
    """Any GeoJSON object: geometry, Feature or FeatureCollection."""

    def __init__(self):
        super().__init__(GEOJSON_SCHEMA)


class GeometryValidator(ContractValidator):
    def __init__(self):
        super().__init__(GEOJSON_SCHEMA, "Geometry")


class FeatureValidator(ContractValidator):
    def __init__(self):
        super().__init__(GEOJSON_SCHEMA, "Feature")


class FeatureCollectionValidator(ContractValidator):
    def __init__(self):
        super().__init__(GEOJSON_SCHEMA, "FeatureCollection")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_geojson(data: Dict[str, Any]) -> None:
    """
    Validate any GeoJSON object.

    Raises:
        jsonschema.ValidationError: If data does not match the schema
    """
    GeoJSONValidator().validate(data)


def validate_geometry(data: Dict[str, Any]) -> None:
    """
    Validate a geometry object.

    Raises:
        jsonschema.ValidationError: If data does not match the schema
    """
    GeometryValidator().validate(data)


def validate_feature(data: Dict[str, Any]) -> None:
    """
    Validate a Feature object.

    Raises:
        jsonschema.ValidationError: If data does not match the schema
    """
    FeatureValidator().validate(data)


def validate_feature_collection(data: Dict[str, Any]) -> None:
    """
    Validate a FeatureCollection object.

    Raises:
        jsonschema.ValidationError: If data does not match the schema
    """
    FeatureCollectionValidator().validate(data)
