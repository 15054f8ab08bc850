"""
Serialization — GeoJSON documents to and from the object model

to_geojson / from_geojson work on decoded dicts, dumps / loads on JSON text.
The concrete model is picked from the 'type' member.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from src.core.contracts.validators import validate_geojson
from src.core.log import get_logger
from src.geojson.base import GeoJSONObject
from src.geojson.converters import GeoJSONParseError
from src.geojson.feature import Feature, FeatureCollection
from src.geojson.geometry import GEOMETRY_TYPES, GeoJSONObjectType

logger = get_logger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class GeoJSONConfig:
    """Serialization options.

    - include_bbox: write a 'bbox' member computed from the object's envelope
    - validate_schema: check documents against the JSON Schema contract
      (after encoding, before decoding)
    - indent: passed to json.dumps
    """
    include_bbox: bool = False
    validate_schema: bool = False
    indent: Optional[int] = None


DEFAULT_CONFIG = GeoJSONConfig()

OBJECT_TYPES: dict[str, type[GeoJSONObject]] = {
    **GEOMETRY_TYPES,
    GeoJSONObjectType.FEATURE.value: Feature,
    GeoJSONObjectType.FEATURE_COLLECTION.value: FeatureCollection,
}


# =============================================================================
# DICT FORM
# =============================================================================


def to_geojson(obj: GeoJSONObject, config: Optional[GeoJSONConfig] = None) -> dict[str, Any]:
    """
    Encode a model as a GeoJSON dict.

    Unset optional members (crs, bbox, id) are omitted.

    Raises:
        jsonschema.ValidationError: If config.validate_schema and the result
            does not match the contract
    """
    config = config or DEFAULT_CONFIG

    if config.include_bbox:
        obj = obj.with_bbox()

    data = obj.model_dump(mode="json", exclude_none=True)

    if config.validate_schema:
        validate_geojson(data)

    return data


def from_geojson(data: Any, config: Optional[GeoJSONConfig] = None) -> GeoJSONObject:
    """
    Decode a GeoJSON dict into the matching model.

    Raises:
        GeoJSONParseError: If data is not an object or its 'type' is unknown
        jsonschema.ValidationError: If config.validate_schema and data does
            not match the contract
        pydantic.ValidationError: If the content is invalid for the model
    """
    config = config or DEFAULT_CONFIG

    if not isinstance(data, dict):
        raise GeoJSONParseError(f"GeoJSON object must be a JSON object, got {type(data).__name__}")

    object_type = data.get("type")
    model = OBJECT_TYPES.get(object_type) if isinstance(object_type, str) else None
    if model is None:
        raise GeoJSONParseError(f"Unknown GeoJSON type: {object_type!r}")

    if config.validate_schema:
        validate_geojson(data)

    logger.debug("Decoding GeoJSON %s", object_type)
    return model.model_validate(data)


# =============================================================================
# TEXT FORM
# =============================================================================


def dumps(obj: GeoJSONObject, config: Optional[GeoJSONConfig] = None) -> str:
    config = config or DEFAULT_CONFIG
    return json.dumps(to_geojson(obj, config), indent=config.indent)


def loads(text: str, config: Optional[GeoJSONConfig] = None) -> GeoJSONObject:
    """
    Decode GeoJSON text.

    Raises:
        GeoJSONParseError: If the text is not valid JSON or has an unknown type
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GeoJSONParseError(f"Invalid GeoJSON text: {e}") from e
    return from_geojson(data, config)
