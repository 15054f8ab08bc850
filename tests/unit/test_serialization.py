"""
Tests for GeoJSON serialization

Checks:
1. Model selection by the 'type' member
2. Default CRS is never written; named / linked CRS survive a round trip
3. GeoJSONConfig options (include_bbox, validate_schema, indent)
4. Errors for non-objects, unknown types and malformed JSON text
"""

import json
from dataclasses import FrozenInstanceError

import jsonschema
import pytest
from pydantic import ValidationError

from src.core.geometry import Position
from src.geojson import (
    Feature,
    FeatureCollection,
    GeoJSONConfig,
    GeoJSONParseError,
    LineString,
    LinkedCRS,
    MultiPolygon,
    NamedCRS,
    Point,
    Polygon,
    dumps,
    from_geojson,
    loads,
    to_geojson,
)

RING = [[0.0, 0.0], [4.0, 0.0], [4.0, 3.0], [0.0, 0.0]]


# =============================================================================
# CONFIG
# =============================================================================


class TestGeoJSONConfig:
    def test_defaults(self) -> None:
        config = GeoJSONConfig()
        assert config.include_bbox is False
        assert config.validate_schema is False
        assert config.indent is None

    def test_frozen(self) -> None:
        config = GeoJSONConfig()
        with pytest.raises(FrozenInstanceError):
            config.indent = 2  # type: ignore[misc]


# =============================================================================
# DICT FORM
# =============================================================================


class TestFromGeoJSON:
    @pytest.mark.parametrize(
        "data, model",
        [
            ({"type": "Point", "coordinates": [1.0, 2.0]}, Point),
            ({"type": "LineString", "coordinates": [[1.0, 2.0], [3.0, 4.0]]}, LineString),
            ({"type": "Polygon", "coordinates": [RING]}, Polygon),
            ({"type": "MultiPolygon", "coordinates": [[RING]]}, MultiPolygon),
            ({"type": "Feature", "geometry": None, "properties": None}, Feature),
            ({"type": "FeatureCollection", "features": []}, FeatureCollection),
        ],
    )
    def test_model_selected_by_type(self, data: dict, model: type) -> None:
        assert isinstance(from_geojson(data), model)

    @pytest.mark.parametrize("data", [[1.0, 2.0], "Point", None, 42])
    def test_non_object_rejected(self, data) -> None:
        with pytest.raises(GeoJSONParseError, match="must be a JSON object"):
            from_geojson(data)

    @pytest.mark.parametrize(
        "data",
        [{"type": "Circle"}, {"coordinates": [1.0, 2.0]}, {"type": 7}, {"type": "point"}],
    )
    def test_unknown_type_rejected(self, data: dict) -> None:
        with pytest.raises(GeoJSONParseError, match="Unknown GeoJSON type"):
            from_geojson(data)

    def test_3d_bbox_loads(self) -> None:
        data = {"type": "Point", "coordinates": [1, 2, 3], "bbox": [1, 2, 3, 1, 2, 3]}
        point = from_geojson(data, GeoJSONConfig(validate_schema=True))
        assert point.bbox == [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]
        assert to_geojson(point)["bbox"] == [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]

    def test_invalid_content_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            from_geojson({"type": "LineString", "coordinates": [[1.0, 2.0]]})

    def test_schema_validation_before_decoding(self) -> None:
        """A Feature without 'properties' decodes leniently, but fails the contract."""
        data = {"type": "Feature", "geometry": None}
        assert isinstance(from_geojson(data), Feature)

        with pytest.raises(jsonschema.ValidationError):
            from_geojson(data, GeoJSONConfig(validate_schema=True))


class TestToGeoJSON:
    def test_optional_members_omitted(self) -> None:
        assert to_geojson(Point(coordinates=[1.0, 2.0])) == {
            "type": "Point",
            "coordinates": [1.0, 2.0],
        }

    def test_include_bbox(self) -> None:
        line = LineString(coordinates=[[3.0, -1.0], [-2.0, 4.0]])
        data = to_geojson(line, GeoJSONConfig(include_bbox=True))
        assert data["bbox"] == [-2.0, -1.0, 3.0, 4.0]
        # the model itself is untouched
        assert line.bbox is None

    def test_include_bbox_for_empty_collection(self) -> None:
        data = to_geojson(FeatureCollection(), GeoJSONConfig(include_bbox=True))
        assert "bbox" not in data

    def test_include_bbox_collection(self) -> None:
        collection = FeatureCollection(
            features=[
                Feature(geometry=Point(coordinates=[5.0, 5.0])),
                Feature(geometry=Polygon(coordinates=[RING])),
            ]
        )
        data = to_geojson(collection, GeoJSONConfig(include_bbox=True))
        assert data["bbox"] == [0.0, 0.0, 5.0, 5.0]
        assert "bbox" not in data["features"][0]

    def test_validate_schema_passes_for_models(self) -> None:
        config = GeoJSONConfig(include_bbox=True, validate_schema=True)
        feature = Feature(geometry=Polygon(coordinates=[RING]), properties={"name": "tri"})
        data = to_geojson(feature, config)
        assert "bbox" not in data["geometry"]
        assert data["bbox"] == [0.0, 0.0, 4.0, 3.0]


# =============================================================================
# TEXT FORM / CRS
# =============================================================================


class TestCRSRoundTrip:
    def test_default_crs_not_written(self) -> None:
        assert '"crs"' not in dumps(FeatureCollection())
        assert '"crs"' not in dumps(Point(coordinates=[1.0, 2.0]))

    def test_default_crs_read_as_none(self) -> None:
        point = loads('{"coordinates":[90.65464646,53.2455662,200.4567],"type":"Point"}')
        assert point.crs is None
        assert point.coordinates == Position(90.65464646, 53.2455662, 200.4567)

    def test_named_crs(self) -> None:
        point = Point(coordinates=[1.0, 2.0], crs=NamedCRS.from_name("EPSG:4326"))
        data = json.loads(dumps(point))
        assert data["crs"] == {"type": "name", "properties": {"name": "EPSG:4326"}}

        parsed = loads(dumps(point))
        assert isinstance(parsed.crs, NamedCRS)
        assert parsed.crs.name == "EPSG:4326"
        assert parsed == point

    def test_linked_crs(self) -> None:
        crs = LinkedCRS.from_href("http://example.com/crs/42", "proj4")
        collection = FeatureCollection(crs=crs)
        data = json.loads(dumps(collection))
        assert data["crs"] == {
            "type": "link",
            "properties": {"href": "http://example.com/crs/42", "type": "proj4"},
        }

        parsed = loads(dumps(collection))
        assert isinstance(parsed.crs, LinkedCRS)
        assert parsed.crs.href == "http://example.com/crs/42"
        assert parsed.crs.link_type == "proj4"

    def test_linked_crs_without_type(self) -> None:
        crs = LinkedCRS.from_href("http://example.com/crs/42")
        assert crs.link_type is None
        assert crs.properties == {"href": "http://example.com/crs/42"}

    @pytest.mark.parametrize(
        "crs",
        [
            {"type": "name", "properties": {}},
            {"type": "name", "properties": {"name": ""}},
            {"type": "link", "properties": {"type": "proj4"}},
            {"type": "urn", "properties": {"name": "EPSG:4326"}},
        ],
    )
    def test_invalid_crs(self, crs: dict) -> None:
        with pytest.raises(ValidationError):
            from_geojson({"type": "Point", "coordinates": [1.0, 2.0], "crs": crs})


class TestTextForm:
    def test_feature_round_trip(self) -> None:
        feature = Feature(
            geometry=MultiPolygon(coordinates=[[RING], [RING]]),
            properties={"name": "pair", "tags": ["a", "b"]},
            id="f-1",
        )
        assert loads(dumps(feature)) == feature

    def test_indent(self) -> None:
        text = dumps(Point(coordinates=[1.0, 2.0]), GeoJSONConfig(indent=2))
        assert text.startswith("{\n  ")
        assert json.loads(text) == {"type": "Point", "coordinates": [1.0, 2.0]}

    def test_compact_by_default(self) -> None:
        assert "\n" not in dumps(Point(coordinates=[1.0, 2.0]))

    @pytest.mark.parametrize("text", ["", "{", "{'type': 'Point'}", "[1, 2"])
    def test_malformed_text(self, text: str) -> None:
        with pytest.raises(GeoJSONParseError, match="Invalid GeoJSON text"):
            loads(text)

    def test_valid_json_wrong_shape(self) -> None:
        with pytest.raises(GeoJSONParseError, match="must be a JSON object"):
            loads("[1.0, 2.0]")

    def test_validate_schema_on_load(self) -> None:
        text = '{"type": "Feature", "geometry": null}'
        with pytest.raises(jsonschema.ValidationError):
            loads(text, GeoJSONConfig(validate_schema=True))
