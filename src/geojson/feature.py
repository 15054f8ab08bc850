"""
Feature — GeoJSON Feature and FeatureCollection

A Feature is a geometry (possibly null) plus free-form properties and an
optional identifier. A FeatureCollection is an ordered list of features.
"""

from typing import Any, Iterator, Literal, Optional, Union

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from src.core.geometry.envelope import Envelope
from src.core.geometry.position import Position
from src.geojson.base import GeoJSONObject
from src.geojson.geometry import Geometry


# =============================================================================
# FEATURE
# =============================================================================


class Feature(GeoJSONObject):
    """
    Spatially bounded entity.

    'geometry' and 'properties' are always written, as null when unset;
    'id' is written only when present.
    """

    type: Literal["Feature"] = "Feature"
    geometry: Optional[Geometry] = Field(None, description="Geometry (null allowed)")
    properties: Optional[dict[str, Any]] = Field(None, description="Free-form properties")
    id: Optional[Union[str, int]] = Field(None, description="Feature identifier")

    @model_serializer(mode="wrap")
    def serialize_required_members(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data.setdefault("geometry", None)
        data.setdefault("properties", None)
        return data

    def positions(self) -> Iterator[Position]:
        if self.geometry is not None:
            yield from self.geometry.positions()


# =============================================================================
# FEATURE COLLECTION
# =============================================================================


class FeatureCollection(GeoJSONObject):
    """
    Ordered collection of features.
    """

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list, description="Member features")

    def positions(self) -> Iterator[Position]:
        for feature in self.features:
            yield from feature.positions()

    def envelope(self) -> Envelope:
        """
        Union of the feature envelopes (null if no feature has a position).
        """
        envelope = Envelope()
        for feature in self.features:
            envelope.expand_to_include(feature.envelope())
        return envelope
