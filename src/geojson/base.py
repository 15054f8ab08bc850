"""
GeoJSONObject — common members of every GeoJSON object

'crs' and 'bbox' are optional on geometries, features and collections.
Subclasses provide positions(); the bounding Envelope is derived from it.
"""

from abc import ABC, abstractmethod
from typing import Final, Iterator, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.geometry.envelope import Envelope
from src.core.geometry.position import Position
from src.core.math.numerical_safeguards import is_valid_float
from src.geojson.crs import CRS

# bbox lengths: 2D [min_x, min_y, max_x, max_y] or
# 3D [min_x, min_y, min_z, max_x, max_y, max_z]
BBOX_LENGTHS: Final[tuple[int, ...]] = (4, 6)


class GeoJSONObject(BaseModel, ABC):
    """
    Abstract base model for geometries, Feature and FeatureCollection.

    Concrete types implement positions(); the base itself cannot be instantiated.

    Immutable (frozen=True): with_bbox() and model_copy() return new objects.
    """

    type: str = Field(..., description="GeoJSON object type")
    crs: Optional[CRS] = Field(None, description="Coordinate reference system (None = default)")
    bbox: Optional[list[float]] = Field(
        None, description="Bounding box, 2D or 3D, mins first"
    )

    model_config = {"frozen": True}

    @field_validator("bbox")
    @classmethod
    def validate_bbox(cls, v: Optional[list[float]]) -> Optional[list[float]]:
        """
        2D or 3D bbox: 4 or 6 finite values, all minimums first, with
        min <= max on every axis.
        """
        if v is None:
            return v
        if len(v) not in BBOX_LENGTHS:
            raise ValueError(f"bbox must have 4 or 6 values, got {len(v)}")
        if not all(is_valid_float(value) for value in v):
            raise ValueError(f"bbox values must be finite, got {v}")
        dimensions = len(v) // 2
        if any(v[i] > v[i + dimensions] for i in range(dimensions)):
            raise ValueError(f"bbox minimums must not exceed maximums, got {v}")
        return v

    @abstractmethod
    def positions(self) -> Iterator[Position]:
        """All positions of the object, in document order."""

    def envelope(self) -> Envelope:
        """
        Bounding box of all positions; null if the object has none.
        """
        envelope = Envelope()
        for position in self.positions():
            envelope.expand_to_include(position)
        return envelope

    def with_bbox(self) -> "GeoJSONObject":
        """
        Copy of this object with 'bbox' set from envelope() (None if null).
        """
        return self.model_copy(update={"bbox": self.envelope().to_bbox()})
