"""
Position — a single coordinate tuple

Immutable Pydantic model holding X (easting/longitude), Y (northing/latitude)
and an optional Z (altitude). Z is carried through the GeoJSON codecs but is
never used by the 2D box algebra.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, field_validator

from src.core.math.numerical_safeguards import is_valid_float


# =============================================================================
# POINT ABSTRACTION
# =============================================================================


@runtime_checkable
class PointLike(Protocol):
    """Anything exposing two float ordinates, X and Y."""

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...


# =============================================================================
# POSITION MODEL
# =============================================================================


class Position(BaseModel):
    """
    Coordinate of a geometry vertex.

    Immutable model (frozen=True); equality is exact on every ordinate.
    """

    x: float = Field(..., description="X ordinate (longitude / easting)")
    y: float = Field(..., description="Y ordinate (latitude / northing)")
    z: float | None = Field(None, description="Optional altitude")

    model_config = {"frozen": True}

    @field_validator("x", "y", "z")
    @classmethod
    def validate_finite(cls, v: float | None) -> float | None:
        """Ordinates must be finite"""
        if v is not None and not is_valid_float(v):
            raise ValueError(f"ordinate must be finite, got {v}")
        return v

    def __init__(self, x: float, y: float, z: float | None = None, **data) -> None:
        super().__init__(x=x, y=y, z=z, **data)

    @property
    def has_z(self) -> bool:
        return self.z is not None

    def to_tuple(self) -> tuple[float, ...]:
        """
        Ordinates as a tuple: (x, y) or (x, y, z).
        """
        if self.z is None:
            return (self.x, self.y)
        return (self.x, self.y, self.z)
