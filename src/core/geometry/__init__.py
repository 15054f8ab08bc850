"""
Planar geometry primitives.

Position (a coordinate), the PointLike protocol it satisfies, and Envelope,
the 2D bounding box algebra.
"""

from src.core.geometry.envelope import (
    ORDINATE_LABELS,
    Envelope,
    EnvelopeFormatError,
)
from src.core.geometry.position import PointLike, Position

__all__ = [
    # Position
    "PointLike",
    "Position",
    # Envelope
    "Envelope",
    "EnvelopeFormatError",
    "ORDINATE_LABELS",
]
