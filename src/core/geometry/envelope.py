"""
Envelope — axis-aligned bounding box on the 2D plane

Defines a rectangular region by its minimum and maximum X and Y values.
Typically the bounding box of a geometry: the extreme ordinates of its
positions.

Null (empty) envelope:
- Encoded as inverted bounds, max_x < min_x (canonically 0, -1, 0, -1)
- Never intersects, contains or covers anything
- Two null envelopes are equal; null ranks below every non-null envelope
- Absorbed by union (expand_to_include / expanded_by)

Text form:
    Env[<min_x> : <max_x>, <min_y> : <max_y>]   or   Env[Null]

Envelope is a mutable value type: expand_*, translate and the init_* family
change the instance in place and are not safe for concurrent use on a shared
instance. All other operations only read.
"""

import math
import struct
from typing import Final, Optional, Sequence, Union

from src.core.geometry.position import PointLike, Position
from src.core.log import get_logger
from src.core.math.numerical_safeguards import format_round_trip, parse_finite_decimal

logger = get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TEXT_PREFIX: Final[str] = "Env["
TEXT_SUFFIX: Final[str] = "]"
TEXT_NULL: Final[str] = "Null"

# Field order of the four ordinates in the text form
ORDINATE_LABELS: Final[tuple[str, ...]] = ("x-min", "x-max", "y-min", "y-max")

HASH_SEED: Final[int] = 17
HASH_MULTIPLIER: Final[int] = 37


# =============================================================================
# EXCEPTIONS
# =============================================================================


class EnvelopeFormatError(ValueError):
    """
    Text is not a valid Envelope representation.

    Attributes:
        text: The offending input
        ordinate: 'x-min' | 'x-max' | 'y-min' | 'y-max' when a numeric field failed
        reason: Why the field (or wrapper) was rejected
    """

    def __init__(self, text: object, reason: str, ordinate: Optional[str] = None):
        self.text = text
        self.reason = reason
        self.ordinate = ordinate
        if ordinate is None:
            message = f"Not a valid envelope string {text!r}: {reason}"
        else:
            message = f"Could not parse {ordinate} ordinate of {text!r}: {reason}"
        super().__init__(message)


# =============================================================================
# HASH HELPERS
# =============================================================================


def _to_int32(value: int) -> int:
    """Wrap an arbitrary Python int to a signed 32-bit int."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def _double_hash(value: float) -> int:
    """
    32-bit hash of a double: fold of the high and low words of its bit pattern.

    -0.0 hashes like 0.0 because the two compare equal.
    """
    if value == 0.0:
        value = 0.0
    (bits,) = struct.unpack("<q", struct.pack("<d", value))
    return _to_int32(bits ^ (bits >> 32))


# =============================================================================
# ENVELOPE
# =============================================================================


PointOrEnvelope = Union["Envelope", PointLike, float]


class Envelope:
    """
    Rectangular region of the 2D coordinate plane.

    Construction:
        Envelope()                  null envelope
        Envelope(x1, x2, y1, y2)    bounds, sorted per axis

    See from_points, from_point, copy_of and parse for the other ways in.
    """

    __slots__ = ("_min_x", "_max_x", "_min_y", "_max_y")

    def __init__(
        self,
        x1: Optional[float] = None,
        x2: Optional[float] = None,
        y1: Optional[float] = None,
        y2: Optional[float] = None,
    ):
        if x1 is None and x2 is None and y1 is None and y2 is None:
            self.set_to_null()
        elif x1 is None or x2 is None or y1 is None or y2 is None:
            raise TypeError("Envelope takes either no bounds or all four (x1, x2, y1, y2)")
        else:
            self.init_range(x1, x2, y1, y2)

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Envelope":
        return cls()

    @classmethod
    def from_range(cls, x1: float, x2: float, y1: float, y2: float) -> "Envelope":
        """Envelope spanning [x1, x2] x [y1, y2]; argument order does not matter."""
        return cls(x1, x2, y1, y2)

    @classmethod
    def from_points(cls, p1: PointLike, p2: PointLike) -> "Envelope":
        """Envelope spanned by two corner points."""
        return cls(p1.x, p2.x, p1.y, p2.y)

    @classmethod
    def from_point(cls, p: PointLike) -> "Envelope":
        """Zero-area (but not null) envelope at a single point."""
        return cls(p.x, p.x, p.y, p.y)

    @classmethod
    def copy_of(cls, other: "Envelope") -> "Envelope":
        envelope = cls()
        envelope.init_from(other)
        return envelope

    @classmethod
    def from_bbox(cls, bbox: Optional[Sequence[float]]) -> "Envelope":
        """
        Envelope from a GeoJSON bbox member [min_x, min_y, max_x, max_y].

        A 3D bbox [min_x, min_y, min_z, max_x, max_y, max_z] is accepted and
        its Z range dropped. None gives the null envelope.

        Raises:
            ValueError: If bbox does not have 4 or 6 values
        """
        if bbox is None:
            return cls()
        if len(bbox) == 6:
            min_x, min_y, _, max_x, max_y, _ = bbox
        elif len(bbox) == 4:
            min_x, min_y, max_x, max_y = bbox
        else:
            raise ValueError(f"bbox must have 4 or 6 values, got {len(bbox)}")
        return cls(min_x, max_x, min_y, max_y)

    # -------------------------------------------------------------------------
    # Re-initialization (in place)
    # -------------------------------------------------------------------------

    def init(self) -> None:
        """Reset to the null envelope."""
        self.set_to_null()

    def init_range(self, x1: float, x2: float, y1: float, y2: float) -> None:
        x1, x2, y1, y2 = float(x1), float(x2), float(y1), float(y2)
        if x1 <= x2:
            self._min_x, self._max_x = x1, x2
        else:
            self._min_x, self._max_x = x2, x1

        if y1 <= y2:
            self._min_y, self._max_y = y1, y2
        else:
            self._min_y, self._max_y = y2, y1

    def init_points(self, p1: PointLike, p2: PointLike) -> None:
        self.init_range(p1.x, p2.x, p1.y, p2.y)

    def init_point(self, p: PointLike) -> None:
        self.init_range(p.x, p.x, p.y, p.y)

    def init_from(self, other: "Envelope") -> None:
        """Copy the extents (or null-ness) of another envelope."""
        self._min_x = other._min_x
        self._max_x = other._max_x
        self._min_y = other._min_y
        self._max_y = other._max_y

    def set_to_null(self) -> None:
        self._min_x = 0.0
        self._max_x = -1.0
        self._min_y = 0.0
        self._max_y = -1.0

    # -------------------------------------------------------------------------
    # Extents and derived values
    # -------------------------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self._max_x < self._min_x

    @property
    def min_x(self) -> float:
        return self._min_x

    @property
    def max_x(self) -> float:
        return self._max_x

    @property
    def min_y(self) -> float:
        return self._min_y

    @property
    def max_y(self) -> float:
        return self._max_y

    @property
    def width(self) -> float:
        if self.is_null:
            return 0.0
        return self._max_x - self._min_x

    @property
    def height(self) -> float:
        if self.is_null:
            return 0.0
        return self._max_y - self._min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def min_extent(self) -> float:
        """Length of the shorter side (0 for null)."""
        if self.is_null:
            return 0.0
        w = self.width
        h = self.height
        return w if w < h else h

    @property
    def max_extent(self) -> float:
        """Length of the longer side (0 for null)."""
        if self.is_null:
            return 0.0
        w = self.width
        h = self.height
        return w if w > h else h

    @property
    def centre(self) -> Optional[Position]:
        """Midpoint of both axes, None for the null envelope."""
        if self.is_null:
            return None
        return Position((self._min_x + self._max_x) / 2.0, (self._min_y + self._max_y) / 2.0)

    def to_bbox(self) -> Optional[list[float]]:
        """GeoJSON bbox member [min_x, min_y, max_x, max_y], None for null."""
        if self.is_null:
            return None
        return [self._min_x, self._min_y, self._max_x, self._max_y]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def expand_by(self, delta_x: float, delta_y: Optional[float] = None) -> None:
        """
        Grow (or, with negative deltas, shrink) the envelope on every side.

        A single delta applies to both axes. If shrinking inverts either axis
        the envelope becomes null. No-op on a null envelope.

        Args:
            delta_x: Distance added on the left and right
            delta_y: Distance added on the bottom and top (default: delta_x)
        """
        if delta_y is None:
            delta_y = delta_x

        if self.is_null:
            return

        self._min_x -= delta_x
        self._max_x += delta_x
        self._min_y -= delta_y
        self._max_y += delta_y

        # envelope disappeared
        if self._min_x > self._max_x or self._min_y > self._max_y:
            self.set_to_null()

    def expand_to_include(self, other: PointOrEnvelope, y: Optional[float] = None) -> None:
        """
        Enlarge the envelope so it includes a point or another envelope.

        Accepts expand_to_include(x, y), expand_to_include(point) or
        expand_to_include(envelope). Never shrinks.

        - point on a null envelope: becomes the degenerate box at the point
        - null other envelope: no-op
        - other envelope on a null self: becomes a copy of other
        """
        if isinstance(other, Envelope):
            self._expand_to_include_envelope(other)
        elif y is not None:
            self._expand_to_include_xy(other, y)
        else:
            self._expand_to_include_xy(other.x, other.y)

    def _expand_to_include_xy(self, x: float, y: float) -> None:
        x, y = float(x), float(y)
        if self.is_null:
            self._min_x = x
            self._max_x = x
            self._min_y = y
            self._max_y = y
            return

        if x < self._min_x:
            self._min_x = x
        if x > self._max_x:
            self._max_x = x
        if y < self._min_y:
            self._min_y = y
        if y > self._max_y:
            self._max_y = y

    def _expand_to_include_envelope(self, other: "Envelope") -> None:
        if other.is_null:
            return

        if self.is_null:
            self.init_from(other)
            return

        if other._min_x < self._min_x:
            self._min_x = other._min_x
        if other._max_x > self._max_x:
            self._max_x = other._max_x
        if other._min_y < self._min_y:
            self._min_y = other._min_y
        if other._max_y > self._max_y:
            self._max_y = other._max_y

    def expanded_by(self, other: "Envelope") -> "Envelope":
        """
        Union of this envelope and other, without mutating either.

        When one side is null the other side is returned as is (same object,
        not a copy); callers must copy before mutating the result.
        """
        if other.is_null:
            return self
        if self.is_null:
            return other

        return Envelope(
            min(self._min_x, other._min_x),
            max(self._max_x, other._max_x),
            min(self._min_y, other._min_y),
            max(self._max_y, other._max_y),
        )

    def translate(self, trans_x: float, trans_y: float) -> None:
        """Shift the envelope by (trans_x, trans_y). No-op on a null envelope."""
        if self.is_null:
            return
        self.init_range(
            self._min_x + trans_x,
            self._max_x + trans_x,
            self._min_y + trans_y,
            self._max_y + trans_y,
        )

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    @staticmethod
    def intersects_point_range(p1: PointLike, p2: PointLike, q: PointLike) -> bool:
        """
        Does point q lie in the closed box spanned by p1 and p2?
        """
        return (
            (q.x >= (p1.x if p1.x < p2.x else p2.x))
            and (q.x <= (p1.x if p1.x > p2.x else p2.x))
            and (q.y >= (p1.y if p1.y < p2.y else p2.y))
            and (q.y <= (p1.y if p1.y > p2.y else p2.y))
        )

    @staticmethod
    def intersects_ranges(p1: PointLike, p2: PointLike, q1: PointLike, q2: PointLike) -> bool:
        """
        Does the box spanned by q1, q2 overlap the box spanned by p1, p2?

        Same result as Envelope.from_points(p1, p2).intersects(
        Envelope.from_points(q1, q2)) without building either envelope.
        """
        min_p = min(p1.x, p2.x)
        max_q = max(q1.x, q2.x)
        if min_p > max_q:
            return False

        min_q = min(q1.x, q2.x)
        max_p = max(p1.x, p2.x)
        if max_p < min_q:
            return False

        min_p = min(p1.y, p2.y)
        max_q = max(q1.y, q2.y)
        if min_p > max_q:
            return False

        min_q = min(q1.y, q2.y)
        max_p = max(p1.y, p2.y)
        if max_p < min_q:
            return False

        return True

    def intersects(self, other: PointOrEnvelope, y: Optional[float] = None) -> bool:
        """
        Closed-interval overlap test with an envelope, a point or (x, y).

        False whenever either envelope is null.
        """
        if isinstance(other, Envelope):
            if self.is_null or other.is_null:
                return False
            return not (
                other._min_x > self._max_x
                or other._max_x < self._min_x
                or other._min_y > self._max_y
                or other._max_y < self._min_y
            )

        if y is None:
            return self._intersects_xy(other.x, other.y)
        return self._intersects_xy(other, y)

    def _intersects_xy(self, x: float, y: float) -> bool:
        # inverted null bounds make this false without an explicit check
        return not (x > self._max_x or x < self._min_x or y > self._max_y or y < self._min_y)

    def covers(self, other: PointOrEnvelope, y: Optional[float] = None) -> bool:
        """
        Boundary-inclusive containment of an envelope, a point or (x, y).

        False whenever either envelope is null.
        """
        if isinstance(other, Envelope):
            if self.is_null or other.is_null:
                return False
            return (
                other._min_x >= self._min_x
                and other._max_x <= self._max_x
                and other._min_y >= self._min_y
                and other._max_y <= self._max_y
            )

        if y is None:
            return self._covers_xy(other.x, other.y)
        return self._covers_xy(other, y)

    def _covers_xy(self, x: float, y: float) -> bool:
        if self.is_null:
            return False
        return self._min_x <= x <= self._max_x and self._min_y <= y <= self._max_y

    def contains(self, other: PointOrEnvelope, y: Optional[float] = None) -> bool:
        """
        Same as covers(): the boundary counts as inside.
        """
        return self.covers(other, y)

    def intersection(self, other: "Envelope") -> "Envelope":
        """
        Overlap of two envelopes; a new null envelope if they do not intersect.
        """
        if self.is_null or other.is_null or not self.intersects(other):
            return Envelope()

        return Envelope(
            max(self._min_x, other._min_x),
            min(self._max_x, other._max_x),
            max(self._min_y, other._min_y),
            min(self._max_y, other._max_y),
        )

    def distance(self, other: "Envelope") -> float:
        """
        Shortest Euclidean distance between two envelopes (0 if they intersect).

        When the boxes overlap on one axis the closest approach is edge to
        edge and the gap on the other axis is returned directly; otherwise it
        is corner to corner.
        """
        if self.intersects(other):
            return 0.0

        dx = 0.0
        if self._max_x < other._min_x:
            dx = other._min_x - self._max_x
        elif self._min_x > other._max_x:
            dx = self._min_x - other._max_x

        dy = 0.0
        if self._max_y < other._min_y:
            dy = other._min_y - self._max_y
        elif self._min_y > other._max_y:
            dy = self._min_y - other._max_y

        if dx == 0.0:
            return dy
        if dy == 0.0:
            return dx
        return math.sqrt(dx * dx + dy * dy)

    # -------------------------------------------------------------------------
    # Equality, ordering, hashing
    # -------------------------------------------------------------------------

    def equals(self, other: "Envelope") -> bool:
        """
        Exact equality of the four extents; all null envelopes are equal.

        No tolerance is applied.
        """
        if self.is_null:
            return other.is_null
        return (
            self._max_x == other._max_x
            and self._max_y == other._max_y
            and self._min_x == other._min_x
            and self._min_y == other._min_y
        )

    def compare_to(self, other: "Envelope") -> int:
        """
        Order by area: -1, 0 or 1.

        Null ranks below any non-null envelope and equal to another null.
        Different envelopes with the same area compare as 0 although they are
        not equal().
        """
        if not isinstance(other, Envelope):
            raise TypeError(f"Cannot compare Envelope with {type(other).__name__}")

        if self.is_null and other.is_null:
            return 0
        if not self.is_null and other.is_null:
            return 1
        if self.is_null and not other.is_null:
            return -1

        area = self.area
        other_area = other.area
        if area > other_area:
            return 1
        if area < other_area:
            return -1
        return 0

    def hash_code(self) -> int:
        """
        Signed 32-bit hash over min_x, max_x, min_y, max_y (seed 17, multiplier 37).
        """
        result = HASH_SEED
        for value in (self._min_x, self._max_x, self._min_y, self._max_y):
            result = _to_int32(HASH_MULTIPLIER * result + _double_hash(value))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return not self.equals(other)

    def __hash__(self) -> int:
        return self.hash_code()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.compare_to(other) >= 0

    # -------------------------------------------------------------------------
    # Copying
    # -------------------------------------------------------------------------

    def copy(self) -> "Envelope":
        """Independent envelope with the same extents (a fresh null if null)."""
        if self.is_null:
            return Envelope()
        return Envelope(self._min_x, self._max_x, self._min_y, self._max_y)

    clone = copy

    def __copy__(self) -> "Envelope":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Envelope":
        return self.copy()

    # -------------------------------------------------------------------------
    # Text form
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """
        Canonical text: 'Env[min_x : max_x, min_y : max_y]' or 'Env[Null]'.

        Numbers use the shortest decimal that parses back to the same float.
        """
        if self.is_null:
            return f"{TEXT_PREFIX}{TEXT_NULL}{TEXT_SUFFIX}"

        return (
            f"{TEXT_PREFIX}"
            f"{format_round_trip(self._min_x)} : {format_round_trip(self._max_x)}, "
            f"{format_round_trip(self._min_y)} : {format_round_trip(self._max_y)}"
            f"{TEXT_SUFFIX}"
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self.is_null:
            return "Envelope()"
        return f"Envelope({self._min_x!r}, {self._max_x!r}, {self._min_y!r}, {self._max_y!r})"

    @classmethod
    def parse(cls, text: str) -> "Envelope":
        """
        Inverse of to_string().

        Args:
            text: 'Env[min_x : max_x, min_y : max_y]' or 'Env[Null]'

        Returns:
            New Envelope (null for 'Env[Null]')

        Raises:
            EnvelopeFormatError: On a missing wrapper, a malformed range
                structure, or a field that is not a finite decimal
        """
        if not isinstance(text, str) or not text:
            raise EnvelopeFormatError(text, "input is empty")

        if not (text.startswith(TEXT_PREFIX) and text.endswith(TEXT_SUFFIX)):
            raise EnvelopeFormatError(text, f"expected {TEXT_PREFIX}...{TEXT_SUFFIX}")

        body = text[len(TEXT_PREFIX) : -len(TEXT_SUFFIX)]
        if body == TEXT_NULL:
            return cls()

        ranges = body.split(",")
        if len(ranges) != 2:
            raise EnvelopeFormatError(text, "does not provide two ranges")

        values: list[float] = []
        for axis_range in ranges:
            bounds = axis_range.split(":")
            if len(bounds) != 2:
                raise EnvelopeFormatError(text, "does not provide just min and max values")

            for bound in bounds:
                ordinate = ORDINATE_LABELS[len(values)]
                try:
                    values.append(parse_finite_decimal(bound))
                except ValueError as e:
                    logger.debug("Envelope parse failed on %s: %s", ordinate, e)
                    raise EnvelopeFormatError(text, str(e), ordinate=ordinate) from e

        return cls(values[0], values[1], values[2], values[3])
