"""Geometric value types used to describe outlines and arcs.

This module defines the fundamental geometric types:
- Vector: A 2D displacement
- Point: A 2D position in font design units
- Line: An infinite line a*x + b*y = c
- Circle: A center and a radius
- Arc: A circular arc given by two endpoints and a curvature value d
- Bezier: A cubic Bezier curve
- ArcEndpoint: One entry of an arc list

Arc convention
--------------
An arc from p0 to p1 carries ``d = tan(sweep / 4)``. With
``ortho(v) = (-v.dy, v.dx)``:

- the point halfway along the arc is ``mid(p0, p1) + ortho(p1 - p0) * d / 2``
- the circle center is ``mid(p0, p1) - ortho(p1 - p0) * (1 - d*d) / (4*d)``
- ``d < 0`` sweeps counter-clockwise (increasing angle) and ``d > 0``
  sweeps clockwise (decreasing angle)

``|d| < ARC_EPSILON`` is a straight segment and has no circle.
"""

import math
from dataclasses import dataclass
from typing import overload

# Arcs flatter than this are treated as straight lines.
ARC_EPSILON = 1e-6

_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class Vector:
    """A 2D displacement.

    Attributes:
        dx: Horizontal component
        dy: Vertical component
    """

    dx: float
    dy: float

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.dx * scalar, self.dy * scalar)

    def __rmul__(self, scalar: float) -> "Vector":
        return Vector(self.dx * scalar, self.dy * scalar)

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.dx / scalar, self.dy / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.dx, -self.dy)

    def __bool__(self) -> bool:
        return self.dx != 0.0 or self.dy != 0.0

    def dot(self, other: "Vector") -> float:
        """Dot product with another vector."""
        return self.dx * other.dx + self.dy * other.dy

    def len2(self) -> float:
        """Squared length."""
        return self.dx * self.dx + self.dy * self.dy

    def len(self) -> float:
        """Euclidean length."""
        return math.hypot(self.dx, self.dy)

    def angle(self) -> float:
        """Polar angle in radians, in the range (-pi, pi]."""
        return math.atan2(self.dy, self.dx)

    def ortho(self) -> "Vector":
        """Vector rotated 90 degrees counter-clockwise."""
        return Vector(-self.dy, self.dx)

    def normalized(self) -> "Vector":
        """Unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length
        """
        length = self.len()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector(self.dx / length, self.dy / length)


@dataclass(frozen=True, slots=True)
class Point:
    """A position in 2D space.

    Immutable and hashable. Subtracting two points yields a Vector;
    adding or subtracting a Vector yields a Point.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, v: Vector) -> "Point":
        return Point(self.x + v.dx, self.y + v.dy)

    @overload
    def __sub__(self, other: "Point") -> Vector: ...

    @overload
    def __sub__(self, other: Vector) -> "Point": ...

    def __sub__(self, other: "Point | Vector") -> "Vector | Point":
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.dx, self.y - other.dy)

    def midpoint(self, other: "Point") -> "Point":
        """Point halfway between this point and another."""
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def distance_to_point(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, pt: tuple[float, float]) -> "Point":
        """Create a point from an (x, y) pair as produced by fontTools pens."""
        return cls(float(pt[0]), float(pt[1]))


@dataclass(frozen=True, slots=True)
class Line:
    """An infinite line satisfying ``a * x + b * y = c``."""

    a: float
    b: float
    c: float

    @classmethod
    def through(cls, p0: Point, p1: Point) -> "Line":
        """Line passing through two distinct points."""
        n = (p1 - p0).ortho()
        return cls(n.dx, n.dy, n.dx * p0.x + n.dy * p0.y)

    @property
    def normal(self) -> Vector:
        """Normal vector (a, b)."""
        return Vector(self.a, self.b)

    def signed_distance_to_point(self, p: Point) -> float:
        """Signed distance from a point to the line.

        Raises:
            ValueError: If the line is degenerate (a == b == 0)
        """
        norm = math.hypot(self.a, self.b)
        if norm == 0.0:
            raise ValueError("Degenerate line has no distance")
        return (self.a * p.x + self.b * p.y - self.c) / norm

    def clip(self, extent: float) -> tuple[Point, Point]:
        """Two points on the line bounding a visible segment.

        Vertical and horizontal lines are handled separately; any other
        line is clipped to x in [-extent, extent].

        Args:
            extent: Half-length of the region to clip against

        Returns:
            Tuple of two points on the line
        """
        if self.a == 0.0:
            y = self.c / self.b
            return Point(-extent, y), Point(extent, y)
        if self.b == 0.0:
            x = self.c / self.a
            return Point(x, -extent), Point(x, extent)
        return (
            Point(-extent, (self.c + self.a * extent) / self.b),
            Point(extent, (self.c - self.a * extent) / self.b),
        )


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle given by its center and radius."""

    center: Point
    radius: float


@dataclass(frozen=True, slots=True)
class Arc:
    """A circular arc from p0 to p1 with curvature d.

    See the module docstring for the meaning and sign of d.

    Attributes:
        p0: Start point
        p1: End point
        d: Curvature value, tan(sweep / 4)
    """

    p0: Point
    p1: Point
    d: float

    @classmethod
    def through(cls, p0: Point, p1: Point, pm: Point) -> "Arc":
        """Arc from p0 to p1 passing through pm.

        Uses the inscribed angle at pm: half of the angle subtended by the
        chord at pm determines tan(sweep / 4) directly.

        Args:
            p0: Start point
            p1: End point
            pm: A point on the arc between p0 and p1

        Returns:
            Arc through the three points, or a straight arc if they are
            collinear or coincide
        """
        if pm == p0 or pm == p1:
            return cls(p0, p1, 0.0)
        half = ((p1 - pm).angle() - (p0 - pm).angle()) / 2
        sin_half = math.sin(half)
        if abs(sin_half) < 1e-12:
            return cls(p0, p1, 0.0)
        d = math.cos(half) / sin_half
        if abs(d) < ARC_EPSILON:
            d = 0.0
        return cls(p0, p1, d)

    def is_line(self) -> bool:
        """Whether this arc degenerates to a straight segment."""
        return abs(self.d) < ARC_EPSILON

    @property
    def counterclockwise(self) -> bool:
        """Whether the arc sweeps with increasing angle."""
        return self.d < 0

    def sweep(self) -> float:
        """Signed sweep angle in radians (positive is counter-clockwise)."""
        return -4.0 * math.atan(self.d)

    def circle(self) -> Circle:
        """Circle the arc lies on.

        Raises:
            ValueError: If the arc is a straight line
        """
        if self.is_line():
            raise ValueError("A straight arc has no circle")
        d = self.d
        dp = self.p1 - self.p0
        center = self.p0.midpoint(self.p1) - dp.ortho() * ((1 - d * d) / (4 * d))
        radius = dp.len() * (1 + d * d) / (4 * abs(d))
        return Circle(center, radius)

    def middle(self) -> Point:
        """Point halfway along the arc."""
        return self.p0.midpoint(self.p1) + (self.p1 - self.p0).ortho() * (self.d / 2)

    def angles(self) -> tuple[float, float]:
        """Polar angles of p0 and p1 around the circle center.

        Raises:
            ValueError: If the arc is a straight line
        """
        center = self.circle().center
        return (self.p0 - center).angle(), (self.p1 - center).angle()

    def contains_angle(self, theta: float) -> bool:
        """Whether a polar angle around the center falls within the sweep."""
        a0, _ = self.angles()
        sweep = abs(self.sweep())
        if self.counterclockwise:
            offset = (theta - a0) % _TWO_PI
        else:
            offset = (a0 - theta) % _TWO_PI
        return offset <= sweep + 1e-12

    def split(self) -> tuple["Arc", "Arc"]:
        """Split the arc at its middle into two arcs of half the sweep."""
        m = self.middle()
        half_d = math.tan(math.atan(self.d) / 2)
        return Arc(self.p0, m, half_d), Arc(m, self.p1, half_d)

    def extents(self) -> tuple[float, float, float, float]:
        """Axis-aligned bounding box of the arc.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        xs = [self.p0.x, self.p1.x]
        ys = [self.p0.y, self.p1.y]
        if not self.is_line():
            circle = self.circle()
            for k, (ux, uy) in enumerate(((1, 0), (0, 1), (-1, 0), (0, -1))):
                if self.contains_angle(k * math.pi / 2):
                    xs.append(circle.center.x + circle.radius * ux)
                    ys.append(circle.center.y + circle.radius * uy)
        return (min(xs), min(ys), max(xs), max(ys))

    def distance_to_point(self, p: Point) -> float:
        """Shortest distance from a point to the arc."""
        if self.is_line():
            return _distance_to_segment(p, self.p0, self.p1)
        circle = self.circle()
        v = p - circle.center
        if not v:
            return circle.radius
        if self.contains_angle(v.angle()):
            return abs(v.len() - circle.radius)
        return min(p.distance_to_point(self.p0), p.distance_to_point(self.p1))


@dataclass(frozen=True, slots=True)
class Bezier:
    """A cubic Bezier curve."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point

    @classmethod
    def from_quadratic(cls, p0: Point, p1: Point, p2: Point) -> "Bezier":
        """Exact cubic equivalent of a quadratic curve (degree elevation).

        Args:
            p0: Start point
            p1: Quadratic control point
            p2: End point

        Returns:
            Cubic with controls p0 + 2/3 (p1 - p0) and p2 + 2/3 (p1 - p2)
        """
        return cls(
            p0,
            p0 + (p1 - p0) * (2.0 / 3.0),
            p2 + (p1 - p2) * (2.0 / 3.0),
            p2,
        )

    def point(self, t: float) -> Point:
        """Evaluate the curve at parameter t in [0, 1]."""
        s = 1.0 - t
        b0 = s * s * s
        b1 = 3 * s * s * t
        b2 = 3 * s * t * t
        b3 = t * t * t
        return Point(
            b0 * self.p0.x + b1 * self.p1.x + b2 * self.p2.x + b3 * self.p3.x,
            b0 * self.p0.y + b1 * self.p1.y + b2 * self.p2.y + b3 * self.p3.y,
        )

    def split(self, t: float = 0.5) -> tuple["Bezier", "Bezier"]:
        """Split the curve at t using De Casteljau's algorithm."""
        q1 = _lerp(self.p0, self.p1, t)
        q2 = _lerp(self.p1, self.p2, t)
        q3 = _lerp(self.p2, self.p3, t)
        r1 = _lerp(q1, q2, t)
        r2 = _lerp(q2, q3, t)
        mid = _lerp(r1, r2, t)
        return Bezier(self.p0, q1, r1, mid), Bezier(mid, r2, q3, self.p3)


@dataclass(frozen=True, slots=True)
class ArcEndpoint:
    """One entry of an arc list.

    An endpoint with ``d == math.inf`` starts a new contour at ``point``.
    Any other endpoint ends an arc that starts at the previous endpoint.

    Attributes:
        point: Endpoint position
        d: Curvature of the arc ending here, or inf for a move
    """

    point: Point
    d: float

    @property
    def is_move(self) -> bool:
        """Whether this endpoint starts a new contour."""
        return math.isinf(self.d)


def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def _distance_to_segment(p: Point, start: Point, end: Point) -> float:
    dx = end.x - start.x
    dy = end.y - start.y

    length_sq = dx * dx + dy * dy
    if length_sq < 1e-20:
        return p.distance_to_point(start)

    t = ((p.x - start.x) * dx + (p.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p.x - (start.x + t * dx), p.y - (start.y + t * dy))
