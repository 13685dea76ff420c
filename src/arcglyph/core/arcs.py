"""Arc fitting for glyph outlines.

ArcAccumulator is the outline sink that feeds the encoder. It approximates
every primitive it receives with circular arcs and records them as a list of
arc endpoints. Straight segments become arcs with d == 0; cubic curves are
approximated by arcs through their end points and midpoint, subdivided until
the sampled error is within tolerance.
"""

import math

from arcglyph.core.outline import elevate_conic
from arcglyph.domain import ARC_EPSILON, Arc, ArcEndpoint, Bezier, Point

# Largest |d| the encoder can represent (a sweep of about 106 degrees).
MAX_D = 0.5

# Parameters at which a fitted arc is compared against the curve.
_ERROR_SAMPLES = tuple(k / 8 for k in range(1, 8))


class ArcAccumulator:
    """Outline sink that approximates contours with arcs.

    Example:
        acc = ArcAccumulator(tolerance=0.5)
        decompose_outline(commands, acc)
        acc.close_path()
        encode_arc_list(acc.endpoints, ...)

    Attributes:
        tolerance: Maximum allowed distance between curve and arcs
        max_depth: Maximum curve subdivision depth
        endpoints: Accumulated arc endpoints
        max_error: Largest measured approximation error
    """

    def __init__(self, tolerance: float, max_depth: int = 12) -> None:
        """Initialize the accumulator.

        Args:
            tolerance: Maximum approximation error in outline units
            max_depth: Maximum recursion depth when subdividing curves
        """
        self.tolerance = tolerance
        self.max_depth = max_depth
        self.endpoints: list[ArcEndpoint] = []
        self.max_error = 0.0
        self._start_point: Point | None = None
        self._current_point: Point | None = None

    @property
    def num_endpoints(self) -> int:
        """Number of endpoints accumulated so far."""
        return len(self.endpoints)

    @property
    def current_point(self) -> Point | None:
        return self._current_point

    def within_tolerance(self) -> bool:
        """Whether every fitted arc stayed within the tolerance."""
        return self.max_error <= self.tolerance

    def move_to(self, p: Point) -> None:
        self.close_path()
        if not self.endpoints or p != self._current_point:
            self._accumulate(p, math.inf)
        self._start_point = p

    def line_to(self, p: Point) -> None:
        if self._current_point is None:
            self.move_to(p)
            return
        if p == self._current_point:
            return
        self._accumulate(p, 0.0)

    def conic_to(self, control: Point, p: Point) -> None:
        start = self._current_point
        if start is None:
            self.move_to(control)
            start = control
        c1, c2 = elevate_conic(start, control, p)
        self.cubic_to(c1, c2, p)

    def cubic_to(self, control1: Point, control2: Point, p: Point) -> None:
        start = self._current_point
        if start is None:
            self.move_to(control1)
            start = control1
        self._fit_bezier(Bezier(start, control1, control2, p), 0)

    def arc(self, a: Arc) -> None:
        if self._current_point is None:
            self.move_to(a.p0)
        elif a.p0 != self._current_point:
            self.line_to(a.p0)

        if a.is_line():
            self.line_to(a.p1)
        elif abs(a.d) > MAX_D:
            first, second = a.split()
            self.arc(first)
            self.arc(second)
        else:
            self._accumulate(a.p1, a.d)

    def close_path(self) -> None:
        """Close the current contour with a line back to its start."""
        if self._start_point is not None and self._current_point != self._start_point:
            self._accumulate(self._start_point, 0.0)

    def _fit_bezier(self, curve: Bezier, depth: int) -> None:
        fitted = Arc.through(curve.p0, curve.p3, curve.point(0.5))
        error = max(fitted.distance_to_point(curve.point(t)) for t in _ERROR_SAMPLES)

        if depth < self.max_depth and (error > self.tolerance or abs(fitted.d) > MAX_D):
            left, right = curve.split()
            self._fit_bezier(left, depth + 1)
            self._fit_bezier(right, depth + 1)
            return

        self.max_error = max(self.max_error, error)
        if curve.p3 == self._current_point:
            return
        self._accumulate(curve.p3, 0.0 if fitted.is_line() else fitted.d)

    def _accumulate(self, p: Point, d: float) -> None:
        self.endpoints.append(ArcEndpoint(p, d))
        self._current_point = p


def arcs_from_endpoints(endpoints: list[ArcEndpoint]) -> list[Arc]:
    """Expand an endpoint list into the arcs it describes.

    Args:
        endpoints: Arc endpoints as produced by ArcAccumulator

    Returns:
        List of arcs, one per non-move endpoint that follows another endpoint
    """
    arcs: list[Arc] = []
    previous: Point | None = None
    for endpoint in endpoints:
        if previous is not None and not endpoint.is_move:
            d = endpoint.d if abs(endpoint.d) >= ARC_EPSILON else 0.0
            arcs.append(Arc(previous, endpoint.point, d))
        previous = endpoint.point
    return arcs
