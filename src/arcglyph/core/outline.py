"""Outline consumption.

An outline sink receives path primitives one at a time. Two sinks ship with
arcglyph: ArcAccumulator, which fits arcs for encoding, and CairoOutlineSink,
which draws into a cairo context for debugging. Callers pick one and feed it
with decompose_outline.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from arcglyph.domain import (
    Arc,
    ArcTo,
    Bezier,
    ClosePath,
    ConicTo,
    CubicTo,
    LineTo,
    MoveTo,
    OutlineCommand,
    Point,
)


@runtime_checkable
class OutlineSink(Protocol):
    """Consumer of outline primitives.

    Implementations must close an open subpath when move_to starts a new one
    and must express conic_to through cubic_to (see elevate_conic).
    """

    def move_to(self, p: Point) -> None: ...

    def line_to(self, p: Point) -> None: ...

    def conic_to(self, control: Point, p: Point) -> None: ...

    def cubic_to(self, control1: Point, control2: Point, p: Point) -> None: ...

    def arc(self, a: Arc) -> None: ...


def elevate_conic(p0: Point, p1: Point, p2: Point) -> tuple[Point, Point]:
    """Cubic control points equivalent to a quadratic curve.

    Degree elevation is exact: the cubic (p0, c1, c2, p2) traces the same
    curve as the quadratic (p0, p1, p2).

    Args:
        p0: Current point
        p1: Quadratic control point
        p2: End point

    Returns:
        Tuple (c1, c2) with c1 = p0 + 2/3 (p1 - p0) and c2 = p2 + 2/3 (p1 - p2)

    Examples:
        >>> elevate_conic(Point(0.0, 0.0), Point(3.0, 3.0), Point(6.0, 0.0))
        (Point(x=2.0, y=2.0), Point(x=4.0, y=2.0))
    """
    cubic = Bezier.from_quadratic(p0, p1, p2)
    return cubic.p1, cubic.p2


def decompose_outline(commands: Iterable[OutlineCommand], sink: OutlineSink) -> None:
    """Replay an outline command stream into a sink.

    ArcTo commands become Arc primitives starting at the current point.
    ClosePath becomes a line back to the contour start when the current
    point is elsewhere, so sinks only ever see the five primitives.

    Args:
        commands: Outline commands in drawing order
        sink: Consumer receiving the primitives

    Raises:
        ValueError: If a drawing command appears before any MoveTo
    """
    start: Point | None = None
    current: Point | None = None

    for command in commands:
        if isinstance(command, MoveTo):
            sink.move_to(command.point)
            start = current = command.point
            continue

        if isinstance(command, ClosePath):
            if start is not None and current != start:
                sink.line_to(start)
                current = start
            continue

        if current is None:
            raise ValueError(f"{type(command).__name__} before any MoveTo")

        if isinstance(command, LineTo):
            sink.line_to(command.point)
        elif isinstance(command, ConicTo):
            sink.conic_to(command.control, command.point)
        elif isinstance(command, CubicTo):
            sink.cubic_to(command.control1, command.control2, command.point)
        elif isinstance(command, ArcTo):
            sink.arc(Arc(current, command.point, command.d))
        else:
            raise TypeError(f"Unknown outline command: {command!r}")

        current = command.point
