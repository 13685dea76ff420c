"""Outline command stream and the font face contract.

An outline is an ordered list of path commands in font design units. It is
the contract between a font face (the outline source) and any consumer of
outlines.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from arcglyph.domain.geometry import Point


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at ``point``."""

    point: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment to ``point``."""

    point: Point


@dataclass(frozen=True, slots=True)
class ConicTo:
    """Quadratic curve through ``control`` to ``point``."""

    control: Point
    point: Point


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic curve through two control points to ``point``."""

    control1: Point
    control2: Point
    point: Point


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Native circular arc from the current point to ``point``."""

    point: Point
    d: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current contour back to its start point."""


OutlineCommand = MoveTo | LineTo | ConicTo | CubicTo | ArcTo | ClosePath


@dataclass
class LoadedGlyph:
    """A glyph outline as loaded from a font face.

    Attributes:
        commands: Outline command stream in font design units
        advance: Horizontal advance in font design units
    """

    commands: list[OutlineCommand] = field(default_factory=list)
    advance: float = 0.0


@runtime_checkable
class FontFace(Protocol):
    """Source of scalable glyph outlines.

    Implementations load the unscaled, unhinted outline of a glyph. Failure
    to find the glyph or a glyph that is not an outline raises a
    GlyphLoadError subclass.
    """

    @property
    def units_per_em(self) -> int: ...

    def load_glyph(self, glyph_index: int) -> LoadedGlyph: ...
