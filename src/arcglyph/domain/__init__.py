"""Domain models for arcglyph.

This module contains the value types shared by every layer. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of fontTools and cairo implementation details

Key classes:
- Point, Vector, Line, Circle, Arc, Bezier: Geometry primitives
- ArcEndpoint: One entry of an arc list
- MoveTo, LineTo, ConicTo, CubicTo, ArcTo, ClosePath: Outline commands
- LoadedGlyph, FontFace: Outline source contract
- GlyphExtents, GlyphLayout, GlyphInfo: Per-glyph encoding results
"""

from arcglyph.domain.geometry import (
    ARC_EPSILON,
    Arc,
    ArcEndpoint,
    Bezier,
    Circle,
    Line,
    Point,
    Vector,
)
from arcglyph.domain.glyph import GlyphExtents, GlyphInfo, GlyphLayout
from arcglyph.domain.outline import (
    ArcTo,
    ClosePath,
    ConicTo,
    CubicTo,
    FontFace,
    LineTo,
    LoadedGlyph,
    MoveTo,
    OutlineCommand,
)

__all__: list[str] = [
    "ARC_EPSILON",
    # Geometry
    "Arc",
    "ArcEndpoint",
    "Bezier",
    "Circle",
    "Line",
    "Point",
    "Vector",
    # Outline
    "ArcTo",
    "ClosePath",
    "ConicTo",
    "CubicTo",
    "FontFace",
    "LineTo",
    "LoadedGlyph",
    "MoveTo",
    "OutlineCommand",
    # Glyph records
    "GlyphExtents",
    "GlyphInfo",
    "GlyphLayout",
]
