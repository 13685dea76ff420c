"""Glyph records produced by encoding.

This module defines the per-glyph results: the shape of the encoded block,
the glyph bounding box and the cached glyph record.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class GlyphExtents:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Left edge
        min_y: Bottom edge
        max_x: Right edge
        max_y: Top edge
    """

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def is_empty(self) -> bool:
        """Whether the box encloses no area."""
        return self.width <= 0.0 or self.height <= 0.0

    def normalized(self, units_per_em: float) -> "GlyphExtents":
        """Return the box with every coordinate divided by units_per_em."""
        return GlyphExtents(
            self.min_x / units_per_em,
            self.min_y / units_per_em,
            self.max_x / units_per_em,
            self.max_y / units_per_em,
        )

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True, slots=True)
class GlyphLayout:
    """Shape of an encoded glyph block.

    The encoded block starts with ``width * height`` grid cell texels
    followed by the arc lists they point at.

    Attributes:
        width: Grid cells per row
        height: Grid rows
    """

    width: int
    height: int

    @property
    def cell_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True, slots=True)
class GlyphInfo:
    """Cached per-glyph record.

    Immutable: once stored in a glyph cache it is never recomputed.

    Attributes:
        layout: Shape of the encoded block
        extents: Bounding box in em units
        advance: Horizontal advance in em units
        atlas_x: Column of the block in atlas item units
        atlas_y: Row of the block in atlas item units
        length: Number of texels in the encoded block
    """

    layout: GlyphLayout
    extents: GlyphExtents
    advance: float
    atlas_x: int
    atlas_y: int
    length: int

    @property
    def is_empty(self) -> bool:
        """Whether the glyph has no visible outline (e.g. space)."""
        return self.extents.is_empty()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the glyph record
        """
        return {
            "layout": [self.layout.width, self.layout.height],
            "extents": list(self.extents.to_tuple()),
            "advance": self.advance,
            "atlas": [self.atlas_x, self.atlas_y],
            "length": self.length,
        }
