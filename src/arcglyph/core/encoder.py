"""Glyph encoding.

encode_glyph turns one glyph of a font face into an encoded arc block:

1. Load the unscaled outline from the face
2. Fit arcs to it within a tolerance given as a fraction of the em
3. Encode the arc endpoints into the caller's texel buffer
4. Normalize the extents and advance into em units
"""

from dataclasses import dataclass

import structlog

from arcglyph.config.settings import DEFAULT_MIN_FONT_SIZE
from arcglyph.core.arcs import ArcAccumulator
from arcglyph.core.encode import TEXEL_SIZE, encode_arc_list
from arcglyph.core.outline import decompose_outline
from arcglyph.domain import FontFace, GlyphExtents, GlyphLayout

logger = structlog.get_logger("arcglyph.encoder")


@dataclass(frozen=True, slots=True)
class EncodedGlyph:
    """Result of encoding one glyph.

    Attributes:
        layout: Grid shape of the encoded block
        extents: Bounding box in em units
        advance: Horizontal advance in em units
        length: Texels written to the buffer
        endpoint_count: Arc endpoints produced by fitting
        max_error: Largest approximation error in font design units
    """

    layout: GlyphLayout
    extents: GlyphExtents
    advance: float
    length: int
    endpoint_count: int
    max_error: float


def encode_glyph(
    face: FontFace,
    glyph_index: int,
    tolerance_per_em: float,
    buffer: bytearray,
    capacity: int,
    min_font_size: float = DEFAULT_MIN_FONT_SIZE,
    grid_size: int = 8,
    max_depth: int = 12,
) -> EncodedGlyph:
    """Encode a glyph outline into an arc block.

    Args:
        face: Font face providing outlines and metrics
        glyph_index: Index of the glyph in the face
        tolerance_per_em: Maximum approximation error as a fraction of the em
        buffer: Destination texel buffer (not allocated here)
        capacity: Texels available in the buffer
        min_font_size: Smallest rendered size in pixels per em
        grid_size: Grid cells along the longer side of the glyph
        max_depth: Maximum curve subdivision depth while fitting arcs

    Returns:
        EncodedGlyph with normalized extents and advance

    Raises:
        GlyphLoadError: If the outline cannot be loaded (fatal)
        BufferTooSmallError: If the buffer cannot hold the encoding (retryable)
        ValueError: If tolerance_per_em is not positive
    """
    if tolerance_per_em <= 0:
        raise ValueError(f"tolerance_per_em must be positive, got {tolerance_per_em}")

    glyph = face.load_glyph(glyph_index)

    upem = face.units_per_em
    tolerance = upem * tolerance_per_em
    faraway = upem / min_font_size

    accumulator = ArcAccumulator(tolerance, max_depth=max_depth)
    decompose_outline(glyph.commands, accumulator)
    accumulator.close_path()

    logger.debug(
        "Arcs accumulated",
        glyph=glyph_index,
        endpoints=accumulator.num_endpoints,
        max_error=accumulator.max_error,
        tolerance=tolerance,
        percentage=round(100 * accumulator.max_error / tolerance),
        result="PASS" if accumulator.within_tolerance() else "FAIL",
    )

    encoding = encode_arc_list(
        accumulator.endpoints,
        buffer,
        capacity,
        faraway,
        grid_size=grid_size,
    )

    logger.debug(
        "Arc list encoded",
        glyph=glyph_index,
        bytes=encoding.length * TEXEL_SIZE,
        grid=(encoding.layout.width, encoding.layout.height),
    )

    return EncodedGlyph(
        layout=encoding.layout,
        extents=encoding.extents.normalized(upem),
        advance=glyph.advance / upem,
        length=encoding.length,
        endpoint_count=accumulator.num_endpoints,
        max_error=accumulator.max_error,
    )
