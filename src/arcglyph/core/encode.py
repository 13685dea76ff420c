"""Encoding of arc lists into RGBA texel blocks.

The encoded block of a glyph is a sequence of 4-byte RGBA texels:

1. A grid of ``layout.width * layout.height`` cell texels covering the glyph
   extents in row-major order, bottom row first. A cell texel holds the
   offset of its arc list (R high byte, G low byte) and the number of
   endpoints in that list (B high byte, A low byte). Offsets are texel
   indices from the start of the block.
2. The arc lists. Each list holds the endpoints of every arc that passes
   within ``faraway`` of the cell. An endpoint texel stores d in R
   (0 for a move, else ``128 + round(d * 127 / MAX_D)``) and the endpoint
   quantized to 12 bits per axis relative to the extents: the low bytes of
   x and y in G and B, and their high nibbles in A.

A cell whose list is empty has no arc nearer than ``faraway``.
"""

import math
from dataclasses import dataclass

from arcglyph.core.arcs import MAX_D, arcs_from_endpoints
from arcglyph.domain import Arc, ArcEndpoint, GlyphExtents, GlyphLayout, Point
from arcglyph.exceptions import BufferTooSmallError, EncodingError

TEXEL_SIZE = 4

# Quantization range of endpoint coordinates (12 bits).
MAX_COORD = 0xFFF

# Offsets and counts are stored in 16 bits.
MAX_ENCODED_LENGTH = 0xFFFF

Texel = tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class ArcListEncoding:
    """Result of encoding an arc list.

    Attributes:
        length: Number of texels written
        layout: Grid shape of the block
        extents: Bounding box of the arcs in outline units
    """

    length: int
    layout: GlyphLayout
    extents: GlyphExtents


def arc_list_extents(arcs: list[Arc]) -> GlyphExtents:
    """Bounding box of a list of arcs, including their bulges.

    Args:
        arcs: Arcs to measure

    Returns:
        Union of the arc bounding boxes, or an empty box for no arcs
    """
    if not arcs:
        return GlyphExtents()
    boxes = [arc.extents() for arc in arcs]
    return GlyphExtents(
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def encode_endpoint(endpoint: ArcEndpoint, extents: GlyphExtents) -> Texel:
    """Encode one arc endpoint as a texel.

    Args:
        endpoint: Endpoint to encode
        extents: Box the coordinates are quantized against

    Returns:
        RGBA texel
    """
    ix = _quantize(endpoint.point.x, extents.min_x, extents.width)
    iy = _quantize(endpoint.point.y, extents.min_y, extents.height)

    if endpoint.is_move:
        id_ = 0
    else:
        d = max(-MAX_D, min(MAX_D, endpoint.d))
        id_ = 128 + round(d * 127 / MAX_D)

    return (id_, ix & 0xFF, iy & 0xFF, ((ix >> 8) << 4) | (iy >> 8))


def encode_cell(offset: int, count: int) -> Texel:
    """Encode a grid cell pointing at its arc list."""
    return (offset >> 8, offset & 0xFF, count >> 8, count & 0xFF)


def encode_arc_list(
    endpoints: list[ArcEndpoint],
    buffer: bytearray,
    capacity: int,
    faraway: float,
    grid_size: int = 8,
) -> ArcListEncoding:
    """Encode arc endpoints into a caller-provided texel buffer.

    Args:
        endpoints: Arc endpoints from ArcAccumulator
        buffer: Destination buffer of at least ``capacity * TEXEL_SIZE`` bytes
        capacity: Number of texels the caller allows to be written
        faraway: Arcs farther than this from a cell are left out of its list
        grid_size: Number of cells along the longer side of the extents

    Returns:
        ArcListEncoding describing what was written

    Raises:
        BufferTooSmallError: If the encoding needs more than ``capacity`` texels
        EncodingError: If the encoding cannot be addressed in 16 bits
        ValueError: If the buffer is shorter than ``capacity`` texels
    """
    if len(buffer) < capacity * TEXEL_SIZE:
        raise ValueError(
            f"Buffer of {len(buffer)} bytes cannot hold {capacity} texels"
        )

    arcs = arcs_from_endpoints(endpoints)
    if not arcs:
        if capacity < 1:
            raise BufferTooSmallError(required=1, capacity=capacity)
        _write_texel(buffer, 0, encode_cell(0, 0))
        return ArcListEncoding(length=1, layout=GlyphLayout(1, 1), extents=GlyphExtents())

    extents = arc_list_extents(arcs)
    unit = max(extents.width, extents.height) / grid_size
    if unit <= 0.0:
        unit = 1.0
    grid_w = max(1, math.ceil(extents.width / unit))
    grid_h = max(1, math.ceil(extents.height / unit))

    reach = unit * math.sqrt(0.5) + faraway
    cell_lists: list[list[ArcEndpoint]] = []
    for row in range(grid_h):
        for col in range(grid_w):
            center = Point(
                extents.min_x + (col + 0.5) * unit,
                extents.min_y + (row + 0.5) * unit,
            )
            near = [arc for arc in arcs if arc.distance_to_point(center) <= reach]
            cell_lists.append(_arc_chain(near))

    header = grid_w * grid_h
    required = header + sum(len(cell) for cell in cell_lists)
    if required > MAX_ENCODED_LENGTH:
        raise EncodingError(
            f"Encoded glyph needs {required} texels; at most {MAX_ENCODED_LENGTH} are addressable"
        )
    if required > capacity:
        raise BufferTooSmallError(required=required, capacity=capacity)

    offset = header
    for index, cell in enumerate(cell_lists):
        _write_texel(buffer, index, encode_cell(offset if cell else 0, len(cell)))
        for endpoint in cell:
            _write_texel(buffer, offset, encode_endpoint(endpoint, extents))
            offset += 1

    return ArcListEncoding(
        length=required,
        layout=GlyphLayout(grid_w, grid_h),
        extents=extents,
    )


def _arc_chain(arcs: list[Arc]) -> list[ArcEndpoint]:
    # Consecutive arcs sharing an endpoint are chained without a move.
    chain: list[ArcEndpoint] = []
    previous_end: Point | None = None
    for arc in arcs:
        if arc.p0 != previous_end:
            chain.append(ArcEndpoint(arc.p0, math.inf))
        chain.append(ArcEndpoint(arc.p1, arc.d))
        previous_end = arc.p1
    return chain


def _quantize(value: float, origin: float, span: float) -> int:
    if span <= 0.0:
        return 0
    return max(0, min(MAX_COORD, round((value - origin) / span * MAX_COORD)))


def _write_texel(buffer: bytearray, index: int, texel: Texel) -> None:
    start = index * TEXEL_SIZE
    buffer[start:start + TEXEL_SIZE] = bytes(texel)
