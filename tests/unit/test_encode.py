"""Unit tests for arc list encoding and glyph encoding."""

import math

import pytest

from arcglyph.config import EncoderConfig
from arcglyph.core.arcs import MAX_D
from arcglyph.core.encode import (
    MAX_COORD,
    TEXEL_SIZE,
    arc_list_extents,
    encode_arc_list,
    encode_cell,
    encode_endpoint,
)
from arcglyph.core.encoder import encode_glyph
from arcglyph.domain import Arc, ArcEndpoint, GlyphExtents, Point
from arcglyph.exceptions import BufferTooSmallError, GlyphNotFoundError

SQUARE = [
    ArcEndpoint(Point(0, 0), math.inf),
    ArcEndpoint(Point(1000, 0), 0.0),
    ArcEndpoint(Point(1000, 1000), 0.0),
    ArcEndpoint(Point(0, 1000), 0.0),
    ArcEndpoint(Point(0, 0), 0.0),
]


def _texel(buffer: bytearray, index: int) -> tuple[int, ...]:
    return tuple(buffer[index * TEXEL_SIZE:(index + 1) * TEXEL_SIZE])


def _cell(buffer: bytearray, index: int) -> tuple[int, int]:
    r, g, b, a = _texel(buffer, index)
    return (r << 8) | g, (b << 8) | a


class TestTexels:
    """Tests for single texel encodings."""

    def test_move_endpoint(self) -> None:
        extents = GlyphExtents(0, 0, MAX_COORD, MAX_COORD)
        texel = encode_endpoint(ArcEndpoint(Point(MAX_COORD, 0), math.inf), extents)
        assert texel == (0, 0xFF, 0x00, 0xF0)

    def test_endpoint_coordinates_split_in_nibbles(self) -> None:
        extents = GlyphExtents(0, 0, MAX_COORD, MAX_COORD)
        texel = encode_endpoint(ArcEndpoint(Point(0x123, 0x456), 0.0), extents)
        assert texel == (128, 0x23, 0x56, 0x14)

    def test_curvature_range(self) -> None:
        extents = GlyphExtents(0, 0, 1, 1)
        assert encode_endpoint(ArcEndpoint(Point(0, 0), MAX_D), extents)[0] == 255
        assert encode_endpoint(ArcEndpoint(Point(0, 0), -MAX_D), extents)[0] == 1
        assert encode_endpoint(ArcEndpoint(Point(0, 0), 0.0), extents)[0] == 128

    def test_cell(self) -> None:
        assert encode_cell(300, 5) == (1, 44, 0, 5)


class TestArcListExtents:
    def test_includes_bulge(self) -> None:
        extents = arc_list_extents([Arc(Point(1, 0), Point(-1, 0), -1.0)])
        assert extents.max_y == pytest.approx(1.0)

    def test_empty(self) -> None:
        assert arc_list_extents([]) == GlyphExtents()


class TestEncodeArcList:
    """Tests for encode_arc_list."""

    def test_square_layout(self) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        result = encode_arc_list(SQUARE, buffer, 4096, faraway=100.0)

        assert result.extents == GlyphExtents(0, 0, 1000, 1000)
        assert (result.layout.width, result.layout.height) == (8, 8)

        counts = [_cell(buffer, i)[1] for i in range(result.layout.cell_count)]
        assert result.length == result.layout.cell_count + sum(counts)

    def test_cells_point_at_their_lists(self) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        result = encode_arc_list(SQUARE, buffer, 4096, faraway=100.0)

        for i in range(result.layout.cell_count):
            offset, count = _cell(buffer, i)
            if count:
                assert result.layout.cell_count <= offset < result.length
                # Every list starts a contour
                assert _texel(buffer, offset)[0] == 0

    def test_far_cells_are_empty(self) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        encode_arc_list(SQUARE, buffer, 4096, faraway=100.0)
        assert _cell(buffer, 3 * 8 + 3) == (0, 0)

    def test_empty_outline(self) -> None:
        buffer = bytearray(b"\xff" * 8 * TEXEL_SIZE)
        result = encode_arc_list([], buffer, 8, faraway=100.0)

        assert result.length == 1
        assert result.layout.cell_count == 1
        assert result.extents.is_empty()
        assert _texel(buffer, 0) == (0, 0, 0, 0)

    def test_buffer_too_small(self) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        required = encode_arc_list(SQUARE, buffer, 4096, faraway=100.0).length

        small = bytearray(10 * TEXEL_SIZE)
        with pytest.raises(BufferTooSmallError) as exc_info:
            encode_arc_list(SQUARE, small, 10, faraway=100.0)

        assert exc_info.value.required == required
        assert exc_info.value.capacity == 10
        assert exc_info.value.retryable

    def test_exact_capacity_fits(self) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        required = encode_arc_list(SQUARE, buffer, 4096, faraway=100.0).length

        exact = bytearray(required * TEXEL_SIZE)
        assert encode_arc_list(SQUARE, exact, required, faraway=100.0).length == required

    def test_short_buffer_rejected(self) -> None:
        with pytest.raises(ValueError):
            encode_arc_list(SQUARE, bytearray(4), 16, faraway=100.0)


class TestEncodeGlyph:
    """Tests for encode_glyph over a synthetic face."""

    def test_square_normalized(self, square_face) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        encoded = encode_glyph(square_face, 0, 1 / 2048, buffer, 4096)

        assert encoded.advance == pytest.approx(0.6)
        assert encoded.extents.to_tuple() == pytest.approx((0.0, 0.0, 1.0, 1.0))
        assert encoded.endpoint_count == 5
        assert encoded.max_error == 0.0

    def test_missing_glyph_propagates(self, square_face) -> None:
        buffer = bytearray(16 * TEXEL_SIZE)
        with pytest.raises(GlyphNotFoundError):
            encode_glyph(square_face, 7, 1 / 2048, buffer, 16)

    def test_small_buffer_propagates(self, square_face) -> None:
        buffer = bytearray(4 * TEXEL_SIZE)
        with pytest.raises(BufferTooSmallError):
            encode_glyph(square_face, 0, 1 / 2048, buffer, 4)

    @pytest.mark.parametrize("tolerance", [0.0, -1 / 2048])
    def test_non_positive_tolerance_rejected(self, square_face, tolerance) -> None:
        buffer = bytearray(16 * TEXEL_SIZE)
        with pytest.raises(ValueError, match="tolerance_per_em"):
            encode_glyph(square_face, 0, tolerance, buffer, 16)
        assert square_face.load_count == 0

    def test_quadratic_glyph(self, face) -> None:
        buffer = bytearray(4096 * TEXEL_SIZE)
        encoded = encode_glyph(face, 2, 1 / 2048, buffer, 4096)

        min_x, min_y, max_x, max_y = encoded.extents.to_tuple()
        assert min_x == pytest.approx(0.0, abs=1e-3)
        assert max_x == pytest.approx(1.0, abs=1e-3)
        assert max_y == pytest.approx(0.5, abs=1e-3)
        assert encoded.advance == pytest.approx(1.0)
        assert encoded.max_error <= 1000 / 2048


class TestEncoderConfig:
    def test_tolerance_in_design_units(self) -> None:
        assert EncoderConfig(tolerance_per_em=1 / 1000).tolerance_for(2000) == pytest.approx(2.0)

    def test_default_tolerance_per_em(self) -> None:
        assert EncoderConfig().tolerance_for(2048) == pytest.approx(1.0)
