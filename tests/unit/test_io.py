"""Unit tests for the Font I/O layer.

Tests for FontReader, FontToolsFace and OutlinePen.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from arcglyph.domain import ClosePath, ConicTo, CubicTo, FontFace, LineTo, MoveTo, Point
from arcglyph.exceptions import (
    FontLoadError,
    GlyphFormatError,
    GlyphNotFoundError,
    OutlineDecomposeError,
)
from arcglyph.io import FontReader, FontToolsFace, OutlinePen


def _points(commands) -> set[tuple[float, float]]:
    return {c.point.to_tuple() for c in commands if hasattr(c, "point")}


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_face_before_load(self):
        """Test accessing face before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.face

    def test_format_before_load(self):
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_load_invalid_file(self, tmp_path):
        """Test loading garbage raises FontLoadError."""
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"not a font at all")
        with pytest.raises(FontLoadError) as exc_info:
            FontReader(path).load()
        assert exc_info.value.path == str(path)

    @patch("arcglyph.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test format property for OpenType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "CFF ")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.otf"))
        reader.load()

        assert reader.format == "OpenType"

    def test_context_manager(self, font_path):
        with FontReader(font_path) as reader:
            assert reader.format == "TrueType"
            assert reader.face.units_per_em == 1000
        assert reader._font is None
        with pytest.raises(RuntimeError):
            _ = reader.face


class TestFontToolsFace:
    """Tests for FontToolsFace."""

    def test_metrics(self, face):
        assert isinstance(face, FontFace)
        assert face.units_per_em == 1000
        assert face.glyph_count == 5
        assert face.has_outlines

    def test_glyph_index_for_char(self, face):
        assert face.glyph_index_for_char("A") == 1
        assert face.glyph_index_for_char("O") == 2
        assert face.glyph_index_for_char("Z") == 0

    def test_square_outline(self, face):
        glyph = face.load_glyph(1)

        assert glyph.advance == 600
        assert isinstance(glyph.commands[0], MoveTo)
        assert isinstance(glyph.commands[-1], ClosePath)
        assert _points(glyph.commands) == {(0, 0), (0, 1000), (1000, 1000), (1000, 0)}

    def test_quadratic_kept_as_conic(self, face):
        glyph = face.load_glyph(2)

        conics = [c for c in glyph.commands if isinstance(c, ConicTo)]
        assert conics == [ConicTo(Point(500, 1000), Point(1000, 0))]
        assert not any(isinstance(c, CubicTo) for c in glyph.commands)

    def test_empty_glyph(self, face):
        glyph = face.load_glyph(3)
        assert glyph.commands == []
        assert glyph.advance == 250

    def test_components_decomposed(self, face):
        glyph = face.load_glyph(4)
        assert _points(glyph.commands) == {(100, 0), (100, 1000), (1100, 1000), (1100, 0)}
        assert glyph.advance == 1200

    @pytest.mark.parametrize("index", [-1, 5, 999])
    def test_out_of_range(self, face, index):
        with pytest.raises(GlyphNotFoundError) as exc_info:
            face.load_glyph(index)
        assert exc_info.value.glyph_count == 5
        assert not exc_info.value.retryable

    def test_bitmap_font(self, bitmap_font):
        face = FontToolsFace(bitmap_font)
        assert not face.has_outlines
        with pytest.raises(GlyphFormatError):
            face.load_glyph(1)

    def test_draw_failure(self, face):
        broken = MagicMock()
        broken.draw.side_effect = ValueError("bad contour")
        with patch.object(face, "_get_glyph_set", return_value={"square": broken}):
            with pytest.raises(OutlineDecomposeError, match="bad contour"):
                face.load_glyph(1)


class TestOutlinePen:
    """Tests for OutlinePen."""

    def test_implied_on_curve_points(self):
        pen = OutlinePen()
        pen.moveTo((0, 0))
        pen.qCurveTo((10, 10), (20, 10), (30, 0))
        pen.closePath()

        assert pen.commands == [
            MoveTo(Point(0, 0)),
            ConicTo(Point(10, 10), Point(15, 10)),
            ConicTo(Point(20, 10), Point(30, 0)),
            ClosePath(),
        ]

    def test_cubic_and_open_path(self):
        pen = OutlinePen()
        pen.moveTo((0, 0))
        pen.curveTo((0, 10), (10, 10), (10, 0))
        pen.lineTo((20, 0))
        pen.endPath()

        assert pen.commands == [
            MoveTo(Point(0, 0)),
            CubicTo(Point(0, 10), Point(10, 10), Point(10, 0)),
            LineTo(Point(20, 0)),
        ]
