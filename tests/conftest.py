"""Shared fixtures: small fonts built in memory with fontTools FontBuilder."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from arcglyph.domain import ClosePath, LineTo, LoadedGlyph, MoveTo, Point
from arcglyph.exceptions import GlyphNotFoundError
from arcglyph.io import FontToolsFace

UPEM = 1000

GLYPH_ORDER = [".notdef", "square", "bowl", "space", "pair"]

ADVANCES = {
    ".notdef": 500,
    "square": 600,
    "bowl": 1000,
    "space": 250,
    "pair": 1200,
}


def _square_glyph(size: int):
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((0, size))
    pen.lineTo((size, size))
    pen.lineTo((size, 0))
    pen.closePath()
    return pen.glyph()


def _bowl_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.qCurveTo((500, 1000), (1000, 0))
    pen.closePath()
    return pen.glyph()


def _pair_glyph(glyphs: dict):
    pen = TTGlyphPen(glyphs)
    pen.addComponent("square", (1, 0, 0, 1, 100, 0))
    return pen.glyph()


def build_test_font() -> TTFont:
    """Build a TrueType font with a square, a quadratic bowl, a space and a composite."""
    fb = FontBuilder(UPEM, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap({ord("A"): "square", ord("O"): "bowl", ord(" "): "space"})
    glyphs = {
        ".notdef": _square_glyph(400),
        "square": _square_glyph(1000),
        "bowl": _bowl_glyph(),
        "space": TTGlyphPen(None).glyph(),
    }
    glyphs["pair"] = _pair_glyph(glyphs)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (ADVANCES[name], 0) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Arc Test", "styleName": "Regular"})
    fb.setupOS2()
    fb.setupPost()
    return fb.font


class SquareFace:
    """Font face with one unit-square glyph that counts outline loads."""

    units_per_em = UPEM

    def __init__(self) -> None:
        self.load_count = 0

    def load_glyph(self, glyph_index: int) -> LoadedGlyph:
        self.load_count += 1
        if glyph_index != 0:
            raise GlyphNotFoundError(glyph_index, 1)
        commands = [
            MoveTo(Point(0, 0)),
            LineTo(Point(1000, 0)),
            LineTo(Point(1000, 1000)),
            LineTo(Point(0, 1000)),
            ClosePath(),
        ]
        return LoadedGlyph(commands=commands, advance=600)


@pytest.fixture
def test_font() -> TTFont:
    """In-memory TrueType test font."""
    return build_test_font()


@pytest.fixture
def face(test_font: TTFont) -> FontToolsFace:
    """FontToolsFace over the test font."""
    return FontToolsFace(test_font)


@pytest.fixture
def bitmap_font() -> TTFont:
    """Test font with its outline tables removed."""
    font = build_test_font()
    for tag in ("glyf", "loca"):
        if tag in font:
            del font[tag]
    return font


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """Test font saved to a temporary file."""
    path = tmp_path / "ArcTest-Regular.ttf"
    build_test_font().save(str(path))
    return path


@pytest.fixture
def square_face() -> SquareFace:
    return SquareFace()
