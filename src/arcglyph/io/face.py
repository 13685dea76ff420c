"""fontTools font face adapter.

FontToolsFace exposes a caller-owned TTFont through the FontFace protocol:
unscaled outlines in font design units plus the horizontal advance.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from arcglyph.domain import (
    ClosePath,
    ConicTo,
    CubicTo,
    LineTo,
    LoadedGlyph,
    MoveTo,
    OutlineCommand,
    Point,
)
from arcglyph.exceptions import (
    GlyphFormatError,
    GlyphNotFoundError,
    OutlineDecomposeError,
)

_OUTLINE_TABLES = ("glyf", "CFF ", "CFF2")


class OutlinePen(BasePen):
    """Pen that records a glyph outline as outline commands.

    Quadratic segments are kept as ConicTo; implied on-curve points are
    resolved by BasePen. Components are decomposed through the glyph set.
    Open contours (endPath) are recorded without a ClosePath.
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.commands: list[OutlineCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(Point.from_tuple(pt)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(Point.from_tuple(pt)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(
            CubicTo(Point.from_tuple(pt1), Point.from_tuple(pt2), Point.from_tuple(pt3))
        )

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(ConicTo(Point.from_tuple(pt1), Point.from_tuple(pt2)))

    def _closePath(self) -> None:
        self.commands.append(ClosePath())

    def _endPath(self) -> None:
        pass


class FontToolsFace:
    """FontFace implementation backed by a fontTools TTFont.

    The TTFont is borrowed: closing it remains the caller's job.

    Example:
        face = FontToolsFace(TTFont("font.ttf"))
        glyph = face.load_glyph(face.glyph_index_for_char("A"))
    """

    def __init__(self, font: TTFont) -> None:
        self._font = font
        self._glyph_order: list[str] = font.getGlyphOrder()
        self._glyph_set: Any = None

    @property
    def font(self) -> TTFont:
        return self._font

    @property
    def units_per_em(self) -> int:
        return self._font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        return len(self._glyph_order)

    @property
    def has_outlines(self) -> bool:
        """Whether the font carries scalable outlines (TrueType or CFF)."""
        return any(tag in self._font for tag in _OUTLINE_TABLES)

    def glyph_name(self, glyph_index: int) -> str:
        """Name of the glyph at glyph_index.

        Raises:
            GlyphNotFoundError: If the index is out of range
        """
        if not 0 <= glyph_index < len(self._glyph_order):
            raise GlyphNotFoundError(glyph_index, len(self._glyph_order))
        return self._glyph_order[glyph_index]

    def glyph_index_for_char(self, char: str) -> int:
        """Map a character to its glyph index through the best cmap.

        Returns:
            Glyph index, or 0 (.notdef) when the character is not mapped
        """
        cmap = self._font.getBestCmap() or {}
        name = cmap.get(ord(char))
        if name is None:
            return 0
        return self._font.getGlyphID(name)

    def load_glyph(self, glyph_index: int) -> LoadedGlyph:
        """Load the unscaled outline and advance of a glyph.

        Args:
            glyph_index: Glyph index in the font

        Returns:
            LoadedGlyph with commands in font design units

        Raises:
            GlyphNotFoundError: If the index is out of range
            GlyphFormatError: If the font has no outline tables
            OutlineDecomposeError: If drawing the outline fails
        """
        name = self.glyph_name(glyph_index)
        if not self.has_outlines:
            raise GlyphFormatError(glyph_index, "bitmap")

        glyph_set = self._get_glyph_set()
        glyph = glyph_set[name]
        pen = OutlinePen(glyph_set)
        try:
            glyph.draw(pen)
        except Exception as e:
            raise OutlineDecomposeError(glyph_index, str(e)) from e

        return LoadedGlyph(commands=pen.commands, advance=float(glyph.width))

    def _get_glyph_set(self) -> Any:
        if self._glyph_set is None:
            self._glyph_set = self._font.getGlyphSet()
        return self._glyph_set
