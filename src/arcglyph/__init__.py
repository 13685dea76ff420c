"""arcglyph - Encode font glyph outlines as GPU-friendly arc lists.

arcglyph approximates each glyph outline of a font with circular arcs,
packs the arcs into a compact RGBA texel block and places that block in a
shared atlas. A refcounted font handle caches the resulting glyph records so
each glyph is encoded at most once.

Example:
    >>> from fontTools.ttLib import TTFont
    >>> from arcglyph.core import Font, MemoryAtlas
    >>> from arcglyph.io import FontToolsFace
    >>> face = FontToolsFace(TTFont("Roboto-Regular.ttf"))
    >>> font = Font(face, MemoryAtlas())
    >>> info = font.lookup_glyph(face.glyph_index_for_char("A"))
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
