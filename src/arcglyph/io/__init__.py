"""Font I/O layer for arcglyph.

This module opens font files with fontTools and adapts them to the
FontFace protocol used by the encoder.

Key classes:
- FontReader: Open fonts from disk
- FontToolsFace: FontFace over a fontTools TTFont
- OutlinePen: fontTools pen recording outline commands
"""

from arcglyph.io.face import FontToolsFace, OutlinePen
from arcglyph.io.reader import FontReader

__all__ = [
    "FontReader",
    "FontToolsFace",
    "OutlinePen",
]
