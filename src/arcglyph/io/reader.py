"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class, which opens a font file with
fontTools and hands out a FontToolsFace for encoding.
"""

from pathlib import Path

from fontTools.ttLib import TTFont

from arcglyph.exceptions import FontLoadError
from arcglyph.io.face import FontToolsFace


class FontReader:
    """Loads TTF/OTF fonts and exposes them as font faces.

    The reader owns the TTFont it opens; the face it returns borrows it and
    stays valid until close().

    Example:
        with FontReader(Path("font.ttf")) as reader:
            font = Font(reader.face, atlas)
            ...
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._face: FontToolsFace | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be parsed as a font
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path))
        except Exception as e:
            raise FontLoadError(str(self._font_path), str(e)) from e
        self._face = FontToolsFace(self._font)

    @property
    def face(self) -> FontToolsFace:
        """Return the face of the loaded font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._face is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._face

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        if "CFF " in self._font or "CFF2" in self._font:
            return "OpenType"
        return "TrueType"

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._face = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
