"""Exception hierarchy for arcglyph.

Every error carries a ``retryable`` flag. Fatal errors mean the font or glyph
is unusable; retryable errors can succeed when the caller tries again with
different resources (for example a larger encoding buffer).
"""


class ArcGlyphError(Exception):
    """Base exception for all arcglyph errors."""

    retryable: bool = False


class FontError(ArcGlyphError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphLoadError(ArcGlyphError):
    """The glyph outline could not be obtained from the font face.

    No retry is meaningful: the glyph is unusable.
    """

    def __init__(self, glyph_index: int, reason: str) -> None:
        self.glyph_index = glyph_index
        self.reason = reason
        super().__init__(f"Failed loading glyph {glyph_index}: {reason}")


class GlyphNotFoundError(GlyphLoadError):
    """Requested glyph index does not exist in the font."""

    def __init__(self, glyph_index: int, glyph_count: int) -> None:
        self.glyph_count = glyph_count
        super().__init__(glyph_index, f"index out of range (font has {glyph_count} glyphs)")


class GlyphFormatError(GlyphLoadError):
    """Loaded glyph is not a scalable outline (e.g. bitmap-only font)."""

    def __init__(self, glyph_index: int, glyph_format: str) -> None:
        self.glyph_format = glyph_format
        super().__init__(glyph_index, f"glyph format is {glyph_format}, not outline")


class OutlineDecomposeError(GlyphLoadError):
    """Converting the glyph outline to path commands failed."""

    pass


class EncodingError(ArcGlyphError):
    """Errors while encoding arcs into a texel buffer."""

    pass


class BufferTooSmallError(EncodingError):
    """The destination buffer cannot hold the encoded arc list.

    Callers may retry with a buffer of at least ``required`` texels.
    """

    retryable = True

    def __init__(self, required: int, capacity: int) -> None:
        self.required = required
        self.capacity = capacity
        super().__init__(
            f"Encoding needs {required} texels but buffer holds {capacity}"
        )


class AtlasError(ArcGlyphError):
    """Errors related to atlas allocation."""

    pass


class AtlasFullError(AtlasError):
    """The atlas has no room left for the requested block."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Ran out of atlas space for a {width}x{height} texel block")


class ResourceReleasedError(ArcGlyphError):
    """An operation was attempted on a handle whose last reference was dropped."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} has already been released")
