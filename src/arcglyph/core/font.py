"""Font handle binding a font face to an atlas and a glyph cache.

Example:
    atlas = MemoryAtlas()
    font = Font(FontToolsFace(ttfont), atlas)
    atlas.destroy()  # the font holds its own reference

    info = font.lookup_glyph(face.glyph_index_for_char("a"))
    font.destroy()
"""

import time

import structlog

from arcglyph.config import EncoderConfig
from arcglyph.core.atlas import Atlas
from arcglyph.core.cache import GlyphCache
from arcglyph.core.encode import TEXEL_SIZE
from arcglyph.core.encoder import encode_glyph
from arcglyph.core.refcount import RefCounted, destroy
from arcglyph.domain import FontFace, GlyphInfo
from arcglyph.exceptions import ResourceReleasedError
from arcglyph.utils.logging import EncodingLogger, EncodingStats


class Font(RefCounted):
    """Refcounted font handle with lookup-or-encode glyph semantics.

    The handle owns its glyph cache and holds one reference to the atlas.
    The face is borrowed: releasing the handle never closes it.
    """

    def __init__(
        self,
        face: FontFace,
        atlas: Atlas,
        config: EncoderConfig | None = None,
    ) -> None:
        """Create a handle with an empty cache.

        Args:
            face: Font face providing outlines (caller-owned)
            atlas: Shared atlas; a new reference is taken
            config: Encoder settings (defaults to EncoderConfig())
        """
        super().__init__()
        self._face = face
        self._atlas: Atlas | None = atlas.reference()
        self._cache: GlyphCache | None = GlyphCache()
        self.config = config or EncoderConfig()
        self._logger = EncodingLogger(structlog.get_logger("arcglyph.font"))

    @property
    def face(self) -> FontFace:
        return self._face

    @property
    def atlas(self) -> Atlas:
        if self._atlas is None:
            raise ResourceReleasedError(type(self).__name__)
        return self._atlas

    @property
    def cache(self) -> GlyphCache:
        if self._cache is None:
            raise ResourceReleasedError(type(self).__name__)
        return self._cache

    @property
    def stats(self) -> EncodingStats:
        """Encoding statistics accumulated by this handle."""
        return self._logger.stats

    def is_cached(self, glyph_index: int) -> bool:
        return glyph_index in self.cache

    def lookup_glyph(
        self,
        glyph_index: int,
        buffer_capacity: int | None = None,
    ) -> GlyphInfo:
        """Return the glyph record, encoding and uploading it on first use.

        Args:
            glyph_index: Glyph index in the face
            buffer_capacity: Encoding buffer size in texels for this call
                (defaults to the configured capacity)

        Returns:
            The glyph record; identical on every call for the same index

        Raises:
            GlyphLoadError: If the glyph cannot be loaded (fatal)
            BufferTooSmallError: If the buffer is too small (retry larger)
            AtlasFullError: If the atlas has no room for the block
            ResourceReleasedError: If the handle was released
        """
        cache = self.cache
        if glyph_index in cache:
            self._logger.log_cache_hit(glyph_index)

        capacity = self.config.buffer_capacity if buffer_capacity is None else buffer_capacity
        return cache.get_or_insert(
            glyph_index,
            lambda index: self._upload_glyph(index, capacity),
        )

    def _upload_glyph(self, glyph_index: int, capacity: int) -> GlyphInfo:
        self._logger.log_glyph_start(glyph_index)
        start = time.perf_counter()

        buffer = bytearray(capacity * TEXEL_SIZE)
        try:
            encoded = encode_glyph(
                self._face,
                glyph_index,
                self.config.tolerance_per_em,
                buffer,
                capacity,
                min_font_size=self.config.min_font_size,
                grid_size=self.config.grid_size,
                max_depth=self.config.max_subdivision_depth,
            )
            atlas_x, atlas_y = self.atlas.alloc(buffer, encoded.length)
        except Exception as e:
            self._logger.log_glyph_error(glyph_index, e)
            raise

        self._logger.log_glyph_encoded(
            glyph_index,
            endpoints=encoded.endpoint_count,
            texels=encoded.length,
            max_error=encoded.max_error,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        return GlyphInfo(
            layout=encoded.layout,
            extents=encoded.extents,
            advance=encoded.advance,
            atlas_x=atlas_x,
            atlas_y=atlas_y,
            length=encoded.length,
        )

    def _release(self) -> None:
        destroy(self._atlas)
        if self._cache is not None:
            self._cache.clear()
        self._atlas = None
        self._cache = None


def lookup_glyph(
    font: Font | None,
    glyph_index: int,
    buffer_capacity: int | None = None,
) -> GlyphInfo | None:
    """Look up a glyph on a possibly absent handle; None yields None."""
    if font is None:
        return None
    return font.lookup_glyph(glyph_index, buffer_capacity)
