"""Glyph atlas.

The atlas is a shared texel space into which encoded glyph blocks are
uploaded. Each allocation consumes new space; the atlas never frees or
reuses blocks.
"""

import math
from typing import Protocol, runtime_checkable

import structlog

from arcglyph.config import AtlasConfig
from arcglyph.core.encode import TEXEL_SIZE
from arcglyph.core.refcount import RefCounted
from arcglyph.exceptions import AtlasFullError, ResourceReleasedError

logger = structlog.get_logger("arcglyph.atlas")


@runtime_checkable
class Atlas(Protocol):
    """Shared, refcounted store for encoded glyph blocks."""

    def alloc(self, buffer: bytes | bytearray, length: int) -> tuple[int, int]: ...

    def reference(self) -> "Atlas": ...

    def destroy(self) -> None: ...


class MemoryAtlas(RefCounted):
    """In-memory atlas that packs blocks column by column.

    Every block is ``item_width`` texels wide and as many rows tall as its
    length needs; rows are rounded up to ``item_height_quantum``. Blocks are
    stacked down a column and a new column is started when one fills up.
    Placement coordinates are reported in item units: x in columns of
    ``item_width`` and y in multiples of ``item_height_quantum``.

    Example:
        atlas = MemoryAtlas(AtlasConfig(width=256, height=256))
        x, y = atlas.alloc(buffer, length)
        atlas.destroy()
    """

    def __init__(self, config: AtlasConfig | None = None) -> None:
        """Initialize an empty atlas.

        Args:
            config: Atlas dimensions (defaults to AtlasConfig())

        Raises:
            ValueError: If the item width exceeds the atlas width
        """
        super().__init__()
        config = config or AtlasConfig()
        if config.item_width > config.width:
            raise ValueError("Atlas item width exceeds atlas width")

        self.width = config.width
        self.height = config.height
        self.item_width = config.item_width
        self.item_height_quantum = config.item_height_quantum
        self._data: bytearray | None = bytearray(self.width * self.height * TEXEL_SIZE)
        self._cursor_x = 0
        self._cursor_y = 0
        self._allocations = 0

    @property
    def allocations(self) -> int:
        """Number of blocks uploaded so far."""
        return self._allocations

    def alloc(self, buffer: bytes | bytearray, length: int) -> tuple[int, int]:
        """Upload an encoded block and return its placement.

        Args:
            buffer: Encoded texels; only the first ``length`` are uploaded
            length: Number of texels in the block

        Returns:
            Tuple (x, y) in item units

        Raises:
            AtlasFullError: If no space remains for the block
            ResourceReleasedError: If the atlas was released
        """
        data = self._live_data()
        w = self.item_width
        h = max(1, math.ceil(length / w))

        x = self._cursor_x
        y = self._cursor_y
        if y + h > self.height:
            x += self.item_width
            y = 0

        # The cursor only moves once the block is known to fit
        if x + w > self.width or y + h > self.height:
            raise AtlasFullError(w, h)

        quantum = self.item_height_quantum
        self._cursor_x = x
        self._cursor_y = y + (h + quantum - 1) // quantum * quantum

        row_bytes = w * TEXEL_SIZE
        block = bytes(buffer[: length * TEXEL_SIZE])
        for row in range(h):
            chunk = block[row * row_bytes:(row + 1) * row_bytes]
            start = ((y + row) * self.width + x) * TEXEL_SIZE
            data[start:start + len(chunk)] = chunk

        self._allocations += 1
        logger.debug("Atlas block allocated", x=x, y=y, width=w, height=h)
        return x // self.item_width, y // quantum

    def read(self, x: int, y: int, length: int) -> bytes:
        """Read back a block uploaded at item coordinates (x, y).

        Args:
            x: Column in item units
            y: Row in item units
            length: Number of texels to read

        Returns:
            The block's bytes
        """
        data = self._live_data()
        w = self.item_width
        left = x * w
        top = y * self.item_height_quantum
        row_bytes = w * TEXEL_SIZE
        out = bytearray()
        for row in range(max(1, math.ceil(length / w))):
            start = ((top + row) * self.width + left) * TEXEL_SIZE
            out += data[start:start + row_bytes]
        return bytes(out[: length * TEXEL_SIZE])

    def _release(self) -> None:
        self._data = None

    def _live_data(self) -> bytearray:
        if self._data is None:
            raise ResourceReleasedError(type(self).__name__)
        return self._data
