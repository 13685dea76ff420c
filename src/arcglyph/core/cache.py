"""Write-once glyph cache."""

from collections.abc import Callable, Iterator

from arcglyph.domain import GlyphInfo


class GlyphCache:
    """Mapping from glyph index to its encoded glyph record.

    Records are inserted once and never replaced. The cache is unbounded:
    atlas space is consumed on every encode, so evicting a record would
    leak its block. A failed computation inserts nothing, leaving the index
    free for a later retry.
    """

    def __init__(self) -> None:
        self._records: dict[int, GlyphInfo] = {}
        self.hits = 0
        self.misses = 0

    def get(self, glyph_index: int) -> GlyphInfo | None:
        """Return the cached record, or None. Does not count as a lookup."""
        return self._records.get(glyph_index)

    def get_or_insert(
        self,
        glyph_index: int,
        compute: Callable[[int], GlyphInfo],
    ) -> GlyphInfo:
        """Return the record for glyph_index, computing it on a miss.

        Args:
            glyph_index: Glyph index key
            compute: Called with glyph_index on a miss; its result is stored

        Returns:
            The cached or newly computed record

        Raises:
            Exception: Whatever compute raises; nothing is inserted
        """
        record = self._records.get(glyph_index)
        if record is not None:
            self.hits += 1
            return record

        self.misses += 1
        record = compute(glyph_index)
        self._records[glyph_index] = record
        return record

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, glyph_index: object) -> bool:
        return glyph_index in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[int]:
        return iter(self._records)
