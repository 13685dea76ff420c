"""Core encoding pipeline for arcglyph.

Key components:
- decompose_outline / OutlineSink: replay outline commands into a consumer
- ArcAccumulator: fit arcs to an outline within a tolerance
- encode_arc_list: pack arc endpoints into RGBA texels
- encode_glyph: encode one glyph of a font face
- MemoryAtlas: refcounted in-memory atlas
- GlyphCache: write-once glyph record cache
- Font: refcounted handle with lookup-or-encode semantics
"""

from arcglyph.core.arcs import MAX_D, ArcAccumulator, arcs_from_endpoints
from arcglyph.core.atlas import Atlas, MemoryAtlas
from arcglyph.core.cache import GlyphCache
from arcglyph.core.encode import TEXEL_SIZE, ArcListEncoding, encode_arc_list
from arcglyph.core.encoder import EncodedGlyph, encode_glyph
from arcglyph.core.font import Font, lookup_glyph
from arcglyph.core.outline import OutlineSink, decompose_outline, elevate_conic
from arcglyph.core.refcount import RefCounted, destroy, reference

__all__ = [
    "MAX_D",
    "TEXEL_SIZE",
    "ArcAccumulator",
    "ArcListEncoding",
    "Atlas",
    "EncodedGlyph",
    "Font",
    "GlyphCache",
    "MemoryAtlas",
    "OutlineSink",
    "RefCounted",
    "arcs_from_endpoints",
    "decompose_outline",
    "destroy",
    "elevate_conic",
    "encode_arc_list",
    "encode_glyph",
    "lookup_glyph",
    "reference",
]
