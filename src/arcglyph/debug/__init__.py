"""Debug rendering for arcglyph.

Requires pycairo (install the ``debug`` extra).
"""

from arcglyph.debug.cairo_helper import (
    CairoOutlineSink,
    demo_arc,
    demo_arcs,
    demo_curve,
    demo_point,
    draw_arc,
    draw_arcs,
    draw_circle,
    draw_curve,
    draw_line,
    draw_point,
    fancy_stroke,
    fancy_stroke_preserve,
    path_stats,
    render_glyph_png,
    set_viewport,
)

__all__ = [
    "CairoOutlineSink",
    "demo_arc",
    "demo_arcs",
    "demo_curve",
    "demo_point",
    "draw_arc",
    "draw_arcs",
    "draw_circle",
    "draw_curve",
    "draw_line",
    "draw_point",
    "fancy_stroke",
    "fancy_stroke_preserve",
    "path_stats",
    "render_glyph_png",
    "set_viewport",
]
