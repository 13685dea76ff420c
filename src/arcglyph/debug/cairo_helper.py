"""Debug drawing of outlines and arcs with pycairo.

CairoOutlineSink draws outline primitives into a borrowed cairo context.
The draw_* helpers append geometry to the current path; the demo_* helpers
also stroke it with markers at the endpoints. render_glyph_png combines them
into a picture of a glyph outline overlaid with its fitted arcs.
"""

import math
from pathlib import Path

import cairo
import structlog

from arcglyph.config import ArcGlyphSettings, DebugConfig
from arcglyph.core.arcs import ArcAccumulator, arcs_from_endpoints
from arcglyph.core.outline import decompose_outline, elevate_conic
from arcglyph.domain import Arc, Bezier, Circle, FontFace, Line, OutlineCommand, Point

logger = structlog.get_logger("arcglyph.debug")


class CairoOutlineSink:
    """Outline sink that draws into a cairo context.

    The context is borrowed for the lifetime of the sink; the caller keeps
    ownership and decides when to stroke or fill.
    """

    def __init__(self, ctx: cairo.Context) -> None:
        self.ctx = ctx

    def move_to(self, p: Point) -> None:
        self.ctx.close_path()
        self.ctx.move_to(p.x, p.y)

    def line_to(self, p: Point) -> None:
        self.ctx.line_to(p.x, p.y)

    def conic_to(self, control: Point, p: Point) -> None:
        p0 = Point(*self.ctx.get_current_point())
        c1, c2 = elevate_conic(p0, control, p)
        self.cubic_to(c1, c2, p)

    def cubic_to(self, control1: Point, control2: Point, p: Point) -> None:
        self.ctx.curve_to(control1.x, control1.y, control2.x, control2.y, p.x, p.y)

    def arc(self, a: Arc) -> None:
        draw_arc(self.ctx, a)


def draw_point(ctx: cairo.Context, p: Point) -> None:
    """Append a zero-length segment that strokes as a dot."""
    ctx.move_to(p.x, p.y)
    ctx.rel_line_to(0, 0)


def draw_line(ctx: cairo.Context, line: Line, extent: float | None = None) -> None:
    """Append a visible stretch of an infinite line.

    The line is clipped to +-extent around the origin, which defaults to
    DebugConfig.line_extent.
    """
    if extent is None:
        extent = DebugConfig().line_extent
    ctx.new_sub_path()
    for p in line.clip(extent):
        ctx.line_to(p.x, p.y)


def draw_circle(ctx: cairo.Context, circle: Circle) -> None:
    ctx.new_sub_path()
    ctx.arc(circle.center.x, circle.center.y, circle.radius, 0, 2 * math.pi)


def draw_arc(ctx: cairo.Context, a: Arc) -> None:
    """Append an arc; nearly straight arcs become a line from p0 to p1."""
    if a.is_line():
        ctx.line_to(a.p0.x, a.p0.y)
        ctx.line_to(a.p1.x, a.p1.y)
        return

    circle = a.circle()
    a0, a1 = a.angles()
    if a.counterclockwise:
        ctx.arc(circle.center.x, circle.center.y, circle.radius, a0, a1)
    else:
        ctx.arc_negative(circle.center.x, circle.center.y, circle.radius, a0, a1)


def draw_arcs(ctx: cairo.Context, arcs: list[Arc]) -> None:
    """Append a list of arcs, closing each contour where it returns to its start."""
    start = Point(0.0, 0.0)
    for a in arcs:
        if not ctx.has_current_point():
            start = a.p0
        draw_arc(ctx, a)
        if a.p1 == start:
            ctx.close_path()
            ctx.new_sub_path()


def draw_curve(ctx: cairo.Context, b: Bezier) -> None:
    ctx.line_to(b.p0.x, b.p0.y)
    ctx.curve_to(b.p1.x, b.p1.y, b.p2.x, b.p2.y, b.p3.x, b.p3.y)


def demo_point(ctx: cairo.Context, p: Point) -> None:
    """Stroke a round dot three line widths wide."""
    ctx.save()
    ctx.set_line_cap(cairo.LINE_CAP_ROUND)
    draw_point(ctx, p)
    ctx.set_line_width(ctx.get_line_width() * 3)
    ctx.stroke()
    ctx.restore()


def demo_curve(ctx: cairo.Context, b: Bezier) -> None:
    demo_point(ctx, b.p0)
    demo_point(ctx, b.p3)
    draw_curve(ctx, b)
    ctx.stroke()


def demo_arc(ctx: cairo.Context, a: Arc) -> None:
    """Stroke an arc with dots on both endpoints."""
    ctx.save()
    if a.is_line():
        ctx.move_to(a.p0.x, a.p0.y)
        ctx.line_to(a.p1.x, a.p1.y)
        ctx.stroke()
        ctx.set_line_width(ctx.get_line_width() / 2)
    else:
        ctx.set_line_width(ctx.get_line_width() / 3)
    demo_point(ctx, a.p0)
    demo_point(ctx, a.p1)
    ctx.restore()

    if not a.is_line():
        ctx.new_path()
        draw_arc(ctx, a)
        ctx.stroke()


def demo_arcs(ctx: cairo.Context, arcs: list[Arc]) -> None:
    for a in arcs:
        demo_arc(ctx, a)


def fancy_stroke_preserve(ctx: cairo.Context) -> None:
    """Stroke the current path with its points and control points marked.

    Control polygons are drawn thin, on-curve and control points as round
    dots, then the path itself is stroked and left in place.
    """
    ctx.save()

    line_width = ctx.get_line_width()
    path = ctx.copy_path()
    ctx.new_path()

    ctx.save()
    ctx.set_line_width(line_width / 3)
    for kind, points in path:
        if kind in (cairo.PATH_MOVE_TO, cairo.PATH_LINE_TO):
            ctx.move_to(points[0], points[1])
        elif kind == cairo.PATH_CURVE_TO:
            ctx.line_to(points[0], points[1])
            ctx.move_to(points[2], points[3])
            ctx.line_to(points[4], points[5])
    ctx.stroke()
    ctx.restore()

    ctx.save()
    ctx.set_line_width(line_width * 2)
    ctx.set_line_cap(cairo.LINE_CAP_ROUND)
    for kind, points in path:
        if kind == cairo.PATH_MOVE_TO:
            ctx.move_to(points[0], points[1])
        elif kind == cairo.PATH_LINE_TO:
            ctx.rel_line_to(0, 0)
            ctx.move_to(points[0], points[1])
        elif kind == cairo.PATH_CURVE_TO:
            for i in range(0, 6, 2):
                ctx.rel_line_to(0, 0)
                ctx.move_to(points[i], points[i + 1])
        elif kind == cairo.PATH_CLOSE_PATH:
            ctx.rel_line_to(0, 0)
    if ctx.has_current_point():
        ctx.rel_line_to(0, 0)
    ctx.stroke()
    ctx.restore()

    ctx.append_path(path)
    ctx.stroke_preserve()

    ctx.restore()


def fancy_stroke(ctx: cairo.Context) -> None:
    fancy_stroke_preserve(ctx)
    ctx.new_path()


def path_stats(path: cairo.Path) -> tuple[int, int]:
    """Count the line and curve segments of a cairo path.

    Returns:
        Tuple of (lines, curves)
    """
    lines = 0
    curves = 0
    for kind, _points in path:
        if kind == cairo.PATH_LINE_TO:
            lines += 1
        elif kind == cairo.PATH_CURVE_TO:
            curves += 1
    logger.info("Path stats", pieces=lines + curves, lines=lines, curves=curves)
    return lines, curves


def set_viewport(ctx: cairo.Context) -> None:
    """Scale and center the current path to fill 80% of the clip area.

    Does nothing when the path encloses no area.
    """
    cx1, cy1, cx2, cy2 = ctx.clip_extents()
    px1, py1, px2, py2 = ctx.path_extents()

    ratio = max((px2 - px1) / (cx2 - cx1), (py2 - py1) / (cy2 - cy1))
    if ratio <= 0.0:
        return
    scale = 0.8 / ratio

    ctx.translate((cx1 + cx2) * 0.5, (cy1 + cy2) * 0.5)
    ctx.scale(scale, scale)
    ctx.set_line_width(ctx.get_line_width() / scale)
    ctx.translate(-(px1 + px2) * 0.5, -(py1 + py2) * 0.5)


def render_glyph_png(
    face: FontFace,
    glyph_index: int,
    path: Path,
    settings: ArcGlyphSettings | None = None,
) -> Path:
    """Render a glyph outline and its fitted arcs to a PNG file.

    The outline is drawn with its points marked; the arcs the encoder would
    produce are overlaid in red.

    Args:
        face: Font face to load the glyph from
        glyph_index: Glyph to render
        path: Destination PNG path
        settings: Application settings (defaults to ArcGlyphSettings())

    Returns:
        The path written

    Raises:
        GlyphLoadError: If the glyph cannot be loaded
    """
    settings = settings or ArcGlyphSettings()
    glyph = face.load_glyph(glyph_index)
    size = settings.debug.image_size

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, size, size)
    ctx = cairo.Context(surface)
    ctx.set_source_rgb(1, 1, 1)
    ctx.paint()

    # Font outlines are y-up.
    ctx.translate(0, size)
    ctx.scale(1, -1)
    ctx.set_line_width(settings.debug.line_width)

    _draw_commands(ctx, glyph.commands)
    set_viewport(ctx)
    ctx.new_path()

    _draw_commands(ctx, glyph.commands)
    path_stats(ctx.copy_path())
    ctx.set_source_rgb(0.4, 0.4, 0.4)
    fancy_stroke(ctx)

    tolerance = settings.encoder.tolerance_for(face.units_per_em)
    accumulator = ArcAccumulator(tolerance, max_depth=settings.encoder.max_subdivision_depth)
    decompose_outline(glyph.commands, accumulator)
    accumulator.close_path()

    ctx.set_source_rgb(0.8, 0.1, 0.1)
    demo_arcs(ctx, arcs_from_endpoints(accumulator.endpoints))

    surface.write_to_png(str(path))
    logger.debug("Glyph rendered", glyph=glyph_index, path=str(path))
    return path


def _draw_commands(ctx: cairo.Context, commands: list[OutlineCommand]) -> None:
    decompose_outline(commands, CairoOutlineSink(ctx))
    ctx.close_path()
