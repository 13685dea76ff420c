"""CLI application entry point for arcglyph.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from arcglyph import __version__
from arcglyph.cli.output import (
    console,
    print_error,
    print_font_info,
    print_glyph_table,
    print_header,
    print_retry,
    print_step,
    print_summary,
)
from arcglyph.config import (
    DEFAULT_TOLERANCE_PER_EM,
    ArcGlyphSettings,
    EncoderConfig,
    LoggingConfig,
)
from arcglyph.core import Font, MemoryAtlas
from arcglyph.core.encode import MAX_ENCODED_LENGTH
from arcglyph.domain import GlyphInfo
from arcglyph.exceptions import (
    ArcGlyphError,
    AtlasFullError,
    BufferTooSmallError,
    FontLoadError,
    GlyphLoadError,
)
from arcglyph.io import FontReader, FontToolsFace
from arcglyph.utils import EncodingStats, configure_logging

# Times a glyph is retried with a doubled buffer after BufferTooSmallError.
MAX_BUFFER_RETRIES = 4

# Create the Typer app
app = typer.Typer(
    name="arcglyph",
    help="Encode font glyphs into arc lists and report their atlas records.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]arcglyph[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def encode(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    text: Annotated[
        str | None,
        typer.Option(
            "--text",
            "-t",
            help="Encode the glyphs of these characters",
        ),
    ] = None,
    glyphs: Annotated[
        list[int] | None,
        typer.Option(
            "--glyph",
            "-g",
            help="Encode this glyph index (repeatable)",
            min=0,
        ),
    ] = None,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            help="Approximation tolerance as a fraction of the em",
            min=0.0,
            max=0.1,
        ),
    ] = DEFAULT_TOLERANCE_PER_EM,
    buffer_capacity: Annotated[
        int,
        typer.Option(
            "--buffer-capacity",
            "-b",
            help="Initial encoding buffer size in texels",
            min=1,
            max=MAX_ENCODED_LENGTH,
        ),
    ] = 4096,
    render: Annotated[
        Path | None,
        typer.Option(
            "--render",
            help="Write a debug PNG per glyph into this directory (needs pycairo)",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Encode glyphs of a font into arc lists and print their records.

    Every glyph is encoded once, uploaded to an in-memory atlas and listed
    with its advance, extents, grid and atlas placement. Without --text or
    --glyph all glyphs of the font are encoded.

    Example:
        arcglyph Roboto-Regular.ttf --text "Hello" --render out/
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if tolerance <= 0.0:
        print_error("Tolerance must be greater than zero")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    # Create settings from CLI arguments
    settings = ArcGlyphSettings(
        encoder=EncoderConfig(
            tolerance_per_em=tolerance,
            buffer_capacity=buffer_capacity,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        if not quiet:
            print_step("Loading font")

        with FontReader(input_font) as reader:
            face = reader.face
            if not quiet:
                print_font_info(
                    font_path=str(input_font),
                    font_type=reader.format,
                    glyph_count=face.glyph_count,
                    upm=face.units_per_em,
                )

            indices = _select_glyphs(face, text, glyphs)
            if not quiet:
                print_step(f"Encoding {len(indices)} glyphs")

            rows, font_stats = _encode_glyphs(face, indices, settings, verbose)

            if render is not None:
                if not quiet:
                    print_step("Rendering")
                _render_glyphs(face, [index for index, _, _ in rows], render, settings)

        if not quiet:
            print_glyph_table(rows)
            print_summary(
                encoded=font_stats.encoded_count,
                cache_hits=font_stats.cache_hits,
                errors=font_stats.error_count,
                bytes_used=font_stats.bytes_used,
                avg_time_ms=font_stats.avg_glyph_time_ms,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except AtlasFullError as e:
        print_error(str(e), details="Encode fewer glyphs per run.")
        raise typer.Exit(code=1)
    except ArcGlyphError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _select_glyphs(
    face: FontToolsFace,
    text: str | None,
    glyphs: list[int] | None,
) -> list[int]:
    """Resolve the glyph indices to encode, in order and without duplicates."""
    indices: list[int] = list(glyphs or [])
    if text:
        indices.extend(face.glyph_index_for_char(char) for char in text)
    if not indices:
        return list(range(face.glyph_count))
    return list(dict.fromkeys(indices))


def _encode_glyphs(
    face: FontToolsFace,
    indices: list[int],
    settings: ArcGlyphSettings,
    verbose: bool,
) -> tuple[list[tuple[int, str, GlyphInfo]], EncodingStats]:
    """Encode glyphs through a font handle, reporting glyph load failures.

    Glyphs that cannot be loaded are reported and skipped; other errors end
    the run.

    Returns:
        Tuple of (rows for the glyph table, encoding statistics)
    """
    atlas = MemoryAtlas(settings.atlas)
    font = Font(face, atlas, settings.encoder)
    atlas.destroy()

    rows: list[tuple[int, str, GlyphInfo]] = []
    try:
        for index in indices:
            try:
                info = _lookup_with_retry(font, index, settings.encoder.buffer_capacity, verbose)
            except GlyphLoadError as e:
                print_error(str(e))
                continue
            rows.append((index, face.glyph_name(index), info))
        return rows, font.stats
    finally:
        font.destroy()


def _lookup_with_retry(font: Font, glyph_index: int, capacity: int, verbose: bool) -> GlyphInfo:
    """Look up a glyph, doubling the buffer while it is too small.

    Raises:
        BufferTooSmallError: If the glyph still does not fit after the last retry
    """
    retries = 0
    while True:
        try:
            return font.lookup_glyph(glyph_index, buffer_capacity=capacity)
        except BufferTooSmallError as e:
            if retries == MAX_BUFFER_RETRIES or capacity >= MAX_ENCODED_LENGTH:
                raise
            retries += 1
            capacity = min(max(capacity * 2, e.required), MAX_ENCODED_LENGTH)
            if verbose:
                print_retry(glyph_index, capacity)


def _render_glyphs(
    face: FontToolsFace,
    indices: list[int],
    directory: Path,
    settings: ArcGlyphSettings,
) -> None:
    """Write one debug PNG per glyph into directory."""
    from arcglyph.debug import render_glyph_png

    directory.mkdir(parents=True, exist_ok=True)
    for index in indices:
        render_glyph_png(face, index, directory / f"glyph_{index:05d}.png", settings)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
