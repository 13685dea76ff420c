"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from arcglyph.domain import GlyphInfo

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]arcglyph[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_retry(glyph_index: int, capacity: int) -> None:
    console.print(
        f"  {SYM_DOT} glyph {glyph_index}: buffer too small, retrying with {capacity:,} texels"
    )


def print_glyph_table(rows: list[tuple[int, str, GlyphInfo]]) -> None:
    """Print encoded glyph records as a table.

    Args:
        rows: Tuples of (glyph index, glyph name, record)
    """
    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("Glyph", justify="right")
    table.add_column("Name")
    table.add_column("Advance", justify="right")
    table.add_column("Extents")
    table.add_column("Grid", justify="right")
    table.add_column("Atlas", justify="right")
    table.add_column("Bytes", justify="right")

    for index, name, info in rows:
        extents = ", ".join(f"{v:.3f}" for v in info.extents.to_tuple())
        table.add_row(
            str(index),
            Text(name),
            f"{info.advance:.3f}",
            f"({extents})",
            f"{info.layout.width}x{info.layout.height}",
            f"{info.atlas_x},{info.atlas_y}",
            f"{info.length * 4:,}",
        )

    console.print(table)


def print_summary(
    encoded: int,
    cache_hits: int,
    errors: int,
    bytes_used: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print the encoding summary.

    Args:
        encoded: Number of glyphs encoded
        cache_hits: Number of lookups served from the cache
        errors: Number of failed encodes
        bytes_used: Total encoded bytes uploaded to the atlas
        avg_time_ms: Average encoding time per glyph in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {encoded} glyphs {SYM_DOT} {cache_hits} cache hits {SYM_DOT} "
        f"{bytes_used:,} bytes {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
