"""Command-line interface for arcglyph.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Encode all glyphs or a selection by text or index
- Automatic retry with a larger buffer for oversized glyphs
- Optional debug PNG rendering
- Verbose/quiet output modes
"""

from arcglyph.cli.app import cli, main

__all__ = ["cli", "main"]
