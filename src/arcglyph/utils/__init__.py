"""Utility functions for arcglyph.

This module provides logging setup and per-font encoding statistics.
"""

from arcglyph.utils.logging import (
    EncodingLogger,
    EncodingStats,
    configure_logging,
)

__all__ = [
    "EncodingLogger",
    "EncodingStats",
    "configure_logging",
]
