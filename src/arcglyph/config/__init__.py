"""Configuration management for arcglyph.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- EncoderConfig: Arc fitting and buffer encoding settings
- AtlasConfig: In-memory atlas dimensions
- DebugConfig: Debug rendering settings
- LoggingConfig: Logging settings
- ArcGlyphSettings: Main application settings
"""

from arcglyph.config.settings import (
    DEFAULT_MIN_FONT_SIZE,
    DEFAULT_TOLERANCE_PER_EM,
    ArcGlyphSettings,
    AtlasConfig,
    DebugConfig,
    EncoderConfig,
    LoggingConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_MIN_FONT_SIZE",
    "DEFAULT_TOLERANCE_PER_EM",
    "ArcGlyphSettings",
    "AtlasConfig",
    "DebugConfig",
    "EncoderConfig",
    "LoggingConfig",
    "get_default_settings",
]
