"""Configuration settings for arcglyph."""

from pathlib import Path

from pydantic import BaseModel, Field

# Defaults from the reference demo: a tolerance of 1/2048 em and glyphs that
# must stay legible down to 10 pixels per em.
DEFAULT_TOLERANCE_PER_EM = 1.0 / 2048
DEFAULT_MIN_FONT_SIZE = 10.0


class EncoderConfig(BaseModel):
    """Configuration for glyph encoding.

    Tolerances are expressed as a fraction of the em so that the same
    settings work for fonts of any units-per-em.
    """

    tolerance_per_em: float = Field(
        default=DEFAULT_TOLERANCE_PER_EM,
        gt=0.0,
        le=0.1,
        description="Maximum arc approximation error as a fraction of the em",
    )
    min_font_size: float = Field(
        default=DEFAULT_MIN_FONT_SIZE,
        gt=0.0,
        description="Smallest rendered size in pixels per em; sets the faraway distance",
    )
    grid_size: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Number of grid cells along the longer side of a glyph",
    )
    buffer_capacity: int = Field(
        default=4096,
        ge=1,
        le=0xFFFF,
        description="Encoding buffer capacity in RGBA texels",
    )
    max_subdivision_depth: int = Field(
        default=12,
        ge=1,
        le=32,
        description="Maximum recursion depth when fitting arcs to curves",
    )

    def tolerance_for(self, units_per_em: int) -> float:
        """Get the approximation tolerance in font design units.

        Args:
            units_per_em: Units per em of the font

        Returns:
            Tolerance in design units
        """
        return self.tolerance_per_em * units_per_em


class AtlasConfig(BaseModel):
    """Configuration for the in-memory glyph atlas."""

    width: int = Field(default=2048, ge=1, description="Atlas width in texels")
    height: int = Field(default=1024, ge=1, description="Atlas height in texels")
    item_width: int = Field(
        default=64,
        ge=1,
        description="Width of every allocated block in texels",
    )
    item_height_quantum: int = Field(
        default=8,
        ge=1,
        description="Block heights are rounded up to a multiple of this",
    )


class DebugConfig(BaseModel):
    """Configuration for debug rendering."""

    line_extent: float = Field(
        default=10000.0,
        gt=0.0,
        description="Half-length used to clip unbounded lines when drawing",
    )
    image_size: int = Field(
        default=512,
        ge=16,
        le=8192,
        description="Width and height of rendered debug images in pixels",
    )
    line_width: float = Field(
        default=2.0,
        gt=0.0,
        description="Stroke width of rendered debug images in pixels",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ArcGlyphSettings(BaseModel):
    """Main application settings."""

    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    atlas: AtlasConfig = Field(default_factory=AtlasConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ArcGlyphSettings:
    """Get default application settings."""
    return ArcGlyphSettings()
