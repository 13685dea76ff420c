"""Logging utilities for arcglyph."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class EncodingStats:
    """Statistics collected by a font handle."""

    encoded_count: int = 0
    cache_hits: int = 0
    error_count: int = 0
    endpoints_used: int = 0
    texels_used: int = 0
    max_error: float = 0.0
    errors: list[tuple[int, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)

    @property
    def bytes_used(self) -> int:
        """Bytes of encoded data handed to the atlas."""
        return self.texels_used * 4

    @property
    def avg_glyph_time_ms(self) -> float | None:
        """Average encoding time per glyph."""
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"arcglyph_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("arcglyph")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class EncodingLogger:
    """Logger for tracking glyph encoding and cache statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = EncodingStats()

    def log_cache_hit(self, glyph_index: int) -> None:
        """Log a glyph served from the cache."""
        self._logger.debug("Glyph cache hit", glyph=glyph_index)
        self._stats.cache_hits += 1

    def log_glyph_start(self, glyph_index: int) -> None:
        """Log start of glyph encoding."""
        self._logger.debug("Encoding glyph", glyph=glyph_index)

    def log_glyph_encoded(
        self,
        glyph_index: int,
        endpoints: int,
        texels: int,
        max_error: float,
        duration_ms: float,
    ) -> None:
        """Log a successfully encoded and uploaded glyph."""
        self._logger.info(
            "Glyph encoded",
            glyph=glyph_index,
            endpoints=endpoints,
            bytes=texels * 4,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.encoded_count += 1
        self._stats.endpoints_used += endpoints
        self._stats.texels_used += texels
        self._stats.max_error = max(self._stats.max_error, max_error)
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_error(self, glyph_index: int, error: Exception) -> None:
        """Log glyph encoding error."""
        self._logger.error(
            "Glyph encoding failed",
            glyph=glyph_index,
            error=str(error),
            error_type=type(error).__name__,
            retryable=getattr(error, "retryable", False),
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_index, str(error)))

    @property
    def stats(self) -> EncodingStats:
        """Get current encoding statistics."""
        return self._stats
