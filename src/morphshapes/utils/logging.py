"""Logging utilities for morphshapes."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class RenderStats:
    """Statistics from a render run."""

    shapes_built: int = 0
    frames_rendered: int = 0
    cubics_emitted: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    output_path: Path | None = None
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

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

    logger = structlog.get_logger("morphshapes")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_shape_built(self, name: str, features: int, cubics: int) -> None:
        """Log a successfully built shape."""
        self._logger.debug("Shape built", shape=name, features=features, cubics=cubics)
        self._stats.shapes_built += 1

    def log_morph_matched(self, start: str, end: str, pairs: int, duration_ms: float) -> None:
        """Log a completed outline match."""
        self._logger.info(
            "Morph matched",
            start=start,
            end=end,
            pairs=pairs,
            duration_ms=round(duration_ms, 2),
        )

    def log_frame(self, progress: float, cubics: int) -> None:
        """Log one rendered frame."""
        self._logger.debug("Frame rendered", progress=round(progress, 4), cubics=cubics)
        self._stats.frames_rendered += 1
        self._stats.cubics_emitted += cubics

    def log_saved(self, output_path: Path) -> None:
        """Log the written output file."""
        self._logger.info("Output saved", path=str(output_path))
        self._stats.output_path = output_path

    def log_error(
        self,
        name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a shape or morph failure."""
        self._logger.error(
            "Shape processing failed",
            shape=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
