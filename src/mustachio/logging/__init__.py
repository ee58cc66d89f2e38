"""mustachio logging - Named loggers with JSON and colored output."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
    colorize,
)
from .logger import (
    ColoredLogFormatter,
    StructuredLogFormatter,
    TemplateLogger,
    configure_logging,
    get_logger,
    reset_loggers,
)

__all__ = [
    # Loggers and formatters
    "TemplateLogger",
    "StructuredLogFormatter",
    "ColoredLogFormatter",
    "get_logger",
    "reset_loggers",
    "configure_logging",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
    "colorize",
]
