"""mustachio logging - stdlib loggers with structured and colored formatters.

Engine modules log through named loggers under the ``mustachio`` namespace.
The library never installs handlers on import; applications opt in with
``configure_logging``.

Usage:
    from mustachio.logging import get_logger

    logger = get_logger("render")
    logger.debug("Partial expanded", partial="header", depth=2)
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TextIO

from mustachio.logging.colors import (
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
from mustachio.types import LogFormat, LogLevel

if TYPE_CHECKING:
    from mustachio.config.models import LoggingConfig

ROOT_LOGGER_NAME = "mustachio"

# LogRecord attributes that are not user-supplied structured fields
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    }
)

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Collect structured fields attached to a record via ``extra``."""
    return {
        key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
    }


def _component(record: logging.LogRecord) -> str:
    """Strip the package prefix from a logger name."""
    prefix = ROOT_LOGGER_NAME + "."
    if record.name.startswith(prefix):
        return record.name[len(prefix) :]
    return record.name


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter.

    Formats log records as JSON with:
    - timestamp (ISO 8601)
    - level
    - component (logger name without the package prefix)
    - message
    - Additional fields from extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "component": _component(record),
            "message": record.getMessage(),
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredLogFormatter(logging.Formatter):
    """Human-readable formatter: ``[COMPONENT] message {fields}``."""

    LEVEL_COLORS = {
        logging.DEBUG: LIGHT_BLUE,
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
    }

    COMPONENT_COLORS = {
        "parser": MAGENTA,
        "render": GREEN,
        "config": ORANGE,
    }

    def __init__(self, truncate_at: int = 200):
        """Initialize formatter.

        Args:
            truncate_at: Maximum length of the rendered structured fields
        """
        super().__init__()
        self.truncate_at = truncate_at

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with ANSI colors.

        Args:
            record: Log record to format

        Returns:
            Colored log line
        """
        component = _component(record)
        color = self.LEVEL_COLORS.get(record.levelno, RESET)
        component_color = self.COMPONENT_COLORS.get(component, RESET)

        label = colorize(f"[{component.upper()}]", component_color)
        output = f"{label} {colorize(record.getMessage(), color)}"

        fields = _extra_fields(record)
        if fields:
            fields_str = str(fields)
            if len(fields_str) > self.truncate_at:
                fields_str = fields_str[: self.truncate_at] + "..."
            output += " " + colorize(fields_str, LIGHT_BLUE)

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class TemplateLogger:
    """Named logger accepting structured keyword fields.

    Wraps Python logging so call sites can write
    ``logger.debug("Lambda invoked", tag="wrapped", kind="section")``.
    """

    def __init__(self, name: str):
        """Initialize logger.

        Args:
            name: Component name (lexer, parser, render, ...)
        """
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    @property
    def name(self) -> str:
        """Full logger name."""
        return self._logger.name

    def is_enabled_for(self, level: int) -> bool:
        """Check whether a level would be emitted."""
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Log message with extra fields.

        Args:
            level: Log level
            message: Log message
            **kwargs: Additional fields to include
        """
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra=kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)


# Logger cache
_loggers: dict[str, TemplateLogger] = {}


def get_logger(name: str) -> TemplateLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (component name)

    Returns:
        TemplateLogger instance
    """
    if name not in _loggers:
        _loggers[name] = TemplateLogger(name)
    return _loggers[name]


def reset_loggers() -> None:
    """Reset logger cache (for testing)."""
    global _loggers  # noqa: PLW0603
    _loggers = {}


def configure_logging(
    config: "LoggingConfig | None" = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a single stream handler to the ``mustachio`` logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        config: Logging configuration (defaults to LoggingConfig())
        stream: Output stream (defaults to stderr)

    Returns:
        The installed handler
    """
    if config is None:
        from mustachio.config.models import LoggingConfig

        config = LoggingConfig()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_mustachio_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if config.format == LogFormat.JSON:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(ColoredLogFormatter(truncate_at=config.truncate_at))
    handler._mustachio_handler = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    root.setLevel(_LEVELS.get(config.level, logging.INFO))
    return handler
