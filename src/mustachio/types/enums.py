"""Shared enumerations for mustachio."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class EscapeMode(str, Enum):
    """How escaped variable tags transform interpolated text."""

    HTML = "html"
    NONE = "none"
