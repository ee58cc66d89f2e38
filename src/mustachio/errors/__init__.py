"""mustachio error handling - Structured errors with context."""

from .errors import (
    ConfigError,
    ErrorCategory,
    ErrorTemplate,
    LexError,
    ParseError,
    RenderError,
    TemplateError,
    line_and_column,
)
from .factory import ErrorFactory, create_error, get_error_factory
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "TemplateError",
    "LexError",
    "ParseError",
    "RenderError",
    "ConfigError",
    "ErrorCategory",
    "ErrorTemplate",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    # Convenience functions
    "get_error_factory",
    "create_error",
    "line_and_column",
]
