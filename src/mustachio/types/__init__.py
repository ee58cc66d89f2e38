"""Shared types for mustachio.

Import from here rather than submodules:
    from mustachio.types import EscapeMode, LogLevel, ValidationResult
"""

from .enums import EscapeMode, LogFormat, LogLevel
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "EscapeMode",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
