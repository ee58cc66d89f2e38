"""Template error types."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    LEX = "LEX"
    PARSE = "PARSE"
    RENDER = "RENDER"
    CONFIG = "CONFIG"


@dataclass(eq=False)
class TemplateError(Exception):
    """Structured error with context. Base exception for all mustachio errors."""

    # Identity
    code: str  # e.g., "UNCLOSED_TAG"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Position in the template source
    offset: int | None = None
    line: int | None = None  # 1-based
    column: int | None = None  # 1-based
    tag: str | None = None  # Tag name involved, if any
    partial: str | None = None  # Partial the failing source came from

    cause: "TemplateError | None" = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        text = self.message
        if self.line is not None:
            text = f"{text} at {self.line}:{self.column}"
        if self.partial is not None:
            text = f"{text} (in partial '{self.partial}')"
        super().__init__(text)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and tooling.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
            "tag": self.tag,
            "partial": self.partial,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(self, partial: str | None = None) -> "TemplateError":
        """Return copy with additional context.

        The innermost partial wins: an error that already names a partial keeps it.

        Args:
            partial: Name of the partial whose source produced the error

        Returns:
            New error of the same type with updated context
        """
        return replace(self, partial=self.partial or partial)


class LexError(TemplateError):
    """Tag could not be scanned (unclosed tag, bad set-delimiters body)."""


class ParseError(TemplateError):
    """Token sequence does not form a well-nested template."""


class RenderError(TemplateError):
    """Rendering aborted (recursion limit, failing lambda)."""


class ConfigError(TemplateError):
    """Engine configuration is invalid."""


ERROR_CLASSES: dict[ErrorCategory, type[TemplateError]] = {
    ErrorCategory.LEX: LexError,
    ErrorCategory.PARSE: ParseError,
    ErrorCategory.RENDER: RenderError,
    ErrorCategory.CONFIG: ConfigError,
}


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Unclosed section '{tag}'"
    detail_template: str | None = None
    suggestion_template: str | None = None


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Translate a character offset into a 1-based (line, column) pair.

    Args:
        source: Template text
        offset: Character offset into source

    Returns:
        Line and column numbers
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column
