"""Error factory for creating TemplateErrors."""

from typing import Any

from .errors import TemplateError, line_and_column
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates TemplateErrors from codes and from host exceptions."""

    def __init__(self, registry: ErrorRegistry | None = None):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
        """
        self.registry = registry or ErrorRegistry()

    def from_exception(self, error: Exception, tag: str | None = None) -> TemplateError:
        """Convert an exception raised by host code (a lambda) to a TemplateError.

        Args:
            error: Exception to convert
            tag: Name of the tag whose lambda raised

        Returns:
            TemplateError instance; TemplateErrors are returned unchanged
        """
        if isinstance(error, TemplateError):
            return error

        return self.registry.create(
            code="LAMBDA_FAILED",
            context={
                "tag": tag,
                "error_type": type(error).__name__,
                "detail": str(error),
            },
        )

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> TemplateError:
        """Create TemplateError directly from code.

        When both ``source`` and ``offset`` are supplied, line and column are
        derived from them; ``source`` itself is not kept on the error.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            TemplateError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        source = merged_context.pop("source", None)
        offset = merged_context.get("offset")
        if source is not None and offset is not None:
            merged_context["line"], merged_context["column"] = line_and_column(source, offset)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton.

    Returns:
        Default ErrorFactory instance
    """
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> TemplateError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        TemplateError instance
    """
    return get_error_factory().create(code, context)
