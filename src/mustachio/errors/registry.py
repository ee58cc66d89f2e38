"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ERROR_CLASSES, ErrorCategory, ErrorTemplate, TemplateError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes.

        Returns:
            List of error codes
        """
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Register (or replace) an error template.

        Args:
            template: Template to register under its code
        """
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: TemplateError | None = None,
    ) -> TemplateError:
        """Create error instance from template + context.

        The concrete exception class follows the template's category, so a
        LEX template produces a LexError, and so on.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            TemplateError subclass instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        error_class = ERROR_CLASSES.get(template.category, TemplateError)
        return error_class(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            offset=context.get("offset"),
            line=context.get("line"),
            column=context.get("column"),
            tag=context.get("tag"),
            partial=context.get("partial"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # LEX Errors
        self._templates["UNCLOSED_TAG"] = ErrorTemplate(
            code="UNCLOSED_TAG",
            category=ErrorCategory.LEX,
            message_template="Unclosed tag: no '{close}' after '{open}'",
            detail_template="The lexer reached the end of the template while looking for the closing delimiter",
            suggestion_template="Close the tag with '{close}' or escape the opening delimiter",
        )

        self._templates["UNCLOSED_TRIPLE"] = ErrorTemplate(
            code="UNCLOSED_TRIPLE",
            category=ErrorCategory.LEX,
            message_template="Unclosed triple mustache: no '}}}}}}' after '{{{{{{'",
            suggestion_template="Close the unescaped variable with '}}}}}}' or use '{{{{& name}}}}'",
        )

        self._templates["INVALID_DELIMITERS"] = ErrorTemplate(
            code="INVALID_DELIMITERS",
            category=ErrorCategory.LEX,
            message_template="Invalid set-delimiters tag '{body}'",
            detail_template="A set-delimiters tag must contain exactly two whitespace-separated markers",
            suggestion_template="Use the form '{{{{=<% %>=}}}}'",
        )

        # PARSE Errors
        self._templates["UNMATCHED_SECTION_END"] = ErrorTemplate(
            code="UNMATCHED_SECTION_END",
            category=ErrorCategory.PARSE,
            message_template="Section end '{tag}' has no matching section start",
        )

        self._templates["SECTION_MISMATCH"] = ErrorTemplate(
            code="SECTION_MISMATCH",
            category=ErrorCategory.PARSE,
            message_template="Section '{expected}' closed by '{tag}'",
            suggestion_template="Close sections in the reverse order they were opened",
        )

        self._templates["UNCLOSED_SECTION"] = ErrorTemplate(
            code="UNCLOSED_SECTION",
            category=ErrorCategory.PARSE,
            message_template="Unclosed section '{tag}'",
            suggestion_template="Add a matching section end tag",
        )

        # RENDER Errors
        self._templates["RECURSION_LIMIT"] = ErrorTemplate(
            code="RECURSION_LIMIT",
            category=ErrorCategory.RENDER,
            message_template="Nesting depth exceeded {max_depth} while expanding '{tag}'",
            detail_template="Partials and lambda output are rendered recursively; the chain did not terminate",
            suggestion_template="Check for partials that include themselves or raise max_depth",
        )

        self._templates["TEMPLATE_TOO_DEEP"] = ErrorTemplate(
            code="TEMPLATE_TOO_DEEP",
            category=ErrorCategory.RENDER,
            message_template="Template nesting too deep to render",
            detail_template="Sections nested beyond the interpreter recursion limit",
            suggestion_template="Flatten deeply nested sections",
        )

        self._templates["LAMBDA_FAILED"] = ErrorTemplate(
            code="LAMBDA_FAILED",
            category=ErrorCategory.RENDER,
            message_template="Lambda '{tag}' raised {error_type}",
            detail_template="{detail}",
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            detail_template="{detail}",
            suggestion_template="Check the configuration file against the documented keys",
        )
