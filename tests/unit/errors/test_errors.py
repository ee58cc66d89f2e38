"""Unit tests for the error registry, factory and error types."""

import pytest

from mustachio.errors import (
    ConfigError,
    ErrorCategory,
    ErrorFactory,
    ErrorRegistry,
    ErrorTemplate,
    LexError,
    ParseError,
    RenderError,
    TemplateError,
    create_error,
    get_error_factory,
    line_and_column,
)

BUILTIN_CODES = [
    "UNCLOSED_TAG",
    "UNCLOSED_TRIPLE",
    "INVALID_DELIMITERS",
    "UNMATCHED_SECTION_END",
    "SECTION_MISMATCH",
    "UNCLOSED_SECTION",
    "RECURSION_LIMIT",
    "LAMBDA_FAILED",
    "TEMPLATE_TOO_DEEP",
    "CONFIG_INVALID",
]


@pytest.mark.unit
class TestErrorRegistry:
    """Tests for ErrorRegistry."""

    def test_builtin_codes(self):
        registry = ErrorRegistry()
        assert set(BUILTIN_CODES) <= set(registry.list_codes())

    @pytest.mark.parametrize(
        ("code", "error_class"),
        [
            ("UNCLOSED_TAG", LexError),
            ("SECTION_MISMATCH", ParseError),
            ("RECURSION_LIMIT", RenderError),
            ("CONFIG_INVALID", ConfigError),
        ],
    )
    def test_class_follows_category(self, code, error_class):
        error = ErrorRegistry().create(code, {"tag": "x"})
        assert type(error) is error_class
        assert isinstance(error, TemplateError)

    def test_interpolation(self):
        error = ErrorRegistry().create("SECTION_MISMATCH", {"tag": "b", "expected": "a"})
        assert error.message == "Section 'a' closed by 'b'"
        assert error.category is ErrorCategory.PARSE

    def test_missing_context_keeps_template(self):
        error = ErrorRegistry().create("UNCLOSED_SECTION")
        assert error.message == "Unclosed section '{tag}'"

    def test_literal_braces(self):
        error = ErrorRegistry().create("UNCLOSED_TRIPLE")
        assert error.message == "Unclosed triple mustache: no '}}}' after '{{{'"

    def test_unknown_code(self):
        with pytest.raises(ValueError, match="Unknown error code"):
            ErrorRegistry().create("NOPE")

    def test_register(self):
        registry = ErrorRegistry()
        registry.register(
            ErrorTemplate(code="CUSTOM", category=ErrorCategory.RENDER, message_template="{x}!")
        )
        assert registry.get_template("CUSTOM") is not None
        assert registry.create("CUSTOM", {"x": "hey"}).message == "hey!"


@pytest.mark.unit
class TestErrorFactory:
    """Tests for ErrorFactory."""

    def test_position_from_source(self):
        error = ErrorFactory().create(
            "UNCLOSED_TAG", source="ab\n  {{x", offset=5, open="{{", close="}}"
        )
        assert (error.offset, error.line, error.column) == (5, 2, 3)
        assert str(error) == "Unclosed tag: no '}}' after '{{' at 2:3"

    def test_no_position_without_source(self):
        error = ErrorFactory().create("UNCLOSED_SECTION", tag="a", offset=3)
        assert error.offset == 3
        assert error.line is None
        assert str(error) == "Unclosed section 'a'"

    def test_from_exception(self):
        cause = KeyError("missing")
        error = ErrorFactory().from_exception(cause, tag="lookup")
        assert error.code == "LAMBDA_FAILED"
        assert error.tag == "lookup"
        assert error.message == "Lambda 'lookup' raised KeyError"
        assert error.detail == "'missing'"

    def test_from_template_error_unchanged(self):
        original = create_error("UNCLOSED_SECTION", tag="a")
        assert ErrorFactory().from_exception(original) is original

    def test_singleton(self):
        assert get_error_factory() is get_error_factory()


@pytest.mark.unit
class TestTemplateError:
    """Tests for TemplateError behaviour."""

    def test_with_context_adds_partial(self):
        error = create_error("UNCLOSED_SECTION", tag="a", source="{{#a}}", offset=0)
        wrapped = error.with_context(partial="header")
        assert type(wrapped) is ParseError
        assert wrapped.partial == "header"
        assert str(wrapped) == "Unclosed section 'a' at 1:1 (in partial 'header')"
        assert error.partial is None

    def test_with_context_keeps_innermost(self):
        error = create_error("UNCLOSED_SECTION", tag="a", partial="inner")
        assert error.with_context(partial="outer").partial == "inner"

    def test_to_dict(self):
        error = create_error("RECURSION_LIMIT", tag="p", max_depth=3)
        data = error.to_dict()
        assert data["code"] == "RECURSION_LIMIT"
        assert data["category"] == "RENDER"
        assert data["message"] == "Nesting depth exceeded 3 while expanding 'p'"
        assert data["cause"] is None
        assert "timestamp" in data

    def test_is_exception(self):
        with pytest.raises(TemplateError):
            raise create_error("CONFIG_INVALID", detail="broken")


@pytest.mark.unit
class TestLineAndColumn:
    """Tests for offset translation."""

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [(0, (1, 1)), (2, (1, 3)), (4, (2, 1)), (6, (2, 3)), (99, (2, 4))],
    )
    def test_positions(self, offset, expected):
        assert line_and_column("abc\nxyz", offset) == expected
