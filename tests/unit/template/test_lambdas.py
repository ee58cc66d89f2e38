"""Unit tests for lambda values in variable and section position."""

import logging

import pytest

from mustachio.config import EngineConfig
from mustachio.errors import ParseError, RenderError
from mustachio.template import Lambda, TemplateEngine


@pytest.mark.unit
class TestVariableLambdas:
    """Tests for zero-argument lambdas in variable tags."""

    def test_result_is_rendered(self, engine):
        data = {"lambda": lambda: "{{planet}}", "planet": "world"}
        assert engine.render("Hello, {{lambda}}!", data) == "Hello, world!"

    def test_result_is_escaped(self, engine):
        data = {"lambda": lambda: ">"}
        assert engine.render("<{{lambda}}{{{lambda}}}", data) == "<&gt;>"

    def test_non_string_result(self, engine):
        assert engine.render("{{n}}", {"n": lambda: 42}) == "42"

    def test_called_each_time(self, engine):
        calls = []

        def counter():
            calls.append(1)
            return str(len(calls))

        assert engine.render("{{c}}{{c}}{{c}}", {"c": counter}) == "123"

    def test_uses_default_delimiters(self, engine):
        data = {"l": lambda: "{{x}}", "x": "X"}
        assert engine.render("{{=<% %>=}}<%l%>", data) == "X"

    def test_section_lambda_in_variable_position_writes_nothing(self, engine):
        data = {"wrap": lambda text: "no", "both": lambda text, render: "no"}
        assert engine.render("[{{wrap}}{{both}}]", data) == "[]"

    def test_variable_lambda_in_section_is_truthy(self, engine):
        assert engine.render("{{#v}}yes{{/v}}{{^v}}no{{/v}}", {"v": lambda: ""}) == "yes"

    def test_self_referencing_lambda_limited(self):
        engine = TemplateEngine(EngineConfig(max_depth=8))
        with pytest.raises(RenderError) as exc_info:
            engine.render("{{l}}", {"l": lambda: "{{l}}"})
        assert exc_info.value.code == "RECURSION_LIMIT"


@pytest.mark.unit
class TestSectionLambdas:
    """Tests for one- and two-argument lambdas in section tags."""

    def test_receives_raw_text(self, engine):
        seen = []

        def capture(text):
            seen.append(text)
            return ""

        engine.render("{{#l}}a {{b}} c{{/l}}", {"l": capture})
        assert seen == ["a {{b}} c"]

    def test_result_is_rendered_unescaped(self, engine):
        data = {"wrap": lambda text: "<b>" + text + "</b>", "name": "Willy"}
        template = "{{#wrap}}{{name}} is awesome.{{/wrap}}"
        assert engine.render(template, data) == "<b>Willy is awesome.</b>"

    def test_result_uses_section_delimiters(self, engine):
        data = {
            "planet": "Earth",
            "lambda": lambda text: text + "{{planet}} => |planet|" + text,
        }
        template = "{{= | | =}}<|#lambda|-|/lambda|>"
        assert engine.render(template, data) == "<-{{planet}} => Earth->"

    def test_not_iterated(self, engine):
        calls = []

        def once(text):
            calls.append(text)
            return text

        assert engine.render("{{#l}}x{{/l}}{{#l}}y{{/l}}", {"l": once}) == "xy"
        assert calls == ["x", "y"]

    def test_none_result(self, engine):
        assert engine.render("[{{#l}}x{{/l}}]", {"l": lambda text: None}) == "[]"

    def test_inverted_lambda_not_called(self, engine):
        calls = []
        data = {"l": lambda text: calls.append(text) or "called"}
        assert engine.render("{{^l}}no{{/l}}", data) == ""
        assert calls == []

    def test_with_render_callback(self, engine):
        data = {
            "bold": Lambda.section_with_render(lambda text, render: "<b>" + render(text) + "</b>"),
            "name": "<Jo>",
        }
        assert engine.render("{{#bold}}Hi {{name}}{{/bold}}", data) == "<b>Hi &lt;Jo&gt;</b>"

    def test_render_callback_output_written_verbatim(self, engine):
        data = {"raw": lambda text, render: "{{not rendered}}"}
        assert engine.render("{{#raw}}x{{/raw}}", data) == "{{not rendered}}"

    def test_render_callback_sees_current_context(self, engine):
        data = {
            "items": [{"n": 1}, {"n": 2}],
            "twice": lambda text, render: render(text) * 2,
        }
        assert engine.render("{{#items}}{{#twice}}{{n}}{{/twice}}{{/items}}", data) == "1122"

    def test_render_callback_swallows_errors(self, engine, isolated_logging, caplog):
        data = {"l": lambda text, render: "[" + render("{{#broken}}") + "]"}
        with caplog.at_level(logging.DEBUG, logger="mustachio"):
            assert engine.render("{{#l}}x{{/l}}", data) == "[]"
        assert any(record.getMessage() == "Render callback failed" for record in caplog.records)

    def test_render_callback_swallows_lambda_failures(self, engine):
        data = {
            "boom": lambda: 1 / 0,
            "l": lambda text, render: "[" + render("{{boom}}") + "]",
        }
        assert engine.render("{{#l}}x{{/l}}", data) == "[]"


@pytest.mark.unit
class TestLambdaFailures:
    """Tests for exceptions raised by lambdas."""

    def test_wrapped_as_render_error(self, engine):
        with pytest.raises(RenderError) as exc_info:
            engine.render("{{boom}}", {"boom": lambda: 1 / 0})
        error = exc_info.value
        assert error.code == "LAMBDA_FAILED"
        assert error.tag == "boom"
        assert "ZeroDivisionError" in error.message
        assert isinstance(error.__cause__, ZeroDivisionError)

    def test_section_lambda_failure(self, engine):
        def fail(text):
            raise ValueError("bad section")

        with pytest.raises(RenderError) as exc_info:
            engine.render("{{#s}}x{{/s}}", {"s": fail})
        assert exc_info.value.detail == "bad section"

    def test_template_errors_propagate_unchanged(self, engine):
        """A lambda returning an invalid template raises the parse error itself."""
        with pytest.raises(ParseError) as exc_info:
            engine.render("{{l}}", {"l": lambda: "{{#open}}"})
        assert exc_info.value.code == "UNCLOSED_SECTION"
