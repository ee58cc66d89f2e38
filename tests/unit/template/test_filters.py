"""Unit tests for escaping and text conversion."""

import pytest

from mustachio.template.filters import ESCAPERS, escape_html, no_escape, stringify
from mustachio.types import EscapeMode


@pytest.mark.unit
class TestEscapeHtml:
    """Tests for HTML escaping."""

    def test_special_characters(self):
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_apostrophe_untouched(self):
        assert escape_html("it's") == "it's"

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert escape_html("plain text") == "plain text"


@pytest.mark.unit
class TestStringify:
    """Tests for value-to-text conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (-7, "-7"),
            (1.0, "1"),
            (-2.0, "-2"),
            (1.5, "1.5"),
            (0.1, "0.1"),
            (1e20, "1e+20"),
            (float("inf"), "inf"),
        ],
    )
    def test_conversion(self, value, expected):
        assert stringify(value) == expected

    def test_opaque_uses_str(self):
        class Thing:
            def __str__(self):
                return "thing"

        assert stringify(Thing()) == "thing"


@pytest.mark.unit
class TestEscapers:
    """Tests for the escaper registry."""

    def test_modes(self):
        assert ESCAPERS[EscapeMode.HTML] is escape_html
        assert ESCAPERS[EscapeMode.NONE] is no_escape

    def test_no_escape(self):
        assert no_escape("<&>") == "<&>"
