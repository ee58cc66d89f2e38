"""Mustache conformance tests driven by YAML fixtures.

Each file under tests/fixtures/conformance holds a list of cases with a template,
data, optional partials and the expected output.
"""

from pathlib import Path
from typing import Any

import pytest
import yaml

from mustachio.template import TemplateEngine

CASES_DIR = Path(__file__).parent.parent / "fixtures" / "conformance"


def load_cases() -> list[Any]:
    """Collect (file, case) params from every fixture file."""
    params = []
    for path in sorted(CASES_DIR.glob("*.yml")):
        with path.open() as f:
            suite = yaml.safe_load(f)
        for case in suite["tests"]:
            params.append(pytest.param(case, id=f"{path.stem}: {case['name']}"))
    return params


CASES = load_cases()


@pytest.mark.conformance
def test_fixture_files_present(conformance_dir):
    """Every feature area has a fixture file."""
    stems = {path.stem for path in conformance_dir.glob("*.yml")}
    assert {"interpolation", "sections", "inverted", "comments", "delimiters", "partials"} <= stems


@pytest.mark.conformance
@pytest.mark.parametrize("case", CASES)
def test_conformance(case):
    """Rendering a fixture's template yields its expected output."""
    engine = TemplateEngine()
    rendered = engine.render(case["template"], case.get("data"), partials=case.get("partials"))
    assert rendered == case["expected"], case.get("desc", "")


@pytest.mark.conformance
@pytest.mark.parametrize("case", CASES)
def test_conformance_with_parsed_template(case):
    """A parsed template renders the same as its source."""
    engine = TemplateEngine()
    template = engine.parse(case["template"])
    rendered = engine.render(template, case.get("data"), partials=case.get("partials"))
    assert rendered == case["expected"]
