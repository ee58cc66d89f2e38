"""mustachio - Mustache templates for Python.

Logic-less templates: interpolation, sections, inverted sections, partials,
comments, set-delimiters and lambdas.

Usage:
    import mustachio

    mustachio.render("Hello {{name}}!", {"name": "World"})
"""

from mustachio.config import EngineConfig, load_config
from mustachio.errors import ConfigError, LexError, ParseError, RenderError, TemplateError
from mustachio.template import (
    Lambda,
    MapPartials,
    PartialLoader,
    Template,
    TemplateEngine,
    parse,
    render,
)

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "render",
    "parse",
    "TemplateEngine",
    "Template",
    "Lambda",
    "PartialLoader",
    "MapPartials",
    "EngineConfig",
    "load_config",
    "TemplateError",
    "LexError",
    "ParseError",
    "RenderError",
    "ConfigError",
]
