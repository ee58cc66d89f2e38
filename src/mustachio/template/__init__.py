"""Mustache template engine: lexer, parser, scope chain and renderer."""

from .context import MISSING, ScopeChain
from .engine import TemplateEngine, get_default_engine, parse, render
from .filters import ESCAPERS, escape_html, stringify
from .lexer import TemplateLexer, tokenize_template
from .nodes import PartialNode, SectionNode, Template, TemplateNode, TextNode, VariableNode
from .parser import TemplateParser, parse_template
from .partials import CallablePartials, MapPartials, PartialLoader, as_partial_loader
from .renderer import Renderer
from .tokens import Token, TokenType
from .types import DEFAULT_DELIMITERS, Delimiters
from .values import Lambda, LambdaKind, is_falsey, to_value

__all__ = [
    # Engine
    "TemplateEngine",
    "get_default_engine",
    "render",
    "parse",
    # Pipeline
    "TemplateLexer",
    "tokenize_template",
    "TemplateParser",
    "parse_template",
    "Renderer",
    # Tokens and AST
    "Token",
    "TokenType",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "SectionNode",
    "PartialNode",
    "Template",
    "Delimiters",
    "DEFAULT_DELIMITERS",
    # Data
    "ScopeChain",
    "MISSING",
    "Lambda",
    "LambdaKind",
    "to_value",
    "is_falsey",
    # Partials
    "PartialLoader",
    "MapPartials",
    "CallablePartials",
    "as_partial_loader",
    # Text
    "escape_html",
    "stringify",
    "ESCAPERS",
]
