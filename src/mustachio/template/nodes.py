"""AST nodes.

Immutable node classes for parsed templates. Children are tuples so a parsed
Template can be shared between renders.
"""

from dataclasses import dataclass, field

from .types import DEFAULT_DELIMITERS, Delimiters


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Literal text, written to the output as is."""

    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Interpolation tag: ``{{name}}``, ``{{{name}}}`` or ``{{&name}}``."""

    name: str
    escaped: bool = True


@dataclass(frozen=True)
class SectionNode(TemplateNode):
    """Section or inverted section with its children.

    ``raw`` is the exact source between the opening and closing tags, handed
    to section lambdas unparsed. ``delimiters`` is the pair that was active at
    the opening tag; lambda output is parsed with it.
    """

    name: str
    inverted: bool = False
    children: tuple[TemplateNode, ...] = ()
    raw: str = ""
    delimiters: Delimiters = DEFAULT_DELIMITERS


@dataclass(frozen=True)
class PartialNode(TemplateNode):
    """Partial tag. ``indent`` is set only when the tag stood alone on its line."""

    name: str
    indent: str = ""


@dataclass(frozen=True)
class Template:
    """Root of a parsed template."""

    nodes: tuple[TemplateNode, ...] = ()
    source: str = field(default="", repr=False, compare=False)

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


__all__ = [
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "SectionNode",
    "PartialNode",
    "Template",
]
