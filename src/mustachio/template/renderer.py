"""Template renderer.

Walks a parsed Template against a ScopeChain and writes text to an output
sink. Partials, variable lambdas and section lambdas all go through one
nested parse-and-render path that tracks nesting depth.
"""

import io
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from mustachio.errors import TemplateError, create_error, get_error_factory
from mustachio.logging import get_logger

from .context import MISSING, ScopeChain
from .filters import escape_html, stringify
from .nodes import PartialNode, SectionNode, Template, TemplateNode, TextNode, VariableNode
from .parser import parse_template
from .partials import PartialLoader
from .types import DEFAULT_DELIMITERS, Delimiters
from .values import Lambda, LambdaKind, is_falsey

logger = get_logger("render")

DEFAULT_MAX_DEPTH = 64


class OutputSink(Protocol):
    """Anything rendered text can be written to (``io.StringIO``, a file, ...)."""

    def write(self, text: str) -> Any: ...


def indent_lines(text: str, indent: str) -> str:
    """Prefix every line of ``text`` with ``indent``.

    A trailing line ending does not start a new line, so no indentation is
    added after it.

    Args:
        text: Partial source
        indent: Whitespace to prefix

    Returns:
        Indented text
    """
    if not indent or not text:
        return text
    trailing_newline = text.endswith("\n")
    lines = text[:-1].split("\n") if trailing_newline else text.split("\n")
    indented = "\n".join(indent + line for line in lines)
    return indented + "\n" if trailing_newline else indented


class Renderer:
    """Renders parsed templates.

    A Renderer holds only configuration (partial loader, escaper, default
    delimiters and depth limit) and is safe to reuse across renders.
    """

    def __init__(
        self,
        partials: PartialLoader | None = None,
        escape: Callable[[str], str] = escape_html,
        delimiters: Delimiters = DEFAULT_DELIMITERS,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """Initialize renderer.

        Args:
            partials: Loader for partial tags (None: partials render empty)
            escape: Escape function for escaped interpolation
            delimiters: Markers for parsing partials and variable lambda output
            max_depth: Maximum nesting of partials and lambda expansions
        """
        self.partials = partials
        self.escape = escape
        self.delimiters = delimiters
        self.max_depth = max_depth

    def render(self, template: Template, chain: ScopeChain, out: OutputSink) -> None:
        """Render a template into ``out``.

        Args:
            template: Parsed template
            chain: Scope chain to resolve names against
            out: Output sink

        Raises:
            TemplateError: On errors in partials or lambda output, on lambda
                failures, or when the depth limit is exceeded
        """
        try:
            self._render_nodes(template.nodes, chain, out, 0)
        except RecursionError as e:
            logger.warning("Template nesting too deep", max_depth=self.max_depth)
            raise create_error("TEMPLATE_TOO_DEEP") from e

    def render_to_string(self, template: Template, chain: ScopeChain) -> str:
        buffer = io.StringIO()
        self.render(template, chain, buffer)
        return buffer.getvalue()

    def _render_nodes(
        self,
        nodes: Sequence[TemplateNode],
        chain: ScopeChain,
        out: OutputSink,
        depth: int,
    ) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                out.write(node.text)
            elif isinstance(node, VariableNode):
                self._render_variable(node, chain, out, depth)
            elif isinstance(node, SectionNode):
                if node.inverted:
                    if is_falsey(chain.lookup(node.name)):
                        self._render_nodes(node.children, chain, out, depth)
                else:
                    self._render_section(node, chain, out, depth)
            elif isinstance(node, PartialNode):
                self._render_partial(node, chain, out, depth)
            else:
                msg = f"Unknown node type: {type(node).__name__}"
                raise TypeError(msg)

    def _render_variable(
        self, node: VariableNode, chain: ScopeChain, out: OutputSink, depth: int
    ) -> None:
        value = chain.lookup(node.name)
        if value is MISSING or value is None:
            return

        if isinstance(value, Lambda):
            if value.kind is not LambdaKind.VARIABLE:
                return
            source = stringify(self._invoke(value, node.name))
            text = self._expand_to_string(source, self.delimiters, chain, depth, node.name)
        else:
            text = stringify(value)

        out.write(self.escape(text) if node.escaped else text)

    def _render_section(
        self, node: SectionNode, chain: ScopeChain, out: OutputSink, depth: int
    ) -> None:
        value = chain.lookup(node.name)

        if isinstance(value, Lambda):
            if value.kind is LambdaKind.SECTION:
                source = stringify(self._invoke(value, node.name, node.raw))
                self._expand(source, node.delimiters, chain, out, depth, node.name)
                return
            if value.kind is LambdaKind.SECTION_WITH_RENDER:
                render = self._render_callback(node, chain, depth)
                out.write(stringify(self._invoke(value, node.name, node.raw, render)))
                return

        if is_falsey(value):
            return

        if isinstance(value, list):
            for item in value:
                self._render_nodes(node.children, chain.push(item), out, depth)
        elif value is True:
            self._render_nodes(node.children, chain, out, depth)
        else:
            self._render_nodes(node.children, chain.push(value), out, depth)

    def _render_partial(
        self, node: PartialNode, chain: ScopeChain, out: OutputSink, depth: int
    ) -> None:
        source = self.partials.load(node.name) if self.partials is not None else None
        if not source:
            logger.debug("Partial not found", partial=node.name)
            return

        source = indent_lines(source, node.indent)
        logger.debug("Expanding partial", partial=node.name, depth=depth + 1)
        try:
            self._expand(source, self.delimiters, chain, out, depth, node.name)
        except TemplateError as error:
            if error.partial is not None:
                raise
            raise error.with_context(partial=node.name) from error

    def _render_callback(
        self, node: SectionNode, chain: ScopeChain, depth: int
    ) -> Callable[[str], str]:
        """Build the ``render`` function handed to a two-argument section lambda."""

        def render(text: str) -> str:
            try:
                return self._expand_to_string(
                    stringify(text), node.delimiters, chain, depth, node.name
                )
            except TemplateError as error:
                logger.debug("Render callback failed", tag=node.name, error=str(error))
                return ""

        return render

    def _invoke(self, value: Lambda, tag: str, *args: Any) -> Any:
        """Call a lambda, wrapping host exceptions as LAMBDA_FAILED."""
        logger.debug("Invoking lambda", tag=tag, kind=value.kind.value)
        try:
            return value(*args)
        except TemplateError:
            raise
        except Exception as e:
            raise get_error_factory().from_exception(e, tag=tag) from e

    def _expand(
        self,
        source: str,
        delimiters: Delimiters,
        chain: ScopeChain,
        out: OutputSink,
        depth: int,
        tag: str,
    ) -> None:
        """Parse ``source`` and render it one level deeper."""
        depth += 1
        if depth > self.max_depth:
            logger.warning("Nesting depth limit reached", tag=tag, max_depth=self.max_depth)
            raise create_error("RECURSION_LIMIT", tag=tag, max_depth=self.max_depth)

        template = parse_template(source, delimiters)
        self._render_nodes(template.nodes, chain, out, depth)

    def _expand_to_string(
        self,
        source: str,
        delimiters: Delimiters,
        chain: ScopeChain,
        depth: int,
        tag: str,
    ) -> str:
        buffer = io.StringIO()
        self._expand(source, delimiters, chain, buffer, depth, tag)
        return buffer.getvalue()
