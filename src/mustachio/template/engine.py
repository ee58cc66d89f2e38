"""Template Engine implementation."""

import io
from typing import Any

from mustachio.config import EngineConfig
from mustachio.errors import TemplateError
from mustachio.types import EscapeMode

from .context import ScopeChain
from .filters import ESCAPERS
from .nodes import PartialNode, SectionNode, Template, TemplateNode, VariableNode
from .parser import parse_template
from .partials import PartialsLike, as_partial_loader
from .renderer import OutputSink, Renderer
from .types import Delimiters
from .values import to_value


class TemplateEngine:
    """Render Mustache templates against host data.

    Supports:
    - Interpolation: {{ name }}, {{{ name }}}, {{& name }}, dotted names
    - Sections and inverted sections: {{# items }}...{{/ items }}, {{^ x }}...{{/ x }}
    - Partials: {{> header }}, with standalone indentation
    - Comments and set-delimiters tags: {{! note }}, {{=<% %>=}}
    - Lambdas in variable and section position

    Does NOT support:
    - Loading partials from the filesystem
    - Template inheritance (parent/block tags)
    - Dynamic partial names
    """

    def __init__(self, config: EngineConfig | None = None, partials: PartialsLike = None):
        """Initialize template engine.

        Args:
            config: Engine configuration (defaults to EngineConfig())
            partials: Default partial source for every render
        """
        self.config = config or EngineConfig()
        self._delimiters = Delimiters(self.config.delimiters.open, self.config.delimiters.close)
        self._escape = ESCAPERS[EscapeMode(self.config.escape)]
        self._partials = as_partial_loader(partials)

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    def parse(self, source: str) -> Template:
        """Parse template source with the configured delimiters.

        Args:
            source: Template source

        Returns:
            Immutable Template, reusable across renders

        Raises:
            LexError: On lexical errors
            ParseError: On structural errors
        """
        return parse_template(source, self._delimiters)

    def render(
        self,
        template: str | Template,
        data: Any = None,
        partials: PartialsLike = None,
    ) -> str:
        """Render a template to a string.

        Args:
            template: Template source or parsed Template
            data: Root context
            partials: Partial source for this render (overrides the engine's)

        Returns:
            Rendered text

        Raises:
            TemplateError: If the template, a partial or lambda output is
                invalid, a lambda raises, or the depth limit is exceeded
        """
        buffer = io.StringIO()
        self.render_to(template, data, buffer, partials=partials)
        return buffer.getvalue()

    def render_to(
        self,
        template: str | Template,
        data: Any,
        out: OutputSink,
        partials: PartialsLike = None,
    ) -> None:
        """Render a template into an output sink.

        Text is written as it is produced; on error, whatever was written
        before the failure stays in ``out``.

        Args:
            template: Template source or parsed Template
            data: Root context
            out: Object with a ``write(str)`` method
            partials: Partial source for this render (overrides the engine's)
        """
        if isinstance(template, str):
            template = self.parse(template)
        loader = as_partial_loader(partials) if partials is not None else self._partials
        renderer = Renderer(
            partials=loader,
            escape=self._escape,
            delimiters=self._delimiters,
            max_depth=self.config.max_depth,
        )
        renderer.render(template, ScopeChain.root(to_value(data)), out)

    def validate(self, source: str) -> list[str]:
        """Check template syntax without rendering.

        Args:
            source: Template source

        Returns:
            List of error messages (empty if valid)
        """
        try:
            self.parse(source)
        except TemplateError as e:
            return [str(e)]
        return []

    def extract_references(self, source: str) -> list[str]:
        """List names referenced by a template, in document order.

        Variable and section tags contribute their names, partial tags
        contribute ``>name``. Names repeat as often as they occur.

        Args:
            source: Template source

        Returns:
            Referenced names

        Raises:
            TemplateError: If the template is invalid
        """
        references: list[str] = []
        _collect_references(self.parse(source).nodes, references)
        return references


def _collect_references(nodes: tuple[TemplateNode, ...], references: list[str]) -> None:
    for node in nodes:
        if isinstance(node, VariableNode):
            references.append(node.name)
        elif isinstance(node, SectionNode):
            references.append(node.name)
            _collect_references(node.children, references)
        elif isinstance(node, PartialNode):
            references.append(">" + node.name)


# Convenience singleton
_default_engine: TemplateEngine | None = None


def get_default_engine() -> TemplateEngine:
    """Get default template engine singleton.

    Returns:
        Default TemplateEngine instance
    """
    global _default_engine  # noqa: PLW0603
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine


def render(template: str | Template, data: Any = None, partials: PartialsLike = None) -> str:
    """Render a template with the default engine.

    Args:
        template: Template source or parsed Template
        data: Root context
        partials: Partial source

    Returns:
        Rendered text
    """
    return get_default_engine().render(template, data, partials=partials)


def parse(source: str) -> Template:
    """Parse a template with the default engine."""
    return get_default_engine().parse(source)
