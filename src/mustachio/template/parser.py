"""Template parser.

Turns the lexer's flat token list into a tree of nodes. Besides nesting
sections, the parser applies standalone-line trimming: a section, partial,
comment or set-delimiters tag alone on its line removes that whole line
(indentation and line ending included) from the output.
"""

from dataclasses import dataclass, field

from mustachio.errors import create_error
from mustachio.logging import get_logger

from .lexer import tokenize_template
from .nodes import PartialNode, SectionNode, Template, TemplateNode, TextNode, VariableNode
from .tokens import Token, TokenType
from .types import DEFAULT_DELIMITERS, Delimiters

logger = get_logger("parser")

_LINE_WHITESPACE = frozenset(" \t\r")


@dataclass(frozen=True)
class Standalone:
    """Result of standalone detection for one tag."""

    indent: str  # Whitespace between line start and the tag
    remove_to: int  # Offset just past the line ending (or end of source)


@dataclass
class _OpenSection:
    token: Token
    children: list[TemplateNode] = field(default_factory=list)


def _is_line_whitespace(text: str) -> bool:
    return all(char in _LINE_WHITESPACE for char in text)


def detect_standalone(source: str, token: Token) -> Standalone | None:
    """Check whether a tag occupies its source line alone.

    Only spaces, tabs and carriage returns may surround the tag on its line,
    so ``\\r\\n`` and ``\\n`` line endings behave the same.

    Args:
        source: Template source the token was lexed from
        token: Tag token to check

    Returns:
        Standalone info, or None if other content shares the line
    """
    line_start = source.rfind("\n", 0, token.start) + 1
    indent = source[line_start : token.start]
    if not _is_line_whitespace(indent):
        return None

    line_end = source.find("\n", token.end)
    if line_end < 0:
        line_end = len(source)
    if not _is_line_whitespace(source[token.end : line_end]):
        return None

    remove_to = line_end + 1 if line_end < len(source) else line_end
    return Standalone(indent=indent, remove_to=remove_to)


def _trim_line_prefix(nodes: list[TemplateNode]) -> None:
    """Cut the last text node back to (and including) its last newline."""
    if not nodes or not isinstance(nodes[-1], TextNode):
        return
    text = nodes[-1].text
    kept = text[: text.rfind("\n") + 1]
    if kept:
        nodes[-1] = TextNode(kept)
    else:
        nodes.pop()


class TemplateParser:
    """Builds a Template from one token list.

    Keeps a stack of open sections; each open section owns the list its
    children are appended to.
    """

    def __init__(self, source: str, tokens: list[Token]):
        self.source = source
        self.tokens = tokens

    def parse(self) -> Template:
        """Parse the token list.

        Returns:
            Parsed Template

        Raises:
            ParseError: On unmatched, mismatched or unclosed sections
        """
        root: list[TemplateNode] = []
        stack: list[_OpenSection] = []
        skip_until = -1  # Text before this offset belongs to a removed standalone line

        for token in self.tokens:
            current = stack[-1].children if stack else root

            if token.type is TokenType.TEXT:
                text = token.value
                if token.start < skip_until:
                    if token.end <= skip_until:
                        continue
                    text = text[skip_until - token.start :]
                current.append(TextNode(text))
                continue

            if token.type is TokenType.VARIABLE:
                current.append(VariableNode(token.value, escaped=True))
                continue

            if token.type is TokenType.UNESCAPED_VARIABLE:
                current.append(VariableNode(token.value, escaped=False))
                continue

            standalone = (
                detect_standalone(self.source, token) if token.is_standalone_candidate else None
            )
            if standalone is not None:
                _trim_line_prefix(current)
                skip_until = standalone.remove_to

            if token.type is TokenType.PARTIAL:
                indent = standalone.indent if standalone is not None else ""
                current.append(PartialNode(token.value, indent=indent))

            elif token.type in (TokenType.SECTION_START, TokenType.INVERTED_START):
                stack.append(_OpenSection(token))

            elif token.type is TokenType.SECTION_END:
                section = self._close_section(stack, token)
                (stack[-1].children if stack else root).append(section)

            # COMMENT and SET_DELIMITERS leave no node behind

        if stack:
            opener = stack[-1].token
            raise create_error(
                "UNCLOSED_SECTION",
                source=self.source,
                offset=opener.start,
                tag=opener.value,
            )

        logger.debug("Template parsed", nodes=len(root), tokens=len(self.tokens))
        return Template(nodes=tuple(root), source=self.source)

    def _close_section(self, stack: list[_OpenSection], token: Token) -> SectionNode:
        """Pop the innermost open section and build its node."""
        if not stack:
            raise create_error(
                "UNMATCHED_SECTION_END",
                source=self.source,
                offset=token.start,
                tag=token.value,
            )

        opened = stack[-1]
        if opened.token.value != token.value:
            raise create_error(
                "SECTION_MISMATCH",
                source=self.source,
                offset=token.start,
                tag=token.value,
                expected=opened.token.value,
            )
        stack.pop()

        return SectionNode(
            name=opened.token.value,
            inverted=opened.token.type is TokenType.INVERTED_START,
            children=tuple(opened.children),
            raw=self.source[opened.token.end : token.start],
            delimiters=opened.token.delimiters,
        )


def parse_template(source: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> Template:
    """Lex and parse a template.

    Args:
        source: Template source
        delimiters: Markers in effect at the start of the pass

    Returns:
        Parsed Template

    Raises:
        LexError: On lexical errors
        ParseError: On structural errors
    """
    return TemplateParser(source, tokenize_template(source, delimiters)).parse()
