"""Lexical token types."""

import enum
from dataclasses import dataclass

from .types import DEFAULT_DELIMITERS, Delimiters


class TokenType(enum.Enum):
    """Token kinds produced by the lexer."""

    TEXT = "TEXT"
    VARIABLE = "VARIABLE"  # {{name}}
    UNESCAPED_VARIABLE = "UNESCAPED_VARIABLE"  # {{{name}}} / {{&name}}
    SECTION_START = "SECTION_START"  # {{#name}}
    INVERTED_START = "INVERTED_START"  # {{^name}}
    SECTION_END = "SECTION_END"  # {{/name}}
    PARTIAL = "PARTIAL"  # {{>name}}
    COMMENT = "COMMENT"  # {{!...}}
    SET_DELIMITERS = "SET_DELIMITERS"  # {{=<% %>=}}


# Tags that may stand alone on a line and have that line removed from output
STANDALONE_TYPES = frozenset(
    {
        TokenType.SECTION_START,
        TokenType.INVERTED_START,
        TokenType.SECTION_END,
        TokenType.PARTIAL,
        TokenType.COMMENT,
        TokenType.SET_DELIMITERS,
    }
)


@dataclass(frozen=True)
class Token:
    """Token with its span in the template source.

    ``value`` is the literal text for TEXT tokens, the trimmed tag name for
    variable/section/partial tokens, and ``"<open> <close>"`` for
    SET_DELIMITERS. ``start``/``end`` cover the whole tag including markers.
    """

    type: TokenType
    value: str
    start: int
    end: int
    delimiters: Delimiters = DEFAULT_DELIMITERS  # Pair that was active when lexed

    @property
    def is_standalone_candidate(self) -> bool:
        return self.type in STANDALONE_TYPES

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.start}:{self.end})"


__all__ = ["TokenType", "Token", "STANDALONE_TYPES"]
