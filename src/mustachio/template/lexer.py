"""Template lexer.

Scans template source into a flat list of tokens. Tag classification is by
leading sigil; a set-delimiters tag switches the markers used for the rest
of the pass.
"""

from mustachio.errors import create_error

from .tokens import Token, TokenType
from .types import DEFAULT_DELIMITERS, Delimiters

# Leading sigil -> token type, checked after comments and set-delimiters
_SIGILS = {
    "#": TokenType.SECTION_START,
    "^": TokenType.INVERTED_START,
    "/": TokenType.SECTION_END,
    ">": TokenType.PARTIAL,
    "&": TokenType.UNESCAPED_VARIABLE,
}

_TRIPLE_OPEN = "{{{"
_TRIPLE_CLOSE = "}}}"


class TemplateLexer:
    """Lexical analyzer for one template pass.

    The instance is a cursor over a single source string: ``delimiters``
    changes as set-delimiters tags are consumed, so a lexer must not be
    reused for a second pass.
    """

    def __init__(self, text: str, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self.text = text
        self.position = 0
        self.length = len(text)
        self.delimiters = delimiters

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Returns:
            Tokens in source order

        Raises:
            LexError: On an unclosed tag or a malformed set-delimiters tag
        """
        tokens: list[Token] = []

        while self.position < self.length:
            open_at = self.text.find(self.delimiters.open, self.position)
            if open_at < 0:
                tokens.append(self._text_token(self.position, self.length))
                break

            if open_at > self.position:
                tokens.append(self._text_token(self.position, open_at))
                self.position = open_at

            token = self._scan_tag()
            if token is not None:
                tokens.append(token)

        return tokens

    def _text_token(self, start: int, end: int) -> Token:
        return Token(TokenType.TEXT, self.text[start:end], start, end, self.delimiters)

    def _scan_tag(self) -> Token | None:
        """Scan the tag starting at the current position and advance past it.

        Returns None for tags with an empty body.
        """
        start = self.position
        delimiters = self.delimiters

        if delimiters.is_default and self.text.startswith(_TRIPLE_OPEN, start):
            close_at = self.text.find(_TRIPLE_CLOSE, start + len(_TRIPLE_OPEN))
            if close_at < 0:
                raise create_error("UNCLOSED_TRIPLE", source=self.text, offset=start)
            end = close_at + len(_TRIPLE_CLOSE)
            self.position = end
            name = self.text[start + len(_TRIPLE_OPEN) : close_at].strip()
            return Token(TokenType.UNESCAPED_VARIABLE, name, start, end, delimiters)

        body_start = start + len(delimiters.open)
        close_at = self.text.find(delimiters.close, body_start)
        if close_at < 0:
            raise create_error(
                "UNCLOSED_TAG",
                source=self.text,
                offset=start,
                open=delimiters.open,
                close=delimiters.close,
            )
        end = close_at + len(delimiters.close)
        self.position = end

        body = self.text[body_start:close_at].strip()
        if not body:
            return None

        return self._classify(body, start, end, delimiters)

    def _classify(self, body: str, start: int, end: int, delimiters: Delimiters) -> Token:
        """Build the token for a non-empty, trimmed tag body."""
        if body.startswith("!"):
            return Token(TokenType.COMMENT, body[1:].strip(), start, end, delimiters)

        if body.startswith("=") and body.endswith("="):
            markers = body[1:-1].split()
            if len(markers) != 2:
                raise create_error(
                    "INVALID_DELIMITERS",
                    source=self.text,
                    offset=start,
                    body=body,
                )
            # Applies to everything scanned after this tag
            self.delimiters = Delimiters(markers[0], markers[1])
            return Token(TokenType.SET_DELIMITERS, " ".join(markers), start, end, delimiters)

        token_type = _SIGILS.get(body[0])
        if token_type is not None:
            return Token(token_type, body[1:].strip(), start, end, delimiters)

        if body.startswith("{") and body.endswith("}"):
            return Token(TokenType.UNESCAPED_VARIABLE, body[1:-1].strip(), start, end, delimiters)

        return Token(TokenType.VARIABLE, body, start, end, delimiters)


def tokenize_template(text: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> list[Token]:
    """Convenience function for tokenizing a template.

    Args:
        text: Template source
        delimiters: Markers in effect at the start of the pass

    Returns:
        List of tokens

    Raises:
        LexError: On lexical errors
    """
    return TemplateLexer(text, delimiters).tokenize()
