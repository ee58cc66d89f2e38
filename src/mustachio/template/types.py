"""Template engine type definitions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Delimiters:
    """Pair of tag markers in effect while lexing.

    A set-delimiters tag replaces the pair for everything lexed after it;
    each new lexing pass starts from the engine's default pair.
    """

    open: str = "{{"
    close: str = "}}"

    def __post_init__(self) -> None:
        """Reject empty markers."""
        if not self.open or not self.close:
            msg = f"Delimiters must be non-empty, got {self.open!r} {self.close!r}"
            raise ValueError(msg)

    @property
    def is_default(self) -> bool:
        """True for the standard ``{{`` / ``}}`` pair (enables ``{{{name}}}``)."""
        return self.open == "{{" and self.close == "}}"

    def __str__(self) -> str:
        return f"{self.open} {self.close}"


DEFAULT_DELIMITERS = Delimiters()
