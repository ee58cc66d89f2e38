"""Scope chain: the stack of data contexts names resolve against."""

from typing import Any


class _Missing:
    """Sentinel for a failed lookup (distinct from a ``None`` value)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

IMPLICIT_ITERATOR = "."


def resolve_segment(value: Any, segment: str) -> Any:
    """Resolve one name segment against a value.

    Mappings are looked up by key. Lists accept a segment of decimal digits
    as a zero-based index. Anything else has no members.

    Args:
        value: Value to look into
        segment: Single name segment (no dots)

    Returns:
        The member value, or MISSING
    """
    if isinstance(value, dict):
        return value.get(segment, MISSING)
    if isinstance(value, list):
        if not segment.isascii() or not segment.isdigit():
            return MISSING
        index = int(segment)
        if index >= len(value):
            return MISSING
        return value[index]
    return MISSING


class ScopeChain:
    """Immutable stack of context frames, innermost last.

    ``push`` returns a new chain and leaves the receiver untouched, so sibling
    sections and list iterations never see each other's frames.
    """

    __slots__ = ("_frames",)

    def __init__(self, frames: tuple[Any, ...] = ()):
        self._frames = frames

    @classmethod
    def root(cls, data: Any) -> "ScopeChain":
        """Create a chain whose only frame is ``data``."""
        return cls((data,))

    @property
    def frames(self) -> tuple[Any, ...]:
        return self._frames

    @property
    def top(self) -> Any:
        """Innermost frame, or MISSING for an empty chain."""
        return self._frames[-1] if self._frames else MISSING

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return f"ScopeChain(depth={len(self._frames)})"

    def push(self, value: Any) -> "ScopeChain":
        """Return a new chain with ``value`` as the innermost frame.

        Args:
            value: Context to push

        Returns:
            New ScopeChain
        """
        return ScopeChain(self._frames + (value,))

    def lookup(self, name: str) -> Any:
        """Resolve a tag name against the chain.

        ``.`` is the innermost frame. For a dotted name the first segment is
        searched innermost to outermost; the remaining segments resolve only
        against the value found there, with no fallback to outer frames.

        Args:
            name: Tag name, possibly dotted

        Returns:
            Resolved value, or MISSING
        """
        if name == IMPLICIT_ITERATOR:
            return self.top

        first, *rest = name.split(".")

        for frame in reversed(self._frames):
            value = resolve_segment(frame, first)
            if value is MISSING:
                continue
            if not rest:
                return value
            for segment in rest:
                value = resolve_segment(value, segment)
                if value is MISSING:
                    return MISSING
            return value

        return MISSING
