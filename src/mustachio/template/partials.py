"""Partial template resolution.

The engine never decides where partials come from; it asks a loader.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PartialLoader(Protocol):
    """Resolves partial names to template source."""

    def load(self, name: str) -> str | None:
        """Return the partial's source, or None if there is no such partial."""
        ...


class MapPartials:
    """PartialLoader backed by an in-memory mapping."""

    def __init__(self, partials: Mapping[str, str] | None = None):
        self._partials = dict(partials or {})

    def load(self, name: str) -> str | None:
        return self._partials.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._partials

    def __repr__(self) -> str:
        return f"MapPartials({sorted(self._partials)})"


class CallablePartials:
    """PartialLoader backed by a function ``name -> source | None``."""

    def __init__(self, func: Callable[[str], str | None]):
        self._func = func

    def load(self, name: str) -> str | None:
        return self._func(name)


PartialsLike = PartialLoader | Mapping[str, str] | Callable[[str], str | None] | None


def as_partial_loader(partials: Any) -> PartialLoader | None:
    """Normalise the accepted partial sources into a PartialLoader.

    Args:
        partials: A PartialLoader, a mapping of name to source, a callable
            taking a name, or None

    Returns:
        PartialLoader, or None when no partials are available

    Raises:
        TypeError: For any other type
    """
    if partials is None:
        return None
    if isinstance(partials, PartialLoader):
        return partials
    if isinstance(partials, Mapping):
        return MapPartials(partials)
    if callable(partials):
        return CallablePartials(partials)
    msg = f"Unsupported partials type: {type(partials).__name__}"
    raise TypeError(msg)
