"""Value model: converting host data into the values templates render.

Host data is normalised once, when it enters the engine. Containers become
plain ``dict`` / ``list`` and callables are classified by arity into
``Lambda`` wrappers, so the renderer dispatches on a closed set of shapes:
None, bool, int, float, str, list, dict, Lambda, or an opaque scalar.
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .context import MISSING


class LambdaKind(str, Enum):
    """Calling convention of a lambda value."""

    VARIABLE = "variable"  # () -> str
    SECTION = "section"  # (raw_text) -> str
    SECTION_WITH_RENDER = "section_with_render"  # (raw_text, render) -> str


_ARITY_KINDS = {
    0: LambdaKind.VARIABLE,
    1: LambdaKind.SECTION,
    2: LambdaKind.SECTION_WITH_RENDER,
}

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class Lambda:
    """A callable data value with an explicit calling convention.

    Build one directly to skip arity detection:

        data = {"upper": Lambda.section_with_render(lambda text, render: render(text).upper())}
    """

    func: Callable[..., Any]
    kind: LambdaKind

    @classmethod
    def variable(cls, func: Callable[[], Any]) -> "Lambda":
        return cls(func, LambdaKind.VARIABLE)

    @classmethod
    def section(cls, func: Callable[[str], Any]) -> "Lambda":
        return cls(func, LambdaKind.SECTION)

    @classmethod
    def section_with_render(cls, func: Callable[[str, Callable[[str], str]], Any]) -> "Lambda":
        return cls(func, LambdaKind.SECTION_WITH_RENDER)

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)


def lambda_kind(func: Callable[..., Any]) -> LambdaKind | None:
    """Classify a callable by its number of required positional parameters.

    Args:
        func: Host callable

    Returns:
        LambdaKind, or None if the callable cannot serve as a lambda
        (uninspectable signature, required keyword-only parameters, or more
        than two required positional parameters)
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    required = 0
    for parameter in signature.parameters.values():
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind in _POSITIONAL:
            required += 1
        elif parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            return None

    return _ARITY_KINDS.get(required)


def to_value(host: Any) -> Any:
    """Convert host data into template values.

    Mappings become dicts with string keys, lists and tuples become lists,
    bytes decode as UTF-8 and callables (other than classes) become Lambda
    wrappers. Conversion is memoised by identity, so shared and cyclic
    containers are converted once.

    Args:
        host: Arbitrary host data

    Returns:
        Converted value
    """
    return _convert(host, {})


def _convert(host: Any, memo: dict[int, Any]) -> Any:
    if host is None or isinstance(host, (bool, int, float, str, Lambda)):
        return host
    if isinstance(host, (bytes, bytearray)):
        return bytes(host).decode("utf-8", errors="replace")

    key = id(host)
    if key in memo:
        return memo[key]

    if isinstance(host, Mapping):
        mapping: dict[str, Any] = {}
        memo[key] = mapping
        for name, item in host.items():
            mapping[str(name)] = _convert(item, memo)
        return mapping

    if isinstance(host, (list, tuple)):
        items: list[Any] = []
        memo[key] = items
        items.extend(_convert(item, memo) for item in host)
        return items

    if callable(host) and not isinstance(host, type):
        kind = lambda_kind(host)
        if kind is not None:
            wrapped = Lambda(host, kind)
            memo[key] = wrapped
            return wrapped

    return host


def is_falsey(value: Any) -> bool:
    """Whether a value suppresses a section and satisfies an inverted one.

    Falsey: missing, None, False, empty string, empty list. An empty mapping
    and the number zero are truthy.
    """
    if value is MISSING or value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (str, list)):
        return len(value) == 0
    return False
