from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable, Optional, Tuple

from partialmock.errors import ConfigurationError


class Matcher:
    """Base class for single-argument matchers used inside argument patterns."""

    def matches(self, value: Any) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        return type(self).__name__


class _AnyValue(Matcher):
    def matches(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "ANY"


class IsA(Matcher):
    def __init__(self, kind: type | Tuple[type, ...]):
        self.kind = kind

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.kind)

    def describe(self) -> str:
        if isinstance(self.kind, tuple):
            names = ", ".join(k.__name__ for k in self.kind)
            return f"IsA(({names}))"
        return f"IsA({self.kind.__name__})"


class Predicate(Matcher):
    def __init__(self, fn: Callable[[Any], bool], description: Optional[str] = None):
        self.fn = fn
        self.description = description or getattr(fn, "__name__", "predicate")

    def matches(self, value: Any) -> bool:
        return bool(self.fn(value))

    def describe(self) -> str:
        return f"Predicate({self.description})"


class Contains(Matcher):
    def __init__(self, item: Any):
        self.item = item

    def matches(self, value: Any) -> bool:
        try:
            return self.item in value
        except TypeError:
            return False

    def describe(self) -> str:
        return f"Contains({self.item!r})"


class Regex(Matcher):
    def __init__(self, pattern: str | re.Pattern[str]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def describe(self) -> str:
        return f"Regex({self.pattern.pattern!r})"


ANY = _AnyValue()


class _AnyArgs:
    """Pattern that accepts any call, whatever its arguments."""

    def matches(self, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> bool:
        return True

    def __repr__(self) -> str:
        return "ANY_ARGS"


ANY_ARGS = _AnyArgs()


def value_matches(expected: Any, actual: Any) -> bool:
    if isinstance(expected, Matcher):
        return expected.matches(actual)
    if isinstance(expected, (list, tuple)) and type(expected) is type(actual):
        if len(expected) != len(actual):
            return False
        return all(value_matches(e, a) for e, a in zip(expected, actual))
    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        if set(expected) != set(actual):
            return False
        return all(value_matches(v, actual[k]) for k, v in expected.items())
    try:
        return bool(expected == actual)
    except Exception:
        # __eq__ implementations that raise count as a mismatch.
        return False


class Args:
    """Structural pattern over one call's positional and keyword arguments."""

    __slots__ = ("args", "kwargs")

    def __init__(self, *args: Any, **kwargs: Any):
        self.args = args
        self.kwargs = kwargs

    def matches(self, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> bool:
        if len(args) != len(self.args):
            return False
        if set(kwargs) != set(self.kwargs):
            return False
        if not all(value_matches(e, a) for e, a in zip(self.args, args)):
            return False
        return all(value_matches(v, kwargs[k]) for k, v in self.kwargs.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Args):
            return NotImplemented
        return self.args == other.args and self.kwargs == other.kwargs

    def __repr__(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in sorted(self.kwargs.items()))
        return "(" + ", ".join(parts) + ")"


ArgumentPattern = Args | _AnyArgs


def coerce_pattern(pattern: Any) -> ArgumentPattern:
    if pattern is ANY_ARGS or isinstance(pattern, Args):
        return pattern
    if isinstance(pattern, (tuple, list)):
        return Args(*pattern)
    raise ConfigurationError(f"invalid_argument_pattern:{pattern!r}")
