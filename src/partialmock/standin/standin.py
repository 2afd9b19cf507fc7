from __future__ import annotations

import inspect
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple, Union

from partialmock.errors import ConfigurationError
from partialmock.matching import ANY_ARGS, Args, ArgumentPattern, coerce_pattern
from partialmock.standin.expectations import MethodExpectations
from partialmock.standin.records import CallRecord
from partialmock.standin.signature import normalize_call

ExceptionSpec = Union[BaseException, type]


@dataclass(frozen=True)
class _Outcome:
    value: Any = None
    exc: Optional[ExceptionSpec] = None

    def produce(self) -> Any:
        if self.exc is not None:
            raise self.exc
        return self.value


def _check_exception(exc: Any) -> ExceptionSpec:
    if isinstance(exc, BaseException):
        return exc
    if isinstance(exc, type) and issubclass(exc, BaseException):
        return exc
    raise ConfigurationError(f"not_an_exception:{exc!r}")


def _check_index(index: Any) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ConfigurationError(f"invalid_call_index:{index!r}")
    return index


class StandInMethod:
    """Replacement body for one overridden method.

    Every invocation is appended to the call log before any outcome is
    produced. Outcomes are resolved in this order: an outcome pinned to the
    call's index, then single-shot outcomes queued with ``once=True``, then
    the first argument-conditional outcome that matches, then the default.
    An unconfigured stand-in returns ``None``.

    Given the replaced method's signature, recorded calls and argument
    patterns are normalized so keyword and positional spellings of the same
    arguments compare equal.
    """

    def __init__(self, name: str, signature: Optional[inspect.Signature] = None):
        self.name = name
        self.signature = signature
        self.calls: List[CallRecord] = []
        self.expectations = MethodExpectations()
        self._default: Optional[_Outcome] = None
        self._at: Dict[int, _Outcome] = {}
        self._queued: Deque[_Outcome] = deque()
        self._conditional: List[Tuple[ArgumentPattern, _Outcome]] = []

    @property
    def configured(self) -> bool:
        return bool(
            self._default is not None
            or self._at
            or self._queued
            or self._conditional
            or self.expectations.constraint_count()
        )

    def _store(self, outcome: _Outcome, *, args: Any, at: Optional[int], once: bool) -> None:
        if at is not None and (args is not None or once):
            raise ConfigurationError(f"conflicting_outcome_options:{self.name}")
        if once and args is not None:
            raise ConfigurationError(f"conflicting_outcome_options:{self.name}")
        if at is not None:
            self._at[_check_index(at)] = outcome
        elif once:
            self._queued.append(outcome)
        elif args is not None:
            self._conditional.append((self.pattern(args), outcome))
        else:
            self._default = outcome

    def set_return(self, value: Any, *, args: Any = None, once: bool = False) -> None:
        self._store(_Outcome(value=value), args=args, at=None, once=once)

    def set_return_at(self, index: int, value: Any) -> None:
        self._store(_Outcome(value=value), args=None, at=index, once=False)

    def set_raise(self, exc: Any, *, args: Any = None, at: Optional[int] = None) -> None:
        self._store(_Outcome(exc=_check_exception(exc)), args=args, at=at, once=False)

    def pattern(self, args: Any) -> ArgumentPattern:
        pattern = coerce_pattern(args)
        if isinstance(pattern, Args):
            positional, keywords = normalize_call(self.signature, pattern.args, pattern.kwargs)
            pattern = Args(*positional, **keywords)
        return pattern

    def record(self, args: Tuple[Any, ...], kwargs: Mapping[str, Any], sequence: int) -> CallRecord:
        args, kwargs = normalize_call(self.signature, args, kwargs)
        call = CallRecord(method=self.name, args=args, kwargs=kwargs, sequence=sequence)
        self.calls.append(call)
        return call

    def respond(self, call: CallRecord) -> Any:
        index = len(self.calls) - 1
        if index in self._at:
            return self._at[index].produce()
        if self._queued:
            return self._queued.popleft().produce()
        for pattern, outcome in self._conditional:
            if call.matches(pattern):
                return outcome.produce()
        if self._default is not None:
            return self._default.produce()
        return None

    def accepts(self, call: CallRecord) -> bool:
        pattern = self.expectations.arguments
        return pattern is None or pattern is ANY_ARGS or call.matches(pattern)

    def reset_calls(self) -> None:
        self.calls.clear()
