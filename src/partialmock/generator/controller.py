from __future__ import annotations

import inspect
import logging
import types
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from partialmock.config import DEFAULT_SETTINGS, PartialMockSettings
from partialmock.errors import ConfigurationError, ExpectationMismatch, LifecycleError
from partialmock.generator.spec import MockSpecification
from partialmock.matching import ANY_ARGS
from partialmock.standin import CallRecord, StandInMethod, check_first_call_order, signature_of
from partialmock.verification.report import Mismatch, VerificationReport

logger = logging.getLogger(__name__)

# Name of the slot each generated type adds; kept out of the instance __dict__.
CONTROLLER_ATTR = "_partialmock_controller"


class LifecycleState(str, Enum):
    ALLOCATED = "allocated"
    CONFIGURED = "configured"
    CONSTRUCTED = "constructed"


def _check_count(count: Any) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ConfigurationError(f"invalid_call_count:{count!r}")
    return count


class PartialMockController:
    """Test-side handle on one generated instance.

    Owns a stand-in per overridden method, runs the deferred base constructor
    and tallies observed calls against expectations. Reach it with
    ``partialmock.control(instance)``.
    """

    def __init__(
        self,
        instance: Any,
        mock_type: type,
        spec: MockSpecification,
        settings: PartialMockSettings = DEFAULT_SETTINGS,
    ):
        self.instance = instance
        self.mock_type = mock_type
        self.spec = spec
        self.settings = settings
        self.state = LifecycleState.ALLOCATED
        self._stand_ins: Dict[str, StandInMethod] = {
            name: StandInMethod(name, signature_of(inspect.getattr_static(spec.base, name)))
            for name in spec.methods
        }
        self._order: List[Tuple[str, ...]] = []
        self._sequence = 0

    @property
    def type_name(self) -> str:
        return self.spec.new_name

    @property
    def methods(self) -> Tuple[str, ...]:
        return self.spec.methods

    def stand_in(self, name: str) -> StandInMethod:
        try:
            return self._stand_ins[name]
        except KeyError:
            raise ConfigurationError(f"not_a_stand_in:{self.type_name}.{name}") from None

    def _configure(self, name: str) -> StandInMethod:
        stand_in = self.stand_in(name)
        if self.state is LifecycleState.ALLOCATED:
            self.state = LifecycleState.CONFIGURED
        return stand_in

    # -- construction -----------------------------------------------------

    def construct(self, *args: Any, **kwargs: Any) -> Any:
        if self.state is LifecycleState.CONSTRUCTED:
            raise LifecycleError(f"already_constructed:{self.type_name}")
        logger.debug("constructing %s with %d positional argument(s)", self.type_name, len(args))
        super(self.mock_type, self.instance).__init__(*args, **kwargs)
        self.state = LifecycleState.CONSTRUCTED
        return self.instance

    @property
    def constructed(self) -> bool:
        return self.state is LifecycleState.CONSTRUCTED

    # -- outcomes ---------------------------------------------------------

    def set_return(self, name: str, value: Any, *, args: Any = None, once: bool = False) -> "PartialMockController":
        self._configure(name).set_return(value, args=args, once=once)
        return self

    def set_return_at(self, name: str, index: int, value: Any) -> "PartialMockController":
        self._configure(name).set_return_at(index, value)
        return self

    def set_raise(self, name: str, exc: Any, *, args: Any = None, at: Optional[int] = None) -> "PartialMockController":
        self._configure(name).set_raise(exc, args=args, at=at)
        return self

    # -- expectations -----------------------------------------------------

    def expect_call(self, name: str, args: Any = ANY_ARGS, count: Optional[int] = None) -> "PartialMockController":
        stand_in = self._configure(name)
        stand_in.expectations.arguments = stand_in.pattern(args)
        if count is not None:
            stand_in.expectations.exact = _check_count(count)
        return self

    def expect_arguments_at(self, name: str, index: int, args: Any) -> "PartialMockController":
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ConfigurationError(f"invalid_call_index:{index!r}")
        stand_in = self._configure(name)
        stand_in.expectations.positional[index] = stand_in.pattern(args)
        return self

    def expect_call_count(self, name: str, count: int) -> "PartialMockController":
        self._configure(name).expectations.exact = _check_count(count)
        return self

    def expect_once(self, name: str, args: Any = ANY_ARGS) -> "PartialMockController":
        return self.expect_call(name, args, count=1)

    def expect_never(self, name: str) -> "PartialMockController":
        return self.expect_call_count(name, 0)

    def expect_at_least(self, name: str, count: int) -> "PartialMockController":
        self._configure(name).expectations.minimum = _check_count(count)
        return self

    def expect_at_most(self, name: str, count: int) -> "PartialMockController":
        self._configure(name).expectations.maximum = _check_count(count)
        return self

    def expect_at_least_once(self, name: str, args: Any = ANY_ARGS) -> "PartialMockController":
        self.expect_call(name, args)
        return self.expect_at_least(name, 1)

    def expect_order(self, *names: str) -> "PartialMockController":
        if len(names) < 2:
            raise ConfigurationError("order_needs_two_methods")
        for name in names:
            self._configure(name)
        self._order.append(tuple(names))
        return self

    # -- invocation -------------------------------------------------------

    def record_call(self, name: str, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> CallRecord:
        call = self.stand_in(name).record(args, kwargs, self._sequence)
        self._sequence += 1
        if self.settings.log_calls:
            logger.debug("%s.%s%s", self.type_name, name, call.render_arguments())
        return call

    def dispatch(self, name: str, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
        stand_in = self.stand_in(name)
        call = self.record_call(name, args, kwargs)
        if self.settings.strict_arguments and not stand_in.accepts(call):
            pattern = stand_in.expectations.arguments
            raise ExpectationMismatch(
                VerificationReport(
                    type_name=self.type_name,
                    mismatches=(
                        Mismatch(
                            method=name,
                            kind="arguments",
                            expected=repr(pattern),
                            actual=call.render_arguments(),
                            message=f"unexpected call with {call.render_arguments()}, expected {pattern!r}",
                        ),
                    ),
                    expectations_checked=1,
                )
            )
        return stand_in.respond(call)

    def calls(self, name: str) -> Tuple[CallRecord, ...]:
        return tuple(self.stand_in(name).calls)

    def call_count(self, name: str) -> int:
        return len(self.stand_in(name).calls)

    def all_calls(self) -> Tuple[CallRecord, ...]:
        merged = [call for stand_in in self._stand_ins.values() for call in stand_in.calls]
        return tuple(sorted(merged, key=lambda call: call.sequence))

    def reset_calls(self) -> None:
        for stand_in in self._stand_ins.values():
            stand_in.reset_calls()

    # -- verification -----------------------------------------------------

    def verify(self) -> VerificationReport:
        mismatches: List[Mismatch] = []
        checked = 0
        for name, stand_in in self._stand_ins.items():
            checked += stand_in.expectations.constraint_count()
            mismatches.extend(stand_in.expectations.check(name, stand_in.calls))
        logs = {name: stand_in.calls for name, stand_in in self._stand_ins.items()}
        for names in self._order:
            checked += 1
            mismatches.extend(check_first_call_order(names, logs))
        report = VerificationReport(
            type_name=self.type_name,
            mismatches=tuple(mismatches),
            expectations_checked=checked,
        )
        if not report.ok:
            logger.info("%s failed verification with %d mismatch(es)", self.type_name, len(mismatches))
        return report

    def tally(self) -> VerificationReport:
        report = self.verify()
        if not report.ok:
            raise ExpectationMismatch(report)
        return report


def control(instance: Any) -> PartialMockController:
    """Return the controller of a generated partial-mock instance."""
    # Read the slot directly so base __getattr__/__getattribute__ hooks never see it.
    slot = inspect.getattr_static(type(instance), CONTROLLER_ATTR, None)
    controller = None
    if isinstance(slot, types.MemberDescriptorType):
        try:
            controller = slot.__get__(instance, type(instance))
        except AttributeError:
            controller = None
    if not isinstance(controller, PartialMockController):
        raise ConfigurationError(f"not_a_partial_mock:{type(instance).__name__}")
    return controller


def build(
    mock_type: type,
    configure: Optional[Callable[[PartialMockController], Any]] = None,
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Allocate, configure and construct in one step."""
    instance = mock_type()
    controller = control(instance)
    if configure is not None:
        configure(controller)
    return controller.construct(*args, **kwargs)


__all__ = [
    "CONTROLLER_ATTR",
    "LifecycleState",
    "PartialMockController",
    "build",
    "control",
]
