from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from partialmock.matching import ArgumentPattern
from partialmock.standin.records import CallRecord
from partialmock.verification.report import Mismatch


def _plural(n: int) -> str:
    return f"{n} call" if n == 1 else f"{n} calls"


@dataclass
class MethodExpectations:
    """Expectations configured on one stand-in method.

    A later expectation of the same kind replaces the earlier one, so
    ``expect_call(name, ("a",))`` followed by ``expect_call(name, ("b",))``
    leaves only the second pattern in force. Minimum and maximum bounds are
    independent of the exact count.
    """

    arguments: Optional[ArgumentPattern] = None
    exact: Optional[int] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    positional: Dict[int, ArgumentPattern] = field(default_factory=dict)

    def constraint_count(self) -> int:
        count = sum(
            1 for bound in (self.arguments, self.exact, self.minimum, self.maximum) if bound is not None
        )
        return count + len(self.positional)

    def check(self, method: str, calls: Sequence[CallRecord]) -> List[Mismatch]:
        mismatches: List[Mismatch] = []
        observed = len(calls)

        if self.exact is not None and observed != self.exact:
            mismatches.append(
                Mismatch(
                    method=method,
                    kind="call_count",
                    expected=f"exactly {_plural(self.exact)}",
                    actual=_plural(observed),
                    message=f"expected exactly {_plural(self.exact)}, observed {observed}",
                )
            )
        if self.minimum is not None and observed < self.minimum:
            mismatches.append(
                Mismatch(
                    method=method,
                    kind="call_count",
                    expected=f"at least {_plural(self.minimum)}",
                    actual=_plural(observed),
                    message=f"expected at least {_plural(self.minimum)}, observed {observed}",
                )
            )
        if self.maximum is not None and observed > self.maximum:
            mismatches.append(
                Mismatch(
                    method=method,
                    kind="call_count",
                    expected=f"at most {_plural(self.maximum)}",
                    actual=_plural(observed),
                    message=f"expected at most {_plural(self.maximum)}, observed {observed}",
                )
            )

        if self.arguments is not None:
            for index, call in enumerate(calls):
                if not call.matches(self.arguments):
                    mismatches.append(
                        Mismatch(
                            method=method,
                            kind="arguments",
                            expected=repr(self.arguments),
                            actual=call.render_arguments(),
                            message=(
                                f"call #{index} with {call.render_arguments()} "
                                f"does not match {self.arguments!r}"
                            ),
                        )
                    )

        for index in sorted(self.positional):
            pattern = self.positional[index]
            if index >= observed:
                mismatches.append(
                    Mismatch(
                        method=method,
                        kind="call_count",
                        expected=f"call #{index} matching {pattern!r}",
                        actual=_plural(observed),
                        message=f"expected call #{index} matching {pattern!r}, observed {observed}",
                    )
                )
                continue
            call = calls[index]
            if call.matches(pattern):
                continue
            # The pattern occurring at another position means the calls came out of order.
            elsewhere = [i for i, other in enumerate(calls) if i != index and other.matches(pattern)]
            if elsewhere:
                mismatches.append(
                    Mismatch(
                        method=method,
                        kind="order",
                        expected=f"call #{index} matching {pattern!r}",
                        actual=f"matched at call #{elsewhere[0]}",
                        message=(
                            f"expected call #{index} to match {pattern!r}, "
                            f"but it matched call #{elsewhere[0]}"
                        ),
                    )
                )
            else:
                mismatches.append(
                    Mismatch(
                        method=method,
                        kind="arguments",
                        expected=repr(pattern),
                        actual=call.render_arguments(),
                        message=(
                            f"call #{index} with {call.render_arguments()} "
                            f"does not match {pattern!r}"
                        ),
                    )
                )
        return mismatches


def check_first_call_order(
    names: Sequence[str], logs: Dict[str, Sequence[CallRecord]]
) -> List[Mismatch]:
    """Check that the first calls of ``names`` happened in the given order."""
    mismatches: List[Mismatch] = []
    expected = " -> ".join(names)
    firsts: List[tuple[str, int]] = []
    for name in names:
        calls = logs[name]
        if not calls:
            mismatches.append(
                Mismatch(
                    method=name,
                    kind="order",
                    expected=expected,
                    actual="never called",
                    message=f"expected order {expected}, but {name} was never called",
                )
            )
            continue
        firsts.append((name, calls[0].sequence))
    for (prev_name, prev_seq), (name, seq) in zip(firsts, firsts[1:]):
        if seq < prev_seq:
            mismatches.append(
                Mismatch(
                    method=name,
                    kind="order",
                    expected=expected,
                    actual=f"{name} first called before {prev_name}",
                    message=f"expected order {expected}, but {name} was first called before {prev_name}",
                )
            )
    return mismatches
