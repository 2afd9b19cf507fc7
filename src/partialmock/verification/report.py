from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Tuple

MismatchKind = Literal["call_count", "arguments", "order"]


@dataclass(frozen=True)
class Mismatch:
    method: str
    kind: MismatchKind
    expected: str
    actual: str
    message: str

    def to_obj(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "kind": self.kind,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }


@dataclass(frozen=True)
class VerificationReport:
    type_name: str
    mismatches: Tuple[Mismatch, ...] = ()
    expectations_checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.mismatches

    def for_method(self, method: str) -> Tuple[Mismatch, ...]:
        return tuple(m for m in self.mismatches if m.method == method)

    def kinds(self) -> Tuple[MismatchKind, ...]:
        return tuple(m.kind for m in self.mismatches)

    def render(self) -> str:
        if self.ok:
            return f"{self.type_name}: {self.expectations_checked} expectations met"
        lines = [f"{self.type_name}: {len(self.mismatches)} expectation mismatch(es)"]
        for m in self.mismatches:
            lines.append(f"  [{m.kind}] {m.method}: {m.message}")
        return "\n".join(lines)

    def to_obj(self) -> dict[str, Any]:
        return {
            "type_name": self.type_name,
            "ok": self.ok,
            "expectations_checked": self.expectations_checked,
            "mismatches": [m.to_obj() for m in self.mismatches],
        }
