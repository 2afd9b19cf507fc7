from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from partialmock.matching import ArgumentPattern


@dataclass(frozen=True)
class CallRecord:
    method: str
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any] = field(default_factory=dict)
    sequence: int = 0

    def matches(self, pattern: ArgumentPattern) -> bool:
        return pattern.matches(self.args, self.kwargs)

    def render_arguments(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in sorted(self.kwargs.items()))
        return "(" + ", ".join(parts) + ")"

    def to_obj(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "args": list(self.args),
            "kwargs": dict(self.kwargs),
            "sequence": self.sequence,
        }
