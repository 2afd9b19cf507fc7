from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from partialmock.verification.report import Mismatch, VerificationReport


class PartialMockError(RuntimeError):
    pass


class ConfigurationError(PartialMockError):
    pass


class LifecycleError(PartialMockError):
    pass


class ExpectationMismatch(PartialMockError):
    """Raised when observed calls disagree with configured expectations.

    Carries every mismatch that was collected, not only the first one.
    """

    def __init__(self, report: "VerificationReport"):
        self.report = report
        super().__init__(report.render())

    @property
    def mismatches(self) -> tuple["Mismatch", ...]:
        return self.report.mismatches


__all__ = [
    "ConfigurationError",
    "ExpectationMismatch",
    "LifecycleError",
    "PartialMockError",
]
