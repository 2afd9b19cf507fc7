"""pytest integration: a ``partial_mocks`` fixture that tallies at teardown.

Enable it from a ``conftest.py``::

    pytest_plugins = ["partialmock.pytest_plugin"]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional

import pytest

from partialmock.config import DEFAULT_SETTINGS, PartialMockSettings
from partialmock.generator import PartialMockController, PartialMockGenerator, control
from partialmock.verification.report import VerificationReport

logger = logging.getLogger(__name__)


class MockSession:
    """Tracks the partial mocks one test creates so they can be verified together."""

    def __init__(self, settings: Optional[PartialMockSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.generator = PartialMockGenerator(self.settings)
        self._controllers: List[PartialMockController] = []

    def generate(self, base: type, new_name: str, methods: Iterable[str]) -> type:
        return self.generator.generate(base, new_name, methods)

    def allocate(self, mock_type: type) -> Any:
        instance = mock_type()
        self._controllers.append(control(instance))
        return instance

    def build(
        self,
        mock_type: type,
        configure: Optional[Callable[[PartialMockController], Any]] = None,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        instance = self.allocate(mock_type)
        controller = control(instance)
        if configure is not None:
            configure(controller)
        return controller.construct(*args, **kwargs)

    @property
    def controllers(self) -> tuple[PartialMockController, ...]:
        return tuple(self._controllers)

    def verify_all(self) -> List[VerificationReport]:
        return [controller.verify() for controller in self._controllers]

    def failures(self) -> List[VerificationReport]:
        return [report for report in self.verify_all() if not report.ok]


@pytest.fixture
def partialmock_settings() -> PartialMockSettings:
    """Override in a conftest.py to change settings for a directory of tests."""
    return DEFAULT_SETTINGS


@pytest.fixture
def partial_mocks(partialmock_settings: PartialMockSettings) -> Iterator[MockSession]:
    session = MockSession(partialmock_settings)
    yield session
    if not session.settings.verify_on_teardown:
        return
    failures = session.failures()
    if failures:
        logger.info("%d partial mock(s) failed verification at teardown", len(failures))
        pytest.fail("\n".join(report.render() for report in failures), pytrace=False)
