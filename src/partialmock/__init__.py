"""Partial mocks: real objects with a chosen subset of methods replaced by stand-ins."""

from partialmock.config import DEFAULT_SETTINGS, PartialMockSettings, load_settings
from partialmock.errors import (
    ConfigurationError,
    ExpectationMismatch,
    LifecycleError,
    PartialMockError,
)
from partialmock.generator import (
    LifecycleState,
    MockSpecification,
    PartialMockController,
    PartialMockGenerator,
    build,
    control,
    generate,
    generate_all,
    generate_from_spec,
    is_partial_mock_type,
    load_specifications,
)
from partialmock.matching import ANY, ANY_ARGS, Args, Contains, IsA, Predicate, Regex
from partialmock.standin import CallRecord, StandInMethod
from partialmock.verification import (
    Mismatch,
    VerificationReport,
    render_transcript,
    transcript_digest,
)

__all__ = [
    "ANY",
    "ANY_ARGS",
    "Args",
    "CallRecord",
    "ConfigurationError",
    "Contains",
    "DEFAULT_SETTINGS",
    "ExpectationMismatch",
    "IsA",
    "LifecycleError",
    "LifecycleState",
    "Mismatch",
    "MockSpecification",
    "PartialMockController",
    "PartialMockError",
    "PartialMockGenerator",
    "PartialMockSettings",
    "Predicate",
    "Regex",
    "StandInMethod",
    "VerificationReport",
    "build",
    "control",
    "generate",
    "generate_all",
    "generate_from_spec",
    "is_partial_mock_type",
    "load_settings",
    "load_specifications",
    "render_transcript",
    "transcript_digest",
]
