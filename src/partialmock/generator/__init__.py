from .controller import CONTROLLER_ATTR, LifecycleState, PartialMockController, build, control
from .generator import (
    PartialMockGenerator,
    build_type,
    default_generator,
    generate,
    generate_all,
    generate_from_spec,
    is_partial_mock_type,
    reset,
)
from .spec import (
    SPEC_FILE_VERSION,
    MockSpecification,
    base_path,
    load_specifications,
    resolve_base,
)

__all__ = [
    "CONTROLLER_ATTR",
    "SPEC_FILE_VERSION",
    "LifecycleState",
    "MockSpecification",
    "PartialMockController",
    "PartialMockGenerator",
    "base_path",
    "build",
    "build_type",
    "control",
    "default_generator",
    "generate",
    "generate_all",
    "generate_from_spec",
    "is_partial_mock_type",
    "load_specifications",
    "reset",
    "resolve_base",
]
