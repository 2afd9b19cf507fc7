from __future__ import annotations

import functools
import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from partialmock.config import DEFAULT_SETTINGS, PartialMockSettings
from partialmock.errors import ConfigurationError, LifecycleError
from partialmock.generator.controller import CONTROLLER_ATTR, PartialMockController, control
from partialmock.generator.spec import SPEC_ATTR, MockSpecification, load_specifications

logger = logging.getLogger(__name__)

SETTINGS_ATTR = "_partialmock_settings"


def _stand_in_function(new_name: str, name: str, original: Any) -> Callable[..., Any]:
    def stand_in(self: Any, *args: Any, **kwargs: Any) -> Any:
        return control(self).dispatch(name, args, kwargs)

    if inspect.isfunction(original):
        functools.update_wrapper(stand_in, original)
        # A replaced abstract method is concrete on the generated type.
        stand_in.__dict__.pop("__isabstractmethod__", None)
    stand_in.__name__ = name
    stand_in.__qualname__ = f"{new_name}.{name}"
    return stand_in


def _owning_mock_type(cls: type) -> type:
    for klass in cls.__mro__:
        if SPEC_ATTR in klass.__dict__:
            return klass
    raise ConfigurationError(f"not_a_partial_mock:{cls.__name__}")


def _allocate(base: type) -> Callable[..., Any]:
    def __new__(cls: type, *args: Any, **kwargs: Any) -> Any:
        if args or kwargs:
            raise LifecycleError(f"arguments_belong_to_construct:{cls.__name__}")
        if base.__new__ is object.__new__:
            instance = object.__new__(cls)
        else:
            instance = base.__new__(cls)
        mock_type = _owning_mock_type(cls)
        controller = PartialMockController(
            instance,
            mock_type,
            getattr(mock_type, SPEC_ATTR),
            getattr(mock_type, SETTINGS_ATTR),
        )
        mock_type.__dict__[CONTROLLER_ATTR].__set__(instance, controller)
        return instance

    return __new__


def _skip_base_init(self: Any, *args: Any, **kwargs: Any) -> None:
    # The base constructor runs later, through control(instance).construct().
    return None


def build_type(spec: MockSpecification, settings: PartialMockSettings = DEFAULT_SETTINGS) -> type:
    base = spec.base
    namespace: Dict[str, Any] = {
        "__module__": base.__module__,
        "__qualname__": spec.new_name,
        "__doc__": f"Partial mock of {base.__qualname__} replacing {', '.join(spec.methods)}.",
        "__new__": _allocate(base),
        "__init__": _skip_base_init,
        "__slots__": (CONTROLLER_ATTR,),
        SPEC_ATTR: spec,
        SETTINGS_ATTR: settings,
    }
    for name in spec.methods:
        namespace[name] = _stand_in_function(spec.new_name, name, inspect.getattr_static(base, name))
    try:
        mock_type = type(base)(spec.new_name, (base,), namespace)
    except TypeError as exc:
        raise ConfigurationError(f"base_not_subclassable:{base.__qualname__}") from exc
    return mock_type


def is_partial_mock_type(obj: Any) -> bool:
    return isinstance(obj, type) and isinstance(obj.__dict__.get(SPEC_ATTR), MockSpecification)


class PartialMockGenerator:
    """Generates partial-mock subclasses and remembers them by type name."""

    def __init__(self, settings: Optional[PartialMockSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self._generated: Dict[str, type] = {}

    def generate(
        self,
        base: type,
        new_name: str,
        methods: Iterable[str],
        *,
        settings: Optional[PartialMockSettings] = None,
    ) -> type:
        spec = MockSpecification.create(base, new_name, methods)
        return self.generate_from_spec(spec, settings=settings)

    def generate_from_spec(
        self,
        spec: MockSpecification,
        *,
        settings: Optional[PartialMockSettings] = None,
    ) -> type:
        settings = settings or self.settings
        existing = self._generated.get(spec.new_name)
        if existing is not None:
            if getattr(existing, SPEC_ATTR) != spec or getattr(existing, SETTINGS_ATTR) != settings:
                raise ConfigurationError(f"type_name_in_use:{spec.new_name}")
            logger.debug("reusing generated type %s", spec.new_name)
            return existing
        mock_type = build_type(spec, settings)
        self._generated[spec.new_name] = mock_type
        logger.debug(
            "generated %s from %s overriding %s",
            spec.new_name,
            spec.base.__qualname__,
            ", ".join(spec.methods),
        )
        return mock_type

    def generate_all(self, path: Path) -> Dict[str, type]:
        return {spec.new_name: self.generate_from_spec(spec) for spec in load_specifications(path)}

    def get(self, new_name: str) -> type:
        try:
            return self._generated[new_name]
        except KeyError:
            raise ConfigurationError(f"unknown_type:{new_name}") from None

    def generated(self) -> Tuple[str, ...]:
        return tuple(self._generated)

    def reset(self) -> None:
        self._generated.clear()


_default_generator = PartialMockGenerator()


def default_generator() -> PartialMockGenerator:
    return _default_generator


def generate(
    base: type,
    new_name: str,
    methods: Iterable[str],
    *,
    settings: Optional[PartialMockSettings] = None,
) -> type:
    """Generate ``new_name``, a subclass of ``base`` whose ``methods`` are stand-ins.

    Instances are created unconstructed: ``NewType()`` allocates the object
    and its stand-ins, and ``control(obj).construct(...)`` runs the base
    constructor once the stand-ins are configured.
    """
    return _default_generator.generate(base, new_name, methods, settings=settings)


def generate_from_spec(spec: MockSpecification, *, settings: Optional[PartialMockSettings] = None) -> type:
    return _default_generator.generate_from_spec(spec, settings=settings)


def generate_all(path: Path) -> Dict[str, type]:
    return _default_generator.generate_all(path)


def reset() -> None:
    _default_generator.reset()


__all__ = [
    "PartialMockGenerator",
    "build_type",
    "default_generator",
    "generate",
    "generate_all",
    "generate_from_spec",
    "is_partial_mock_type",
    "reset",
]
