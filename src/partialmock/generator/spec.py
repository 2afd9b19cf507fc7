from __future__ import annotations

import importlib
import inspect
import json
import keyword
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Tuple

import jsonschema

from partialmock.common.schema_validate import schema_path, validate_json
from partialmock.errors import ConfigurationError

SPEC_FILE_VERSION = "partialmock-spec-0.1"
CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})
# Set on every generated type; marks it as a partial mock.
SPEC_ATTR = "_partialmock_spec"


def _is_identifier(name: Any) -> bool:
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def _check_method(base: type, name: str) -> None:
    if name in CONSTRUCTOR_NAMES:
        raise ConfigurationError("constructor_not_overridable")
    if not _is_identifier(name):
        raise ConfigurationError(f"invalid_method_name:{name!r}")
    try:
        attr = inspect.getattr_static(base, name)
    except AttributeError:
        raise ConfigurationError(f"unknown_method:{name}") from None
    if isinstance(attr, staticmethod):
        raise ConfigurationError(f"unsupported_method_kind:{name}:staticmethod")
    if isinstance(attr, classmethod):
        raise ConfigurationError(f"unsupported_method_kind:{name}:classmethod")
    if isinstance(attr, property):
        raise ConfigurationError(f"not_a_method:{name}")
    if inspect.isfunction(attr):
        return
    if inspect.ismethoddescriptor(attr) and callable(attr):
        return
    raise ConfigurationError(f"not_a_method:{name}")


def resolve_base(path: str) -> type:
    """Import ``package.module:Qualified.Name`` and return the class it names."""
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigurationError(f"invalid_base_path:{path}")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"base_module_not_found:{module_name}") from exc
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ConfigurationError(f"base_not_found:{path}") from None
    if not isinstance(target, type):
        raise ConfigurationError(f"base_not_a_class:{path}")
    return target


def base_path(base: type) -> str:
    return f"{base.__module__}:{base.__qualname__}"


@dataclass(frozen=True)
class MockSpecification:
    """Which base class to extend, under what name, and which methods to replace."""

    base: type
    new_name: str
    methods: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.base, type):
            raise ConfigurationError(f"base_not_a_class:{self.base!r}")
        if any(SPEC_ATTR in klass.__dict__ for klass in self.base.__mro__):
            raise ConfigurationError(f"base_is_partial_mock:{self.base.__qualname__}")
        if not _is_identifier(self.new_name):
            raise ConfigurationError(f"invalid_type_name:{self.new_name!r}")
        if not self.methods:
            raise ConfigurationError("no_methods_to_override")
        seen: set[str] = set()
        for name in self.methods:
            if name in seen:
                raise ConfigurationError(f"duplicate_method:{name}")
            seen.add(name)
            _check_method(self.base, name)

    @classmethod
    def create(cls, base: type, new_name: str, methods: Iterable[str]) -> "MockSpecification":
        if isinstance(methods, str):
            methods = [methods]
        return cls(base=base, new_name=new_name, methods=tuple(methods))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MockSpecification":
        try:
            validate_json(dict(data), schema_path("mock_specification.schema.json"))
        except jsonschema.ValidationError as exc:
            raise ConfigurationError(f"invalid_specification:{exc.message}") from exc
        return cls(
            base=resolve_base(str(data["base"])),
            new_name=str(data["new_name"]),
            methods=tuple(str(name) for name in data["methods"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "base": base_path(self.base),
            "new_name": self.new_name,
            "methods": list(self.methods),
        }

    def kept_methods(self) -> Tuple[str, ...]:
        """Public base methods that keep their real implementation."""
        kept = []
        for name, attr in inspect.getmembers(self.base):
            if name.startswith("_") or name in self.methods:
                continue
            if callable(attr) and not isinstance(attr, type):
                kept.append(name)
        return tuple(sorted(kept))


def load_specifications(path: Path) -> List[MockSpecification]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"spec_file_unreadable:{path}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"spec_file_not_json:{path}") from exc
    try:
        validate_json(payload, schema_path("spec_file.schema.json"))
    except jsonschema.ValidationError as exc:
        raise ConfigurationError(f"invalid_spec_file:{exc.message}") from exc
    specs = [MockSpecification.from_mapping(entry) for entry in payload["mocks"]]
    names = [spec.new_name for spec in specs]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(f"duplicate_type_name:{duplicates[0]}")
    return specs


__all__ = [
    "CONSTRUCTOR_NAMES",
    "SPEC_ATTR",
    "SPEC_FILE_VERSION",
    "MockSpecification",
    "base_path",
    "load_specifications",
    "resolve_base",
]
