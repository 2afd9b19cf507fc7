from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from partialmock.errors import ConfigurationError


class PartialMockSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    # Raise on a call whose arguments fail the expect_call pattern instead of
    # waiting for verification.
    strict_arguments: bool = False
    verify_on_teardown: bool = True
    log_calls: bool = False


DEFAULT_SETTINGS = PartialMockSettings()


def load_settings(path: Path) -> PartialMockSettings:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"settings_unreadable:{path}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"settings_not_json:{path}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError("settings must be a JSON object")
    try:
        return PartialMockSettings.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid_settings:{exc.errors()[0]['loc']}") from exc


__all__ = ["DEFAULT_SETTINGS", "PartialMockSettings", "load_settings"]
