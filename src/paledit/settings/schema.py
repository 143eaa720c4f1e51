"""Schema helpers for the palette editor settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    COALESCE_WINDOW_MS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_OPERATION_LABEL,
    RESET_ALPHA_DELTA_ON_COLORSPACE_CHANGE,
)
from ..domain.models import ColorSpace, EditMode

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "paledit/settings.schema.json",
    "type": "object",
    "required": ["schema", "editor"],
    "properties": {
        "schema": {"const": "paledit/settings@1"},
        "editor": {
            "type": "object",
            "properties": {
                "coalesce_window_ms": {"type": "integer", "minimum": 10, "maximum": 5000},
                "operation_label": {"type": "string", "minLength": 1},
                "history_limit": {"type": "integer", "minimum": 1},
                "reset_alpha_delta_on_colorspace_change": {"type": "boolean"},
                "colorspace": {"type": "string", "enum": [space.value for space in ColorSpace]},
                "mode": {"type": "string", "enum": [mode.value for mode in EditMode]},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "paledit/settings@1",
    "editor": {
        "coalesce_window_ms": COALESCE_WINDOW_MS,
        "operation_label": DEFAULT_OPERATION_LABEL,
        "history_limit": DEFAULT_HISTORY_LIMIT,
        "reset_alpha_delta_on_colorspace_change": RESET_ALPHA_DELTA_ON_COLORSPACE_CHANGE,
        "colorspace": ColorSpace.RGB.value,
        "mode": EditMode.ABSOLUTE.value,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "editor" and isinstance(value, dict):
                target = merged.setdefault("editor", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
