"""Schema helpers for the application settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_REGION_FRACTION,
    DEFAULT_REGION_MAX_FRACTION,
    DEFAULT_REGION_MAX_PX,
    DEFAULT_REGION_MIN_PX,
    HANDLE_RADIUS_PX,
    MIN_CROP_SIZE,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/settings.schema.json",
    "type": "object",
    "required": ["schema", "crop"],
    "properties": {
        "schema": {"const": "iCrop/settings@1"},
        "crop": {
            "type": "object",
            "properties": {
                "min_size": {"type": "number", "exclusiveMinimum": 0},
                "handle_radius": {"type": "number", "minimum": 0},
                "default_fraction": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "maximum": 1,
                },
                "default_min_px": {"type": "number", "minimum": 0},
                "default_max_px": {"type": "number", "exclusiveMinimum": 0},
                "default_max_fraction": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "maximum": 1,
                },
            },
            "additionalProperties": False,
        },
        "ui": {
            "type": "object",
            "properties": {
                "show_size_label": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "iCrop/settings@1",
    "crop": {
        "min_size": MIN_CROP_SIZE,
        "handle_radius": HANDLE_RADIUS_PX,
        "default_fraction": DEFAULT_REGION_FRACTION,
        "default_min_px": DEFAULT_REGION_MIN_PX,
        "default_max_px": DEFAULT_REGION_MAX_PX,
        "default_max_fraction": DEFAULT_REGION_MAX_FRACTION,
    },
    "ui": {
        "show_size_label": True,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in ("crop", "ui") and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
