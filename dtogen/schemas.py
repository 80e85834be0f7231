"""JSON schema definitions for validating override files."""

from __future__ import annotations

FIELD_OVERRIDE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "custom_type": {"type": ["string", "null"]},
        "required": {"type": "boolean"},
        "max_length": {"type": ["string", "integer", "null"]},
        "json_alias": {
            "anyOf": [
                {"type": ["string", "null"]},
                {"type": "array", "items": {"type": "string"}},
            ]
        },
        "comment": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
    # A named custom type only takes effect through the Others selection.
    "if": {
        "required": ["type", "custom_type"],
        "properties": {"custom_type": {"type": "string", "pattern": r"\S"}},
    },
    "then": {"properties": {"type": {"const": "Others"}}},
}

OVERRIDES_FILE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "fields": {
            "type": "object",
            "propertyNames": {"pattern": r"^[^.]+\..+$"},
            "additionalProperties": FIELD_OVERRIDE_SCHEMA,
        },
    },
    "required": ["fields"],
    "additionalProperties": False,
}
