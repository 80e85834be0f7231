"""Per-field override creation, editing and file round-tripping."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import ValidationError, validate

from .errors import EmptyCustomTypeError, OverrideFileError
from .extract import iter_field_paths
from .models import OTHER_TYPE, FieldOverride, Overrides, Schema, is_standard_type, list_of
from .schemas import OVERRIDES_FILE_SCHEMA

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FieldEdit:
    """The full state of the field configuration form for one field.

    ``type`` is either one of the standard types or ``"Others"``, in which
    case ``custom_type`` names the element type.
    """

    type: str
    custom_type: str = ""
    required: bool = False
    max_length: str = ""
    json_alias: str = ""
    comment: str = ""

    @classmethod
    def from_override(cls, override: FieldOverride) -> "FieldEdit":
        """Pre-fill the form from the current override."""

        base = override.base_type
        if is_standard_type(base):
            selected, custom = base, ""
        else:
            selected, custom = OTHER_TYPE, override.custom_type or base
        return cls(
            type=selected,
            custom_type=custom,
            required=override.required,
            max_length=override.max_length,
            json_alias=override.json_alias,
            comment=override.comment,
        )


def initialise_overrides(schema: Schema, overrides: Optional[Overrides] = None) -> Overrides:
    """Create default overrides for every field that does not have one yet."""

    result: Overrides = {} if overrides is None else overrides
    for path, descriptor in iter_field_paths(schema):
        if path not in result:
            result[path] = FieldOverride.default_for(descriptor)
    return result


def apply_edit(override: FieldOverride, edit: FieldEdit) -> FieldOverride:
    """Return ``override`` updated with a submitted form state.

    List-ness of the field is preserved whatever element type is chosen. Any
    type outside the standard set is treated as a custom type.
    """

    selected = edit.type.strip()
    if selected == OTHER_TYPE or not is_standard_type(selected):
        custom = edit.custom_type.strip() if selected == OTHER_TYPE else selected
        if not custom:
            raise EmptyCustomTypeError(
                f"Custom type for {override.name} cannot be empty", value=edit.custom_type
            )
        element, custom_type = custom, custom
    else:
        element, custom_type = selected, ""

    return dataclasses.replace(
        override,
        type=list_of(element) if override.is_list else element,
        custom_type=custom_type,
        required=edit.required,
        max_length=edit.max_length,
        json_alias=edit.json_alias,
        comment=edit.comment,
    )


def edit_from_entry(override: FieldOverride, entry: dict[str, Any]) -> FieldEdit:
    """Merge a partial override-file entry onto the current form state."""

    edit = FieldEdit.from_override(override)
    if "type" in entry:
        edit.type = entry["type"]
        if entry["type"] != OTHER_TYPE:
            edit.custom_type = ""
    custom_type = entry.get("custom_type")
    if custom_type is not None:
        edit.custom_type = custom_type
        if "type" not in entry and custom_type.strip():
            edit.type = OTHER_TYPE
    if "required" in entry:
        edit.required = bool(entry["required"])
    if "max_length" in entry:
        edit.max_length = "" if entry["max_length"] is None else str(entry["max_length"])
    if "json_alias" in entry:
        alias = entry["json_alias"]
        if isinstance(alias, list):
            alias = ", ".join(alias)
        edit.json_alias = alias or ""
    if "comment" in entry:
        edit.comment = entry["comment"] or ""
    return edit


def parse_override_document(text: str, *, source: str = "<string>") -> dict[str, dict[str, Any]]:
    """Parse and validate override YAML, returning entries keyed by field path."""

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OverrideFileError(f"Override file {source} is not valid YAML: {exc}", value=source) from exc

    if data is None:
        return {}
    try:
        validate(instance=data, schema=OVERRIDES_FILE_SCHEMA)
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise OverrideFileError(
            f"Override file {source} failed validation at {location}: {exc.message}",
            value=source,
        ) from exc
    return dict(data["fields"])


def load_override_file(path: Path) -> dict[str, dict[str, Any]]:
    """Read an override YAML file from disk."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OverrideFileError(f"Cannot read override file {path}: {exc}", value=str(path)) from exc
    entries = parse_override_document(text, source=str(path))
    logger.debug("Loaded %d override entries from %s", len(entries), path)
    return entries


def dump_overrides(overrides: Overrides) -> str:
    """Serialise overrides in the override-file format."""

    fields: dict[str, dict[str, Any]] = {}
    for path, override in overrides.items():
        edit = FieldEdit.from_override(override)
        entry: dict[str, Any] = {"type": edit.type}
        if edit.type == OTHER_TYPE:
            entry["custom_type"] = edit.custom_type
        entry["required"] = edit.required
        entry["max_length"] = edit.max_length
        entry["json_alias"] = edit.json_alias
        entry["comment"] = edit.comment
        fields[path] = entry
    return yaml.safe_dump({"fields": fields}, sort_keys=False, allow_unicode=True)
