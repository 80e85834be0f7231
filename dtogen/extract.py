"""Schema extraction from an example JSON document."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterator

from .errors import InvalidRootError
from .models import FieldDescriptor, Schema, field_path
from .utils import capitalize, strip_list_suffix

logger = logging.getLogger(__name__)


class JsonKind(str, Enum):
    OBJECT = "object"
    LIST = "list"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"


_SCALAR_TYPES: dict[JsonKind, str] = {
    JsonKind.INTEGER: "Integer",
    JsonKind.FLOAT: "Double",
    JsonKind.BOOLEAN: "Boolean",
    JsonKind.STRING: "String",
    JsonKind.NULL: "String",
}


def json_kind(value: Any) -> JsonKind:
    """Classify a decoded JSON value.

    ``bool`` is checked ahead of ``int`` because it subclasses it. Floats that
    hold an integral value (``34.0``) count as integers.
    """

    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, int):
        return JsonKind.INTEGER
    if isinstance(value, float):
        return JsonKind.INTEGER if value.is_integer() else JsonKind.FLOAT
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.LIST
    raise TypeError(f"Unsupported JSON value of type {type(value).__name__}")


def extract_schema(value: Any, root_name: str) -> Schema:
    """Derive record types and their fields from ``value``.

    Types are keyed by name in discovery order (pre-order, input key order).
    Lists of objects are inferred from their first element only.
    """

    if json_kind(value) is not JsonKind.OBJECT:
        raise InvalidRootError(
            f"Root value must be a JSON object, got {json_kind(value).value}",
            value=value,
        )

    schema: Schema = {}
    _process_object(value, root_name, "", schema)
    logger.debug("Extracted %d record types from root %s", len(schema), root_name)
    return schema


def _process_object(obj: dict[str, Any], type_name: str, parent_path: str, schema: Schema) -> None:
    fields = schema.setdefault(type_name, [])
    known = {descriptor.name for descriptor in fields}

    for key, value in obj.items():
        path = f"{parent_path}.{key}" if parent_path else key
        kind = json_kind(value)
        child: tuple[dict[str, Any], str] | None = None

        if kind is JsonKind.LIST:
            if value and json_kind(value[0]) is JsonKind.OBJECT:
                child_name = type_name + capitalize(strip_list_suffix(key))
                descriptor = FieldDescriptor(key, child_name, is_list=True)
                child = (value[0], child_name)
                if _is_heterogeneous(value):
                    logger.debug("List at %s has mixed element shapes; sampling the first", path)
            else:
                descriptor = FieldDescriptor(key, "String", is_list=True)
        elif kind is JsonKind.OBJECT:
            child_name = type_name + capitalize(key)
            descriptor = FieldDescriptor(key, child_name)
            child = (value, child_name)
        else:
            descriptor = FieldDescriptor(key, _SCALAR_TYPES[kind])

        if key not in known:
            fields.append(descriptor)
            known.add(key)
        if child is not None:
            _process_object(child[0], child[1], path, schema)


def _is_heterogeneous(items: list[Any]) -> bool:
    first = items[0]
    for item in items[1:]:
        if json_kind(item) is not JsonKind.OBJECT or list(item) != list(first):
            return True
    return False


def iter_field_paths(schema: Schema) -> Iterator[tuple[str, FieldDescriptor]]:
    """Yield ``(path, descriptor)`` for every field, in schema order."""

    for type_name, fields in schema.items():
        for descriptor in fields:
            yield field_path(type_name, descriptor.name), descriptor
