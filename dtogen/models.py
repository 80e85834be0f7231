"""Record types shared by the extractor, resolver and renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

STANDARD_TYPES: tuple[str, ...] = (
    "String",
    "Integer",
    "Long",
    "Double",
    "Boolean",
    "BigDecimal",
    "LocalDate",
    "LocalDateTime",
    "Timestamp",
)

NUMERIC_TYPES: frozenset[str] = frozenset({"Integer", "Long", "Double", "BigDecimal"})

# Type dropdown value selecting a user-supplied custom type.
OTHER_TYPE = "Others"

_LIST_PREFIX = "List<"


def is_standard_type(type_name: str) -> bool:
    return type_name in STANDARD_TYPES


def list_of(type_name: str) -> str:
    return f"{_LIST_PREFIX}{type_name}>"


def is_list_type(type_name: str) -> bool:
    return type_name.startswith(_LIST_PREFIX) and type_name.endswith(">")


def base_type_of(type_name: str) -> str:
    """Strip a single ``List<...>`` wrapper from a declared type."""

    if is_list_type(type_name):
        return type_name[len(_LIST_PREFIX):-1]
    return type_name


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One member of a record type, as inferred from the example document."""

    name: str
    element_type: str
    is_list: bool = False

    @property
    def declared_type(self) -> str:
        return list_of(self.element_type) if self.is_list else self.element_type


@dataclass(slots=True)
class FieldOverride:
    """User customization of how a single field is rendered."""

    name: str
    type: str
    required: bool = False
    max_length: str = ""
    json_alias: str = ""
    comment: str = ""
    custom_type: str = ""

    @classmethod
    def default_for(cls, descriptor: FieldDescriptor) -> "FieldOverride":
        """Build the untouched override for a freshly extracted field."""

        return cls(name=descriptor.name, type=descriptor.declared_type)

    @property
    def is_list(self) -> bool:
        return is_list_type(self.type)

    @property
    def base_type(self) -> str:
        return base_type_of(self.type)

    def aliases(self) -> list[str]:
        """Return the comma-separated alias list, trimmed, without blanks."""

        return [alias.strip() for alias in self.json_alias.split(",") if alias.strip()]

    def has_constraint(self) -> bool:
        return self.required or bool(self.max_length.strip())


Schema = Dict[str, List[FieldDescriptor]]
Overrides = Dict[str, FieldOverride]
ValidationNeeds = Dict[str, bool]


def field_path(type_name: str, field_name: str) -> str:
    return f"{type_name}.{field_name}"
