"""Java DTO source rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .errors import InvalidMaxLengthError, UnsupportedAnnotationStyleError
from .models import (
    NUMERIC_TYPES,
    FieldDescriptor,
    Overrides,
    Schema,
    ValidationNeeds,
    field_path,
    is_standard_type,
)
from .utils import lower_camel_case
from .validation import compute_validation_needs

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

ANNOTATION_NAMESPACES: dict[str, str] = {
    "17": "jakarta.validation",
    "8": "javax.validation",
}

BASELINE_IMPORTS: frozenset[str] = frozenset(
    {
        "com.fasterxml.jackson.annotation.JsonProperty",
        "java.io.Serializable",
        "lombok.Data",
    }
)

TYPE_IMPORTS: dict[str, str] = {
    "BigDecimal": "java.math.BigDecimal",
    "LocalDate": "java.time.LocalDate",
    "LocalDateTime": "java.time.LocalDateTime",
    "Timestamp": "java.sql.Timestamp",
}

# @Max takes a long; 10**18 - 1 is the largest all-nines bound below Long.MAX_VALUE.
_MAX_NUMERIC_DIGITS = 18

_JSON_ALIAS = "com.fasterxml.jackson.annotation.JsonAlias"
_LIST = "java.util.List"


@dataclass(slots=True)
class RenderConfig:
    """Target platform selection for generated annotations."""

    annotation_style: str = "17"

    def __post_init__(self) -> None:
        if self.annotation_style not in ANNOTATION_NAMESPACES:
            supported = ", ".join(sorted(ANNOTATION_NAMESPACES))
            raise UnsupportedAnnotationStyleError(
                f"Unsupported annotation style {self.annotation_style!r}; expected one of {supported}",
                value=self.annotation_style,
            )

    @property
    def namespace(self) -> str:
        return ANNOTATION_NAMESPACES[self.annotation_style]

    @property
    def constraints_package(self) -> str:
        return f"{self.namespace}.constraints"


@dataclass(slots=True)
class FieldModel:
    json_name: str
    identifier: str
    declared_type: str
    annotations: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass(slots=True)
class ClassModel:
    name: str
    imports: list[str] = field(default_factory=list)
    fields: list[FieldModel] = field(default_factory=list)

    @property
    def import_lines(self) -> list[str]:
        return [f"import {name};" for name in self.imports]


def build_class_model(
    type_name: str,
    fields: Sequence[FieldDescriptor],
    overrides: Overrides,
    validation_needs: ValidationNeeds,
    annotation_style: str,
) -> ClassModel:
    """Resolve imports and per-field annotations for one record type.

    Every field must already have an override; a missing one means overrides
    were not initialised before rendering and raises ``KeyError``.
    """

    config = RenderConfig(annotation_style)
    constraints = config.constraints_package
    imports: set[str] = set(BASELINE_IMPORTS)
    models: list[FieldModel] = []

    for descriptor in fields:
        path = field_path(type_name, descriptor.name)
        override = overrides[path]
        declared = override.type
        base = override.base_type
        annotations = [f"@JsonProperty({_java_string(descriptor.name)})"]

        aliases = override.aliases()
        if aliases:
            imports.add(_JSON_ALIAS)
            if len(aliases) == 1:
                annotations.append(f"@JsonAlias({_java_string(aliases[0])})")
            else:
                joined = ", ".join(_java_string(alias) for alias in aliases)
                annotations.append(f"@JsonAlias({{{joined}}})")

        if override.required:
            kind = _required_kind(declared, override.is_list)
            imports.add(f"{constraints}.{kind}")
            message = _java_string(f"{descriptor.name} 不得為空")
            annotations.append(f"@{kind}(message = {message})")

        bound = _parse_max_length(path, override.max_length)
        if bound is not None:
            if declared in NUMERIC_TYPES:
                if bound > _MAX_NUMERIC_DIGITS:
                    raise InvalidMaxLengthError(
                        f"Max length for {path} must be at most {_MAX_NUMERIC_DIGITS} digits for {declared}, "
                        f"got {override.max_length!r}",
                        value=override.max_length,
                    )
                max_value = 10**bound - 1
                imports.add(f"{constraints}.Max")
                message = _java_string(f"{descriptor.name} 不得超過 {max_value}")
                annotations.append(f"@Max(message = {message}, value = {max_value})")
            else:
                imports.add(f"{constraints}.Size")
                message = _java_string(f"{descriptor.name} 長度不得超過 {bound}")
                annotations.append(f"@Size(message = {message}, max = {bound})")

        if not is_standard_type(base) and validation_needs.get(base, False):
            imports.add(f"{config.namespace}.Valid")
            annotations.append("@Valid")

        if override.is_list:
            imports.add(_LIST)
        if base in TYPE_IMPORTS:
            imports.add(TYPE_IMPORTS[base])

        models.append(
            FieldModel(
                json_name=descriptor.name,
                identifier=lower_camel_case(descriptor.name),
                declared_type=declared,
                annotations=annotations,
                comment=override.comment,
            )
        )

    return ClassModel(name=type_name, imports=sorted(imports), fields=models)


@lru_cache(maxsize=None)
def _template():
    env = Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env.get_template("dto.java.j2")


def render_class(model: ClassModel) -> str:
    """Format a class model as Java source text."""

    return _template().render(model=model)


def render_record_type(
    type_name: str,
    fields: Sequence[FieldDescriptor],
    overrides: Overrides,
    validation_needs: ValidationNeeds,
    annotation_style: str,
) -> str:
    """Render the annotated source of a single record type."""

    model = build_class_model(type_name, fields, overrides, validation_needs, annotation_style)
    return render_class(model)


def render_schema(
    schema: Schema,
    overrides: Overrides,
    annotation_style: str,
    validation_needs: Optional[ValidationNeeds] = None,
) -> str:
    """Render every record type in schema order, separated by a blank line."""

    if validation_needs is None:
        validation_needs = compute_validation_needs(schema, overrides)

    blocks = [
        render_record_type(type_name, fields, overrides, validation_needs, annotation_style)
        for type_name, fields in schema.items()
    ]
    logger.debug("Rendered %d record types", len(blocks))
    return "\n\n".join(blocks) + "\n"


def _required_kind(declared_type: str, is_list: bool) -> str:
    if declared_type == "String":
        return "NotBlank"
    if is_list:
        return "NotEmpty"
    return "NotNull"


def _parse_max_length(path: str, raw: str) -> Optional[int]:
    text = raw.strip()
    if not text:
        return None
    try:
        bound = int(text)
    except ValueError:
        bound = 0
    if bound <= 0:
        raise InvalidMaxLengthError(
            f"Max length for {path} must be a positive integer, got {raw!r}",
            value=raw,
        )
    return bound


def _java_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
