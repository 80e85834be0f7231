"""Session state tying extraction, override edits and rendering together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .errors import DtoGenError, UnknownFieldError
from .extract import extract_schema
from .io import Envelope, unwrap_envelope
from .models import FieldOverride, Overrides, Schema, ValidationNeeds, field_path
from .overrides import FieldEdit, apply_edit, edit_from_entry, initialise_overrides
from .render import RenderConfig, render_schema
from .utils import stable_hash
from .validation import compute_validation_needs

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Mutable generator state for one example document.

    ``generate`` replaces the root and clears every override; ``edit_field``
    changes one override at a time. Both re-render the whole output.
    """

    config: RenderConfig = field(default_factory=RenderConfig)
    envelope: Optional[Envelope] = None
    schema: Schema = field(default_factory=dict)
    overrides: Overrides = field(default_factory=dict)
    _schema_key: Optional[str] = field(default=None, repr=False)

    @property
    def root_class_name(self) -> str:
        return self.envelope.root_class_name if self.envelope else ""

    @property
    def is_request(self) -> bool:
        return bool(self.envelope and self.envelope.is_request)

    @property
    def validation_needs(self) -> ValidationNeeds:
        return compute_validation_needs(self.schema, self.overrides)

    def generate(self, document: Any, program_name: str) -> str:
        """Extract a fresh schema from ``document`` and render it."""

        envelope = unwrap_envelope(document, program_name)
        key = stable_hash([envelope.root_class_name, envelope.root])
        if key == self._schema_key:
            schema = self.schema
            logger.debug("Document unchanged; reusing extracted schema for %s", envelope.root_class_name)
        else:
            schema = extract_schema(envelope.root, envelope.root_class_name)

        overrides = initialise_overrides(schema)
        output = render_schema(schema, overrides, self.config.annotation_style)

        self.envelope = envelope
        self.schema = schema
        self.overrides = overrides
        self._schema_key = key
        return output

    def override_for(self, path: str) -> FieldOverride:
        try:
            return self.overrides[path]
        except KeyError:
            raise UnknownFieldError(f"Unknown field {path}", value=path) from None

    def edit_field(self, path: str, edit: FieldEdit) -> str:
        """Apply one field's form state and re-render.

        The edit is only kept if the whole output renders.
        """

        updated = apply_edit(self.override_for(path), edit)
        candidate = dict(self.overrides)
        candidate[path] = updated
        output = render_schema(self.schema, candidate, self.config.annotation_style)
        self.overrides[path] = updated
        return output

    def apply_entries(self, entries: dict[str, dict[str, Any]]) -> str:
        """Apply a batch of override-file entries atomically and re-render."""

        candidate = dict(self.overrides)
        for path, entry in entries.items():
            current = candidate.get(path)
            if current is None:
                logger.warning("Skipping override for %s: field not present in %s", path, self.root_class_name)
                continue
            candidate[path] = apply_edit(current, edit_from_entry(current, entry))
        output = render_schema(self.schema, candidate, self.config.annotation_style)
        self.overrides = candidate
        return output

    def render(self) -> str:
        """Render the current schema with the current overrides."""

        if self.envelope is None:
            raise DtoGenError("Nothing to render; generate from a document first")
        return render_schema(self.schema, self.overrides, self.config.annotation_style)

    def field_rows(self) -> Iterable[tuple[str, str, str]]:
        """Yield ``(type name, field name, declared type)`` for display."""

        for type_name, fields in self.schema.items():
            for descriptor in fields:
                override = self.overrides[field_path(type_name, descriptor.name)]
                yield type_name, descriptor.name, override.type
