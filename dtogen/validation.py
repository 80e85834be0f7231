"""Decide which record types need cascaded bean validation."""

from __future__ import annotations

from collections import deque

from .models import FieldOverride, Overrides, Schema, ValidationNeeds, field_path


def compute_validation_needs(schema: Schema, overrides: Overrides) -> ValidationNeeds:
    """Map every record type to whether it, or a type it reaches, is constrained.

    A field reaches another record type through the base type of its override's
    current type string, so retargeted fields are followed. The walk runs
    backwards from the directly constrained types over the reversed field
    edges and visits each type at most once, so override-made cycles and
    densely shared types stay linear in the size of the graph.
    """

    needs: ValidationNeeds = {type_name: False for type_name in schema}
    referrers: dict[str, list[str]] = {type_name: [] for type_name in schema}
    pending: deque[str] = deque()

    for type_name, fields in schema.items():
        constrained = False
        for descriptor in fields:
            override = overrides.get(field_path(type_name, descriptor.name))
            if override is None:
                override = FieldOverride.default_for(descriptor)
            if override.has_constraint():
                constrained = True
            if override.base_type in schema:
                referrers[override.base_type].append(type_name)
        if constrained:
            needs[type_name] = True
            pending.append(type_name)

    while pending:
        for referrer in referrers[pending.popleft()]:
            if not needs[referrer]:
                needs[referrer] = True
                pending.append(referrer)
    return needs
