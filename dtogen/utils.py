"""Utility helpers for identifier naming and JSON hashing."""

from __future__ import annotations

import hashlib
import json
import re
from typing import Iterable

_LIST_SUFFIX = "List"
_UNDERSCORE_LETTER = re.compile(r"_([a-zA-Z])")


def capitalize(value: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""

    return value[:1].upper() + value[1:]


def strip_list_suffix(key: str) -> str:
    """Singularize a list key such as ``caseList`` into ``case``."""

    if key.endswith(_LIST_SUFFIX) and len(key) > len(_LIST_SUFFIX):
        return key[: -len(_LIST_SUFFIX)]
    return key


def lower_camel_case(name: str) -> str:
    """Normalize a snake or Pascal case key into a Java field identifier."""

    lowered = name[:1].lower() + name[1:]
    return _UNDERSCORE_LETTER.sub(lambda match: match.group(1).upper(), lowered)


def stable_hash(values: Iterable[object]) -> str:
    """Generate a stable SHA-256 hash for a sequence of values.

    Key order inside objects is preserved, since it decides field order.
    """

    serialized = json.dumps(list(values), default=str, ensure_ascii=False)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
