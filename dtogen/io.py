"""I/O utilities for reading example documents and writing generated code."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import DocumentError, EmptyProgramNameError, MissingRootKeyError

REQUEST_KEY = "TRANRQ"
RESPONSE_KEY = "TRANRS"


@dataclass(frozen=True, slots=True)
class Envelope:
    """The extraction root of a TRANRQ/TRANRS document."""

    root: Any
    is_request: bool
    root_class_name: str


def load_document(path: Path) -> Any:
    """Read and decode a JSON document."""

    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"Invalid JSON in {path}: {exc}", value=str(path)) from exc


def parse_document(text: str) -> Any:
    """Decode a JSON document held in memory."""

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Invalid JSON: {exc}", value=text) from exc


def unwrap_envelope(document: Any, program_name: str) -> Envelope:
    """Select the request or response body and name its root record type.

    The program name is checked first so that a blank name is reported even
    when the document itself is also malformed.
    """

    name = (program_name or "").strip()
    if not name:
        raise EmptyProgramNameError("Program name is required", value=program_name)

    if isinstance(document, dict) and REQUEST_KEY in document:
        return Envelope(document[REQUEST_KEY], True, f"{name}Tranrq")
    if isinstance(document, dict) and RESPONSE_KEY in document:
        return Envelope(document[RESPONSE_KEY], False, f"{name}Tranrs")
    raise MissingRootKeyError(
        f"JSON must contain either {REQUEST_KEY} or {RESPONSE_KEY} as the root object",
        value=sorted(document) if isinstance(document, dict) else type(document).__name__,
    )


def write_output(path: Path, text: str) -> Path:
    """Write generated source text, creating parent directories."""

    destination = path.expanduser().resolve()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")
    return destination
