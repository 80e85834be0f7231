"""Error taxonomy for DTO generation."""

from __future__ import annotations

from typing import Any, Optional


class DtoGenError(ValueError):
    """Base class for every failure surfaced to callers."""

    def __init__(self, message: str, *, value: Optional[Any] = None) -> None:
        super().__init__(message)
        self.value = value


class MissingRootKeyError(DtoGenError):
    """Raised when a document carries neither TRANRQ nor TRANRS at its root."""


class InvalidRootError(DtoGenError):
    """Raised when the extraction root is not a JSON object."""


class EmptyProgramNameError(DtoGenError):
    """Raised when the program name is blank."""


class InvalidMaxLengthError(DtoGenError):
    """Raised when a max length override is not a positive integer."""


class UnsupportedAnnotationStyleError(DtoGenError):
    """Raised for an annotation style token outside the supported set."""


class EmptyCustomTypeError(DtoGenError):
    """Raised when a custom type is selected but left blank."""


class UnknownFieldError(DtoGenError):
    """Raised when a field path is not part of the current schema."""


class DocumentError(DtoGenError):
    """Raised when a source document cannot be read or decoded."""


class OverrideFileError(DtoGenError):
    """Raised when an override file is malformed."""
