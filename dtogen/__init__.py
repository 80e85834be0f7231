"""Core package for the JSON to DTO class generator."""

__all__ = [
    "cli",
    "io",
    "errors",
    "models",
    "extract",
    "validation",
    "render",
    "overrides",
    "schemas",
    "session",
    "utils",
]
