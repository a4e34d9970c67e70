"""Errors raised by the collection store.

Every record-level error carries the HTTP status the routers answer with;
startup errors are fatal and never reach a router.
"""
from __future__ import annotations

from typing import Iterable, Sequence


class CollectionError(Exception):
    def __init__(self, message: str, code: str = "invalid", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class ValidationError(CollectionError):
    """Record does not match the schema of its resource type."""

    def __init__(self, type_name: str, errors: Sequence[dict]):
        super().__init__(f"Invalid {type_name} data", "validation", 400)
        self.type_name = type_name
        self.errors = list(errors)


class MissingKey(CollectionError):
    def __init__(self) -> None:
        super().__init__("Slug is required", "missing_key", 400)


class DuplicateKey(CollectionError):
    def __init__(self, slug: str) -> None:
        super().__init__("Slug already exists", "duplicate_key", 409)
        self.slug = slug


class ReadonlyViolation(CollectionError):
    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = sorted(fields)
        super().__init__(
            f"Cannot modify readonly properties: {', '.join(self.fields)}", "readonly", 400
        )


class NotFound(CollectionError):
    def __init__(self, type_name: str, key_name: str, key) -> None:
        super().__init__(f"{type_name} with {key_name} '{key}' not found.", "not_found", 404)


class PersistenceError(CollectionError):
    """A flush could not be written; logged by the persistence task only."""

    def __init__(self, type_name: str, reason: str) -> None:
        super().__init__(f"Could not save data for {type_name}: {reason}", "persistence", 500)
        self.type_name = type_name


class StructuralError(CollectionError):
    """A collection file is not a JSON array of records."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "structure", 400)


class JsonSyntaxError(StructuralError):
    pass


class StartupError(Exception):
    """Aggregated report of every collection that failed the integrity gate."""

    def __init__(self, reports: Sequence[str]):
        self.reports = list(reports)
        super().__init__("\n\n".join(self.reports))


def format_field_errors(errors: Iterable[dict]) -> str:
    """Group ``{field, message}`` pairs by field, one line per field."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.get("field") or "", []).append(error.get("message", ""))
    lines = []
    for field, messages in grouped.items():
        lines.append(f"   • {field or 'general'}: {', '.join(messages)}")
    return "\n".join(lines)
