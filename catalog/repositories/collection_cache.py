"""
In-memory collections, the single source of truth for reads.

Mutations never suspend: each one runs to completion on the event loop, so two
requests can not interleave inside an update and no lock is needed.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from catalog.domain.errors import (
    DuplicateKey,
    MissingKey,
    NotFound,
    ReadonlyViolation,
    ValidationError,
)
from catalog.domain.schemas import SERVER_MANAGED_FIELDS, ResourceRegistry


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _next_id(records: list[dict]) -> int:
    ids = [r.get("id") for r in records]
    numbers = [
        i for i in ids if isinstance(i, (int, float)) and not isinstance(i, bool) and math.isfinite(i)
    ]
    return int(math.floor(max(numbers, default=0))) + 1


class CollectionCache:
    """Resource type -> ordered list of records."""

    def __init__(self, registry: ResourceRegistry) -> None:
        self.registry = registry
        self._collections: dict[str, list[dict]] = {name: [] for name in registry}

    def get(self, type_name: str) -> list[dict]:
        """Current records in order. Callers must not mutate the result."""
        return self._collections[type_name]

    def replace(self, type_name: str, records: list[dict]) -> None:
        self._collections[type_name] = list(records)

    def find_by_slug(self, type_name: str, slug: str) -> Optional[dict]:
        index = self._index_of(type_name, slug)
        return None if index is None else self._collections[type_name][index]

    def _index_of(self, type_name: str, slug: str) -> Optional[int]:
        for index, record in enumerate(self._collections[type_name]):
            if record.get("slug") == slug:
                return index
        return None

    def insert(self, type_name: str, record: Mapping[str, Any]) -> dict:
        records = self._collections[type_name]
        slug = record.get("slug")
        if not slug:
            raise MissingKey()
        if self._index_of(type_name, slug) is not None:
            raise DuplicateKey(slug)
        now = _now_iso()
        stored = {"id": _next_id(records)}
        stored.update((k, v) for k, v in record.items() if k not in SERVER_MANAGED_FIELDS)
        stored["createdAt"] = now
        stored["updatedAt"] = now
        records.append(stored)
        return stored

    def update_by_slug(self, type_name: str, slug: str, partial: Mapping[str, Any]) -> dict:
        index = self._index_of(type_name, slug)
        if index is None:
            raise NotFound(type_name, "slug", slug)
        fields = {k: v for k, v in partial.items() if k != "slug" and k not in SERVER_MANAGED_FIELDS}
        blocked = self.registry.readonly_fields(type_name).intersection(fields)
        if blocked:
            raise ReadonlyViolation(blocked)

        records = self._collections[type_name]
        merged = {**records[index], **fields}
        result = self.registry.validate(type_name, merged)
        if not result.valid:
            raise ValidationError(type_name, result.errors)
        merged["updatedAt"] = _now_iso()
        records[index] = merged
        return merged

    def delete_by_id(self, type_name: str, record_id: int) -> bool:
        records = self._collections[type_name]
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                del records[index]
                return True
        return False
