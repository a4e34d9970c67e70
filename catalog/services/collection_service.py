"""Reads and mutations for one resource type."""

from __future__ import annotations

import asyncio
from typing import Any

from catalog.domain.errors import NotFound, ValidationError
from catalog.domain.schemas import ResourceType
from catalog.services.store import StoreContext


class CollectionService:
    """Applies a mutation to the cache, then queues a flush of that type."""

    def __init__(self, context: StoreContext, resource: ResourceType) -> None:
        self.context = context
        self.resource = resource
        self.type_name = resource.name

    def list_all(self) -> list[dict]:
        return self.context.cache.get(self.type_name)

    def get(self, slug: str) -> dict:
        record = self.context.cache.find_by_slug(self.type_name, slug)
        if record is None:
            raise NotFound(self.type_name, "slug", slug)
        return record

    def create(self, payload: Any) -> tuple[dict, asyncio.Future]:
        result = self.resource.validate(payload)
        if not result.valid:
            raise ValidationError(self.type_name, result.errors)
        record = self.context.cache.insert(self.type_name, payload)
        return record, self.context.save(self.type_name)

    def update(self, slug: str, payload: Any) -> tuple[dict, asyncio.Future]:
        if not isinstance(payload, dict):
            raise ValidationError(
                self.type_name, [{"field": "", "message": "Request body must be a JSON object"}]
            )
        record = self.context.cache.update_by_slug(self.type_name, slug, payload)
        return record, self.context.save(self.type_name)

    def delete(self, record_id: int) -> asyncio.Future:
        if not self.context.cache.delete_by_id(self.type_name, record_id):
            raise NotFound(self.type_name, "id", record_id)
        return self.context.save(self.type_name)
