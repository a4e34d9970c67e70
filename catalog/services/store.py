"""Explicitly constructed context shared by routers and persistence tasks.

Lifecycle has two phases: ``load()`` runs the integrity gate and fills the
cache, then the app serves. Nothing is torn down; the context lives as long as
the process.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

from catalog.core.logging import get_logger
from catalog.domain.errors import PersistenceError
from catalog.domain.schemas import ResourceRegistry
from catalog.repositories.collection_cache import CollectionCache
from catalog.repositories.json_storage import JsonStorage, dumps
from catalog.services.loader import load_collections
from catalog.services.write_serializer import PersistenceTask, WriteSerializer

logger = get_logger(__name__)


class StoreContext:
    def __init__(self, registry: ResourceRegistry, database_dir: Path) -> None:
        self.registry = registry
        self.storage = JsonStorage(database_dir)
        self.cache = CollectionCache(registry)
        self.serializer = WriteSerializer(registry)
        self.ready = False

    async def load(self) -> None:
        await load_collections(self)
        self.ready = True

    def persistence_task(self, type_name: str) -> PersistenceTask:
        async def flush() -> None:
            # snapshot taken when the task runs, not when it was queued
            payload = dumps(self.cache.get(type_name))
            try:
                await asyncio.to_thread(self.storage.write_text, type_name, payload)
            except OSError as exc:
                error = PersistenceError(type_name, str(exc))
                logger.error("%s", error.message, exc_info=exc)
                return
            logger.info("Data saved to %s.", self.storage.path_for(type_name).name)

        return flush

    def save(self, type_name: str) -> asyncio.Future:
        return self.serializer.enqueue(type_name, self.persistence_task(type_name))
