"""
Startup integrity gate.

Every collection file is parsed and every record validated before the server
accepts a request. If any record of any collection is invalid, or any file is
not a JSON array, startup is aborted with a report listing every violation.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from catalog.core.logging import get_logger
from catalog.domain.errors import (
    JsonSyntaxError,
    StartupError,
    StructuralError,
    format_field_errors,
)
from catalog.domain.schemas import ResourceType
from catalog.repositories.json_storage import JsonStorage

if TYPE_CHECKING:
    from catalog.services.store import StoreContext

logger = get_logger(__name__)


@dataclass
class InvalidRecord:
    index: int
    record_id: Any
    errors: list[dict]


@dataclass
class CollectionCheck:
    records: list[dict] = field(default_factory=list)
    report: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.report is None


def parse_collection(resource: ResourceType, storage: JsonStorage) -> list[dict]:
    """Read one collection file. Blank files are an empty collection."""
    filename = storage.path_for(resource.name).name
    try:
        data = storage.load(resource.name)
    except json.JSONDecodeError as exc:
        raise JsonSyntaxError(
            f"JSON syntax error in {filename}:\n{exc}\nCheck the file and make sure it is valid JSON."
        ) from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise StructuralError(f"Structure error in {filename}: the file must contain an array.")
    return data


def find_invalid_records(resource: ResourceType, records: list) -> list[InvalidRecord]:
    invalid = []
    for index, record in enumerate(records):
        result = resource.validate(record)
        if not result.valid:
            record_id = record.get("id") if isinstance(record, dict) else None
            invalid.append(InvalidRecord(index, record_id if record_id is not None else "unknown", result.errors))
    return invalid


def integrity_report(resource: ResourceType, storage: JsonStorage, invalid: list[InvalidRecord]) -> str:
    path = storage.path_for(resource.name)
    lines = [f"Validation errors in {path.name}. The server cannot start.", ""]
    for item in invalid:
        lines.append(f"Item #{item.index + 1} (ID: {item.record_id}) is invalid:")
        lines.append(format_field_errors(item.errors))
        lines.append("")
    lines.append(f"Fix these errors in {path} to start the server.")
    return "\n".join(lines)


def inspect_collection(resource: ResourceType, storage: JsonStorage) -> CollectionCheck:
    """Parse and validate one collection without touching any cache."""
    try:
        records = parse_collection(resource, storage)
    except StructuralError as exc:
        return CollectionCheck(report=exc.message)
    invalid = find_invalid_records(resource, records)
    if invalid:
        return CollectionCheck(report=integrity_report(resource, storage, invalid))
    return CollectionCheck(records=records)


async def load_collections(context: "StoreContext") -> None:
    """Populate the cache of ``context`` or raise StartupError.

    Collections without a file start empty and get an empty file written through
    the write serializer. The cache is only populated once every collection
    passed.
    """
    storage = context.storage
    if await asyncio.to_thread(storage.ensure_directory):
        logger.info("Database directory created: %s", storage.directory)

    loaded: dict[str, list[dict]] = {}
    missing: list[str] = []
    reports: list[str] = []
    for name, resource in context.registry.items():
        if not storage.exists(name):
            missing.append(name)
            continue
        check = await asyncio.to_thread(inspect_collection, resource, storage)
        if check.ok:
            loaded[name] = check.records
        else:
            reports.append(check.report)

    for name in missing:
        await context.save(name)
        logger.info("Created empty data file for %s.", name)

    if reports:
        raise StartupError(reports)

    for name, records in loaded.items():
        context.cache.replace(name, records)
        logger.debug("Loaded %d %s record(s)", len(records), name)
