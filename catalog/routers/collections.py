from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.core.config import Settings
from catalog.domain.errors import CollectionError, NotFound, ReadonlyViolation, ValidationError
from catalog.domain.schemas import ResourceRegistry, ResourceType
from catalog.services.collection_service import CollectionService
from catalog.services.store import StoreContext


def _get_store(request: Request) -> StoreContext:
    store = getattr(getattr(request.app, "state", None), "store", None)
    if not store:
        raise RuntimeError("StoreContext not configured")
    if not store.ready:
        raise RuntimeError("StoreContext used before load()")
    return store


def _error_response(err: CollectionError) -> JSONResponse:
    if isinstance(err, ValidationError):
        body = {"error": err.message, "details": err.errors}
    elif isinstance(err, NotFound):
        body = {"success": False, "message": err.message}
    elif isinstance(err, ReadonlyViolation):
        body = {"success": False, "error": err.message}
    else:
        body = {"error": err.message}
    return JSONResponse(body, status_code=err.status_code)


def _parse_id(type_name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise NotFound(type_name, "id", raw) from None


def request_error_response(
    registry: ResourceRegistry, request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters answer 400 in the record error shape."""
    segment = request.url.path.strip("/").split("/", 1)[0]
    label = next((t.name for t in registry.values() if t.plural == segment), "request")
    details = [
        {"field": ".".join(str(part) for part in err["loc"] if part != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse({"error": f"Invalid {label} data", "details": details}, status_code=400)


def build_router(resource: ResourceType, settings: Settings) -> APIRouter:
    """Routes for one resource type under ``/<plural>``."""
    name = resource.name
    plural = resource.plural
    router = APIRouter(prefix=f"/{plural}", tags=[plural])

    def _service(request: Request) -> CollectionService:
        return CollectionService(_get_store(request), resource)

    @router.post("", status_code=201)
    async def create_record(request: Request, payload: Any = Body(None)):
        try:
            record, flushed = _service(request).create(payload)
        except CollectionError as exc:
            return _error_response(exc)
        if settings.wait_for_flush:
            await flushed
        return {"success": True, name: record}

    @router.get("")
    async def list_records(request: Request):
        return {"success": True, plural: _service(request).list_all()}

    @router.get("/{slug}")
    async def get_record(slug: str, request: Request):
        try:
            record = _service(request).get(slug)
        except CollectionError as exc:
            return _error_response(exc)
        return {"success": True, name: record}

    @router.put("/{slug}")
    async def update_record(slug: str, request: Request, payload: Any = Body(None)):
        try:
            record, flushed = _service(request).update(slug, payload)
        except CollectionError as exc:
            return _error_response(exc)
        if settings.wait_for_flush:
            await flushed
        return {"success": True, name: record}

    @router.delete("/{record_id}")
    async def delete_record(record_id: str, request: Request):
        try:
            flushed = _service(request).delete(_parse_id(name, record_id))
        except CollectionError as exc:
            return _error_response(exc)
        if settings.wait_for_flush:
            await flushed
        return {"success": True}

    return router
