from fastapi import Request, Depends
from fastapi.responses import ORJSONResponse, PlainTextResponse
from pydantic import ValidationError
import json
import logging

from allocator import create_paste
from auth import require_basic_auth
from errors import PasteError, StorageUnavailable
from schemas import PasteCreate, PasteCreated, DeleteResult

logger = logging.getLogger(__name__)

NOT_FOUND = "Paste not found"


def error_response(err: PasteError) -> ORJSONResponse:
    return ORJSONResponse(status_code=err.status_code, content={"message": err.message})


async def create_paste_handler(request: Request, user=Depends(require_basic_auth)):
    settings = request.app.state.settings
    store = request.app.state.store

    # --- Parse request body (raw text or JSON) ---
    max_char_content = settings.max_char_content
    max_bytes = max_char_content * 4
    body_bytes = bytearray()
    size = 0

    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            return ORJSONResponse(status_code=400, content={"message": f"Content exceeds {max_char_content} max chars"})
        body_bytes.extend(chunk)

    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            data = json.loads(body_bytes)
            paste_request = PasteCreate(**data)
        except (ValueError, TypeError, ValidationError):
            return ORJSONResponse(status_code=400, content={"message": "Request body not compatible JSON format"})
    else:
        paste_request = PasteCreate(
            content=body_bytes.decode(errors="replace"),
            filename=request.headers.get("X-Filename"),
            language=request.headers.get("X-Language"),
            slug=request.headers.get("X-Slug"),
        )

    content = paste_request.content
    if not content:
        return ORJSONResponse(status_code=400, content={"message": "Content is required"})
    if len(content) > max_char_content:
        return ORJSONResponse(status_code=400, content={"message": f"Content exceeds {max_char_content} max chars"})

    try:
        paste = await create_paste(
            store,
            content,
            filename=paste_request.filename,
            language=paste_request.language,
            # an empty slug means "pick one for me"
            slug=paste_request.slug or None,
        )
    except PasteError as e:
        return error_response(e)

    base_url = settings.public_url
    created = PasteCreated(id=paste.id, url=f"{base_url}/{paste.id}", raw=f"{base_url}/{paste.id}/raw")
    return ORJSONResponse(content=created.model_dump())


async def get_paste_handler(paste_id: str, request: Request):
    try:
        paste = await request.app.state.store.get(paste_id)
    except StorageUnavailable as e:
        return error_response(e)
    if paste is None:
        return ORJSONResponse(status_code=404, content={"message": NOT_FOUND})
    return ORJSONResponse(content=paste.model_dump())


async def get_raw_paste_handler(paste_id: str, request: Request):
    try:
        paste = await request.app.state.store.get(paste_id)
    except StorageUnavailable as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    if paste is None:
        return PlainTextResponse(NOT_FOUND, status_code=404)
    return PlainTextResponse(paste.content)


async def delete_paste_handler(paste_id: str, request: Request, user=Depends(require_basic_auth)):
    try:
        deleted = await request.app.state.store.delete(paste_id)
    except StorageUnavailable as e:
        return error_response(e)
    if not deleted:
        return ORJSONResponse(status_code=404, content={"deleted": False, "message": NOT_FOUND})
    return ORJSONResponse(content=DeleteResult(deleted=True).model_dump())


async def health_handler(request: Request):
    try:
        await request.app.state.store.count()
    except StorageUnavailable:
        return ORJSONResponse(status_code=500, content={"message": {"status": "error", "db_status": "unavailable"}})
    return {"status": "ok", "db_status": "ok"}
