import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from eventhub.core.config import Settings
from eventhub.core.database import aget_db
from eventhub.core.exceptions import ValidationFailedError
from eventhub.core.security import TokenClaims, get_current_user, get_request_settings
from eventhub.schemas.eventSchema import (
    EventCreate, EventUpdate, EventResponse, EventListResponse,
    parse_publish_status,
)
from eventhub.schemas.responseSchema import ApiResponse
from eventhub.services.EventService import EventService
from eventhub.utils.uploads.val_upload_event_file import remove_event_file, validate_and_store_event_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(db: AsyncSession = Depends(aget_db)) -> EventService:
    return EventService(db)


@asynccontextmanager
async def event_payload(request: Request):
    """
    Yield (fields, file) from a JSON or form/multipart request body.
    Empty form values are treated as absent.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationFailedError("Malformed JSON body")
        if not isinstance(body, dict):
            raise ValidationFailedError("Request body must be a JSON object")
        yield body, None
        return

    async with request.form() as form:
        fields, upload = {}, None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "file" and value.filename:
                    upload = value
                continue
            if value.strip() == "":
                continue
            fields[key] = value
        yield fields, upload


@router.get("/", response_model=ApiResponse[EventListResponse])
async def list_events(
    search: Optional[str] = None,
    filter: Optional[str] = Query(None, description="Publish status to filter by"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: EventService = Depends(get_event_service),
):
    """Get list of events (public endpoint)"""
    publish_status = None
    if filter:
        try:
            publish_status = parse_publish_status(filter)
        except ValueError as e:
            raise ValidationFailedError(str(e))

    result = await service.list(search=search, page=page, limit=limit, publish_status=publish_status)
    return ApiResponse(message="Events fetched successfully.", data=result)


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
async def get_event(
    event_id: int = Path(..., gt=0),
    service: EventService = Depends(get_event_service),
):
    """Get event details by id (public endpoint)"""
    event = await service.get_by_id(event_id)
    return ApiResponse(message="Event fetched successfully.", data=EventResponse.model_validate(event))


@router.post("/addevent", response_model=ApiResponse[EventResponse], status_code=status.HTTP_201_CREATED)
async def add_event(
    request: Request,
    current_user: TokenClaims = Depends(get_current_user),
    settings: Settings = Depends(get_request_settings),
    service: EventService = Depends(get_event_service),
):
    """
    Create an event from a multipart form (optional `file` part) or a JSON body
    """
    stored_file = None
    async with event_payload(request) as (fields, upload):
        data = EventCreate.model_validate(fields)
        await service.validate_foreign_keys(data.model_dump())
        if upload is not None:
            stored_file = data.file = await validate_and_store_event_file(
                upload,
                settings.EVENT_UPLOAD_DIR,
                settings.MAX_UPLOAD_SIZE,
                prefix=data.title,
            )

    try:
        event = await service.create(data, created_by=current_user.userId)
    except Exception:
        await remove_event_file(stored_file, settings.EVENT_UPLOAD_DIR)
        raise
    return ApiResponse(message="Event created successfully.", data=EventResponse.model_validate(event))


@router.put("/editevent", response_model=ApiResponse[EventResponse])
async def edit_event(
    request: Request,
    current_user: TokenClaims = Depends(get_current_user),
    settings: Settings = Depends(get_request_settings),
    service: EventService = Depends(get_event_service),
):
    """
    Update the provided fields of an event; `id` identifies the event.
    `content` and `file` may be sent as null to clear them.
    """
    stored_file = None
    async with event_payload(request) as (fields, upload):
        data = EventUpdate.model_validate(fields)
        event = await service.get_by_id(data.id)
        previous_file = event.file
        await service.validate_foreign_keys(data.model_dump(exclude_unset=True))
        if upload is not None:
            stored_file = data.file = await validate_and_store_event_file(
                upload,
                settings.EVENT_UPLOAD_DIR,
                settings.MAX_UPLOAD_SIZE,
                prefix=data.title or event.title,
            )

    logger.info(f"User {current_user.userId} editing event {data.id}")
    try:
        event = await service.update(data)
    except Exception:
        await remove_event_file(stored_file, settings.EVENT_UPLOAD_DIR)
        raise

    if previous_file != event.file:
        await remove_event_file(previous_file, settings.EVENT_UPLOAD_DIR)
    return ApiResponse(message="Event updated successfully.", data=EventResponse.model_validate(event))


@router.delete("/deleteevent/{event_id}", response_model=ApiResponse[EventResponse])
async def delete_event(
    event_id: int = Path(..., gt=0),
    current_user: TokenClaims = Depends(get_current_user),
    settings: Settings = Depends(get_request_settings),
    service: EventService = Depends(get_event_service),
):
    logger.info(f"User {current_user.userId} deleting event {event_id}")
    deleted = await service.delete(event_id)
    await remove_event_file(deleted.file, settings.EVENT_UPLOAD_DIR)
    return ApiResponse(message="Event deleted successfully", data=deleted)
