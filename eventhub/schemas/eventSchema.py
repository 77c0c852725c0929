from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, PositiveInt, field_validator

from eventhub.constants.constants import MediaType, PublishStatus, PUBLISH_STATUS_ALIASES
from eventhub.schemas.responseSchema import CamelModel


def parse_publish_status(v):
    if v is None or isinstance(v, PublishStatus):
        return v
    if isinstance(v, str):
        status = PUBLISH_STATUS_ALIASES.get(v.strip().lower())
        if status is not None:
            return status
    raise ValueError("Publish status must be one of: publish, draft, PUBLISHED, DRAFT")


def _as_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


# ==================== EVENT SCHEMAS ====================

class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    content: Optional[str] = None
    media_type: MediaType
    file: Optional[str] = Field(None, max_length=500)
    location: str = Field(..., min_length=1, max_length=255)
    language: str = Field(..., min_length=2, max_length=50)

    publish_date: datetime
    publish_status: PublishStatus
    date: datetime

    category_id: PositiveInt
    subcategory_id: PositiveInt
    country_id: PositiveInt
    state_id: PositiveInt

    @field_validator("publish_status", mode="before")
    @classmethod
    def validate_publish_status(cls, v):
        return parse_publish_status(v)

    @field_validator("publish_date", "date")
    @classmethod
    def normalize_datetime(cls, v):
        return _as_naive_utc(v)


class EventUpdate(CamelModel):
    id: PositiveInt
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    media_type: Optional[MediaType] = None
    file: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    language: Optional[str] = Field(None, min_length=2, max_length=50)

    publish_date: Optional[datetime] = None
    publish_status: Optional[PublishStatus] = None
    date: Optional[datetime] = None

    category_id: Optional[PositiveInt] = None
    subcategory_id: Optional[PositiveInt] = None
    country_id: Optional[PositiveInt] = None
    state_id: Optional[PositiveInt] = None

    @field_validator("publish_status", mode="before")
    @classmethod
    def validate_publish_status(cls, v):
        return parse_publish_status(v)

    @field_validator("publish_date", "date")
    @classmethod
    def normalize_datetime(cls, v):
        return _as_naive_utc(v)


class EventResponse(CamelModel):
    id: int
    title: str
    description: str
    content: Optional[str] = None
    date: datetime
    media_type: MediaType
    file: Optional[str] = None
    location: str
    language: str
    publish_status: PublishStatus
    publish_date: datetime

    category_id: int
    subcategory_id: int
    country_id: int
    state_id: int
    created_by: Optional[int] = None

    created_at: datetime
    updated_at: datetime


# ==================== LISTING SCHEMAS ====================

class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class EventListResponse(CamelModel):
    events: List[EventResponse]
    pagination: Pagination
