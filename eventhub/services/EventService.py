"""Create, update, delete and list events."""

import logging
import math
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.constants.constants import ErrorCode, PublishStatus
from eventhub.core.exceptions import NotFoundError
from eventhub.models.category import Category, Subcategory
from eventhub.models.event import Event
from eventhub.models.location import Country, State
from eventhub.models.user import User
from eventhub.schemas.eventSchema import EventCreate, EventListResponse, EventResponse, EventUpdate, Pagination

logger = logging.getLogger(__name__)

# Referenced lookup, model, and the error reported when the id is unknown
FOREIGN_KEYS = (
    ("category_id", Category, ErrorCode.INVALID_CATEGORY_ID, "Invalid categoryId"),
    ("subcategory_id", Subcategory, ErrorCode.INVALID_SUBCATEGORY_ID, "Invalid subcategoryId"),
    ("country_id", Country, ErrorCode.INVALID_COUNTRY_ID, "Invalid countryId"),
    ("state_id", State, ErrorCode.INVALID_STATE_ID, "Invalid stateId"),
)

# Columns an edit may set back to null
CLEARABLE_FIELDS = ("content", "file")


class EventService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def validate_foreign_keys(self, values: dict) -> None:
        """Raise for the first referenced id that has no row."""
        for field, model, error_code, message in FOREIGN_KEYS:
            ref_id = values.get(field)
            if ref_id is None:
                continue
            if await self.db.get(model, ref_id) is None:
                raise NotFoundError(message, error_code, status_code=400)

    async def _get_or_404(self, event_id: int) -> Event:
        event = await self.db.get(Event, event_id)
        if not event:
            raise NotFoundError("Invalid event id", ErrorCode.EVENT_NOT_FOUND)
        return event

    async def create(self, data: EventCreate, created_by: Optional[int] = None) -> Event:
        values = data.model_dump()
        await self.validate_foreign_keys(values)

        # tokens are stateless, the creator may no longer exist
        if created_by is not None and await self.db.get(User, created_by) is None:
            created_by = None

        event = Event(**values, created_by=created_by)
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)

        logger.info(f"Event {event.id} created by user {created_by}")
        return event

    async def update(self, data: EventUpdate) -> Event:
        event = await self._get_or_404(data.id)

        # only the fields present in the request are applied
        values = data.model_dump(exclude_unset=True, exclude={"id"})
        values = {
            key: value for key, value in values.items()
            if value is not None or key in CLEARABLE_FIELDS
        }
        await self.validate_foreign_keys(values)

        for key, value in values.items():
            setattr(event, key, value)
        await self.db.commit()
        await self.db.refresh(event)

        logger.info(f"Event {event.id} updated: {sorted(values)}")
        return event

    async def delete(self, event_id: int) -> EventResponse:
        event = await self._get_or_404(event_id)
        snapshot = EventResponse.model_validate(event)

        await self.db.delete(event)
        await self.db.commit()

        logger.info(f"Event {event_id} deleted")
        return snapshot

    async def get_by_id(self, event_id: int) -> Event:
        return await self._get_or_404(event_id)

    async def list(
        self,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        publish_status: Optional[PublishStatus] = None,
    ) -> EventListResponse:
        conditions = []
        if search and search.strip():
            term = search.strip()
            # wildcard characters in the term match literally
            conditions.append(or_(
                Event.title.icontains(term, autoescape=True),
                Event.description.icontains(term, autoescape=True),
                Event.content.icontains(term, autoescape=True),
            ))
        if publish_status is not None:
            conditions.append(Event.publish_status == publish_status)

        total = await self.db.scalar(select(func.count(Event.id)).where(*conditions))

        result = await self.db.execute(
            select(Event)
            .where(*conditions)
            .order_by(Event.created_at.desc(), Event.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        events = result.scalars().all()

        return EventListResponse(
            events=[EventResponse.model_validate(event) for event in events],
            pagination=Pagination(
                total=total or 0,
                page=page,
                limit=limit,
                total_pages=math.ceil((total or 0) / limit),
            ),
        )
