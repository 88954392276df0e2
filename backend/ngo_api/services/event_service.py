"""
NGO Site Backend - Event Service
================================

What:  CRUD over event records; no assets, no side effects beyond the store.
Who:   Called by the /api/events route handlers.
"""

import logging
from typing import List

from ngo_api.schemas.event import EventCreate, EventResponse, EventUpdate
from ngo_api.services.record_store import RecordStore

logger = logging.getLogger(__name__)

# Optional text columns are NOT NULL; an explicit null clears them to ""
_OPTIONAL_TEXT = ("description", "location", "category")


class EventService:
    def __init__(self, records: RecordStore):
        self.records = records

    async def list_events(self) -> List[EventResponse]:
        return [EventResponse.model_validate(r) for r in await self.records.list_all()]

    async def get_event(self, event_id: str) -> EventResponse:
        return EventResponse.model_validate(await self.records.get(event_id))

    async def create_event(self, payload: EventCreate) -> EventResponse:
        record = await self.records.create(payload.model_dump(exclude_none=True))
        logger.info("Event created: %s (%s on %s)", record["id"], record["title"], record["date"])
        return EventResponse.model_validate(record)

    async def update_event(self, event_id: str, payload: EventUpdate) -> EventResponse:
        changes = payload.model_dump(exclude_unset=True)
        for name in _OPTIONAL_TEXT:
            if name in changes and changes[name] is None:
                changes[name] = ""
        record = await self.records.update(event_id, changes)
        logger.info("Event updated: %s (fields=%s)", event_id, sorted(changes))
        return EventResponse.model_validate(record)

    async def delete_event(self, event_id: str) -> None:
        await self.records.delete(event_id)
        logger.info("Event deleted: %s", event_id)
