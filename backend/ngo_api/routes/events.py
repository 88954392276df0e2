"""
NGO Site Backend - Event Route Handlers
=======================================

What:  /api/events CRUD with JSON bodies. Structurally the member routes
       without any image handling.
"""

from typing import List

from fastapi import APIRouter, Depends

from ngo_api.dependencies import get_event_service
from ngo_api.schemas.common import DeleteResponse, ErrorResponse
from ngo_api.schemas.event import EventCreate, EventResponse, EventUpdate
from ngo_api.services.event_service import EventService

router = APIRouter(prefix="/api", tags=["Events"])


@router.get(
    "/events",
    response_model=List[EventResponse],
    responses={500: {"description": "Record store failure", "model": ErrorResponse}},
    summary="List all events",
)
async def list_events(
    service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    return await service.list_events()


@router.get(
    "/events/{event_id}",
    response_model=EventResponse,
    responses={404: {"description": "Event not found", "model": ErrorResponse}},
    summary="Get a single event",
)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return await service.get_event(event_id)


@router.post(
    "/events",
    status_code=201,
    response_model=EventResponse,
    responses={
        400: {"description": "Title, date, and time are required", "model": ErrorResponse},
        500: {"description": "Record store failure", "model": ErrorResponse},
    },
    summary="Create an event",
)
async def create_event(
    payload: EventCreate,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return await service.create_event(payload)


@router.put(
    "/events/{event_id}",
    response_model=EventResponse,
    responses={
        400: {"description": "Blank required field", "model": ErrorResponse},
        404: {"description": "Event not found", "model": ErrorResponse},
    },
    summary="Update an event",
)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return await service.update_event(event_id, payload)


@router.delete(
    "/events/{event_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Event not found", "model": ErrorResponse}},
    summary="Delete an event",
)
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> DeleteResponse:
    await service.delete_event(event_id)
    return DeleteResponse(success=True)
