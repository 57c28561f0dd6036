"""
Event endpoints. List responses are cached in Redis; every mutation
commits first and then drops the cached lists.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.db.session import get_db
from eventhub.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventListResponse, EventDeleteResponse,
)
from eventhub.services import event_service
from eventhub.services.cache_service import (
    make_event_list_key, get_cached_events, set_cached_events, invalidate_event_cache,
)
from eventhub.core.security import get_current_user_id
from eventhub.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event organized by the caller."""
    event = await event_service.create_event(db, event_data, user_id)
    await db.commit()
    await invalidate_event_cache()
    return EventResponse.model_validate(event)


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    upcoming_only: bool = Query(True),
    category: Optional[str] = Query(None, max_length=50),
    db: AsyncSession = Depends(get_db),
):
    """
    List events with pagination, soonest first.
    Results are cached in Redis for REDIS_CACHE_TTL seconds.
    """
    key = make_event_list_key(page, page_size, upcoming_only, category)
    cached = await get_cached_events(key)
    if cached:
        logger.info("events_list_cache_hit", page=page)
        cached["cached"] = True
        return EventListResponse(**cached)

    events, total = await event_service.list_events(db, page, page_size, upcoming_only, category)

    response_data = {
        "events": [
            EventResponse.model_validate(e).model_dump(mode="json", by_alias=True) for e in events
        ],
        "total": total,
        "page": page,
        "page_size": page_size,
        "cached": False,
    }
    await set_cached_events(key, response_data)

    return EventListResponse(**response_data)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single event by ID. Never cached."""
    event = await event_service.get_event(db, event_id)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: int,
    event_data: EventUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Edit an event. Organizer only."""
    event = await event_service.update_event(db, event_id, event_data, user_id)
    await db.commit()
    await invalidate_event_cache()
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=EventDeleteResponse)
async def delete_event_endpoint(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete an event. Organizer only."""
    await event_service.delete_event(db, event_id, user_id)
    await db.commit()
    await invalidate_event_cache()
    return EventDeleteResponse(message="Event deleted successfully", id=event_id)


@router.post("/{event_id}/join", response_model=EventResponse)
async def join_event_endpoint(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.join_event(db, event_id, user_id)
    await db.commit()
    await invalidate_event_cache()
    return EventResponse.model_validate(event)


@router.post("/{event_id}/leave", response_model=EventResponse)
async def leave_event_endpoint(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.leave_event(db, event_id, user_id)
    await db.commit()
    await invalidate_event_cache()
    return EventResponse.model_validate(event)
