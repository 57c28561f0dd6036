"""
Event service: CRUD plus attendee membership.

Only the organizer may edit or delete an event. Anyone else may join while
the event is under capacity, and leave at any time.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from eventhub.models.event import Event
from eventhub.models.user import User
from eventhub.schemas.event import EventCreate, EventUpdate
from eventhub.core.metrics import record_event_action
from eventhub.core.logging import get_logger

logger = get_logger(__name__)

# Fields an update may explicitly set back to null
CLEARABLE_FIELDS = {"description", "location", "image", "max_attendees"}


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID, with organizer and attendees loaded fresh."""
    result = await db.execute(
        select(Event)
        .where(Event.id == event_id)
        .execution_options(populate_existing=True)
    )
    event = result.scalar_one_or_none()

    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return event


def _ensure_organizer(event: Event, user_id: int, action: str) -> None:
    if event.organizer_id != user_id:
        logger.warning("event_forbidden", event_id=event.id, user_id=user_id, action=action)
        record_event_action(action, "rejected")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the organizer can modify this event",
        )


async def create_event(db: AsyncSession, event_data: EventCreate, organizer_id: int) -> Event:
    if event_data.date <= datetime.now(timezone.utc):
        record_event_action("create", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Event date must be in the future",
        )

    event = Event(
        title=event_data.title,
        description=event_data.description,
        category=event_data.category,
        date=event_data.date,
        location=event_data.location,
        image=event_data.image,
        max_attendees=event_data.max_attendees,
        organizer_id=organizer_id,
    )
    db.add(event)
    await db.flush()

    logger.info("event_created", event_id=event.id, title=event.title, organizer_id=organizer_id)
    record_event_action("create", "success")
    return await get_event(db, event.id)


async def update_event(
    db: AsyncSession,
    event_id: int,
    event_data: EventUpdate,
    user_id: int,
) -> Event:
    """Apply the fields present in ``event_data``. Organizer only."""
    event = await get_event(db, event_id)
    _ensure_organizer(event, user_id, "update")

    changes = {
        field: value
        for field, value in event_data.model_dump(exclude_unset=True).items()
        if value is not None or field in CLEARABLE_FIELDS
    }
    new_limit = changes.get("max_attendees")
    if new_limit is not None and new_limit < event.attendee_count:
        record_event_action("update", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Event already has {event.attendee_count} attendees",
        )

    for field, value in changes.items():
        setattr(event, field, value)
    await db.flush()

    logger.info("event_updated", event_id=event.id, fields=sorted(changes))
    record_event_action("update", "success")
    return await get_event(db, event.id)


async def delete_event(db: AsyncSession, event_id: int, user_id: int) -> None:
    event = await get_event(db, event_id)
    _ensure_organizer(event, user_id, "delete")

    await db.delete(event)
    await db.flush()

    logger.info("event_deleted", event_id=event_id, organizer_id=user_id)
    record_event_action("delete", "success")


async def join_event(db: AsyncSession, event_id: int, user_id: int) -> Event:
    event = await get_event(db, event_id)

    if event.organizer_id == user_id:
        reason = "Organizers cannot join their own event"
    elif event.has_attendee(user_id):
        reason = "Already attending this event"
    elif event.is_full:
        reason = "Event is full"
    else:
        reason = None

    if reason:
        logger.warning("join_rejected", event_id=event_id, user_id=user_id, reason=reason)
        record_event_action("join", "rejected")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=reason)

    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    event.attendees.append(user)
    await db.flush()

    logger.info("event_joined", event_id=event_id, user_id=user_id, attendees=event.attendee_count)
    record_event_action("join", "success")
    return await get_event(db, event_id)


async def leave_event(db: AsyncSession, event_id: int, user_id: int) -> Event:
    event = await get_event(db, event_id)

    if not event.has_attendee(user_id):
        record_event_action("leave", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Not attending this event",
        )

    event.attendees = [a for a in event.attendees if a.id != user_id]
    await db.flush()

    logger.info("event_left", event_id=event_id, user_id=user_id, attendees=event.attendee_count)
    record_event_action("leave", "success")
    return await get_event(db, event_id)


async def list_events(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    upcoming_only: bool = True,
    category: Optional[str] = None,
) -> tuple[list[Event], int]:
    """List events with pagination, soonest first."""
    query = select(Event)

    if upcoming_only:
        query = query.where(Event.date >= datetime.now(timezone.utc))
    if category:
        query = query.where(Event.category == category)

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar()

    events_query = (
        query
        .order_by(Event.date.asc(), Event.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(events_query)
    events = list(result.scalars().all())

    return events, total
