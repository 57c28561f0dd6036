"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator

from eventhub.schemas.user import UserPublic


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive datetimes are taken to be UTC already
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: str = Field("Other", min_length=1, max_length=50)
    date: datetime
    location: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=1024)
    max_attendees: Optional[int] = Field(
        None, gt=0, le=100000, validation_alias=AliasChoices("maxAttendees", "max_attendees")
    )

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return _as_utc(value)


class EventUpdate(BaseModel):
    """Partial update; only the fields present in the body are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=1024)
    max_attendees: Optional[int] = Field(
        None, gt=0, le=100000, validation_alias=AliasChoices("maxAttendees", "max_attendees")
    )

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class EventResponse(BaseModel):
    id: int = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    title: str
    description: Optional[str]
    category: str
    date: datetime
    location: Optional[str]
    image: Optional[str]
    organizer: UserPublic
    attendees: list[UserPublic]
    max_attendees: Optional[int] = Field(
        validation_alias=AliasChoices("maxAttendees", "max_attendees"),
        serialization_alias="maxAttendees",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt"
    )

    model_config = {"from_attributes": True}


class EventListResponse(BaseModel):
    events: list[EventResponse]
    total: int
    page: int
    page_size: int
    cached: bool = False


class EventDeleteResponse(BaseModel):
    message: str
    id: int = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
