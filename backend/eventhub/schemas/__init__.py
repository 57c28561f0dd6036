from eventhub.schemas.user import (
    UserCreate, UserLogin, GuestLogin, GuestConvert,
    UserSummary, UserPublic, AuthResponse, ProfileResponse,
)
from eventhub.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventListResponse, EventDeleteResponse,
)

__all__ = [
    "UserCreate", "UserLogin", "GuestLogin", "GuestConvert",
    "UserSummary", "UserPublic", "AuthResponse", "ProfileResponse",
    "EventCreate", "EventUpdate", "EventResponse", "EventListResponse", "EventDeleteResponse",
]
