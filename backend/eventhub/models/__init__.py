from eventhub.models.user import User
from eventhub.models.event import Event, event_attendees

__all__ = ["User", "Event", "event_attendees"]
