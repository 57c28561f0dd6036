# eventhub_ui/components/event_details.py

"""
State and actions behind the event details view.

Nothing here talks to Streamlit: the view in ``eventhub_ui.ui.events``
asks this object what to draw and forwards button clicks to it. All
mutations go through the EventContext; this object only tracks which
request is in flight.

A click only marks the action as pending (``start_*``). The view then
reruns, draws the busy button and calls ``run_pending``, so the disabled
"Joining..." state is on screen while the request is out. The object is
kept between reruns with ``details_for``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, MutableMapping, Optional

import structlog

from eventhub_ui.api import ApiError
from eventhub_ui.context import EventContext

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ButtonState:
    label: str
    disabled: bool
    variant: str  # primary, danger, muted


def parse_event_date(value) -> datetime:
    if isinstance(value, datetime):
        return value
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_event_date(value) -> str:
    """'Nov 17, 2026, 8:00 PM'"""
    moment = parse_event_date(value)
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M} {moment:%p}"


class EventDetails:
    def __init__(
        self,
        event_id,
        context: EventContext,
        user: Optional[dict],
        on_close: Callable[[], None],
        navigate: Callable[[str], None],
    ):
        self.event_id = event_id
        self.context = context
        self.user = user
        self.on_close = on_close
        self.navigate = navigate
        self.is_joining = False
        self.is_leaving = False
        self.is_deleting = False

    @property
    def event(self) -> Optional[dict]:
        return self.context.find(self.event_id)

    @property
    def _user_id(self):
        return self.user["_id"] if self.user else None

    @property
    def is_organizer(self) -> bool:
        event = self.event
        return bool(event and self.user and event["organizer"]["_id"] == self._user_id)

    @property
    def is_attending(self) -> bool:
        event = self.event
        if not event or not self.user:
            return False
        return any(attendee["_id"] == self._user_id for attendee in event["attendees"])

    @property
    def is_at_capacity(self) -> bool:
        event = self.event
        if not event or not event.get("maxAttendees"):
            return False
        return len(event["attendees"]) >= event["maxAttendees"]

    @property
    def attendance(self) -> str:
        event = self.event
        count = len(event["attendees"])
        if event.get("maxAttendees"):
            return f"{count} / {event['maxAttendees']}"
        return str(count)

    @property
    def organizer_initial(self) -> str:
        organizer = self.event["organizer"]
        if organizer.get("name"):
            return organizer["name"][0]
        return organizer["email"][0].upper()

    @property
    def organizer_display_name(self) -> str:
        organizer = self.event["organizer"]
        return organizer.get("name") or organizer["email"]

    def action_button(self) -> ButtonState:
        """The single join/leave button shown to everyone but the organizer."""
        if self.is_joining:
            label = "Joining..."
        elif self.is_leaving:
            label = "Leaving..."
        elif self.is_attending:
            label = "Leave Event"
        elif self.is_at_capacity:
            label = "Event Full"
        else:
            label = "Join Event"

        if self.is_attending:
            variant = "danger"
        elif self.is_at_capacity:
            variant = "muted"
        else:
            variant = "primary"

        disabled = self.is_joining or self.is_leaving or (not self.is_attending and self.is_at_capacity)
        return ButtonState(label=label, disabled=disabled, variant=variant)

    def delete_button(self) -> ButtonState:
        label = "Deleting..." if self.is_deleting else "Delete Event"
        return ButtonState(label=label, disabled=self.is_deleting, variant="danger")

    def handle_join(self) -> None:
        try:
            self.is_joining = True
            self.context.join_event(self.event_id)
        except ApiError as e:
            logger.error("join_event_failed", event_id=self.event_id, error=e.message)
        finally:
            self.is_joining = False

    def handle_leave(self) -> None:
        try:
            self.is_leaving = True
            self.context.leave_event(self.event_id)
        except ApiError as e:
            logger.error("leave_event_failed", event_id=self.event_id, error=e.message)
        finally:
            self.is_leaving = False

    def handle_delete(self, confirmed: bool) -> bool:
        """
        Delete the event once the user has confirmed. Returns True when the
        event is gone and the view has been closed.
        """
        if not confirmed:
            return False
        try:
            self.is_deleting = True
            self.context.delete_event(self.event_id)
        except ApiError as e:
            logger.error("delete_event_failed", event_id=self.event_id, error=e.message)
            self.is_deleting = False
            return False
        self.on_close()
        return True

    def handle_edit(self) -> None:
        self.on_close()
        self.navigate(f"/events/{self.event_id}/edit")

    @property
    def has_pending(self) -> bool:
        return self.is_joining or self.is_leaving or self.is_deleting

    def start_primary_action(self) -> None:
        if self.has_pending:
            return
        if self.is_attending:
            self.is_leaving = True
        else:
            self.is_joining = True

    def start_delete(self, confirmed: bool) -> bool:
        if not confirmed or self.has_pending:
            return False
        self.is_deleting = True
        return True

    def run_pending(self) -> None:
        """Send the request marked by the last ``start_*`` call."""
        if self.is_joining:
            self.handle_join()
        elif self.is_leaving:
            self.handle_leave()
        elif self.is_deleting:
            self.handle_delete(confirmed=True)


def details_for(
    store: MutableMapping,
    event_id,
    context: EventContext,
    user: Optional[dict],
    on_close: Callable[[], None],
    navigate: Callable[[str], None],
    key: str = "event_details",
) -> EventDetails:
    """
    Reuse the EventDetails kept in ``store`` (Streamlit session state) while
    it still belongs to this event, context and user; otherwise start afresh.
    """
    details = store.get(key)
    if (
        details is None
        or details.event_id != event_id
        or details.context is not context
        or details.user != user
    ):
        details = EventDetails(event_id, context, user, on_close, navigate)
        store[key] = details
    return details
