"""
Tests for the EventDetails view state: button labels, busy flags and actions.
"""

import pytest

from eventhub_ui.api import ApiError
from eventhub_ui.components.event_details import EventDetails, details_for, format_event_date
from eventhub_ui.context import EventContext

ORGANIZER = {"_id": 1, "name": "Olivia Organizer", "email": "olivia@example.com"}
ALICE = {"_id": 2, "name": "Alice", "email": "alice@example.com"}
BOB = {"_id": 3, "name": "Bob", "email": "bob@example.com"}
CAROL = {"_id": 4, "name": "Carol", "email": "carol@example.com", "isGuest": False}


def make_event(attendees=(), max_attendees=None, organizer=ORGANIZER):
    return {
        "_id": 10,
        "title": "Python Meetup",
        "description": "Talks and pizza",
        "category": "Meetup",
        "date": "2026-11-17T20:00:00Z",
        "location": "Community Hall",
        "image": None,
        "maxAttendees": max_attendees,
        "organizer": organizer,
        "attendees": list(attendees),
        "createdAt": "2026-10-01T09:00:00Z",
    }


class FakeClient:
    """Records calls and answers from a canned event; ``fail`` makes the next call raise."""

    def __init__(self, event):
        self.event = event
        self.calls = []
        self.fail = None
        self.token = "token"

    def _maybe_fail(self):
        if self.fail:
            error, self.fail = self.fail, None
            raise error

    def list_events(self, **filters):
        self.calls.append(("list", filters))
        self._maybe_fail()
        return {"events": [self.event], "total": 1}

    def join_event(self, event_id):
        self.calls.append(("join", event_id))
        self._maybe_fail()
        return {**self.event, "attendees": self.event["attendees"] + [CAROL]}

    def leave_event(self, event_id):
        self.calls.append(("leave", event_id))
        self._maybe_fail()
        return {**self.event, "attendees": [a for a in self.event["attendees"] if a["_id"] != CAROL["_id"]]}

    def delete_event(self, event_id):
        self.calls.append(("delete", event_id))
        self._maybe_fail()
        return {"message": "Event deleted", "_id": event_id}


class Recorder:
    def __init__(self):
        self.closed = 0
        self.routes = []

    def on_close(self):
        self.closed += 1

    def navigate(self, route):
        self.routes.append(route)


def build(event, user):
    client = FakeClient(event)
    context = EventContext(client)
    context.load_events()
    recorder = Recorder()
    details = EventDetails(event["_id"], context, user, recorder.on_close, recorder.navigate)
    return details, client, recorder


def test_full_event_disables_join_for_other_users():
    details, _, _ = build(make_event(attendees=[ALICE, BOB], max_attendees=2), CAROL)

    button = details.action_button()
    assert button.label == "Event Full"
    assert button.disabled is True
    assert button.variant == "muted"
    assert details.attendance == "2 / 2"


def test_join_button_for_open_event():
    details, _, _ = build(make_event(attendees=[ALICE], max_attendees=5), CAROL)

    button = details.action_button()
    assert button.label == "Join Event"
    assert button.disabled is False
    assert button.variant == "primary"


def test_unlimited_event_is_never_full():
    details, _, _ = build(make_event(attendees=[ALICE, BOB]), CAROL)

    assert details.is_at_capacity is False
    assert details.attendance == "2"
    assert details.action_button().label == "Join Event"


def test_attendee_sees_leave_even_when_full():
    details, _, _ = build(make_event(attendees=[ALICE, CAROL], max_attendees=2), CAROL)

    button = details.action_button()
    assert button.label == "Leave Event"
    assert button.disabled is False
    assert button.variant == "danger"


def test_organizer_detection():
    details, _, _ = build(make_event(), ORGANIZER)
    assert details.is_organizer is True

    details, _, _ = build(make_event(), ALICE)
    assert details.is_organizer is False


def test_anonymous_viewer_is_neither_organizer_nor_attendee():
    details, _, _ = build(make_event(attendees=[ALICE]), None)

    assert details.is_organizer is False
    assert details.is_attending is False


def test_busy_labels():
    details, _, _ = build(make_event(), CAROL)

    details.is_joining = True
    assert details.action_button().label == "Joining..."
    assert details.action_button().disabled is True

    details.is_joining = False
    details.is_leaving = True
    assert details.action_button().label == "Leaving..."
    assert details.action_button().disabled is True

    details.is_deleting = True
    assert details.delete_button().label == "Deleting..."
    assert details.delete_button().disabled is True


def test_primary_action_joins_then_leaves():
    details, client, _ = build(make_event(attendees=[ALICE]), CAROL)

    details.start_primary_action()
    details.run_pending()
    assert client.calls[-1] == ("join", 10)
    assert details.is_attending is True
    assert details.is_joining is False

    client.event = details.event
    details.start_primary_action()
    details.run_pending()
    assert client.calls[-1] == ("leave", 10)
    assert details.is_attending is False
    assert details.is_leaving is False


def test_join_failure_is_logged_not_raised():
    details, client, _ = build(make_event(), CAROL)
    client.fail = ApiError(400, "Event is full")

    details.handle_join()

    assert details.is_joining is False
    assert details.context.error == "Event is full"
    assert details.is_attending is False


def test_leave_failure_resets_flag():
    details, client, _ = build(make_event(attendees=[CAROL]), CAROL)
    client.fail = ApiError(400, "Not attending this event")

    details.handle_leave()

    assert details.is_leaving is False
    assert details.context.error == "Not attending this event"


def test_delete_requires_confirmation():
    details, client, recorder = build(make_event(), ORGANIZER)

    assert details.handle_delete(confirmed=False) is False
    assert ("delete", 10) not in client.calls
    assert recorder.closed == 0


def test_delete_closes_view():
    details, client, recorder = build(make_event(), ORGANIZER)

    assert details.handle_delete(confirmed=True) is True
    assert client.calls[-1] == ("delete", 10)
    assert recorder.closed == 1
    assert details.context.find(10) is None


def test_delete_failure_keeps_view_open():
    details, client, recorder = build(make_event(), ORGANIZER)
    client.fail = ApiError(403, "Only the organizer can modify this event")

    assert details.handle_delete(confirmed=True) is False
    assert details.is_deleting is False
    assert recorder.closed == 0
    assert details.context.find(10) is not None


def test_edit_closes_and_navigates():
    details, _, recorder = build(make_event(), ORGANIZER)

    details.handle_edit()

    assert recorder.closed == 1
    assert recorder.routes == ["/events/10/edit"]


def test_organizer_card_falls_back_to_email():
    organizer = {"_id": 1, "name": "", "email": "olivia@example.com"}
    details, _, _ = build(make_event(organizer=organizer), ALICE)

    assert details.organizer_initial == "O"
    assert details.organizer_display_name == "olivia@example.com"


def test_organizer_card_uses_name():
    details, _, _ = build(make_event(), ALICE)

    assert details.organizer_initial == "O"
    assert details.organizer_display_name == "Olivia Organizer"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2026-11-17T20:00:00Z", "Nov 17, 2026, 8:00 PM"),
        ("2026-01-05T09:05:00+00:00", "Jan 5, 2026, 9:05 AM"),
        ("2026-06-30T00:30:00", "Jun 30, 2026, 12:30 AM"),
    ],
)
def test_format_event_date(value, expected):
    assert format_event_date(value) == expected


def test_click_marks_join_pending_without_calling_api():
    details, client, _ = build(make_event(attendees=[ALICE], max_attendees=5), CAROL)
    calls_before = list(client.calls)

    details.start_primary_action()

    assert client.calls == calls_before
    button = details.action_button()
    assert button.label == "Joining..."
    assert button.disabled is True


def test_run_pending_sends_request_and_clears_flag():
    details, client, _ = build(make_event(attendees=[ALICE], max_attendees=5), CAROL)

    details.start_primary_action()
    details.run_pending()

    assert client.calls[-1] == ("join", 10)
    assert details.has_pending is False
    assert details.action_button().label == "Leave Event"


def test_second_click_while_pending_is_ignored():
    details, client, _ = build(make_event(attendees=[ALICE]), CAROL)

    details.start_primary_action()
    details.start_primary_action()
    details.run_pending()
    details.run_pending()

    assert [c for c in client.calls if c[0] == "join"] == [("join", 10)]


def test_attendee_click_marks_leave_pending():
    details, _, _ = build(make_event(attendees=[CAROL]), CAROL)

    details.start_primary_action()

    assert details.is_leaving is True
    assert details.action_button().label == "Leaving..."


def test_delete_pending_then_run():
    details, client, recorder = build(make_event(), ORGANIZER)

    assert details.start_delete(confirmed=False) is False
    assert details.start_delete(confirmed=True) is True
    assert details.delete_button().label == "Deleting..."
    assert ("delete", 10) not in client.calls

    details.run_pending()

    assert client.calls[-1] == ("delete", 10)
    assert recorder.closed == 1


def test_details_survive_reruns_in_store():
    store = {}
    client = FakeClient(make_event())
    context = EventContext(client)
    context.load_events()
    recorder = Recorder()

    first = details_for(store, 10, context, CAROL, recorder.on_close, recorder.navigate)
    first.start_primary_action()
    again = details_for(store, 10, context, CAROL, recorder.on_close, recorder.navigate)

    assert again is first
    assert again.is_joining is True


def test_details_rebuilt_for_other_event_or_user():
    store = {}
    context = EventContext(FakeClient(make_event()))
    recorder = Recorder()

    first = details_for(store, 10, context, CAROL, recorder.on_close, recorder.navigate)
    first.is_joining = True

    assert details_for(store, 11, context, CAROL, recorder.on_close, recorder.navigate) is not first
    fresh = details_for(store, 10, context, ALICE, recorder.on_close, recorder.navigate)
    assert fresh.is_joining is False
