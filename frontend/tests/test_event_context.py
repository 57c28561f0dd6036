"""
Tests for EventContext: local list bookkeeping around API calls.
"""

import pytest

from eventhub_ui.api import ApiError
from eventhub_ui.context import EventContext


def event(event_id, title="Event", attendees=()):
    return {"_id": event_id, "title": title, "attendees": list(attendees)}


class StubClient:
    def __init__(self, events):
        self.events = events
        self.filters = []
        self.error = None

    def _check(self):
        if self.error:
            raise self.error

    def list_events(self, **filters):
        self.filters.append(filters)
        self._check()
        return {"events": list(self.events)}

    def join_event(self, event_id):
        self._check()
        return event(event_id, "Joined", attendees=[{"_id": 99}])

    def leave_event(self, event_id):
        self._check()
        return event(event_id, "Left")

    def update_event(self, event_id, payload):
        self._check()
        return {**event(event_id), **payload}

    def delete_event(self, event_id):
        self._check()
        return {"message": "Event deleted", "_id": event_id}

    def create_event(self, payload):
        self._check()
        created = {"_id": 3, **payload, "attendees": []}
        self.events.append(created)
        return created


@pytest.fixture
def stub():
    return StubClient([event(1, "First"), event(2, "Second")])


@pytest.fixture
def context(stub):
    ctx = EventContext(stub)
    ctx.load_events()
    return ctx


def test_load_events_remembers_filters(stub):
    ctx = EventContext(stub)

    ctx.load_events(category="Music")
    ctx.load_events()

    assert stub.filters == [{"category": "Music"}, {"category": "Music"}]
    assert [e["_id"] for e in ctx.events] == [1, 2]


def test_find(context):
    assert context.find(2)["title"] == "Second"
    assert context.find(42) is None


def test_join_replaces_only_that_event(context):
    context.join_event(2)

    assert context.find(2)["title"] == "Joined"
    assert context.find(2)["attendees"] == [{"_id": 99}]
    assert context.find(1)["title"] == "First"


def test_leave_replaces_event(context):
    context.leave_event(1)
    assert context.find(1)["title"] == "Left"


def test_update_replaces_event(context):
    context.update_event(1, {"title": "Renamed"})
    assert context.find(1)["title"] == "Renamed"


def test_delete_removes_event(context):
    context.delete_event(1)
    assert [e["_id"] for e in context.events] == [2]


def test_create_reloads_list(context, stub):
    created = context.create_event({"title": "Third"})

    assert created["_id"] == 3
    assert [e["_id"] for e in context.events] == [1, 2, 3]
    assert len(stub.filters) == 2


def test_failure_sets_error_and_reraises(context, stub):
    stub.error = ApiError(400, "Already attending this event")

    with pytest.raises(ApiError):
        context.join_event(1)

    assert context.error == "Already attending this event"
    assert context.find(1)["title"] == "First"


def test_success_clears_previous_error(context, stub):
    stub.error = ApiError(400, "Event is full")
    with pytest.raises(ApiError):
        context.join_event(2)

    stub.error = None
    context.leave_event(2)

    assert context.error is None


def test_create_outside_filter_stays_findable():
    class FilteredClient(StubClient):
        def create_event(self, payload):
            return {"_id": 7, **payload, "attendees": []}

    ctx = EventContext(FilteredClient([event(1, "First")]))
    ctx.load_events(category="Music")

    created = ctx.create_event({"title": "Talk", "category": "Conference"})

    assert ctx.find(created["_id"])["title"] == "Talk"
