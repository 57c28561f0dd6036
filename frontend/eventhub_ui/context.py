# eventhub_ui/context.py

"""
Client-side holder for the event list.

Views read ``events`` and ``error`` and call the mutation methods; each
mutation goes to the API first and only touches local state once the
server has answered. Failures set ``error`` and are re-raised so the
caller can reset its own busy flags.
"""

from typing import Optional

from eventhub_ui.api import ApiError, EventHubClient


class EventContext:
    def __init__(self, client: EventHubClient):
        self.client = client
        self.events: list[dict] = []
        self.error: Optional[str] = None
        self.filters: dict = {}

    def find(self, event_id) -> Optional[dict]:
        return next((e for e in self.events if e["_id"] == event_id), None)

    def load_events(self, **filters) -> list[dict]:
        if filters:
            self.filters = filters
        try:
            data = self.client.list_events(**self.filters)
        except ApiError as e:
            self.error = e.message
            raise
        self.events = data["events"]
        self.error = None
        return self.events

    def _replace(self, updated: dict) -> dict:
        self.events = [updated if e["_id"] == updated["_id"] else e for e in self.events]
        self.error = None
        return updated

    def join_event(self, event_id) -> dict:
        try:
            updated = self.client.join_event(event_id)
        except ApiError as e:
            self.error = e.message
            raise
        return self._replace(updated)

    def leave_event(self, event_id) -> dict:
        try:
            updated = self.client.leave_event(event_id)
        except ApiError as e:
            self.error = e.message
            raise
        return self._replace(updated)

    def update_event(self, event_id, payload: dict) -> dict:
        try:
            updated = self.client.update_event(event_id, payload)
        except ApiError as e:
            self.error = e.message
            raise
        return self._replace(updated)

    def delete_event(self, event_id) -> None:
        try:
            self.client.delete_event(event_id)
        except ApiError as e:
            self.error = e.message
            raise
        self.events = [e for e in self.events if e["_id"] != event_id]
        self.error = None

    def create_event(self, payload: dict) -> dict:
        try:
            created = self.client.create_event(payload)
        except ApiError as e:
            self.error = e.message
            raise
        # Re-fetch so the new event lands in its sorted position
        self.load_events()
        if self.find(created["_id"]) is None:
            # Outside the current filter or page; keep it reachable
            self.events.append(created)
        return created
