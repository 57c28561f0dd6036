"""
Locust load scenarios.

Run scenarios:
  locust -f locustfile.py --tags browse     # Cached event listing
  locust -f locustfile.py --tags membership # Guest login + join/leave churn
  locust -f locustfile.py --tags edge       # Bad input
  locust -f locustfile.py                   # All of the above
"""

import random
from datetime import datetime, timezone, timedelta

from locust import HttpUser, task, between, tag

API = "/api/v1"


def random_email(prefix: str) -> str:
    return f"{prefix}_{random.randint(100000, 999999)}@load.test"


class BrowsingUser(HttpUser):
    """Anonymous visitors paging through the event list."""

    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(5)
    def list_events(self):
        self.client.get(f"{API}/events/", params={"page": random.randint(1, 3)}, name="/events [list]")

    @tag("browse")
    @task(1)
    def list_by_category(self):
        category = random.choice(["Meetup", "Workshop", "Social"])
        self.client.get(f"{API}/events/", params={"category": category}, name="/events [category]")


class MembershipUser(HttpUser):
    """
    Guests joining and leaving one shared, capacity-limited event.

    After a run the event must still have at most max_attendees attendees.
    """

    wait_time = between(0, 0.2)
    event_id = None

    def on_start(self):
        resp = self.client.post(f"{API}/auth/guest-login", json={"email": random_email("guest")})
        self.headers = {"Authorization": f"Bearer {resp.json()['token']}"} if resp.ok else {}

        if MembershipUser.event_id is None:
            organizer = self.client.post(f"{API}/auth/register", json={
                "name": "Load Organizer",
                "email": random_email("organizer"),
                "password": "loadtest1",
            })
            if organizer.ok:
                token = organizer.json()["token"]
                created = self.client.post(
                    f"{API}/events/",
                    json={
                        "title": "Load Test Event",
                        "category": "Meetup",
                        "date": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
                        "maxAttendees": 10,
                    },
                    headers={"Authorization": f"Bearer {token}"},
                )
                if created.status_code == 201:
                    MembershipUser.event_id = created.json()["_id"]

    @tag("membership")
    @task(3)
    def join(self):
        if not self.event_id:
            return
        with self.client.post(
            f"{API}/events/{self.event_id}/join",
            headers=self.headers,
            name="/events/[id]/join",
            catch_response=True,
        ) as resp:
            # Full or already attending are expected outcomes under load
            if resp.status_code in (200, 400):
                resp.success()

    @tag("membership")
    @task(2)
    def leave(self):
        if not self.event_id:
            return
        with self.client.post(
            f"{API}/events/{self.event_id}/leave",
            headers=self.headers,
            name="/events/[id]/leave",
            catch_response=True,
        ) as resp:
            if resp.status_code in (200, 400):
                resp.success()


class EdgeCaseUser(HttpUser):
    wait_time = between(0.5, 1)

    @tag("edge")
    @task
    def bad_login(self):
        with self.client.post(
            f"{API}/auth/login",
            json={"email": random_email("nobody"), "password": "wrongpass"},
            catch_response=True,
        ) as resp:
            if resp.status_code == 401:
                resp.success()

    @tag("edge")
    @task
    def malformed_email(self):
        with self.client.post(
            f"{API}/auth/guest-login",
            json={"email": "not-an-email"},
            catch_response=True,
        ) as resp:
            if resp.status_code == 400:
                resp.success()
