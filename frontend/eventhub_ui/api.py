# eventhub_ui/api.py

import os

import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the EventHub API, including the version prefix
API_URL = os.getenv("EVENTHUB_API_URL", "http://localhost:8000/api/v1")


class ApiError(Exception):
    """A request that did not come back 2xx. ``message`` is the server's error text."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class EventHubClient:
    """
    Thin wrapper over the REST API. Every method returns the decoded JSON
    body or raises ApiError.
    """

    def __init__(self, base_url: str = API_URL, token: str | None = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ApiError(0, f"Could not reach the server: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})")
        return data

    # -------------------------------
    # Authentication
    # -------------------------------

    def register(self, name, email, password):
        return self._request("POST", "/auth/register", json={
            "name": name, "email": email, "password": password,
        })

    def login(self, email, password):
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def guest_login(self, email):
        return self._request("POST", "/auth/guest-login", json={"email": email})

    def profile(self):
        return self._request("GET", "/auth/profile")

    def convert_guest(self, name, password):
        return self._request("POST", "/auth/convert-guest", json={"name": name, "password": password})

    # -------------------------
    # Events
    # -------------------------

    def list_events(self, page=1, page_size=50, upcoming_only=True, category=None):
        params = {
            "page": page,
            "page_size": page_size,
            "upcoming_only": "true" if upcoming_only else "false",
        }
        if category:
            params["category"] = category
        return self._request("GET", "/events/", params=params)

    def get_event(self, event_id):
        return self._request("GET", f"/events/{event_id}")

    def create_event(self, payload: dict):
        return self._request("POST", "/events/", json=payload)

    def update_event(self, event_id, payload: dict):
        return self._request("PUT", f"/events/{event_id}", json=payload)

    def delete_event(self, event_id):
        return self._request("DELETE", f"/events/{event_id}")

    def join_event(self, event_id):
        return self._request("POST", f"/events/{event_id}/join")

    def leave_event(self, event_id):
        return self._request("POST", f"/events/{event_id}/leave")
