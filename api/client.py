"""HTTP client for the campus events backend."""
import json
import logging
from typing import List, Optional

import requests

from api.errors import ApiError, InvalidResponseError
from processor.models import ErrorResponse, Event, EventPayload, FetchResult

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = 'https://circularappfinal.onrender.com'


class EventsApiClient:
    """Client for the events and admin endpoints of the backend."""

    def __init__(self, base_url: str = DEFAULT_BACKEND_URL, timeout: int = 30):
        """
        Initialize the API client.

        Args:
            base_url: Backend origin (a trailing slash is ignored)
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.base_url = base_url.rstrip('/')
        self.events_url = f"{self.base_url}/api/events"
        self.admin_url = f"{self.base_url}/api/admin"
        self.timeout = timeout

    def list_events(self) -> FetchResult:
        """
        Fetch all events. No authentication is needed.

        Any failure degrades to an empty result; this method never raises.

        Returns:
            FetchResult with the events, or with no events and the error
        """
        logger.info(f"Fetching events from {self.events_url}")

        try:
            response = requests.get(self.events_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Fetch events error: {e}")
            return FetchResult(events=[], error=str(e))
        except ValueError as e:
            logger.error(f"Fetch events error: invalid JSON response: {e}")
            return FetchResult(events=[], error=f"Invalid JSON response: {e}")

        if not isinstance(data, list):
            logger.error(f"Fetch events error: expected a list, got {type(data).__name__}")
            return FetchResult(
                events=[], error=f"Unexpected response type: {type(data).__name__}"
            )

        events = self._parse_events(data)
        logger.info(f"Fetched {len(events)} events")
        return FetchResult(events=events)

    def create_event(self, payload: EventPayload, token: Optional[str]) -> Event:
        """
        Create a new event (admin only).

        Args:
            payload: Event to create
            token: Bearer token; when missing an empty Authorization
                header is sent and the server is expected to reject it

        Returns:
            The created Event as returned by the server

        Raises:
            ApiError: If the request fails or the server rejects it
            InvalidResponseError: If the response body is not JSON
        """
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {token}" if token else ''
        }

        try:
            response = requests.post(
                self.events_url,
                json=payload.to_dict(),
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Create event error: {e}")
            raise ApiError(f"Failed to create event: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Create event error: invalid JSON response ({response.status_code})")
            raise InvalidResponseError(
                f"Invalid JSON response from server: {response.text}",
                raw_text=response.text,
                status_code=response.status_code
            ) from e

        if not response.ok:
            message = ErrorResponse.from_body(data).describe('Failed to create event')
            logger.error(f"Create event error ({response.status_code}): {message}")
            raise ApiError(message, status_code=response.status_code, body=data)

        if not isinstance(data, dict):
            raise ApiError(
                f"Unexpected response type: {type(data).__name__}",
                status_code=response.status_code,
                body=data
            )

        event = Event.from_dict(data)
        logger.info(f"Created event '{event.name}' ({event.id})")
        return event

    def manage_admin(self, email: str, action: str, token: str) -> dict:
        """
        Grant or revoke admin rights for an account.

        Args:
            email: Account to change
            action: "grant" or "revoke"; passed through to the server
            token: Bearer token of the requesting admin

        Returns:
            Decoded response body, e.g. {"message": ...}

        Raises:
            ApiError: If the request fails or the server rejects it
            InvalidResponseError: If the response body is not JSON
        """
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {token}"
        }

        try:
            response = requests.post(
                f"{self.admin_url}/role",
                json={'email': email, 'action': action},
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Manage admin error: {e}")
            raise ApiError(f"Request failed: {e}") from e

        # Read the raw text first so HTML error pages can be reported as-is
        text = response.text
        try:
            data = json.loads(text) if text else {}
        except ValueError as e:
            logger.error(f"Manage admin error: invalid JSON response ({response.status_code})")
            raise InvalidResponseError(
                f"Invalid JSON response from server: {text}",
                raw_text=text,
                status_code=response.status_code
            ) from e

        if not response.ok:
            message = ErrorResponse.from_body(data).message
            message = message or f"Request failed ({response.status_code})"
            logger.error(f"Manage admin error ({response.status_code}): {message}")
            raise ApiError(message, status_code=response.status_code, body=data)

        logger.info(f"Role change '{action}' applied for {email}")
        return data

    def _parse_events(self, items: list) -> List[Event]:
        events = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f"Skipping malformed event entry: {item!r}")
                continue
            events.append(Event.from_dict(item))
        return events
