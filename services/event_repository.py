"""Event listing and creation on behalf of the current session."""
import logging
from typing import List

from api.client import EventsApiClient
from processor.models import Event, EventPayload
from storage.session import Session

logger = logging.getLogger(__name__)


class EventRepository:
    """Repository for events exposed by the backend."""

    def __init__(self, client: EventsApiClient, session: Session):
        self.client = client
        self.session = session

    def list(self) -> List[Event]:
        """
        Return all events, or an empty list if they could not be fetched.
        """
        result = self.client.list_events()
        if not result.ok:
            logger.warning(f"Showing no events: {result.error}")
        return result.events

    def create(self, payload: EventPayload) -> Event:
        """
        Create an event with the session's credential.

        Errors from the API client are propagated to the caller.
        """
        token = self.session.get_token()
        if not token:
            logger.warning("Creating event without a stored token")
        return self.client.create_event(payload, token)
