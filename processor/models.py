"""Data models for campus events and API results."""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


@dataclass
class Event:
    """Event as returned by the events API."""
    id: Optional[str]
    name: Optional[str]
    start_date: Optional[str]
    end_date: Optional[str]
    time: Optional[str]
    venue: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    file_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Event':
        """
        Build an Event from the API's camelCase JSON object.

        The backend stores events in MongoDB, so the identifier usually
        arrives as ``_id``; a plain ``id`` is accepted as well.

        Args:
            data: Decoded JSON object

        Returns:
            Event with absent fields set to None
        """
        event_id = data.get('_id', data.get('id'))
        return cls(
            id=str(event_id) if event_id is not None else None,
            name=data.get('name'),
            start_date=data.get('startDate'),
            end_date=data.get('endDate'),
            time=data.get('time'),
            venue=data.get('venue'),
            description=data.get('description'),
            category=data.get('category'),
            file_url=data.get('fileUrl')
        )


@dataclass
class EventPayload:
    """Body of a create-event request."""
    name: str
    start_date: str
    end_date: str
    time: str
    venue: str
    description: str = ''
    category: str = ''
    file_url: str = ''

    def to_dict(self) -> dict:
        """Return the wire representation expected by the events API."""
        return {
            'name': self.name,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'time': self.time,
            'venue': self.venue,
            'description': self.description,
            'category': self.category,
            'fileUrl': self.file_url
        }


class FilterSelector(str, Enum):
    """Temporal filter applied to an event listing."""
    ALL = 'all'
    ONGOING = 'ongoing'
    UPCOMING = 'upcoming'
    PAST = 'past'


@dataclass
class ErrorResponse:
    """Error body returned by the API on a failed request."""
    message: Optional[str] = None
    errors: Any = None

    @classmethod
    def from_body(cls, body: Any) -> 'ErrorResponse':
        """
        Decode an error body without assuming its shape.

        Args:
            body: Decoded JSON value (any type)

        Returns:
            ErrorResponse; fields missing from the body are None
        """
        if not isinstance(body, dict):
            return cls()
        message = body.get('message')
        errors = body.get('errors')
        # Empty lists and objects still count as reported errors
        if not isinstance(errors, (list, dict)) and not errors:
            errors = None
        return cls(
            message=str(message) if message else None,
            errors=errors
        )

    def describe(self, fallback: str) -> str:
        """Pick the most specific message available."""
        if self.message:
            return self.message
        if self.errors is not None:
            return json.dumps(self.errors, separators=(',', ':'), ensure_ascii=False)
        return fallback


@dataclass
class FetchResult:
    """Result of listing events. A failed fetch carries no events."""
    events: List[Event] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
