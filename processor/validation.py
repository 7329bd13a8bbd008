"""Form checks and link helpers used before calling the API."""
import logging
import re
from typing import List, Optional

from processor.models import EventPayload

logger = logging.getLogger(__name__)

REQUIRED_EVENT_FIELDS = ('name', 'start_date', 'end_date', 'time', 'venue')

_HTTP_URL = re.compile(r'^https?://.+$')


def validate_event_payload(payload: EventPayload) -> List[str]:
    """
    Check an event payload before submitting it.

    Args:
        payload: Event about to be created

    Returns:
        List of problems; empty if the payload can be submitted
    """
    problems = []

    missing = [
        name for name in REQUIRED_EVENT_FIELDS
        if not getattr(payload, name)
    ]
    if missing:
        logger.warning(f"Event payload missing required fields: {missing}")
        problems.append('Please fill all required fields.')

    if payload.file_url and not _HTTP_URL.match(payload.file_url):
        logger.warning(f"Event payload has invalid file URL: {payload.file_url}")
        problems.append('Enter a valid http(s) URL.')

    return problems


def validate_role_change(email: Optional[str]) -> List[str]:
    """Check the email of a grant/revoke request."""
    if not email or not email.strip():
        return ['Please enter email']
    return []


def resolve_file_url(file_url: Optional[str], base_url: str) -> Optional[str]:
    """
    Turn an event attachment link into an absolute URL.

    Absolute links are returned unchanged; relative paths are resolved
    against the backend origin.

    Args:
        file_url: Attachment link from the event, absolute or relative
        base_url: Backend origin

    Returns:
        Absolute URL, or None when the event has no attachment
    """
    if not file_url:
        return None
    if file_url.startswith('http'):
        return file_url
    path = file_url[1:] if file_url.startswith('/') else file_url
    return f"{base_url.rstrip('/')}/{path}"
