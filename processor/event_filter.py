"""Classification and filtering of events by date range and search text."""
import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Union

from processor.models import Event, FilterSelector

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'venue', 'description', 'category', 'time')

Instant = Union[date, datetime, None]


def parse_event_date(value) -> Optional[datetime]:
    """
    Parse an event date into a UTC datetime.

    Date-only strings (YYYY-MM-DD) are read as midnight UTC. Full ISO
    datetimes are accepted with a 'Z' suffix or an offset; naive ones are
    interpreted as UTC.

    Args:
        value: Date string from the API

    Returns:
        Aware UTC datetime, or None for an invalid date
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _as_instant(now: Instant) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if isinstance(now, datetime):
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)
    return datetime(now.year, now.month, now.day, tzinfo=timezone.utc)


def is_ongoing(event: Event, now: Instant = None) -> bool:
    """Return True if the event has started and not yet ended."""
    start = parse_event_date(event.start_date)
    end = parse_event_date(event.end_date)
    if start is None or end is None:
        return False
    instant = _as_instant(now)
    return start <= instant and end >= instant


def is_upcoming(event: Event, now: Instant = None) -> bool:
    """Return True if the event starts after now."""
    start = parse_event_date(event.start_date)
    if start is None:
        return False
    return start > _as_instant(now)


def is_past(event: Event, now: Instant = None) -> bool:
    """Return True if the event ended before now."""
    end = parse_event_date(event.end_date)
    if end is None:
        return False
    return end < _as_instant(now)


def classify(event: Event, now: Instant = None) -> Optional[FilterSelector]:
    """
    Classify an event relative to now.

    Returns:
        ONGOING, UPCOMING or PAST; None when the dates are invalid
    """
    instant = _as_instant(now)
    if is_ongoing(event, instant):
        return FilterSelector.ONGOING
    if is_upcoming(event, instant):
        return FilterSelector.UPCOMING
    if is_past(event, instant):
        return FilterSelector.PAST
    return None


def matches_query(event: Event, query: Optional[str]) -> bool:
    """
    Case-insensitive substring search over the event's text fields.

    An empty (or whitespace-only) query matches everything. Fields that
    are missing never match.
    """
    if not query or not query.strip():
        return True

    needle = query.lower()
    for field_name in SEARCH_FIELDS:
        value = getattr(event, field_name, None)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def _matches_selector(event: Event, selector: FilterSelector, now: datetime) -> bool:
    if selector is FilterSelector.ONGOING:
        return is_ongoing(event, now)
    if selector is FilterSelector.UPCOMING:
        return is_upcoming(event, now)
    if selector is FilterSelector.PAST:
        return is_past(event, now)
    return True


def filter_events(
    events: Iterable[Event],
    selector: Union[FilterSelector, str] = FilterSelector.ALL,
    query: Optional[str] = '',
    now: Instant = None
) -> List[Event]:
    """
    Return the events visible for a selector and search query.

    The selector is applied first, then the text search. Relative order
    of the input is preserved.

    Args:
        events: Events to filter
        selector: One of all, ongoing, upcoming, past
        query: Free-text search; empty means no text filtering
        now: Reference instant (defaults to the current UTC time)

    Returns:
        List of matching events

    Raises:
        ValueError: If selector is not a known filter
    """
    selector = FilterSelector(selector)
    instant = _as_instant(now)

    visible = [
        event for event in events
        if _matches_selector(event, selector, instant)
        and matches_query(event, query)
    ]

    logger.debug(
        f"Filter '{selector.value}' with query {query!r} kept {len(visible)} events"
    )
    return visible
