"""Unit tests for event classification and filtering."""
from datetime import date, datetime, timedelta, timezone

import pytest

from processor.event_filter import (
    classify,
    filter_events,
    is_ongoing,
    is_past,
    is_upcoming,
    matches_query,
    parse_event_date,
)
from processor.models import Event, FilterSelector


def make_event(event_id, start_date, end_date, **fields):
    return Event(
        id=event_id,
        name=fields.get('name', f'Event {event_id}'),
        start_date=start_date,
        end_date=end_date,
        time=fields.get('time'),
        venue=fields.get('venue'),
        description=fields.get('description'),
        category=fields.get('category'),
        file_url=fields.get('file_url')
    )


@pytest.fixture
def events():
    """A past, an ongoing and an upcoming event relative to 2025-03-10."""
    return [
        make_event('1', '2025-01-01', '2025-01-03', name='Hackathon',
                   venue='Hall A', time='10:00', category='Tech'),
        make_event('2', '2025-03-09', '2025-03-11', name='Career Fair',
                   venue='Main Auditorium', description='Meet employers'),
        make_event('3', '2025-04-01', '2025-04-02', name='Music Night',
                   venue='Open Air Theatre', category='Culture', time='7 PM'),
    ]


NOW = date(2025, 3, 10)


class TestParseEventDate:
    """Test cases for parse_event_date."""

    def test_date_only_is_utc_midnight(self):
        assert parse_event_date('2025-01-01') == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_zulu_datetime(self):
        parsed = parse_event_date('2025-01-01T10:30:00.000Z')
        assert parsed == datetime(2025, 1, 1, 10, 30, tzinfo=timezone.utc)

    def test_offset_datetime_converted_to_utc(self):
        parsed = parse_event_date('2025-01-01T05:30:00+05:30')
        assert parsed == datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize('value', ['', 'not a date', '2025-13-45', None, 20250101])
    def test_invalid_values_return_none(self, value):
        assert parse_event_date(value) is None


class TestClassification:
    """Test cases for the temporal predicates."""

    def test_scenario_ongoing_past_upcoming(self):
        """Test the same event classified at three reference dates."""
        event = make_event('1', '2025-01-01', '2025-01-03')

        assert classify(event, date(2025, 1, 2)) is FilterSelector.ONGOING
        assert classify(event, date(2025, 1, 5)) is FilterSelector.PAST
        assert classify(event, date(2024, 12, 30)) is FilterSelector.UPCOMING

    def test_bounds_are_inclusive_for_ongoing(self):
        event = make_event('1', '2025-01-01', '2025-01-03')

        assert is_ongoing(event, date(2025, 1, 1))
        assert is_ongoing(event, date(2025, 1, 3))

    def test_end_date_is_midnight(self):
        """Test that an event ending today is past once the day has started."""
        event = make_event('1', '2025-01-01', '2025-01-03')
        noon = datetime(2025, 1, 3, 12, 0, tzinfo=timezone.utc)

        assert not is_ongoing(event, noon)
        assert is_past(event, noon)

    def test_exactly_one_predicate_for_valid_dates(self):
        event = make_event('1', '2025-01-01', '2025-01-03')
        start = datetime(2024, 12, 25, 6, 0, tzinfo=timezone.utc)

        for hours in range(0, 24 * 14, 5):
            now = start + timedelta(hours=hours)
            flags = [is_ongoing(event, now), is_upcoming(event, now), is_past(event, now)]
            assert flags.count(True) == 1

    def test_invalid_dates_fall_out_of_every_predicate(self):
        event = make_event('1', 'soon', 'later')

        assert not is_ongoing(event, NOW)
        assert not is_upcoming(event, NOW)
        assert not is_past(event, NOW)
        assert classify(event, NOW) is None

    def test_missing_end_date_only_affects_end_comparisons(self):
        event = make_event('1', '2030-01-01', None)

        assert is_upcoming(event, NOW)
        assert not is_past(event, NOW)
        assert not is_ongoing(event, NOW)

    def test_naive_now_is_treated_as_utc(self):
        event = make_event('1', '2025-01-01', '2025-01-03')
        assert is_ongoing(event, datetime(2025, 1, 2, 9, 0))

    def test_default_now_is_current_time(self):
        far_future = make_event('1', '2999-01-01', '2999-01-02')
        assert classify(far_future) is FilterSelector.UPCOMING


class TestMatchesQuery:
    """Test cases for free-text search."""

    def test_blank_query_matches(self, events):
        assert matches_query(events[0], '')
        assert matches_query(events[0], '   ')
        assert matches_query(events[0], None)

    @pytest.mark.parametrize('query', ['hack', 'HALL a', 'tech', '10:00'])
    def test_searches_all_text_fields(self, events, query):
        assert matches_query(events[0], query)

    def test_description_is_searched(self, events):
        assert matches_query(events[1], 'employers')

    def test_missing_fields_do_not_match(self):
        event = Event(id='x', name=None, start_date=None, end_date=None, time=None)
        assert not matches_query(event, 'anything')

    def test_query_is_not_trimmed_for_matching(self, events):
        """Surrounding spaces are part of the search text."""
        assert not matches_query(events[0], ' hall a ')


class TestFilterEvents:
    """Test cases for filter_events."""

    def test_all_with_empty_query_is_identity(self, events):
        assert filter_events(events, FilterSelector.ALL, '', now=NOW) == events

    def test_ongoing(self, events):
        result = filter_events(events, 'ongoing', '', now=NOW)
        assert [e.id for e in result] == ['2']

    def test_upcoming(self, events):
        result = filter_events(events, FilterSelector.UPCOMING, now=NOW)
        assert [e.id for e in result] == ['3']

    def test_past(self, events):
        result = filter_events(events, 'past', now=NOW)
        assert [e.id for e in result] == ['1']

    def test_selector_and_query_must_both_match(self, events):
        assert filter_events(events, 'past', 'music', now=NOW) == []
        assert [e.id for e in filter_events(events, 'upcoming', 'music', now=NOW)] == ['3']

    def test_case_insensitive(self, events):
        upper = filter_events(events, 'all', 'THEATRE', now=NOW)
        lower = filter_events(events, 'all', 'theatre', now=NOW)
        assert upper == lower
        assert [e.id for e in upper] == ['3']

    def test_idempotent(self, events):
        once = filter_events(events, 'all', 'a', now=NOW)
        twice = filter_events(once, 'all', 'a', now=NOW)
        assert once == twice

    def test_preserves_order(self, events):
        reordered = [events[2], events[0], events[1]]
        result = filter_events(reordered, 'all', 'e', now=NOW)
        assert [e.id for e in result] == ['3', '1', '2']

    def test_invalid_dates_only_shown_for_all(self):
        broken = [make_event('1', 'TBA', 'TBA')]

        assert filter_events(broken, 'all', now=NOW) == broken
        for selector in ('ongoing', 'upcoming', 'past'):
            assert filter_events(broken, selector, now=NOW) == []

    def test_unknown_selector_raises(self, events):
        with pytest.raises(ValueError):
            filter_events(events, 'someday', now=NOW)

    def test_input_is_not_modified(self, events):
        snapshot = list(events)
        filter_events(events, 'past', 'hack', now=NOW)
        assert events == snapshot
