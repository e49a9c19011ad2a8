"""Unit tests for the filter engine."""
import json

import pytest

from core.errors import InvalidDateError
from core.filters import (
    EventFilter,
    cfp_deadlines_soon,
    contains_folded,
    filter_events,
    is_cfp_open,
    open_cfps,
    parse_date_option,
    upcoming_events,
)
from core.normalizer import normalize_events
from factories import FAR_FUTURE_MS, make_event, utc

# 2025-01-01T00:00:00Z .. 2025-12-01T00:00:00Z
JAN_2025 = 1735689600000
MAR_2025 = 1740787200000
JUN_2025 = 1748736000000
SEP_2025 = 1756684800000
DEC_2025 = 1764547200000


class TestContainsFolded:
    """Test cases for the case-insensitive substring helper."""

    @pytest.mark.parametrize(
        "haystack,needle,expected",
        [
            ("Go Conference", "conference", True),
            ("Berlin, Germany", "germany", True),
            ("DevOps Summit", "frontend", False),
            ("", "test", False),
            ("Test", "", True),
            ("UPPERCASE", "uppercase", True),
            ("lowercase", "LOWERCASE", True),
        ],
    )
    def test_contains(self, haystack, needle, expected):
        assert contains_folded(haystack, needle) is expected

    def test_sharp_s_is_not_expanded(self):
        assert not contains_folded("Straße Summit", "strasse")
        assert contains_folded("STRASSE Summit", "strasse")
        assert contains_folded("Straße Summit", "STRAßE")


class TestParseDateOption:
    """Test cases for YYYY-MM-DD parsing."""

    def test_valid_date_is_midnight_utc(self):
        assert parse_date_option("2025-03-01", "fromDate") == utc(2025, 3, 1)

    def test_blank_is_none(self):
        assert parse_date_option("", "fromDate") is None

    @pytest.mark.parametrize(
        "value",
        ["2025-13-40", "2025-02-30", "01/03/2025", "2025-3-1", "2025-03-01T10:00", "tomorrow"],
    )
    def test_invalid_dates(self, value):
        with pytest.raises(InvalidDateError) as excinfo:
            parse_date_option(value, "cfpToDate")

        assert excinfo.value.option == "cfpToDate"
        assert excinfo.value.value == value
        assert "cfpToDate" in str(excinfo.value)


class TestEventFilterFromParams:
    """Test cases for building an EventFilter from tool parameters."""

    def test_defaults_constrain_nothing(self):
        criteria = EventFilter.from_params()

        assert criteria == EventFilter()
        assert criteria.predicates(utc(2025, 1, 1)) == []

    def test_parses_all_dates(self):
        criteria = EventFilter.from_params(
            from_date="2025-01-01",
            to_date="2025-12-31",
            cfp_from_date="2025-02-01",
            cfp_to_date="2025-03-01",
        )

        assert criteria.from_date == utc(2025, 1, 1)
        assert criteria.to_date == utc(2025, 12, 31)
        assert criteria.cfp_from_date == utc(2025, 2, 1)
        assert criteria.cfp_to_date == utc(2025, 3, 1)

    def test_invalid_from_date_names_the_option(self):
        with pytest.raises(InvalidDateError) as excinfo:
            EventFilter.from_params(from_date="2025-13-40")

        assert excinfo.value.option == "fromDate"

    def test_invalid_to_date_names_the_option(self):
        with pytest.raises(InvalidDateError) as excinfo:
            EventFilter.from_params(from_date="2025-01-01", to_date="31-12-2025")

        assert excinfo.value.option == "toDate"

    def test_invalid_cfp_dates_name_the_option(self):
        with pytest.raises(InvalidDateError) as excinfo:
            EventFilter.from_params(cfp_from_date="next week")
        assert excinfo.value.option == "cfpFromDate"

        with pytest.raises(InvalidDateError) as excinfo:
            EventFilter.from_params(cfp_to_date="2025-02-30")
        assert excinfo.value.option == "cfpToDate"

    def test_none_values_treated_as_unset(self):
        criteria = EventFilter.from_params(query=None, location=None, limit=None)

        assert criteria.query == ""
        assert criteria.location == ""
        assert criteria.limit == 0


class TestFilterEvents:
    """Test cases for filter_events."""

    NOW = utc(2025, 6, 15)

    def test_no_options_keeps_everything_in_order(self):
        events = [make_event("A"), make_event("B"), make_event("C")]

        assert filter_events(events, EventFilter(), now=self.NOW) == events

    def test_query_is_case_insensitive(self):
        events = [make_event("golang conf"), make_event("PyCon")]

        result = filter_events(events, EventFilter(query="GoLang"), now=self.NOW)

        assert [e.name for e in result] == ["golang conf"]

    def test_query_searches_location_city_country_misc(self):
        events = [
            make_event("A", location="Lyon, France"),
            make_event("B", city="Lyon"),
            make_event("C", country="LYONNAIS REPUBLIC"),
            make_event("D", misc="hosted in lyon"),
            make_event("E", location="Paris"),
        ]

        result = filter_events(events, EventFilter(query="lyon"), now=self.NOW)

        assert [e.name for e in result] == ["A", "B", "C", "D"]

    def test_query_matches_across_field_boundary(self):
        """Fields are concatenated without a separator."""
        events = [make_event("DevFest", location="Nantes")]

        result = filter_events(events, EventFilter(query="festnan"), now=self.NOW)

        assert len(result) == 1

    def test_location_only_checks_location_field(self):
        events = [
            make_event("A", location="Berlin, Germany"),
            make_event("B", city="Berlin"),
        ]

        result = filter_events(events, EventFilter(location="berlin"), now=self.NOW)

        assert [e.name for e in result] == ["A"]

    def test_from_date_is_inclusive(self):
        events = [
            make_event("Before", timestamps=(JAN_2025,)),
            make_event("Exact", timestamps=(MAR_2025,)),
            make_event("After", timestamps=(JUN_2025,)),
            make_event("Undated"),
        ]

        result = filter_events(events, EventFilter(from_date=utc(2025, 3, 1)), now=self.NOW)

        assert [e.name for e in result] == ["Exact", "After"]

    def test_to_date_is_inclusive_and_requires_start(self):
        events = [
            make_event("Before", timestamps=(JAN_2025,)),
            make_event("Exact", timestamps=(MAR_2025,)),
            make_event("After", timestamps=(JUN_2025,)),
            make_event("Undated"),
        ]

        result = filter_events(events, EventFilter(to_date=utc(2025, 3, 1)), now=self.NOW)

        assert [e.name for e in result] == ["Before", "Exact"]

    def test_date_range_uses_start_date(self):
        events = [make_event("Spans", timestamps=(JAN_2025, JUN_2025))]

        result = filter_events(
            events,
            EventFilter(from_date=utc(2025, 3, 1), to_date=utc(2025, 12, 1)),
            now=self.NOW,
        )

        assert result == []

    def test_has_open_cfp_requires_link(self):
        events = [
            make_event("No link", cfp_until_date=FAR_FUTURE_MS),
            make_event("Open", cfp_link="https://open/cfp", cfp_until_date=FAR_FUTURE_MS),
        ]

        result = filter_events(events, EventFilter(has_open_cfp=True), now=self.NOW)

        assert [e.name for e in result] == ["Open"]

    def test_has_open_cfp_requires_future_deadline(self):
        events = [
            make_event("Closed", cfp_link="https://closed/cfp", cfp_until_date=JAN_2025),
            make_event("No deadline", cfp_link="https://nodeadline/cfp"),
            make_event("Open", cfp_link="https://open/cfp", cfp_until_date=SEP_2025),
        ]

        result = filter_events(events, EventFilter(has_open_cfp=True), now=self.NOW)

        assert [e.name for e in result] == ["Open"]

    def test_cfp_date_range(self):
        events = [
            make_event("Early", cfp_until_date=JAN_2025),
            make_event("Middle", cfp_until_date=JUN_2025),
            make_event("Late", cfp_until_date=DEC_2025),
            make_event("None"),
        ]

        result = filter_events(
            events,
            EventFilter(cfp_from_date=utc(2025, 3, 1), cfp_to_date=utc(2025, 9, 1)),
            now=self.NOW,
        )

        assert [e.name for e in result] == ["Middle"]

    def test_options_combine_with_and(self):
        events = [
            make_event("Go Berlin", timestamps=(SEP_2025,), location="Berlin"),
            make_event("Go Paris", timestamps=(SEP_2025,), location="Paris"),
            make_event("Rust Berlin", timestamps=(SEP_2025,), location="Berlin"),
            make_event("Go Berlin old", timestamps=(JAN_2025,), location="Berlin"),
        ]

        result = filter_events(
            events,
            EventFilter(query="go", location="berlin", from_date=utc(2025, 6, 1)),
            now=self.NOW,
        )

        assert [e.name for e in result] == ["Go Berlin"]

    def test_limit_keeps_first_matches_in_order(self):
        events = [make_event(name) for name in "ABCDE"]

        result = filter_events(events, EventFilter(limit=2), now=self.NOW)

        assert [e.name for e in result] == ["A", "B"]

    def test_limit_counts_matches_not_inputs(self):
        events = [
            make_event("x1"), make_event("skip"), make_event("x2"),
            make_event("skip"), make_event("x3"),
        ]

        result = filter_events(events, EventFilter(query="x", limit=2), now=self.NOW)

        assert [e.name for e in result] == ["x1", "x2"]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_is_unlimited(self, limit):
        events = [make_event(name) for name in "ABCDE"]

        assert len(filter_events(events, EventFilter(limit=limit), now=self.NOW)) == 5


class TestDerivedOperations:
    """Test cases for open_cfps, upcoming_events and cfp_deadlines_soon."""

    NOW = utc(2025, 6, 15)

    def test_is_cfp_open(self):
        event = make_event(cfp_link="https://x/cfp", cfp_until_date=SEP_2025)

        assert is_cfp_open(event, self.NOW)
        assert not is_cfp_open(event, utc(2025, 10, 1))

    def test_open_cfps_end_to_end(self):
        raw = json.dumps([{
            "name": "Conf",
            "hyperlink": "https://x",
            "date": [1700000000000],
            "cfp": {"link": "https://x/cfp", "untilDate": 1699000000000},
        }]).encode()
        events = normalize_events(raw)

        assert open_cfps(events, now=utc(2023, 11, 10)) == []
        assert [e.name for e in open_cfps(events, now=utc(2023, 11, 1))] == ["Conf"]

    def test_open_cfps_limit(self):
        events = [
            make_event(name, cfp_link="https://x/cfp", cfp_until_date=FAR_FUTURE_MS)
            for name in "ABC"
        ]

        assert [e.name for e in open_cfps(events, limit=2, now=self.NOW)] == ["A", "B"]

    def test_upcoming_events_strictly_after_now(self):
        events = [
            make_event("Past", timestamps=(JAN_2025,)),
            make_event("Today", timestamps=(1749945600000,)),  # 2025-06-15T00:00Z
            make_event("Future", timestamps=(SEP_2025,)),
            make_event("Undated"),
        ]

        result = upcoming_events(events, now=self.NOW)

        assert [e.name for e in result] == ["Future"]

    def test_upcoming_events_limit(self):
        events = [make_event(name, timestamps=(FAR_FUTURE_MS,)) for name in "ABCD"]

        assert len(upcoming_events(events, limit=3, now=self.NOW)) == 3

    def test_cfp_deadlines_soon_window(self):
        events = [
            make_event("Closed", cfp_link="https://a/cfp", cfp_until_date=JAN_2025),
            make_event("Soon", cfp_link="https://b/cfp", cfp_until_date=1750550400000),  # 2025-06-22
            make_event("No link", cfp_until_date=1750550400000),
            make_event("Later", cfp_link="https://c/cfp", cfp_until_date=SEP_2025),
        ]

        result = cfp_deadlines_soon(events, days=30, now=self.NOW)

        assert [e.name for e in result] == ["Soon"]

    def test_cfp_deadlines_soon_upper_bound_is_exclusive(self):
        # exactly now + 7 days
        events = [make_event("Edge", cfp_link="https://e/cfp", cfp_until_date=1750550400000)]

        assert cfp_deadlines_soon(events, days=7, now=self.NOW) == []
        assert len(cfp_deadlines_soon(events, days=8, now=self.NOW)) == 1

    @pytest.mark.parametrize("days", [0, -5])
    def test_cfp_deadlines_soon_defaults_to_30_days(self, days):
        events = [
            make_event("In 29 days", cfp_link="https://a/cfp", cfp_until_date=1752451200000),  # 2025-07-14
            make_event("In 31 days", cfp_link="https://b/cfp", cfp_until_date=1752624000000),  # 2025-07-16
        ]

        result = cfp_deadlines_soon(events, days=days, now=self.NOW)

        assert [e.name for e in result] == ["In 29 days"]

    @pytest.mark.parametrize("days", [3_000_000, 10**12])
    def test_cfp_deadlines_soon_huge_window_is_capped(self, days):
        events = [
            make_event("Closed", cfp_link="https://a/cfp", cfp_until_date=JAN_2025),
            make_event("Open", cfp_link="https://b/cfp", cfp_until_date=FAR_FUTURE_MS),
        ]

        result = cfp_deadlines_soon(events, days=days, now=self.NOW)

        assert [e.name for e in result] == ["Open"]
