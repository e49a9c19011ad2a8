# =============================================================================
# core/filters.py  -  Filter Engine
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Narrows a normalized list[Event] down to the events a query asks for.
#
#   EventFilter       - the parsed options of one search (all optional)
#   filter_events()   - apply an EventFilter, keep feed order, honor limit
#   open_cfps()       - events whose Call for Papers is still open
#   upcoming_events() - events that haven't started yet
#   cfp_deadlines_soon() - open CFPs closing within N days
#
# SEMANTICS:
#   - Every active option must pass (logical AND).
#   - "Empty" options (blank text, None date, False flag) don't constrain.
#   - limit > 0 stops at the N-th match in feed order; limit <= 0 = all.
#   - Date options compare against derived dates and require them to be set:
#     an event with no start date never satisfies from_date or to_date.
#
# "NOW":
#   Every function takes an optional `now` so tests can pin the clock.  In
#   production it defaults to the current UTC time at call time.
# =============================================================================

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from core.errors import InvalidDateError
from core.models import Event

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DEADLINE_DAYS = 30

# strptime alone would accept "2025-1-5"; the feed's callers must send
# zero-padded calendar dates.
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date_option(value: str, option: str) -> Optional[datetime]:
    """Parse a YYYY-MM-DD option into midnight UTC.

    Args:
        value: The raw option text.  Blank means "not supplied".
        option: The option's name, used in the error.

    Returns:
        An aware datetime, or None when the option is blank.

    Raises:
        InvalidDateError: value is not a real calendar date in YYYY-MM-DD form.
    """
    if not value:
        return None
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidDateError(option, value)
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateError(option, value) from e
    return parsed.replace(tzinfo=timezone.utc)


def contains_folded(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test.  An empty needle always matches.

    Plain lowercasing, not casefold(): "ß" does not match "ss".
    """
    return needle.lower() in haystack.lower()


def is_cfp_open(event: Event, now: datetime) -> bool:
    """True when the event has a CFP link and a deadline still ahead of now."""
    return (
        event.cfp.link != ""
        and event.cfp_end_date is not None
        and event.cfp_end_date > now
    )


@dataclass(frozen=True)
class EventFilter:
    """Parsed search options.  Defaults constrain nothing."""

    query: str = ""
    location: str = ""
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    has_open_cfp: bool = False
    cfp_from_date: Optional[datetime] = None
    cfp_to_date: Optional[datetime] = None
    limit: int = 0

    @classmethod
    def from_params(
        cls,
        query: str = "",
        location: str = "",
        from_date: str = "",
        to_date: str = "",
        has_open_cfp: bool = False,
        cfp_from_date: str = "",
        cfp_to_date: str = "",
        limit: int = 0,
    ) -> "EventFilter":
        """Build a filter from raw tool parameters, parsing the dates.

        Raises:
            InvalidDateError: Any date option is malformed.  Nothing is
                filtered in that case.
        """
        return cls(
            query=query or "",
            location=location or "",
            from_date=parse_date_option(from_date, "fromDate"),
            to_date=parse_date_option(to_date, "toDate"),
            has_open_cfp=bool(has_open_cfp),
            cfp_from_date=parse_date_option(cfp_from_date, "cfpFromDate"),
            cfp_to_date=parse_date_option(cfp_to_date, "cfpToDate"),
            limit=limit or 0,
        )

    def predicates(self, now: datetime) -> list[Callable[[Event], bool]]:
        """The per-event tests this filter activates."""
        checks: list[Callable[[Event], bool]] = []

        if self.query:
            checks.append(lambda e: contains_folded(e.search_text, self.query))
        if self.location:
            checks.append(lambda e: contains_folded(e.location, self.location))
        if self.from_date is not None:
            checks.append(lambda e: e.start_date is not None and e.start_date >= self.from_date)
        if self.to_date is not None:
            checks.append(lambda e: e.start_date is not None and e.start_date <= self.to_date)
        if self.has_open_cfp:
            checks.append(lambda e: is_cfp_open(e, now))
        if self.cfp_from_date is not None:
            checks.append(lambda e: e.cfp_end_date is not None and e.cfp_end_date >= self.cfp_from_date)
        if self.cfp_to_date is not None:
            checks.append(lambda e: e.cfp_end_date is not None and e.cfp_end_date <= self.cfp_to_date)

        return checks


def _select(
    events: Iterable[Event],
    checks: list[Callable[[Event], bool]],
    limit: int = 0,
) -> list[Event]:
    matched = []
    for event in events:
        if all(check(event) for check in checks):
            matched.append(event)
            if limit > 0 and len(matched) >= limit:
                break
    return matched


def filter_events(
    events: Iterable[Event],
    criteria: EventFilter,
    now: Optional[datetime] = None,
) -> list[Event]:
    """Apply every active option of `criteria`, in feed order."""
    now = now or _utc_now()
    return _select(events, criteria.predicates(now), criteria.limit)


def open_cfps(
    events: Iterable[Event],
    limit: int = 0,
    now: Optional[datetime] = None,
) -> list[Event]:
    """Events whose Call for Papers is open right now."""
    return filter_events(events, EventFilter(has_open_cfp=True, limit=limit), now)


def upcoming_events(
    events: Iterable[Event],
    limit: int = 0,
    now: Optional[datetime] = None,
) -> list[Event]:
    """Events starting strictly after now."""
    now = now or _utc_now()
    return _select(
        events,
        [lambda e: e.start_date is not None and e.start_date > now],
        limit,
    )


def cfp_deadlines_soon(
    events: Iterable[Event],
    days: int = DEFAULT_DEADLINE_DAYS,
    now: Optional[datetime] = None,
) -> list[Event]:
    """Open CFPs whose deadline falls within the next `days` days.

    A non-positive `days` falls back to DEFAULT_DEADLINE_DAYS.  A window
    reaching past the largest representable datetime is capped there.
    """
    if days <= 0:
        days = DEFAULT_DEADLINE_DAYS
    now = now or _utc_now()
    try:
        horizon = now + timedelta(days=days)
    except OverflowError:
        horizon = datetime.max.replace(tzinfo=timezone.utc)

    return _select(
        events,
        [lambda e: is_cfp_open(e, now) and e.cfp_end_date < horizon],
    )
