# =============================================================================
# core/normalizer.py  -  Raw feed bytes -> list[Event]
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. Decodes the downloaded bytes as JSON.
#   2. Accepts the payload in ONE of two shapes:
#        a) a bare array:        [ {event}, {event}, ... ]
#        b) a wrapper object:    { "events": [ {event}, ... ] }
#   3. Builds frozen Event objects and derives start/end/CFP dates from the
#      millisecond timestamps.
#
# THE SHAPE ATTEMPTS:
#   Each shape is a small function returning (events, error).  We walk the
#   list in order and keep the first one that succeeds.  No exception-driven
#   fallthrough: a shape that doesn't fit simply reports why.
#
# PURITY:
#   normalize_events() has no side effects.  Same bytes in, same list out.
# =============================================================================

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from core.errors import ParseError
from core.models import CFPInfo, Event

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# (events, error) - exactly one of the two is not None
ShapeResult = tuple[Optional[list[Event]], Optional[str]]


class _InvalidEvent(ValueError):
    """Raised while converting a single JSON object into an Event."""


def millis_to_datetime(millis: int) -> Optional[datetime]:
    """Convert milliseconds since the Unix epoch to an aware UTC datetime.

    0 is the feed's way of saying "no date", so it maps to None rather than
    to 1970-01-01.
    """
    if millis == 0:
        return None
    return _EPOCH + timedelta(milliseconds=millis)


# -----------------------------------------------------------------------------
# Field readers - each one enforces the JSON type the feed promises.
# A missing key or an explicit null falls back to the default.
# -----------------------------------------------------------------------------
def _read_str(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _InvalidEvent(f"field {key!r}: expected string, got {type(value).__name__}")
    return value


def _read_bool(obj: dict, key: str) -> bool:
    value = obj.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _InvalidEvent(f"field {key!r}: expected boolean, got {type(value).__name__}")
    return value


def _read_int(obj: dict, key: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    # bool is a subclass of int; true/false are not timestamps
    if isinstance(value, bool) or not isinstance(value, int):
        raise _InvalidEvent(f"field {key!r}: expected integer, got {type(value).__name__}")
    return value


def _read_timestamps(obj: dict) -> tuple[int, ...]:
    value = obj.get("date")
    if value is None:
        return ()
    if not isinstance(value, list):
        raise _InvalidEvent(f"field 'date': expected array, got {type(value).__name__}")
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise _InvalidEvent(f"field 'date': expected integers, got {item!r}")
    return tuple(value)


def _read_cfp(obj: dict) -> CFPInfo:
    value = obj.get("cfp")
    if value is None:
        return CFPInfo()
    if not isinstance(value, dict):
        raise _InvalidEvent(f"field 'cfp': expected object, got {type(value).__name__}")
    return CFPInfo(
        link=_read_str(value, "link"),
        until=_read_str(value, "until"),
        until_date=_read_int(value, "untilDate"),
    )


def build_event(obj: Any) -> Event:
    """Turn one decoded JSON object into an Event with derived dates."""
    if not isinstance(obj, dict):
        raise _InvalidEvent(f"expected event object, got {type(obj).__name__}")

    timestamps = _read_timestamps(obj)
    cfp = _read_cfp(obj)

    start_date = end_date = None
    try:
        if timestamps:
            start_date = millis_to_datetime(timestamps[0])
            end_date = millis_to_datetime(timestamps[-1]) if len(timestamps) > 1 else start_date

        cfp_end_date = millis_to_datetime(cfp.until_date) if cfp.until_date > 0 else None
    except OverflowError as e:
        raise _InvalidEvent(f"timestamp out of range: {e}") from e

    return Event(
        name=_read_str(obj, "name"),
        timestamps=timestamps,
        url=_read_str(obj, "hyperlink"),
        location=_read_str(obj, "location"),
        city=_read_str(obj, "city"),
        country=_read_str(obj, "country"),
        misc=_read_str(obj, "misc"),
        cfp=cfp,
        closed_captions=_read_bool(obj, "closedCaptions"),
        scholarship=_read_bool(obj, "scholarship"),
        status=_read_str(obj, "status"),
        start_date=start_date,
        end_date=end_date,
        cfp_end_date=cfp_end_date,
    )


def _build_all(items: list) -> ShapeResult:
    events = []
    for index, item in enumerate(items):
        try:
            events.append(build_event(item))
        except _InvalidEvent as e:
            return None, f"event #{index}: {e}"
    return events, None


# -----------------------------------------------------------------------------
# Shape attempts
# -----------------------------------------------------------------------------
def _decode_bare_array(document: Any) -> ShapeResult:
    """Shape A: the document itself is the event array.  A bare null is empty."""
    if document is None:
        return [], None
    if not isinstance(document, list):
        return None, f"expected array, got {type(document).__name__}"
    return _build_all(document)


def _decode_wrapped(document: Any) -> ShapeResult:
    """Shape B: {"events": [...]}.  A missing or null "events" is empty."""
    if not isinstance(document, dict):
        return None, f"expected object, got {type(document).__name__}"
    items = document.get("events")
    if items is None:
        return [], None
    if not isinstance(items, list):
        return None, f"field 'events': expected array, got {type(items).__name__}"
    return _build_all(items)


_SHAPES: list[tuple[str, Callable[[Any], ShapeResult]]] = [
    ("array", _decode_bare_array),
    ("wrapped", _decode_wrapped),
]


def normalize_events(raw: bytes) -> list[Event]:
    """Decode the feed payload into a list of Events.

    Args:
        raw: Response body exactly as downloaded.

    Returns:
        Events in feed order, with start/end/CFP dates derived.

    Raises:
        ParseError: The body is not JSON, or matches neither accepted shape.
            An empty body is reported the same way.
    """
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(str(e)) from e

    failures = []
    for shape_name, attempt in _SHAPES:
        events, error = attempt(document)
        if error is None:
            logger.debug(f"Decoded {len(events)} events using the {shape_name} shape")
            return events
        failures.append(f"{shape_name}: {error}")

    raise ParseError("; ".join(failures))
