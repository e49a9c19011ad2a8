# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two dataclasses describe everything the feed tells us about a conference:
#
#   Event    - one conference / meetup entry
#   CFPInfo  - the Call-for-Papers block nested inside an Event
#
# Both are FROZEN.  An Event is built once by core/normalizer.py (decode the
# JSON, derive the dates) and never touched again.  Filtering produces new
# lists; it never edits an Event in place.
#
# WIRE NAMES vs PYTHON NAMES:
#   The upstream JSON uses its own field names ("hyperlink", "date",
#   "untilDate", "closedCaptions").  The dataclasses use Python names, and
#   to_dict() maps them back so tool output has the same shape as the feed.
#
# UNSET DATES:
#   start_date / end_date / cfp_end_date are Optional[datetime].  None means
#   "the feed gave us nothing" - it is NOT the Unix epoch.  Always check for
#   None before comparing.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CFPInfo:
    """Call-for-Papers metadata for one event."""

    link: str = ""                     # Submission page; "" means no CFP
    until: str = ""                    # Human-readable deadline, never parsed
    until_date: int = 0                # Deadline in ms since epoch; 0 = none

    def to_dict(self) -> dict:
        return {
            "link": self.link,
            "until": self.until,
            "untilDate": self.until_date,
        }


@dataclass(frozen=True)
class Event:
    """One developer conference from the feed, with derived dates."""

    name: str
    timestamps: tuple[int, ...] = ()   # wire name "date"; first=start, last=end
    url: str = ""                      # wire name "hyperlink"
    location: str = ""
    city: str = ""
    country: str = ""
    misc: str = ""
    cfp: CFPInfo = field(default_factory=CFPInfo)
    closed_captions: bool = False      # informational only
    scholarship: bool = False          # informational only
    status: str = ""                   # informational only

    # --- Derived at load time, never read from the feed ---
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    cfp_end_date: Optional[datetime] = None

    @property
    def search_text(self) -> str:
        """The text a free-text query is matched against."""
        return self.name + self.location + self.city + self.country + self.misc

    def to_dict(self) -> dict:
        """Render the event in the feed's own JSON shape."""
        return {
            "name": self.name,
            "date": list(self.timestamps),
            "hyperlink": self.url,
            "location": self.location,
            "city": self.city,
            "country": self.country,
            "misc": self.misc,
            "cfp": self.cfp.to_dict(),
            "closedCaptions": self.closed_captions,
            "scholarship": self.scholarship,
            "status": self.status,
        }
