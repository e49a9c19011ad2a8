# =============================================================================
# core/source.py  -  Event Source Client (the only network call we make)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Downloads the conference feed with ONE blocking HTTP GET and hands back
#   the raw bytes.  Decoding lives in core/normalizer.py.
#
# ERROR MAPPING:
#   network failure      -> FetchError(reason="transport")
#   non-2xx status       -> FetchError(reason="unexpected_status", code=...)
#   body read failure    -> FetchError(reason="io")
#
# WHAT IT DELIBERATELY DOES NOT DO:
#   - No retries.  A failure goes straight back to the caller.
#   - No caching.  Every call hits the network.
#   - No timeout of its own.  urllib's default applies; callers that need a
#     bounded latency impose their own deadline.
# =============================================================================

import http.client
import logging
import urllib.error
import urllib.request

from core.config import DEFAULT_FEED_URL
from core.errors import FetchError
from core.models import Event
from core.normalizer import normalize_events

logger = logging.getLogger(__name__)


class EventSourceClient:
    """Fetches the raw event feed from a fixed URL."""

    def __init__(self, url: str = DEFAULT_FEED_URL):
        self.url = url

    def fetch(self) -> bytes:
        """Download the feed body.

        Returns:
            The response body, untouched.

        Raises:
            FetchError: On transport failure, a non-2xx status, or a failed
                body read.
        """
        logger.info(f"Fetching events from {self.url}")
        request = urllib.request.Request(self.url, method="GET")

        try:
            response = urllib.request.urlopen(request)
        except urllib.error.HTTPError as e:
            # HTTPError is a URLError subclass, so it has to be caught first
            e.close()
            raise FetchError(FetchError.UNEXPECTED_STATUS, code=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise FetchError(FetchError.TRANSPORT, detail=str(e)) from e

        with response:
            status = response.status
            if not 200 <= status < 300:
                raise FetchError(FetchError.UNEXPECTED_STATUS, code=status)
            try:
                body = response.read()
            except (http.client.HTTPException, OSError) as e:
                raise FetchError(FetchError.IO, detail=str(e)) from e

        logger.info(f"Received {len(body)} bytes (HTTP {status})")
        return body

    def fetch_events(self) -> list[Event]:
        """Fetch and normalize in one step.

        Raises:
            FetchError: See fetch().
            ParseError: The body is not a recognizable event feed.
        """
        events = normalize_events(self.fetch())
        logger.info(f"Loaded {len(events)} events")
        return events
