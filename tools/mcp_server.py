# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the conference feed to an agent as MCP tools and resources.
#   Each tool is a thin wrapper around core/: fetch, normalize, filter,
#   then render the result as indented JSON text.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs conference data
#   2. It calls a tool by name via MCP (e.g., "search_events")
#   3. FastMCP routes the call to the matching ConferenceTools method
#   4. The method runs a full fetch -> normalize -> filter cycle
#   5. The agent receives JSON text (or a plain-text error message)
#
# TOOLS:
#   search_events       - free-text / location / date / CFP filters
#   open_cfps           - events accepting talk submissions right now
#   upcoming_events     - events that haven't started yet
#   cfp_deadlines_soon  - open CFPs closing within N days
#
# RESOURCES:
#   events://all        - the whole feed, unfiltered
#   events://open-cfps  - the open-CFP subset
#
# ERRORS ARE CONTENT:
#   A failed fetch, an unreadable feed, or a malformed date option does NOT
#   raise out of a tool.  The tool returns the error message as its text so
#   the agent can read it and adjust.  Resources have no such convention and
#   raise ResourceError instead.
#
# NO SHARED STATE:
#   Nothing is cached between calls.  Every call builds its own event list,
#   so concurrent calls can't interfere with each other.
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server   (or: conference-mcp)
#     b) Spawned by the agent via stdio transport (agent/scout_agent.py)
# =============================================================================

import json
import logging
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

from core.config import Settings, load_settings
from core.errors import ConferenceFeedError, InvalidDateError
from core.filters import (
    DEFAULT_DEADLINE_DAYS,
    EventFilter,
    cfp_deadlines_soon,
    filter_events,
    open_cfps,
    upcoming_events,
)
from core.models import Event
from core.source import EventSourceClient

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to the agent over STDOUT.
# Anything we printed to stdout would corrupt the MCP JSON stream.
#
#   CYAN    incoming tool calls (name + parameters)
#   YELLOW  intermediate status
#   GREEN   response summary
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger("conference-mcp")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log a one-line summary of the response in GREEN, then return it."""
    first_line = result.splitlines()[0] if result else ""
    logger.info(f"{_GREEN}  ← {tool_name} response ({len(result)} chars): {first_line}{_RESET}")
    return result


def render_events(events: list[Event]) -> str:
    """Serialize events as indented JSON in the feed's own shape."""
    return json.dumps([event.to_dict() for event in events], indent=2, ensure_ascii=False)


# =============================================================================
# The tools
# =============================================================================
# The docstrings below are what the LLM reads when deciding WHICH tool to
# call, so they describe the parameters in plain language.
# =============================================================================
class ConferenceTools:
    """MCP tool and resource handlers bound to one feed client."""

    def __init__(self, client: EventSourceClient):
        self.client = client

    def _load(self) -> list[Event]:
        events = self.client.fetch_events()
        _log_status(f"Loaded {len(events)} events from the feed")
        return events

    def search_events(
        self,
        query: str = "",
        location: str = "",
        fromDate: str = "",
        toDate: str = "",
        hasOpenCFP: bool = False,
        cfpFromDate: str = "",
        cfpToDate: str = "",
        limit: int = 0,
    ) -> str:
        """Search developer conferences and events.

        All parameters are optional and combine with AND. Parameter names
        are camelCase because they are the tool's wire names.

        Args:
            query: Text to look for in the event name, location, city,
                country or misc notes (case-insensitive).
            location: Only events whose location contains this text.
            fromDate: Only events starting on or after this date (YYYY-MM-DD).
            toDate: Only events starting on or before this date (YYYY-MM-DD).
            hasOpenCFP: Only events whose Call for Papers is open now.
            cfpFromDate: Only events whose CFP closes on or after this date
                (YYYY-MM-DD).
            cfpToDate: Only events whose CFP closes on or before this date
                (YYYY-MM-DD).
            limit: Maximum number of events to return (0 = no limit).

        Returns:
            A JSON array of events, or an error message.
        """
        _log_request("search_events", query=query, location=location,
                     fromDate=fromDate, toDate=toDate,
                     hasOpenCFP=hasOpenCFP, cfpFromDate=cfpFromDate,
                     cfpToDate=cfpToDate, limit=limit)

        try:
            events = self._load()
        except ConferenceFeedError as e:
            _log_status(f"Feed unavailable: {e}")
            return _log_response("search_events", f"Error fetching events: {e}")

        try:
            criteria = EventFilter.from_params(
                query=query,
                location=location,
                from_date=fromDate,
                to_date=toDate,
                has_open_cfp=hasOpenCFP,
                cfp_from_date=cfpFromDate,
                cfp_to_date=cfpToDate,
                limit=limit,
            )
        except InvalidDateError as e:
            _log_status(f"Rejected {e.option}={e.value!r}")
            return _log_response("search_events", f"Invalid {e.option} format: {e}")

        matched = filter_events(events, criteria)
        _log_status(f"{len(matched)} events matched")
        return _log_response("search_events", render_events(matched))

    def open_cfps(self, limit: int = 0) -> str:
        """Get events whose Call for Papers (CFP) is open right now.

        An open CFP has a submission link and a deadline in the future.

        Args:
            limit: Maximum number of events to return (0 = no limit).

        Returns:
            A JSON array of events, or an error message.
        """
        _log_request("open_cfps", limit=limit)

        try:
            events = self._load()
        except ConferenceFeedError as e:
            return _log_response("open_cfps", f"Error fetching events: {e}")

        return _log_response("open_cfps", render_events(open_cfps(events, limit)))

    def upcoming_events(self, limit: int = 0) -> str:
        """Get developer conferences that haven't started yet.

        Args:
            limit: Maximum number of events to return (0 = no limit).

        Returns:
            A JSON array of events in feed order, or an error message.
        """
        _log_request("upcoming_events", limit=limit)

        try:
            events = self._load()
        except ConferenceFeedError as e:
            return _log_response("upcoming_events", f"Error fetching events: {e}")

        return _log_response("upcoming_events", render_events(upcoming_events(events, limit)))

    def cfp_deadlines_soon(self, days: int = DEFAULT_DEADLINE_DAYS) -> str:
        """Get events whose CFP deadline falls within the next N days.

        Args:
            days: Size of the look-ahead window in days.  Values of 0 or
                less mean 30.

        Returns:
            A JSON array of events, or an error message.
        """
        _log_request("cfp_deadlines_soon", days=days)

        try:
            events = self._load()
        except ConferenceFeedError as e:
            return _log_response("cfp_deadlines_soon", f"Error fetching events: {e}")

        return _log_response("cfp_deadlines_soon", render_events(cfp_deadlines_soon(events, days)))

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    def all_events(self) -> str:
        """All developer conferences and events."""
        try:
            return render_events(self._load())
        except ConferenceFeedError as e:
            raise ResourceError(f"Error fetching events: {e}") from e

    def open_cfp_events(self) -> str:
        """Events with open Call for Papers."""
        try:
            return render_events(open_cfps(self._load()))
        except ConferenceFeedError as e:
            raise ResourceError(f"Error fetching events: {e}") from e


# =============================================================================
# Server factory
# =============================================================================
def create_server(settings: Settings | None = None) -> FastMCP:
    """Build the FastMCP server with every tool and resource registered."""
    settings = settings or load_settings()
    handlers = ConferenceTools(EventSourceClient(settings.feed_url))

    server = FastMCP("developers-conferences-agenda")

    server.tool(name="search_events")(handlers.search_events)
    server.tool(name="open_cfps")(handlers.open_cfps)
    server.tool(name="upcoming_events")(handlers.upcoming_events)
    server.tool(name="cfp_deadlines_soon")(handlers.cfp_deadlines_soon)

    server.resource(
        "events://all",
        name="all_events",
        description="All developer conferences and events",
        mime_type="application/json",
    )(handlers.all_events)
    server.resource(
        "events://open-cfps",
        name="open_cfps",
        description="Events with open Call for Papers",
        mime_type="application/json",
    )(handlers.open_cfp_events)

    return server


def main() -> None:
    """Console entry point: serve over stdio."""
    load_dotenv()
    settings = load_settings()
    _configure_logging(settings.log_level)
    logger.info(f"Serving events from {settings.feed_url}")
    create_server(settings).run()


# =============================================================================
# Server entry point
# =============================================================================
# When run directly (python -m tools.mcp_server), start the MCP server.
# The agent connects to this server via stdio transport.
# =============================================================================
if __name__ == "__main__":
    main()
