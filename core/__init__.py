# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the conference feed:
#
#   models.py      Event / CFPInfo dataclasses
#   errors.py      FetchError, ParseError, InvalidDateError
#   config.py      Settings loaded from the environment
#   source.py      EventSourceClient (the one HTTP GET)
#   normalizer.py  raw bytes -> list[Event] with derived dates
#   filters.py     the filter engine and its derived queries
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any
#   orchestration framework.  It is plain Python and can be tested offline.
# =============================================================================
