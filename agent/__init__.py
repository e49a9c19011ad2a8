# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent is a coordinator.  It reads the user's question, decides
#   which conference tools to call (over MCP), and turns the JSON they
#   return into a readable answer.  It does no filtering itself: that
#   lives in core/, behind tools/.
# =============================================================================
