# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server that exposes core/ to agents.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and the business logic:
#     1. Calls core/ to fetch, normalize and filter events
#     2. Serializes the result to JSON text
#     3. Turns core errors into readable tool output
#
# It holds no business logic and knows nothing about Google ADK.
# =============================================================================
