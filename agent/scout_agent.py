# =============================================================================
# agent/scout_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the Google ADK agent that answers questions about developer
#   conferences.  The agent has no data access of its own: every fact comes
#   from the MCP tool server in tools/mcp_server.py.
#
#   ┌──────────────────────────────────────────────────────────────┐
#   │                      Google ADK Agent                        │
#   │   System prompt ──▶  LLM (via LiteLlm) ──▶  MCP toolset      │
#   └──────────────────────────────────────────────────────────────┘
#                                                      │ stdio
#                                                      ▼
#                                      ┌───────────────────────────┐
#                                      │  FastMCP server           │
#                                      │  (tools/mcp_server)       │
#                                      │  • search_events          │
#                                      │  • open_cfps              │
#                                      │  • upcoming_events        │
#                                      │  • cfp_deadlines_soon     │
#                                      └───────────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess and talks to it over
#   stdin/stdout.  We launch it with "uv run" so the subprocess uses the
#   project's .venv, and set cwd to the project root so "-m tools.mcp_server"
#   resolves.  The feed URL and log level reach the subprocess through the
#   environment it inherits.
#
# MODEL:
#   The LiteLlm model string comes from Settings.agent_model (AGENT_MODEL),
#   defaulting to "openrouter/openai/gpt-4o".  LiteLlm reads the provider's
#   API key (e.g. OPENROUTER_API_KEY) from the environment.
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_scout_prompt
from core.config import Settings, load_settings


def _project_root() -> str:
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_mcp_toolset() -> MCPToolset:
    """Connection to the conference tool server, spawned over stdio."""
    return MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "tools.mcp_server"],
            cwd=_project_root(),
        ),
    )


def create_agent(settings: Settings | None = None) -> Agent:
    """Create and configure the conference scout agent.

    Args:
        settings: Resolved configuration.  Loaded from the environment when
            omitted.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or load_settings()

    return Agent(
        name="conference_scout",
        model=LiteLlm(model=settings.agent_model),
        instruction=get_scout_prompt(),
        tools=[create_mcp_toolset()],
    )
