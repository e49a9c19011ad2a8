# =============================================================================
# core/config.py  -  Runtime configuration
# =============================================================================
#
# Every knob lives in an environment variable so the MCP server (which is
# spawned as a subprocess by the agent) and the agent itself read the same
# values.  main.py and tools/mcp_server.py call load_dotenv() first, so a
# local .env file works too.
#
#   CONFERENCES_FEED_URL   where the event JSON lives
#   LOG_LEVEL              logging level name for the tool server
#   AGENT_MODEL            LiteLlm model string used by the agent
#
# Settings is frozen and handed to whoever needs it (e.g. the feed URL goes
# into EventSourceClient's constructor).  Nothing reads os.environ at call
# time, so tests can build their own Settings without touching globals.
# =============================================================================

import os
from dataclasses import dataclass

DEFAULT_FEED_URL = "https://developers.events/all-events.json"
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    feed_url: str = DEFAULT_FEED_URL
    log_level: str = "INFO"
    agent_model: str = DEFAULT_AGENT_MODEL


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Returns:
        A Settings instance; unset or blank variables fall back to defaults.
    """
    env = os.environ if environ is None else environ

    return Settings(
        feed_url=env.get("CONFERENCES_FEED_URL", "").strip() or DEFAULT_FEED_URL,
        log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
        agent_model=env.get("AGENT_MODEL", "").strip() or DEFAULT_AGENT_MODEL,
    )
