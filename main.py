# =============================================================================
# main.py  -  Entry Point for the Conference Scout Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (API key, feed URL, model) into the environment
#   2. Creates the Google ADK agent (agent/scout_agent.py), which spawns the
#      MCP tool server (tools/mcp_server.py) as a subprocess
#   3. Reads questions from the terminal and streams the agent's answers,
#      printing each tool call as it happens
#
# EXAMPLE QUESTIONS:
#   "Which conferences in France have an open CFP?"
#   "Any Kubernetes events between 2026-03-01 and 2026-06-30?"
#   "What CFPs close in the next two weeks?"
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must happen BEFORE creating the agent: LiteLlm reads the provider API key
# from the environment when it initializes, and Settings reads the rest.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.scout_agent import create_agent
from core.config import load_settings

APP_NAME = "conference_scout"
USER_ID = "local_user"


async def run_agent():
    """Run the conference scout interactively until the user quits."""
    settings = load_settings()

    print("=" * 70)
    print("  CONFERENCE SCOUT")
    print(f"  Feed: {settings.feed_url}")
    print(f"  Model: {settings.agent_model}")
    print("=" * 70)
    print("\n🔧 Initializing agent...")

    agent = create_agent(settings)
    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about developer conferences and open CFPs.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        args = part.function_call.args or {}
                        print(f"  🔧 Calling tool: {part.function_call.name} {dict(args)}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
