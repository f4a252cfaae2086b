"""Provider factory functions for CLI.

Centralizes creation of the reply client from environment variables.
Hides configuration details from command implementations.
"""

import os

from rich.console import Console

from ..agent import ReplyClient, create_reply_client
from ..config import (
    DEFAULT_AGENT_ID,
    DEFAULT_AGENT_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_MODEL,
    DEFAULT_TIMEOUT,
)

# Default console for output
_console = Console()


def get_agent_id(override: str | None = None) -> str:
    """Resolve the agent identifier.

    Environment variables:
        THREADLINE_AGENT_ID: Agent identifier (default: built-in agent id)
    """
    return override or os.getenv("THREADLINE_AGENT_ID", DEFAULT_AGENT_ID)


def get_reply_client(
    kind: str | None = None,
    base_url: str | None = None,
    console: Console | None = None
) -> ReplyClient:
    """Create reply client from environment variables.

    Args:
        kind: Client type, overriding THREADLINE_CLIENT
        base_url: Base URL, overriding THREADLINE_BASE_URL / OPENAI_BASE_URL
        console: Optional Rich console for output

    Returns:
        Reply client instance

    Raises:
        SystemExit: If the client type is unknown or required keys are missing

    Environment variables:
        THREADLINE_CLIENT: Client type (http, openai; default: http)
        THREADLINE_BASE_URL: Agent service URL (default: http://localhost:3000)
        THREADLINE_AGENT_PATH: Agent endpoint path (default: /api/agent)
        THREADLINE_TIMEOUT: Request timeout in seconds (default: 60)
        OPENAI_API_KEY: OpenAI API key (for openai client)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        OPENAI_BASE_URL: OpenAI-compatible API URL (optional)
        THREADLINE_SYSTEM_PROMPT: System prompt for the openai client (optional)
    """
    import typer

    con = console or _console
    client_kind = (kind or os.getenv("THREADLINE_CLIENT", "http")).lower()

    if client_kind == "http":
        try:
            timeout = float(os.getenv("THREADLINE_TIMEOUT", str(DEFAULT_TIMEOUT)))
        except ValueError:
            con.print("[red]Error: THREADLINE_TIMEOUT must be a number[/red]")
            raise typer.Exit(code=1)
        return create_reply_client(
            "http",
            base_url=base_url or os.getenv("THREADLINE_BASE_URL", DEFAULT_BASE_URL),
            path=os.getenv("THREADLINE_AGENT_PATH", DEFAULT_AGENT_PATH),
            timeout=timeout,
        )

    if client_kind == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[red]Error: OPENAI_API_KEY not set in environment[/red]")
            raise typer.Exit(code=1)
        return create_reply_client(
            "openai",
            api_key=api_key,
            model=os.getenv("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL),
            base_url=base_url or os.getenv("OPENAI_BASE_URL"),
            system_prompt=os.getenv("THREADLINE_SYSTEM_PROMPT"),
        )

    con.print(f"[red]Error: Unknown reply client: {client_kind}[/red]")
    raise typer.Exit(code=1)
