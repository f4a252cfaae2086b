"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from .. import __version__
from ..config import LogLevel
from ..conversation import create_conversation_store
from ..logging_config import setup_logging
from .providers import get_agent_id, get_reply_client
from .session import HELP_TEXT, ChatSession

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="threadline",
    help="Terminal chat client with parallel conversation threads",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    client: str | None = typer.Option(
        None,
        "--client",
        "-c",
        help="Reply client to use: http or openai (default: $THREADLINE_CLIENT or http)"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Base URL of the reply service"
    ),
    agent_id: str | None = typer.Option(
        None,
        "--agent-id",
        "-a",
        help="Agent identifier sent with every request"
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING,
        "--log-level",
        "-l",
        case_sensitive=False,
        help="Log level"
    ),
):
    """Chat interactively, with multiple conversation threads."""
    setup_logging(log_level)

    async def _chat():
        reply_client = get_reply_client(kind=client, base_url=base_url, console=console)

        try:
            store = create_conversation_store(reply_client, agent_id=get_agent_id(agent_id))
            session = ChatSession(store, console)

            console.print(Panel.fit(
                "[bold cyan]Threadline[/bold cyan]\n[dim]Type /help for commands, /quit to leave[/dim]"
            ))
            session.render_conversation(store.ensure_conversation())

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not await session.handle(user_input):
                    console.print("[dim]Goodbye![/dim]")
                    break
        finally:
            await reply_client.close()

    asyncio.run(_chat())


@app.command()
def commands():
    """Show the commands available inside a chat."""
    console.print(HELP_TEXT)


@app.command()
def version():
    """Show the threadline version."""
    console.print(f"threadline {__version__}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
