"""Interactive chat session for the CLI.

Reads store state after every operation and renders it with Rich. The
session only invokes store operations; it never edits conversations.
"""

from rich.console import Console
from rich.table import Table

from ..config import DATE_FORMAT, TIMESTAMP_FORMAT, TITLE_COLUMN_WIDTH
from ..conversation import Conversation, ConversationStore, Message, MessageRole

HELP_TEXT = """[bold]Commands[/bold]
  /new          Start a new conversation
  /list         List conversations (newest first)
  /switch N     Switch to conversation N from /list
  /delete N     Delete conversation N from /list
  /history      Show the active conversation
  /help         Show this help
  /quit         Leave the chat
Anything else is sent to the assistant. Start a line with // to send
a message that begins with a command name, e.g. //new."""

QUIT_COMMANDS = ("/quit", "/exit", "/q")
COMMANDS = frozenset((*QUIT_COMMANDS, "/help", "/new", "/list", "/history", "/switch", "/delete"))


class ChatSession:
    """Drives a conversation store from typed input lines."""

    def __init__(self, store: ConversationStore, console: Console) -> None:
        self.store = store
        self.console = console

    def render_message(self, message: Message) -> None:
        time_str = message.timestamp.strftime(TIMESTAMP_FORMAT)
        if message.role == MessageRole.USER:
            self.console.print(f"[bold yellow]You[/bold yellow] [dim]{time_str}[/dim]")
        else:
            self.console.print(f"[bold cyan]Assistant[/bold cyan] [dim]{time_str}[/dim]")
        self.console.print(message.content, markup=False, highlight=False)
        self.console.print()

    def render_conversation(self, conversation: Conversation) -> None:
        self.console.print(f"[bold magenta]{conversation.title}[/bold magenta]\n", highlight=False)
        for message in conversation.messages:
            self.render_message(message)

    def render_list(self) -> None:
        table = Table(title="Conversations")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Title", max_width=TITLE_COLUMN_WIDTH, overflow="ellipsis")
        table.add_column("Created", style="dim")
        table.add_column("Messages", justify="right")

        for index, conversation in enumerate(self.store.conversations, 1):
            marker = "*" if conversation.id == self.store.active_id else ""
            table.add_row(
                f"{marker}{index}",
                conversation.title,
                conversation.created_at.strftime(DATE_FORMAT),
                str(len(conversation.messages)),
            )

        self.console.print(table)

    def _resolve_index(self, argument: str) -> str | None:
        """Map a 1-based /list position to a conversation id."""
        try:
            position = int(argument)
        except ValueError:
            self.console.print(f"[red]Not a conversation number: {argument}[/red]")
            return None

        conversations = self.store.conversations
        if not 1 <= position <= len(conversations):
            self.console.print(f"[red]No conversation #{position}[/red]")
            return None
        return conversations[position - 1].id

    async def handle(self, line: str) -> bool:
        """Handle one line of input.

        Returns:
            False when the session should end, True otherwise
        """
        stripped = line.strip()
        if not stripped:
            return True

        if stripped.startswith("//"):
            await self.send(line.replace("/", "", 1))
            return True

        command, _, argument = stripped.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command not in COMMANDS:
            await self.send(line)
            return True

        if command in QUIT_COMMANDS:
            return False

        if command == "/help":
            self.console.print(HELP_TEXT)
        elif command == "/new":
            self.render_conversation(self.store.create_conversation())
        elif command == "/list":
            self.render_list()
        elif command == "/history":
            conversation = self.store.active_conversation
            if conversation is not None:
                self.render_conversation(conversation)
        elif not argument:
            self.console.print(f"[red]Usage: {command} N[/red]")
        else:
            conversation_id = self._resolve_index(argument)
            if conversation_id is None:
                return True
            if command == "/switch":
                self.store.select_conversation(conversation_id)
                self.render_conversation(self.store.active_conversation)
            else:
                self.store.delete_conversation(conversation_id)
                self.console.print("[dim]Conversation deleted.[/dim]")
                self.render_list()

        return True

    async def send(self, text: str) -> Message | None:
        """Send a message and render the reply."""
        if self.store.busy:
            return None

        with self.console.status("[dim]Thinking...[/dim]"):
            reply = await self.store.send_message(text)

        if reply is not None:
            self.render_message(reply)
        return reply
