"""Abstract base class for conversation stores.

This module defines the interface the presentation layer uses to drive
conversations. The abstraction hides:
- Where conversations live
- How identifiers are generated
- How the single reply request is issued and resolved
"""

from abc import ABC, abstractmethod

from .models import Conversation, Message, PendingRequest


class ConversationStore(ABC):
    """Abstract conversation store.

    The presentation layer reads state after each operation completes and
    never mutates conversations or messages directly.
    """

    @abstractmethod
    def create_conversation(self) -> Conversation:
        """Create a conversation with a greeting and make it active."""

    @abstractmethod
    def ensure_conversation(self) -> Conversation:
        """Return the active conversation, creating one if the store is empty."""

    @abstractmethod
    def select_conversation(self, conversation_id: str) -> bool:
        """Make a conversation active. Returns False if it does not exist."""

    @abstractmethod
    def delete_conversation(self, conversation_id: str) -> bool:
        """Remove a conversation. Returns False if it does not exist."""

    @abstractmethod
    async def send_message(self, text: str) -> Message | None:
        """Append a user message and the assistant's reply to the active conversation."""

    @abstractmethod
    def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Look up a conversation by identifier."""

    @property
    @abstractmethod
    def conversations(self) -> tuple[Conversation, ...]:
        """All conversations, newest first."""

    @property
    @abstractmethod
    def active_id(self) -> str | None:
        """Identifier of the active conversation."""

    @property
    @abstractmethod
    def pending(self) -> PendingRequest | None:
        """The outstanding reply request, if any."""

    @property
    def active_conversation(self) -> Conversation | None:
        """The active conversation, if any."""
        if self.active_id is None:
            return None
        return self.get_conversation(self.active_id)

    @property
    def busy(self) -> bool:
        """Whether a reply request is outstanding."""
        return self.pending is not None

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
