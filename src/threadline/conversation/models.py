"""Data models for conversation threads.

These models define the structure of messages, conversations and the
request slot, independent of the store backend used.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7

from ..agent.models import HistoryEntry
from ..config import PLACEHOLDER_TITLE


def new_id() -> str:
    """Generate a time-ordered identifier (UUIDv7)."""
    return str(uuid7())


class MessageRole(str, Enum):
    """Sender of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single turn within a conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Unique, creation-ordered identifier")
    role: MessageRole = Field(description="Who sent the message")
    content: str = Field(description="Text of the message")
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_history_entry(self) -> HistoryEntry:
        """Translate to the reply service's role vocabulary."""
        role = "user" if self.role == MessageRole.USER else "assistant"
        return HistoryEntry(role=role, content=self.content)


class Conversation(BaseModel):
    """A titled, append-only thread of messages.

    Conversations are immutable snapshots. The store records every change
    by replacing its snapshot with an updated copy, so objects handed to
    readers never change underneath them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Stable conversation identifier")
    title: str = Field(default=PLACEHOLDER_TITLE)
    messages: tuple[Message, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=datetime.now)

    def with_message(self, message: Message) -> "Conversation":
        """Return a copy with ``message`` appended."""
        return self.model_copy(update={"messages": (*self.messages, message)})

    def with_title(self, title: str) -> "Conversation":
        """Return a copy with a new title."""
        return self.model_copy(update={"title": title})

    def has_user_message(self) -> bool:
        """Check whether any user message has been appended."""
        return any(message.role == MessageRole.USER for message in self.messages)

    def history(self) -> list[HistoryEntry]:
        """Get all messages in the reply service's wire format, oldest first."""
        return [message.to_history_entry() for message in self.messages]

    def last_message(self) -> Message | None:
        """Get the most recent message, if any."""
        return self.messages[-1] if self.messages else None


class PendingRequest(BaseModel):
    """The single outstanding reply request.

    The store holds either None (idle) or one of these (pending).
    """

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(default_factory=new_id)
    conversation_id: str = Field(description="Conversation the reply must land in")
    issued_at: datetime = Field(default_factory=datetime.now)
