"""
Threadline: a chat client core with parallel conversation threads.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .agent import (
    ReplyClient,
    ReplyRequest,
    ReplyResponse,
    create_reply_client,
)
from .conversation import (
    Conversation,
    ConversationStore,
    Message,
    MessageRole,
    create_conversation_store,
)

__all__ = [
    "Conversation",
    "ConversationStore",
    "Message",
    "MessageRole",
    "ReplyClient",
    "ReplyRequest",
    "ReplyResponse",
    "create_conversation_store",
    "create_reply_client",
]
