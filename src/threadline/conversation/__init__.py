"""Conversation store module for threadline.

Tracks parallel conversation threads and the single in-flight reply request.
"""

from .base import ConversationStore
from .factory import create_conversation_store
from .in_memory import InMemoryConversationStore
from .models import Conversation, Message, MessageRole, PendingRequest

__all__ = [
    "Conversation",
    "ConversationStore",
    "InMemoryConversationStore",
    "Message",
    "MessageRole",
    "PendingRequest",
    "create_conversation_store",
]
