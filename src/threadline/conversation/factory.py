"""Factory for creating conversation stores."""

from typing import Any

from ..agent import ReplyClient
from .base import ConversationStore


def create_conversation_store(
    client: ReplyClient,
    backend: str = "memory",
    **kwargs: Any
) -> ConversationStore:
    """Create a conversation store.

    Args:
        client: Reply client used to answer user messages
        backend: Backend type ("memory")
        **kwargs: Backend-specific configuration (agent_id, greeting, title_max_length)

    Returns:
        ConversationStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryConversationStore
        return InMemoryConversationStore(client, **kwargs)

    raise ValueError(
        f"Unsupported conversation store backend: {backend}. "
        f"Supported backends: memory"
    )
