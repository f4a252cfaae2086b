from typing import Any

from .base import ReplyClient
from .providers import HttpReplyClient, OpenAIReplyClient


def create_reply_client(kind: str = "http", **config: Any) -> ReplyClient:
    """Create a reply client instance.

    This factory function hides the instantiation logic for different clients.

    Args:
        kind: Client type ('http', 'openai')
        **config: Client-specific configuration
            For HTTP:
                - base_url: str (default: 'http://localhost:3000')
                - path: str (default: '/api/agent')
                - timeout: float (default: 60.0)
                - headers: dict[str, str] | None
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
                - system_prompt: str | None

    Returns:
        Initialized reply client instance

    Raises:
        ValueError: If client type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_reply_client("http", base_url="http://localhost:3000")

        >>> client = create_reply_client(
        ...     "openai",
        ...     api_key="sk-...",
        ...     model="gpt-4o-mini"
        ... )
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        return HttpReplyClient(**config)

    if kind_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI client requires 'api_key' in config")
        return OpenAIReplyClient(**config)

    raise ValueError(
        f"Unsupported reply client: {kind}. "
        f"Supported clients: 'http', 'openai'"
    )
