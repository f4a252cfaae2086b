from abc import ABC, abstractmethod
from typing import Any

from .models import ReplyRequest, ReplyResponse


class ReplyClient(ABC):
    """Abstract base class for reply-generation clients.

    This module hides the design decision of which service produces the
    assistant's replies. Implementations must handle:
    - Transport setup and authentication
    - Request/response format conversion
    - Mapping transport and parse failures to ReplyError subclasses

    Implementations do not retry; a failed request is reported once.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            response = await client.generate_reply(request)
        # Automatically cleaned up
    """

    @abstractmethod
    async def generate_reply(self, request: ReplyRequest) -> ReplyResponse:
        """Generate a reply for the given request.

        Args:
            request: New message, agent id and prior conversation history

        Returns:
            ReplyResponse; ``response`` is None if the service sent no usable text

        Raises:
            ReplyError: On transport or parse failures
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "ReplyClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
