import logging
import time
from typing import Any

import httpx

from ...config import DEFAULT_AGENT_PATH, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..base import ReplyClient
from ..errors import ReplyFormatError, ReplyTransportError
from ..models import ReplyRequest, ReplyResponse

logger = logging.getLogger(__name__)


class HttpReplyClient(ReplyClient):
    """Reply client for a JSON agent endpoint over HTTP.

    Hidden design decisions:
    - HTTP client initialization and connection reuse
    - Request body encoding and response decoding
    - Mapping of httpx errors to ReplyError subclasses
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        path: str = DEFAULT_AGENT_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        **client_kwargs: Any
    ):
        """Initialize HTTP reply client.

        Args:
            base_url: Base URL of the service (e.g. http://localhost:3000)
            path: Path of the agent endpoint
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._path = path
        self._endpoint = base_url.rstrip("/") + path
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json", **(headers or {})},
            **client_kwargs
        )

    @property
    def endpoint(self) -> str:
        """Get the full endpoint URL."""
        return self._endpoint

    async def generate_reply(self, request: ReplyRequest) -> ReplyResponse:
        """POST the request to the agent endpoint.

        The body is decoded whatever the status code: an error status whose
        body is a JSON object without a ``response`` string yields an empty
        ReplyResponse, not an exception.

        Args:
            request: Reply request

        Returns:
            ReplyResponse parsed from the JSON body

        Raises:
            ReplyTransportError: On network errors
            ReplyFormatError: If the body is not a JSON object
        """
        start_time = time.monotonic()
        try:
            response = await self._client.post(self._path, json=request.model_dump())
        except httpx.HTTPError as exc:
            raise ReplyTransportError(f"Agent request failed: {exc}") from exc

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.is_error:
            logger.warning(
                "Agent endpoint returned status %d after %dms",
                response.status_code,
                duration_ms
            )
        else:
            logger.debug(
                "Agent reply received in %dms (status %d)",
                duration_ms,
                response.status_code
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ReplyFormatError(
                f"Agent response is not valid JSON: {exc}",
                status_code=response.status_code
            ) from exc

        try:
            return ReplyResponse.from_payload(payload)
        except ReplyFormatError as exc:
            exc.status_code = response.status_code
            raise

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
