import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from ...config import DEFAULT_CHAT_MODEL
from ..base import ReplyClient
from ..errors import ReplyTransportError
from ..models import ReplyRequest, ReplyResponse

logger = logging.getLogger(__name__)


def _request_to_messages(
    request: ReplyRequest,
    system_prompt: str | None = None
) -> list[dict[str, str]]:
    """Convert a reply request to Chat Completions messages.

    Returns:
        List of message dicts: optional system prompt, history, then the new message
    """
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.extend(
        {"role": entry.role, "content": entry.content}
        for entry in request.conversation_history
    )
    messages.append({"role": "user", "content": request.message})
    return messages


class OpenAIReplyClient(ReplyClient):
    """Reply client backed by an OpenAI-compatible chat model.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_CHAT_MODEL,
        base_url: str | None = None,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        **client_kwargs: Any
    ):
        """Initialize OpenAI reply client.

        Args:
            api_key: OpenAI API key
            model: Chat model to use
            base_url: Optional custom API base URL (for compatible services)
            system_prompt: Optional instructions sent before the history
            temperature: Sampling temperature
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the chat model name."""
        return self._model

    async def generate_reply(self, request: ReplyRequest) -> ReplyResponse:
        """Generate a reply with a chat completion.

        The agent id has no meaning to the chat model; it is only logged
        so replies can be correlated with the agent that was asked.
        """
        logger.debug("Requesting completion from %s for agent %s", self._model, request.agent_id)

        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=_request_to_messages(request, self._system_prompt),
                temperature=self._temperature,
            )
        except OpenAIError as exc:
            raise ReplyTransportError(f"Chat completion failed: {exc}") from exc

        if not completion.choices:
            return ReplyResponse(response=None)
        return ReplyResponse(response=completion.choices[0].message.content or None)

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
