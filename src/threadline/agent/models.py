from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import ReplyFormatError


class HistoryEntry(BaseModel):
    """A prior conversation turn in the collaborator's role vocabulary."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Role of the message sender")
    content: str = Field(description="Content of the message")


class ReplyRequest(BaseModel):
    """Request sent to the reply-generation service."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="The new user message")
    agent_id: str = Field(description="Identifier of the agent that should answer")
    conversation_history: list[HistoryEntry] = Field(
        default_factory=list,
        description="Messages preceding the new one, oldest first"
    )


class ReplyResponse(BaseModel):
    """Response from the reply-generation service.

    ``response`` is None when the payload carried no usable text; callers
    substitute a fallback message rather than treating it as an error.
    """

    model_config = ConfigDict(frozen=True)

    response: str | None = Field(default=None, description="Generated reply text")

    @classmethod
    def from_payload(cls, payload: Any) -> "ReplyResponse":
        """Build a response from a decoded JSON body.

        Args:
            payload: Decoded JSON value

        Returns:
            ReplyResponse, with ``response`` set only if the payload holds a string

        Raises:
            ReplyFormatError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise ReplyFormatError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        text = payload.get("response")
        return cls(response=text if isinstance(text, str) else None)
