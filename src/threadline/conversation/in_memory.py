"""In-memory conversation store.

Conversations live for the lifetime of the process and are lost when the
application exits.
"""

import logging

from ..agent import ReplyClient, ReplyRequest
from ..config import (
    DEFAULT_AGENT_ID,
    EMPTY_REPLY_MESSAGE,
    ERROR_REPLY_MESSAGE,
    GREETING_MESSAGE,
    PLACEHOLDER_TITLE,
    TITLE_MAX_LENGTH,
)
from .base import ConversationStore
from .models import Conversation, Message, MessageRole, PendingRequest

logger = logging.getLogger(__name__)


class InMemoryConversationStore(ConversationStore):
    """In-memory conversation store (session-only).

    Holds every conversation newest-first, the active conversation's id and
    a single request slot. At most one reply request is outstanding at any
    time; ``send_message`` refuses new input while the slot is taken.
    Every change replaces the stored Conversation snapshot with a new copy.
    """

    def __init__(
        self,
        client: ReplyClient,
        agent_id: str = DEFAULT_AGENT_ID,
        greeting: str = GREETING_MESSAGE,
        title_max_length: int = TITLE_MAX_LENGTH,
    ):
        self._client = client
        self._agent_id = agent_id
        self._greeting = greeting
        self._title_max_length = title_max_length
        self._conversations: list[Conversation] = []
        self._active_id: str | None = None
        self._pending: PendingRequest | None = None

    @property
    def conversations(self) -> tuple[Conversation, ...]:
        return tuple(self._conversations)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def pending(self) -> PendingRequest | None:
        return self._pending

    @property
    def agent_id(self) -> str:
        return self._agent_id

    @property
    def backend_type(self) -> str:
        return "memory"

    def __len__(self) -> int:
        return len(self._conversations)

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def create_conversation(self) -> Conversation:
        conversation = Conversation(
            messages=[Message(role=MessageRole.ASSISTANT, content=self._greeting)]
        )
        self._conversations.insert(0, conversation)
        self._active_id = conversation.id
        logger.info("Created conversation %s", conversation.id)
        return conversation

    def ensure_conversation(self) -> Conversation:
        active = self.active_conversation
        if active is not None:
            return active
        if self._conversations:
            self._active_id = self._conversations[0].id
            return self._conversations[0]
        return self.create_conversation()

    def select_conversation(self, conversation_id: str) -> bool:
        if self.get_conversation(conversation_id) is None:
            logger.debug("Ignoring selection of unknown conversation %s", conversation_id)
            return False
        self._active_id = conversation_id
        logger.info("Selected conversation %s", conversation_id)
        return True

    def delete_conversation(self, conversation_id: str) -> bool:
        conversation = self.get_conversation(conversation_id)
        if conversation is None:
            logger.debug("Ignoring deletion of unknown conversation %s", conversation_id)
            return False

        self._conversations.remove(conversation)
        logger.info("Deleted conversation %s", conversation_id)

        if self._active_id == conversation_id:
            if self._conversations:
                self._active_id = self._conversations[0].id
            else:
                self._active_id = None
                self.create_conversation()
        return True

    async def send_message(self, text: str) -> Message | None:
        """Send a user message and wait for the assistant's reply.

        The user message, the title update and the request slot are all
        applied before the first suspension point, so readers never see a
        partial turn. The reply is appended to the conversation that issued
        the request, looked up by id when the reply arrives, even if another
        conversation became active in the meantime.

        Args:
            text: Message text; sent as given, but rejected if blank

        Returns:
            The appended assistant message, or None if the input was
            rejected or the originating conversation was deleted
        """
        if not text.strip():
            logger.debug("Rejected blank message")
            return None

        conversation = self.active_conversation
        if conversation is None:
            logger.debug("Rejected message: no active conversation")
            return None

        if self._pending is not None:
            logger.debug("Rejected message: request %s still pending", self._pending.request_id)
            return None

        request = ReplyRequest(
            message=text,
            agent_id=self._agent_id,
            conversation_history=conversation.history(),
        )

        is_first_user_message = not conversation.has_user_message()
        updated = conversation.with_message(Message(role=MessageRole.USER, content=text))
        if is_first_user_message and conversation.title == PLACEHOLDER_TITLE:
            updated = updated.with_title(text[:self._title_max_length])
        self._replace(updated)

        pending = PendingRequest(conversation_id=conversation.id)
        self._pending = pending

        try:
            reply_text = await self._request_reply(request)
            return self._append_reply(pending.conversation_id, reply_text)
        finally:
            self._release(pending)

    async def _request_reply(self, request: ReplyRequest) -> str:
        """Call the reply client, mapping every failure to the error text."""
        try:
            response = await self._client.generate_reply(request)
        except Exception:
            logger.exception("Reply generation failed for agent %s", request.agent_id)
            return ERROR_REPLY_MESSAGE

        if not response.response:
            logger.warning("Reply contained no text; using fallback message")
            return EMPTY_REPLY_MESSAGE
        return response.response

    def _append_reply(self, conversation_id: str, text: str) -> Message | None:
        conversation = self.get_conversation(conversation_id)
        if conversation is None:
            logger.warning("Dropping reply for deleted conversation %s", conversation_id)
            return None

        message = Message(role=MessageRole.ASSISTANT, content=text)
        self._replace(conversation.with_message(message))
        return message

    def _replace(self, conversation: Conversation) -> None:
        for index, existing in enumerate(self._conversations):
            if existing.id == conversation.id:
                self._conversations[index] = conversation
                return

    def _release(self, pending: PendingRequest) -> None:
        if self._pending is not None and self._pending.request_id == pending.request_id:
            self._pending = None
