"""Reply-generation collaborator for threadline.

Hides which remote service turns a conversation into the assistant's next reply.
"""

from .base import ReplyClient
from .errors import ReplyError, ReplyFormatError, ReplyTransportError
from .factory import create_reply_client
from .models import HistoryEntry, ReplyRequest, ReplyResponse
from .providers import HttpReplyClient, OpenAIReplyClient

__all__ = [
    "ReplyClient",
    "create_reply_client",
    "HistoryEntry",
    "ReplyRequest",
    "ReplyResponse",
    "ReplyError",
    "ReplyFormatError",
    "ReplyTransportError",
    "HttpReplyClient",
    "OpenAIReplyClient",
]
