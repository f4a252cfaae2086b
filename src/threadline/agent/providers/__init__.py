from .http import HttpReplyClient
from .openai import OpenAIReplyClient

__all__ = ["HttpReplyClient", "OpenAIReplyClient"]
