"""Threadline configuration constants.

Centralizes the fixed texts, limits and defaults used by the conversation
store, the reply clients and the CLI.
"""

import logging
from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity accepted by the CLI's --log-level option."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> int:
        """Numeric level understood by the logging module."""
        return getattr(logging, self.name)


# Conversation titles
PLACEHOLDER_TITLE = "New Conversation"
TITLE_MAX_LENGTH = 30  # Characters kept from the first user message

# Synthesized assistant texts
GREETING_MESSAGE = (
    "Hello! I'm your AI assistant. How can I help you today? "
    "Feel free to ask me questions, request information, or just chat "
    "about anything you'd like."
)
EMPTY_REPLY_MESSAGE = (
    "I apologize, but I encountered an issue processing your request. "
    "Please try again."
)
ERROR_REPLY_MESSAGE = (
    "Sorry, I encountered an error while processing your message. "
    "Please try again."
)

# Reply-generation endpoint
DEFAULT_AGENT_ID = "693152c28f91bb17ff415d58"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_AGENT_PATH = "/api/agent"
DEFAULT_TIMEOUT = 60.0  # Seconds, enforced by the HTTP client only

# OpenAI-compatible client
DEFAULT_CHAT_MODEL = "gpt-4o-mini"

# CLI display
TITLE_COLUMN_WIDTH = 40
TIMESTAMP_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"
