"""Pytest configuration and shared fixtures."""
import logging
import os

import pytest

from fakes import FailingReplyClient, GatedReplyClient, StaticReplyClient
from threadline.conversation import InMemoryConversationStore


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture(scope="session")
def agent_service_url():
    """Return the URL of a running agent service, if any."""
    return os.getenv("THREADLINE_BASE_URL")


@pytest.fixture
def static_client():
    """Client that always replies "Hi"."""
    return StaticReplyClient("Hi")


@pytest.fixture
def failing_client():
    """Client whose requests always fail."""
    return FailingReplyClient()


@pytest.fixture
def gated_client():
    """Client whose requests stay pending until released."""
    return GatedReplyClient("Hi")


@pytest.fixture
def store(static_client):
    """Store with one conversation, answered by the static client."""
    store = InMemoryConversationStore(static_client)
    store.create_conversation()
    return store


@pytest.fixture
def restore_package_logger():
    """Undo handler changes made by setup_logging."""
    logger = logging.getLogger("threadline")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
