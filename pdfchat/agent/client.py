"""Chat client interface and factory.

The conversation state machine only ever sees ``ChatClient.stream``; each
provider wrapper lives behind it, so swapping wrappers touches nothing else.
"""

import logging
from collections.abc import AsyncIterator
from typing import Protocol

from pdfchat.agent.config import ChatConfig, get_chat_config
from pdfchat.models.schemas import ChatRequest

logger = logging.getLogger(__name__)


class ChatClientError(Exception):
    """Raised when the model call fails for a reason the SDK did not raise."""


class UnsupportedContentError(ChatClientError):
    """Raised when a request holds content the client cannot send."""


class ChatClient(Protocol):
    """Streaming access to a hosted model."""

    supports_documents: bool

    def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Send a request and yield response text deltas in arrival order."""
        ...


def create_chat_client(config: ChatConfig) -> ChatClient:
    """Build the client wrapper selected by ``config.provider``.

    Args:
        config: Chat configuration.

    Returns:
        A ready ChatClient.
    """
    if config.provider == "agno":
        from pdfchat.agent.agno_client import AgnoBedrockClient

        client: ChatClient = AgnoBedrockClient(config)
    else:
        from pdfchat.agent.bedrock_client import BedrockConverseClient

        client = BedrockConverseClient(config)

    logger.info(f"Using {config.provider} client for model {config.model_id}")
    return client


# Module-level singleton instance
_chat_client: ChatClient | None = None


def get_chat_client() -> ChatClient:
    """Get or create the global chat client.

    Returns:
        The ChatClient instance.
    """
    global _chat_client
    if _chat_client is None:
        _chat_client = create_chat_client(get_chat_config())
    return _chat_client
