"""Chat clients for Amazon Bedrock.

Isolates every provider-specific request and response shape behind one
streaming interface.

Responsibilities:
    - Configuration loading from the environment
    - Converse API streaming via boto3 (text and PDF documents)
    - Agno agent streaming on AwsBedrock (text only)
    - Client selection and process-wide reuse
"""

from pdfchat.agent.client import (
    ChatClient,
    ChatClientError,
    UnsupportedContentError,
    create_chat_client,
    get_chat_client,
)
from pdfchat.agent.config import ChatConfig, get_chat_config

__all__ = [
    "ChatClient",
    "ChatClientError",
    "ChatConfig",
    "UnsupportedContentError",
    "create_chat_client",
    "get_chat_client",
    "get_chat_config",
]
