"""Conversation state and history handling.

Responsibilities:
    - Ordered turn list with one open assistant turn at a time
    - Submit flow: attachment reading, user/assistant turn creation, streaming
    - Change notifications for incremental rendering
    - Re-serialization of stored turns for the next request
"""

from pdfchat.conversation.history import to_chat_message, to_chat_messages
from pdfchat.conversation.state import (
    ERROR_PREFIX,
    FILE_PROCESSING_ERROR,
    STREAM_ERROR_FALLBACK,
    Conversation,
    ConversationEvent,
    PendingAttachment,
)

__all__ = [
    "ERROR_PREFIX",
    "FILE_PROCESSING_ERROR",
    "STREAM_ERROR_FALLBACK",
    "Conversation",
    "ConversationEvent",
    "PendingAttachment",
    "to_chat_message",
    "to_chat_messages",
]
