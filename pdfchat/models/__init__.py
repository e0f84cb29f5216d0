"""Pydantic models for turns, documents and chat requests.

Provides type safety and validation for everything that flows between the
conversation state machine and the chat clients.

Models:
    - Turn: One message in the conversation (user or assistant)
    - Document / DocumentContent: An attached PDF and its accompanying text
    - ChatMessage: Provider-neutral message made of text and document blocks
    - ChatRequest: System prompt, history and inference parameters for one call
"""

from pdfchat.models.schemas import (
    DEFAULT_DOCUMENT_PROMPT,
    ChatMessage,
    ChatRequest,
    ChatState,
    ContentBlock,
    Document,
    DocumentBlock,
    DocumentContent,
    InferenceParams,
    Role,
    TextBlock,
    Turn,
)

__all__ = [
    "DEFAULT_DOCUMENT_PROMPT",
    "ChatMessage",
    "ChatRequest",
    "ChatState",
    "ContentBlock",
    "Document",
    "DocumentBlock",
    "DocumentContent",
    "InferenceParams",
    "Role",
    "TextBlock",
    "Turn",
]
