"""Re-serialization of stored turns into provider-neutral chat messages."""

from collections.abc import Iterable

from pdfchat.models.schemas import (
    DEFAULT_DOCUMENT_PROMPT,
    ChatMessage,
    ContentBlock,
    Document,
    DocumentBlock,
    DocumentContent,
    TextBlock,
    Turn,
)
from pdfchat.parsing.filenames import sanitize_filename


def document_block(document: Document) -> DocumentBlock:
    return DocumentBlock(
        name=sanitize_filename(document.name),
        format=document.format,
        data=document.raw_bytes(),
    )


def content_blocks(content: str | DocumentContent) -> list[ContentBlock]:
    """Translate one turn's content into ordered content blocks.

    A document without text is preceded by the default summary instruction,
    the same text that was substituted when the turn was submitted.
    """
    if isinstance(content, str):
        return [TextBlock(text=content)]

    text = content.text if content.text is not None else DEFAULT_DOCUMENT_PROMPT
    return [TextBlock(text=text), document_block(content.document)]


def to_chat_message(turn: Turn) -> ChatMessage:
    return ChatMessage(role=turn.role, content=content_blocks(turn.content))


def to_chat_messages(turns: Iterable[Turn]) -> list[ChatMessage]:
    """Translate stored turns, in order, into chat messages."""
    return [to_chat_message(turn) for turn in turns]
