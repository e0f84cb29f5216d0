import base64
import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

# Substituted when a PDF is sent without any accompanying text.
DEFAULT_DOCUMENT_PROMPT = "Please summarize the content of this PDF."


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatState(str, Enum):
    """Conversation state machine states."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


def new_turn_id() -> str:
    return uuid.uuid4().hex


class Document(BaseModel):
    """A PDF attached to a user turn.

    Attributes:
        name: Sanitized name, safe for the inference API.
        format: Document format tag (always "pdf" for now).
        data: Base64-encoded document bytes.
        display_name: Name shown in the chat, e.g. "Report.pdf".
        pages: Page count reported by pypdf.
    """

    name: str
    format: str = "pdf"
    data: str
    display_name: str
    pages: int = Field(default=0, ge=0)

    @classmethod
    def from_bytes(
        cls, name: str, raw: bytes, display_name: str, pages: int = 0
    ) -> "Document":
        return cls(
            name=name,
            data=base64.b64encode(raw).decode("ascii"),
            display_name=display_name,
            pages=pages,
        )

    def raw_bytes(self) -> bytes:
        """Decode the stored representation back to the original bytes."""
        return base64.b64decode(self.data)


class DocumentContent(BaseModel):
    """Turn content carrying a document, with or without text."""

    document: Document
    text: str | None = None


class Turn(BaseModel):
    """One chat message.

    User turns are never changed after creation. The open assistant turn
    only ever grows by appending stream deltas to its text content.
    """

    id: str = Field(default_factory=new_turn_id)
    role: Role
    content: str | DocumentContent = ""
    error: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def text(self) -> str:
        if isinstance(self.content, str):
            return self.content
        return self.content.text or ""

    @property
    def document(self) -> Document | None:
        if isinstance(self.content, DocumentContent):
            return self.content.document
        return None


class TextBlock(BaseModel):
    text: str


class DocumentBlock(BaseModel):
    name: str
    format: str
    data: bytes


ContentBlock = TextBlock | DocumentBlock


class ChatMessage(BaseModel):
    """Provider-neutral message sent to a chat client."""

    role: Role
    content: list[ContentBlock]


class InferenceParams(BaseModel):
    max_tokens: int = Field(default=2048, ge=1)
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)


class ChatRequest(BaseModel):
    """Everything a chat client needs for one streaming call.

    Attributes:
        system_prompt: Fixed system instruction.
        messages: Full history followed by the new user message.
        params: Sampling and length limits.
    """

    system_prompt: str
    messages: list[ChatMessage]
    params: InferenceParams = Field(default_factory=InferenceParams)
