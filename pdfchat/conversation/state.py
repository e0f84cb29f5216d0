"""Conversation state machine.

Owns the ordered turn list and mediates between user input and the chat
client's response stream.

States: IDLE -> AWAITING_RESPONSE -> IDLE. A submission is accepted only in
IDLE; the machine stays in AWAITING_RESPONSE until the stream completes or
fails. Every mutation of the turn list goes through ``Conversation._apply``,
which also notifies listeners so the UI can re-render.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from pdfchat.agent.client import ChatClient
from pdfchat.agent.config import DEFAULT_SYSTEM_PROMPT
from pdfchat.conversation.history import to_chat_message, to_chat_messages
from pdfchat.models.schemas import (
    DEFAULT_DOCUMENT_PROMPT,
    ChatRequest,
    ChatState,
    Document,
    DocumentContent,
    InferenceParams,
    Role,
    Turn,
)
from pdfchat.parsing.filenames import display_filename, sanitize_filename
from pdfchat.parsing.pdf_parser import (
    AttachmentRejectedError,
    inspect_pdf,
    validate_attachment,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "ERROR: "
FILE_PROCESSING_ERROR = f"{ERROR_PREFIX}Failed to process PDF file."
STREAM_ERROR_FALLBACK = "Failed to get stream data."


class ConversationEvent(str, Enum):
    """Kinds of change reported to listeners."""

    TURN_APPENDED = "turn_appended"
    TURN_UPDATED = "turn_updated"
    STATE_CHANGED = "state_changed"
    CLEARED = "cleared"


Listener = Callable[[ConversationEvent, Turn | None], None]


@dataclass
class PendingAttachment:
    """A file picked by the user but not yet sent.

    Attributes:
        name: Original filename.
        content_type: MIME type reported by the picker.
        size: File size in bytes.
        read: Coroutine function returning the full file content.
    """

    name: str
    content_type: str | None
    size: int
    read: Callable[[], Awaitable[bytes]]


class Conversation:
    """In-memory chat conversation driven by one chat client.

    Attributes:
        turns: Turns in chronological (and display) order.
        state: Current state machine state.
        pending: Attachment waiting for the next submit, if any.
        input_text: Text waiting for the next submit; bound to the input box.
    """

    def __init__(
        self,
        client: ChatClient,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        params: InferenceParams | None = None,
    ) -> None:
        self.turns: list[Turn] = []
        self.state = ChatState.IDLE
        self.pending: PendingAttachment | None = None
        self.input_text = ""
        self._client = client
        self._system_prompt = system_prompt
        self._params = params or InferenceParams()
        self._open_index: int | None = None
        self._listeners: list[Listener] = []

    @property
    def is_busy(self) -> bool:
        return self.state is ChatState.AWAITING_RESPONSE

    @property
    def open_turn(self) -> Turn | None:
        """The assistant turn currently receiving deltas."""
        if self._open_index is None:
            return None
        return self.turns[self._open_index]

    @property
    def supports_documents(self) -> bool:
        return self._client.supports_documents

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _apply(
        self,
        event: ConversationEvent,
        turn: Turn | None = None,
        *,
        delta: str = "",
        state: ChatState | None = None,
        open_turn: bool = False,
    ) -> None:
        if event is ConversationEvent.TURN_APPENDED:
            self.turns.append(turn)
            if open_turn:
                self._open_index = len(self.turns) - 1
        elif event is ConversationEvent.TURN_UPDATED:
            turn = self.turns[self._open_index]
            turn.content = turn.content + delta
        elif event is ConversationEvent.STATE_CHANGED:
            self.state = state
            if state is ChatState.IDLE:
                self._open_index = None
        elif event is ConversationEvent.CLEARED:
            self.turns.clear()
            self.pending = None
            self._open_index = None

        for listener in list(self._listeners):
            listener(event, turn)

    def _check_attachment(self, attachment: PendingAttachment) -> None:
        if not self.supports_documents:
            raise AttachmentRejectedError(
                "PDF attachments are not supported by the current model provider."
            )
        validate_attachment(attachment.name, attachment.content_type, attachment.size)

    def select_attachment(self, attachment: PendingAttachment) -> None:
        """Keep a picked file for the next submit.

        Raises:
            AttachmentRejectedError: If the file is not an acceptable PDF.
                The previously pending file, if any, is kept.
        """
        self._check_attachment(attachment)
        self.pending = attachment
        logger.info(f"Selected file: {attachment.name}, Size: {attachment.size} bytes")

    def clear_attachment(self) -> None:
        """Drop the picked file so the next submit sends text only."""
        if self.pending is not None:
            logger.info(f"Cleared file: {self.pending.name}")
        self.pending = None

    def reset(self) -> bool:
        """Start a new chat. Refused while a response is streaming."""
        if self.is_busy:
            return False
        self.input_text = ""
        self._apply(ConversationEvent.CLEARED)
        return True

    async def _read_document(self, attachment: PendingAttachment) -> Document:
        raw = await attachment.read()
        info = inspect_pdf(raw)
        name = sanitize_filename(attachment.name)
        logger.info(
            f"Original file name: {attachment.name}, Sanitized: {name}, "
            f"Pages: {info.pages}"
        )
        return Document.from_bytes(
            name=name, raw=raw, display_name=display_filename(name), pages=info.pages
        )

    async def submit(
        self,
        raw_text: str | None = None,
        attachment: PendingAttachment | None = None,
    ) -> bool:
        """Send a message and stream the reply into a new assistant turn.

        Args:
            raw_text: Message text. Defaults to ``input_text``.
            attachment: File to send. Defaults to the pending attachment.

        Returns:
            True if the submission was accepted, False if it was ignored
            (empty, or another response is still streaming).

        Raises:
            AttachmentRejectedError: If the attachment is not an acceptable
                PDF. Nothing is changed in that case.
        """
        if self.is_busy:
            logger.debug("Submission rejected: a response is still streaming")
            return False

        if raw_text is None:
            raw_text = self.input_text
        if attachment is None:
            attachment = self.pending

        text = raw_text.strip()
        if attachment is not None:
            self._check_attachment(attachment)
            effective_text = text or DEFAULT_DOCUMENT_PROMPT
        elif text:
            effective_text = text
        else:
            return False

        self._apply(ConversationEvent.STATE_CHANGED, state=ChatState.AWAITING_RESPONSE)

        content: str | DocumentContent = effective_text
        if attachment is not None:
            try:
                document = await self._read_document(attachment)
            except Exception as e:
                logger.warning(f"File processing error for {attachment.name}: {e}")
                self._apply(
                    ConversationEvent.TURN_APPENDED,
                    Turn(role=Role.ASSISTANT, content=FILE_PROCESSING_ERROR, error=True),
                )
                self.pending = None
                self._apply(ConversationEvent.STATE_CHANGED, state=ChatState.IDLE)
                return True
            content = DocumentContent(text=text or None, document=document)

        prior = list(self.turns)
        user_turn = Turn(role=Role.USER, content=content)
        self._apply(ConversationEvent.TURN_APPENDED, user_turn)
        self.input_text = ""
        self.pending = None
        self._apply(
            ConversationEvent.TURN_APPENDED,
            Turn(role=Role.ASSISTANT, content=""),
            open_turn=True,
        )

        request = ChatRequest(
            system_prompt=self._system_prompt,
            messages=[*to_chat_messages(prior), to_chat_message(user_turn)],
            params=self._params,
        )

        try:
            async for delta in self._client.stream(request):
                self._apply(ConversationEvent.TURN_UPDATED, delta=delta)
        except Exception as e:
            logger.error(f"Streaming error: {e!r}")
            message = str(e).strip() or STREAM_ERROR_FALLBACK
            self._apply(
                ConversationEvent.TURN_APPENDED,
                Turn(role=Role.ASSISTANT, content=f"{ERROR_PREFIX}{message}", error=True),
            )
        finally:
            self._apply(ConversationEvent.STATE_CHANGED, state=ChatState.IDLE)

        return True
