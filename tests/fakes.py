"""Test doubles shared by unit and integration tests."""

import io
from collections.abc import AsyncIterator, Callable

from pypdf import PdfWriter

from pdfchat.models.schemas import ChatRequest


def build_pdf(pages: int = 1) -> bytes:
    """Write a PDF with blank pages to memory."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeChatClient:
    """Chat client yielding scripted deltas, then optionally failing.

    Attributes:
        deltas: Text deltas to yield for every request.
        error: Exception raised after the deltas, if any.
        requests: Every request received, in order.
    """

    def __init__(
        self,
        deltas: list[str] | None = None,
        error: Exception | None = None,
        supports_documents: bool = True,
    ) -> None:
        self.deltas = deltas if deltas is not None else ["Hello"]
        self.error = error
        self.supports_documents = supports_documents
        self.requests: list[ChatRequest] = []
        self.on_delta: Callable[[], None] | None = None

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        self.requests.append(request)
        for delta in self.deltas:
            yield delta
            if self.on_delta is not None:
                self.on_delta()
        if self.error is not None:
            raise self.error
