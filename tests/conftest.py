"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - pdf_bytes: A small valid PDF generated with pypdf
    - make_attachment: Factory for pending attachments
    - fake_client: Scriptable chat client recording every request
    - chat_config: Valid configuration without touching the environment
"""

from collections.abc import Callable

import pytest

from pdfchat.agent.config import ChatConfig
from pdfchat.conversation.state import PendingAttachment
from tests.fakes import FakeChatClient, build_pdf


@pytest.fixture
def pdf_bytes() -> bytes:
    """Return bytes of a valid one-page PDF."""
    return build_pdf()


@pytest.fixture
def make_attachment(pdf_bytes: bytes) -> Callable[..., PendingAttachment]:
    """Return a factory for pending attachments.

    Defaults describe a valid PDF named "Report (Final)!.pdf".
    """

    def factory(
        name: str = "Report (Final)!.pdf",
        content_type: str | None = "application/pdf",
        data: bytes | None = None,
        size: int | None = None,
    ) -> PendingAttachment:
        content = pdf_bytes if data is None else data

        async def read() -> bytes:
            return content

        return PendingAttachment(
            name=name,
            content_type=content_type,
            size=len(content) if size is None else size,
            read=read,
        )

    return factory


@pytest.fixture
def fake_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def chat_config() -> ChatConfig:
    """Configuration with explicit values for every field."""
    return ChatConfig(
        provider="converse",
        aws_access_key_id="AKIATEST",
        aws_secret_access_key="secret-test",
        aws_region="us-east-1",
        model_id="anthropic.claude-3-haiku-20240307-v1:0",
        system_prompt="You are a friendly assistant!",
        temperature=0.7,
        max_tokens=2048,
    )
