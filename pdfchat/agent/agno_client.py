"""Agno chat client backed by Bedrock.

Higher-level text-generation wrapper: Agno's Agent owns request shaping and
response parsing for the AwsBedrock model. Only text content is supported.

Unlike a typical Agno setup there is no agent storage: the conversation
state machine owns the history and passes it in full on every run.
"""

import logging
from collections.abc import AsyncIterator

from agno.agent import Agent
from agno.models.aws import AwsBedrock
from agno.models.message import Message
from agno.run.agent import RunEvent

from pdfchat.agent.client import ChatClientError, UnsupportedContentError
from pdfchat.agent.config import ChatConfig
from pdfchat.models.schemas import ChatMessage, ChatRequest, DocumentBlock

logger = logging.getLogger(__name__)


def to_agno_message(message: ChatMessage) -> Message:
    """Convert a provider-neutral message into an Agno message.

    Raises:
        UnsupportedContentError: If the message carries a document.
    """
    parts: list[str] = []
    for block in message.content:
        if isinstance(block, DocumentBlock):
            raise UnsupportedContentError(
                "Document attachments are not supported by the agno provider"
            )
        parts.append(block.text)
    return Message(role=message.role.value, content="\n\n".join(parts))


class AgnoBedrockClient:
    """Chat client running an Agno agent on an AwsBedrock model."""

    supports_documents = False

    def __init__(self, config: ChatConfig) -> None:
        self._config = config
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent with an AwsBedrock model and the configured system prompt.
        """
        model = AwsBedrock(
            id=self._config.model_id,
            aws_region=self._config.aws_region,
            aws_access_key_id=self._config.aws_access_key_id,
            aws_secret_access_key=self._config.aws_secret_access_key,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        # No markdown=True: Agno would append its own formatting instruction
        # to the system message.
        return Agent(model=model, instructions=self._config.system_prompt)

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Stream response text for a request.

        The system prompt and inference parameters are fixed when the agent
        is created; only the messages vary per call.

        Args:
            request: History followed by the new user message.

        Yields:
            Text deltas as the agent emits them.

        Raises:
            UnsupportedContentError: If any message carries a document.
            ChatClientError: If the agent reports a run error.
        """
        messages = [to_agno_message(m) for m in request.messages]
        logger.info(f"Running agno agent with {len(messages)} messages")

        response_stream = self._agent.arun(messages, stream=True)

        async for chunk in response_stream:
            event = getattr(chunk, "event", None)
            if event == RunEvent.run_error:
                raise ChatClientError(getattr(chunk, "content", None) or "")
            if event == RunEvent.run_content and chunk.content:
                yield chunk.content
