"""Bedrock Converse streaming client.

Talks to the ``bedrock-runtime`` Converse API through boto3, which supports
text and document content blocks.

boto3 is synchronous: the request and every read from the event stream run
in a worker thread, while deltas are handed back to the caller on the event
loop one at a time.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

import boto3

from pdfchat.agent.config import ChatConfig
from pdfchat.models.schemas import ChatMessage, ChatRequest, DocumentBlock, TextBlock

logger = logging.getLogger(__name__)

_END_OF_STREAM = object()


def to_converse_message(message: ChatMessage) -> dict[str, Any]:
    """Convert a provider-neutral message into the Converse API shape."""
    content: list[dict[str, Any]] = []
    for block in message.content:
        if isinstance(block, TextBlock):
            content.append({"text": block.text})
        elif isinstance(block, DocumentBlock):
            content.append(
                {
                    "document": {
                        "name": block.name,
                        "format": block.format,
                        "source": {"bytes": block.data},
                    }
                }
            )
    return {"role": message.role.value, "content": content}


def normalize_converse_messages(messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Make a message list acceptable to the Converse API.

    Converse rejects blank text blocks, consecutive messages with the same
    role, and a conversation that starts with the assistant. A failed turn
    leaves exactly that behind (an empty reply followed by an error turn),
    so those are cleaned up here rather than in the stored history.
    """
    normalized: list[dict[str, Any]] = []
    for message in messages:
        content = [
            block
            for block in message["content"]
            if "text" not in block or block["text"].strip()
        ]
        if not content:
            continue
        if not normalized and message["role"] == "assistant":
            continue
        if normalized and normalized[-1]["role"] == message["role"]:
            normalized[-1]["content"].extend(content)
        else:
            normalized.append({"role": message["role"], "content": content})
    return normalized


def build_converse_kwargs(model_id: str, request: ChatRequest) -> dict[str, Any]:
    messages = [to_converse_message(m) for m in request.messages]
    return {
        "modelId": model_id,
        "messages": normalize_converse_messages(messages),
        "system": [{"text": request.system_prompt}],
        "inferenceConfig": {
            "maxTokens": request.params.max_tokens,
            "temperature": request.params.temperature,
        },
    }


class BedrockConverseClient:
    """Chat client for the Bedrock Converse streaming API."""

    supports_documents = True

    def __init__(self, config: ChatConfig) -> None:
        """Initialize the boto3 runtime client.

        Args:
            config: Chat configuration. Missing credentials fall back to
                the boto3 default credential chain.
        """
        self._config = config
        self._client = boto3.client(
            "bedrock-runtime",
            region_name=config.aws_region,
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
        )

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Stream response text for a request.

        Args:
            request: System prompt, history and inference parameters.

        Yields:
            Text deltas in the order Bedrock emits them.

        Raises:
            botocore.exceptions.ClientError: If Bedrock rejects the request.
            botocore.exceptions.EventStreamError: If the stream fails midway.
        """
        kwargs = build_converse_kwargs(self._config.model_id, request)
        logger.info(
            f"Calling converse_stream on {self._config.model_id} "
            f"with {len(request.messages)} messages"
        )

        response = await asyncio.to_thread(self._client.converse_stream, **kwargs)
        events = iter(response.get("stream") or ())

        while True:
            event = await asyncio.to_thread(next, events, _END_OF_STREAM)
            if event is _END_OF_STREAM:
                break

            text = event.get("contentBlockDelta", {}).get("delta", {}).get("text")
            if text:
                yield text
            elif "messageStop" in event:
                logger.debug(f"Stream stopped: {event['messageStop'].get('stopReason')}")
