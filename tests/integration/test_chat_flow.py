"""Integration tests for full chat workflows.

Drives the Conversation through the real BedrockConverseClient with only the
boto3 runtime client mocked, so request shaping, history re-serialization
and delta handling are exercised together.
"""

from collections.abc import Callable
from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check

from pdfchat.agent.bedrock_client import BedrockConverseClient
from pdfchat.agent.config import ChatConfig
from pdfchat.conversation.state import Conversation, PendingAttachment
from pdfchat.models.schemas import ChatState, Role


def delta_events(*texts: str) -> dict:
    events = [{"messageStart": {"role": "assistant"}}]
    events += [{"contentBlockDelta": {"delta": {"text": t}}} for t in texts]
    events.append({"messageStop": {"stopReason": "end_turn"}})
    return {"stream": events}


class TestConverseChatFlow:
    """Multi-turn conversations against a mocked Bedrock runtime."""

    @pytest.fixture
    def runtime(self) -> MagicMock:
        with patch("pdfchat.agent.bedrock_client.boto3") as mock_boto3:
            yield mock_boto3.client.return_value

    @pytest.fixture
    def conversation(self, runtime: MagicMock, chat_config: ChatConfig) -> Conversation:
        return Conversation(
            BedrockConverseClient(chat_config),
            system_prompt=chat_config.system_prompt,
            params=chat_config.inference_params,
        )

    async def test_pdf_then_follow_up(
        self,
        runtime: MagicMock,
        conversation: Conversation,
        make_attachment: Callable[..., PendingAttachment],
        pdf_bytes: bytes,
    ) -> None:
        """A PDF-only turn is summarized, then replayed with the follow-up."""
        runtime.converse_stream.side_effect = [
            delta_events("It is ", "a report."),
            delta_events("Page one ", "is blank."),
        ]

        conversation.select_attachment(make_attachment())
        await conversation.submit("")
        await conversation.submit("What is on page one?")

        check.equal(
            [t.role for t in conversation.turns],
            [Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT],
        )
        check.equal(conversation.turns[1].content, "It is a report.")
        check.equal(conversation.turns[3].content, "Page one is blank.")
        check.equal(conversation.state, ChatState.IDLE)

        first_call = runtime.converse_stream.call_args_list[0].kwargs
        check.equal(first_call["system"], [{"text": "You are a friendly assistant!"}])
        check.equal(first_call["inferenceConfig"], {"maxTokens": 2048, "temperature": 0.7})
        check.equal(
            first_call["messages"],
            [
                {
                    "role": "user",
                    "content": [
                        {"text": "Please summarize the content of this PDF."},
                        {
                            "document": {
                                "name": "Report-(Final)-",
                                "format": "pdf",
                                "source": {"bytes": pdf_bytes},
                            }
                        },
                    ],
                }
            ],
        )

        second_call = runtime.converse_stream.call_args_list[1].kwargs
        replayed = second_call["messages"]
        check.equal([m["role"] for m in replayed], ["user", "assistant", "user"])
        check.equal(replayed[0], first_call["messages"][0])
        check.equal(replayed[1]["content"], [{"text": "It is a report."}])
        check.equal(replayed[2]["content"], [{"text": "What is on page one?"}])

    async def test_transport_failure_then_recovery(
        self, runtime: MagicMock, conversation: Conversation
    ) -> None:
        """A failed call leaves an error turn and the next call still works."""
        runtime.converse_stream.side_effect = [
            ConnectionError("Could not connect to the endpoint URL"),
            delta_events("Back online."),
        ]

        await conversation.submit("Hello?")
        await conversation.submit("Hello again?")

        contents = [t.content for t in conversation.turns]
        check.equal(
            contents,
            [
                "Hello?",
                "",
                "ERROR: Could not connect to the endpoint URL",
                "Hello again?",
                "Back online.",
            ],
        )
        check.equal(runtime.converse_stream.call_count, 2)

        replayed = runtime.converse_stream.call_args_list[1].kwargs["messages"]
        check.equal(
            replayed,
            [
                {"role": "user", "content": [{"text": "Hello?"}]},
                {
                    "role": "assistant",
                    "content": [{"text": "ERROR: Could not connect to the endpoint URL"}],
                },
                {"role": "user", "content": [{"text": "Hello again?"}]},
            ],
        )

    async def test_file_error_on_first_turn_then_text(
        self,
        runtime: MagicMock,
        conversation: Conversation,
        make_attachment: Callable[..., PendingAttachment],
    ) -> None:
        """History starting with an error turn still yields a valid request."""
        runtime.converse_stream.return_value = delta_events("Hi there.")

        await conversation.submit("", make_attachment(data=b"not a pdf"))
        await conversation.submit("Hello")

        check.equal(conversation.turns[0].content, "ERROR: Failed to process PDF file.")
        check.equal(conversation.turns[-1].content, "Hi there.")
        runtime.converse_stream.assert_called_once()
        check.equal(
            runtime.converse_stream.call_args.kwargs["messages"],
            [{"role": "user", "content": [{"text": "Hello"}]}],
        )
