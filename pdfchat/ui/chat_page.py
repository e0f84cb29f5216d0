"""NiceGUI chat interface with incremental response rendering."""

import logging

from nicegui import events, ui

from pdfchat.agent.client import get_chat_client
from pdfchat.agent.config import get_chat_config
from pdfchat.conversation.state import Conversation, ConversationEvent, PendingAttachment
from pdfchat.models.schemas import Role, Turn
from pdfchat.parsing.pdf_parser import MAX_ATTACHMENT_SIZE, AttachmentRejectedError

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #ff9900 0%, #232f3e 100%); }

    .message-user {
        background: #e6f3ff;
        color: #1f2937;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error {
        background: #fef2f2;
        color: #b91c1c;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #ff9900;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


def describe_user_turn(turn: Turn) -> str:
    """Text shown in a user bubble, mentioning any uploaded PDF."""
    document = turn.document
    if document is None:
        return turn.text
    if turn.text:
        return f"{turn.text} (Uploaded PDF: {document.display_name})"
    return f"Uploaded PDF: {document.display_name}"


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each browser tab gets its own in-memory conversation."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_chat_config()
    conversation = Conversation(
        get_chat_client(),
        system_prompt=config.system_prompt,
        params=config.inference_params,
    )

    bubbles: dict[str, ui.markdown] = {}
    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.textarea
    upload: ui.upload
    send_btn: ui.button

    def render_typing_indicator() -> None:
        with ui.row().classes("gap-1 py-1"):
            for _ in range(3):
                ui.element("div").classes("typing-dot")

    def render_turn(turn: Turn) -> None:
        is_user = turn.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        if is_user:
            bubble = "message-user"
        elif turn.error:
            bubble = "message-error"
        else:
            bubble = "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.label("YOU" if is_user else "AI").classes("text-xs font-bold")
                    if is_user:
                        ui.label(describe_user_turn(turn)).classes(
                            "text-sm whitespace-pre-wrap"
                        )
                    elif turn is conversation.open_turn and not turn.text:
                        render_typing_indicator()
                        bubbles[turn.id] = ui.markdown("").classes("text-sm")
                    else:
                        bubbles[turn.id] = ui.markdown(turn.text).classes("text-sm")
                ui.label(turn.created_at.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        bubbles.clear()
        messages_container.clear()
        with messages_container:
            if not conversation.turns:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            else:
                for turn in conversation.turns:
                    render_turn(turn)
        scroll_area.scroll_to(percent=1.0)

    def set_input_enabled(enabled: bool) -> None:
        for element in (input_field, upload, send_btn):
            if enabled:
                element.enable()
            else:
                element.disable()
        if enabled:
            send_btn.props(remove="loading")
        else:
            send_btn.props("loading")

    def on_conversation_event(event: ConversationEvent, turn: Turn | None) -> None:
        if event is ConversationEvent.TURN_UPDATED and turn is not None:
            bubble = bubbles.get(turn.id)
            if bubble is None or not bubble.content:
                # first delta replaces the typing indicator
                refresh_messages()
            else:
                bubble.set_content(turn.text)
                scroll_area.scroll_to(percent=1.0)
        elif event is ConversationEvent.STATE_CHANGED:
            set_input_enabled(not conversation.is_busy)
            if not conversation.is_busy:
                upload.reset()
        else:
            refresh_messages()

    conversation.subscribe(on_conversation_event)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            data = await e.file.read()
        except OSError as exc:
            logger.warning(f"Failed to read uploaded file {e.file.name}: {exc}")
            ui.notify("Failed to read the selected file.", type="negative")
            upload.reset()
            return

        async def read() -> bytes:
            return data

        attachment = PendingAttachment(
            name=e.file.name,
            content_type=e.file.content_type,
            size=len(data),
            read=read,
        )
        try:
            conversation.select_attachment(attachment)
        except AttachmentRejectedError as exc:
            ui.notify(str(exc), type="warning")
            upload.reset()

    def handle_removed() -> None:
        # Uploader emptied by the user or by reset(); the file must not be sent.
        conversation.clear_attachment()

    def handle_rejected() -> None:
        ui.notify("File size exceeds 4MB limit. Please upload a smaller PDF.", type="warning")

    async def send_message() -> None:
        try:
            await conversation.submit()
        except AttachmentRejectedError as exc:
            ui.notify(str(exc), type="warning")

    def new_chat() -> None:
        if conversation.reset():
            upload.reset()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("AI Chat App").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.label(config.model_id).classes("text-xs text-white/80 font-mono")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            messages_container = ui.column().classes("w-full gap-4 p-5")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(
                    placeholder="Enter a prompt (e.g., 'Summarize this PDF') "
                    "or leave blank for default"
                )
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .bind_value(conversation, "input_text")
                .on("keydown.enter.prevent", send_message)
            )
            upload = (
                ui.upload(
                    on_upload=handle_upload,
                    on_rejected=handle_rejected,
                    max_file_size=MAX_ATTACHMENT_SIZE,
                    max_files=1,
                    auto_upload=True,
                )
                .props("accept=application/pdf flat bordered")
                .classes("max-w-xs")
                .on("removed", handle_removed)
            )
            upload.set_visibility(conversation.supports_documents)
            send_btn = ui.button(icon="send", on_click=send_message).props(
                "round unelevated color=orange"
            )

    refresh_messages()
