"""Main application entry point.

Serves the NiceGUI chat page (port 8080 by default).
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Configuration is validated before the server starts, so a missing
    region or model ID fails fast instead of on the first message.
    """
    from nicegui import ui

    from pdfchat.agent.config import get_chat_config
    from pdfchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_chat_config()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    logger.info(f"Starting AI Chat App ({config.provider}, {config.aws_region})")
    logger.info(f"Chat UI available at http://localhost:{port}/")

    ui.run(
        title="AI Chat App",
        favicon="🤖",
        host=host,
        port=port,
        reload=False,
        show=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "pdf-chat-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
