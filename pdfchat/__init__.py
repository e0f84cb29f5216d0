"""PDF Chat - streaming chat over Amazon Bedrock with optional PDF attachments.

Combines NiceGUI for the chat page, boto3 / Agno for model access,
pypdf for attachment checks, and Pydantic for data validation.

Components:
    - agent: chat client adapters and configuration
    - conversation: turn list state machine and history re-serialization
    - parsing: filename sanitization and PDF attachment validation
    - ui: web interface for chat interactions
    - models: turn, document and message schemas
"""

__version__ = "0.1.0"
