"""Test package for PDF Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Multi-turn conversation workflows

PDF fixtures are generated with pypdf at test time. Provider SDKs are
mocked; no AWS credentials are needed.
Leverages pytest with pytest-check for soft assertions.
"""
