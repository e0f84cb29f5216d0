"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Filename sanitization and PDF validation
    - conversation/: State machine transitions and history re-serialization
    - agent/: Configuration and provider client shaping

Uses mocks for provider SDKs. Leverages pytest-check for multiple
assertions per test.
"""
