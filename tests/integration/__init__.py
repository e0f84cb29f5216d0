"""Integration tests for components working together as a system.

Coverage:
    - Conversation + Converse client with a mocked boto3 runtime
    - Multi-turn history replay including PDF documents
    - Recovery after transport failures

No AWS credentials are required.
"""
