"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with incremental streaming updates
    - Single PDF picker (4MB limit) next to the text input
    - Input disabled while a response is streaming

Contains no business logic. Delegates every operation to the
conversation state machine.
"""
