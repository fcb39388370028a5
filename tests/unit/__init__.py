"""Unit tests for individual components in isolation.

Coverage:
    - core/: conversation engine, session store, folder tree, workspace
    - models/: Pydantic validation of messages, attachments and tree nodes
    - config and response providers
"""
