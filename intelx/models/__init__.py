"""Pydantic models for the console state.

Provides immutable value types shared by the core engines, the API and the UI.

Models:
    - Attachment: Staged or sent file metadata
    - Message: One entry in a conversation log
    - ConversationSnapshot: Read-only view of a conversation
    - Session: A named conversation thread
    - FolderNode / TreeRow: Case file tree and its visible rows
"""

from intelx.models.schemas import (
    ActionResult,
    Attachment,
    ConversationResult,
    ConversationSnapshot,
    DraftUpdate,
    FolderNode,
    Message,
    NodeKind,
    RenameRequest,
    Sender,
    Session,
    SessionList,
    SessionResult,
    ToggleRequest,
    TreeRow,
)

__all__ = [
    "ActionResult",
    "Attachment",
    "ConversationResult",
    "ConversationSnapshot",
    "DraftUpdate",
    "FolderNode",
    "Message",
    "NodeKind",
    "RenameRequest",
    "Sender",
    "Session",
    "SessionList",
    "SessionResult",
    "ToggleRequest",
    "TreeRow",
]
