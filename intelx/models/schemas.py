from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Sender(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class NodeKind(str, Enum):
    """Kinds of entries in the case file tree."""

    SECTION = "section"
    FOLDER = "folder"
    FILE = "file"


class Attachment(BaseModel):
    """Metadata of a file staged in the composer or frozen into a message.

    The byte content is never inspected, so only the descriptive fields are kept.

    Attributes:
        name: Original file name.
        byte_size: Size of the file in bytes.
        mime_type: Reported content type, possibly empty.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    byte_size: int = Field(default=0, ge=0)
    mime_type: str = ""

    @property
    def extension_label(self) -> str:
        """Short label for attachment chips, e.g. ``PDF`` for application/pdf."""
        _, _, subtype = self.mime_type.partition("/")
        return subtype.upper() if subtype else "FILE"


class Message(BaseModel):
    """A single entry in the conversation log.

    Attributes:
        sender: Who produced the message.
        text: Message text, None for attachment-only messages.
        attachments: Files sent with the message.
        timestamp: Creation time.
    """

    model_config = ConfigDict(frozen=True)

    sender: Sender
    text: str | None = None
    attachments: tuple[Attachment, ...] = ()
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("text")
    @classmethod
    def blank_text_is_absent(cls, v: str | None) -> str | None:
        """Treat whitespace-only text as no text at all."""
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def require_content(self) -> "Message":
        """Reject messages carrying neither text nor attachments."""
        if self.text is None and not self.attachments:
            raise ValueError("Message requires text or at least one attachment")
        return self

    @property
    def time_label(self) -> str:
        return self.timestamp.strftime("%I:%M %p")


class ConversationSnapshot(BaseModel):
    """Read-only projection of the active conversation.

    Attributes:
        messages: Message log in append order.
        draft_text: Current composer text.
        staged_attachments: Files waiting to be sent.
        response_pending: Whether an assistant reply is outstanding.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = ()
    draft_text: str = ""
    staged_attachments: tuple[Attachment, ...] = ()
    response_pending: bool = False

    @property
    def can_submit(self) -> bool:
        has_content = bool(self.draft_text.strip()) or bool(self.staged_attachments)
        return has_content and not self.response_pending


class Session(BaseModel):
    """A named conversation thread.

    Attributes:
        id: Stable opaque identifier.
        title: Display title.
        created_rank: Creation counter; higher is newer.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    created_rank: int = Field(ge=0)


class SessionList(BaseModel):
    """Session catalog with the current selection."""

    sessions: list[Session]
    selected_id: str | None = None
    editing_id: str | None = None


class FolderNode(BaseModel):
    """One entry of the static case file tree.

    Attributes:
        label: Display name.
        kind: Section, folder or file.
        children: Nested nodes, empty for files.
        default_open: Initial expansion; None falls back to the depth policy.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    kind: NodeKind = NodeKind.FOLDER
    children: tuple["FolderNode", ...] = ()
    default_open: bool | None = None

    @model_validator(mode="after")
    def files_have_no_children(self) -> "FolderNode":
        if self.kind is NodeKind.FILE and self.children:
            raise ValueError(f"File node '{self.label}' cannot have children")
        return self

    @property
    def expandable(self) -> bool:
        return self.kind is not NodeKind.FILE


class TreeRow(BaseModel):
    """A visible row of the rendered folder tree."""

    model_config = ConfigDict(frozen=True)

    path: tuple[int, ...]
    label: str
    kind: NodeKind
    depth: int = Field(ge=0)
    expandable: bool
    expanded: bool


class DraftUpdate(BaseModel):
    """Request payload replacing the composer text."""

    text: str


class RenameRequest(BaseModel):
    """Request payload for renaming a session."""

    title: str


class ToggleRequest(BaseModel):
    """Request payload identifying a folder node by its path from the root."""

    path: list[int] = Field(..., min_length=1)


class ActionResult(BaseModel):
    """Outcome of an intent: whether it changed anything."""

    applied: bool


class ConversationResult(ActionResult):
    """Intent outcome together with the resulting conversation."""

    conversation: ConversationSnapshot


class SessionResult(ActionResult):
    """Intent outcome together with the affected session, if it still exists."""

    session: Session | None = None
