"""Unit tests for the Pydantic state models."""

import pytest
from pydantic import ValidationError

from intelx.models.schemas import (
    Attachment,
    ConversationSnapshot,
    FolderNode,
    Message,
    NodeKind,
    Sender,
)

REPORT = Attachment(name="report.docx", byte_size=10, mime_type="application/docx")


class TestMessage:
    def test_message_needs_text_or_attachments(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Message(sender=Sender.USER)

        assert "text or at least one attachment" in str(exc_info.value)

    def test_blank_text_without_attachments_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Message(sender=Sender.USER, text="  \n ")

    def test_blank_text_with_attachments_becomes_none(self) -> None:
        message = Message(sender=Sender.USER, text=" ", attachments=(REPORT,))

        assert message.text is None
        assert message.attachments == (REPORT,)

    def test_message_is_immutable(self) -> None:
        message = Message(sender=Sender.ASSISTANT, text="hi")

        with pytest.raises(ValidationError):
            message.text = "changed"

    def test_attachments_list_is_frozen_into_tuple(self) -> None:
        message = Message(sender=Sender.USER, attachments=[REPORT])

        assert message.attachments == (REPORT,)

    def test_serialises_sender_as_string(self) -> None:
        data = Message(sender=Sender.USER, text="hi").model_dump(mode="json")

        assert data["sender"] == "user"
        assert data["attachments"] == []


class TestAttachment:
    def test_negative_size_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Attachment(name="a.pdf", byte_size=-1, mime_type="application/pdf")

    @pytest.mark.parametrize(
        ("mime_type", "label"),
        [("application/pdf", "PDF"), ("text/plain", "PLAIN"), ("", "FILE"), ("binary", "FILE")],
    )
    def test_extension_label(self, mime_type: str, label: str) -> None:
        assert Attachment(name="f", mime_type=mime_type).extension_label == label


class TestConversationSnapshot:
    def test_can_submit_with_text(self) -> None:
        assert ConversationSnapshot(draft_text="hello").can_submit is True

    def test_cannot_submit_blank(self) -> None:
        assert ConversationSnapshot(draft_text="  ").can_submit is False

    def test_cannot_submit_while_pending(self) -> None:
        snapshot = ConversationSnapshot(staged_attachments=(REPORT,), response_pending=True)

        assert snapshot.can_submit is False


class TestFolderNode:
    def test_file_with_children_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FolderNode(
                label="a.pdf",
                kind=NodeKind.FILE,
                children=(FolderNode(label="x", kind=NodeKind.FILE),),
            )

    def test_nested_nodes_validate_from_dicts(self) -> None:
        node = FolderNode.model_validate(
            {
                "label": "Exhibits",
                "kind": "folder",
                "children": [{"label": "a.pdf", "kind": "file"}],
            }
        )

        assert node.children[0].kind is NodeKind.FILE
        assert node.expandable is True
        assert node.children[0].expandable is False
