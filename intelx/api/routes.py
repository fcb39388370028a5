"""Intent endpoints for sessions, the active conversation and the case tree.

Core edge cases are no-ops, so most endpoints answer 200 with an
``applied`` flag. Unknown session ids are the exception and map to 404.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from intelx.core.workspace import Workspace, get_workspace
from intelx.models.schemas import (
    ActionResult,
    Attachment,
    ConversationResult,
    ConversationSnapshot,
    DraftUpdate,
    RenameRequest,
    Session,
    SessionList,
    SessionResult,
    ToggleRequest,
    TreeRow,
)

logger = logging.getLogger(__name__)

sessions_router = APIRouter(prefix="/sessions", tags=["sessions"])
conversation_router = APIRouter(prefix="/conversation", tags=["conversation"])
folders_router = APIRouter(prefix="/folders", tags=["folders"])


def _require_session(workspace: Workspace, session_id: str) -> Session:
    """Look up a session or fail the request.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    session = workspace.sessions.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session '{session_id}' not found",
        )
    return session


@sessions_router.get("", response_model=SessionList)
async def list_sessions(q: str = "", workspace: Workspace = Depends(get_workspace)) -> SessionList:
    """List sessions, newest first, optionally filtered by a title query."""
    snapshot = workspace.sessions.snapshot()
    if q:
        snapshot.sessions = workspace.sessions.search(q)
    return snapshot


@sessions_router.post("", response_model=Session, status_code=status.HTTP_201_CREATED)
async def create_session(workspace: Workspace = Depends(get_workspace)) -> Session:
    """Create a "New Chat" session, select it and start a fresh conversation."""
    return workspace.sessions.create_session()


@sessions_router.post("/{session_id}/select", response_model=ActionResult)
async def select_session(
    session_id: str, workspace: Workspace = Depends(get_workspace)
) -> ActionResult:
    _require_session(workspace, session_id)
    return ActionResult(applied=workspace.sessions.select_session(session_id))


@sessions_router.patch("/{session_id}", response_model=SessionResult)
async def rename_session(
    session_id: str,
    request: RenameRequest,
    workspace: Workspace = Depends(get_workspace),
) -> SessionResult:
    """Rename a session. Blank titles are ignored and reported as not applied."""
    _require_session(workspace, session_id)
    applied = workspace.sessions.rename_session(session_id, request.title)
    return SessionResult(applied=applied, session=workspace.sessions.get(session_id))


@sessions_router.delete("/{session_id}", response_model=ActionResult)
async def delete_session(
    session_id: str, workspace: Workspace = Depends(get_workspace)
) -> ActionResult:
    _require_session(workspace, session_id)
    return ActionResult(applied=workspace.sessions.delete_session(session_id))


@conversation_router.get("", response_model=ConversationSnapshot)
async def get_conversation(workspace: Workspace = Depends(get_workspace)) -> ConversationSnapshot:
    return workspace.conversation.snapshot()


@conversation_router.put("/draft", response_model=ConversationSnapshot)
async def update_draft(
    request: DraftUpdate, workspace: Workspace = Depends(get_workspace)
) -> ConversationSnapshot:
    workspace.conversation.update_draft(request.text)
    return workspace.conversation.snapshot()


@conversation_router.post("/attachments", response_model=ConversationSnapshot)
async def stage_attachments(
    files: list[UploadFile], workspace: Workspace = Depends(get_workspace)
) -> ConversationSnapshot:
    """Stage uploaded files in the composer.

    Only name, size and content type are kept; the content is not parsed.

    Args:
        files: Uploaded files (multipart/form-data), in selection order.
    """
    attachments = []
    for file in files:
        content = await file.read()
        attachments.append(
            Attachment(
                name=file.filename or "untitled",
                byte_size=len(content),
                mime_type=file.content_type or "",
            )
        )
    workspace.conversation.stage_attachments(attachments)
    logger.info(f"Staged {len(attachments)} uploaded file(s)")
    return workspace.conversation.snapshot()


@conversation_router.delete("/attachments/{index}", response_model=ConversationResult)
async def unstage_attachment(
    index: int, workspace: Workspace = Depends(get_workspace)
) -> ConversationResult:
    applied = workspace.conversation.unstage_attachment(index)
    return ConversationResult(applied=applied, conversation=workspace.conversation.snapshot())


@conversation_router.post("/submit", response_model=ConversationResult)
async def submit(
    wait: bool = False, workspace: Workspace = Depends(get_workspace)
) -> ConversationResult:
    """Submit the composer contents.

    Args:
        wait: Hold the request until the assistant reply has been appended.

    Returns:
        ConversationResult; ``applied`` is False when the composer was empty
        or a reply was still pending.
    """
    applied = workspace.conversation.submit()
    if applied and wait:
        await workspace.conversation.wait_idle()
    return ConversationResult(applied=applied, conversation=workspace.conversation.snapshot())


@conversation_router.post("/reset", response_model=ConversationSnapshot)
async def reset_conversation(workspace: Workspace = Depends(get_workspace)) -> ConversationSnapshot:
    workspace.conversation.reset()
    return workspace.conversation.snapshot()


@folders_router.get("", response_model=list[TreeRow])
async def list_rows(workspace: Workspace = Depends(get_workspace)) -> list[TreeRow]:
    """Visible rows of the case file tree in display order."""
    return workspace.folders.rows()


@folders_router.post("/toggle", response_model=ActionResult)
async def toggle_node(
    request: ToggleRequest, workspace: Workspace = Depends(get_workspace)
) -> ActionResult:
    return ActionResult(applied=workspace.folders.toggle(request.path))
