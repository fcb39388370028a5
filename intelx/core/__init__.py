"""Client-side interaction state for the assistant console.

Three independent state machines that communicate only through listeners.

Responsibilities:
    - Conversation log, composer and the deferred assistant reply
    - Session catalog with create, select, rename and delete
    - Expand/collapse state of the case file tree
    - Pluggable response providers (fixed-delay stub or HTTP backend)

Holds no rendering logic. The UI and API layers read snapshots and
forward user intents.
"""

from intelx.core.config import ConsoleConfig, get_console_config
from intelx.core.conversation import ConversationEngine
from intelx.core.folders import CASE_TREE, FolderTree
from intelx.core.responder import HttpResponder, ResponseProvider, StubResponder
from intelx.core.sessions import SessionStore
from intelx.core.workspace import Workspace, get_workspace

__all__ = [
    "CASE_TREE",
    "ConsoleConfig",
    "ConversationEngine",
    "FolderTree",
    "HttpResponder",
    "ResponseProvider",
    "SessionStore",
    "StubResponder",
    "Workspace",
    "get_console_config",
    "get_workspace",
]
