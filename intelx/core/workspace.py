"""Composition of the three console state machines.

The session store, conversation engine and folder tree share no state.
The only wiring is the store's reset notification, which clears the engine.
"""

import logging

from intelx.core.config import ConsoleConfig, get_console_config
from intelx.core.conversation import ConversationEngine
from intelx.core.folders import FolderTree, build_case_tree
from intelx.core.responder import ResponseProvider, get_response_provider
from intelx.core.sessions import SessionStore

logger = logging.getLogger(__name__)


class Workspace:
    """One investigator's console: sessions, active conversation and case tree."""

    def __init__(
        self,
        config: ConsoleConfig | None = None,
        provider: ResponseProvider | None = None,
    ) -> None:
        """Initialize the workspace.

        Args:
            config: Console configuration. Loads from environment if not provided.
            provider: Reply source for the conversation. Chosen from the
                configuration if not provided.
        """
        self.config = config or get_console_config()
        self.sessions = SessionStore(
            default_title=self.config.default_title,
            seed_titles=self.config.seed_titles,
        )
        self.conversation = ConversationEngine(provider or get_response_provider(self.config))
        self.folders = FolderTree(build_case_tree(self.config.case_number))
        self.sessions.subscribe_reset(self.conversation.reset)


# Module-level singleton instance
_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """Get or create the workspace behind the HTTP API.

    Returns:
        The shared Workspace instance.
    """
    global _workspace
    if _workspace is None:
        _workspace = Workspace()
        logger.info("Created API workspace")
    return _workspace
