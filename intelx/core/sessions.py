"""In-memory catalog of conversation threads."""

import logging
import uuid
from collections.abc import Callable, Iterable

from intelx.models.schemas import Session, SessionList

logger = logging.getLogger(__name__)

ResetListener = Callable[[], None]
ChangeListener = Callable[[SessionList], None]


class SessionStore:
    """Ordered list of sessions, newest first, with at most one selected.

    Creating or selecting a session raises a single reset notification that
    the conversation engine consumes. The store never holds message content;
    every selection starts a fresh conversation.
    """

    def __init__(
        self,
        default_title: str = "New Chat",
        seed_titles: Iterable[str] = (),
    ) -> None:
        """Initialize the catalog.

        Args:
            default_title: Title given to sessions made by create_session.
            seed_titles: Initial sessions, listed in display order. The first
                one is selected.
        """
        self.default_title = default_title
        self._sessions: list[Session] = []
        self._rank = 0
        self._selected_id: str | None = None
        self._editing_id: str | None = None
        self._reset_listeners: list[ResetListener] = []
        self._change_listeners: list[ChangeListener] = []

        for title in reversed(tuple(seed_titles)):
            self._sessions.insert(0, self._new_session(title))
        if self._sessions:
            self._selected_id = self._sessions[0].id

    def _new_session(self, title: str) -> Session:
        self._rank += 1
        return Session(id=uuid.uuid4().hex, title=title, created_rank=self._rank)

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    def get(self, session_id: str) -> Session | None:
        return next((s for s in self._sessions if s.id == session_id), None)

    def _index_of(self, session_id: str) -> int | None:
        for i, session in enumerate(self._sessions):
            if session.id == session_id:
                return i
        return None

    def snapshot(self) -> SessionList:
        return SessionList(
            sessions=list(self._sessions),
            selected_id=self._selected_id,
            editing_id=self._editing_id,
        )

    def subscribe_reset(self, listener: ResetListener) -> None:
        self._reset_listeners.append(listener)

    def subscribe(self, listener: ChangeListener) -> None:
        self._change_listeners.append(listener)

    def _emit_reset(self) -> None:
        for listener in list(self._reset_listeners):
            listener()

    def _emit_change(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._change_listeners):
            listener(snapshot)

    def create_session(self) -> Session:
        """Insert a default-titled session at the head, select it and open it for renaming.

        Returns:
            The new session.
        """
        session = self._new_session(self.default_title)
        self._sessions.insert(0, session)
        self._selected_id = session.id
        self._editing_id = session.id
        logger.info(f"Created session {session.id[:8]}")
        # Creation implies selection; one reset covers both.
        self._emit_reset()
        self._emit_change()
        return session

    def select_session(self, session_id: str) -> bool:
        if self.get(session_id) is None:
            return False
        self._selected_id = session_id
        self._emit_reset()
        self._emit_change()
        return True

    def begin_rename(self, session_id: str) -> bool:
        if self.get(session_id) is None:
            return False
        self._editing_id = session_id
        self._emit_change()
        return True

    def cancel_rename(self) -> None:
        if self._editing_id is not None:
            self._editing_id = None
            self._emit_change()

    def rename_session(self, session_id: str, new_title: str) -> bool:
        """Set a session's title to the trimmed ``new_title``.

        A blank title is discarded and the old title kept. Either way the
        session leaves rename mode.

        Returns:
            True if the title was replaced.
        """
        index = self._index_of(session_id)
        if index is None:
            return False
        if self._editing_id == session_id:
            self._editing_id = None

        title = new_title.strip()
        if not title:
            self._emit_change()
            return False
        self._sessions[index] = self._sessions[index].model_copy(update={"title": title})
        self._emit_change()
        return True

    def delete_session(self, session_id: str) -> bool:
        """Remove a session. Deleting the selected one leaves nothing selected."""
        index = self._index_of(session_id)
        if index is None:
            return False
        del self._sessions[index]
        if self._selected_id == session_id:
            self._selected_id = None
        if self._editing_id == session_id:
            self._editing_id = None
        logger.info(f"Deleted session {session_id[:8]}")
        self._emit_change()
        return True

    def search(self, query: str) -> list[Session]:
        """Return sessions whose title contains ``query``, ignoring case."""
        needle = query.strip().casefold()
        if not needle:
            return list(self._sessions)
        return [s for s in self._sessions if needle in s.title.casefold()]
