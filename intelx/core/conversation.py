"""Conversation engine: message log, composer and the deferred assistant reply.

The engine has two states. Idle accepts submissions; AwaitingResponse blocks
them until the reply scheduled by the last submission has been appended or
the conversation is reset. Replies come from an injected ResponseProvider so
the timing policy stays out of the state logic.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from intelx.core.responder import ResponseProvider
from intelx.models.schemas import Attachment, ConversationSnapshot, Message, Sender

logger = logging.getLogger(__name__)

ConversationListener = Callable[[ConversationSnapshot], None]


class ConversationEngine:
    """Owns the state of the active conversation.

    Listeners are notified with a fresh snapshot whenever the message log,
    the staged attachments or the pending flag change. Draft edits are not
    broadcast; the composer that produced them already shows them.
    """

    def __init__(self, provider: ResponseProvider) -> None:
        """Initialize an empty conversation.

        Args:
            provider: Produces the assistant reply for each submitted message.
        """
        self._provider = provider
        self._messages: list[Message] = []
        self._draft_text = ""
        self._staged: list[Attachment] = []
        self._pending: asyncio.Task[None] | None = None
        # Bumped on every reset; a reply computed for an older generation is dropped.
        self._generation = 0
        self._listeners: list[ConversationListener] = []

    @property
    def response_pending(self) -> bool:
        return self._pending is not None

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def draft_text(self) -> str:
        return self._draft_text

    @property
    def staged_attachments(self) -> tuple[Attachment, ...]:
        return tuple(self._staged)

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(
            messages=tuple(self._messages),
            draft_text=self._draft_text,
            staged_attachments=tuple(self._staged),
            response_pending=self.response_pending,
        )

    def subscribe(self, listener: ConversationListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ConversationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def update_draft(self, text: str) -> None:
        self._draft_text = text

    def stage_attachments(self, files: Iterable[Attachment]) -> None:
        """Append files to the staging buffer in the given order.

        No size or type filtering happens here; duplicates are kept.
        """
        added = list(files)
        if not added:
            return
        self._staged.extend(added)
        logger.debug(f"Staged {len(added)} attachment(s), {len(self._staged)} total")
        self._notify()

    def unstage_attachment(self, index: int) -> bool:
        """Remove the staged attachment at ``index``.

        Returns:
            False when the index is out of range (negative indices included).
        """
        if not 0 <= index < len(self._staged):
            return False
        del self._staged[index]
        self._notify()
        return True

    def submit(self) -> bool:
        """Send the composer contents and schedule the assistant reply.

        Must be called from a running event loop; outside one it raises
        RuntimeError and leaves the composer and the log untouched.

        Returns:
            True if a user message was appended, False if the composer was
            empty or a reply is still pending.
        """
        if self.response_pending:
            return False
        text = self._draft_text.strip()
        if not text and not self._staged:
            return False
        loop = asyncio.get_running_loop()

        message = Message(
            sender=Sender.USER,
            text=text or None,
            attachments=tuple(self._staged),
        )
        self._messages.append(message)
        self._draft_text = ""
        self._staged = []
        self._pending = loop.create_task(
            self._deliver_reply(message, self._generation)
        )
        logger.debug(f"Submitted message #{len(self._messages)}, awaiting response")
        self._notify()
        return True

    async def _deliver_reply(self, message: Message, generation: int) -> None:
        try:
            reply = await self._provider.respond_to(message)
        except asyncio.CancelledError:
            logger.debug("Pending response cancelled")
            raise
        except Exception as e:
            logger.error(f"Response provider failed: {e}")
            reply = Message(sender=Sender.ASSISTANT, text=f"Error: {e}")

        if generation != self._generation:
            return
        self._messages.append(reply)
        self._pending = None
        self._notify()

    def reset(self) -> None:
        """Discard the conversation and cancel any pending reply."""
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._messages.clear()
        self._draft_text = ""
        self._staged.clear()
        logger.debug("Conversation reset")
        self._notify()

    async def wait_idle(self) -> None:
        """Wait until the pending reply, if any, has been appended or cancelled."""
        task = self._pending
        if task is not None:
            await asyncio.wait({task})
