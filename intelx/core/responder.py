"""Response providers for the conversation engine.

The engine hands every submitted user message to a ResponseProvider and
appends whatever message comes back. The stub provider simulates the
assistant with a fixed delay; the HTTP provider is the seam for a real
backend and is only used when a responder URL is configured.
"""

import asyncio
import logging
from typing import Protocol

import httpx

from intelx.core.config import ConsoleConfig, get_console_config
from intelx.models.schemas import Message, Sender

logger = logging.getLogger(__name__)


class ResponderError(Exception):
    """Raised when a response provider cannot produce a reply."""

    pass


class ResponseProvider(Protocol):
    """Produces the assistant reply for a user message."""

    async def respond_to(self, message: Message) -> Message: ...


class StubResponder:
    """Replies with a fixed literal after a fixed delay."""

    def __init__(self, delay: float, text: str) -> None:
        if delay <= 0:
            raise ValueError("Stub responder delay must be greater than zero")
        self.delay = delay
        self.text = text

    async def respond_to(self, message: Message) -> Message:
        await asyncio.sleep(self.delay)
        return Message(sender=Sender.ASSISTANT, text=self.text)


class HttpResponder:
    """Forwards user messages to a JSON endpoint.

    The endpoint receives ``{"message": ..., "attachments": [...]}`` and must
    answer with ``{"response": ...}``.
    """

    def __init__(self, url: str, timeout: float = 120.0) -> None:
        self.url = url
        self.timeout = timeout

    def _payload(self, message: Message) -> dict:
        return {
            "message": message.text or "",
            "attachments": [a.model_dump() for a in message.attachments],
        }

    async def respond_to(self, message: Message) -> Message:
        """Post the message and wrap the reply.

        Args:
            message: The user message to answer.

        Returns:
            Assistant message built from the endpoint's response field.

        Raises:
            ResponderError: On HTTP errors, connection failures, or malformed or
                empty replies.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.url, json=self._payload(message))
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ResponderError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ResponderError(f"Connection failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ResponderError("Responder returned an invalid reply") from e
        if not isinstance(data, dict):
            raise ResponderError("Responder returned an invalid reply")

        text = data.get("response")
        if not text:
            raise ResponderError("Responder returned an empty reply")
        return Message(sender=Sender.ASSISTANT, text=text)


def get_response_provider(config: ConsoleConfig | None = None) -> ResponseProvider:
    """Choose the response provider for the given configuration.

    Args:
        config: Console configuration. Loads from environment if not provided.

    Returns:
        HttpResponder when a responder URL is set, StubResponder otherwise.
    """
    config = config or get_console_config()
    if config.responder_url:
        logger.info(f"Using HTTP responder at {config.responder_url}")
        return HttpResponder(config.responder_url, timeout=config.responder_timeout)
    return StubResponder(config.response_delay, config.response_text)
