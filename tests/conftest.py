"""Pytest fixtures and shared test configuration.

Fixtures:
    - responder: Response provider that replies only when released
    - engine: ConversationEngine wired to that provider
    - config: ConsoleConfig with a short response delay
    - workspace: Workspace using the controlled provider
    - async_client: HTTPX client for API testing against a fresh workspace
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from intelx.api.app import app
from intelx.core.config import ConsoleConfig
from intelx.core.conversation import ConversationEngine
from intelx.core.responder import StubResponder
from intelx.core.workspace import Workspace, get_workspace
from intelx.models.schemas import Message, Sender

# Long enough that a reply never lands between two requests of one test.
API_RESPONSE_DELAY = 0.2


class ControlledResponder:
    """Replies only after release() has been called, one reply per release."""

    def __init__(self, text: str = "controlled reply") -> None:
        self.text = text
        self.received: list[Message] = []
        self._release = asyncio.Event()

    def release(self) -> None:
        self._release.set()

    async def respond_to(self, message: Message) -> Message:
        self.received.append(message)
        await self._release.wait()
        self._release.clear()
        return Message(sender=Sender.ASSISTANT, text=f"{self.text} {len(self.received)}")


@pytest.fixture
def responder() -> ControlledResponder:
    return ControlledResponder()


@pytest.fixture
def engine(responder: ControlledResponder) -> ConversationEngine:
    return ConversationEngine(responder)


@pytest.fixture
def config() -> ConsoleConfig:
    """Console configuration independent of the environment."""
    return ConsoleConfig(
        response_delay=0.01,
        responder_url=None,
        default_title="New Chat",
        case_number="ACC/CR/2025/7/7",
    )


@pytest.fixture
def workspace(config: ConsoleConfig, responder: ControlledResponder) -> Workspace:
    return Workspace(config=config, provider=responder)


@pytest.fixture
async def async_client(config: ConsoleConfig) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client backed by a fresh workspace.

    Yields:
        Configured AsyncClient for making test requests.
    """
    api_workspace = Workspace(
        config=config,
        provider=StubResponder(API_RESPONSE_DELAY, config.response_text),
    )
    app.dependency_overrides[get_workspace] = lambda: api_workspace
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    api_workspace.conversation.reset()
    app.dependency_overrides.clear()
