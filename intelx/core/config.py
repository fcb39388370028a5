"""Console configuration with environment variable loading.

Pydantic-based configuration for the conversation engine, responder and
session catalog.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DUMMY_RESPONSE = "Here's a dummy IntelX response for your query."

SEED_TITLES = (
    "Most calls between January and March...",
    "Who was the one to initiate the longest call...",
)


class ConsoleConfig(BaseModel):
    """Configuration for the assistant console.

    Attributes:
        response_delay: Seconds the stub responder waits before replying.
        response_text: Literal reply of the stub responder.
        responder_url: Endpoint of a real responder; None keeps the stub.
        responder_timeout: HTTP timeout for the real responder.
        default_title: Title given to newly created sessions.
        case_number: Case shown in the header and at the tree root.
        seed_titles: Sessions present when a workspace starts.
    """

    response_delay: float = Field(
        default_factory=lambda: float(os.getenv("INTELX_RESPONSE_DELAY", "2.0")),
        description="Stub responder delay in seconds",
    )
    response_text: str = Field(
        default_factory=lambda: os.getenv("INTELX_RESPONSE_TEXT", DUMMY_RESPONSE),
        description="Stub responder reply",
    )
    responder_url: str | None = Field(
        default_factory=lambda: os.getenv("INTELX_RESPONDER_URL") or None,
        description="Responder endpoint (None for the stub)",
    )
    responder_timeout: float = Field(
        default_factory=lambda: float(os.getenv("INTELX_RESPONDER_TIMEOUT", "120.0")),
        gt=0.0,
        description="Responder HTTP timeout in seconds",
    )
    default_title: str = Field(
        default_factory=lambda: os.getenv("INTELX_DEFAULT_TITLE", "New Chat"),
        min_length=1,
    )
    case_number: str = Field(
        default_factory=lambda: os.getenv("INTELX_CASE_NUMBER", "ACC/CR/2025/7/7"),
    )
    seed_titles: tuple[str, ...] = SEED_TITLES

    @field_validator("response_delay")
    @classmethod
    def validate_response_delay(cls, v: float) -> float:
        """The deferred reply must never fire synchronously."""
        if v <= 0:
            raise ValueError("INTELX_RESPONSE_DELAY must be greater than zero")
        return v


def get_console_config() -> ConsoleConfig:
    """Create console configuration from environment.

    Returns:
        Configured ConsoleConfig instance.

    Raises:
        ValueError: If a setting is out of range.
    """
    return ConsoleConfig()
