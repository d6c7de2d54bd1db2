"""Pytest configuration and shared fixtures."""
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from relaychat.client import RelayClient
from relaychat.config import Settings
from relaychat.conversation import ConversationStore
from relaychat.llm import CompletionProvider

RELAY_URL = "http://relay.test"


class FakeProvider(CompletionProvider):
    """Completion provider returning a canned response or raising."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def generate(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


def make_relay(handler: Callable[[httpx.Request], Any]) -> RelayClient:
    """Relay client whose requests are answered by handler instead of the network."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RelayClient(RELAY_URL, http_client=http_client)


@pytest.fixture
def store():
    """Return an empty conversation store."""
    return ConversationStore()


@pytest.fixture
def settings():
    """Return settings that do not depend on the environment."""
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def fake_provider():
    """Return a provider that answers with a plain text response."""
    from types import SimpleNamespace

    return FakeProvider(response=SimpleNamespace(text="hi there"))
