from abc import ABC, abstractmethod
from typing import Any

from .extraction import classify_response
from .models import ProviderReply


class CompletionProvider(ABC):
    """Abstract base class for completion providers.

    This module hides the design decision of which provider answers prompts.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request format for a single text prompt

    Reading the reply text is shared: complete() classifies whatever
    generate() returns against the known response shapes.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            reply = await provider.complete("hello")
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier sent with every request."""

    @abstractmethod
    async def generate(self, prompt: str) -> Any:
        """Send one prompt to the provider and return its raw response.

        Args:
            prompt: The prompt, sent as the only content of the request

        Raises:
            Exception: Provider-specific errors during generation
        """

    async def complete(self, prompt: str) -> ProviderReply:
        """Send one prompt and classify the response.

        Raises:
            ProviderFormatError: If the response has an unexpected layout
            Exception: Anything generate() raises
        """
        response = await self.generate(prompt)
        return classify_response(response)

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "CompletionProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
