"""Google Gemini completion provider.

Uses the official Google GenAI SDK for async content generation.
Reference: https://github.com/googleapis/python-genai
"""

from typing import Any

from google import genai
from google.genai import types

from ...config import DEFAULT_MODEL
from ..base import CompletionProvider


class GeminiProvider(CompletionProvider):
    """Google Gemini completion provider.

    Hidden design decisions:
    - Google GenAI client initialization (deferred to the first call, so a
      missing key is reported as a failed request, not a failed startup)
    - Request layout: one user content with a single text part
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key; None falls back to the SDK's own lookup
            model: Model identifier (default: gemini-2.5-flash)
            **client_kwargs: Additional kwargs for Client
        """
        self._api_key = api_key
        self._model = model
        self._client_kwargs = client_kwargs
        self._client: genai.Client | None = None

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key, **self._client_kwargs)
        return self._client

    @staticmethod
    def _build_contents(prompt: str) -> list[types.Content]:
        return [types.Content(role="user", parts=[types.Part(text=prompt)])]

    async def generate(self, prompt: str) -> types.GenerateContentResponse:
        """Generate content for a single prompt.

        Args:
            prompt: Prompt text

        Returns:
            The SDK's GenerateContentResponse
        """
        client = self._get_client()
        return await client.aio.models.generate_content(
            model=self._model,
            contents=self._build_contents(prompt),
        )

    async def close(self) -> None:
        """Close the Gemini client's async transport if one was opened."""
        if self._client is None:
            return
        aclose = getattr(self._client.aio, "aclose", None)
        if aclose is not None:
            await aclose()
        self._client = None
