"""HTTP client for the completion relay.

Hides the wire format of the POST /ask exchange and maps every failure
to a RelayError subclass. One call per send(); no retries, no backoff.
"""

import logging
from typing import Any

import httpx

from ..config import ASK_PATH, DEFAULT_RELAY_URL
from ..errors import NetworkError, TransportError, ValidationError

logger = logging.getLogger(__name__)


class RelayClient:
    """Async client for the relay's /ask endpoint.

    Supports async context manager protocol:
        async with RelayClient("http://192.168.1.10:3000") as relay:
            reply = await relay.send("hello")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_RELAY_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the relay client.

        Args:
            base_url: Relay base URL, without the /ask path
            http_client: Optional preconfigured client (owned by the caller)
            timeout: Request timeout in seconds; None waits indefinitely
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def ask_url(self) -> str:
        return f"{self._base_url}{ASK_PATH}"

    async def send(self, prompt: str) -> str:
        """Send a prompt to the relay and return the reply text.

        Args:
            prompt: Non-empty prompt text

        Returns:
            The reply field of the response, or "" when it is missing

        Raises:
            ValidationError: If the prompt is empty or whitespace-only
            NetworkError: If the request failed before a usable response arrived
            TransportError: If the status is not 2xx or the body is not JSON
        """
        if not prompt or not prompt.strip():
            raise ValidationError()

        try:
            response = await self._client.post(
                self.ask_url,
                json={"prompt": prompt},
                headers={"Content-Type": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Relay request failed: %s", e)
            raise NetworkError(f"Could not reach relay at {self.ask_url}: {e}") from e

        if not response.is_success:
            logger.warning("Relay answered HTTP %s", response.status_code)
            raise TransportError(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data: Any = response.json()
        except ValueError as e:
            raise TransportError("Relay returned a non-JSON body", status_code=response.status_code) from e

        reply = data.get("reply") if isinstance(data, dict) else None
        return reply if isinstance(reply, str) else ""

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RelayClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
