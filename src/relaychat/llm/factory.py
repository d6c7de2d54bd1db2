from typing import Any

from .base import CompletionProvider
from .providers import GeminiProvider


def create_completion_provider(provider: str, **config: Any) -> CompletionProvider:
    """Create a completion provider instance.

    This factory function hides the instantiation logic for providers.

    Args:
        provider: Provider type ('gemini')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str | None (required key, value may be None)
                - model: str (default: 'gemini-2.5-flash')

    Returns:
        Initialized completion provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_completion_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("gemini", "google"):
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
