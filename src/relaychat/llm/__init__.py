from .base import CompletionProvider
from .extraction import classify_response
from .factory import create_completion_provider
from .models import CandidatePart, EmptyReply, NestedText, ProviderReply, TopLevelText
from .providers import GeminiProvider

__all__ = [
    "CandidatePart",
    "CompletionProvider",
    "EmptyReply",
    "GeminiProvider",
    "NestedText",
    "ProviderReply",
    "TopLevelText",
    "classify_response",
    "create_completion_provider",
]
