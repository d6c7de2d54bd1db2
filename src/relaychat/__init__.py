"""
relaychat: a small chat client paired with a single-endpoint completion relay.

Each subpackage hides one design decision:
- conversation: how messages and their lifecycle are represented
- client: how prompts travel to the relay and how replies come back
- llm: which completion provider is used and how its responses are read
- server: how the relay is exposed over HTTP
- ui: how the conversation is drawn in the terminal
"""

__version__ = "0.1.0"

from .conversation import ConversationStore, Message, MessageStatus, Sender
from .errors import (
    NetworkError,
    ProviderError,
    RelayChatError,
    TransportError,
    ValidationError,
)

__all__ = [
    "ConversationStore",
    "Message",
    "MessageStatus",
    "NetworkError",
    "ProviderError",
    "RelayChatError",
    "Sender",
    "TransportError",
    "ValidationError",
]
