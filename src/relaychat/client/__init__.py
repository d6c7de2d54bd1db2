"""Client side of the relay: HTTP calls, reply dispatch and chat sessions."""

from .dispatcher import ReplyDispatcher
from .relay import RelayClient
from .session import ChatSession

__all__ = [
    "ChatSession",
    "RelayClient",
    "ReplyDispatcher",
]
