"""Conversation state for the chat client.

Provides the message model and an injectable, session-scoped store.
"""

from .models import Message, MessageStatus, Sender
from .store import ConversationStore, MessageListener

__all__ = [
    "ConversationStore",
    "Message",
    "MessageListener",
    "MessageStatus",
    "Sender",
]
