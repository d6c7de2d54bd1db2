"""Terminal UI for relaychat.

Provides a Textual-based chat screen on top of a ChatSession.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message bubbles, conversation view, compose bar)
- styles.py: CSS styling (layout decisions)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .widgets import ComposeBar, ConversationView, MessageBubble

__all__ = [
    "ChatApp",
    "ComposeBar",
    "ConversationView",
    "MessageBubble",
    "run_chat_tui",
]
