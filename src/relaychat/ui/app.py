"""Main Textual chat application.

Orchestrates the UI components and routes user actions to a ChatSession.
The session's store is the single source of truth; widgets are redrawn
from its change notifications.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..client import ChatSession, RelayClient
from ..conversation import Message
from ..errors import ConversationError
from .styles import APP_CSS
from .widgets import ComposeBar, ConversationView, MessageBubble


class ChatApp(App):
    """Textual chat screen backed by a relay session."""

    CSS = APP_CSS
    TITLE = "Chatbot"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
    ]

    def __init__(self, session: ChatSession, relay_url: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._relay_url = relay_url
        self._unsubscribe = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header()
        yield ConversationView(id="conversation")
        yield ComposeBar(id="compose-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.theme = "catppuccin-mocha"
        if self._relay_url:
            self.sub_title = self._relay_url

        view = self.query_one("#conversation", ConversationView)
        for message in self._session.store:
            view.show(message)
        view.update_retry_controls(self._session.store)

        self._unsubscribe = self._session.store.subscribe(self._on_message_changed)
        self.query_one("#compose-bar", ComposeBar).focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_message_changed(self, message: Message) -> None:
        view = self.query_one("#conversation", ConversationView)
        view.show(message)
        view.update_retry_controls(self._session.store)

    def on_compose_bar_submitted(self, event: ComposeBar.Submitted) -> None:
        """Handle prompt submission from the compose bar."""
        bar = self.query_one("#compose-bar", ComposeBar)
        if self._session.is_sending or bar.busy:
            return
        bar.set_busy(True)
        self._send(event.value)

    def on_message_bubble_retry_requested(self, event: MessageBubble.RetryRequested) -> None:
        """Handle a retry press on a user message whose reply failed."""
        self._retry(event.bot_message_id)

    @work(exclusive=True, group="compose")
    async def _send(self, text: str) -> None:
        bar = self.query_one("#compose-bar", ComposeBar)
        try:
            await self._session.submit(text)
        finally:
            bar.set_busy(False)

    @work(group="retry")
    async def _retry(self, bot_message_id: int) -> None:
        try:
            await self._session.retry(bot_message_id)
        except ConversationError as e:
            self.notify(str(e), severity="warning", timeout=3)

    async def action_clear_chat(self) -> None:
        """Clear the conversation."""
        self.workers.cancel_group(self, "compose")
        self.workers.cancel_group(self, "retry")
        await self._session.clear()
        await self.query_one("#conversation", ConversationView).clear_messages()
        self.query_one("#compose-bar", ComposeBar).set_busy(False)
        self.notify("Chat cleared", timeout=2)


async def run_chat_tui(relay_url: str, timeout: float | None = None) -> None:
    """Run the chat UI against a relay.

    Args:
        relay_url: Relay base URL
        timeout: Optional request timeout in seconds
    """
    session = ChatSession(RelayClient(relay_url, timeout=timeout))
    app = ChatApp(session, relay_url=relay_url)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await session.close()
