"""Custom Textual widgets for the chat UI.

Hides widget implementation details:
- Message bubble rendering per sender and status
- Placement of the retry control on the user message
- Compose bar busy state
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Static

from ..conversation import ConversationStore, Message, MessageStatus, Sender

EMPTY_STATE_TEXT = "Start a conversation\nSend a message to get started"


class MessageBubble(Vertical):
    """One chat message.

    User bubbles carry a hidden Retry button, shown while the reply to
    that message is in error state.
    """

    class RetryRequested(TextualMessage):
        """Posted when the retry control of a user bubble is pressed."""

        def __init__(self, bot_message_id: int) -> None:
            super().__init__()
            self.bot_message_id = bot_message_id

    def __init__(self, message: Message, **kwargs) -> None:
        sender_class = "user-bubble" if message.sender == Sender.USER else "bot-bubble"
        super().__init__(id=f"msg-{message.id}", classes=f"bubble {sender_class}", **kwargs)
        self._message = message
        self._retry_target: int | None = None

    @property
    def message(self) -> Message:
        return self._message

    @property
    def retry_target(self) -> int | None:
        """Id of the failed bot message this bubble would retry, if any."""
        return self._retry_target

    def compose(self):
        yield Static(self._message.text, markup=False, classes="bubble-text")
        if self._message.sender == Sender.USER:
            yield Button("↻ Retry", classes="retry-btn", variant="warning")

    def on_mount(self) -> None:
        self._apply_status()

    def update_message(self, message: Message) -> None:
        """Show a newer version of the same message."""
        self._message = message
        # Not composed yet if the update lands in the same tick as the mount
        for text in self.query(".bubble-text").results(Static):
            text.update(message.text)
        self._apply_status()

    def set_retry_target(self, bot_message_id: int | None) -> None:
        self._retry_target = bot_message_id
        self.set_class(bot_message_id is not None, "-can-retry")

    def _apply_status(self) -> None:
        status = self._message.status
        self.set_class(status == MessageStatus.PENDING, "-pending")
        self.set_class(status == MessageStatus.ERROR, "-error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if self._retry_target is not None:
            target = self._retry_target
            # Hide the control right away; the store update follows
            self.set_retry_target(None)
            self.post_message(self.RetryRequested(target))


class ConversationView(VerticalScroll):
    """Scrollable list of message bubbles, keyed by message id."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bubbles: dict[int, MessageBubble] = {}

    def compose(self):
        yield Static(EMPTY_STATE_TEXT, id="empty-state")

    def show(self, message: Message) -> None:
        """Mount a bubble for a new message or refresh an existing one."""
        bubble = self._bubbles.get(message.id)
        if bubble is not None:
            bubble.update_message(message)
            return

        self.query("#empty-state").remove()
        bubble = MessageBubble(message)
        self._bubbles[message.id] = bubble
        self.mount(bubble)
        self.scroll_end(animate=False)

    def update_retry_controls(self, store: ConversationStore) -> None:
        """Show the retry control on user messages whose reply failed."""
        for message_id, bubble in self._bubbles.items():
            if bubble.message.sender != Sender.USER:
                continue
            failed = store.failed_reply_for(message_id)
            bubble.set_retry_target(failed.id if failed is not None else None)

    def bubble(self, message_id: int) -> MessageBubble | None:
        return self._bubbles.get(message_id)

    async def clear_messages(self) -> None:
        self._bubbles.clear()
        await self.remove_children()
        await self.mount(Static(EMPTY_STATE_TEXT, id="empty-state"))


class ComposeBar(Horizontal):
    """Prompt input with a Send button."""

    class Submitted(TextualMessage):
        """Message sent when the user submits non-blank input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    busy: bool = False

    def compose(self):
        yield Input(placeholder="Type your message...", id="compose-input", max_length=500)
        yield Button("Send", id="send-btn", variant="primary")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def set_busy(self, busy: bool) -> None:
        """Disable the Send button while a reply is outstanding.

        While busy, Enter in the input leaves the text in place instead of
        submitting it.
        """
        self.busy = busy
        button = self.query_one("#send-btn", Button)
        button.disabled = busy
        button.label = "..." if busy else "Send"

    def focus_input(self) -> None:
        self.query_one("#compose-input", Input).focus()

    def _submit(self) -> None:
        if self.busy:
            return
        text_input = self.query_one("#compose-input", Input)
        value = text_input.value
        if not value.strip():
            return
        text_input.value = ""
        self.post_message(self.Submitted(value))
