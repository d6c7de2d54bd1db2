"""In-memory conversation store.

Hides how the ordered message list is kept and how bot messages move
through their lifecycle. A store belongs to one chat session and is
discarded with it; nothing here is module-global.
"""

from collections.abc import Callable, Iterator

from ..config import EMPTY_REPLY_TEXT, ERROR_TEXT, PENDING_TEXT
from ..errors import InvalidTransitionError, UnknownMessageError, ValidationError
from .models import Message, MessageStatus, Sender

MessageListener = Callable[[Message], None]


class ConversationStore:
    """Ordered list of messages with id-keyed, whole-entry updates.

    Example:
        store = ConversationStore()
        user, bot = store.append_turn("hello")
        store.resolve(bot.id, "hi there")
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._index: dict[int, int] = {}  # message id -> position in _messages
        self._next_id = 0
        self._listeners: list[MessageListener] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the conversation in insertion order."""
        return tuple(self._messages)

    def get(self, message_id: int) -> Message:
        """Return the message with the given id.

        Raises:
            UnknownMessageError: If no such message exists
        """
        position = self._index.get(message_id)
        if position is None:
            raise UnknownMessageError(message_id)
        return self._messages[position]

    def subscribe(self, listener: MessageListener) -> Callable[[], None]:
        """Register a listener for appended and replaced messages.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append_turn(self, prompt_text: str) -> tuple[Message, Message]:
        """Append a user message and its pending bot placeholder.

        Args:
            prompt_text: Text the user submitted, stored as given

        Returns:
            Tuple of (user_message, bot_placeholder)

        Raises:
            ValidationError: If the prompt is empty or whitespace-only
        """
        if not prompt_text or not prompt_text.strip():
            raise ValidationError()

        user_message = Message(
            id=self._take_id(),
            sender=Sender.USER,
            text=prompt_text,
        )
        bot_placeholder = Message(
            id=self._take_id(),
            sender=Sender.BOT,
            text=PENDING_TEXT,
            status=MessageStatus.PENDING,
            original_prompt=prompt_text,
        )

        self._append(user_message)
        self._append(bot_placeholder)
        return user_message, bot_placeholder

    def resolve(self, bot_message_id: int, text: str | None) -> Message:
        """Mark a bot message done with the reply text.

        An empty reply is shown as a fixed fallback text.
        """
        current = self._get_bot(bot_message_id)
        return self._replace(current.model_copy(update={
            "status": MessageStatus.DONE,
            "text": text or EMPTY_REPLY_TEXT,
        }))

    def fail(self, bot_message_id: int) -> Message:
        """Mark a bot message failed with the fixed warning text."""
        current = self._get_bot(bot_message_id)
        return self._replace(current.model_copy(update={
            "status": MessageStatus.ERROR,
            "text": ERROR_TEXT,
        }))

    def retry(self, bot_message_id: int) -> str:
        """Reset a failed bot message to pending.

        Returns:
            The original prompt, which the caller resends

        Raises:
            InvalidTransitionError: If the message is not in error state
        """
        current = self._get_bot(bot_message_id)
        if current.status != MessageStatus.ERROR:
            raise InvalidTransitionError(
                f"Message {bot_message_id} is {current.status.value if current.status else 'unset'}, "
                f"only failed messages can be retried"
            )
        if current.original_prompt is None:
            raise InvalidTransitionError(f"Message {bot_message_id} has no prompt to resend")

        self._replace(current.model_copy(update={
            "status": MessageStatus.PENDING,
            "text": PENDING_TEXT,
        }))
        return current.original_prompt

    def reply_for(self, user_message_id: int) -> Message | None:
        """Find the bot message answering a user message.

        Looks at messages after the user message and returns the first bot
        message whose original prompt equals the user text.
        """
        user_message = self.get(user_message_id)
        if user_message.sender != Sender.USER:
            return None

        for message in self._messages[self._index[user_message_id] + 1:]:
            if message.is_bot and message.original_prompt == user_message.text:
                return message
        return None

    def failed_reply_for(self, user_message_id: int) -> Message | None:
        """Return the reply to a user message if that reply failed."""
        reply = self.reply_for(user_message_id)
        if reply is not None and reply.is_failed:
            return reply
        return None

    def clear(self) -> None:
        """Drop all messages. Ids keep counting up and are never reused."""
        self._messages.clear()
        self._index.clear()

    def _take_id(self) -> int:
        message_id = self._next_id
        self._next_id += 1
        return message_id

    def _get_bot(self, message_id: int) -> Message:
        message = self.get(message_id)
        if not message.is_bot:
            raise InvalidTransitionError(f"Message {message_id} is a user message")
        return message

    def _append(self, message: Message) -> None:
        self._index[message.id] = len(self._messages)
        self._messages.append(message)
        self._notify(message)

    def _replace(self, message: Message) -> Message:
        self._messages[self._index[message.id]] = message
        self._notify(message)
        return message

    def _notify(self, message: Message) -> None:
        for listener in list(self._listeners):
            listener(message)
