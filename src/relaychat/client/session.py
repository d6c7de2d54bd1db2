"""Chat session: the owner of one conversation's lifetime.

Ties a conversation store to a relay client through a reply dispatcher.
Created when the chat screen opens and closed when it goes away, so the
state it holds never outlives the session.
"""

import asyncio
import logging
from typing import Any

from ..conversation import ConversationStore, Message
from ..errors import UnknownMessageError
from .dispatcher import ReplyDispatcher
from .relay import RelayClient

logger = logging.getLogger(__name__)


class ChatSession:
    """Submit prompts and retry failed replies for one conversation.

    The compose flow (submit) is single-file: is_sending stays true until
    the reply for the last submitted prompt has landed. Retries of failed
    replies run independently of it.

    Example:
        async with ChatSession(RelayClient(url)) as session:
            await session.submit("hello")
            print(session.store.messages[-1].text)
    """

    def __init__(self, relay: RelayClient, store: ConversationStore | None = None) -> None:
        self._relay = relay
        self._store = store if store is not None else ConversationStore()
        self._dispatcher = ReplyDispatcher(self._store, relay)
        self._sending = False

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def dispatcher(self) -> ReplyDispatcher:
        return self._dispatcher

    @property
    def is_sending(self) -> bool:
        """True while a compose-driven relay call is outstanding."""
        return self._sending

    async def submit(self, text: str) -> tuple[Message, Message] | None:
        """Append a turn for the text and wait for its reply.

        Blank text is ignored: nothing is appended and no call is made.

        Returns:
            The (user_message, bot_message) pair as they stand after the
            reply landed, or None if the text was blank
        """
        if not text or not text.strip():
            return None

        user_message, bot_message = self._store.append_turn(text)
        self._sending = True
        try:
            await self._wait(self._dispatcher.start(bot_message.id, text))
        finally:
            self._sending = False

        return user_message, self._latest(bot_message)

    async def retry(self, bot_message_id: int) -> Message:
        """Resend the original prompt of a failed bot message.

        Returns:
            The bot message after the new call finished or was superseded
        """
        reset = self._store.get(bot_message_id)
        prompt = self._store.retry(bot_message_id)
        logger.debug("Retrying message %s", bot_message_id)
        await self._wait(self._dispatcher.start(bot_message_id, prompt))
        return self._latest(reset)

    async def clear(self) -> None:
        """Cancel outstanding calls and empty the conversation."""
        await self._dispatcher.cancel_all()
        self._store.clear()

    async def close(self) -> None:
        """End the session: cancel outstanding calls and close the relay client."""
        await self._dispatcher.cancel_all()
        await self._relay.close()

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _latest(self, message: Message) -> Message:
        try:
            return self._store.get(message.id)
        except UnknownMessageError:
            # Conversation was cleared while the call was outstanding
            return message

    @staticmethod
    async def _wait(task: asyncio.Task[None]) -> None:
        # asyncio.wait does not raise if the task is cancelled by a newer call
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()
