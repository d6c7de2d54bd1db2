"""Reply dispatch keyed by bot message id.

Hides how relay calls run in the background and reconcile with the
conversation store. Each bot message has at most one live task; starting
a new one for the same id cancels the previous task, and a superseded
task never touches the store.
"""

import asyncio
import logging

from ..conversation import ConversationStore
from ..errors import RelayError
from .relay import RelayClient

logger = logging.getLogger(__name__)


class ReplyDispatcher:
    """Runs one relay call per bot message as an asyncio task."""

    def __init__(self, store: ConversationStore, relay: RelayClient) -> None:
        self._store = store
        self._relay = relay
        self._tasks: dict[int, asyncio.Task[None]] = {}

    @property
    def pending_ids(self) -> frozenset[int]:
        """Ids of bot messages with a call in flight."""
        return frozenset(self._tasks)

    def in_flight(self, message_id: int) -> bool:
        return message_id in self._tasks

    def start(self, message_id: int, prompt: str) -> asyncio.Task[None]:
        """Start a relay call whose outcome updates the given bot message.

        Must be called from a running event loop. Any earlier call for the
        same id is cancelled first.
        """
        previous = self._tasks.pop(message_id, None)
        if previous is not None and not previous.done():
            logger.debug("Superseding in-flight call for message %s", message_id)
            previous.cancel()

        task = asyncio.create_task(
            self._deliver(message_id, prompt),
            name=f"relay-reply-{message_id}",
        )
        self._tasks[message_id] = task
        task.add_done_callback(lambda t: self._forget(message_id, t))
        return task

    async def cancel_all(self) -> None:
        """Cancel every in-flight call and wait for the tasks to finish."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _deliver(self, message_id: int, prompt: str) -> None:
        try:
            reply = await self._relay.send(prompt)
        except RelayError as e:
            if self._is_current(message_id):
                logger.info("Reply for message %s failed: %s", message_id, e)
                self._store.fail(message_id)
            return

        if self._is_current(message_id):
            self._store.resolve(message_id, reply)

    def _is_current(self, message_id: int) -> bool:
        return self._tasks.get(message_id) is asyncio.current_task()

    def _forget(self, message_id: int, task: asyncio.Task[None]) -> None:
        if self._tasks.get(message_id) is task:
            del self._tasks[message_id]
