"""Unit tests for the chat session and reply dispatcher."""
import asyncio
import json

import httpx
import pytest

from conftest import make_relay
from relaychat.client import ChatSession, ReplyDispatcher
from relaychat.config import ERROR_TEXT
from relaychat.conversation import ConversationStore, MessageStatus
from relaychat.errors import InvalidTransitionError


def _prompt_of(request: httpx.Request) -> str:
    return json.loads(request.content)["prompt"]


async def _until(condition, attempts: int = 100) -> None:
    """Yield to the event loop until condition() holds."""
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


class TestSubmit:
    """Tests for ChatSession.submit."""

    @pytest.mark.asyncio
    async def test_reply_resolves_placeholder(self):
        """Scenario: "hello" answered with "hi there" marks the bot message done."""
        session = ChatSession(make_relay(lambda r: httpx.Response(200, json={"reply": "hi there"})))

        user, bot = await session.submit("hello")

        assert user.text == "hello"
        assert bot.status == MessageStatus.DONE
        assert bot.text == "hi there"
        assert session.store.messages == (user, bot)

    @pytest.mark.asyncio
    async def test_server_error_marks_placeholder_failed(self):
        """Scenario: HTTP 500 from the relay marks the bot message as error."""
        session = ChatSession(make_relay(lambda r: httpx.Response(500, json={"error": "Something went wrong."})))

        _, bot = await session.submit("hello")

        assert bot.status == MessageStatus.ERROR
        assert bot.text == ERROR_TEXT

    @pytest.mark.asyncio
    async def test_network_failure_marks_placeholder_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        session = ChatSession(make_relay(handler))

        _, bot = await session.submit("hello")

        assert bot.status == MessageStatus.ERROR

    @pytest.mark.asyncio
    async def test_undecodable_response_marks_placeholder_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.DecodingError("bad gzip stream", request=request)

        session = ChatSession(make_relay(handler))

        _, bot = await session.submit("hello")

        assert bot.status == MessageStatus.ERROR
        assert bot.text == ERROR_TEXT
        assert not session.is_sending

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    async def test_blank_submission_does_nothing(self, text):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"reply": "x"})

        session = ChatSession(make_relay(handler))

        assert await session.submit(text) is None
        assert len(session.store) == 0
        assert calls == []

    @pytest.mark.asyncio
    async def test_is_sending_while_reply_outstanding(self):
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            await release.wait()
            return httpx.Response(200, json={"reply": "late"})

        session = ChatSession(make_relay(handler))
        submit = asyncio.create_task(session.submit("hello"))

        await _until(lambda: len(session.store) == 2)
        assert session.is_sending
        assert session.store.messages[1].status == MessageStatus.PENDING

        release.set()
        await submit

        assert not session.is_sending
        assert session.store.messages[1].text == "late"

    @pytest.mark.asyncio
    async def test_injected_store_is_used(self):
        store = ConversationStore()
        session = ChatSession(make_relay(lambda r: httpx.Response(200, json={"reply": "ok"})), store=store)

        await session.submit("hello")

        assert session.store is store
        assert len(store) == 2


class TestRetry:
    """Tests for ChatSession.retry."""

    @pytest.mark.asyncio
    async def test_retry_resends_original_prompt(self):
        """Retry carries exactly the original prompt, despite later turns."""
        sent: list[str] = []
        fail_next = {"X": True}

        def handler(request: httpx.Request) -> httpx.Response:
            prompt = _prompt_of(request)
            sent.append(prompt)
            if fail_next.pop(prompt, False):
                return httpx.Response(500)
            return httpx.Response(200, json={"reply": f"re: {prompt}"})

        session = ChatSession(make_relay(handler))
        _, failed = await session.submit("X")
        await session.submit("unrelated")
        assert failed.status == MessageStatus.ERROR

        retried = await session.retry(failed.id)

        assert sent == ["X", "unrelated", "X"]
        assert retried.status == MessageStatus.DONE
        assert retried.text == "re: X"
        assert retried.original_prompt == "X"

    @pytest.mark.asyncio
    async def test_retry_can_fail_again(self):
        session = ChatSession(make_relay(lambda r: httpx.Response(502)))
        _, bot = await session.submit("X")

        retried = await session.retry(bot.id)

        assert retried.status == MessageStatus.ERROR
        assert retried.text == ERROR_TEXT

    @pytest.mark.asyncio
    async def test_retry_of_done_message_rejected(self):
        session = ChatSession(make_relay(lambda r: httpx.Response(200, json={"reply": "ok"})))
        _, bot = await session.submit("X")

        with pytest.raises(InvalidTransitionError):
            await session.retry(bot.id)

    @pytest.mark.asyncio
    async def test_retry_runs_independently_of_compose(self):
        """A retry can run while a compose-driven send is outstanding."""
        release = asyncio.Event()
        fail_next = {"X": True}

        async def handler(request: httpx.Request) -> httpx.Response:
            prompt = _prompt_of(request)
            if fail_next.pop(prompt, False):
                return httpx.Response(500)
            if prompt == "slow":
                await release.wait()
            return httpx.Response(200, json={"reply": f"re: {prompt}"})

        session = ChatSession(make_relay(handler))
        _, failed = await session.submit("X")

        compose = asyncio.create_task(session.submit("slow"))
        await _until(lambda: len(session.store) == 4)
        retried = await session.retry(failed.id)

        assert retried.status == MessageStatus.DONE
        assert session.is_sending

        release.set()
        await compose
        assert not session.is_sending


class TestReplyDispatcher:
    """Tests for ReplyDispatcher."""

    @pytest.mark.asyncio
    async def test_new_call_supersedes_previous(self):
        """Starting a call for an id cancels the earlier one; only the newer writes."""
        first_started = asyncio.Event()
        calls = []

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                first_started.set()
                await asyncio.Event().wait()  # never answers
            return httpx.Response(200, json={"reply": "second"})

        store = ConversationStore()
        dispatcher = ReplyDispatcher(store, make_relay(handler))
        _, bot = store.append_turn("X")

        first = dispatcher.start(bot.id, "X")
        await first_started.wait()
        second = dispatcher.start(bot.id, "X")
        await asyncio.wait({first, second})

        assert first.cancelled()
        assert store.get(bot.id).text == "second"
        assert not dispatcher.in_flight(bot.id)

    @pytest.mark.asyncio
    async def test_tracks_in_flight_ids(self):
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            await release.wait()
            return httpx.Response(200, json={"reply": "ok"})

        store = ConversationStore()
        dispatcher = ReplyDispatcher(store, make_relay(handler))
        _, first = store.append_turn("a")
        _, second = store.append_turn("b")

        tasks = [dispatcher.start(first.id, "a"), dispatcher.start(second.id, "b")]
        assert dispatcher.pending_ids == {first.id, second.id}

        release.set()
        await asyncio.gather(*tasks)
        assert dispatcher.pending_ids == frozenset()

    @pytest.mark.asyncio
    async def test_cancel_all_leaves_messages_pending(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.Event().wait()
            return httpx.Response(200)

        store = ConversationStore()
        dispatcher = ReplyDispatcher(store, make_relay(handler))
        _, bot = store.append_turn("a")
        dispatcher.start(bot.id, "a")

        await dispatcher.cancel_all()

        assert dispatcher.pending_ids == frozenset()
        assert store.get(bot.id).status == MessageStatus.PENDING


class TestSessionLifecycle:
    """Tests for clearing and closing a session."""

    @pytest.mark.asyncio
    async def test_clear_cancels_and_empties(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.Event().wait()
            return httpx.Response(200)

        session = ChatSession(make_relay(handler))
        submit = asyncio.create_task(session.submit("hello"))
        await _until(lambda: len(session.store) == 2)

        await session.clear()
        await asyncio.wait({submit})

        assert len(session.store) == 0
        assert session.dispatcher.pending_ids == frozenset()

    @pytest.mark.asyncio
    async def test_context_manager_closes_relay(self):
        closed = []
        relay = make_relay(lambda r: httpx.Response(200, json={"reply": "ok"}))
        original_close = relay.close

        async def close():
            closed.append(True)
            await original_close()

        relay.close = close

        async with ChatSession(relay) as session:
            await session.submit("hello")

        assert closed == [True]
