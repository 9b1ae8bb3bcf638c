"""Unit tests for the chat session."""
import asyncio

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from finchat.client import (
    AnalystAPIError,
    AnalystConnectionError,
    AnalystResponse,
)
from finchat.session import (
    ERROR_PREFIX,
    GREETING,
    ChatSession,
    Message,
    Role,
    SessionBusyError,
)


async def _wait_for_call(client, count: int = 1) -> None:
    """Yield to the event loop until the fake client has seen `count` calls."""
    for _ in range(100):
        if len(client.calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError("client was never called")


class TestMessage:
    """Tests for the Message model."""

    def test_history_pair(self):
        """Test encoding a message as a (role, text) pair."""
        msg = Message(role=Role.USER, text="Price of AAPL?")
        assert msg.to_history_pair() == ("user", "Price of AAPL?")

    def test_defaults(self):
        """Test optional fields default to no chart and no error."""
        msg = Message(role=Role.ASSISTANT, text="Hi")
        assert msg.chart_image is None
        assert msg.error is False

    def test_frozen(self):
        """Test that messages cannot be changed after creation."""
        msg = Message(role=Role.USER, text="Hi")
        with pytest.raises(Exception):
            msg.text = "changed"  # type: ignore


class TestChatSessionState:
    """Tests for session state before any question is asked."""

    def test_starts_with_greeting(self, fake_client):
        """Test that a new session holds only the greeting."""
        session = ChatSession(fake_client)
        assert len(session.messages) == 1
        assert session.messages[0].role == Role.ASSISTANT
        assert session.messages[0].text == GREETING
        assert session.is_loading is False

    def test_without_greeting(self, fake_client):
        """Test that greeting=None starts an empty session."""
        session = ChatSession(fake_client, greeting=None)
        assert session.messages == []
        assert session.last_response() is None

    def test_show_examples_only_with_greeting(self, fake_client):
        """Test that examples are offered while only the greeting exists."""
        assert ChatSession(fake_client).show_examples is True
        assert ChatSession(fake_client, greeting=None).show_examples is False

    def test_messages_is_a_copy(self, fake_client):
        """Test that callers cannot mutate the session's list."""
        session = ChatSession(fake_client)
        session.messages.clear()
        assert len(session.messages) == 1

    def test_history_excludes_greeting(self, fake_client):
        """Test that the leading greeting is not sent as history."""
        assert ChatSession(fake_client).build_history() == []


class TestChatSessionSend:
    """Tests for ChatSession.send."""

    @pytest.mark.asyncio
    async def test_appends_user_then_assistant(self, fake_client):
        """Test that a question and its answer are appended in order."""
        session = ChatSession(fake_client)

        reply = await session.send("  Price of AAPL?  ")

        messages = session.messages
        assert len(messages) == 3
        assert messages[1].role == Role.USER
        assert messages[1].text == "Price of AAPL?"
        assert messages[2].role == Role.ASSISTANT
        assert messages[2].text == "**AAPL** closed at $190."
        assert reply == messages[2]
        assert session.is_loading is False
        assert session.show_examples is False

    @pytest.mark.asyncio
    async def test_no_examples_after_first_question_without_greeting(self, fake_client):
        """Test that a lone user message does not bring the examples back."""
        fake_client.gate = asyncio.Event()
        session = ChatSession(fake_client, greeting=None)

        task = asyncio.create_task(session.send("Price of AAPL?"))
        await _wait_for_call(fake_client)

        assert len(session.messages) == 1
        assert session.show_examples is False

        fake_client.gate.set()
        await task
        assert session.show_examples is False

    @pytest.mark.asyncio
    async def test_first_question_has_empty_history(self, fake_client):
        """Test that neither the greeting nor the question is in history."""
        session = ChatSession(fake_client)

        await session.send("Price of AAPL?")

        assert fake_client.calls == [("Price of AAPL?", [])]

    @pytest.mark.asyncio
    async def test_history_carries_earlier_turns(self, fake_client):
        """Test that later questions carry previous turns as pairs."""
        session = ChatSession(fake_client)

        await session.send("Price of AAPL?")
        await session.send("And MSFT?")

        question, history = fake_client.calls[1]
        assert question == "And MSFT?"
        assert history == [
            ("user", "Price of AAPL?"),
            ("assistant", "**AAPL** closed at $190."),
        ]

    @pytest.mark.asyncio
    async def test_chart_is_attached(self, fake_client, tiny_png_b64):
        """Test that a returned chart is kept on the assistant message."""
        fake_client.response = AnalystResponse(
            text_response="Here is the chart", chart_image=tiny_png_b64
        )
        session = ChatSession(fake_client)

        reply = await session.send("Chart AAPL")

        assert reply.chart_image == tiny_png_b64

    @pytest.mark.asyncio
    async def test_failure_becomes_error_message(self, fake_client):
        """Test that a service error is shown as an assistant message."""
        fake_client.error = AnalystAPIError(500, "Internal Server Error")
        session = ChatSession(fake_client)

        reply = await session.send("Price of AAPL?")

        assert reply.role == Role.ASSISTANT
        assert reply.error is True
        assert reply.text == "Sorry, something went wrong: API Error: Internal Server Error"
        assert reply.chart_image is None
        assert len(session.messages) == 3
        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_error_reply_stays_in_history(self, fake_client):
        """Test that an earlier error reply is sent back as history."""
        fake_client.error = AnalystConnectionError("Connection refused")
        session = ChatSession(fake_client)
        await session.send("Price of AAPL?")

        fake_client.error = None
        await session.send("Try again")

        _, history = fake_client.calls[1]
        assert history == [
            ("user", "Price of AAPL?"),
            ("assistant", f"{ERROR_PREFIX}Connection refused"),
        ]

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, fake_client):
        """Test that non-service exceptions are not swallowed."""
        fake_client.error = RuntimeError("bug")
        session = ChatSession(fake_client)

        with pytest.raises(RuntimeError, match="bug"):
            await session.send("Price of AAPL?")

        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_loading_while_pending(self, fake_client):
        """Test that is_loading spans the request and a second send is refused."""
        fake_client.gate = asyncio.Event()
        session = ChatSession(fake_client)

        task = asyncio.create_task(session.send("Price of AAPL?"))
        await _wait_for_call(fake_client)

        assert session.is_loading is True
        assert [m.role for m in session.messages] == [Role.ASSISTANT, Role.USER]
        with pytest.raises(SessionBusyError):
            await session.send("And MSFT?")

        fake_client.gate.set()
        await task

        assert session.is_loading is False
        assert len(session.messages) == 3
        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    async def test_on_change_sees_every_step(self, fake_client):
        """Test that on_change fires for append and loading changes."""
        session = ChatSession(fake_client)
        seen: list[tuple[int, bool]] = []
        session.set_on_change(lambda s: seen.append((len(s.messages), s.is_loading)))

        await session.send("Price of AAPL?")

        assert seen == [(2, False), (2, True), (3, True), (3, False)]

    @pytest.mark.asyncio
    async def test_debug_callback(self, fake_client):
        """Test that the session reports progress through the debug hook."""
        session = ChatSession(fake_client)
        entries: list[tuple[str, str, str]] = []
        session.set_debug_callback(lambda *entry: entries.append(entry))

        await session.send("Price of AAPL?")

        assert entries
        assert all(component == "Session" for _, component, _ in entries)

    @pytest.mark.asyncio
    async def test_last_response(self, fake_client):
        """Test that last_response returns the latest assistant message."""
        session = ChatSession(fake_client)
        assert session.last_response().text == GREETING

        await session.send("Price of AAPL?")

        assert session.last_response().text == "**AAPL** closed at $190."

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(text=st.text(alphabet=" \t\n\r", max_size=20))
    def test_blank_input_is_noop(self, fake_client, text: str):
        """Property test: whitespace-only input changes nothing."""
        session = ChatSession(fake_client)

        result = asyncio.run(session.send(text))

        assert result is None
        assert len(session.messages) == 1
        assert session.is_loading is False
        assert fake_client.calls == []
