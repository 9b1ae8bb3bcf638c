"""Pytest configuration and shared fixtures."""
import asyncio
import os

import httpx
import pytest

from finchat.client import AnalystClient, AnalystResponse, HttpAnalystClient

# 1x1 transparent PNG
TINY_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

TEST_API_URL = "http://analyst.test/chat"


class FakeAnalystClient(AnalystClient):
    """In-memory analyst client recording every question.

    Set `error` to make ask() raise, or `gate` to hold ask() until the
    event is set.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[tuple[str, str]]]] = []
        self.response = AnalystResponse(text_response="**AAPL** closed at $190.")
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def ask(self, question, chat_history):
        self.calls.append((question, list(chat_history)))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def live_api_url():
    """Return the service URL for integration tests, if configured."""
    return os.getenv("FINCHAT_API_URL")


@pytest.fixture
def tiny_png_b64():
    """Return a valid base64-encoded PNG."""
    return TINY_PNG_B64


@pytest.fixture
def fake_client():
    """Return a fake analyst client answering with markdown text."""
    return FakeAnalystClient()


@pytest.fixture
def recorded_requests():
    """Collect requests seen by mock transports."""
    return []


@pytest.fixture
def make_http_client(recorded_requests):
    """Build an HttpAnalystClient whose requests go to a handler.

    The handler receives the httpx.Request and returns an httpx.Response
    (or raises an httpx exception).
    """
    def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return HttpAnalystClient(
            api_url=TEST_API_URL,
            transport=httpx.MockTransport(_record),
        )

    return _make
