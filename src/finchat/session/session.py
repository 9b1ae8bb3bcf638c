"""Chat session: the message list and the single request/response exchange.

Hides:
- The greeting shown at start and when example prompts are offered
- How chat history is encoded for the service
- The loading flag guarding against a second in-flight request
- How service failures become assistant messages
"""

from collections.abc import Callable

from ..client import AnalystClient, AnalystServiceError
from .models import Message, Role

GREETING = (
    "Hello! I'm your AI Financial Analyst. I can provide stock prices, "
    "company news, and market analysis. How can I help you today?"
)

ERROR_PREFIX = "Sorry, something went wrong: "

# (title, subtitle, question) shown before the first question is asked
EXAMPLE_PROMPTS: list[tuple[str, str, str]] = [
    ("Get Latest Earnings", "for NVIDIA (NVDA)", "What are the latest earnings for NVDA?"),
    ("Show Stock Chart", "for Apple (AAPL)", "Show me a stock price chart for AAPL"),
]

DebugCallback = Callable[[str, str, str], None]
ChangeCallback = Callable[["ChatSession"], None]


class SessionBusyError(RuntimeError):
    """Raised when a question is sent while another is still pending."""


class ChatSession:
    """An in-memory conversation with the analysis service.

    The message list is append-only and ordered. At most one request is
    outstanding at a time; is_loading is True for its whole duration.

    Example:
        async with HttpAnalystClient() as client:
            session = ChatSession(client)
            reply = await session.send("Price of AAPL?")
    """

    def __init__(self, client: AnalystClient, greeting: str | None = GREETING) -> None:
        self._client = client
        self._messages: list[Message] = []
        self._is_loading = False
        self._on_change: ChangeCallback | None = None
        self._debug_callback: DebugCallback | None = None

        if greeting:
            self._messages.append(Message(role=Role.ASSISTANT, text=greeting))

    @property
    def client(self) -> AnalystClient:
        return self._client

    @property
    def messages(self) -> list[Message]:
        """A copy of the messages, oldest first."""
        return list(self._messages)

    @property
    def is_loading(self) -> bool:
        """True while a request is pending."""
        return self._is_loading

    @property
    def show_examples(self) -> bool:
        """True while the greeting is the only message."""
        return len(self._messages) == 1 and self._messages[0].role == Role.ASSISTANT

    def set_on_change(self, callback: ChangeCallback | None) -> None:
        """Register a callback fired after every append or loading change."""
        self._on_change = callback

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Register a callback receiving (level, component, message)."""
        self._debug_callback = callback

    def last_response(self) -> Message | None:
        """Get the most recent assistant message."""
        for msg in reversed(self._messages):
            if msg.role == Role.ASSISTANT:
                return msg
        return None

    def build_history(self) -> list[tuple[str, str]]:
        """Encode the current messages as the service's chat_history.

        A leading assistant message (the greeting) is left out. Error
        replies are ordinary assistant messages and are kept.
        """
        history = self._messages
        if history and history[0].role == Role.ASSISTANT:
            history = history[1:]
        return [msg.to_history_pair() for msg in history]

    async def send(self, text: str) -> Message | None:
        """Ask a question and append the exchange to the session.

        Args:
            text: Raw user input; surrounding whitespace is ignored

        Returns:
            The appended assistant message, or None if text was blank

        Raises:
            SessionBusyError: If a previous question is still pending
        """
        question = text.strip()
        if not question:
            return None

        if self._is_loading:
            raise SessionBusyError("A question is already pending")

        # History is taken before the question joins the list
        history = self.build_history()
        self._append(Message(role=Role.USER, text=question))
        self._set_loading(True)
        self._debug("info", f"Sending question ({len(history)} history entries)")

        try:
            reply = await self._exchange(question, history)
            self._append(reply)
        finally:
            self._set_loading(False)

        return reply

    async def _exchange(self, question: str, history: list[tuple[str, str]]) -> Message:
        """Call the service and turn the outcome into an assistant message."""
        try:
            response = await self._client.ask(question, history)
        except AnalystServiceError as e:
            self._debug("error", f"Request failed: {e}")
            return Message(role=Role.ASSISTANT, text=f"{ERROR_PREFIX}{e}", error=True)

        has_chart = response.chart_image is not None
        self._debug("info", f"Received answer (chart: {'yes' if has_chart else 'no'})")
        return Message(
            role=Role.ASSISTANT,
            text=response.text_response,
            chart_image=response.chart_image,
        )

    def _append(self, msg: Message) -> None:
        self._messages.append(msg)
        self._notify()

    def _set_loading(self, value: bool) -> None:
        self._is_loading = value
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Session", message)
