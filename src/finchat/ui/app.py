"""Main Textual TUI application.

Orchestrates the UI components and drives a ChatSession from user input.
"""

import asyncio
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..client import AnalystClient
from ..session import ChatSession, Message, Role, SessionBusyError
from .config import DEFAULT_CHART_DIR, LogLevel
from .formatting import truncate
from .images import ChartDecodeError, save_chart
from .styles import APP_CSS
from .themes import ANALYST_SLATE
from .widgets import (
    ChartPanel,
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ExamplePrompts,
    TypingIndicator,
    copy_text,
)


class FinancialAnalystApp(App):
    """Textual TUI chatting with the financial-analysis service."""

    CSS = APP_CSS
    TITLE = "AI Financial Analyst"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+n", "clear_chat", "New Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+y", "copy_chart_path", "Copy Chart Path"),
        Binding("ctrl+b", "toggle_maximize_chat", "Max Chat"),
        Binding("ctrl+l", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        client: AnalystClient,
        chart_dir: str | Path | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._chart_dir = Path(chart_dir) if chart_dir else DEFAULT_CHART_DIR
        self._log_level = log_level
        self._rendered_count = 0
        self._session = self._new_session()

    @property
    def session(self) -> ChatSession:
        return self._session

    def _new_session(self) -> ChatSession:
        session = ChatSession(self._client)
        session.set_on_change(self._on_session_change)
        session.set_debug_callback(self._on_session_debug)
        return session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ChatHistoryWidget(id="chat-history")

        with Vertical(id="right-panel"):
            yield ChartPanel(id="chart-panel")
            yield DebugPanel(id="debug-panel")

        with Vertical(id="bottom-bar"):
            yield ExamplePrompts(id="examples")
            yield TypingIndicator(id="typing-indicator")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(ANALYST_SLATE)
        self.theme = "analyst-slate"
        self.sub_title = self._client.endpoint

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.parse(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled at {log_panel.log_level.name}")

        self._sync_view()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _trace(self, level: str, component: str, message: str) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log(component, message, LogLevel.parse(level))

    def _on_session_debug(self, level: str, component: str, message: str) -> None:
        self._trace(level, component, message)

    def _on_session_change(self, session: ChatSession) -> None:
        if session is self._session:
            self._sync_view()

    def _sync_view(self) -> None:
        """Bring the widgets in line with the session state."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        for msg in self._session.messages[self._rendered_count:]:
            chat.add_message(msg, self._store_chart(msg))
            self._rendered_count += 1

        loading = self._session.is_loading
        self.query_one("#chat-input-bar", ChatInputBar).set_loading(loading)
        self.query_one("#typing-indicator", TypingIndicator).display = loading

        examples = self.query_one("#examples", ExamplePrompts)
        examples.display = self._session.show_examples
        examples.set_enabled(not loading)

    def _store_chart(self, msg: Message) -> Path | None:
        """Save a message's chart and show it in the chart panel."""
        if msg.role != Role.ASSISTANT or not msg.chart_image:
            return None
        try:
            path = save_chart(msg.chart_image, self._chart_dir)
        except (ChartDecodeError, OSError) as e:
            self._trace("error", "Chart", f"Could not save chart: {e}")
            self.notify("Chart could not be displayed", severity="warning", timeout=3)
            return None

        self._trace("info", "Chart", f"Saved chart to {path}")
        self.query_one("#chart-panel", ChartPanel).show_chart(path)
        return path

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._ask(event.value)

    def on_example_prompts_selected(self, event: ExamplePrompts.Selected) -> None:
        """Send the chosen example question."""
        self._ask(event.question)

    @work(group="ask")
    async def _ask(self, text: str) -> None:
        """Send one question as a background async worker."""
        self._trace("debug", "TUI", f"Question: '{truncate(text, 50)}'")
        try:
            reply = await self._session.send(text)
        except SessionBusyError:
            self.notify("Please wait for the current answer", severity="warning", timeout=2)
            return
        except asyncio.CancelledError:
            self._trace("warning", "TUI", "Question abandoned")
            raise
        except Exception as e:
            self._trace("error", "TUI", f"Exception: {e}")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)
            return

        if reply is None:
            return
        if reply.error:
            self.notify(truncate(reply.text, 80), severity="error", timeout=5)

    def action_clear_chat(self) -> None:
        """Start a new conversation."""
        if self._session.is_loading:
            self.notify("Please wait for the current answer", severity="warning", timeout=2)
            return
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.query_one("#chart-panel", ChartPanel).clear_charts()
        self._rendered_count = 0
        self._session = self._new_session()
        self._sync_view()
        self._trace("info", "TUI", "Started a new conversation")
        self.notify("Chat cleared", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        last = self._session.last_response()
        if last is None:
            self.notify("No response to copy", severity="warning")
            return
        copy_text(self, last.text, "Response")

    def action_copy_chart_path(self) -> None:
        """Copy the path of the displayed chart to clipboard."""
        chart = self.query_one("#chart-panel", ChartPanel).current_chart
        if chart is None:
            self.notify("No chart to copy", severity="warning")
            return
        copy_text(self, str(chart), "Chart path")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_toggle_maximize_chat(self) -> None:
        """Toggle maximize for chat panel."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        right_panel = self.query_one("#right-panel", Vertical)
        if chat.has_class("-maximized"):
            chat.remove_class("-maximized")
            right_panel.display = True
        else:
            chat.add_class("-maximized")
            right_panel.display = False


async def run_textual_tui(
    client: AnalystClient,
    chart_dir: str | Path | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        client: Analyst client used for every question
        chart_dir: Directory where returned charts are saved
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = FinancialAnalystApp(client=client, chart_dir=chart_dir, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
