"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering
- Example prompt buttons and the typing indicator
- Log rendering and level filtering
- Chart display
"""

from datetime import datetime
from pathlib import Path
from typing import Any

import pyperclip
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key, Paste
from textual.message import Message
from textual.widgets import Button, Input, LoadingIndicator, Markdown, RichLog, Static
# textual_image.renderable must be imported before the app starts so the
# terminal graphics protocol is detected
import textual_image.renderable  # noqa: F401
from textual_image.widget import Image as ChartImageWidget

from ..session import EXAMPLE_PROMPTS, Role
from ..session import Message as ChatMessage
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)
from .formatting import format_message_header, truncate


def copy_text(app: Any, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        pyperclip.copy(text)
        app.notify(f"{label} copied", timeout=2)
    except pyperclip.PyperclipException:
        app.copy_to_clipboard(text)
        app.notify(f"{label} copied (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies its raw text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        copy_text(self.app, self._content, "Message")


class HistoryInput(Input):
    """Question input that recalls earlier questions with Up/Down.

    Pasted text is flattened to one line.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        # Position while browsing; len(self._history) means the draft
        self._cursor = 0
        self._draft = ""

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def _on_paste(self, event: Paste) -> None:
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event: Key) -> None:
        step = {"up": -1, "down": 1}.get(event.key)
        if step is None:
            return
        event.prevent_default()
        event.stop()
        self._recall(step)

    def _recall(self, step: int) -> None:
        """Move through the history; stepping past the newest restores the draft."""
        if not self._history:
            return
        if self._cursor == len(self._history):
            self._draft = self.value
        self._cursor = min(max(self._cursor + step, 0), len(self._history))
        if self._cursor == len(self._history):
            self.value = self._draft
        else:
            self.value = self._history[self._cursor]
        self.cursor_position = len(self.value)

    def add_to_history(self, question: str) -> None:
        """Remember a sent question, skipping immediate repeats."""
        if question and self._history[-1:] != [question]:
            self._history.append(question)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._cursor = len(self._history)
        self._draft = ""


class ChatInputBar(Horizontal):
    """Single-line question input with a Send button.

    Enter or the Send button submits. Both are disabled while loading.
    """

    class Submitted(Message):
        """Message sent when user submits a non-blank question."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._loading = False

    @property
    def loading(self) -> bool:
        return self._loading

    def compose(self) -> ComposeResult:
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="primary").with_tooltip(
            "Send question (Enter)"
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        if self._loading:
            return
        history_input = self.query_one("#chat-input", HistoryInput)
        value = history_input.value.strip()
        if not value:
            return
        history_input.add_to_history(value)
        history_input.value = ""
        self.post_message(self.Submitted(value))

    def set_loading(self, loading: bool) -> None:
        """Disable or re-enable the input and button."""
        self._loading = loading
        self.set_class(loading, "-loading")
        self.query_one("#chat-input", HistoryInput).disabled = loading
        self.query_one("#send-btn", Button).disabled = loading
        if not loading:
            self.focus_input()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class ExamplePrompts(Horizontal):
    """Example questions offered before the first question is asked."""

    class Selected(Message):
        """Message sent when an example prompt is chosen."""

        def __init__(self, question: str) -> None:
            super().__init__()
            self.question = question

    def compose(self) -> ComposeResult:
        yield Static("Try an example:", classes="examples-title")
        for index, (title, subtitle, _question) in enumerate(EXAMPLE_PROMPTS):
            yield Button(f"{title} {subtitle}", id=f"example-{index}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("example-"):
            event.stop()
            index = int(button_id.removeprefix("example-"))
            self.post_message(self.Selected(EXAMPLE_PROMPTS[index][2]))

    def set_enabled(self, enabled: bool) -> None:
        for button in self.query(Button):
            button.disabled = not enabled


class TypingIndicator(Horizontal):
    """Shown while the analyst is working on an answer."""

    def compose(self) -> ComposeResult:
        yield Static("Analyst is typing", classes="typing-label")
        yield LoadingIndicator()

    def on_mount(self) -> None:
        self.display = False


class DebugPanel(RichLog):
    """Trace log shown under the chart panel.

    Entries below the panel's LogLevel are dropped. Hidden until
    --log-level is given or Ctrl+L is pressed; clicking copies the log.
    """

    BORDER_TITLE = "Log"

    LEVEL_STYLES = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "bold red",
    }

    COMPONENT_STYLES = {
        "TUI": "cyan",
        "Session": "green",
        "Chart": "bright_yellow",
    }

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def on_mount(self) -> None:
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"{self._log_level.name} and above" if self.display else "Hidden"

    def log(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Write one entry if it passes the level threshold.

        Args:
            component: Source tag such as TUI, Session or Chart
            message: Entry text, flattened and truncated to one line
            level: Severity of the entry
        """
        level = LogLevel(level)
        if level < self._log_level:
            return
        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", "dim"),
            (f"{level.name:<7} ", self.LEVEL_STYLES[level]),
            (f"[{component}] ", self.COMPONENT_STYLES.get(component, "white")),
            truncate(message),
        ))

    def debug(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display

    def get_plain_text(self) -> str:
        return "\n".join(strip.text for strip in self.lines)

    def on_click(self, event: Click) -> None:
        event.stop()
        text = self.get_plain_text()
        if text.strip():
            copy_text(self.app, text, "Log")
        else:
            self.app.notify("Log is empty", timeout=2)


class ChartPanel(Vertical):
    """Panel showing the charts returned during the session.

    Uses textual_image.widget.Image which auto-detects the best rendering
    method: Sixel, TGP (Kitty), or halfcell fallback.
    Supports multiple charts with left/right navigation.
    """

    BORDER_TITLE = "Chart"
    BORDER_SUBTITLE = ""
    can_focus = True

    BINDINGS = [
        ("left", "prev_chart", "Prev"),
        ("right", "next_chart", "Next"),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._charts: list[Path] = []
        self._current_index: int = 0

    def compose(self) -> ComposeResult:
        yield Static("Charts returned by the analyst appear here.", id="chart-placeholder")
        yield ChartImageWidget(None, id="chart-image")

    def on_mount(self) -> None:
        self.query_one("#chart-image", ChartImageWidget).display = False

    @property
    def charts(self) -> list[Path]:
        return list(self._charts)

    @property
    def current_chart(self) -> Path | None:
        if not self._charts:
            return None
        return self._charts[self._current_index]

    def _update_subtitle(self) -> None:
        path = self.current_chart
        if path is None:
            self.border_subtitle = ""
        elif len(self._charts) > 1:
            self.border_subtitle = f"{path.name} ({self._current_index + 1}/{len(self._charts)}) [</>]"
        else:
            self.border_subtitle = path.name

    def _display_current(self) -> None:
        path = self.current_chart
        image_widget = self.query_one("#chart-image", ChartImageWidget)
        placeholder = self.query_one("#chart-placeholder", Static)
        if path is None:
            image_widget.image = None
            image_widget.display = False
            placeholder.display = True
        else:
            image_widget.image = str(path)
            image_widget.display = True
            placeholder.display = False
        self._update_subtitle()

    def show_chart(self, path: str | Path) -> None:
        """Add a chart file and jump to it."""
        chart = Path(path)
        if chart not in self._charts:
            self._charts.append(chart)
        self._current_index = self._charts.index(chart)
        self._display_current()

    def action_prev_chart(self) -> None:
        if len(self._charts) > 1:
            self._current_index = (self._current_index - 1) % len(self._charts)
            self._display_current()

    def action_next_chart(self) -> None:
        if len(self._charts) > 1:
            self._current_index = (self._current_index + 1) % len(self._charts)
            self._display_current()

    def clear_charts(self) -> None:
        """Forget all charts. Files on disk are kept."""
        self._charts.clear()
        self._current_index = 0
        self._display_current()


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history; clicking a message copies it."""

    BORDER_TITLE = "AI Financial Analyst"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0

    @property
    def message_count(self) -> int:
        return self._message_count

    def add_message(self, msg: ChatMessage, chart_path: Path | None = None) -> None:
        """Render a message below the existing ones and scroll to it."""
        self._message_count += 1
        self.mount(self._build_message(msg, chart_path))
        self.border_subtitle = f"{self._message_count} messages"
        self.call_after_refresh(self.scroll_end, animate=False)

    def clear_history(self) -> None:
        """Remove all rendered messages."""
        self._message_count = 0
        self.remove_children()
        self.border_subtitle = "Conversation history"

    def _build_message(self, msg: ChatMessage, chart_path: Path | None) -> ClickableMessage:
        classes = ["chat-message", f"{msg.role.value}-message"]
        if msg.error:
            classes.append("error-message")

        container = ClickableMessage(content=msg.text, classes=" ".join(classes))
        container.compose_add_child(
            Static(Text(format_message_header(msg)), classes="message-header")
        )

        if msg.role == Role.ASSISTANT and not msg.error:
            container.compose_add_child(Markdown(msg.text, classes="message-content"))
        else:
            container.compose_add_child(Static(Text(msg.text), classes="message-content"))

        if chart_path is not None:
            container.compose_add_child(
                Static(Text(f"Chart: {chart_path}"), classes="message-chart")
            )
        return container
