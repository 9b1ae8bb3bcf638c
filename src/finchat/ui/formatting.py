"""Text formatting utilities for the TUI and CLI.

Hides the details of message headers and markdown rendering.
"""

from rich.markdown import Markdown
from rich.text import Text

from ..session import Message, Role
from .config import LOG_MAX_MESSAGE_LENGTH, MESSAGE_TIMESTAMP_FORMAT

ROLE_LABELS = {
    Role.USER: "You",
    Role.ASSISTANT: "Analyst",
}


def format_message_header(msg: Message) -> str:
    """Build the header line shown above a chat message."""
    label = ROLE_LABELS.get(msg.role, msg.role.value)
    timestamp = msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
    if msg.role == Role.USER:
        return f"{label} [{timestamp}] >"
    return f"< {label} [{timestamp}]"


def render_markdown(text: str) -> Markdown:
    """Render an answer as Rich markdown for console output."""
    return Markdown(text)


def render_user_line(text: str) -> Text:
    """Render a user question for console output, ignoring markup."""
    line = Text("You: ", style="bold yellow")
    line.append(text)
    return line


def truncate(text: str, limit: int = LOG_MAX_MESSAGE_LENGTH) -> str:
    """Shorten text for single-line log output."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 3, 0)] + "..."
