"""Data models for the chat session.

These models define the message list shown to the user, independent of
how it is rendered or sent over the wire.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message.

    Messages have no identity beyond their position in the session.
    The timestamp is for display only and never leaves the process.
    """

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who wrote the message")
    text: str = Field(description="Message body, markdown for assistant replies")
    chart_image: str | None = Field(
        default=None,
        description="Optional base64-encoded PNG attached to an assistant reply"
    )
    error: bool = Field(
        default=False,
        description="True for assistant replies standing in for a failed request"
    )
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_history_pair(self) -> tuple[str, str]:
        """Encode as the (role, text) pair the service expects."""
        return (self.role.value, self.text)
