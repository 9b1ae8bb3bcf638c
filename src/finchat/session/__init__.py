"""Chat session module for finchat.

Holds the in-memory conversation and performs the request/response
exchange with the analysis service.
"""

from .models import Message, Role
from .session import (
    ERROR_PREFIX,
    EXAMPLE_PROMPTS,
    GREETING,
    ChatSession,
    SessionBusyError,
)

__all__ = [
    "ERROR_PREFIX",
    "EXAMPLE_PROMPTS",
    "GREETING",
    "ChatSession",
    "Message",
    "Role",
    "SessionBusyError",
]
