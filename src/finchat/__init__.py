"""
finchat: a terminal chat client for the AI Financial Analyst service.

Questions go to a remote analysis service over HTTP; answers come back as
markdown with an optional chart image. Each package hides one design
decision: the wire client, the chat session, the terminal UI, the CLI.
"""

__version__ = "0.1.0"

from .client import (
    AnalystClient,
    AnalystResponse,
    AnalystServiceError,
    HttpAnalystClient,
    create_analyst_client,
)
from .session import ChatSession, Message, Role

__all__ = [
    "AnalystClient",
    "AnalystResponse",
    "AnalystServiceError",
    "ChatSession",
    "HttpAnalystClient",
    "Message",
    "Role",
    "create_analyst_client",
]
