from abc import ABC, abstractmethod
from typing import Any

from .models import AnalystResponse


class AnalystClient(ABC):
    """Abstract base class for financial-analysis service clients.

    This module hides the design decision of how a question reaches the
    analysis service. Implementations must handle:
    - Transport setup and connection reuse
    - Request/response format conversion
    - Turning every failure into an AnalystServiceError

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            response = await client.ask("Price of AAPL?", [])
    """

    @abstractmethod
    async def ask(
        self,
        question: str,
        chat_history: list[tuple[str, str]],
    ) -> AnalystResponse:
        """Send one question to the service.

        Args:
            question: The new user question
            chat_history: Earlier turns as (role, text) pairs, oldest first

        Returns:
            AnalystResponse with the answer text and optional chart

        Raises:
            AnalystServiceError: On any transport or service failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def ping(self) -> int | None:
        """Check that the service can be reached without asking a question.

        Returns:
            An HTTP status code, or None if this client cannot probe

        Raises:
            AnalystConnectionError: If the service cannot be reached
        """
        return None

    @property
    def endpoint(self) -> str:
        """Human-readable description of where questions go."""
        return type(self).__name__

    async def __aenter__(self) -> "AnalystClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
