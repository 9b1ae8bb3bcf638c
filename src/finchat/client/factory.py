from typing import Any

from .base import AnalystClient
from .http import HttpAnalystClient


def create_analyst_client(kind: str = "http", **config: Any) -> AnalystClient:
    """Create an analyst client instance.

    This factory function hides the instantiation logic for different clients.

    Args:
        kind: Client type ('http')
        **config: Client-specific configuration
            For HTTP:
                - api_url: str (default: the hosted analysis service)
                - timeout: float | None (default: None, wait forever)
                - transport: httpx.AsyncBaseTransport | None

    Returns:
        Initialized analyst client

    Raises:
        ValueError: If client type is not supported

    Examples:
        >>> client = create_analyst_client(
        ...     "http",
        ...     api_url="http://localhost:8000/chat"
        ... )
    """
    if kind.lower() == "http":
        return HttpAnalystClient(**config)

    raise ValueError(
        f"Unsupported client: {kind}. "
        f"Supported clients: 'http'"
    )
