from .base import AnalystClient
from .errors import (
    AnalystAPIError,
    AnalystConnectionError,
    AnalystResponseError,
    AnalystServiceError,
)
from .factory import create_analyst_client
from .http import API_URL, HttpAnalystClient
from .models import AnalystRequest, AnalystResponse

__all__ = [
    "API_URL",
    "AnalystAPIError",
    "AnalystClient",
    "AnalystConnectionError",
    "AnalystRequest",
    "AnalystResponse",
    "AnalystResponseError",
    "AnalystServiceError",
    "HttpAnalystClient",
    "create_analyst_client",
]
