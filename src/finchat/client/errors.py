"""Exceptions raised by analyst clients.

Callers that only need to show the failure catch AnalystServiceError;
str() of any of these is the text shown to the user.
"""


class AnalystServiceError(Exception):
    """Base exception for failed calls to the analysis service."""


class AnalystAPIError(AnalystServiceError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API Error: {detail or status_code}")


class AnalystConnectionError(AnalystServiceError):
    """The request never produced an HTTP response."""


class AnalystResponseError(AnalystServiceError):
    """A 2xx response whose body could not be understood."""
