import json
from typing import Any

import httpx
from pydantic import ValidationError

from .base import AnalystClient
from .errors import AnalystAPIError, AnalystConnectionError, AnalystResponseError
from .models import AnalystRequest, AnalystResponse

API_URL = "https://financial-agent-service-597955193973.us-central1.run.app/chat"


class HttpAnalystClient(AnalystClient):
    """Financial-analysis client speaking JSON over HTTP POST.

    Hidden design decisions:
    - One persistent httpx.AsyncClient per instance
    - No timeout and no retries unless configured
    - Error detail extraction from non-2xx bodies
    """

    def __init__(
        self,
        api_url: str = API_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any
    ):
        """Initialize the HTTP client.

        Args:
            api_url: Endpoint receiving the POSTed question
            timeout: Seconds before giving up (None waits forever)
            transport: Optional httpx transport, used by tests
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._api_url = api_url
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
            **client_kwargs
        )

    @property
    def endpoint(self) -> str:
        return self._api_url

    async def ask(
        self,
        question: str,
        chat_history: list[tuple[str, str]],
    ) -> AnalystResponse:
        """POST the question and decode the answer.

        Args:
            question: The new user question
            chat_history: Earlier turns as (role, text) pairs

        Returns:
            Decoded AnalystResponse

        Raises:
            AnalystConnectionError: If no HTTP response was received
            AnalystAPIError: If the service answered with a non-2xx status
            AnalystResponseError: If a 2xx body is not a valid response object
        """
        request = AnalystRequest(question=question, chat_history=chat_history)

        try:
            response = await self._client.post(
                self._api_url,
                json=request.model_dump(mode="json"),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AnalystConnectionError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise AnalystAPIError(response.status_code, _error_detail(response))

        try:
            data = response.json()
        except ValueError as e:
            raise AnalystResponseError(f"Invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise AnalystResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        try:
            return AnalystResponse.model_validate(data)
        except ValidationError as e:
            raise AnalystResponseError(f"Malformed response: {e}") from e

    async def ping(self) -> int:
        """Send a GET to the endpoint; any HTTP answer counts as reachable.

        The chat endpoint normally rejects GET with 405, which still shows
        the service is up.
        """
        try:
            response = await self._client.get(self._api_url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AnalystConnectionError(str(e) or type(e).__name__) from e
        return response.status_code

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()


def _error_detail(response: httpx.Response) -> str | None:
    """Pick the most specific description of a failed response.

    Order: the JSON body's "detail" field, then the reason phrase.
    Returns None when neither is available so the caller falls back to
    the status code.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    detail = body.get("detail") if isinstance(body, dict) else None
    if detail and not isinstance(detail, str):
        detail = json.dumps(detail)

    return detail or response.reason_phrase or None
