"""
HTTP collaborator for the upstream market-data APIs.

This module wraps a shared ``httpx.AsyncClient`` and converts every way a
request can go wrong into the exception hierarchy in ``core.exceptions``:
- Timeouts and transport failures → NetworkError
- HTTP 401/403 → AuthenticationError
- HTTP 404 → ResourceNotFoundError
- HTTP 429 → RateLimitError
- Other error statuses → APIExtractionError (NetworkError for 5xx)
- Undecodable JSON → DataFormatError

Requests are made exactly once. Pacing between calls is the walker's job;
whether a failure ends the run or only drops an item is the runner's.
"""

import httpx
from typing import Any, Dict, Optional
from core.config import settings
from core.exceptions import (
    APIExtractionError,
    AuthenticationError,
    DataFormatError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
)
import logging

logger = logging.getLogger(__name__)

USER_AGENT = "market-snapshot-etl/1.0"


def build_http_client(
    timeout: Optional[float] = None,
    api_key: Optional[str] = None,
    **kwargs
) -> httpx.AsyncClient:
    """
    Create the process-wide HTTP client.

    Args:
        timeout: Per-request timeout in seconds (default: settings.HTTP_TIMEOUT)
        api_key: CoinGecko demo key, sent as ``x-cg-demo-api-key`` when set
    """
    headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    api_key = api_key or settings.COINGECKO_API_KEY
    if api_key:
        headers["x-cg-demo-api-key"] = api_key

    return httpx.AsyncClient(
        timeout=timeout or settings.HTTP_TIMEOUT,
        headers=headers,
        **kwargs
    )


class MarketDataClient:
    """
    Single-shot JSON GETs against an upstream provider.

    Attributes:
        http: Shared ``httpx.AsyncClient`` (owned by the caller)
        source_name: Name used in error context and log lines
    """

    def __init__(self, http: httpx.AsyncClient, source_name: str = "coingecko"):
        self.http = http
        self.source_name = source_name

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch ``url`` and decode the JSON body.

        Args:
            url: Absolute request URL
            params: Query parameters

        Returns:
            Decoded JSON value (list, dict, ...)

        Raises:
            APIExtractionError: For HTTP-level failures (see module docstring)
            NetworkError: For timeouts, transport errors and 5xx responses
            DataFormatError: If the body is not valid JSON
        """
        context = {"api_url": url, "source_name": self.source_name}

        logger.debug(f"GET {url} params={params}")

        try:
            response = await self.http.get(url, params=params)

        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timeout for {url}",
                context=context,
                original_exception=e
            )

        except httpx.HTTPError as e:
            raise NetworkError(
                f"Network error for {url}",
                context=context,
                original_exception=e
            )

        self._raise_for_status(response, context)

        try:
            return response.json()
        except ValueError as e:
            raise DataFormatError(
                "Failed to parse JSON response",
                context={**context, "response_body": response.text[:500]},
                original_exception=e
            )

    @staticmethod
    def _raise_for_status(response: httpx.Response, context: Dict[str, Any]) -> None:
        status = response.status_code
        if status < 400:
            return

        context = {**context, "status_code": status}
        url = context["api_url"]

        if status in (401, 403):
            raise AuthenticationError(f"Authentication failed for {url}", context=context)

        if status == 404:
            raise ResourceNotFoundError(f"Resource not found: {url}", context=context)

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"Rate limit exceeded for {url}",
                context=context,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        context["response_body"] = response.text[:500]  # Truncate

        if status >= 500:
            raise NetworkError(f"Server error {status} for {url}", context=context)

        raise APIExtractionError(f"Unexpected status {status} for {url}", context=context)
