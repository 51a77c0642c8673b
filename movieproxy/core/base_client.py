import asyncio
from typing import Any

import httpx
from loguru import logger

from movieproxy.core.errors import DecodeError, NetworkError, UpstreamStatusError


class BaseClient:
    """
    Base asynchronous HTTP client with optional retry logic and logging.

    Transport failures surface as NetworkError, non-success responses as
    UpstreamStatusError and undecodable bodies as DecodeError.
    """

    def __init__(
        self, base_url: str = "", timeout: float = 10.0, max_retries: int = 1, headers: dict[str, str] | None = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.headers = headers or {}
        self._client: httpx.AsyncClient | None = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, headers=self.headers, follow_redirects=True
        )

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = self._build_client()
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, max_tries: int | None = None, **kwargs) -> httpx.Response:
        """Internal request handler with retry logic."""
        client = await self.get_client()
        tries = max_tries or self.max_retries
        last_exception: Exception | None = None

        for attempt in range(1, tries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                last_exception = e
                if attempt < tries:
                    wait_time = 0.5 * (2 ** (attempt - 1))  # Exponential backoff
                    logger.warning(
                        f"Request failed ({method} {url}): {str(e)}. "
                        f"Retrying in {wait_time}s... (Attempt {attempt}/{tries})"
                    )
                    await asyncio.sleep(wait_time)
                elif tries > 1:
                    logger.error(f"Request failed after {tries} attempts: {str(e)}")

        if isinstance(last_exception, httpx.HTTPStatusError):
            raise UpstreamStatusError(
                last_exception.response.status_code, str(last_exception.request.url)
            ) from last_exception
        if last_exception:
            raise NetworkError(str(last_exception) or type(last_exception).__name__) from last_exception
        raise NetworkError("Request failed for unknown reasons")

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> Any:
        """Perform a GET request and return the JSON response."""
        response = await self._request("GET", url, params=params, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response from {response.request.url} is not valid JSON: {e}") from e
