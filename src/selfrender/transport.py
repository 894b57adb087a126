"""HTTP transport used to fetch rendered pages.

Provides an async httpx-backed transport that can be shared between callers.
"""

import asyncio
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Protocol, Self

import httpx

from selfrender.errors import TransportError

logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """Issues GET requests and returns the response body as text."""

    async def get_string(self, url: str, headers: Mapping[str, str]) -> str: ...


class HttpxTransport:
    """Async HTTP transport over a (possibly shared) httpx client."""

    def __init__(self, client: httpx.AsyncClient):
        """Initialize transport.

        Args:
            client: httpx AsyncClient; its default headers may be modified
        """
        self.client = client
        self._lock = asyncio.Lock()

    @classmethod
    def create(cls, timeout: float = 30.0) -> Self:
        """Create a transport owning a new httpx client.

        Args:
            timeout: Request timeout in seconds

        Returns:
            HttpxTransport instance (close with aclose())
        """
        return cls(httpx.AsyncClient(timeout=timeout))

    async def get_string(self, url: str, headers: Mapping[str, str]) -> str:
        """GET a URL and return the response body.

        Default client headers with the same names as ``headers`` are removed
        first, so a header is never sent twice. The whole sequence runs under
        a lock, so concurrent callers cannot see each other's headers.

        Args:
            url: Absolute URL to fetch
            headers: Request headers to send

        Returns:
            Response body text

        Raises:
            TransportError: On network failure or non-success status
        """
        async with self._lock:
            for name in headers:
                self.client.headers.pop(name, None)

            try:
                response = await self.client.get(url, headers=dict(headers))
                if response.status_code >= 400:
                    logger.error(f"Error response from {url}: {response.text}")
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise TransportError(
                    url,
                    f"GET {url} failed with status {e.response.status_code}",
                    status_code=e.response.status_code,
                ) from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise TransportError(url, f"GET {url} failed: {e}") from e

        return response.text

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
