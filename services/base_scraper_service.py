from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

import httpx

T = TypeVar("T")
R = TypeVar("R")


class BaseScraperService:
    """
    Shared base class for upstream HTTP access.

    Owns the ``httpx.AsyncClient`` lifecycle and a semaphore that bounds
    concurrent requests issued through :meth:`gather_bounded`. There are no
    retries: a failed request raises to the caller.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        timeout_s: Optional[float] = None,
        max_concurrency: int = 5,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Args:
            user_agent: User-Agent string for HTTP requests
            timeout_s: Request timeout in seconds; None waits indefinitely
            max_concurrency: Ceiling for concurrent requests in gather_bounded()
            headers: Extra default headers sent with every request
        """
        self.user_agent = user_agent
        self.timeout_s = timeout_s
        self.max_concurrency = max(1, max_concurrency)
        self.headers = dict(headers or {})
        self._client: Optional[httpx.AsyncClient] = None
        self._sem = asyncio.Semaphore(self.max_concurrency)

    async def __aenter__(self) -> "BaseScraperService":
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_s),
            headers={"User-Agent": self.user_agent, **self.headers},
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()

    async def fetch(self, url: str, *, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """
        GET *url* and return the response.

        Raises:
            RuntimeError: if used outside ``async with``
            httpx.HTTPError: on transport errors and non-2xx responses
        """
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} HTTP client not initialized")

        response = await self._client.get(url, headers=headers)
        response.raise_for_status()
        return response

    async def fetch_html(self, url: str, *, headers: Optional[Dict[str, str]] = None) -> str:
        response = await self.fetch(url, headers=headers)
        return response.text

    async def fetch_json(self, url: str, *, headers: Optional[Dict[str, str]] = None) -> Any:
        """GET *url* and decode the JSON body (``ValueError`` on invalid JSON)."""
        response = await self.fetch(url, headers=headers)
        return response.json()

    async def gather_bounded(
        self,
        func: Callable[[T], Awaitable[R]],
        items: Iterable[T],
    ) -> List[R]:
        """
        Run ``func(item)`` for every item concurrently, at most
        ``max_concurrency`` at a time. Results keep the order of *items*;
        the first exception propagates.
        """

        async def _run(item: T) -> R:
            async with self._sem:
                return await func(item)

        return list(await asyncio.gather(*(_run(item) for item in items)))
