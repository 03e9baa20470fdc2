"""Cache-backed page retrieval.

Every page is looked up in the on-disk cache first; only misses touch the
network. Network calls are bounded by a semaphore so a crawl that fans out
over thousands of class pages keeps a courteous load on the docs host.
Cache hits do not take the semaphore.

Concurrent fetches of the same URL are not de-duplicated: both may hit the
network and both write the same content.
"""

import asyncio

import httpx
from loguru import logger

from javadoc_harvest.cache import PageCache
from javadoc_harvest.config import Settings
from javadoc_harvest.errors import FetchError


class Fetcher:
    """Fetch documentation pages through a :class:`PageCache`.

    Use as an async context manager to let the fetcher own its HTTP client,
    or pass an existing ``httpx.AsyncClient`` (closed by the caller). A
    fetcher with neither refuses to fetch rather than open a client nobody
    closes.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        cache: PageCache | None = None,
    ):
        self._settings = settings
        self._cache = cache or PageCache(settings.get_cache_dir(), settings.docs_root)
        self._client = client
        self._owns_client = client is None
        self._semaphore = asyncio.Semaphore(max(1, settings.max_concurrency))
        self.network_calls = 0

    @property
    def cache(self) -> PageCache:
        return self._cache

    def _build_client(self) -> httpx.AsyncClient:
        transport = httpx.AsyncHTTPTransport(retries=self._settings.fetch_retries)
        return httpx.AsyncClient(
            timeout=self._settings.get_timeout(),
            transport=transport,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
        )

    async def __aenter__(self) -> "Fetcher":
        if self._client is None:
            self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> str:
        """Return the page content for *url*.

        Raises:
            ConfigurationError: *url* is outside the documentation root.
            FetchError: transport failure or non-200 response.
            RuntimeError: no client; the fetcher was not entered with
                ``async with`` and none was passed in.
        """
        if self._client is None:
            raise RuntimeError("Fetcher needs an httpx client: use 'async with Fetcher(...)'")

        # path_for validates the URL before any cache or network access
        self._cache.path_for(url)

        cached = await asyncio.to_thread(self._cache.get, url)
        if cached is not None:
            return cached

        async with self._semaphore:
            self.network_calls += 1
            try:
                response = await self._client.get(url)
            except httpx.HTTPError as e:
                raise FetchError(url, reason=f"{type(e).__name__}: {e}") from e

        if response.status_code != 200:
            raise FetchError(url, response.status_code)

        content = response.text
        logger.info(f"Caching contents of {url}")
        await asyncio.to_thread(self._cache.set, url, content)
        return content
