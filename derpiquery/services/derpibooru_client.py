"""Thin async HTTP client for the Derpibooru search endpoint.

One ``search`` call performs exactly one GET. Retries, rate limiting,
pagination and image downloads are left to the caller.
"""

import logging

import httpx

from derpiquery.config import settings as config
from derpiquery.models.search import SearchSettings
from derpiquery.services.image_record import SearchPage, parse_search_page
from derpiquery.services.url_builder import build_search_url

logger = logging.getLogger(__name__)


class DerpibooruError(Exception):
    """A search request failed at the HTTP level."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class DerpibooruClient:
    """Search client bound to one ``httpx.AsyncClient``.

    Use as an async context manager::

        async with DerpibooruClient() as client:
            page = await client.search(SearchSettings(query="pony"))

    Searches that carry no API key (or the -1 filter) pick up the
    configured defaults.
    """

    def __init__(
        self,
        api_key: str | None = None,
        filter_id: int | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else config.api_key
        self.filter_id = filter_id if filter_id is not None else config.filter_id
        self.timeout = timeout if timeout is not None else config.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _apply_defaults(self, search: SearchSettings) -> SearchSettings:
        update = {}
        if not search.api_key and self.api_key:
            update["api_key"] = self.api_key
        if search.filter_id == -1 and self.filter_id != -1:
            update["filter_id"] = self.filter_id
        return search.model_copy(update=update) if update else search

    async def search(self, search: SearchSettings) -> SearchPage:
        """Fetch and parse one page of search results."""
        if self._client is None:
            raise RuntimeError("DerpibooruClient must be used inside 'async with'")

        url = build_search_url(self._apply_defaults(search))
        logger.info(
            "search: q=%r page=%d perpage=%d",
            search.query, search.page, search.per_page,
        )

        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error("search: request failed: %s", e)
            raise DerpibooruError(f"Search request failed: {e}") from e

        if resp.status_code != 200:
            logger.error("search: HTTP %d", resp.status_code)
            raise DerpibooruError(
                f"Search returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        page = parse_search_page(resp.content)
        logger.info("search: %d images (total=%d)", len(page.images), page.total)
        return page
