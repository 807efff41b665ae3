from __future__ import annotations

"""
ValueBooks search API client.

One keyword in, at most one CatalogItem out. Every failure mode (transport
error, non-200, bad JSON, empty result list, unusable first entry) is logged
and collapses to None; the caller decides what to do next.
"""

import math
import re
from typing import Any, Optional

import httpx
from loguru import logger

from .config import (
    CONDITIONS_STOCK,
    HTTP_ACCEPT,
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    HTTP_USER_AGENT,
    SEARCH_API_URL,
    CatalogItem,
)


_HEADERS = {"Accept": HTTP_ACCEPT, "User-Agent": HTTP_USER_AGENT}
# "1,280", "1，280", "1280円"
_PRICE_NOISE_RE = re.compile(r"[,，円\s]")


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT),
    )


def _coerce_price(val: Any) -> Optional[float]:
    if val is None or isinstance(val, bool):
        return None
    s = _PRICE_NOISE_RE.sub("", str(val))
    try:
        price = float(s)
    except ValueError:
        return None
    return price if math.isfinite(price) else None


def _coerce_id(val: Any) -> Optional[str]:
    if val is None or isinstance(val, bool):
        return None
    s = str(val).strip()
    return s or None


def search_params(keyword: str) -> dict[str, str]:
    return {
        "page": "1",
        "search_word": keyword,
        "conditions_stock": CONDITIONS_STOCK,
    }


def parse_top_item(payload: Any) -> Optional[CatalogItem]:
    """Pull the first search hit out of a decoded API response."""
    if not isinstance(payload, dict):
        return None
    items = payload.get("items")
    if not isinstance(items, list) or not items:
        return None

    top = items[0]
    if not isinstance(top, dict):
        return None
    title = top.get("title")
    if not isinstance(title, str) or not title.strip():
        return None

    return CatalogItem(
        title=title,
        price=_coerce_price(top.get("min_sell_price")),
        catalog_id=_coerce_id(top.get("vs_catalog_id")),
        product_code=_coerce_id(top.get("productCode")),
    )


class CatalogClient:
    """
    Async client for the search endpoint.

    Use as an async context manager. When an httpx.AsyncClient is passed in,
    its lifecycle stays with the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = SEARCH_API_URL,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self.base_url = base_url

    async def __aenter__(self) -> "CatalogClient":
        if self._client is None:
            self._client = _http_client()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, keyword: str) -> Optional[CatalogItem]:
        if self._client is None:
            # used outside "async with": one-shot client, closed right away
            async with _http_client() as client:
                return await self._search(client, keyword)
        return await self._search(self._client, keyword)

    async def _search(self, client: httpx.AsyncClient, keyword: str) -> Optional[CatalogItem]:
        try:
            r = await client.get(
                self.base_url, params=search_params(keyword), headers=_HEADERS
            )
        except httpx.HTTPError as e:
            logger.warning("Catalog search transport error for {!r}: {}", keyword, e)
            return None

        if r.status_code != 200:
            logger.warning("Catalog search: HTTP {} for {!r}", r.status_code, keyword)
            return None

        try:
            payload = r.json()
        except ValueError as e:
            logger.warning("Catalog search: malformed JSON for {!r}: {}", keyword, e)
            return None

        item = parse_top_item(payload)
        if item is None:
            logger.debug("Catalog search: no usable hit for {!r}", keyword)
        else:
            logger.debug("Catalog search: top hit for {!r} -> {!r}", keyword, item.title)
        return item
