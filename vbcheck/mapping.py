from __future__ import annotations
"""
Mapping from a terminal cascade result to the Notice payload.

A renderer (browser bar, API response, CLI output) receives exactly one
Notice per resolution and needs nothing else to draw it.
"""

from urllib.parse import quote, urlencode

from .config import (
    CONDITIONS_STOCK,
    DISPLAY_TITLE_MAX,
    OUT_OF_STOCK_TEXT,
    PRICE_SUFFIX,
    PRODUCT_PAGE_URL,
    SEARCH_PAGE_URL,
    CatalogItem,
    Notice,
)
from .pipeline_types import Matched, MatchResult, NoMatch


def manual_search_url(keyword: str) -> str:
    query = urlencode(
        {"keyword": keyword, "conditions_stock": CONDITIONS_STOCK}, quote_via=quote
    )
    return f"{SEARCH_PAGE_URL}?{query}"


def product_url(catalog_id: str) -> str:
    return f"{PRODUCT_PAGE_URL}{catalog_id}"


def truncate_title(title: str, limit: int = DISPLAY_TITLE_MAX) -> str:
    if len(title) > limit:
        return title[:limit] + "..."
    return title


def is_in_stock(item: CatalogItem) -> bool:
    # The API reports a zero/absent minimum price for sold-out titles
    return item.price is not None and item.price > 0


def format_price(item: CatalogItem) -> str:
    if not is_in_stock(item):
        return OUT_OF_STOCK_TEXT
    price = item.price
    if price.is_integer():
        return f"{int(price):,}{PRICE_SUFFIX}"
    return f"{price:,.2f}{PRICE_SUFFIX}"


def matched_notice(result: Matched) -> Notice:
    item = result.item
    link = product_url(item.catalog_id) if item.catalog_id else manual_search_url(result.keyword)
    in_stock = is_in_stock(item)
    return Notice(
        status="matched",
        link_url=link,
        display_title=truncate_title(item.title),
        in_stock=in_stock,
        price=item.price if in_stock else None,
        price_text=format_price(item),
        matched_keyword=result.keyword,
    )


def no_match_notice(result: NoMatch) -> Notice:
    return Notice(
        status="no_match",
        link_url=manual_search_url(result.cleaned_title),
        search_seed=result.cleaned_title,
    )


def to_notice(result: MatchResult) -> Notice:
    if isinstance(result, Matched):
        return matched_notice(result)
    return no_match_notice(result)
