from __future__ import annotations

"""
Title and author fields from an Amazon.co.jp product page.

Only reads HTML that is already in hand (saved page, browser extension
payload); fetching pages is not this module's job.
"""

from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from .title_reduce import clean_author_name


@dataclass(frozen=True)
class PageFields:
    title: Optional[str]
    author: str = ""


def _text(node) -> str:
    return node.get_text(" ", strip=True) if node is not None else ""


def extract_author(soup: BeautifulSoup) -> str:
    byline = soup.find(id="bylineInfo")
    if byline is None:
        return ""
    link = byline.select_one("a.a-link-normal")
    if link is not None:
        return _text(link)
    return clean_author_name(_text(byline))


def extract_page_fields(html: str) -> PageFields:
    soup = BeautifulSoup(html or "", "html.parser")
    title = _text(soup.find(id="productTitle"))
    return PageFields(title=title or None, author=extract_author(soup))
