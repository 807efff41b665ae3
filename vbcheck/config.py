from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# Matching policy
# ---------------------------

# Minimum similarity between the cleaned page title and a catalog title
DEFAULT_SIMILARITY_THRESHOLD = 0.35
SIMILARITY_THRESHOLD = float(
    os.getenv("VB_SIMILARITY_THRESHOLD", str(DEFAULT_SIMILARITY_THRESHOLD))
)

# Containment shortcut only applies when both keys are longer than this
CONTAINMENT_MIN_LENGTH = 2

# Pause between consecutive catalog queries (politeness, not correctness)
DEFAULT_RETRY_DELAY_MS = 500
RETRY_DELAY_MS = int(os.getenv("VB_RETRY_DELAY_MS", str(DEFAULT_RETRY_DELAY_MS)))


# ---------------------------
# ValueBooks endpoints
# ---------------------------

VALUEBOOKS_BASE_URL = "https://www.valuebooks.jp"
SEARCH_API_URL = f"{VALUEBOOKS_BASE_URL}/api/search"
SEARCH_PAGE_URL = f"{VALUEBOOKS_BASE_URL}/search"
PRODUCT_PAGE_URL = f"{VALUEBOOKS_BASE_URL}/bp/"

# "0" = do not restrict results to in-stock items
CONDITIONS_STOCK = "0"


# ---------------------------
# HTTP hardening
# ---------------------------

HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = 7.0
HTTP_ACCEPT = "application/json, text/plain, */*"
HTTP_USER_AGENT = os.getenv(
    "VB_USER_AGENT",
    "vbcheck/1.0 (+https://github.com/kamijyojapan/amazon-to-valuebooks)",
)


# ---------------------------
# Presentation
# ---------------------------

DISPLAY_TITLE_MAX = 30
OUT_OF_STOCK_TEXT = "在庫なし"
PRICE_SUFFIX = "円"


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class CatalogItem(BaseModel):
    """
    Top search hit as read from the ValueBooks search API.
    Only the fields the matcher and the notice need are kept.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    price: Optional[float] = None  # min_sell_price; None means out of stock
    catalog_id: Optional[str] = None
    product_code: Optional[str] = None


class Notice(BaseModel):
    """
    The single payload handed to whatever renders the outcome.
    """

    status: Literal["matched", "no_match"]
    link_url: str
    display_title: Optional[str] = None
    in_stock: bool = False
    price: Optional[float] = None
    price_text: Optional[str] = None
    matched_keyword: Optional[str] = None
    search_seed: Optional[str] = None


class ResolveRequest(BaseModel):
    title: str = Field(..., min_length=1)
    author: Optional[str] = None


class PageRequest(BaseModel):
    html: str = Field(..., min_length=1)


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
