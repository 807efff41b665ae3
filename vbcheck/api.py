from __future__ import annotations

"""
FastAPI application for the ValueBooks title checker.

- POST /resolve       title (+ optional author) -> Notice
- POST /resolve/page  product-page HTML         -> Notice
- GET  /health

Every request runs one cascade and returns exactly one Notice; catalog
failures surface as a no_match notice, never as an HTTP error.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .cascade import resolve_title
from .catalog_client import CatalogClient
from .config import HealthResponse, Notice, PageRequest, ResolveRequest
from .mapping import to_notice
from .page_source import extract_page_fields


def _catalog_client() -> CatalogClient:
    return CatalogClient()


async def run_resolution(title: str, author: str | None = None) -> Notice:
    async with _catalog_client() as client:
        result = await resolve_title(title, author, client=client)
    notice = to_notice(result)
    logger.info("Resolved {!r} -> {}", title, notice.status)
    return notice


# -----------------------
# FastAPI app
# -----------------------

app = FastAPI(title="vbcheck")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/resolve", response_model=Notice)
async def resolve(req: ResolveRequest) -> Notice:
    title = req.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="Title must be non-empty")
    return await run_resolution(title, req.author)


@app.post("/resolve/page", response_model=Notice)
async def resolve_page(req: PageRequest) -> Notice:
    fields = extract_page_fields(req.html)
    if not fields.title:
        raise HTTPException(status_code=422, detail="No product title found in page")
    logger.info("Page fields: title={!r} author={!r}", fields.title, fields.author)
    return await run_resolution(fields.title, fields.author)
