from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from . import config
from .cascade import resolve_title
from .config import Notice
from .mapping import to_notice
from .page_source import extract_page_fields


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="vbcheck",
        description="Look up a book title on ValueBooks and print the match notice as JSON.",
    )
    ap.add_argument("title", nargs="?", help="Raw product title")
    ap.add_argument("--author", default=None, help="Author display name")
    ap.add_argument("--page", type=Path, default=None,
                    help="Saved product page HTML to read title/author from")
    ap.add_argument("--threshold", type=float, default=config.SIMILARITY_THRESHOLD)
    ap.add_argument("--delay-ms", type=int, default=config.RETRY_DELAY_MS,
                    help="Pause between consecutive catalog queries")
    ap.add_argument("--log-level", default="WARNING")
    return ap


async def _run(title: str, author: Optional[str], threshold: float, delay_ms: int) -> Notice:
    result = await resolve_title(
        title, author, threshold=threshold, delay=delay_ms / 1000.0
    )
    return to_notice(result)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    _configure_logging(args.log_level)

    title, author = args.title, args.author
    if args.page is not None:
        try:
            html = args.page.read_text(encoding="utf-8")
        except OSError as e:
            ap.error(f"cannot read --page {args.page}: {e}")
        fields = extract_page_fields(html)
        title = title or fields.title
        author = author or fields.author
    if not title or not title.strip():
        ap.error("a title (or --page with a product title) is required")

    notice = asyncio.run(_run(title.strip(), author, args.threshold, args.delay_ms))
    print(notice.model_dump_json(indent=2, exclude_none=True))
    return 0 if notice.status == "matched" else 1


if __name__ == "__main__":
    sys.exit(main())
