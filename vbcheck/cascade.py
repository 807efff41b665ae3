from __future__ import annotations

"""
Resolution cascade: progressively looser catalog queries for one title.

States (tried in order, each at most once):

1. TITLE_AND_AUTHOR    '"cleaned" author'   ('"cleaned"' if author unknown)
2. TITLE_EXACT_QUOTED  '"cleaned"'          skipped if identical to 1
3. TITLE_FUZZY         'cleaned'
4. SIMPLE_TITLE_FUZZY  'simple'             skipped unless len > 1 and != cleaned

Every hit is scored against the *cleaned* title, never against the keyword
that produced it, so looser keywords widen recall without loosening the
acceptance test. First hit at or above the threshold wins; otherwise NoMatch.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional

from loguru import logger

from . import config
from .catalog_client import CatalogClient
from .config import CatalogItem
from .pipeline_types import (
    CascadeState,
    CascadeStep,
    Matched,
    MatchResult,
    NoMatch,
    ReducedTitle,
)
from .similarity import is_acceptable, similarity
from .title_reduce import reduce_title

SearchFn = Callable[[str], Awaitable[Optional[CatalogItem]]]
Scorer = Callable[[str, str], float]
SleepFn = Callable[[float], Awaitable[None]]


def plan_steps(reduced: ReducedTitle, author: str | None = None) -> List[CascadeStep]:
    """Ordered keyword attempts for one title."""
    cleaned = reduced.cleaned_title
    simple = reduced.simple_title
    author = (author or "").strip()

    quoted = f'"{cleaned}"'
    first = f"{quoted} {author}" if author else quoted

    steps = [CascadeStep(CascadeState.TITLE_AND_AUTHOR, first)]
    if first != quoted:
        steps.append(CascadeStep(CascadeState.TITLE_EXACT_QUOTED, quoted))
    steps.append(CascadeStep(CascadeState.TITLE_FUZZY, cleaned))
    if len(simple) > 1 and simple != cleaned:
        steps.append(CascadeStep(CascadeState.SIMPLE_TITLE_FUZZY, simple))
    return steps


async def _run_step(search: SearchFn, step: CascadeStep) -> Optional[CatalogItem]:
    try:
        return await search(step.keyword)
    except Exception as e:
        logger.warning("Cascade {}: search failed for {!r}: {}", step.state.value, step.keyword, e)
        return None


async def resolve(
    raw_title: str,
    author: str | None,
    search: SearchFn,
    *,
    threshold: float | None = None,
    delay: float | None = None,
    scorer: Scorer = similarity,
    sleep: SleepFn = asyncio.sleep,
) -> MatchResult:
    """
    Drive the cascade to a terminal state.

    `search` is awaited once per step, strictly in sequence; `sleep(delay)`
    runs before every query but the first.
    """
    if threshold is None:
        threshold = config.SIMILARITY_THRESHOLD
    if delay is None:
        delay = config.RETRY_DELAY_MS / 1000.0

    reduced = reduce_title(raw_title)
    baseline = reduced.cleaned_title
    if not baseline:
        logger.info("Cascade: empty title after cleaning, nothing to search")
        return NoMatch(cleaned_title="")

    attempted: List[str] = []
    for i, step in enumerate(plan_steps(reduced, author)):
        if i > 0:
            await sleep(delay)
        attempted.append(step.keyword)

        item = await _run_step(search, step)
        if item is None:
            logger.info("Cascade {}: no result for {!r}", step.state.value, step.keyword)
            continue

        score = scorer(baseline, item.title)
        if is_acceptable(score, threshold):
            logger.info(
                "Cascade {}: matched {!r} (score={:.3f})",
                step.state.value, item.title, score,
            )
            return Matched(item=item, keyword=step.keyword, state=step.state, score=score)
        logger.info(
            "Cascade {}: rejected {!r} (score={:.3f} < {:.3f})",
            step.state.value, item.title, score, threshold,
        )

    logger.info("Cascade: no match for {!r} after {} queries", baseline, len(attempted))
    return NoMatch(cleaned_title=baseline, attempted=attempted)


async def resolve_title(
    raw_title: str,
    author: str | None = None,
    client: CatalogClient | None = None,
    **kwargs,
) -> MatchResult:
    """Run the cascade against the live catalog, opening a client if needed."""
    if client is not None:
        return await resolve(raw_title, author, client.search, **kwargs)
    async with CatalogClient() as owned:
        return await resolve(raw_title, author, owned.search, **kwargs)
