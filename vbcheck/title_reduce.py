from __future__ import annotations

"""
Query seeds from a raw product title.

Public helpers:

* reduce_title(raw) -> ReducedTitle
    cleaned_title: bracketed annotations removed (volume brackets kept)
    simple_title:  cleaned_title cut at the first subtitle separator, with a
                   trailing volume number carried over

* clean_author_name(byline) -> str
    First author name from a byline string, role markers removed.
"""

import re

from .pipeline_types import ReducedTitle

_OPEN_BRACKETS = "(（【["
_CLOSE_BRACKETS = ")）】]"

_BRACKET_SPAN_RE = re.compile(
    "[" + re.escape(_OPEN_BRACKETS) + "]([^" + re.escape(_CLOSE_BRACKETS) + "]*)[" + re.escape(_CLOSE_BRACKETS) + "]"
)
# "(3)", "（３）", "(3巻)", "(3 巻)", "(1.5)"
_VOLUME_INTERIOR_RE = re.compile(r"[0-9０-９.]+(?:\s*巻)?")
_BOOK_MARKER_RE = re.compile(r":\s*本")
_WHITESPACE_RE = re.compile(r"\s+")

_SUBTITLE_SEPARATOR_RE = re.compile("[:：～~－\\-—]")
_TRAILING_VOLUME_RE = re.compile(r"([0-9０-９.]+(?:\s*巻)?)$")

_AUTHOR_ROLE_RE = re.compile(r"\(著\)|（著）|\(編集\)|（編集）|著者：")
_AUTHOR_SPLIT_RE = re.compile(r"[,、]")


def _drop_annotation(match: re.Match) -> str:
    if _VOLUME_INTERIOR_RE.fullmatch(match.group(1)):
        return match.group(0)
    return ""


def clean_title(raw_title: str | None) -> str:
    if not raw_title:
        return ""
    text = _BRACKET_SPAN_RE.sub(_drop_annotation, raw_title)
    text = _BOOK_MARKER_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def simplify_title(cleaned: str) -> str:
    simple = _SUBTITLE_SEPARATOR_RE.split(cleaned, maxsplit=1)[0].strip()
    vol = _TRAILING_VOLUME_RE.search(cleaned)
    if vol and vol.group(1) not in simple:
        simple = f"{simple} {vol.group(1)}".strip()
    return simple


def reduce_title(raw_title: str | None) -> ReducedTitle:
    cleaned = clean_title(raw_title)
    return ReducedTitle(cleaned_title=cleaned, simple_title=simplify_title(cleaned))


def clean_author_name(byline: str | None) -> str:
    """'山田太郎 (著), 鈴木花子 (編集)' -> '山田太郎'. Empty means unknown."""
    if not byline:
        return ""
    text = _AUTHOR_ROLE_RE.sub("", byline)
    return _AUTHOR_SPLIT_RE.split(text, maxsplit=1)[0].strip()
