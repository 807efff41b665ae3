"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from .config import CatalogItem


class CascadeState(str, Enum):
    """Query states of the resolution cascade, in the order they are tried."""

    TITLE_AND_AUTHOR = "title_and_author"
    TITLE_EXACT_QUOTED = "title_exact_quoted"
    TITLE_FUZZY = "title_fuzzy"
    SIMPLE_TITLE_FUZZY = "simple_title_fuzzy"


@dataclass(frozen=True)
class ReducedTitle:
    """Two query seeds derived from one raw page title."""

    cleaned_title: str
    simple_title: str


@dataclass(frozen=True)
class CascadeStep:
    state: CascadeState
    keyword: str


@dataclass(frozen=True)
class Matched:
    """Terminal state: a catalog item cleared the similarity threshold."""

    item: CatalogItem
    keyword: str
    state: CascadeState
    score: float


@dataclass(frozen=True)
class NoMatch:
    """Terminal state: every step came back empty or below threshold."""

    cleaned_title: str
    attempted: List[str] = field(default_factory=list)


MatchResult = Union[Matched, NoMatch]
