"""Global search: company and job lookups fanned out concurrently and merged."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

Searcher = Callable[[str, int], Sequence[Any]]


class SearchFailed(RuntimeError):
    """Raised when every side of a search failed."""


@dataclass
class SearchOutcome:
    companies: list[Any] = field(default_factory=list)
    jobs: list[Any] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.companies) + len(self.jobs)


def normalize_query(query: str | None) -> str:
    return (query or "").strip()


async def search_everything(
    query: str | None,
    *,
    limit: int,
    min_length: int,
    search_companies: Searcher,
    search_jobs: Searcher,
) -> SearchOutcome:
    """Run both searchers in worker threads and join their results.

    A query shorter than ``min_length`` returns an empty outcome without calling
    either searcher. When one side raises, its results are replaced by an empty
    list and its name is recorded in ``failed``; when both raise, SearchFailed.
    """
    text = normalize_query(query)
    if len(text) < min_length:
        return SearchOutcome()

    sides: dict[str, Searcher] = {"companies": search_companies, "jobs": search_jobs}
    results = await asyncio.gather(
        *(asyncio.to_thread(searcher, text, limit) for searcher in sides.values()),
        return_exceptions=True,
    )

    outcome = SearchOutcome()
    for name, result in zip(sides, results):
        if isinstance(result, BaseException):
            logger.error("search for %r failed on %s", text, name, exc_info=result)
            outcome.failed.append(name)
            continue
        setattr(outcome, name, list(result))

    if len(outcome.failed) == len(sides):
        raise SearchFailed(f"all search sides failed for {text!r}")
    return outcome
