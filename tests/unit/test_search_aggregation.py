import asyncio

import pytest

from hirenet.core.search import SearchFailed, search_everything


def _run(query, companies, jobs, *, limit=10, min_length=2):
    return asyncio.run(
        search_everything(query, limit=limit, min_length=min_length, search_companies=companies, search_jobs=jobs)
    )


def _boom(query, limit):
    raise RuntimeError("data layer down")


def test_short_query_never_calls_searchers() -> None:
    calls = []

    def record(query, limit):
        calls.append(query)
        return []

    outcome = _run(" a ", record, record)
    assert calls == []
    assert outcome.companies == [] and outcome.jobs == [] and outcome.failed == []


def test_both_sides_receive_stripped_query_and_shared_limit() -> None:
    seen = []

    def companies(query, limit):
        seen.append(("companies", query, limit))
        return ["acme"]

    def jobs(query, limit):
        seen.append(("jobs", query, limit))
        return ["engineer", "designer"]

    outcome = _run("  acme ", companies, jobs, limit=7)
    assert sorted(seen) == [("companies", "acme", 7), ("jobs", "acme", 7)]
    assert outcome.companies == ["acme"]
    assert outcome.jobs == ["engineer", "designer"]
    assert outcome.total == 3


def test_failed_side_is_empty_and_reported() -> None:
    outcome = _run("acme", lambda q, n: ["acme"], _boom)
    assert outcome.companies == ["acme"]
    assert outcome.jobs == []
    assert outcome.failed == ["jobs"]


def test_all_sides_failing_raises() -> None:
    with pytest.raises(SearchFailed):
        _run("acme", _boom, _boom)
