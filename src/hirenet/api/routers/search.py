from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, sessionmaker

from hirenet.api.deps import cap_limit, get_app_settings, get_session_factory
from hirenet.api.schemas import CompanyResponse, JobResponse, SearchResponse
from hirenet.config import Settings
from hirenet.core.search import SearchFailed, search_everything
from hirenet.db.repositories import Repository

router = APIRouter(prefix="/api", tags=["search"])


def _company_searcher(factory: sessionmaker[Session]):
    def run(query: str, limit: int) -> list[CompanyResponse]:
        with factory() as session:
            rows = Repository(session).search_companies(query, limit)
            return [CompanyResponse.model_validate(row) for row in rows]

    return run


def _job_searcher(factory: sessionmaker[Session]):
    def run(query: str, limit: int) -> list[JobResponse]:
        with factory() as session:
            rows = Repository(session).search_jobs(query, limit=limit)
            return [JobResponse.model_validate(row) for row in rows]

    return run


async def _search(query: str | None, limit: int | None, settings: Settings, factory: sessionmaker[Session]) -> SearchResponse:
    cap = cap_limit(limit, settings.search_result_limit, settings.search_result_max_limit)
    try:
        outcome = await search_everything(
            query,
            limit=cap,
            min_length=settings.search_min_query_length,
            search_companies=_company_searcher(factory),
            search_jobs=_job_searcher(factory),
        )
    except SearchFailed as exc:
        raise HTTPException(status_code=500, detail="Search failed") from exc
    return SearchResponse(
        companies=outcome.companies,
        jobs=outcome.jobs,
        total=outcome.total,
        failed=outcome.failed,
    )


@router.get("/search", response_model=SearchResponse)
async def global_search(
    q: str | None = Query(default=None),
    query: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
    factory: sessionmaker[Session] = Depends(get_session_factory),
) -> SearchResponse:
    return await _search(q or query, limit, settings, factory)


@router.get("/search/{query}", response_model=SearchResponse)
async def global_search_path(
    query: str,
    limit: int | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
    factory: sessionmaker[Session] = Depends(get_session_factory),
) -> SearchResponse:
    return await _search(query, limit, settings, factory)
