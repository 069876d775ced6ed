from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hirenet.api.deps import (
    EntityId,
    ensure_owner_or_admin,
    get_app_settings,
    get_current_user,
    get_db,
    require_admin,
)
from hirenet.api.errors import handle_failures
from hirenet.api.schemas import (
    CompanyCreate,
    CompanyDetailsResponse,
    CompanyResponse,
    CompanyStatusRequest,
    CompanyUpdate,
    JobResponse,
    VendorResponse,
)
from hirenet.config import Settings
from hirenet.db.models import Company, User
from hirenet.db.repositories import Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["companies"])


def resolve_company_query(q: str | None, limit: int | None, settings: Settings) -> tuple[str | None, int]:
    """Return the search text (None for a plain listing) and the effective row cap."""
    query = (q or "").strip()
    requested = limit or 0
    if query and query != "undefined" and len(query) >= settings.search_min_query_length:
        if requested > settings.company_sample_limit:
            return query, min(requested, settings.company_search_max_limit)
        return query, settings.company_sample_limit
    if requested > 0:
        return None, min(requested, settings.company_list_max_limit)
    return None, settings.company_sample_limit


def _get_company_or_404(repo: Repository, company_id: int) -> Company:
    company = repo.get_company(company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


def _change_status(db: Session, company_id: int, status: str, admin: User) -> CompanyResponse:
    repo = Repository(db)
    with handle_failures("Failed to update company status"):
        company = _get_company_or_404(repo, company_id)
        previous = company.status
        company = repo.set_company_status(company, status, admin.id)
    if previous != company.status:
        logger.info("company %s moved %s -> %s by %s", company.id, previous, company.status, admin.id)
    return CompanyResponse.model_validate(company)


@router.get("/companies", response_model=list[CompanyResponse])
def list_companies(
    q: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[CompanyResponse]:
    repo = Repository(db)
    query, cap = resolve_company_query(q, limit, settings)
    with handle_failures("Failed to fetch companies"):
        rows = repo.search_companies(query, cap) if query else repo.list_companies(cap)
    logger.debug("companies q=%r limit=%s -> %d rows", query, cap, len(rows))
    return [CompanyResponse.model_validate(row) for row in rows]


@router.get("/companies/all", response_model=list[CompanyResponse])
def list_all_companies(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[CompanyResponse]:
    with handle_failures("Failed to fetch all companies"):
        rows = Repository(db).list_companies(settings.company_list_max_limit)
    return [CompanyResponse.model_validate(row) for row in rows]


@router.get("/companies/pending", response_model=list[CompanyResponse])
def list_pending_companies(
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[CompanyResponse]:
    with handle_failures("Failed to fetch pending companies"):
        rows = Repository(db).list_pending_companies()
    return [CompanyResponse.model_validate(row) for row in rows]


@router.post("/companies", response_model=CompanyResponse)
def create_company(
    payload: CompanyCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CompanyResponse:
    with handle_failures("Failed to create company"):
        company = Repository(db).create_company(user_id=user.id, values=payload.model_dump())
    logger.info("company %s created by %s", company.id, user.id)
    return CompanyResponse.model_validate(company)


@router.get("/companies/{company_id}", response_model=CompanyResponse)
def get_company(company_id: EntityId, db: Session = Depends(get_db)) -> CompanyResponse:
    with handle_failures("Failed to fetch company"):
        company = _get_company_or_404(Repository(db), company_id)
    return CompanyResponse.model_validate(company)


@router.put("/companies/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: EntityId,
    payload: CompanyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CompanyResponse:
    repo = Repository(db)
    with handle_failures("Failed to update company"):
        company = _get_company_or_404(repo, company_id)
        ensure_owner_or_admin(user, company.user_id, "You can only update companies you created")
        company = repo.update_company(company, payload.model_dump(exclude_unset=True, exclude_none=True))
    return CompanyResponse.model_validate(company)


@router.get("/companies/{company_id}/details", response_model=CompanyDetailsResponse)
def get_company_details(company_id: EntityId, db: Session = Depends(get_db)) -> CompanyDetailsResponse:
    repo = Repository(db)
    with handle_failures("Failed to fetch company details"):
        _get_company_or_404(repo, company_id)
        jobs = repo.list_company_jobs(company_id, active_only=True)
        vendors = repo.list_company_vendors(company_id)
        return CompanyDetailsResponse(
            open_jobs=[JobResponse.model_validate(row) for row in jobs],
            vendors=[VendorResponse.model_validate(row) for row in vendors],
        )


@router.patch("/companies/{company_id}/status", response_model=CompanyResponse)
def update_company_status(
    company_id: EntityId,
    payload: CompanyStatusRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CompanyResponse:
    return _change_status(db, company_id, payload.status, admin)


@router.put("/companies/{company_id}/approve", response_model=CompanyResponse)
def approve_company(
    company_id: EntityId,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CompanyResponse:
    return _change_status(db, company_id, "approved", admin)


@router.put("/companies/{company_id}/reject", response_model=CompanyResponse)
def reject_company(
    company_id: EntityId,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CompanyResponse:
    return _change_status(db, company_id, "rejected", admin)
