from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hirenet.api.deps import EntityId, get_current_user, get_db, require_admin
from hirenet.api.errors import field_error, handle_failures
from hirenet.api.routers.jobs import check_references, get_job_or_404, merge_location
from hirenet.api.schemas import (
    AdminStatsResponse,
    JobResponse,
    JobUpdate,
    VendorCreate,
    VendorResponse,
    VendorStatusRequest,
)
from hirenet.db.models import User
from hirenet.db.repositories import Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["vendors", "admin"])


@router.post("/vendors", response_model=VendorResponse, status_code=201)
def add_vendor(
    payload: VendorCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> VendorResponse:
    repo = Repository(db)
    with handle_failures("Failed to add vendor"):
        if repo.get_company(payload.company_id) is None:
            raise field_error("companyId", "Company not found")
        vendor = repo.add_vendor(added_by=user.id, values=payload.model_dump())
    logger.info("vendor %s added for company %s by %s", vendor.id, vendor.company_id, user.id)
    return VendorResponse.model_validate(vendor)


@router.get("/companies/{company_id}/vendors", response_model=list[VendorResponse])
@router.get("/clients/{company_id}/vendors", response_model=list[VendorResponse])
def list_company_vendors(company_id: EntityId, db: Session = Depends(get_db)) -> list[VendorResponse]:
    with handle_failures("Failed to fetch vendors"):
        rows = Repository(db).list_company_vendors(company_id)
    return [VendorResponse.model_validate(row) for row in rows]


@router.get("/admin/vendors/pending", response_model=list[VendorResponse])
def list_pending_vendors(_: User = Depends(require_admin), db: Session = Depends(get_db)) -> list[VendorResponse]:
    with handle_failures("Failed to fetch pending vendors"):
        rows = Repository(db).list_pending_vendors()
    return [VendorResponse.model_validate(row) for row in rows]


@router.patch("/admin/vendors/{vendor_id}/status", response_model=VendorResponse)
def update_vendor_status(
    vendor_id: EntityId,
    payload: VendorStatusRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> VendorResponse:
    repo = Repository(db)
    with handle_failures("Failed to update vendor status"):
        vendor = repo.get_vendor(vendor_id)
        if vendor is None:
            raise HTTPException(status_code=404, detail="Vendor not found")
        vendor = repo.set_vendor_status(vendor, payload.status, admin.id)
    return VendorResponse.model_validate(vendor)


@router.patch("/admin/jobs/{job_id}", response_model=JobResponse)
def admin_update_job(
    job_id: EntityId,
    payload: JobUpdate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> JobResponse:
    repo = Repository(db)
    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    with handle_failures("Failed to update job"):
        job = get_job_or_404(repo, job_id)
        check_references(repo, values)
        job = repo.update_job(job, merge_location(job, values))
        return JobResponse.model_validate(job)


@router.get("/admin/stats", response_model=AdminStatsResponse)
def admin_stats(_: User = Depends(require_admin), db: Session = Depends(get_db)) -> AdminStatsResponse:
    repo = Repository(db)
    with handle_failures("Failed to fetch stats"):
        return AdminStatsResponse(
            active_jobs=repo.count_active_jobs(),
            total_users=repo.count_users(),
            total_companies=repo.count_companies(),
            pending_companies=repo.count_companies("pending"),
            total_applications=repo.count_applications(),
        )
