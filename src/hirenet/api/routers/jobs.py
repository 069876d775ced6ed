from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hirenet.api.deps import (
    EntityId,
    cap_limit,
    ensure_owner_or_admin,
    get_app_settings,
    get_current_user,
    get_db,
    require_recruiter,
)
from hirenet.api.errors import field_error, handle_failures
from hirenet.api.schemas import ApplicationResponse, JobCreate, JobResponse, StatusMessage, compose_location
from hirenet.config import Settings
from hirenet.db.models import Category, Job, User
from hirenet.db.repositories import JobFilters, Repository
from hirenet.types import MAX_ENTITY_ID

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["jobs"])


def get_job_or_404(repo: Repository, job_id: int) -> Job:
    job = repo.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def check_references(repo: Repository, values: dict[str, Any]) -> None:
    company_id = values.get("company_id")
    if company_id is not None and repo.get_company(company_id) is None:
        raise field_error("companyId", "Company not found")
    category_id = values.get("category_id")
    if category_id is not None and repo.get_item(Category, category_id) is None:
        raise field_error("categoryId", "Category not found")


def merge_location(job: Job, values: dict[str, Any]) -> dict[str, Any]:
    """Recompose ``location`` from the stored address merged with a patch touching city, state or country."""
    if not values.keys() & {"city", "state", "country"}:
        return values
    composed = compose_location(
        values.get("city", job.city),
        values.get("state", job.state),
        values.get("country", job.country),
    )
    if composed:
        return {**values, "location": composed}
    return values


@router.get("/jobs", response_model=list[JobResponse])
def list_jobs(
    job_type: str | None = Query(default=None, alias="jobType"),
    experience_level: str | None = Query(default=None, alias="experienceLevel"),
    location: str | None = Query(default=None),
    company_id: int | None = Query(default=None, alias="companyId", ge=1, le=MAX_ENTITY_ID),
    search: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[JobResponse]:
    repo = Repository(db)
    filters = JobFilters(
        job_type=job_type or None,
        experience_level=experience_level or None,
        location=location or None,
        company_id=company_id,
    )
    cap = cap_limit(limit, settings.job_list_default_limit, settings.job_list_max_limit)
    with handle_failures("Failed to fetch jobs"):
        if search and search.strip():
            rows = repo.search_jobs(search, filters, cap)
        else:
            rows = repo.list_jobs(filters, cap)
        return [JobResponse.model_validate(row) for row in rows]


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_job(job_id: EntityId, db: Session = Depends(get_db)) -> JobResponse:
    with handle_failures("Failed to fetch job"):
        job = get_job_or_404(Repository(db), job_id)
        return JobResponse.model_validate(job)


@router.post("/jobs", response_model=JobResponse)
def create_job(
    payload: JobCreate,
    user: User = Depends(require_recruiter),
    db: Session = Depends(get_db),
) -> JobResponse:
    repo = Repository(db)
    values = payload.model_dump()
    with handle_failures("Failed to create job"):
        check_references(repo, values)
        job = repo.create_job({**values, "recruiter_id": user.id})
        logger.info("job %s created by %s for company %s", job.id, user.id, job.company_id)
        return JobResponse.model_validate(job)


@router.put("/jobs/{job_id}", response_model=JobResponse)
def update_job(
    job_id: EntityId,
    payload: JobCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> JobResponse:
    repo = Repository(db)
    values = payload.model_dump()
    with handle_failures("Failed to update job"):
        job = get_job_or_404(repo, job_id)
        ensure_owner_or_admin(user, job.recruiter_id, "You can only update jobs you posted")
        check_references(repo, values)
        job = repo.update_job(job, values)
        return JobResponse.model_validate(job)


@router.delete("/jobs/{job_id}", response_model=StatusMessage)
def delete_job(
    job_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to delete job"):
        job = get_job_or_404(repo, job_id)
        ensure_owner_or_admin(user, job.recruiter_id, "You can only delete jobs you posted")
        repo.delete(job)
    logger.info("job %s deleted by %s", job_id, user.id)
    return StatusMessage(message="Job deleted successfully")


@router.get("/jobs/{job_id}/applications", response_model=list[ApplicationResponse])
def list_job_applications(
    job_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ApplicationResponse]:
    repo = Repository(db)
    with handle_failures("Failed to fetch job applications"):
        job = get_job_or_404(repo, job_id)
        ensure_owner_or_admin(user, job.recruiter_id, "You can only view applications for jobs you posted")
        rows = repo.list_job_applications(job_id)
        return [ApplicationResponse.model_validate(row) for row in rows]
