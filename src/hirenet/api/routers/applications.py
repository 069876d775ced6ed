from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from hirenet.api.deps import EntityId, ensure_owner_or_admin, get_app_settings, get_current_user, get_db
from hirenet.api.errors import handle_failures
from hirenet.api.routers.jobs import get_job_or_404
from hirenet.api.schemas import ApplicationResponse, ApplicationStatusRequest, StatusMessage
from hirenet.config import Settings
from hirenet.core.uploads import check_extension, discard_upload, resume_policy, store_upload
from hirenet.db.models import JobApplication, User
from hirenet.db.repositories import Repository
from hirenet.types import MAX_ENTITY_ID

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["applications"])


def _get_application_or_404(repo: Repository, application_id: int) -> JobApplication:
    application = repo.get_application(application_id)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.get("/applications", response_model=list[ApplicationResponse])
def list_my_applications(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ApplicationResponse]:
    with handle_failures("Failed to fetch applications"):
        rows = Repository(db).list_user_applications(user.id)
        return [ApplicationResponse.model_validate(row) for row in rows]


@router.post("/applications", response_model=ApplicationResponse)
def create_application(
    job_id: int = Form(alias="jobId", ge=1, le=MAX_ENTITY_ID),
    cover_letter: str = Form(default="", alias="coverLetter"),
    resume: UploadFile | None = File(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ApplicationResponse:
    policy = resume_policy(settings)
    has_resume = resume is not None and bool(resume.filename)
    if has_resume:
        check_extension(resume.filename, policy)

    repo = Repository(db)
    with handle_failures("Failed to create application"):
        job = get_job_or_404(repo, job_id)
        if not job.is_active:
            raise HTTPException(status_code=400, detail="This job is no longer accepting applications")
        if repo.find_application(job_id, user.id):
            raise HTTPException(status_code=400, detail="You have already applied to this job")

        resume_url = store_upload(resume, policy, settings.upload_dir) if has_resume else None
        try:
            application = repo.create_application(
                job_id=job_id,
                applicant_id=user.id,
                cover_letter=cover_letter,
                resume_url=resume_url,
            )
        except Exception:
            if resume_url:
                discard_upload(resume_url, settings.upload_dir)
            raise
        logger.info("application %s created for job %s by %s", application.id, job_id, user.id)
        return ApplicationResponse.model_validate(application)


@router.patch("/applications/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: EntityId,
    payload: ApplicationStatusRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApplicationResponse:
    repo = Repository(db)
    with handle_failures("Failed to update application status"):
        application = _get_application_or_404(repo, application_id)
        job = repo.get_job(application.job_id)
        ensure_owner_or_admin(
            user,
            job.recruiter_id if job else None,
            "Only the recruiter who posted this job can change application status",
        )
        application = repo.set_application_status(application, payload.status)
        return ApplicationResponse.model_validate(application)


@router.delete("/applications/{application_id}", response_model=StatusMessage)
def withdraw_application(
    application_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to withdraw application"):
        application = _get_application_or_404(repo, application_id)
        ensure_owner_or_admin(user, application.applicant_id, "You can only withdraw your own applications")
        repo.delete(application)
    logger.info("application %s withdrawn by %s", application_id, user.id)
    return StatusMessage(message="Application withdrawn successfully")
