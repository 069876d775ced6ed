from __future__ import annotations

from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hirenet.api.deps import EntityId, get_current_user, get_db
from hirenet.api.errors import handle_failures
from hirenet.api.schemas import (
    EducationRequest,
    EducationResponse,
    EducationUpdate,
    ExperienceRequest,
    ExperienceResponse,
    ExperienceUpdate,
    ProfileResponse,
    ProfileUpdateRequest,
    SkillRequest,
    SkillResponse,
    StatusMessage,
    UserResponse,
)
from hirenet.db.models import Education, Experience, Skill, User
from hirenet.db.repositories import Repository

router = APIRouter(prefix="/api", tags=["profile"])

OwnedT = TypeVar("OwnedT", Experience, Education, Skill)


def _owned_item(repo: Repository, model: type[OwnedT], item_id: int, user: User, label: str) -> OwnedT:
    item = repo.get_item(model, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    if item.user_id != user.id:
        raise HTTPException(status_code=403, detail=f"You can only change your own {label.lower()} entries")
    return item


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)) -> ProfileResponse:
    repo = Repository(db)
    with handle_failures("Failed to fetch profile"):
        user = repo.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        profile = ProfileResponse.model_validate(user)
        profile.experiences = [ExperienceResponse.model_validate(row) for row in repo.list_user_items(Experience, user.id)]
        profile.education = [EducationResponse.model_validate(row) for row in repo.list_user_items(Education, user.id)]
        profile.skills = [SkillResponse.model_validate(row) for row in repo.list_user_items(Skill, user.id)]
    return profile


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    with handle_failures("Failed to update profile"):
        updated = Repository(db).update_user(user, payload.model_dump(exclude_unset=True, exclude_none=True))
    return UserResponse.model_validate(updated)


@router.get("/experiences", response_model=list[ExperienceResponse])
def list_experiences(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[ExperienceResponse]:
    with handle_failures("Failed to fetch experiences"):
        rows = Repository(db).list_user_items(Experience, user.id)
    return [ExperienceResponse.model_validate(row) for row in rows]


@router.post("/experiences", response_model=ExperienceResponse)
def add_experience(
    payload: ExperienceRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ExperienceResponse:
    with handle_failures("Failed to add experience"):
        row = Repository(db).add_user_item(Experience, user.id, payload.model_dump())
    return ExperienceResponse.model_validate(row)


@router.put("/experiences/{experience_id}", response_model=ExperienceResponse)
def update_experience(
    experience_id: EntityId,
    payload: ExperienceUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ExperienceResponse:
    repo = Repository(db)
    with handle_failures("Failed to update experience"):
        row = _owned_item(repo, Experience, experience_id, user, "Experience")
        row = repo.update_item(row, payload.model_dump(exclude_unset=True, exclude_none=True))
    return ExperienceResponse.model_validate(row)


@router.delete("/experiences/{experience_id}", response_model=StatusMessage)
def delete_experience(
    experience_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to delete experience"):
        repo.delete(_owned_item(repo, Experience, experience_id, user, "Experience"))
    return StatusMessage(message="Experience deleted successfully")


@router.get("/education", response_model=list[EducationResponse])
def list_education(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[EducationResponse]:
    with handle_failures("Failed to fetch education"):
        rows = Repository(db).list_user_items(Education, user.id)
    return [EducationResponse.model_validate(row) for row in rows]


@router.post("/education", response_model=EducationResponse)
def add_education(
    payload: EducationRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EducationResponse:
    with handle_failures("Failed to add education"):
        row = Repository(db).add_user_item(Education, user.id, payload.model_dump())
    return EducationResponse.model_validate(row)


@router.put("/education/{education_id}", response_model=EducationResponse)
def update_education(
    education_id: EntityId,
    payload: EducationUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EducationResponse:
    repo = Repository(db)
    with handle_failures("Failed to update education"):
        row = _owned_item(repo, Education, education_id, user, "Education")
        row = repo.update_item(row, payload.model_dump(exclude_unset=True, exclude_none=True))
    return EducationResponse.model_validate(row)


@router.delete("/education/{education_id}", response_model=StatusMessage)
def delete_education(
    education_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to delete education"):
        repo.delete(_owned_item(repo, Education, education_id, user, "Education"))
    return StatusMessage(message="Education deleted successfully")


@router.get("/skills", response_model=list[SkillResponse])
def list_skills(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[SkillResponse]:
    with handle_failures("Failed to fetch skills"):
        rows = Repository(db).list_user_items(Skill, user.id)
    return [SkillResponse.model_validate(row) for row in rows]


@router.post("/skills", response_model=SkillResponse)
def add_skill(
    payload: SkillRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SkillResponse:
    with handle_failures("Failed to add skill"):
        row = Repository(db).add_user_item(Skill, user.id, payload.model_dump())
    return SkillResponse.model_validate(row)


@router.delete("/skills/{skill_id}", response_model=StatusMessage)
def delete_skill(
    skill_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to delete skill"):
        repo.delete(_owned_item(repo, Skill, skill_id, user, "Skill"))
    return StatusMessage(message="Skill deleted successfully")
