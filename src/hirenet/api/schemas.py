from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from hirenet.types import (
    MAX_ENTITY_ID,
    ApplicationStatus,
    ApprovalStatus,
    ConnectionDecision,
    ConnectionStatus,
    ExperienceLevel,
    JobType,
    SelfServiceUserType,
    WorkMode,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


EntityRef = Annotated[int, Field(ge=1, le=MAX_ENTITY_ID)]


def compose_location(city: str | None, state: str | None, country: str | None) -> str | None:
    parts = [(part or "").strip() for part in (city, state, country)]
    if all(parts):
        return ", ".join(parts)
    return None


class StatusMessage(ApiModel):
    message: str


# auth and profile


class RegisterRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = ""
    last_name: str = ""
    user_type: SelfServiceUserType = "job_seeker"

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class LoginRequest(ApiModel):
    email: str
    password: str


class UserSummary(ApiModel):
    id: str
    first_name: str
    last_name: str
    headline: str
    profile_image_url: str


class UserResponse(UserSummary):
    email: str
    user_type: str
    summary: str
    location: str
    phone: str
    created_at: datetime


class AuthResponse(ApiModel):
    token: str
    user: UserResponse


class ProfileUpdateRequest(ApiModel):
    first_name: str | None = None
    last_name: str | None = None
    headline: str | None = Field(default=None, max_length=255)
    summary: str | None = None
    location: str | None = None
    phone: str | None = Field(default=None, max_length=40)
    profile_image_url: str | None = None


class ExperienceRequest(ApiModel):
    company: str = Field(min_length=1)
    title: str = Field(min_length=1)
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    is_current: bool = False
    description: str = ""


class ExperienceUpdate(ApiModel):
    company: str | None = Field(default=None, min_length=1)
    title: str | None = Field(default=None, min_length=1)
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool | None = None
    description: str | None = None


class ExperienceResponse(ExperienceRequest):
    id: int
    user_id: str


class EducationRequest(ApiModel):
    institution: str = Field(min_length=1)
    degree: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""
    grade: str = ""
    description: str = ""


class EducationUpdate(ApiModel):
    institution: str | None = Field(default=None, min_length=1)
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    grade: str | None = None
    description: str | None = None


class EducationResponse(EducationRequest):
    id: int
    user_id: str


class SkillRequest(ApiModel):
    name: str = Field(min_length=1, max_length=120)
    proficiency: str = ""
    years: int = Field(default=0, ge=0)


class SkillResponse(SkillRequest):
    id: int
    user_id: str


class ProfileResponse(UserSummary):
    user_type: str
    summary: str
    location: str
    experiences: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    skills: list[SkillResponse] = Field(default_factory=list)


# companies and vendors


class CompanyCreate(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    industry: str = ""
    website: str = ""
    logo_url: str = ""
    size: str = ""
    city: str = ""
    state: str = ""
    country: str = ""


class CompanyUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    industry: str | None = None
    website: str | None = None
    logo_url: str | None = None
    size: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class CompanySummary(ApiModel):
    id: int
    name: str
    industry: str
    logo_url: str
    city: str
    state: str
    country: str


class CompanyResponse(CompanySummary):
    description: str
    website: str
    size: str
    status: str
    user_id: str | None
    approved_by: str | None
    approved_at: datetime | None
    created_at: datetime


class CompanyStatusRequest(ApiModel):
    status: ApprovalStatus


class VendorCreate(ApiModel):
    company_id: EntityRef
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | Literal[""] = ""
    phone: str = ""
    website: str = ""
    services: str = ""


class VendorResponse(VendorCreate):
    id: int
    status: str
    added_by: str | None
    approved_by: str | None
    created_at: datetime


class VendorStatusRequest(ApiModel):
    status: ApprovalStatus


# jobs and applications


class JobCreate(ApiModel):
    company_id: EntityRef
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    requirements: str = ""
    skills: list[str] = Field(default_factory=list)
    category_id: EntityRef | None = None
    job_type: JobType = "full_time"
    employment_type: JobType | None = None
    experience_level: ExperienceLevel = "mid"
    work_mode: WorkMode = "onsite"
    location: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip_code: str = ""
    salary: str = ""
    is_active: bool = True

    @model_validator(mode="after")
    def derive_fields(self) -> "JobCreate":
        composed = compose_location(self.city, self.state, self.country)
        if composed:
            self.location = composed
        if self.employment_type is None:
            self.employment_type = self.job_type
        return self


class JobUpdate(ApiModel):
    company_id: EntityRef | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    requirements: str | None = None
    skills: list[str] | None = None
    category_id: EntityRef | None = None
    job_type: JobType | None = None
    employment_type: JobType | None = None
    experience_level: ExperienceLevel | None = None
    work_mode: WorkMode | None = None
    location: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
    salary: str | None = None
    is_active: bool | None = None


class JobResponse(ApiModel):
    id: int
    company_id: int
    recruiter_id: str | None
    category_id: int | None
    title: str
    description: str
    requirements: str
    skills: list[str]
    job_type: str
    employment_type: str
    experience_level: str
    work_mode: str
    location: str
    city: str
    state: str
    country: str
    zip_code: str
    salary: str
    is_active: bool
    application_count: int = 0
    company: CompanySummary | None = None
    created_at: datetime
    updated_at: datetime


class ApplicationResponse(ApiModel):
    id: int
    job_id: int
    applicant_id: str
    status: str
    cover_letter: str
    resume_url: str | None
    created_at: datetime
    job: JobResponse | None = None


class ApplicationStatusRequest(ApiModel):
    status: ApplicationStatus


class CompanyDetailsResponse(ApiModel):
    open_jobs: list[JobResponse]
    vendors: list[VendorResponse]


# network


class ConnectionCreate(ApiModel):
    addressee_id: str = Field(min_length=1)


class ConnectionStatusRequest(ApiModel):
    status: ConnectionDecision


class ConnectionResponse(ApiModel):
    id: int
    requester_id: str
    addressee_id: str
    status: ConnectionStatus
    created_at: datetime


class MessageCreate(ApiModel):
    receiver_id: str = Field(min_length=1)
    content: str = Field(min_length=1, max_length=5000)


class MessageResponse(ApiModel):
    id: int
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool
    created_at: datetime


class ConversationResponse(ApiModel):
    user: UserSummary
    last_message: MessageResponse
    unread_count: int


class GroupCreate(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    industry: str = ""
    is_private: bool = False


class GroupResponse(GroupCreate):
    id: int
    created_by: str
    member_count: int = 0
    created_at: datetime


# reference data, search and admin


class CategoryCreate(ApiModel):
    name: str = Field(min_length=1, max_length=120)
    description: str = ""


class CategoryResponse(CategoryCreate):
    id: int


class CountryResponse(ApiModel):
    id: int
    name: str
    code: str


class StateResponse(ApiModel):
    id: int
    country_id: int
    name: str
    code: str


class CityResponse(ApiModel):
    id: int
    state_id: int
    name: str


class SearchResponse(ApiModel):
    companies: list[CompanyResponse] = Field(default_factory=list)
    jobs: list[JobResponse] = Field(default_factory=list)
    total: int = 0
    failed: list[str] = Field(default_factory=list)


class AdminStatsResponse(ApiModel):
    active_jobs: int
    total_users: int
    total_companies: int
    pending_companies: int
    total_applications: int


class LogoUploadResponse(ApiModel):
    logo_url: str
