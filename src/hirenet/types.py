from __future__ import annotations

from typing import Literal, get_args

UserType = Literal["job_seeker", "recruiter", "admin"]
SelfServiceUserType = Literal["job_seeker", "recruiter"]
ApprovalStatus = Literal["pending", "approved", "rejected"]
ConnectionStatus = Literal["pending", "accepted", "rejected"]
ConnectionDecision = Literal["accepted", "rejected"]
ApplicationStatus = Literal[
    "submitted",
    "reviewing",
    "interview",
    "offered",
    "rejected",
    "withdrawn",
]
JobType = Literal["full_time", "part_time", "contract", "internship", "temporary", "freelance"]
ExperienceLevel = Literal["entry", "mid", "senior", "lead", "executive"]
WorkMode = Literal["onsite", "remote", "hybrid"]
GroupRole = Literal["admin", "member"]

USER_TYPES: tuple[str, ...] = get_args(UserType)
APPROVAL_STATUSES: tuple[str, ...] = get_args(ApprovalStatus)

# largest value a signed 64-bit primary key column can hold
MAX_ENTITY_ID = 2**63 - 1
