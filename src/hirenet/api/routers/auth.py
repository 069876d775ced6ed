from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hirenet.api.deps import get_app_settings, get_current_user, get_db
from hirenet.api.errors import handle_failures
from hirenet.api.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from hirenet.config import Settings
from hirenet.core.security import create_access_token, hash_password, verify_password
from hirenet.db.models import User
from hirenet.db.repositories import Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    repo = Repository(db)
    with handle_failures("Failed to register user"):
        if repo.get_user_by_email(payload.email):
            raise HTTPException(status_code=400, detail="An account with this email already exists")
        user = repo.create_user(
            email=payload.email,
            password_hash=hash_password(payload.password),
            user_type=payload.user_type,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    logger.info("registered %s user %s", user.user_type, user.id)
    return AuthResponse(token=create_access_token(user.id, settings), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    with handle_failures("Failed to log in"):
        user = Repository(db).get_user_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return AuthResponse(token=create_access_token(user.id, settings), user=UserResponse.model_validate(user))


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
