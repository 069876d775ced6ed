from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, sessionmaker

from hirenet.config import Settings
from hirenet.core.security import decode_access_token
from hirenet.db.models import User
from hirenet.db.repositories import Repository
from hirenet.db.session import iter_session
from hirenet.types import MAX_ENTITY_ID

bearer_scheme = HTTPBearer(auto_error=False)

EntityId = Annotated[int, Path(ge=1, le=MAX_ENTITY_ID)]


def cap_limit(limit: int | None, default: int, maximum: int) -> int:
    """Return ``limit`` clamped to ``maximum``; missing or non-positive values give ``default``."""
    if limit is None or limit <= 0:
        return default
    return min(limit, maximum)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_factory(request: Request) -> sessionmaker[Session]:
    return request.app.state.session_factory


def get_db(factory: sessionmaker[Session] = Depends(get_session_factory)) -> Generator[Session, None, None]:
    yield from iter_session(factory)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
) -> User:
    unauthorized = HTTPException(
        status_code=401,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    user_id = decode_access_token(credentials.credentials, settings)
    if not user_id:
        raise unauthorized

    user = Repository(db).get_user(user_id)
    if user is None:
        raise unauthorized
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Access denied")
    return user


def require_recruiter(user: User = Depends(get_current_user)) -> User:
    if user.user_type not in {"recruiter", "admin"}:
        raise HTTPException(status_code=403, detail="Only recruiters can post jobs")
    return user


def ensure_owner_or_admin(user: User, owner_id: str | None, detail: str = "Access denied") -> None:
    if user.is_admin or (owner_id is not None and owner_id == user.id):
        return
    raise HTTPException(status_code=403, detail=detail)
