from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from hirenet.api.deps import EntityId, get_app_settings, get_current_user, get_db, require_admin
from hirenet.api.errors import handle_failures
from hirenet.api.schemas import (
    CategoryCreate,
    CategoryResponse,
    CityResponse,
    CountryResponse,
    LogoUploadResponse,
    StateResponse,
)
from hirenet.config import Settings
from hirenet.core.uploads import image_policy, store_upload
from hirenet.db.models import User
from hirenet.db.repositories import Repository

router = APIRouter(prefix="/api", tags=["reference"])


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryResponse]:
    with handle_failures("Failed to fetch categories"):
        rows = Repository(db).list_categories()
    return [CategoryResponse.model_validate(row) for row in rows]


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    payload: CategoryCreate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    repo = Repository(db)
    with handle_failures("Failed to create category"):
        if repo.get_category_by_name(payload.name):
            raise HTTPException(status_code=400, detail="Category already exists")
        row = repo.create_category(payload.name, payload.description)
    return CategoryResponse.model_validate(row)


@router.get("/countries", response_model=list[CountryResponse])
def list_countries(db: Session = Depends(get_db)) -> list[CountryResponse]:
    with handle_failures("Failed to fetch countries"):
        rows = Repository(db).list_countries()
    return [CountryResponse.model_validate(row) for row in rows]


@router.get("/states/{country_id}", response_model=list[StateResponse])
def list_states(country_id: EntityId, db: Session = Depends(get_db)) -> list[StateResponse]:
    with handle_failures("Failed to fetch states"):
        rows = Repository(db).list_states(country_id)
    return [StateResponse.model_validate(row) for row in rows]


@router.get("/cities/{state_id}", response_model=list[CityResponse])
def list_cities(state_id: EntityId, db: Session = Depends(get_db)) -> list[CityResponse]:
    with handle_failures("Failed to fetch cities"):
        rows = Repository(db).list_cities(state_id)
    return [CityResponse.model_validate(row) for row in rows]


@router.post("/upload/company-logo", response_model=LogoUploadResponse)
def upload_company_logo(
    logo: UploadFile | None = File(default=None),
    _: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
) -> LogoUploadResponse:
    if logo is None or not logo.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    with handle_failures("Failed to upload logo"):
        logo_url = store_upload(logo, image_policy(settings), settings.upload_dir)
    return LogoUploadResponse(logo_url=logo_url)
