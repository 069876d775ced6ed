from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from hirenet.config import Settings
from hirenet.db.base import Base
from hirenet.db import models  # noqa: F401
from hirenet.db.seed import seed_categories, seed_geography


def ensure_data_directories(settings: Settings) -> None:
    for path in (settings.data_dir, settings.upload_dir):
        path.mkdir(parents=True, exist_ok=True)


def init_database(settings: Settings, engine: Engine, session_factory: sessionmaker[Session]) -> dict[str, int]:
    ensure_data_directories(settings)
    Base.metadata.create_all(bind=engine)

    with session_factory() as session:
        categories = seed_categories(session)
        countries = seed_geography(session)
    return {"seeded_categories": categories, "seeded_countries": countries}
