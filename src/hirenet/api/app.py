from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from hirenet.api.errors import register_exception_handlers
from hirenet.api.routers import admin, applications, auth, companies, jobs, network, profile, reference, search
from hirenet.config import Settings, get_settings
from hirenet.db.init import ensure_data_directories, init_database
from hirenet.db.session import create_db_engine, create_session_factory
from hirenet.logging_config import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    ensure_data_directories(settings)

    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.on_event("startup")
    def _startup() -> None:
        init_database(settings, engine, session_factory)

    @app.on_event("shutdown")
    def _shutdown() -> None:
        engine.dispose()

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    # literal company paths live in companies before its /{company_id} routes
    for module in (auth, profile, search, companies, jobs, applications, network, admin, reference):
        app.include_router(module.router)

    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")
    return app
