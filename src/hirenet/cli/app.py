from __future__ import annotations

import json

import typer
import uvicorn

from hirenet.api.app import create_app
from hirenet.config import get_settings
from hirenet.core.security import hash_password
from hirenet.db.init import init_database
from hirenet.db.repositories import Repository
from hirenet.db.session import create_db_engine, create_session_factory
from hirenet.logging_config import configure_logging
from hirenet.types import APPROVAL_STATUSES, USER_TYPES

app = typer.Typer(help="HireNet CLI")
user_app = typer.Typer(help="Manage user accounts")
companies_app = typer.Typer(help="Company approval queue")

app.add_typer(user_app, name="user")
app.add_typer(companies_app, name="companies")


def _session_factory():
    settings = get_settings()
    engine = create_db_engine(settings)
    factory = create_session_factory(engine)
    init_database(settings, engine, factory)
    return factory


@app.command("init")
def init_cmd() -> None:
    """Create tables, data directories and reference data."""
    configure_logging()
    settings = get_settings()
    engine = create_db_engine(settings)
    result = init_database(settings, engine, create_session_factory(engine))
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@app.command("serve")
def serve_cmd(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    """Run the API server."""
    configure_logging()
    settings = get_settings()
    uvicorn.run(create_app(settings), host=host or settings.app_host, port=port or settings.app_port)


@user_app.command("create")
def user_create(
    email: str = typer.Option(..., "--email"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    user_type: str = typer.Option("job_seeker", "--type"),
    first_name: str = typer.Option("", "--first-name"),
    last_name: str = typer.Option("", "--last-name"),
) -> None:
    """Create an account of any type, including admin."""
    configure_logging()
    if user_type not in USER_TYPES:
        raise typer.BadParameter(f"type must be one of {', '.join(USER_TYPES)}")
    with _session_factory()() as db:
        repo = Repository(db)
        if repo.get_user_by_email(email):
            typer.echo(f"user {email} already exists", err=True)
            raise typer.Exit(code=1)
        user = repo.create_user(
            email=email,
            password_hash=hash_password(password),
            user_type=user_type,
            first_name=first_name,
            last_name=last_name,
        )
        typer.echo(json.dumps({"id": user.id, "email": user.email, "userType": user.user_type}, indent=2))


@companies_app.command("pending")
def companies_pending() -> None:
    configure_logging()
    with _session_factory()() as db:
        rows = Repository(db).list_pending_companies()
        typer.echo(json.dumps([{"id": row.id, "name": row.name, "userId": row.user_id} for row in rows], indent=2))


@companies_app.command("set-status")
def companies_set_status(
    company_id: int = typer.Argument(...),
    status: str = typer.Argument(...),
    admin_email: str = typer.Option(..., "--admin-email"),
) -> None:
    """Approve or reject a company on behalf of an admin account."""
    configure_logging()
    if status not in APPROVAL_STATUSES:
        raise typer.BadParameter(f"status must be one of {', '.join(APPROVAL_STATUSES)}")
    with _session_factory()() as db:
        repo = Repository(db)
        admin = repo.get_user_by_email(admin_email)
        if admin is None or not admin.is_admin:
            typer.echo(f"{admin_email} is not an admin account", err=True)
            raise typer.Exit(code=1)
        company = repo.get_company(company_id)
        if company is None:
            typer.echo(f"company {company_id} not found", err=True)
            raise typer.Exit(code=1)
        company = repo.set_company_status(company, status, admin.id)
        typer.echo(json.dumps({"id": company.id, "status": company.status}, indent=2))


if __name__ == "__main__":
    app()
