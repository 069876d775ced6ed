from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hirenet.cli.app import app
from hirenet.config import get_settings
from hirenet.db.repositories import Repository
from hirenet.db.session import create_db_engine, create_session_factory

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def test_init_seeds_reference_data(cli_env: Path) -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    assert '"seeded_categories": 9' in result.output
    assert (cli_env / "uploads").is_dir()


def test_admin_created_from_cli_can_approve_company(cli_env: Path) -> None:
    created = runner.invoke(
        app,
        ["user", "create", "--email", "root@example.com", "--password", "password123", "--type", "admin"],
    )
    assert created.exit_code == 0, created.output
    assert '"userType": "admin"' in created.output

    duplicate = runner.invoke(app, ["user", "create", "--email", "root@example.com", "--password", "password123"])
    assert duplicate.exit_code == 1

    engine = create_db_engine(get_settings())
    with create_session_factory(engine)() as db:
        repo = Repository(db)
        owner = repo.create_user(email="owner@example.com", password_hash="x", user_type="recruiter")
        company_id = repo.create_company(user_id=owner.id, values={"name": "CLI Co"}).id
    engine.dispose()

    pending = runner.invoke(app, ["companies", "pending"])
    assert pending.exit_code == 0
    assert "CLI Co" in pending.output

    denied = runner.invoke(
        app, ["companies", "set-status", str(company_id), "approved", "--admin-email", "owner@example.com"]
    )
    assert denied.exit_code == 1

    approved = runner.invoke(
        app, ["companies", "set-status", str(company_id), "approved", "--admin-email", "root@example.com"]
    )
    assert approved.exit_code == 0, approved.output
    assert '"status": "approved"' in approved.output


def test_unknown_user_type_rejected(cli_env: Path) -> None:
    result = runner.invoke(app, ["user", "create", "--email", "x@example.com", "--password", "pw", "--type", "owner"])
    assert result.exit_code != 0
