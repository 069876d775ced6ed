from __future__ import annotations

import os
import sqlite3
import subprocess
import sys
from pathlib import Path


def _tables(db_path: Path) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_alembic_upgrade_and_downgrade_initial_schema(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[2]
    db_path = tmp_path / "migration_test.db"
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{db_path}"

    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "upgrade", "head"],
        cwd=repo_root,
        env=env,
        check=True,
    )

    tables = _tables(db_path)
    assert {"users", "companies", "jobs", "job_applications", "vendors", "countries", "states", "cities"} <= tables

    conn = sqlite3.connect(db_path)
    cols = {row[1] for row in conn.execute("PRAGMA table_info(jobs)").fetchall()}
    indexes = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='index'").fetchall()}
    user_indexes = {row[1]: row[2] for row in conn.execute("PRAGMA index_list(users)").fetchall()}
    country_cols = {row[1] for row in conn.execute("PRAGMA table_info(countries)").fetchall()}
    conn.close()
    assert {"company_id", "location", "employment_type", "is_active", "created_at", "updated_at"} <= cols
    assert {"ix_jobs_company_id", "ix_job_applications_applicant_id", "ix_group_memberships_user_id"} <= indexes
    assert user_indexes["ix_users_email"] == 1
    assert "created_at" not in country_cols

    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "downgrade", "base"],
        cwd=repo_root,
        env=env,
        check=True,
    )

    assert "jobs" not in _tables(db_path)
    assert "users" not in _tables(db_path)


def test_migrated_schema_enforces_application_uniqueness(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[2]
    db_path = tmp_path / "unique_test.db"
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{db_path}"
    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "upgrade", "head"],
        cwd=repo_root,
        env=env,
        check=True,
    )

    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("PRAGMA index_list(job_applications)").fetchall()
        unique_columns = [
            [info[2] for info in conn.execute(f"PRAGMA index_info('{row[1]}')").fetchall()]
            for row in rows
            if row[2] == 1
        ]
    finally:
        conn.close()
    assert ["job_id", "applicant_id"] in unique_columns
