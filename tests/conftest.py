from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hirenet.api.app import create_app
from hirenet.config import Settings
from hirenet.core.security import hash_password
from hirenet.db.repositories import Repository

PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        app_env="test",
        secret_key="test-secret",
        database_url=f"sqlite:///{tmp_path / 'hirenet-test.db'}",
        data_dir=tmp_path,
        upload_dir=tmp_path / "uploads",
        cors_origins="",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def _identity(body: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": body["user"]["id"],
        "email": body["user"]["email"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    counter = itertools.count(1)

    def _register(user_type: str = "job_seeker", email: str | None = None) -> dict[str, Any]:
        email = email or f"{user_type}{next(counter)}@example.com"
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": PASSWORD, "firstName": "Test", "userType": user_type},
        )
        assert response.status_code == 201, response.text
        return _identity(response.json())

    return _register


@pytest.fixture
def admin(app: FastAPI, client: TestClient) -> dict[str, Any]:
    with app.state.session_factory() as db:
        Repository(db).create_user(
            email="admin@example.com",
            password_hash=hash_password(PASSWORD),
            user_type="admin",
            first_name="Site",
            last_name="Admin",
        )
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert response.status_code == 200, response.text
    return _identity(response.json())


@pytest.fixture
def recruiter(register: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register("recruiter")


@pytest.fixture
def seeker(register: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register("job_seeker")


@pytest.fixture
def make_company(client: TestClient, admin: dict[str, Any], recruiter: dict[str, Any]) -> Callable[..., dict]:
    def _make(name: str = "Acme Corp", approve: bool = True, **fields: Any) -> dict:
        response = client.post("/api/companies", json={"name": name, **fields}, headers=recruiter["headers"])
        assert response.status_code == 200, response.text
        company = response.json()
        if approve:
            response = client.put(f"/api/companies/{company['id']}/approve", headers=admin["headers"])
            assert response.status_code == 200, response.text
            company = response.json()
        return company

    return _make


@pytest.fixture
def make_job(client: TestClient, recruiter: dict[str, Any]) -> Callable[..., dict]:
    def _make(company_id: int, title: str = "Backend Engineer", **fields: Any) -> dict:
        response = client.post(
            "/api/jobs",
            json={"companyId": company_id, "title": title, **fields},
            headers=recruiter["headers"],
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _make
