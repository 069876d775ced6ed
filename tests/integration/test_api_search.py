import pytest
from fastapi.testclient import TestClient

from hirenet.db.repositories import Repository


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    recorded: list[str] = []
    real_companies = Repository.search_companies
    real_jobs = Repository.search_jobs

    def search_companies(self, query, limit):
        recorded.append("companies")
        return real_companies(self, query, limit)

    def search_jobs(self, query, filters=None, limit=50):
        recorded.append("jobs")
        return real_jobs(self, query, filters, limit)

    monkeypatch.setattr(Repository, "search_companies", search_companies)
    monkeypatch.setattr(Repository, "search_jobs", search_jobs)
    return recorded


def test_search_returns_companies_then_jobs(client: TestClient, make_company, make_job, calls) -> None:
    company = make_company("Initech", industry="Software")
    make_job(company["id"], "Initech Support Engineer")
    make_job(company["id"], "Accountant")

    response = client.get("/api/search", params={"q": "initech"})
    assert response.status_code == 200
    body = response.json()
    assert list(body)[:2] == ["companies", "jobs"]
    assert [item["name"] for item in body["companies"]] == ["Initech"]
    assert [item["title"] for item in body["jobs"]] == ["Initech Support Engineer"]
    assert body["total"] == 2
    assert body["failed"] == []
    assert sorted(calls) == ["companies", "jobs"]


@pytest.mark.parametrize("path", ["/api/search?q=a", "/api/search?query=%20%20x%20", "/api/search", "/api/search/a"])
def test_short_query_skips_data_layer(client: TestClient, calls, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    assert response.json() == {"companies": [], "jobs": [], "total": 0, "failed": []}
    assert calls == []


def test_path_form_matches_query_form(client: TestClient, make_company) -> None:
    make_company("Umbrella")
    by_path = client.get("/api/search/umbr").json()
    by_query = client.get("/api/search", params={"query": "umbr"}).json()
    assert by_path == by_query
    assert by_path["total"] == 1


def test_pending_companies_not_searchable(client: TestClient, make_company) -> None:
    make_company("Hidden Corp", approve=False)
    assert client.get("/api/search", params={"q": "hidden"}).json()["companies"] == []


def test_failed_side_is_reported(client: TestClient, make_company, monkeypatch: pytest.MonkeyPatch) -> None:
    make_company("Tyrell")

    def broken(self, query, filters=None, limit=50):
        raise RuntimeError("jobs index unavailable")

    monkeypatch.setattr(Repository, "search_jobs", broken)
    response = client.get("/api/search", params={"q": "tyrell"})
    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body["companies"]] == ["Tyrell"]
    assert body["jobs"] == []
    assert body["failed"] == ["jobs"]


def test_both_sides_failing_is_server_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(self, *args, **kwargs):
        raise RuntimeError("database gone")

    monkeypatch.setattr(Repository, "search_companies", broken)
    monkeypatch.setattr(Repository, "search_jobs", broken)
    response = client.get("/api/search", params={"q": "anything"})
    assert response.status_code == 500
    assert response.json() == {"message": "Search failed"}


def test_limit_caps_each_side(client: TestClient, make_company) -> None:
    for name in ("Orbit One", "Orbit Two", "Orbit Three"):
        make_company(name)
    body = client.get("/api/search", params={"q": "orbit", "limit": 2}).json()
    assert len(body["companies"]) == 2


def test_huge_limit_is_capped(client: TestClient, make_company, settings) -> None:
    for name in ("Orbit One", "Orbit Two", "Orbit Three"):
        make_company(name)

    response = client.get("/api/search", params={"q": "orbit", "limit": 10**19})
    assert response.status_code == 200
    assert len(response.json()["companies"]) == 3

    settings.search_result_max_limit = 1
    body = client.get("/api/search/orbit", params={"limit": 10**19}).json()
    assert len(body["companies"]) == 1
