from fastapi.testclient import TestClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def test_geography_cascade(client: TestClient) -> None:
    countries = client.get("/api/countries").json()
    by_code = {item["code"]: item for item in countries}
    assert {"US", "IN", "CA", "GB"} <= set(by_code)

    states = client.get(f"/api/states/{by_code['US']['id']}").json()
    texas = next(item for item in states if item["code"] == "TX")
    assert texas["countryId"] == by_code["US"]["id"]

    cities = client.get(f"/api/cities/{texas['id']}").json()
    assert "Austin" in [item["name"] for item in cities]


def test_unknown_parent_yields_empty_list(client: TestClient) -> None:
    assert client.get("/api/states/9999").json() == []
    assert client.get("/api/cities/9999").json() == []


def test_non_numeric_geography_ids(client: TestClient) -> None:
    states = client.get("/api/states/usa")
    assert states.status_code == 400
    assert states.json()["message"] == "Invalid country ID"

    cities = client.get("/api/cities/texas")
    assert cities.status_code == 400
    assert cities.json()["message"] == "Invalid state ID"


def test_categories_seeded_and_admin_managed(client: TestClient, admin, seeker) -> None:
    names = [item["name"] for item in client.get("/api/categories").json()]
    assert "Engineering" in names
    assert names == sorted(names)

    denied = client.post("/api/categories", json={"name": "Legal"}, headers=seeker["headers"])
    assert denied.status_code == 403

    created = client.post("/api/categories", json={"name": "Legal"}, headers=admin["headers"])
    assert created.status_code == 201
    assert created.json()["name"] == "Legal"

    duplicate = client.post("/api/categories", json={"name": "legal "}, headers=admin["headers"])
    assert duplicate.status_code == 400
    assert duplicate.json() == {"message": "Category already exists"}


def test_job_with_unknown_category(client: TestClient, make_company, recruiter) -> None:
    company = make_company()
    response = client.post(
        "/api/jobs",
        json={"companyId": company["id"], "title": "Dev", "categoryId": 31337},
        headers=recruiter["headers"],
    )
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "categoryId", "message": "Category not found"}]


def test_logo_upload(client: TestClient, recruiter) -> None:
    response = client.post(
        "/api/upload/company-logo",
        files={"logo": ("brand.PNG", PNG_BYTES, "image/png")},
        headers=recruiter["headers"],
    )
    assert response.status_code == 200
    logo_url = response.json()["logoUrl"]
    assert logo_url.startswith("/uploads/image-")
    assert logo_url.endswith(".png")
    assert client.get(logo_url).content == PNG_BYTES


def test_logo_upload_rejects_other_types(client: TestClient, recruiter) -> None:
    response = client.post(
        "/api/upload/company-logo",
        files={"logo": ("brand.svg", b"<svg/>", "image/svg+xml")},
        headers=recruiter["headers"],
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Only JPG, JPEG, PNG, and GIF files are allowed for image uploads"}


def test_logo_upload_requires_login(client: TestClient) -> None:
    response = client.post("/api/upload/company-logo", files={"logo": ("brand.png", PNG_BYTES, "image/png")})
    assert response.status_code == 401


def test_unmatched_route_uses_message_body(client: TestClient) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
