from fastapi.testclient import TestClient


def test_profile_sections_round_out_public_profile(client: TestClient, seeker) -> None:
    headers = seeker["headers"]
    updated = client.put("/api/profile", json={"headline": "Backend developer", "location": "Pune"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["headline"] == "Backend developer"
    assert updated.json()["firstName"] == "Test"

    experience = client.post(
        "/api/experiences",
        json={"company": "Initech", "title": "Engineer", "startDate": "2021-01", "isCurrent": True},
        headers=headers,
    )
    assert experience.status_code == 200
    education = client.post(
        "/api/education",
        json={"institution": "State University", "degree": "BSc", "fieldOfStudy": "Computer Science"},
        headers=headers,
    )
    assert education.status_code == 200
    skill = client.post("/api/skills", json={"name": "Python", "years": 5}, headers=headers)
    assert skill.status_code == 200

    profile = client.get(f"/api/profile/{seeker['id']}")
    assert profile.status_code == 200
    body = profile.json()
    assert body["headline"] == "Backend developer"
    assert [item["company"] for item in body["experiences"]] == ["Initech"]
    assert [item["fieldOfStudy"] for item in body["education"]] == ["Computer Science"]
    assert [item["name"] for item in body["skills"]] == ["Python"]
    assert "email" not in body


def test_missing_profile(client: TestClient) -> None:
    response = client.get("/api/profile/unknown-user")
    assert response.status_code == 404
    assert response.json() == {"message": "Profile not found"}


def test_entries_editable_by_owner_only(client: TestClient, register) -> None:
    owner = register()
    other = register()
    experience = client.post(
        "/api/experiences",
        json={"company": "Globex", "title": "Intern"},
        headers=owner["headers"],
    ).json()
    url = f"/api/experiences/{experience['id']}"

    assert client.put(url, json={"title": "CEO"}, headers=other["headers"]).status_code == 403
    assert client.delete(url, headers=other["headers"]).status_code == 403

    changed = client.put(url, json={"title": "Engineer"}, headers=owner["headers"])
    assert changed.status_code == 200
    assert changed.json()["title"] == "Engineer"
    assert changed.json()["company"] == "Globex"

    assert client.delete(url, headers=owner["headers"]).json() == {"message": "Experience deleted successfully"}
    assert client.get("/api/experiences", headers=owner["headers"]).json() == []
    assert client.delete(url, headers=owner["headers"]).status_code == 404


def test_invalid_experience_payload(client: TestClient, seeker) -> None:
    response = client.post("/api/experiences", json={"title": "Engineer"}, headers=seeker["headers"])
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "company"
