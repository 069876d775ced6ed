from fastapi.testclient import TestClient

from hirenet.db.repositories import Repository


def test_recruiter_posts_and_seeker_gets_an_offer(client: TestClient, admin, register) -> None:
    recruiter = register("recruiter", email="hiring@northwind.com")
    seeker = register("job_seeker", email="ada@example.com")

    company = client.post(
        "/api/companies",
        json={"name": "Northwind", "industry": "Logistics", "city": "Austin", "state": "TX", "country": "USA"},
        headers=recruiter["headers"],
    ).json()
    assert company["status"] == "pending"
    assert client.get("/api/companies", params={"q": "northwind"}).json() == []

    approved = client.patch(
        f"/api/companies/{company['id']}/status",
        json={"status": "approved"},
        headers=admin["headers"],
    )
    assert approved.json()["status"] == "approved"

    job = client.post(
        "/api/jobs",
        json={
            "companyId": company["id"],
            "title": "Routing Engineer",
            "skills": ["python", "postgres"],
            "city": "Austin",
            "state": "TX",
            "country": "USA",
            "workMode": "hybrid",
        },
        headers=recruiter["headers"],
    ).json()
    assert job["location"] == "Austin, TX, USA"

    found = client.get("/api/search", params={"q": "northwind"}).json()
    assert [item["id"] for item in found["companies"]] == [company["id"]]
    found = client.get("/api/search/routing").json()
    assert [item["id"] for item in found["jobs"]] == [job["id"]]

    application = client.post(
        "/api/applications",
        data={"jobId": str(job["id"]), "coverLetter": "Routing is my thing."},
        files={"resume": ("ada.docx", b"PK\x03\x04 resume", "application/octet-stream")},
        headers=seeker["headers"],
    ).json()
    assert application["resumeUrl"].endswith(".docx")

    for status in ("reviewing", "interview", "offered"):
        response = client.patch(
            f"/api/applications/{application['id']}/status",
            json={"status": status},
            headers=recruiter["headers"],
        )
        assert response.json()["status"] == status

    client.post(
        "/api/messages",
        json={"receiverId": seeker["id"], "content": "Congratulations on the offer!"},
        headers=recruiter["headers"],
    )
    [conversation] = client.get("/api/conversations", headers=seeker["headers"]).json()
    assert conversation["user"]["id"] == recruiter["id"]
    assert conversation["unreadCount"] == 1

    [mine] = client.get("/api/applications", headers=seeker["headers"]).json()
    assert mine["status"] == "offered"
    assert mine["job"]["company"]["name"] == "Northwind"


def test_deleting_job_removes_its_applications(client: TestClient, app, make_company, make_job, recruiter, seeker) -> None:
    job = make_job(make_company()["id"])
    application = client.post("/api/applications", data={"jobId": str(job["id"])}, headers=seeker["headers"]).json()

    assert client.delete(f"/api/jobs/{job['id']}", headers=recruiter["headers"]).status_code == 200

    with app.state.session_factory() as db:
        assert Repository(db).get_application(application["id"]) is None
    assert client.get("/api/applications", headers=seeker["headers"]).json() == []
