"""
HTTP tests against the FastAPI application, including the full
company/candidate hiring flow.
"""

from tests.conftest import job_payload, register


API = "/api/v1"


def _create_job(client, headers, **overrides):
    response = client.post(f"{API}/jobs", json=job_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthEndpoints:
    def test_register_returns_user_without_password(self, client):
        headers, user = register(client, "candidate", "jane@example.com")
        assert "password" not in user
        assert user["type"] == "candidate"
        assert headers["Authorization"].startswith("Bearer ")

    def test_duplicate_email_conflict(self, client, candidate):
        body = {
            "email": "JANE@example.com",
            "password": "secret123",
            "confirmPassword": "secret123",
            "name": "Jane Again",
            "type": "candidate",
        }
        response = client.post(f"{API}/auth/register", json=body)
        assert response.status_code == 409
        assert response.json()["detail"] == "User with this email already exists"

    def test_password_confirmation_mismatch(self, client):
        body = {
            "email": "x@example.com",
            "password": "secret123",
            "confirmPassword": "secret321",
            "name": "X",
            "type": "candidate",
        }
        response = client.post(f"{API}/auth/register", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    def test_schema_violations_are_bad_requests(self, client):
        base = {"password": "secret123", "confirmPassword": "secret123", "name": "X", "type": "candidate"}
        bad_email = client.post(f"{API}/auth/register", json={**base, "email": "not-an-email"})
        assert bad_email.status_code == 400
        assert bad_email.json()["detail"].startswith("email: ")
        short = {**base, "email": "x@example.com", "password": "123", "confirmPassword": "123"}
        assert client.post(f"{API}/auth/register", json=short).status_code == 400
        assert client.post(f"{API}/auth/register", json={**base, "email": "x@example.com", "type": "admin"}).status_code == 400
        assert client.get(f"{API}/jobs", params={"limit": 0}).status_code == 400

    def test_login_and_me(self, client, candidate):
        response = client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["token"]
        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "jane@example.com"
        assert "password" not in me.json()

    def test_bad_credentials(self, client, candidate):
        response = client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": "wrong-one"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_missing_or_invalid_token(self, client):
        assert client.get(f"{API}/auth/me").status_code == 401
        response = client.get(f"{API}/stats", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_me_for_vanished_user(self, client, store, candidate):
        headers, _ = candidate
        store.reset()
        assert client.get(f"{API}/auth/me", headers=headers).status_code == 404


class TestProfileEndpoint:
    def test_protected_fields_are_ignored(self, client, candidate):
        headers, user = candidate
        response = client.put(
            f"{API}/profile",
            json={"bio": "Hi", "title": "Engineer", "email": "evil@example.com", "type": "company", "password": "x"},
            headers=headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert (body["bio"], body["title"], body["email"], body["type"]) == (
            "Hi",
            "Engineer",
            user["email"],
            "candidate",
        )
        login = client.post(f"{API}/auth/login", json={"email": user["email"], "password": "secret123"})
        assert login.status_code == 200


class TestJobEndpoints:
    def test_create_job(self, client, company):
        headers, user = company
        job = _create_job(client, headers, userId=12345)
        assert job["userId"] == user["id"]
        assert job["isActive"] is True
        assert job["createdAt"]
        assert job["tags"] == ["python", "fastapi"]

    def test_candidate_cannot_create_job(self, client, candidate):
        headers, _ = candidate
        response = client.post(f"{API}/jobs", json=job_payload(), headers=headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied. Company access required."

    def test_public_listing_shows_only_active_jobs(self, client, company):
        headers, _ = company
        visible = _create_job(client, headers, title="Data Engineer", tags=["sql"], location="Remote")
        _create_job(client, headers, title="Hidden Engineer", isActive=False)
        response = client.get(f"{API}/jobs")
        assert [job["id"] for job in response.json()] == [visible["id"]]

    def test_listing_filters(self, client, company):
        headers, _ = company
        data = _create_job(client, headers, title="Data Engineer", tags=["sql"], location="Remote")
        design = _create_job(client, headers, title="Designer", tags=["figma"], type="Contract", description="UI work")
        assert [j["id"] for j in client.get(f"{API}/jobs", params={"search": "ENGINEER"}).json()] == [data["id"]]
        assert [j["id"] for j in client.get(f"{API}/jobs", params={"location": "remote"}).json()] == [data["id"]]
        assert [j["id"] for j in client.get(f"{API}/jobs", params={"type": "Contract"}).json()] == [design["id"]]
        tagged = client.get(f"{API}/jobs", params={"tags": "figma, sql"}).json()
        assert [j["id"] for j in tagged] == [design["id"], data["id"]]
        page = client.get(f"{API}/jobs", params={"limit": 1, "offset": 1}).json()
        assert [j["id"] for j in page] == [data["id"]]

    def test_my_jobs_include_inactive(self, client, company, other_company):
        headers, _ = company
        active = _create_job(client, headers)
        inactive = _create_job(client, headers, isActive=False)
        _create_job(client, other_company[0])
        response = client.get(f"{API}/jobs/mine", headers=headers)
        assert [job["id"] for job in response.json()] == [inactive["id"], active["id"]]

    def test_detail_counts_views(self, client, store, company):
        headers, _ = company
        job = _create_job(client, headers)
        for _ in range(3):
            assert client.get(f"{API}/jobs/{job['id']}").status_code == 200
        assert store.get_view_count(job["id"]) == 3
        assert client.get(f"{API}/jobs/{job['id'] + 1}").status_code == 404

    def test_update_and_delete_ownership(self, client, company, other_company):
        headers, _ = company
        other_headers, _ = other_company
        job = _create_job(client, headers)

        assert client.put(f"{API}/jobs/{job['id']}", json={"title": "X"}, headers=other_headers).status_code == 403
        assert client.delete(f"{API}/jobs/{job['id']}", headers=other_headers).status_code == 403
        assert client.put(f"{API}/jobs/{job['id'] + 50}", json={"title": "X"}, headers=other_headers).status_code == 404
        assert client.delete(f"{API}/jobs/{job['id'] + 50}", headers=other_headers).status_code == 404

        response = client.put(
            f"{API}/jobs/{job['id']}",
            json={"title": "Lead Engineer", "createdAt": "2000-01-01T00:00:00Z", "userId": 999},
            headers=headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Lead Engineer"
        assert body["createdAt"] == job["createdAt"]
        assert body["userId"] == job["userId"]

        assert client.delete(f"{API}/jobs/{job['id']}", headers=headers).status_code == 204
        assert client.get(f"{API}/jobs/{job['id']}").status_code == 404


class TestApplicationEndpoints:
    def test_apply_rules(self, client, company, candidate):
        headers, _ = company
        candidate_headers, _ = candidate
        job = _create_job(client, headers)

        first = client.post(f"{API}/jobs/{job['id']}/apply", json={"resume": "CV", "status": "accepted"}, headers=candidate_headers)
        assert first.status_code == 201
        assert first.json()["status"] == "pending"

        again = client.post(f"{API}/jobs/{job['id']}/apply", json={"resume": "CV 2"}, headers=candidate_headers)
        assert again.status_code == 409
        assert again.json()["detail"] == "You have already applied for this job"

        assert client.post(f"{API}/jobs/{job['id']}/apply", json={"resume": "CV"}, headers=headers).status_code == 403
        missing = client.post(f"{API}/jobs/{job['id'] + 9}/apply", json={"resume": "CV"}, headers=candidate_headers)
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Job not found or not active"

    def test_cannot_apply_to_inactive_job(self, client, company, candidate):
        headers, _ = company
        job = _create_job(client, headers, isActive=False)
        response = client.post(f"{API}/jobs/{job['id']}/apply", json={"resume": "CV"}, headers=candidate[0])
        assert response.status_code == 404

    def test_status_validation_and_ownership(self, client, company, other_company, candidate):
        headers, _ = company
        job = _create_job(client, headers)
        application = client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume": "CV"}, headers=candidate[0]
        ).json()
        url = f"{API}/applications/{application['id']}/status"

        invalid = client.put(url, json={"status": "hired"}, headers=headers)
        assert invalid.status_code == 400
        assert invalid.json()["detail"] == "Invalid status value"
        assert client.put(url, json={"status": "reviewed"}, headers=other_company[0]).status_code == 403
        assert client.put(url, json={"status": "reviewed"}, headers=candidate[0]).status_code == 403
        assert client.put(f"{API}/applications/999/status", json={"status": "reviewed"}, headers=headers).status_code == 404

    def test_missing_status_is_invalid(self, client, company, candidate):
        job = _create_job(client, company[0])
        application = client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume": "CV"}, headers=candidate[0]
        ).json()
        response = client.put(f"{API}/applications/{application['id']}/status", json={}, headers=company[0])
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid status value"

    def test_validation_errors_share_one_status(self, client, company):
        base = {"password": "secret123", "name": "X", "type": "candidate", "email": "x@example.com"}
        malformed = client.post(f"{API}/auth/register", json={**base, "email": "nope", "confirmPassword": "secret123"})
        mismatch = client.post(f"{API}/auth/register", json={**base, "confirmPassword": "secret321"})
        bad_status = client.put(f"{API}/applications/1/status", json={}, headers=company[0])
        assert malformed.status_code == mismatch.status_code == bad_status.status_code == 400

    def test_company_cannot_list_foreign_job_applications(self, client, company, other_company):
        job = _create_job(client, company[0])
        response = client.get(f"{API}/applications", params={"jobId": job["id"]}, headers=other_company[0])
        assert response.status_code == 403

    def test_single_application_visibility(self, client, company, other_company, candidate):
        job = _create_job(client, company[0])
        application = client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume": "CV", "coverLetter": "Hi"}, headers=candidate[0]
        ).json()
        url = f"{API}/applications/{application['id']}"
        assert client.get(url, headers=candidate[0]).json()["coverLetter"] == "Hi"
        assert client.get(url, headers=company[0]).status_code == 200
        assert client.get(url, headers=other_company[0]).status_code == 403
        assert client.get(f"{API}/applications/404", headers=company[0]).status_code == 404


class TestHiringFlow:
    def test_end_to_end(self, client):
        company_headers, _ = register(client, "company", "talent@initech.example.com", company="Initech")
        job = _create_job(client, company_headers, company="Initech")

        candidate_headers, candidate_user = register(client, "candidate", "peter@example.com")
        applied = client.post(
            f"{API}/jobs/{job['id']}/apply",
            json={"resume": "Peter's resume", "coverLetter": "I like staplers"},
            headers=candidate_headers,
        )
        assert applied.status_code == 201

        listed = client.get(f"{API}/applications", params={"jobId": job["id"]}, headers=company_headers)
        assert listed.status_code == 200
        entries = listed.json()
        assert len(entries) == 1
        assert entries[0]["status"] == "pending"
        assert entries[0]["userId"] == candidate_user["id"]

        updated = client.put(
            f"{API}/applications/{entries[0]['id']}/status",
            json={"status": "accepted"},
            headers=company_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["status"] == "accepted"

        mine = client.get(f"{API}/applications", headers=candidate_headers).json()
        assert [(a["id"], a["status"]) for a in mine] == [(entries[0]["id"], "accepted")]


class TestStatsEndpoint:
    def test_company_and_candidate_scopes(self, client, company, other_company, candidate):
        own = _create_job(client, company[0])
        foreign = _create_job(client, other_company[0])
        client.get(f"{API}/jobs/{own['id']}")
        client.get(f"{API}/jobs/{own['id']}")
        client.get(f"{API}/jobs/{foreign['id']}")
        client.post(f"{API}/jobs/{foreign['id']}/apply", json={"resume": "CV"}, headers=candidate[0])

        company_stats = client.get(f"{API}/stats", headers=company[0]).json()
        assert company_stats == {"totalJobs": 1, "activeJobs": 1, "totalApplications": 0, "viewCount": 2}

        candidate_stats = client.get(f"{API}/stats", headers=candidate[0]).json()
        assert candidate_stats == {"totalJobs": 2, "activeJobs": 2, "totalApplications": 1, "viewCount": 3}
