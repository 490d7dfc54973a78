"""
Test suite for job endpoints.

Tests cover:
- Job creation
- Job listing and filtering
- Job retrieval
- Partial updates
- Deletion
"""

import pytest


class TestJobCreation:
    """Tests for job creation endpoint"""

    new_job = {
        "title": "new",
        "salary": 100,
        "equity": 0.1,
        "companyHandle": "c1",
    }

    def test_create_job_success(self, client, seed, a1_headers):
        """Test successful job creation"""
        response = client.post("/api/v1/jobs/", json=self.new_job, headers=a1_headers)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert {k: v for k, v in data.items() if k != "id"} == self.new_job

    def test_create_job_as_user(self, client, seed, u1_headers):
        response = client.post("/api/v1/jobs/", json=self.new_job, headers=u1_headers)

        assert response.status_code == 401

    def test_create_job_missing_fields(self, client, seed, a1_headers):
        """Test job creation with missing required fields"""
        response = client.post("/api/v1/jobs/", json={"title": "new"}, headers=a1_headers)

        assert response.status_code == 422

    def test_create_job_invalid_salary(self, client, seed, a1_headers):
        response = client.post(
            "/api/v1/jobs/",
            json={**self.new_job, "salary": "not-a-number"},
            headers=a1_headers,
        )

        assert response.status_code == 422

    def test_create_job_equity_above_one(self, client, seed, a1_headers):
        response = client.post(
            "/api/v1/jobs/", json={**self.new_job, "equity": 1.5}, headers=a1_headers
        )

        assert response.status_code == 422

    def test_create_job_unknown_company(self, client, seed, a1_headers):
        response = client.post(
            "/api/v1/jobs/", json={**self.new_job, "companyHandle": "nope"}, headers=a1_headers
        )

        assert response.status_code == 400

    def test_create_duplicate_job(self, client, seed, a1_headers):
        client.post("/api/v1/jobs/", json=self.new_job, headers=a1_headers)
        response = client.post("/api/v1/jobs/", json=self.new_job, headers=a1_headers)

        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"].lower()


class TestJobListing:
    """Tests for job listing and filters"""

    def test_list_jobs(self, client, seed):
        """Test listing all jobs"""
        response = client.get("/api/v1/jobs/")

        assert response.status_code == 200
        data = response.json()
        assert [job["title"] for job in data] == ["j1", "j2", "j3"]
        assert data[1] == {
            "id": seed["j2"],
            "title": "j2",
            "salary": 200,
            "equity": 0.2,
            "companyHandle": "c2",
        }

    @pytest.mark.parametrize("params,expected", [
        ({"title": "1"}, ["j1"]),
        ({"title": "J"}, ["j1", "j2", "j3"]),
        ({"minSalary": 200}, ["j2", "j3"]),
        ({"hasEquity": "true"}, ["j2", "j3"]),
        ({"hasEquity": "false"}, ["j1"]),
        ({"title": "j", "minSalary": 150, "hasEquity": "true"}, ["j2", "j3"]),
        ({"minSalary": 1000}, []),
    ])
    def test_filters(self, client, seed, params, expected):
        response = client.get("/api/v1/jobs/", params=params)

        assert response.status_code == 200
        assert [job["title"] for job in response.json()] == expected

    def test_invalid_filter(self, client, seed):
        response = client.get("/api/v1/jobs/", params={"title": "j", "invalid": "x"})

        assert response.status_code == 400
        assert "invalid" in response.json()["detail"]

    def test_invalid_equity_flag(self, client, seed):
        response = client.get("/api/v1/jobs/", params={"hasEquity": "sometimes"})

        assert response.status_code == 400


class TestJobRetrieval:
    """Tests for job retrieval endpoint"""

    def test_get_job_by_id(self, client, seed):
        response = client.get(f"/api/v1/jobs/{seed['j1']}")

        assert response.status_code == 200
        assert response.json() == {
            "id": seed["j1"],
            "title": "j1",
            "salary": 100,
            "equity": 0,
            "companyHandle": "c1",
        }

    def test_get_nonexistent_job(self, client, seed):
        """Test retrieving a job that doesn't exist"""
        response = client.get("/api/v1/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["detail"].lower()


class TestJobUpdate:
    """Tests for job partial updates"""

    def test_update_job(self, client, seed, a1_headers):
        response = client.patch(
            f"/api/v1/jobs/{seed['j1']}", json={"title": "j1-new", "equity": 0.5}, headers=a1_headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": seed["j1"],
            "title": "j1-new",
            "salary": 100,
            "equity": 0.5,
            "companyHandle": "c1",
        }

    def test_update_job_as_user(self, client, seed, u1_headers):
        response = client.patch(f"/api/v1/jobs/{seed['j1']}", json={"title": "x"}, headers=u1_headers)

        assert response.status_code == 401

    def test_update_company_handle_rejected(self, client, seed, a1_headers):
        response = client.patch(
            f"/api/v1/jobs/{seed['j1']}", json={"companyHandle": "c2"}, headers=a1_headers
        )

        assert response.status_code == 422

    def test_update_empty_body(self, client, seed, a1_headers):
        response = client.patch(f"/api/v1/jobs/{seed['j1']}", json={}, headers=a1_headers)

        assert response.status_code == 400

    def test_update_nonexistent_job(self, client, seed, a1_headers):
        response = client.patch("/api/v1/jobs/99999", json={"title": "x"}, headers=a1_headers)

        assert response.status_code == 404

    def test_update_title_to_null_rejected(self, client, seed, a1_headers):
        response = client.patch(f"/api/v1/jobs/{seed['j1']}", json={"title": None}, headers=a1_headers)

        assert response.status_code == 422
        assert client.get(f"/api/v1/jobs/{seed['j1']}").json()["title"] == "j1"

    def test_update_salary_and_equity_to_null(self, client, seed, a1_headers):
        response = client.patch(
            f"/api/v1/jobs/{seed['j2']}", json={"salary": None, "equity": None}, headers=a1_headers
        )

        assert response.status_code == 200
        assert response.json()["salary"] is None
        assert response.json()["equity"] is None


class TestJobDeletion:
    """Tests for job deletion"""

    def test_delete_job(self, client, seed, a1_headers):
        response = client.delete(f"/api/v1/jobs/{seed['j1']}", headers=a1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": seed["j1"]}

        # Verify it's gone
        get_response = client.get(f"/api/v1/jobs/{seed['j1']}")
        assert get_response.status_code == 404

    def test_delete_job_anonymous(self, client, seed):
        response = client.delete(f"/api/v1/jobs/{seed['j1']}")

        assert response.status_code == 401

    def test_delete_nonexistent_job(self, client, seed, a1_headers):
        response = client.delete("/api/v1/jobs/99999", headers=a1_headers)

        assert response.status_code == 404
