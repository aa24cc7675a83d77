"""
Unit tests for the HTTP API.

Every request goes through a TestClient bound to a fresh in-memory service
container, so tests never share tasks, audit records or rate limit windows.
"""

import pytest
from fastapi.testclient import TestClient

from privacywatch.config import Settings
from privacywatch.middleware.rate_limiting import RateLimiter
from privacywatch.routes.dependencies import ServiceContainer
from privacywatch.utils.file_security import ERROR_INVALID_NAME, ERROR_TOO_LARGE

ORG_ID = "org-user-1"
USER = {"X-User-Id": ORG_ID, "X-User-Role": "user"}
OTHER_USER = {"X-User-Id": "org-user-2", "X-User-Role": "user"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "admin"}

PDF = {"file_name": "politica.pdf", "file_size": 2048, "mime_type": "application/pdf"}


def _submit_answers(client, answers, mode="reset", headers=USER):
    return client.post(
        f"/api/organizations/{ORG_ID}/answers",
        json={"answers": answers, "mode": mode},
        headers=headers,
    )


def _first_task_id(client) -> str:
    _submit_answers(client, [])
    response = client.get(f"/api/organizations/{ORG_ID}/tasks", headers=USER)
    return response.json()["tasks"][0]["id"]


@pytest.mark.unit
class TestAuthentication:
    def test_health(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_user_header(self, client) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/questions")
        assert response.status_code == 401

    def test_other_organization_forbidden_and_audited(self, client, audit_store) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/tasks", headers=OTHER_USER)

        assert response.status_code == 403
        denied = audit_store.query_actor("org-user-2")
        assert len(denied) == 1
        assert denied[0].error_message == "Access denied"
        assert denied[0].resource_type == "task"

    def test_admin_reads_any_organization(self, client) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/questions", headers=ADMIN)
        assert response.status_code == 200


@pytest.mark.unit
class TestAssessmentEndpoints:
    """Test catalog and answer submission."""

    def test_questions(self, client) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/questions", headers=USER)
        body = response.json()
        assert body["total"] == 29
        assert body["questions"][0]["id"] == 1

    def test_submit_answers_derives_tasks(self, client) -> None:
        response = _submit_answers(client, ["sim", "não"])

        assert response.status_code == 200
        body = response.json()
        assert body["version"] == 1
        assert body["catalog_size"] == 29
        assert body["tasks_created"] == 5
        assert {t["template_key"] for t in body["tasks"]} == {
            "privacyPolicy",
            "consent",
            "dataMapping",
            "dataSubjectRights",
            "dpo",
        }

    def test_mode_is_required(self, client) -> None:
        response = client.post(f"/api/organizations/{ORG_ID}/answers", json={"answers": []}, headers=USER)
        assert response.status_code == 422

    def test_too_many_answers(self, client) -> None:
        response = _submit_answers(client, ["sim"] * 30)
        assert response.status_code == 400
        assert "29" in response.json()["detail"]

    def test_latest_answers(self, client) -> None:
        assert client.get(f"/api/organizations/{ORG_ID}/answers", headers=USER).status_code == 404
        _submit_answers(client, ["sim"])
        response = client.get(f"/api/organizations/{ORG_ID}/answers", headers=USER)
        assert response.json()["version"] == 1

    def test_sector_answers_unknown_sector(self, client) -> None:
        response = client.post(
            f"/api/organizations/{ORG_ID}/sectors/juridico/answers",
            json={"answers": ["não"]},
            headers=USER,
        )
        assert response.status_code == 400

    def test_sector_analysis(self, client) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/sector-analysis", headers=USER)
        assert response.status_code == 200
        assert "base" in response.json()["sectors"]


@pytest.mark.unit
class TestTaskEndpoints:
    """Test evidence upload and the review workflow over HTTP."""

    def test_full_review_flow(self, client) -> None:
        task_id = _first_task_id(client)

        upload = client.post(f"/api/tasks/{task_id}/documents", json=PDF, headers=USER)
        assert upload.status_code == 201
        assert len(upload.json()["evidence"]) == 1

        submitted = client.post(f"/api/tasks/{task_id}/submit", json={"comments": "Pronto"}, headers=USER)
        assert submitted.json()["status"] == "in_review"

        assert client.post(f"/api/tasks/{task_id}/approve", headers=USER).status_code == 403

        approved = client.post(f"/api/tasks/{task_id}/approve", headers=ADMIN)
        assert approved.json()["status"] == "approved"
        assert approved.json()["reviewed_by"] == "admin-1"

        completed = client.post(f"/api/tasks/{task_id}/complete", headers=USER)
        assert completed.json()["status"] == "completed"

    def test_submit_without_evidence(self, client) -> None:
        task_id = _first_task_id(client)
        response = client.post(f"/api/tasks/{task_id}/submit", headers=USER)
        assert response.status_code == 400

    def test_invalid_document_lists_every_error(self, client, audit_store) -> None:
        task_id = _first_task_id(client)
        response = client.post(
            f"/api/tasks/{task_id}/documents",
            json={"file_name": "doc.exe", "file_size": 20 * 1024 * 1024, "mime_type": "application/pdf"},
            headers=USER,
        )

        assert response.status_code == 400
        assert len(response.json()["detail"]["errors"]) == 2
        failures = [r for r in audit_store.query_actor(ORG_ID) if r.resource_type == "document"]
        assert failures and not failures[-1].success

    def test_reject_requires_comments(self, client) -> None:
        task_id = _first_task_id(client)
        client.post(f"/api/tasks/{task_id}/documents", json=PDF, headers=USER)
        client.post(f"/api/tasks/{task_id}/submit", headers=USER)

        response = client.post(f"/api/tasks/{task_id}/reject", json={"comments": " "}, headers=ADMIN)
        assert response.status_code == 400

        response = client.post(f"/api/tasks/{task_id}/reject", json={"comments": "Incompleto"}, headers=ADMIN)
        assert response.json()["status"] == "rejected"

    def test_unknown_task(self, client) -> None:
        assert client.get("/api/tasks/does-not-exist", headers=USER).status_code == 404

    def test_other_user_cannot_read_task(self, client) -> None:
        task_id = _first_task_id(client)
        assert client.get(f"/api/tasks/{task_id}", headers=OTHER_USER).status_code == 403

    def test_rate_limit_headers(self, client) -> None:
        response = client.get(f"/api/organizations/{ORG_ID}/tasks", headers=USER)
        assert response.headers["X-RateLimit-Limit"] == "100"
        assert response.headers["X-RateLimit-Remaining"] == "99"


@pytest.mark.unit
class TestDocumentValidation:
    def test_valid(self, client) -> None:
        response = client.post("/api/documents/validate", json=PDF, headers=USER)
        assert response.json() == {"is_valid": True, "errors": []}

    def test_invalid(self, client) -> None:
        response = client.post(
            "/api/documents/validate",
            json={"file_name": "", "file_size": 0, "mime_type": "text/plain"},
            headers=USER,
        )
        body = response.json()
        assert body["is_valid"] is False
        assert len(body["errors"]) == 3


@pytest.mark.unit
class TestSecurityEndpoints:
    def test_report_requires_admin(self, client) -> None:
        assert client.get("/api/security/audit-report", headers=USER).status_code == 403

    def test_report(self, client) -> None:
        _submit_answers(client, [])
        response = client.get("/api/security/audit-report", headers=ADMIN)

        assert response.status_code == 200
        body = response.json()
        assert body["total_actions"] >= 1
        assert body["recommendations"]

    def test_report_rejects_inverted_window(self, client) -> None:
        response = client.get(
            "/api/security/audit-report",
            params={"start": "2024-03-10T00:00:00Z", "end": "2024-03-01T00:00:00Z"},
            headers=ADMIN,
        )
        assert response.status_code == 400

    def test_report_rate_limited(self, client, audit_store) -> None:
        for _ in range(10):
            assert client.get("/api/security/audit-report", headers=ADMIN).status_code == 200

        response = client.get("/api/security/audit-report", headers=ADMIN)

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) >= 1
        assert response.headers["X-RateLimit-Remaining"] == "0"
        limited = [r for r in audit_store.query_actor("admin-1") if r.error_message == "Rate limit exceeded"]
        assert len(limited) == 1

    def test_task_metrics(self, client) -> None:
        _submit_answers(client, [])
        response = client.get(f"/api/security/organizations/{ORG_ID}/metrics", headers=USER)
        assert response.json()["total_tasks"] == 4


@pytest.mark.unit
class TestUploadNameHandling:
    def test_name_empty_after_sanitizing_is_rejected(self, client, task_store) -> None:
        task_id = _first_task_id(client)
        response = client.post(
            f"/api/tasks/{task_id}/documents",
            json={"file_name": "...", "file_size": 10, "mime_type": "application/pdf"},
            headers=USER,
        )

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == [ERROR_INVALID_NAME]
        assert task_store.get_task(task_id).evidence == []


@pytest.mark.unit
class TestContainerSettings:
    """Test that the container uses what it is given."""

    @pytest.fixture
    def configured_client(self, audit_store):
        from privacywatch.main import app
        from privacywatch.routes.dependencies import get_container

        settings = Settings(max_upload_size=1000, trusted_proxies=["testclient"])
        container = ServiceContainer(audit_store=audit_store, rate_limiter=RateLimiter(enabled=True), settings=settings)
        app.dependency_overrides[get_container] = lambda: container
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()

    def test_empty_injected_stores_are_kept(self, task_store, audit_store) -> None:
        container = ServiceContainer(task_store=task_store, audit_store=audit_store)
        assert len(audit_store) == 0
        assert container.audit_store is audit_store
        assert container.task_store is task_store
        assert container.recorder.store is audit_store

    def test_upload_limit_from_settings(self, configured_client) -> None:
        response = configured_client.post("/api/documents/validate", json=PDF, headers=USER)
        assert response.json()["is_valid"] is False
        assert ERROR_TOO_LARGE in response.json()["errors"]

    def test_forwarded_address_ignored_from_untrusted_peer(self, client, audit_store) -> None:
        client.get(f"/api/organizations/{ORG_ID}/tasks", headers={**OTHER_USER, "X-Forwarded-For": "203.0.113.7"})
        assert audit_store.query_actor("org-user-2")[0].ip_address == "testclient"

    def test_forwarded_address_used_from_trusted_proxy(self, configured_client, audit_store) -> None:
        configured_client.get(
            f"/api/organizations/{ORG_ID}/tasks", headers={**OTHER_USER, "X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
        )
        assert audit_store.query_actor("org-user-2")[0].ip_address == "203.0.113.7"
