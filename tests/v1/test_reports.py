# tests/v1/test_reports.py
"""Tests for report filing and resolution endpoints."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from peoples_forum.models import Comment, Report
from peoples_forum.repositories.store import StoreAdapter


class TestFileReport:
    def test_report_comment(self, client, test_comment, member, member_headers):
        response = client.post(
            "/api/v1/reports",
            json={"comment_id": test_comment.id, "reason": "abusive"},
            headers=member_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["reporter_email"] == member.email
        assert response.json()["comment_id"] == test_comment.id

    def test_report_missing_comment(self, client, member_headers):
        response = client.post(
            "/api/v1/reports", json={"comment_id": 606, "reason": "x"}, headers=member_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Comment not found"

    def test_report_requires_token(self, client, test_comment):
        response = client.post("/api/v1/reports", json={"comment_id": test_comment.id, "reason": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestListReports:
    def test_admin_lists(self, client, test_report, admin_headers):
        response = client.get("/api/v1/reports", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert [r["id"] for r in response.json()] == [test_report.id]

    def test_member_forbidden(self, client, test_report, member_headers):
        response = client.get("/api/v1/reports", headers=member_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestResolveReport:
    def test_admin_resolves(self, client, store, test_post, test_report, test_comment, admin_headers):
        post_id, report_id, comment_id = test_post.id, test_report.id, test_comment.id

        response = client.delete(f"/api/v1/reports/{report_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "report_id": report_id,
            "comment_id": comment_id,
            "reports_deleted": 1,
            "comments_deleted": 1,
        }
        assert store.find_by_id(Report, report_id) is None
        assert client.get(f"/api/v1/posts/{post_id}/comments").json() == []

    def test_missing_report(self, client, admin_headers):
        response = client.delete("/api/v1/reports/777", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Report not found"

    def test_member_forbidden(self, client, store, test_report, member_headers):
        response = client.delete(f"/api/v1/reports/{test_report.id}", headers=member_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert store.find_by_id(Report, test_report.id) is not None

    def test_store_failure_leaves_both_rows(
        self, client, store, test_report, test_comment, admin_headers, monkeypatch
    ):
        original = StoreAdapter.delete_by_id

        def _flaky_delete(self, model, entity_id):
            if model is Comment:
                raise OperationalError("DELETE FROM comment", {}, Exception("connection reset"))
            return original(self, model, entity_id)

        monkeypatch.setattr(StoreAdapter, "delete_by_id", _flaky_delete)

        response = client.delete(f"/api/v1/reports/{test_report.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["reason"] == "store_unavailable"
        assert store.find_by_id(Report, test_report.id) is not None
        assert store.find_by_id(Comment, test_comment.id) is not None
