"""
HTTP tests for the API routers, error mapping and rate limiting.
"""

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.infrastructure.auth import JWTHandler
from app.infrastructure.db.database import Database
from app.infrastructure.email import EmailService
from app.domain.models.company import BusinessCompanyInvite, InviteStatus
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork
from app.main import create_application

SECRET = "test-secret"


def build_client(**overrides):
    settings = Settings(**{"supabase_jwt_secret": SECRET, "rate_limit_enabled": False, **overrides})
    database = Database("sqlite://")
    database.create_all()
    email_service = EmailService()
    app = create_application(
        settings,
        database=database,
        identity_verifier=JWTHandler(SECRET),
        email_service=email_service,
    )
    return app, email_service


def auth(user_id, role=None, email="test@example.com"):
    token = JWTHandler(SECRET).generate_test_token(user_id, email=email, role=role)
    return {"Authorization": f"Bearer {token}"}


BUSINESS = auth("biz-1", "business", "kitchen@anchor.co.uk")
CHEF = auth("chef-1", "chef", "jamie@example.com")


class TestAuthenticationAndErrors:
    """Test cases for authentication and error responses."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app, _ = build_client()

    def test_missing_token(self):
        with TestClient(self.app) as client:
            response = client.get("/api/gigs/mine")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self):
        with TestClient(self.app) as client:
            response = client.get("/api/gigs/mine", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["message"].startswith("Invalid JWT token")

    def test_request_validation_shape(self):
        with TestClient(self.app) as client:
            response = client.post("/api/profiles/chef", json={}, headers=CHEF)

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "Validation Error"
        assert body["message"] == "2 fields are invalid"
        assert {e["field"] for e in body["errors"]} == {"full_name", "location"}

    def test_not_found(self):
        with TestClient(self.app) as client:
            response = client.get("/api/gigs/missing", headers=CHEF)

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_unknown_path(self):
        with TestClient(self.app) as client:
            response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["message"] == "The path /api/nowhere was not found"

    def test_health(self):
        with TestClient(self.app) as client:
            health = client.get("/api/health").json()
            email = client.get("/api/health/email").json()

        assert health["status"] == "healthy"
        assert health["dependencies"] == {"database": "healthy"}
        assert email["status"] == "not_configured"

    def test_security_headers(self):
        with TestClient(self.app) as client:
            response = client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" not in response.headers

    def test_oversized_body_rejected(self):
        app, _ = build_client(max_request_size=64)

        with TestClient(app) as client:
            response = client.post("/api/profiles/chef", json={"bio": "x" * 200}, headers=CHEF)

        assert response.status_code == 413
        assert response.json()["error"] == "Payload Too Large"

    def test_verify_unknown_invite(self):
        with TestClient(self.app) as client:
            response = client.get("/api/company/invites/verify", params={"token": "nope"})

        assert response.status_code == 400
        assert response.json() == {"valid": False, "reason": "Invalid token"}

    def test_verify_expired_invite(self):
        invite = BusinessCompanyInvite.issue(
            "biz-1", "ops@harbour.co.uk", "biz-1", now=datetime.utcnow() - timedelta(days=15)
        )
        with self.app.state.database.session_scope() as session:
            SQLAlchemyUnitOfWork(session).company_invites.save(invite)

        with TestClient(self.app) as client:
            response = client.get("/api/company/invites/verify", params={"token": invite.token})

        assert response.status_code == 400
        assert response.json() == {"valid": False, "reason": "Invitation has expired"}
        with self.app.state.database.session_scope() as session:
            stored = SQLAlchemyUnitOfWork(session).company_invites.get_by_id(invite.id)
            assert stored.status == InviteStatus.EXPIRED


class TestBookingFlow:
    """End-to-end gig booking over HTTP."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app, self.email_service = build_client()

    def _post_gig(self, client):
        start = date.today() + timedelta(days=7)
        response = client.post("/api/gigs/create", headers=BUSINESS, json={
            "title": "Saturday sous chef",
            "start_date": start.isoformat(),
            "end_date": start.isoformat(),
            "start_time": "17:00:00",
            "end_time": "23:00:00",
            "location": "Bristol",
            "pay_rate": "15.00",
            "role": "Sous chef",
        })
        assert response.status_code == 201
        return response.json()

    def test_profile_upsert_status_codes(self):
        payload = {"full_name": "Jamie Oliver", "location": "London"}
        with TestClient(self.app) as client:
            created = client.post("/api/profiles/chef", json=payload, headers=CHEF)
            replaced = client.post("/api/profiles/chef", json={**payload, "location": "Leeds"}, headers=CHEF)

        assert created.status_code == 201
        assert replaced.status_code == 200
        assert replaced.json()["location"] == "Leeds"

    def test_apply_accept_confirm(self):
        with TestClient(self.app) as client:
            client.post(
                "/api/profiles/business",
                json={"business_name": "The Anchor", "location": "Bristol", "contact_email": "kitchen@anchor.co.uk"},
                headers=BUSINESS,
            )
            client.post("/api/profiles/chef", json={"full_name": "Jamie Oliver", "location": "London"}, headers=CHEF)
            gig = self._post_gig(client)

            applied = client.post("/api/gigs/apply", json={"gig_id": gig["id"]}, headers=CHEF)
            assert applied.status_code == 201
            application_id = applied.json()["id"]

            accepted = client.put(f"/api/applications/{application_id}/accept", headers=BUSINESS)
            assert accepted.status_code == 200
            assert accepted.json()["accepted_application"]["status"] == "accepted"

            confirmed = client.put(f"/api/applications/{application_id}/confirm", headers=CHEF)
            assert confirmed.status_code == 200
            assert confirmed.json()["application"]["status"] == "confirmed"

            booked = client.get(f"/api/gigs/{gig['id']}", headers=CHEF).json()
            inbox = client.get("/api/notifications", headers=BUSINESS).json()

        assert booked["is_booked"] is True
        assert booked["business_name"] == "The Anchor"
        assert {n["title"] for n in inbox["notifications"]} == {"New application", "Gig confirmed"}
        assert inbox["unread_count"] == 2
        assert [e["subject"] for e in self.email_service.get_sent_emails()] == ["Gig confirmed: Saturday sous chef"]

    def test_only_creator_edits_gig(self):
        with TestClient(self.app) as client:
            gig = self._post_gig(client)
            response = client.put(f"/api/gigs/{gig['id']}", json={"title": "Hijacked"}, headers=CHEF)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_duplicate_application(self):
        with TestClient(self.app) as client:
            client.post("/api/profiles/chef", json={"full_name": "Jamie Oliver", "location": "London"}, headers=CHEF)
            gig = self._post_gig(client)
            client.post("/api/gigs/apply", json={"gig_id": gig["id"]}, headers=CHEF)
            response = client.post("/api/gigs/apply", json={"gig_id": gig["id"]}, headers=CHEF)

        assert response.status_code == 400


@pytest.mark.parametrize("path", ["/api/time/clock-out"])
def test_clock_requests_are_rate_limited(path):
    app, _ = build_client(rate_limit_enabled=True)

    with TestClient(app) as client:
        statuses = [
            client.post(path, json={"shift_id": "missing"}, headers=CHEF).status_code
            for _ in range(11)
        ]
        limited = client.post(path, json={"shift_id": "missing"}, headers=CHEF)

    assert statuses[:10] == [404] * 10
    assert statuses[10] == 429
    assert limited.json()["message"] == "Too many clock requests. Please wait before trying again."
    assert limited.headers["X-RateLimit-Remaining"] == "0"
