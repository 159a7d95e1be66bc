from app.models.tenant import SubscriptionPlan
from app.services.notification_service import get_upgrade_notifier
from app.main import app


class TestSendInvitation:
    """Tests for POST /api/users/{id}/invite-upgrade"""

    def test_admin_sends_invitation(self, client, admin_headers, acme_member):
        response = client.post(
            f"/api/users/{acme_member.id}/invite-upgrade",
            headers=admin_headers,
            json={"message": "Let's go Pro"},
        )

        assert response.status_code == 200
        invitation = response.json()["invitation"]
        assert invitation["target_user"] == "user@acme.test"
        assert invitation["message"] == "Let's go Pro"
        assert invitation["id"].startswith("simulated-")
        assert "sent_at" in invitation

    def test_default_message(self, client, admin_headers, acme_member):
        response = client.post(f"/api/users/{acme_member.id}/invite-upgrade", headers=admin_headers)

        assert response.status_code == 200
        assert "upgrading to pro" in response.json()["invitation"]["message"].lower()

    def test_member_cannot_send(self, client, member_headers, acme_admin):
        response = client.post(
            f"/api/users/{acme_admin.id}/invite-upgrade", headers=member_headers, json={}
        )
        assert response.status_code == 403

    def test_unknown_user(self, client, admin_headers):
        response = client.post("/api/users/missing/invite-upgrade", headers=admin_headers, json={})
        assert response.status_code == 404

    def test_cross_tenant_target(self, client, admin_headers, globex_member):
        response = client.post(
            f"/api/users/{globex_member.id}/invite-upgrade", headers=admin_headers, json={}
        )
        assert response.status_code == 403

    def test_delivery_goes_through_notifier(self, client, admin_headers, acme_admin, acme_member):
        sent = []

        class RecordingNotifier:
            def send_upgrade_invitation(self, sender, target, message):
                sent.append((sender.user_id, target.id, message))
                return {
                    "id": "recorded",
                    "target_user": target.email,
                    "message": message,
                    "sent_at": "2026-01-01T00:00:00",
                }

        app.dependency_overrides[get_upgrade_notifier] = RecordingNotifier
        try:
            response = client.post(
                f"/api/users/{acme_member.id}/invite-upgrade",
                headers=admin_headers,
                json={"message": "hi"},
            )
        finally:
            del app.dependency_overrides[get_upgrade_notifier]

        assert response.status_code == 200
        assert response.json()["invitation"]["id"] == "recorded"
        assert sent == [(acme_admin.id, acme_member.id, "hi")]


class TestListInvitations:
    """Tests for GET /api/upgrade-invitations"""

    def test_free_tenant_has_pending_suggestion(self, client, acme_admin, member_headers):
        response = client.get("/api/upgrade-invitations", headers=member_headers)

        assert response.status_code == 200
        invitations = response.json()["invitations"]
        assert len(invitations) == 1
        assert invitations[0]["status"] == "pending"
        assert invitations[0]["from_user"]["email"] == "admin@acme.test"

    def test_pro_tenant_has_none(self, client, db_session, acme, member_headers):
        acme.subscription = SubscriptionPlan.PRO
        db_session.commit()

        response = client.get("/api/upgrade-invitations", headers=member_headers)
        assert response.json()["invitations"] == []

    def test_requires_auth(self, client):
        assert client.get("/api/upgrade-invitations").status_code == 401


class TestRespondToInvitation:
    """Tests for POST /api/upgrade-invitations"""

    def test_admin_accept_upgrades_tenant(self, client, db_session, acme, admin_headers):
        response = client.post(
            "/api/upgrade-invitations",
            headers=admin_headers,
            json={"invitation_id": "upgrade-suggestion", "action": "accept"},
        )

        assert response.status_code == 200
        assert response.json()["tenant"]["subscription"] == "pro"
        db_session.refresh(acme)
        assert acme.subscription == SubscriptionPlan.PRO

    def test_member_accept_forbidden(self, client, db_session, acme, member_headers):
        response = client.post(
            "/api/upgrade-invitations",
            headers=member_headers,
            json={"invitation_id": "upgrade-suggestion", "action": "accept"},
        )

        assert response.status_code == 403
        assert "contact your admin" in response.json()["detail"].lower()
        db_session.refresh(acme)
        assert acme.subscription == SubscriptionPlan.FREE

    def test_decline_changes_nothing(self, client, db_session, acme, member_headers):
        response = client.post(
            "/api/upgrade-invitations",
            headers=member_headers,
            json={"invitation_id": "upgrade-suggestion", "action": "decline"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Upgrade invitation declined"
        assert response.json()["tenant"] is None
        db_session.refresh(acme)
        assert acme.subscription == SubscriptionPlan.FREE

    def test_invalid_action(self, client, member_headers):
        response = client.post(
            "/api/upgrade-invitations",
            headers=member_headers,
            json={"invitation_id": "upgrade-suggestion", "action": "maybe"},
        )
        assert response.status_code == 400

    def test_missing_invitation_id(self, client, member_headers):
        response = client.post(
            "/api/upgrade-invitations", headers=member_headers, json={"action": "accept"}
        )
        assert response.status_code == 400
