"""
Integration tests for the Tenant Notes API.

Tests complete workflows across multiple endpoints and the full stack
(routes → services → repositories → database), logging in for real
instead of minting tokens.
"""

from app.services.note_service import NoteService
from tests.conftest import DEFAULT_PASSWORD


def login(client, email, password=DEFAULT_PASSWORD):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


class TestFreePlanWorkflow:
    """Free plan limit, upgrade, then unlimited notes"""

    def test_admin_hits_limit_then_upgrades(self, client, acme_admin):
        headers = login(client, "admin@acme.test")

        # Step 1: three notes fit in the free plan
        for title in ("A", "B", "C"):
            response = client.post(
                "/api/notes", headers=headers, json={"title": title, "content": "..."}
            )
            assert response.status_code == 201

        # Step 2: the fourth is refused
        response = client.post("/api/notes", headers=headers, json={"title": "D", "content": "..."})
        assert response.status_code == 402

        tenant = client.get("/api/tenants/acme", headers=headers).json()
        assert tenant["note_count"] == 3
        assert tenant["is_at_limit"] is True

        # Step 3: upgrade and retry
        response = client.post("/api/tenants/acme/upgrade", headers=headers)
        assert response.status_code == 200

        response = client.post("/api/notes", headers=headers, json={"title": "D", "content": "..."})
        assert response.status_code == 201

        tenant = client.get("/api/tenants/acme", headers=headers).json()
        assert tenant["subscription"] == "pro"
        assert tenant["note_count"] == 4
        assert tenant["note_limit"] is None

    def test_upgrade_applies_without_new_login(self, client, acme_admin, acme_member):
        """Subscription is read from the database, not from the token"""
        member = login(client, "user@acme.test")
        admin = login(client, "admin@acme.test")

        for i in range(3):
            client.post("/api/notes", headers=member, json={"title": f"{i}", "content": "x"})
        assert client.post(
            "/api/notes", headers=member, json={"title": "4", "content": "x"}
        ).status_code == 402

        client.post("/api/tenants/acme/upgrade", headers=admin)

        assert client.post(
            "/api/notes", headers=member, json={"title": "4", "content": "x"}
        ).status_code == 201

    def test_member_accepts_invitation_through_admin(self, client, acme_admin, acme_member):
        member = login(client, "user@acme.test")
        admin = login(client, "admin@acme.test")

        client.post(f"/api/users/{acme_member.id}/invite-upgrade", headers=admin, json={})

        invitations = client.get("/api/upgrade-invitations", headers=member).json()["invitations"]
        assert len(invitations) == 1

        accept = {"invitation_id": invitations[0]["id"], "action": "accept"}
        assert client.post("/api/upgrade-invitations", headers=member, json=accept).status_code == 403
        assert client.post("/api/upgrade-invitations", headers=admin, json=accept).status_code == 200

        assert client.get("/api/upgrade-invitations", headers=member).json()["invitations"] == []


class TestIsolationWorkflow:
    def test_member_cannot_see_admin_note(self, client, acme_admin, acme_member):
        admin = login(client, "admin@acme.test")
        member = login(client, "user@acme.test")

        note_id = client.post(
            "/api/notes", headers=admin, json={"title": "Board minutes", "content": "..."}
        ).json()["id"]

        assert client.get(f"/api/notes/{note_id}", headers=member).status_code == 404
        assert client.get("/api/notes", headers=member).json()["total"] == 0
        assert client.get(f"/api/notes/{note_id}", headers=admin).status_code == 200

    def test_admins_manage_only_their_tenant(self, client, acme_admin, globex_admin, globex_member):
        acme = login(client, "admin@acme.test")
        globex = login(client, "admin@globex.test")

        acme_users = client.get("/api/users", headers=acme).json()["users"]
        globex_users = client.get("/api/users", headers=globex).json()["users"]
        assert {u["email"] for u in acme_users} == {"admin@acme.test"}
        assert {u["email"] for u in globex_users} == {"admin@globex.test", "user@globex.test"}

        assert client.delete(f"/api/users/{globex_member.id}", headers=acme).status_code == 403
        assert client.get("/api/tenants/globex", headers=acme).status_code == 403

    def test_invited_user_lands_in_admins_tenant(self, client, acme_admin):
        admin = login(client, "admin@acme.test")

        created = client.post("/api/users", headers=admin, json={"email": "new@acme.test"}).json()
        new_user = login(client, "new@acme.test", created["temporary_password"])

        me = client.get("/api/auth/me", headers=new_user).json()
        assert me["tenant_slug"] == "acme"
        assert me["role"] == "member"

    def test_deleted_user_notes_are_gone(self, client, acme_admin, acme_member):
        admin = login(client, "admin@acme.test")
        member = login(client, "user@acme.test")
        client.post("/api/notes", headers=member, json={"title": "mine", "content": "x"})

        assert client.delete(f"/api/users/{acme_member.id}", headers=admin).status_code == 200

        # The token outlives the account but the notes do not
        assert client.get("/api/notes", headers=member).json()["total"] == 0


class TestUnexpectedErrors:
    def test_unhandled_error_returns_generic_500(self, lenient_client, member_headers, monkeypatch):
        def explode(self, identity):
            raise RuntimeError("database password is hunter2")

        monkeypatch.setattr(NoteService, "get_user_notes", explode)

        response = lenient_client.get("/api/notes", headers=member_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
