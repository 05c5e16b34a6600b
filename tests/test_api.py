"""
Tests for the FastAPI surface (main_api).
Runs the real app against the in-memory backend seeded with the bundled dataset.
"""

import pytest
from fastapi.testclient import TestClient

import main_api

HEADERS = {"X-API-Key": "test-key"}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("CONTACTS_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("API_KEY", "test-key")
    for key in ("CONTACTS_SEARCH_EMAIL", "CONTACTS_REQUIRE_EMAIL", "CONTACTS_STORAGE_KEY"):
        monkeypatch.delenv(key, raising=False)
    with TestClient(main_api.app) as c:
        yield c


# ─────────────────────────────────────────────────────────────────────────────
# Meta & auth
# ─────────────────────────────────────────────────────────────────────────────


class TestMeta:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["error"] is None

    def test_wrong_api_key(self, client):
        response = client.get("/contacts", headers={"X-API-Key": "nope"})
        assert response.status_code == 401

    def test_missing_api_key(self, client):
        assert client.get("/contacts").status_code == 422

    def test_misconfigured_backend_reports_503(self, monkeypatch):
        monkeypatch.setenv("CONTACTS_STORAGE_BACKEND", "redis")
        monkeypatch.setenv("API_KEY", "test-key")
        with TestClient(main_api.app) as c:
            response = c.get("/contacts", headers=HEADERS)
        assert response.status_code == 503
        assert "redis" in response.json()["detail"]


# ─────────────────────────────────────────────────────────────────────────────
# Browse
# ─────────────────────────────────────────────────────────────────────────────


class TestBrowse:
    def test_sections_and_profile(self, client):
        body = client.get("/contacts", headers=HEADERS).json()
        assert body["profile"]["id"] == "my-profile"
        assert body["section_titles"] == sorted(body["section_titles"])
        assert body["section_titles"][0] == "A"
        assert body["total"] == body["matched"] == 15
        all_ids = [c["id"] for s in body["sections"] for c in s["data"]]
        assert "my-profile" not in all_ids

    def test_search(self, client):
        body = client.get("/contacts", params={"q": "ALICE"}, headers=HEADERS).json()
        names = [c["name"] for s in body["sections"] for c in s["data"]]
        assert names == ["Alice Johnson"]
        assert body["section_titles"] == ["A"]

    def test_search_matches_email(self, client):
        body = client.get("/contacts", params={"q": "grace.lee@"}, headers=HEADERS).json()
        assert body["matched"] == 1

    def test_contact_has_links(self, client):
        body = client.get("/contacts/contact-002", headers=HEADERS).json()
        assert body["links"] == {
            "call": "tel:+15550101",
            "sms": "sms:+15550101",
            "email": "mailto:alice.johnson@example.com",
        }


# ─────────────────────────────────────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────────────────────────────────────


class TestCrud:
    def test_create(self, client):
        response = client.post(
            "/contacts",
            json={"name": "Dora Explorer", "phone": "123", "email": "dora@x.com"},
            headers=HEADERS,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["id"].startswith("contact-")
        assert created["avatar"]
        assert created["title"] == "Colleague"

        fetched = client.get(f"/contacts/{created['id']}", headers=HEADERS).json()
        assert fetched["name"] == "Dora Explorer"

    def test_create_missing_fields(self, client):
        response = client.post("/contacts", json={"name": "No Phone"}, headers=HEADERS)
        assert response.status_code == 422
        assert response.json()["fields"] == ["phone", "email"]

    def test_update(self, client):
        response = client.put(
            "/contacts/contact-002",
            json={"name": "Alice J.", "phone": "1", "email": "a@j.com"},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Alice J."
        assert response.json()["avatar"] == "https://i.pravatar.cc/150?u=contact-002"

    def test_update_unknown(self, client):
        response = client.put(
            "/contacts/contact-nope",
            json={"name": "X", "phone": "1", "email": "x@x.com"},
            headers=HEADERS,
        )
        assert response.status_code == 404

    def test_delete(self, client):
        assert client.delete("/contacts/contact-002", headers=HEADERS).status_code == 204
        assert client.get("/contacts/contact-002", headers=HEADERS).status_code == 404

    def test_delete_unknown(self, client):
        assert client.delete("/contacts/contact-nope", headers=HEADERS).status_code == 404

    def test_delete_profile_forbidden(self, client):
        response = client.delete("/contacts/my-profile", headers=HEADERS)
        assert response.status_code == 403
        assert client.get("/profile", headers=HEADERS).status_code == 200


# ─────────────────────────────────────────────────────────────────────────────
# Profile
# ─────────────────────────────────────────────────────────────────────────────


class TestProfile:
    def test_get_profile(self, client):
        body = client.get("/profile", headers=HEADERS).json()
        assert body["name"] == "Rinesa Bislimi"
        assert body["display_title"] == "Design Lead"

    def test_update_profile(self, client):
        response = client.put(
            "/profile",
            json={
                "name": "Rinesa B.",
                "phone": "+383 44 777 777",
                "email": "rinesa@example.com",
                "title": "Head of Design",
            },
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Head of Design"
        assert client.get("/contacts", headers=HEADERS).json()["profile"]["name"] == "Rinesa B."
