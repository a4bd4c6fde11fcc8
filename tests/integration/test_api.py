"""
End-to-end tests of the HTTP API over an in-memory database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.adherence.dashboard import dashboard_cache
from app.core.security import create_access_token
from app.db.session import get_db
from app.main import app


@pytest.fixture
def client(engine):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    dashboard_cache.clear()
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    dashboard_cache.clear()


def _register(client, email="alice@example.com", password="password123"):
    response = client.post("/api/v1/auth/register",
                           json={"email": email, "password": password, "full_name": "Alice"})
    assert response.status_code == 201, response.text
    return response.json()


def _auth(email):
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


@pytest.fixture
def alice(client):
    _register(client, "alice@example.com")
    return _auth("alice@example.com")


@pytest.fixture
def bob(client):
    _register(client, "bob@example.com")
    return _auth("bob@example.com")


@pytest.fixture
def aspirin(client, alice, medication_form):
    response = client.post("/api/v1/medications", json=medication_form, headers=alice)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"

    def test_health(self, client):
        assert client.get("/health").json()["service"] == "meds-buddy-api"


class TestAuth:

    def test_register_and_login(self, client):
        user = _register(client)
        assert user["email"] == "alice@example.com"
        assert "hashed_password" not in user

        response = client.post("/api/v1/auth/token",
                               json={"email": "alice@example.com", "password": "password123"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["last_sign_in_at"] is not None

    def test_oauth2_form_login(self, client):
        _register(client)
        response = client.post("/api/v1/auth/login",
                               data={"username": "alice@example.com", "password": "password123"})
        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

    def test_duplicate_registration(self, client):
        _register(client)
        response = client.post("/api/v1/auth/register",
                               json={"email": "alice@example.com", "password": "password123"})
        assert response.status_code == 409

    def test_wrong_password(self, client):
        _register(client)
        response = client.post("/api/v1/auth/token", json={"email": "alice@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "access_denied"

    def test_missing_token(self, client):
        response = client.get("/api/v1/medications")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_logout(self, client, alice):
        assert client.post("/api/v1/auth/logout", headers=alice).status_code == 204


class TestMedications:

    def test_create_and_list(self, client, alice, aspirin):
        response = client.get("/api/v1/medications", headers=alice)
        assert response.status_code == 200
        listed = response.json()
        assert [m["id"] for m in listed] == [aspirin["id"]]
        assert listed[0]["name"] == "Aspirin"
        assert listed[0]["time"] == "08:00:00"
        assert listed[0]["frequency"] == "once"

    def test_validation_error(self, client, alice, medication_form):
        medication_form["name"] = ""
        medication_form["frequency"] = "sometimes"
        response = client.post("/api/v1/medications", json=medication_form, headers=alice)
        assert response.status_code == 422

        body = response.json()
        assert body["error"] == "validation_error"
        assert body["detail"] == "Invalid request: name, frequency"
        assert [e["field"] for e in body["errors"]] == ["name", "frequency"]
        assert all(e["message"] for e in body["errors"])

    def test_update_cannot_clear_required_field(self, client, alice, aspirin):
        response = client.patch(f"/api/v1/medications/{aspirin['id']}", json={"name": None}, headers=alice)
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert "name cannot be cleared" in body["errors"][0]["message"]

    def test_update(self, client, alice, aspirin):
        response = client.patch(f"/api/v1/medications/{aspirin['id']}",
                                json={"dosage": "300mg", "user_id": 999}, headers=alice)
        assert response.status_code == 200
        body = response.json()
        assert body["dosage"] == "300mg"
        assert body["user_id"] == aspirin["user_id"]

    def test_other_user_cannot_see_or_change(self, client, bob, aspirin):
        assert client.get(f"/api/v1/medications/{aspirin['id']}", headers=bob).status_code == 404
        assert client.patch(f"/api/v1/medications/{aspirin['id']}",
                            json={"dosage": "1mg"}, headers=bob).status_code == 404
        assert client.delete(f"/api/v1/medications/{aspirin['id']}", headers=bob).status_code == 404
        assert client.get("/api/v1/medications", headers=bob).json() == []

    def test_delete(self, client, alice, aspirin):
        assert client.delete(f"/api/v1/medications/{aspirin['id']}", headers=alice).status_code == 204
        assert client.get("/api/v1/medications", headers=alice).json() == []


class TestTracking:

    def test_mark_undo_cycle(self, client, alice, aspirin):
        url = f"/api/v1/medications/{aspirin['id']}/taken"

        response = client.post(url, json={"note": "with breakfast"}, headers=alice)
        assert response.status_code == 201
        assert response.json()["notes"] == "with breakfast"

        assert client.post(url, headers=alice).status_code == 409

        today = client.get("/api/v1/logs/today", headers=alice).json()
        assert [e["medication_id"] for e in today] == [aspirin["id"]]

        assert client.delete(url, headers=alice).status_code == 204
        assert client.delete(url, headers=alice).status_code == 404
        assert client.get("/api/v1/logs/today", headers=alice).json() == []

    def test_mark_without_body(self, client, alice, aspirin):
        response = client.post(f"/api/v1/medications/{aspirin['id']}/taken", headers=alice)
        assert response.status_code == 201
        assert response.json()["notes"] is None

    def test_history(self, client, alice, aspirin):
        client.post(f"/api/v1/medications/{aspirin['id']}/taken", headers=alice)
        history = client.get(f"/api/v1/medications/{aspirin['id']}/logs", headers=alice)
        assert history.status_code == 200
        assert len(history.json()) == 1

    def test_delete_log(self, client, alice, bob, aspirin):
        entry = client.post(f"/api/v1/medications/{aspirin['id']}/taken", headers=alice).json()
        assert client.delete(f"/api/v1/logs/{entry['id']}", headers=bob).status_code == 404
        assert client.delete(f"/api/v1/logs/{entry['id']}", headers=alice).status_code == 204


class TestDashboard:

    def test_progress_follows_mutations(self, client, alice, aspirin, medication_form):
        client.post("/api/v1/medications", json={**medication_form, "name": "Metformin"}, headers=alice)
        client.post("/api/v1/medications", json={**medication_form, "name": "Vitamin D", "time": "20:00"},
                    headers=alice)

        progress = client.get("/api/v1/dashboard/progress", headers=alice).json()
        assert progress == {"taken_count": 0, "total_count": 3, "percentage": 0, "pending_count": 3}

        client.post(f"/api/v1/medications/{aspirin['id']}/taken", headers=alice)
        progress = client.get("/api/v1/dashboard/progress", headers=alice).json()
        assert progress["percentage"] == 33
        assert progress["pending_count"] == 2

    def test_dashboard_groups(self, client, alice, aspirin):
        client.post(f"/api/v1/medications/{aspirin['id']}/taken", headers=alice)
        dashboard = client.get("/api/v1/dashboard", headers=alice).json()

        assert dashboard["pending_count"] == 0
        assert dashboard["progress"]["percentage"] == 100
        assert dashboard["last_taken_at"] is not None
        assert [g["time"] for g in dashboard["groups"]] == ["08:00"]
        status = dashboard["groups"][0]["medications"][0]
        assert status["taken"] is True
        assert status["medication"]["name"] == "Aspirin"
