"""End-to-end tests for the pairing flow over HTTP."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from pairnotes.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client backed by the mocked container."""
    app = create_app(build_test_container(None, FastapiProvider()))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def past_window_client(monkeypatch):
    """Test client whose report window closed last week."""
    monkeypatch.setenv("REPORT__SHIFT_WEEKS", "-1")
    app = create_app(build_test_container(None, FastapiProvider()))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def open_window_client(monkeypatch):
    """Test client whose report window closes next week."""
    monkeypatch.setenv("REPORT__SHIFT_WEEKS", "1")
    app = create_app(build_test_container(None, FastapiProvider()))
    with TestClient(app) as test_client:
        yield test_client


def sign_up(client: TestClient, email: str, name: str) -> str:
    response = client.post(
        "/auth/signup", json={"email": email, "password": "secret1", "name": name}
    )
    assert response.status_code == 201
    assert response.cookies.get("auth_token")
    return response.json()["token"]


def act_as(client: TestClient, token: str) -> None:
    client.cookies = {"auth_token": token}


def pair_via_http(client: TestClient) -> tuple[str, str, str]:
    alice = sign_up(client, "alice@example.com", "Alice")
    bob = sign_up(client, "bob@example.com", "Bob")

    act_as(client, alice)
    invite = client.post("/pair/invites", json={"partner_email": "bob@example.com"})
    assert invite.status_code == 201

    act_as(client, bob)
    accepted = client.post(f"/pair/invites/{invite.json()['invite_id']}/accept")
    assert accepted.status_code == 200

    act_as(client, alice)
    client.post("/pair/sync")
    return alice, bob, accepted.json()["pair_id"]


class TestAuthFlow:
    """Sign-up, session checks and sign-out."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_me_without_cookie(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_sign_up_then_me(self, client):
        # Arrange
        token = sign_up(client, "alice@example.com", "Alice")
        act_as(client, token)

        # Act
        response = client.get("/auth/me")

        # Assert
        data = response.json()
        assert data["authenticated"] is True
        assert data["user"]["email"] == "alice@example.com"

    def test_sign_in_wrong_password(self, client):
        sign_up(client, "alice@example.com", "Alice")

        response = client.post(
            "/auth/signin", json={"email": "alice@example.com", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["auth_kind"] == "invalid_credentials"

    def test_sign_up_twice(self, client):
        sign_up(client, "alice@example.com", "Alice")

        response = client.post(
            "/auth/signup",
            json={"email": "alice@example.com", "password": "secret1", "name": "A"},
        )

        assert response.status_code == 409

    def test_sign_out_without_session(self, client):
        response = client.post("/auth/signout")

        assert response.status_code == 200
        assert response.json()["success"] is True


class TestPairingFlow:
    """Invites, pairing, notes and breaking up."""

    def test_requires_authentication(self, client):
        response = client.get("/pair")

        assert response.status_code == 401
        assert response.json()["error"] == "not_authenticated"

    def test_invite_accept_and_status(self, client):
        # Arrange
        alice, bob, pair_id = pair_via_http(client)

        # Act
        act_as(client, alice)
        alice_status = client.get("/pair").json()
        act_as(client, bob)
        bob_status = client.get("/pair").json()

        # Assert
        assert alice_status["in_pair"] is True
        assert alice_status["pair_id"] == bob_status["pair_id"] == pair_id
        assert alice_status["partner_email"] == "bob@example.com"
        assert bob_status["partner_email"] == "alice@example.com"

    def test_duplicate_invite_conflicts(self, client):
        alice = sign_up(client, "alice@example.com", "Alice")
        sign_up(client, "bob@example.com", "Bob")
        act_as(client, alice)
        client.post("/pair/invites", json={"partner_email": "bob@example.com"})

        response = client.post(
            "/pair/invites", json={"partner_email": "bob@example.com"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_invite"

    def test_invite_unknown_email(self, client):
        alice = sign_up(client, "alice@example.com", "Alice")
        act_as(client, alice)

        response = client.post(
            "/pair/invites", json={"partner_email": "nobody@example.com"}
        )

        assert response.status_code == 404

    def test_notes_shared_between_partners(self, client):
        # Arrange
        alice, bob, _ = pair_via_http(client)
        act_as(client, alice)
        created = client.post("/notes", json={"text": "Buy oat milk"})

        # Act
        act_as(client, bob)
        listed = client.get("/notes").json()

        # Assert
        assert created.status_code == 201
        assert listed["total"] == 1
        assert listed["notes"][0]["text"] == "Buy oat milk"
        assert listed["notes"][0]["owner_uid"] == created.json()["owner_uid"]

    def test_notes_outside_pair(self, client):
        alice = sign_up(client, "alice@example.com", "Alice")
        act_as(client, alice)

        response = client.post("/notes", json={"text": "hello"})

        assert response.status_code == 412
        assert response.json()["error"] == "not_in_pair"

    def test_edit_and_remove_note(self, client):
        alice, _, _ = pair_via_http(client)
        act_as(client, alice)
        note_id = client.post("/notes", json={"text": "draft"}).json()["note_id"]

        edited = client.patch(f"/notes/{note_id}", json={"text": "final"})
        removed = client.delete(f"/notes/{note_id}")

        assert edited.json()["text"] == "final"
        assert removed.status_code == 204
        assert client.get("/notes").json()["total"] == 0

    def test_break_pair(self, client):
        # Arrange
        alice, bob, _ = pair_via_http(client)
        act_as(client, bob)

        # Act
        broken = client.post("/pair/break")
        act_as(client, alice)
        synced = client.post("/pair/sync").json()

        # Assert
        assert broken.status_code == 200
        assert broken.json()["pair"]["status"] == "ended"
        assert synced["status"]["in_pair"] is False


class TestReportFlow:
    """Schedule and report generation."""

    def test_generate_before_window_closes(self, open_window_client):
        client = open_window_client
        alice, _, _ = pair_via_http(client)
        act_as(client, alice)

        response = client.post("/reports/generate")

        assert response.status_code == 412
        assert response.json()["error"] == "not_due_yet"

    def test_schedule_shows_open_window(self, open_window_client):
        client = open_window_client
        alice, _, pair_id = pair_via_http(client)
        act_as(client, alice)

        schedule = client.get("/reports/schedule").json()

        assert schedule["in_pair"] is True
        assert schedule["pair_id"] == pair_id
        assert schedule["due"] is False
        assert schedule["ms_to_next"] > 0

    def test_generate_closed_window(self, past_window_client):
        # Arrange
        client = past_window_client
        alice, bob, pair_id = pair_via_http(client)
        act_as(client, alice)
        client.post("/notes", json={"text": "Walked the dog"})

        # Act
        act_as(client, bob)
        generated = client.post("/reports/generate")
        current = client.get("/reports/current").json()

        # Assert
        assert generated.status_code == 200
        assert generated.json()["generated"] is True
        assert current["report"]["pair_id"] == pair_id
        assert current["report"]["status"] == "ready"
        assert current["report"]["summary"] == "Mock summary"
