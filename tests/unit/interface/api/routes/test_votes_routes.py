"""Unit tests for vote routes."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from quotevote.config import Settings
from quotevote.interface.api.app import create_app
from tests.conftest import auth_header
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client backed by in-memory persistence."""
    container = build_test_container(None, FastapiProvider())
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def alice():
    return auth_header("alice", Settings().auth)


def create_quote(client: TestClient, headers: dict[str, str], content: str) -> int:
    response = client.post(
        "/quotes",
        json={"content": content, "author": "Anonymous"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestAuthentication:
    """Vote routes reject anonymous callers."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/votes/1"),
            ("delete", "/votes/1"),
            ("get", "/votes/check/1"),
            ("get", "/votes/me"),
        ],
    )
    def test_missing_token_is_unauthorized(self, client, method, path):
        response = client.request(method.upper(), path)

        assert response.status_code == 401

    def test_invalid_token_is_unauthorized(self, client):
        response = client.post(
            "/votes/1", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    def test_non_bearer_scheme_is_unauthorized(self, client):
        response = client.post("/votes/1", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401


class TestCastVoteRoute:
    """Tests for POST /votes/{quote_id}."""

    def test_cast_returns_201(self, client, alice):
        quote_id = create_quote(client, alice, "Fortune favors the bold.")

        response = client.post(f"/votes/{quote_id}", headers=alice)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {"quote_id": quote_id, "vote_value": 1}

    def test_cast_on_missing_quote_is_404(self, client, alice):
        response = client.post("/votes/999", headers=alice)

        assert response.status_code == 404

    def test_second_cast_is_400_already_voted(self, client, alice):
        quote_id = create_quote(client, alice, "Fortune favors the bold.")
        client.post(f"/votes/{quote_id}", headers=alice)

        response = client.post(f"/votes/{quote_id}", headers=alice)

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "already_voted"

    def test_cast_elsewhere_is_400_with_current_quote(self, client, alice):
        first = create_quote(client, alice, "Fortune favors the bold.")
        second = create_quote(client, alice, "Time is money, they say.")
        client.post(f"/votes/{first}", headers=alice)

        response = client.post(f"/votes/{second}", headers=alice)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["reason"] == "conflicting_active_vote"
        assert detail["current_voted_quote_id"] == first
        assert "remove your current vote" in detail["message"]


class TestRetractVoteRoute:
    """Tests for DELETE /votes/{quote_id}."""

    def test_retract_after_cast(self, client, alice):
        quote_id = create_quote(client, alice, "Fortune favors the bold.")
        client.post(f"/votes/{quote_id}", headers=alice)

        response = client.delete(f"/votes/{quote_id}", headers=alice)

        assert response.status_code == 200
        assert response.json()["data"] == {"quote_id": quote_id, "removed": True}

    def test_retract_without_vote_is_400(self, client, alice):
        quote_id = create_quote(client, alice, "Fortune favors the bold.")

        response = client.delete(f"/votes/{quote_id}", headers=alice)

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "no_active_vote"


class TestReadRoutes:
    """Tests for GET /votes/check/{quote_id} and GET /votes/me."""

    def test_check_and_me(self, client, alice):
        quote_id = create_quote(client, alice, "Fortune favors the bold.")

        check = client.get(f"/votes/check/{quote_id}", headers=alice)
        assert check.status_code == 200
        assert check.json()["can_vote"] is True

        me = client.get("/votes/me", headers=alice)
        assert me.status_code == 200
        assert me.json() is None

        client.post(f"/votes/{quote_id}", headers=alice)

        me = client.get("/votes/me", headers=alice)
        assert me.json()["quote_id"] == quote_id
        assert me.json()["vote_count"] == 1

    def test_check_missing_quote_is_404(self, client, alice):
        response = client.get("/votes/check/12345", headers=alice)

        assert response.status_code == 404
