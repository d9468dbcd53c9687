"""End-to-end tests for the comments, votes and moderation API.

Runs the real FastAPI app against the test container (in-memory
persistence). Credentials are minted with the same auth settings the app loads.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from colloquy.config import Settings
from colloquy.interface.api.app import create_app
from colloquy.persistence.repository.inmemory import InMemoryDatabase
from colloquy.util.jwt import create_token
from tests.conftest import make_content
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def database(client, container) -> InMemoryDatabase:
    """The in-memory tables behind the app, resolved on the app's loop."""
    return client.portal.call(container.get, InMemoryDatabase)


@pytest.fixture
def content(database):
    item = make_content()
    database.contents[item.id] = item
    return item


def auth_headers(role: str = "member", user_id: str | None = None) -> dict:
    token = create_token(
        user_id or str(uuid4()), "tester", Settings().auth, role=role
    )
    return {"Authorization": f"Bearer {token}"}


def post_comment(client, content_id, text="Hello", parent_id=None, headers=None):
    return client.post(
        f"/contents/{content_id}/comments",
        json={"content": text, "parent_id": parent_id},
        headers=headers or auth_headers(),
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCommentEndpoints:
    """Create and list comments."""

    def test_create_requires_authentication(self, client, content):
        response = client.post(
            f"/contents/{content.id}/comments", json={"content": "Hi"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_unauthenticated(self, client, content):
        response = post_comment(
            client, content.id, headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401

    def test_cookie_credential_accepted(self, client, content):
        token = create_token(str(uuid4()), "tester", Settings().auth)
        client.cookies.set("auth_token", token)

        response = client.post(
            f"/contents/{content.id}/comments", json={"content": "Via cookie"}
        )

        assert response.status_code == 201

    def test_create_and_list_thread(self, client, content):
        top = post_comment(client, content.id, "Top").json()["comment"]
        reply = post_comment(
            client, content.id, "Reply", parent_id=top["comment_id"]
        ).json()["comment"]

        response = client.get(f"/contents/{content.id}/comments")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["error"] is None
        [node] = body["comments"]
        assert node["content"] == "Top"
        assert node["user_vote"] == 0
        assert [r["comment_id"] for r in node["replies"]] == [reply["comment_id"]]

    def test_blank_content_is_bad_request(self, client, content):
        response = post_comment(client, content.id, "   ")

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "content"

    def test_missing_parent_is_not_found(self, client, content):
        response = post_comment(client, content.id, parent_id=str(uuid4()))

        assert response.status_code == 404

    def test_missing_content_is_not_found(self, client):
        response = post_comment(client, uuid4())

        assert response.status_code == 404

    def test_unknown_order_is_bad_request(self, client, content):
        response = client.get(f"/contents/{content.id}/comments?order=hot")

        assert response.status_code == 400

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_out_of_range_page_size_is_bad_request(self, client, content, page_size):
        post_comment(client, content.id)

        response = client.get(
            f"/contents/{content.id}/comments?page_size={page_size}"
        )

        assert response.status_code == 400

    def test_replies_endpoint(self, client, content):
        top = post_comment(client, content.id, "Top").json()["comment"]
        post_comment(client, content.id, "Reply", parent_id=top["comment_id"])

        response = client.get(f"/comments/{top['comment_id']}/replies")

        assert response.status_code == 200
        assert [r["content"] for r in response.json()["replies"]] == ["Reply"]


class TestVoteEndpoints:
    """Cast, change and remove votes."""

    def test_vote_lifecycle(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]
        headers = auth_headers()

        up = client.put(
            f"/comments/{comment_id}/vote", json={"value": 1}, headers=headers
        )
        down = client.put(
            f"/comments/{comment_id}/vote", json={"value": -1}, headers=headers
        )
        listing = client.get(f"/contents/{content.id}/comments", headers=headers)
        removed = client.delete(f"/comments/{comment_id}/vote", headers=headers)
        again = client.delete(f"/comments/{comment_id}/vote", headers=headers)

        assert up.status_code == 200
        assert (up.json()["delta"], up.json()["comment"]["rating_score"]) == (1, 1)
        assert (down.json()["delta"], down.json()["comment"]["rating_score"]) == (
            -2,
            -1,
        )
        assert listing.json()["comments"][0]["user_vote"] == -1
        assert removed.json()["comment"]["rating_score"] == 0
        assert again.status_code == 409

    def test_vote_requires_authentication(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]

        response = client.put(f"/comments/{comment_id}/vote", json={"value": 1})

        assert response.status_code == 401

    def test_invalid_vote_value(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]

        response = client.put(
            f"/comments/{comment_id}/vote", json={"value": 0}, headers=auth_headers()
        )

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "value"

    def test_vote_on_malformed_id(self, client):
        response = client.put(
            "/comments/not-a-uuid/vote", json={"value": 1}, headers=auth_headers()
        )

        assert response.status_code == 400


class TestModerationEndpoints:
    """Reports, listing and hiding."""

    def test_report_and_hide_flow(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]
        moderator = auth_headers(role="moderator")

        report = client.post(
            f"/comments/{comment_id}/reports",
            json={"reason": "spam"},
            headers=auth_headers(),
        )
        hide = client.put(f"/moderation/comments/{comment_id}/hide", headers=moderator)
        listing = client.get(f"/contents/{content.id}/comments")
        reported = client.get("/moderation/comments", headers=moderator)

        assert report.status_code == 201
        assert report.json()["report_count"] == 1
        assert hide.status_code == 200
        assert hide.json()["comment"]["hidden"] is True
        assert listing.json()["comments"] == []
        [item] = reported.json()["comments"]
        assert item["comment"]["comment_id"] == comment_id
        assert item["report_count"] == 1

    def test_member_is_forbidden(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]

        hide = client.put(
            f"/moderation/comments/{comment_id}/hide", headers=auth_headers()
        )
        listing = client.get("/moderation/comments", headers=auth_headers())

        assert hide.status_code == 403
        assert listing.status_code == 403

    def test_empty_reason_is_bad_request(self, client, content):
        comment_id = post_comment(client, content.id).json()["comment"]["comment_id"]

        response = client.post(
            f"/comments/{comment_id}/reports",
            json={"reason": "  "},
            headers=auth_headers(),
        )

        assert response.status_code == 400

    def test_hide_missing_comment_is_not_found(self, client):
        response = client.put(
            f"/moderation/comments/{uuid4()}/hide",
            headers=auth_headers(role="moderator"),
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_reported_listing_rejects_page_size(self, client, page_size):
        response = client.get(
            f"/moderation/comments?page_size={page_size}",
            headers=auth_headers(role="moderator"),
        )

        assert response.status_code == 400
