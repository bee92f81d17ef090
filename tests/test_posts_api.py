"""Integration tests for /api/posts."""

import asyncio

import pytest
from httpx import AsyncClient

from app.posts import repository as posts_repo
from helpers import auth

MISSING_ID = "000000000000000000000000"


async def _publish(client: AsyncClient, token: str, text: str = "Hello world") -> dict:
    response = await client.post("/api/posts", json={"text": text}, headers=auth(token))
    assert response.status_code == 200, response.text
    return response.json()


async def _user_id(client: AsyncClient, token: str) -> str:
    response = await client.get("/api/auth", headers=auth(token))
    return response.json()["id"]


class TestPostsAPI:
    @pytest.mark.asyncio
    async def test_create_post_snapshots_author(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        assert post["text"] == "Hello world"
        assert post["name"] == "Jane Doe"
        assert post["avatar"].startswith("//www.gravatar.com/avatar/")
        assert post["user"] == await _user_id(client, token)
        assert post["likes"] == []
        assert post["comments"] == []

    @pytest.mark.asyncio
    async def test_create_post_requires_text(self, client: AsyncClient, token: str):
        response = await client.post("/api/posts", json={"text": "  "}, headers=auth(token))

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    @pytest.mark.asyncio
    async def test_posts_require_auth(self, client: AsyncClient):
        response = await client.get("/api/posts")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_newest_first(self, client: AsyncClient, token: str):
        await _publish(client, token, "first")
        await _publish(client, token, "second")

        response = await client.get("/api/posts", headers=auth(token))

        assert response.status_code == 200
        assert [p["text"] for p in response.json()] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_get_post(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        response = await client.get(f"/api/posts/{post['id']}", headers=auth(token))

        assert response.status_code == 200
        assert response.json()["id"] == post["id"]

    @pytest.mark.asyncio
    async def test_get_post_malformed_id(self, client: AsyncClient, token: str):
        response = await client.get("/api/posts/123", headers=auth(token))

        assert response.status_code == 400
        assert response.json() == {"msg": "Invalid ID"}

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, client: AsyncClient, token: str):
        response = await client.get(f"/api/posts/{MISSING_ID}", headers=auth(token))

        assert response.status_code == 404
        assert response.json() == {"msg": "Post not found"}

    @pytest.mark.asyncio
    async def test_delete_post_only_by_author(
        self, client: AsyncClient, token: str, other_token: str
    ):
        post = await _publish(client, token)

        forbidden = await client.delete(f"/api/posts/{post['id']}", headers=auth(other_token))
        assert forbidden.status_code == 401
        assert forbidden.json() == {"msg": "User not authorized"}

        response = await client.delete(f"/api/posts/{post['id']}", headers=auth(token))
        assert response.status_code == 200
        assert response.json() == {"msg": "Post removed"}

        gone = await client.get(f"/api/posts/{post['id']}", headers=auth(token))
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, client: AsyncClient, token: str):
        response = await client.delete(f"/api/posts/{MISSING_ID}", headers=auth(token))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_is_plain_500(
        self, client: AsyncClient, token: str, monkeypatch
    ):
        async def boom(db):
            raise RuntimeError("db exploded")

        monkeypatch.setattr(posts_repo, "list_posts", boom)

        response = await client.get("/api/posts", headers=auth(token))

        assert response.status_code == 500
        assert response.text == "Server Error"


class TestLikesAPI:
    @pytest.mark.asyncio
    async def test_like_once(self, client: AsyncClient, token: str):
        post = await _publish(client, token)
        user_id = await _user_id(client, token)

        first = await client.put(f"/api/posts/like/{post['id']}", headers=auth(token))
        assert first.status_code == 200
        assert [lk["user"] for lk in first.json()] == [user_id]

        second = await client.put(f"/api/posts/like/{post['id']}", headers=auth(token))
        assert second.status_code == 400
        assert second.json() == {"msg": "Post already liked"}

    @pytest.mark.asyncio
    async def test_likes_are_prepended(
        self, client: AsyncClient, token: str, other_token: str
    ):
        post = await _publish(client, token)
        await client.put(f"/api/posts/like/{post['id']}", headers=auth(token))

        response = await client.put(f"/api/posts/like/{post['id']}", headers=auth(other_token))

        assert [lk["user"] for lk in response.json()] == [
            await _user_id(client, other_token),
            await _user_id(client, token),
        ]

    @pytest.mark.asyncio
    async def test_unlike_requires_prior_like(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        response = await client.put(f"/api/posts/unlike/{post['id']}", headers=auth(token))

        assert response.status_code == 400
        assert response.json() == {"msg": "Post has not yet been liked"}

    @pytest.mark.asyncio
    async def test_unlike(self, client: AsyncClient, token: str):
        post = await _publish(client, token)
        await client.put(f"/api/posts/like/{post['id']}", headers=auth(token))

        response = await client.put(f"/api/posts/unlike/{post['id']}", headers=auth(token))

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_like_missing_post(self, client: AsyncClient, token: str):
        response = await client.put(f"/api/posts/like/{MISSING_ID}", headers=auth(token))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unlike_missing_post(self, client: AsyncClient, token: str):
        response = await client.put(f"/api/posts/unlike/{MISSING_ID}", headers=auth(token))

        assert response.status_code == 404
        assert response.json() == {"msg": "Post not found"}

    @pytest.mark.asyncio
    async def test_create_post_without_body(self, client: AsyncClient, token: str):
        response = await client.post("/api/posts", headers=auth(token))

        assert response.status_code == 400
        assert [e["msg"] for e in response.json()["errors"]] == ["Text is required"]

    @pytest.mark.asyncio
    async def test_delete_post_removes_likes_and_comments(
        self, client: AsyncClient, db_session, token: str, other_token: str
    ):
        post = await _publish(client, token)
        await client.put(f"/api/posts/like/{post['id']}", headers=auth(other_token))
        await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "nice"}, headers=auth(other_token)
        )

        response = await client.delete(f"/api/posts/{post['id']}", headers=auth(token))

        assert response.status_code == 200
        assert await posts_repo.list_likes(db_session, post["id"]) == []
        assert await posts_repo.list_comments(db_session, post["id"]) == []

    @pytest.mark.asyncio
    async def test_openapi_declares_post_id(self, client: AsyncClient):
        response = await client.get("/openapi.json")

        params = response.json()["paths"]["/api/posts/{post_id}"]["get"]["parameters"]
        assert ("post_id", "path") in {(p["name"], p["in"]) for p in params}


class TestCommentsAPI:
    @pytest.mark.asyncio
    async def test_add_comments_newest_first(
        self, client: AsyncClient, token: str, other_token: str
    ):
        post = await _publish(client, token)
        await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "nice"}, headers=auth(token)
        )

        response = await client.post(
            f"/api/posts/comment/{post['id']}",
            json={"text": "agreed"},
            headers=auth(other_token),
        )

        assert response.status_code == 200
        comments = response.json()
        assert [c["text"] for c in comments] == ["agreed", "nice"]
        assert comments[0]["name"] == "John Roe"

    @pytest.mark.asyncio
    async def test_comment_requires_text(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        response = await client.post(
            f"/api/posts/comment/{post['id']}", json={}, headers=auth(token)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    @pytest.mark.asyncio
    async def test_concurrent_comments_are_both_kept(
        self, client: AsyncClient, token: str, other_token: str
    ):
        post = await _publish(client, token)

        await asyncio.gather(
            client.post(
                f"/api/posts/comment/{post['id']}", json={"text": "a"}, headers=auth(token)
            ),
            client.post(
                f"/api/posts/comment/{post['id']}", json={"text": "b"}, headers=auth(other_token)
            ),
        )

        response = await client.get(f"/api/posts/{post['id']}", headers=auth(token))
        assert sorted(c["text"] for c in response.json()["comments"]) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_delete_comment(self, client: AsyncClient, token: str, other_token: str):
        post = await _publish(client, token)
        added = await client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "nice"}, headers=auth(token)
        )
        comment_id = added.json()[0]["id"]

        # sin chequeo de autor: otro usuario también puede borrarlo
        response = await client.delete(
            f"/api/posts/comment/{post['id']}/{comment_id}", headers=auth(other_token)
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        response = await client.delete(
            f"/api/posts/comment/{post['id']}/{MISSING_ID}", headers=auth(token)
        )

        assert response.status_code == 404
        assert response.json() == {"msg": "Comment does not exist"}

    @pytest.mark.asyncio
    async def test_comment_missing_post(self, client: AsyncClient, token: str):
        response = await client.post(
            f"/api/posts/comment/{MISSING_ID}", json={"text": "hi"}, headers=auth(token)
        )

        assert response.status_code == 404
        assert response.json() == {"msg": "Post not found"}

    @pytest.mark.asyncio
    async def test_comment_without_body(self, client: AsyncClient, token: str):
        post = await _publish(client, token)

        response = await client.post(f"/api/posts/comment/{post['id']}", headers=auth(token))

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Text is required"

    @pytest.mark.asyncio
    async def test_delete_comment_on_missing_post(self, client: AsyncClient, token: str):
        response = await client.delete(
            f"/api/posts/comment/{MISSING_ID}/{MISSING_ID}", headers=auth(token)
        )

        assert response.status_code == 404
        assert response.json() == {"msg": "Post not found"}
