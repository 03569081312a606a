"""
Comment endpoint tests: covers adding and listing comments, their
ordering, and the absence of any post existence check.

Comments are append-only in this API (no edit/delete endpoints), so the
test surface is focused on creation and read-through verification.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_post(client: AsyncClient, slug: str) -> str:
    """Create a post and return its id."""
    resp = await client.post("/api/posts", json={
        "title": f"Post {slug}",
        "slug": slug,
        "content": "Post content",
    })
    assert resp.status_code == 201
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# Add comment
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_comment(async_client: AsyncClient):
    """Posting a comment returns 201 with a confirmation message."""
    post_id = await _create_post(async_client, "add-comment")

    resp = await async_client.post(
        f"/api/posts/{post_id}/comments",
        json={"name": "Reader", "comment": "Great post!"},
    )
    assert resp.status_code == 201
    assert resp.json() == {"message": "Comment added"}


@pytest.mark.asyncio
async def test_comment_on_nonexistent_post_is_accepted(async_client: AsyncClient):
    """No existence check: commenting on an unknown post id still returns 201."""
    resp = await async_client.post(
        "/api/posts/no-such-post/comments",
        json={"name": "Ghost", "comment": "Anyone here?"},
    )
    assert resp.status_code == 201

    resp = await async_client.get("/api/posts/no-such-post/comments")
    assert resp.status_code == 200
    assert [c["comment"] for c in resp.json()] == ["Anyone here?"]


# ---------------------------------------------------------------------------
# List comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_comments_empty(async_client: AsyncClient):
    """A post without comments lists an empty array."""
    post_id = await _create_post(async_client, "quiet")

    resp = await async_client.get(f"/api/posts/{post_id}/comments")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_comments_oldest_first(async_client: AsyncClient):
    """Comments come back in creation order, oldest first, with all fields."""
    post_id = await _create_post(async_client, "busy")

    for i in range(3):
        resp = await async_client.post(
            f"/api/posts/{post_id}/comments",
            json={"name": f"Reader {i}", "comment": f"Comment {i}"},
        )
        assert resp.status_code == 201

    resp = await async_client.get(f"/api/posts/{post_id}/comments")
    assert resp.status_code == 200
    comments = resp.json()
    assert [c["comment"] for c in comments] == ["Comment 0", "Comment 1", "Comment 2"]
    for comment in comments:
        assert comment["post_id"] == post_id
        assert "id" in comment
        assert "created_at" in comment
    assert comments[0]["name"] == "Reader 0"


@pytest.mark.asyncio
async def test_comments_are_scoped_to_their_post(async_client: AsyncClient):
    """Listing comments for one post never returns another post's comments."""
    first = await _create_post(async_client, "first")
    second = await _create_post(async_client, "second")

    await async_client.post(f"/api/posts/{first}/comments", json={"name": "A", "comment": "on first"})
    await async_client.post(f"/api/posts/{second}/comments", json={"name": "B", "comment": "on second"})

    resp = await async_client.get(f"/api/posts/{first}/comments")
    assert [c["comment"] for c in resp.json()] == ["on first"]


@pytest.mark.asyncio
async def test_comments_survive_post_deletion(async_client: AsyncClient):
    """Deleting a post does not cascade; its comments remain as orphans."""
    post_id = await _create_post(async_client, "doomed")
    await async_client.post(f"/api/posts/{post_id}/comments", json={"name": "A", "comment": "still here"})

    resp = await async_client.delete(f"/api/posts/{post_id}")
    assert resp.status_code == 200

    resp = await async_client.get(f"/api/posts/{post_id}/comments")
    assert resp.status_code == 200
    assert len(resp.json()) == 1


# ---------------------------------------------------------------------------
# Store-enforced constraints
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_missing_body_is_a_store_failure(async_client: AsyncClient):
    """Omitting 'comment' passes the API layer and is rejected by NOT NULL (500)."""
    post_id = await _create_post(async_client, "incomplete")

    resp = await async_client.post(
        f"/api/posts/{post_id}/comments",
        json={"name": "Incomplete Reader"},
    )
    assert resp.status_code == 500
    assert "error" in resp.json()

    resp = await async_client.get(f"/api/posts/{post_id}/comments")
    assert resp.json() == []
