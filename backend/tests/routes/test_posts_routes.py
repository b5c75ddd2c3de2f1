"""Post Routes — feed, ownership, likes and comments."""

import logging
from uuid import uuid4

import pytest


@pytest.fixture
async def ada_post(client, ada):
    res = await client.post("/api/posts", json={"text": "First!"}, headers=ada)
    assert res.status_code == 200, res.text
    return res.json()


async def test_create_post_requires_token(client):
    res = await client.post("/api/posts", json={"text": "hello"})
    assert res.status_code == 401
    assert res.json() == {"msg": "No token, authorization denied"}


async def test_create_post_requires_text(client, ada):
    res = await client.post("/api/posts", json={"text": ""}, headers=ada)
    assert res.status_code == 400
    assert [e["msg"] for e in res.json()["errors"]] == ["text is required"]


async def test_create_post_snapshots_author(client, ada):
    me = (await client.get("/api/auth", headers=ada)).json()
    res = await client.post("/api/posts", json={"text": "hello"}, headers=ada)
    assert res.status_code == 200
    post = res.json()
    assert post["text"] == "hello"
    assert post["name"] == me["name"]
    assert post["avatar"] == me["avatar"]
    assert post["user"] == me["_id"]
    assert post["like"] == []
    assert post["comments"] == []


async def test_feed_is_newest_first(client, ada):
    for text in ("one", "two", "three"):
        await client.post("/api/posts", json={"text": text}, headers=ada)
    res = await client.get("/api/posts", headers=ada)
    assert [p["text"] for p in res.json()] == ["three", "two", "one"]


async def test_feed_requires_token(client):
    assert (await client.get("/api/posts")).status_code == 401


async def test_get_post(client, ada, ada_post):
    res = await client.get(f"/api/posts/{ada_post['_id']}", headers=ada)
    assert res.status_code == 200
    assert res.json()["text"] == "First!"


@pytest.mark.parametrize("post_id", [str(uuid4()), "not-an-id"])
async def test_unknown_or_malformed_post_is_404(client, ada, post_id):
    res = await client.get(f"/api/posts/{post_id}", headers=ada)
    assert res.status_code == 404
    assert res.json() == {"msg": "Post not found"}


async def test_owner_deletes_post(client, ada, ada_post):
    res = await client.delete(f"/api/posts/{ada_post['_id']}", headers=ada)
    assert res.status_code == 200
    assert res.json() == {"msg": "Post deleted"}
    res = await client.get(f"/api/posts/{ada_post['_id']}", headers=ada)
    assert res.status_code == 404


async def test_non_owner_cannot_delete_post(client, ada, bob, ada_post):
    res = await client.delete(f"/api/posts/{ada_post['_id']}", headers=bob)
    assert res.status_code == 401
    assert res.json() == {"msg": "User not authorized"}
    res = await client.get(f"/api/posts/{ada_post['_id']}", headers=ada)
    assert res.status_code == 200


async def test_denied_delete_logs_error_metadata(client, bob, ada_post, caplog):
    caplog.set_level(logging.WARNING, logger="devconnector.api.error_handlers")
    await client.delete(f"/api/posts/{ada_post['_id']}", headers=bob)

    [record] = [
        r for r in caplog.records
        if getattr(r, "error_code", None) == "NOT_AUTHORIZED"
    ]
    assert record.levelno == logging.WARNING
    assert record.category == "authorization"
    assert record.severity == "warning"
    assert record.debug_info == {"action": "delete_post"}
    assert record.method == "DELETE"


async def test_unknown_post_logs_resource_id(client, ada, caplog):
    caplog.set_level(logging.WARNING, logger="devconnector.api.error_handlers")
    missing = str(uuid4())
    await client.get(f"/api/posts/{missing}", headers=ada)

    [record] = [
        r for r in caplog.records
        if getattr(r, "error_code", None) == "RESOURCE_NOT_FOUND"
    ]
    assert record.resource_id == missing
    assert record.category == "resource_not_found"


async def test_like_twice_rejected(client, bob, ada_post):
    url = f"/api/posts/like/{ada_post['_id']}"
    first = await client.put(url, headers=bob)
    assert first.status_code == 200
    assert len(first.json()) == 1

    second = await client.put(url, headers=bob)
    assert second.status_code == 400
    assert second.json() == {"msg": "post already liked"}

    post = (await client.get(f"/api/posts/{ada_post['_id']}", headers=bob)).json()
    assert len(post["like"]) == 1


async def test_unlike(client, ada, bob, ada_post):
    await client.put(f"/api/posts/like/{ada_post['_id']}", headers=ada)
    await client.put(f"/api/posts/like/{ada_post['_id']}", headers=bob)
    res = await client.put(f"/api/posts/unlike/{ada_post['_id']}", headers=bob)
    assert res.status_code == 200
    me = (await client.get("/api/auth", headers=ada)).json()
    assert [like["user"] for like in res.json()] == [me["_id"]]


async def test_unlike_never_liked_rejected(client, ada, bob, ada_post):
    await client.put(f"/api/posts/like/{ada_post['_id']}", headers=ada)
    res = await client.put(f"/api/posts/unlike/{ada_post['_id']}", headers=bob)
    assert res.status_code == 400
    assert res.json() == {"msg": "post has not yet been liked"}

    me = (await client.get("/api/auth", headers=ada)).json()
    post = (await client.get(f"/api/posts/{ada_post['_id']}", headers=ada)).json()
    assert [like["user"] for like in post["like"]] == [me["_id"]]


async def test_like_unknown_post_is_404(client, bob):
    res = await client.put(f"/api/posts/like/{uuid4()}", headers=bob)
    assert res.status_code == 404


async def test_comment_newest_first(client, ada, bob, ada_post):
    url = f"/api/posts/comment/{ada_post['_id']}"
    await client.post(url, json={"text": "nice"}, headers=bob)
    res = await client.post(url, json={"text": "thanks"}, headers=ada)
    assert res.status_code == 200
    comments = res.json()
    assert [c["text"] for c in comments] == ["thanks", "nice"]
    assert comments[1]["name"] == "Bob"


async def test_comment_requires_text(client, bob, ada_post):
    res = await client.post(
        f"/api/posts/comment/{ada_post['_id']}", json={}, headers=bob,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "text is required"


async def test_comment_on_unknown_post_is_404(client, bob):
    res = await client.post(
        f"/api/posts/comment/{uuid4()}", json={"text": "hi"}, headers=bob,
    )
    assert res.status_code == 404


async def test_author_deletes_targeted_comment(client, bob, ada_post):
    url = f"/api/posts/comment/{ada_post['_id']}"
    await client.post(url, json={"text": "first"}, headers=bob)
    comments = (await client.post(url, json={"text": "second"}, headers=bob)).json()
    older = comments[1]

    res = await client.delete(f"{url}/{older['_id']}", headers=bob)
    assert res.status_code == 200
    assert [c["text"] for c in res.json()] == ["second"]


async def test_post_owner_deletes_any_comment(client, ada, bob, ada_post):
    url = f"/api/posts/comment/{ada_post['_id']}"
    comment = (await client.post(url, json={"text": "spam"}, headers=bob)).json()[0]
    res = await client.delete(f"{url}/{comment['_id']}", headers=ada)
    assert res.status_code == 200
    assert res.json() == []


async def test_stranger_cannot_delete_comment(client, ada, bob, register, ada_post):
    carol = await register(name="Carol", email="carol@devconnector.io")
    url = f"/api/posts/comment/{ada_post['_id']}"
    comment = (await client.post(url, json={"text": "mine"}, headers=bob)).json()[0]

    res = await client.delete(f"{url}/{comment['_id']}", headers=carol)
    assert res.status_code == 401
    assert res.json() == {"msg": "User not authorized"}
    post = (await client.get(f"/api/posts/{ada_post['_id']}", headers=ada)).json()
    assert [c["_id"] for c in post["comments"]] == [comment["_id"]]


async def test_delete_unknown_comment_is_404(client, ada, ada_post):
    res = await client.delete(
        f"/api/posts/comment/{ada_post['_id']}/nope", headers=ada,
    )
    assert res.status_code == 404
    assert res.json() == {"msg": "Comment not found"}
