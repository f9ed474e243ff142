"""Route tests — auth, users, messages and feed over the HTTP surface.

Tests cover:
    - signup/login/logout/me and the 401 paths
    - follow/unfollow and follower listings
    - POST /messages body validation
    - GET /messages and GET /feed pagination, including the error envelope for
      out-of-range limits, absolute cursors and conflicting modes
    - health and readiness probes
"""

from uuid import uuid4

PASSWORD = "correct-horse"


async def _signup(client, name):
    resp = await client.post(
        "/api/v1/auth/signup", json={"name": name, "password": PASSWORD},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


async def _post(client, headers, body):
    resp = await client.post("/api/v1/messages", json={"body": body}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _follow(client, headers, user):
    resp = await client.post(f"/api/v1/users/{user['id']}/follow", headers=headers)
    assert resp.status_code == 204, resp.text


# -- Health -------------------------------------------------------------------

async def test_health_probes(client):
    live = await client.get("/api/v1/health/")
    ready = await client.get("/api/v1/health/ready")
    assert live.status_code == 200
    assert live.json()["status"] == "healthy"
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"


# -- Auth ---------------------------------------------------------------------

async def test_signup_login_me(client):
    user, headers = await _signup(client, "alice")
    assert user["name"] == "alice"
    assert "password" not in user

    login = await client.post(
        "/api/v1/auth/login", json={"name": "alice", "password": PASSWORD},
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == user["id"]

    me = await client.get("/api/v1/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


async def test_signup_duplicate_name(client):
    await _signup(client, "alice")
    resp = await client.post(
        "/api/v1/auth/signup", json={"name": "alice", "password": PASSWORD},
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"


async def test_signup_short_password(client):
    resp = await client.post(
        "/api/v1/auth/signup", json={"name": "alice", "password": "short"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_login_wrong_password(client):
    await _signup(client, "alice")
    resp = await client.post(
        "/api/v1/auth/login", json={"name": "alice", "password": "wrong-password"},
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "invalid credentials"


async def test_login_unknown_user_looks_the_same(client):
    resp = await client.post(
        "/api/v1/auth/login", json={"name": "nobody", "password": PASSWORD},
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "invalid credentials"


async def test_me_requires_token(client):
    resp = await client.get("/api/v1/me")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


async def test_bad_token_rejected(client):
    resp = await client.get(
        "/api/v1/me", headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 401


async def test_logout(client):
    _, headers = await _signup(client, "alice")
    assert (await client.post("/api/v1/auth/logout", headers=headers)).status_code == 204
    assert (await client.post("/api/v1/auth/logout")).status_code == 401


# -- Users --------------------------------------------------------------------

async def test_get_user_and_404(client):
    user, _ = await _signup(client, "alice")
    found = await client.get(f"/api/v1/users/{user['id']}")
    missing = await client.get(f"/api/v1/users/{uuid4()}")
    assert found.status_code == 200
    assert found.json()["name"] == "alice"
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_follow_and_listings(client):
    alice, alice_h = await _signup(client, "alice")
    bob, _ = await _signup(client, "bob")

    await _follow(client, alice_h, bob)
    await _follow(client, alice_h, bob)

    followees = await client.get(f"/api/v1/users/{alice['id']}/followees")
    followers = await client.get(f"/api/v1/users/{bob['id']}/followers")
    assert [u["name"] for u in followees.json()["users"]] == ["bob"]
    assert [u["name"] for u in followers.json()["users"]] == ["alice"]

    resp = await client.delete(f"/api/v1/users/{bob['id']}/follow", headers=alice_h)
    assert resp.status_code == 204
    followees = await client.get(f"/api/v1/users/{alice['id']}/followees")
    assert followees.json()["users"] == []


async def test_follow_self_and_unknown(client):
    alice, headers = await _signup(client, "alice")
    self_follow = await client.post(f"/api/v1/users/{alice['id']}/follow", headers=headers)
    unknown = await client.post(f"/api/v1/users/{uuid4()}/follow", headers=headers)
    assert self_follow.status_code == 400
    assert unknown.status_code == 404


async def test_follow_requires_token(client):
    bob, _ = await _signup(client, "bob")
    resp = await client.post(f"/api/v1/users/{bob['id']}/follow")
    assert resp.status_code == 401


# -- Messages -----------------------------------------------------------------

async def test_post_message(client):
    alice, headers = await _signup(client, "alice")
    message = await _post(client, headers, "  hello world  ")
    assert message["body"] == "hello world"
    assert message["author_id"] == alice["id"]
    assert message["like_count"] == 0


async def test_post_message_validation(client):
    _, headers = await _signup(client, "alice")
    blank = await client.post("/api/v1/messages", json={"body": "   "}, headers=headers)
    too_long = await client.post(
        "/api/v1/messages", json={"body": "x" * 281}, headers=headers,
    )
    anonymous = await client.post("/api/v1/messages", json={"body": "hi"})
    assert blank.status_code == 400
    assert too_long.status_code == 400
    assert anonymous.status_code == 401


async def test_global_timeline_pages(client):
    _, alice_h = await _signup(client, "alice")
    _, bob_h = await _signup(client, "bob")
    for i in range(3):
        await _post(client, alice_h, f"a{i}")
        await _post(client, bob_h, f"b{i}")

    first = await client.get("/api/v1/messages", params={"limit": "4"})
    assert first.status_code == 200
    body = first.json()
    assert [m["body"] for m in body["messages"]] == ["b2", "a2", "b1", "a1"]
    assert body["pagination"] == {"offset": 0, "limit": 4, "next_offset": 4}

    second = await client.get("/api/v1/messages", params={"limit": "4", "offset": "4"})
    body = second.json()
    assert [m["body"] for m in body["messages"]] == ["b0", "a0"]
    assert body["pagination"]["next_offset"] is None


async def test_global_timeline_defaults_on_empty_store(client):
    resp = await client.get("/api/v1/messages")
    assert resp.status_code == 200
    assert resp.json() == {
        "messages": [],
        "pagination": {"offset": 0, "limit": 20, "next_offset": None},
    }


# -- Feed ---------------------------------------------------------------------

async def test_feed_shows_followees_only(client):
    _, viewer_h = await _signup(client, "viewer")
    alice, alice_h = await _signup(client, "alice")
    bob, bob_h = await _signup(client, "bob")
    _, carol_h = await _signup(client, "carol")
    await _follow(client, viewer_h, alice)
    await _follow(client, viewer_h, bob)

    for body, headers in [
        ("a0", alice_h), ("b0", bob_h), ("c0", carol_h), ("a1", alice_h),
        ("v0", viewer_h), ("b1", bob_h), ("a2", alice_h),
    ]:
        await _post(client, headers, body)

    first = await client.get("/api/v1/feed", params={"limit": "3"}, headers=viewer_h)
    assert first.status_code == 200
    body = first.json()
    assert [m["body"] for m in body["messages"]] == ["a2", "b1", "a1"]
    assert [m["author"]["name"] for m in body["messages"]] == ["alice", "bob", "alice"]
    assert body["pagination"] == {"offset": 0, "limit": 3, "next_offset": 3}

    second = await client.get(
        "/api/v1/feed", params={"limit": "3", "offset": "3"}, headers=viewer_h,
    )
    body = second.json()
    assert [m["body"] for m in body["messages"]] == ["b0", "a0"]
    assert body["pagination"]["next_offset"] is None


async def test_feed_without_followees_is_empty(client):
    _, headers = await _signup(client, "loner")
    await _post(client, headers, "talking to myself")
    resp = await client.get("/api/v1/feed", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["messages"] == []


async def test_feed_requires_token(client):
    resp = await client.get("/api/v1/feed")
    assert resp.status_code == 401


async def test_feed_limit_out_of_range(client):
    _, headers = await _signup(client, "alice")
    resp = await client.get("/api/v1/feed", params={"limit": "101"}, headers=headers)
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "limit out of range"
    assert error["context"]["field"] == "limit"


async def test_negative_offset_rejected(client):
    resp = await client.get("/api/v1/messages", params={"offset": "-1"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "offset out of range"


async def test_absolute_cursor_not_supported(client):
    _, headers = await _signup(client, "alice")
    resp = await client.get(
        "/api/v1/feed", params={"max_id": str(uuid4())}, headers=headers,
    )
    assert resp.status_code == 501
    assert resp.json()["error"]["code"] == "UNSUPPORTED"


async def test_cursor_with_offset_rejected(client):
    resp = await client.get(
        "/api/v1/messages", params={"max_id": str(uuid4()), "offset": "10"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "mutually exclusive pagination modes"


async def test_invalid_cursor_rejected(client):
    resp = await client.get("/api/v1/messages", params={"max_id": "nope"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "invalid cursor"
