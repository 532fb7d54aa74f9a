from __future__ import annotations

import httpx
import pytest

import socialnet.services.profile_service as profile_service
from socialnet.client import ApiError, AuthState, AuthStore, SocialApiClient
from socialnet.client.store import FAILED, IDLE, SUCCEEDED

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _asgi_client(app) -> SocialApiClient:
    return SocialApiClient("http://testserver", transport=httpx.ASGITransport(app=app))


def _mock_client(handler) -> SocialApiClient:
    return SocialApiClient("http://testserver", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_follow_then_unfollow_merges_into_both_copies(app):
    async with _asgi_client(app) as bob_api:
        await bob_api.register("bob", "bob@x.com", "pw123456")
        bob = (await bob_api.login("bob@x.com", "pw123456"))["user"]

    async with _asgi_client(app) as api:
        await api.register("alice", "alice@x.com", "pw123456")
        store = AuthStore(api)
        assert await store.login("alice@x.com", "pw123456")
        alice = store.state.user["id"]
        await store.load_user_profile(bob["id"])

        assert await store.follow_user(bob["id"])

        assert store.state.status == SUCCEEDED
        assert store.state.error is None
        assert store.state.user["following"] == [bob["id"]]
        assert store.state.user_profile["followers"] == [alice]
        assert store.state.user_profile["followerCount"] == 1

        assert await store.unfollow_user(bob["id"])

        assert store.state.user["following"] == []
        assert store.state.user_profile["followers"] == []
        assert store.state.user_profile["followerCount"] == 0
        # server agrees with the merged state
        canonical = (await api.get_profile(bob["id"]))["user"]
        assert canonical["followers"] == []


@pytest.mark.asyncio
async def test_failed_follow_records_error_and_keeps_lists():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "User not found", "success": False})

    state = AuthState(
        user={"id": "me", "following": ["x"]},
        user_profile={"id": "them", "followers": []},
    )
    async with _mock_client(handler) as api:
        store = AuthStore(api, state)

        assert await store.follow_user("them") is False

    assert store.state.status == FAILED
    assert store.state.error == {"message": "User not found", "success": False}
    assert store.state.user["following"] == ["x"]
    assert store.state.user_profile["followers"] == []


@pytest.mark.asyncio
async def test_network_failure_is_recorded():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _mock_client(handler) as api:
        store = AuthStore(api, AuthState(user={"id": "me", "following": []}))

        assert await store.unfollow_user("them") is False

    assert store.state.status == FAILED
    assert store.state.error["success"] is False


@pytest.mark.asyncio
async def test_follow_only_touches_profile_of_target_and_does_not_duplicate():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"message": "Followed successfully", "success": True, "updatedFollowerCount": 3})

    state = AuthState(
        user={"id": "me", "following": ["them"]},
        user_profile={"id": "someone-else", "followers": ["z"]},
    )
    async with _mock_client(handler) as api:
        store = AuthStore(api, state)
        await store.follow_user("them")

    assert calls == ["/users/them/follow"]
    assert store.state.user["following"] == ["them"]
    assert store.state.user_profile == {"id": "someone-else", "followers": ["z"]}


@pytest.mark.asyncio
async def test_listeners_see_loading_then_result():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "updatedFollowerCount": 1})

    async with _mock_client(handler) as api:
        store = AuthStore(api, AuthState(user={"id": "me", "following": []}))
        unsubscribe = store.subscribe(lambda s: seen.append(s.status))
        await store.follow_user("them")
        unsubscribe()
        store.set_selected_user({"id": "them"})

    assert seen == ["loading", "succeeded"]
    assert store.state.selected_user == {"id": "them"}


@pytest.mark.asyncio
async def test_empty_suggestions_are_not_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "No suggested users at this time", "success": False})

    async with _mock_client(handler) as api:
        store = AuthStore(api)
        assert await store.load_suggested_users() == []

    assert store.state.suggested_users == []
    assert store.state.status == IDLE


@pytest.mark.asyncio
async def test_logout_resets_state(app):
    async with _asgi_client(app) as api:
        await api.register("alice", "alice@x.com", "pw123456")
        store = AuthStore(api)
        await store.login("alice@x.com", "pw123456")

        await store.logout()

        assert store.state == AuthState()
        with pytest.raises(ApiError) as exc:
            await api.get_suggested()
        assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_edit_profile_sends_form_fields_and_image(app, monkeypatch):
    uploaded = []

    def fake_upload(data, content_type):
        uploaded.append((data, content_type))
        return "https://cdn.example.com/alice.png"

    monkeypatch.setattr(profile_service, "upload_image", fake_upload)

    async with _asgi_client(app) as api:
        await api.register("alice", "alice@x.com", "pw123456")
        await api.login("alice@x.com", "pw123456")

        body = await api.edit_profile(bio="hello", gender="female", image=("me.png", PNG, "image/png"))

        assert body["message"] == "Profile updated."
        assert body["user"]["bio"] == "hello"
        assert body["user"]["gender"] == "female"
        assert body["user"]["profilePicture"] == "https://cdn.example.com/alice.png"
        assert uploaded == [(PNG, "image/png")]

        # text-only edit keeps the picture
        body = await api.edit_profile(bio="again")
        assert body["user"]["bio"] == "again"
        assert body["user"]["profilePicture"] == "https://cdn.example.com/alice.png"

        with pytest.raises(ApiError) as exc:
            await api.edit_profile(image=("me.png", b"not an image", "image/png"))
        assert exc.value.status_code == 400
        assert exc.value.payload == {"message": "Invalid image file.", "success": False}


@pytest.mark.asyncio
async def test_follow_or_unfollow_toggles_through_the_api(app):
    async with _asgi_client(app) as bob_api:
        await bob_api.register("bob", "bob@x.com", "pw123456")
        bob = (await bob_api.login("bob@x.com", "pw123456"))["user"]["id"]

    async with _asgi_client(app) as api:
        await api.register("alice", "alice@x.com", "pw123456")
        alice = (await api.login("alice@x.com", "pw123456"))["user"]["id"]

        first = await api.follow_or_unfollow(bob)
        assert first["action"] == "followed"
        assert first["updatedFollowerCount"] == 1
        assert (await api.get_profile(bob))["user"]["followers"] == [alice]

        second = await api.follow_or_unfollow(bob)
        assert second["action"] == "unfollowed"
        assert second["updatedFollowerCount"] == 0

        with pytest.raises(ApiError) as exc:
            await api.follow_or_unfollow(alice)
        assert exc.value.status_code == 400
        assert exc.value.payload["message"] == "You cannot follow/unfollow yourself"
