"""Tests for the community gallery."""

import httpx
import pytest
from conftest import StubBackend
from httpx import ASGITransport

from nusong_client.cache import COMMUNITY_TRACKS
from nusong_client.config import Settings
from nusong_client.main import NuSongApp
from nusong_client.schemas.community import Comment

PUBLIC_TRACK = {"id": "t1", "title": "Night Drive", "tags": "synthwave", "status": "completed"}


class TestLikes:
    async def test_like_then_unlike(self, app: NuSongApp, backend: StubBackend) -> None:
        backend.tracks = [dict(PUBLIC_TRACK)]
        view = app.community_view()

        track = (await view.feed())[0]
        assert not track.user_liked

        info = await view.toggle_like(track)
        assert info.user_liked
        assert COMMUNITY_TRACKS not in app.cache

        track = (await view.feed())[0]
        assert track.user_liked
        info = await view.toggle_like(track)
        assert not info.user_liked
        assert backend.likes == set()

    async def test_visitors_must_sign_in(self, app: NuSongApp, backend: StubBackend) -> None:
        backend.user = None
        backend.tracks = [dict(PUBLIC_TRACK)]
        view = app.community_view()

        assert await view.toggle_like((await view.feed())[0]) is None

        assert app.notifier.last.title == "Sign in required"
        assert backend.count("POST", "/api/tracks/t1/like") == 0
        assert app.navigator.redirects == []


class TestComments:
    async def test_add_comment(self, app: NuSongApp, backend: StubBackend) -> None:
        view = app.community_view()
        assert await view.comments("t1") == []

        comment = await view.add_comment("t1", "  Love the bassline  ")

        assert comment.comment == "Love the bassline"
        assert [c.id for c in await view.comments("t1")] == [comment.id]

    async def test_empty_comment_rejected(self, app: NuSongApp, backend: StubBackend) -> None:
        view = app.community_view()

        assert await view.add_comment("t1", "   ") is None

        assert view.errors == {"comment": "Comment cannot be empty"}
        assert backend.count("POST", "/api/tracks/t1/comments") == 0

    async def test_author_can_delete_own_comment(
        self, app: NuSongApp, backend: StubBackend
    ) -> None:
        view = app.community_view()
        comment = await view.add_comment("t1", "First!")

        assert await view.delete_comment("t1", comment)

        assert await view.comments("t1") == []

    async def test_cannot_delete_others_comment(
        self, app: NuSongApp, backend: StubBackend
    ) -> None:
        other = Comment(id="c9", track_id="t1", user_id="user-2", comment="Nice")
        backend.comments = [other.model_dump(by_alias=True)]
        view = app.community_view()

        assert not await view.delete_comment("t1", other)

        assert app.notifier.last.title == "Not allowed"
        assert backend.count("DELETE", "/api/tracks/t1/comments/c9") == 0
        assert len(await view.comments("t1")) == 1


class TestAccountUnavailable:
    @pytest.fixture
    async def offline_app(self, settings: Settings, backend: StubBackend):
        """Backend reachable except for the session lookup."""
        stub = ASGITransport(app=backend.app)

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/auth/user":
                raise httpx.ConnectError("down", request=request)
            return await stub.handle_async_request(request)

        async with NuSongApp(settings, httpx.MockTransport(handler)) as app:
            yield app

    async def test_delete_comment_reports_failure(
        self, offline_app: NuSongApp, backend: StubBackend
    ) -> None:
        comment = Comment(id="c1", track_id="t1", user_id="user-1", comment="Hi")
        backend.comments = [comment.model_dump(by_alias=True)]
        view = offline_app.community_view()

        assert not await view.delete_comment("t1", comment)

        titles = [n.title for n in offline_app.notifier.notifications]
        assert "Failed to load your account" in titles
        assert backend.count("DELETE", "/api/tracks/t1/comments/c1") == 0

    async def test_add_comment_reports_failure(
        self, offline_app: NuSongApp, backend: StubBackend
    ) -> None:
        view = offline_app.community_view()

        assert await view.add_comment("t1", "hello") is None

        assert offline_app.notifier.notifications[0].title == "Failed to load your account"
        assert backend.comments == []

    async def test_toggle_like_reports_failure(
        self, offline_app: NuSongApp, backend: StubBackend
    ) -> None:
        backend.tracks = [dict(PUBLIC_TRACK)]
        view = offline_app.community_view()

        assert await view.toggle_like((await view.feed())[0]) is None

        assert backend.likes == set()
