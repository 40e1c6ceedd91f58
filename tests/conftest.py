"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from httpx import ASGITransport

# Set test environment variables before importing the app
os.environ.setdefault("API_BASE_URL", "http://test")

from nusong_client.config import Settings, get_settings
from nusong_client.main import NuSongApp

ACTIVE_USER = {
    "id": "user-1",
    "email": "ada@example.com",
    "username": "ada",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "emailVerified": True,
    "subscriptionPlanId": "plan-pro",
    "planStatus": "active",
    "audioGenerationsUsed": 2,
    "maxAudioGenerations": 50,
}

FREE_USER = {**ACTIVE_USER, "subscriptionPlanId": None, "planStatus": "free"}

PASSWORD = "correct-horse-battery"


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"message": "Unauthorized"})


class StubBackend:
    """In-process stand-in for the NuSong REST backend.

    Status endpoints replay a script: each poll consumes the next entry and
    the last entry repeats forever.
    """

    def __init__(self) -> None:
        self.user: dict[str, Any] | None = dict(ACTIVE_USER)
        self.quota: dict[str, Any] = {"canGenerate": True, "currentUsage": 2, "maxGenerations": 50}
        self.status_script: list[dict[str, Any]] = [{"status": "pending"}]
        self.image_script: list[dict[str, Any]] = [{"status": "processing"}]
        self.generation_requests: list[dict[str, Any]] = []
        self.tracks: list[dict[str, Any]] = []
        self.albums: list[dict[str, Any]] = [
            {"id": "album-1", "name": "My Songs", "isDefault": True}
        ]
        self.band: dict[str, Any] | None = None
        self.playlists: list[dict[str, Any]] = []
        self.playlist_tracks: dict[str, list[str]] = {}
        self.comments: list[dict[str, Any]] = []
        self.likes: set[str] = set()
        self.uploaded: dict[str, tuple[bytes, str]] = {}
        self.failures: dict[tuple[str, str], tuple[int, dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.app = self._build()

    def fail(self, method: str, path: str, status: int, body: dict[str, Any] | None = None):
        """Make every method+path request answer status with body."""
        self.failures[(method, path)] = (status, body or {"message": "Something went wrong"})

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))

    @staticmethod
    def _next(script: list[dict[str, Any]]) -> dict[str, Any]:
        return script.pop(0) if len(script) > 1 else script[0]

    @staticmethod
    def _scripted_error(entry: dict[str, Any]) -> JSONResponse | None:
        """An entry like {"httpStatus": 401} answers with that status instead."""
        if "httpStatus" not in entry:
            return None
        return JSONResponse(status_code=entry["httpStatus"], content={"message": "Scripted"})

    def _track(self, track_id: str) -> dict[str, Any] | None:
        return next((t for t in self.tracks if t["id"] == track_id), None)

    def _build(self) -> FastAPI:
        app = FastAPI()

        @app.middleware("http")
        async def record_and_fail(request: Request, call_next):
            key = (request.method, request.url.path)
            self.calls.append(key)
            if key in self.failures:
                status, body = self.failures[key]
                return JSONResponse(status_code=status, content=body)
            return await call_next(request)

        # Auth
        @app.get("/api/auth/user")
        async def auth_user():
            if self.user is None:
                return _unauthorized()
            return self.user

        @app.post("/api/auth/login")
        async def login(body: dict):
            if body.get("password") != PASSWORD:
                return JSONResponse(status_code=401, content={"message": "Invalid credentials"})
            self.user = {**ACTIVE_USER, "email": body["email"]}
            return {"user": self.user}

        @app.post("/api/auth/logout")
        async def logout():
            self.user = None
            return Response(status_code=204)

        @app.get("/api/user/generation-status")
        async def generation_quota():
            return self.quota

        # Generation
        @app.post("/api/generate-text-to-music")
        async def text_to_music(body: dict):
            self.generation_requests.append(body)
            return {"generationId": "gen-1", "requestId": "req-1"}

        @app.post("/api/generate-audio-to-music")
        async def audio_to_music(body: dict):
            self.generation_requests.append(body)
            return {"generationId": "gen-2", "requestId": "req-2"}

        @app.get("/api/generation/{generation_id}/status")
        async def generation_status(generation_id: str):
            entry = self._next(self.status_script)
            return self._scripted_error(entry) or {"id": generation_id, "tags": "rock", **entry}

        @app.get("/api/my-generations")
        async def my_generations():
            return self.tracks

        @app.patch("/api/generation/{generation_id}/visibility")
        async def visibility(generation_id: str, body: dict):
            track = self._track(generation_id)
            track.update(body)
            return track

        @app.patch("/api/generation/{generation_id}/album")
        async def move(generation_id: str, body: dict):
            track = self._track(generation_id)
            track["albumId"] = body["albumId"]
            return track

        @app.delete("/api/generation/{generation_id}")
        async def delete_generation(generation_id: str):
            self.tracks = [t for t in self.tracks if t["id"] != generation_id]
            return {"success": True}

        @app.get("/api/track/{track_id}")
        async def public_track(track_id: str):
            track = self._track(track_id)
            if track is None or track.get("visibility") == "private":
                return JSONResponse(status_code=404, content={"message": "Track not found"})
            return track

        # Albums
        @app.get("/api/albums")
        async def albums():
            return self.albums

        @app.post("/api/albums")
        async def create_album(body: dict):
            album = {"id": f"album-{len(self.albums) + 1}", "name": body["name"]}
            self.albums.append(album)
            return album

        @app.get("/api/albums/{album_id}/share")
        async def get_share(album_id: str):
            album = next(a for a in self.albums if a["id"] == album_id)
            if not album.get("shareToken"):
                return JSONResponse(status_code=404, content={"message": "Not shared"})
            return {"shareToken": album["shareToken"]}

        @app.post("/api/albums/{album_id}/share")
        async def create_share(album_id: str):
            album = next(a for a in self.albums if a["id"] == album_id)
            album["shareToken"] = f"tok-{album_id}"
            return {"shareToken": album["shareToken"]}

        @app.get("/api/share/{token}")
        async def shared_album(token: str):
            album = next((a for a in self.albums if a.get("shareToken") == token), None)
            if album is None:
                return JSONResponse(status_code=404, content={"message": "Album not found"})
            tracks = [t for t in self.tracks if t.get("albumId") == album["id"]]
            return {"album": album, "tracks": tracks}

        @app.get("/api/u/{username}/{album_slug}")
        async def public_album(username: str, album_slug: str):
            album = next(
                (a for a in self.albums if a["name"].lower().replace(" ", "-") == album_slug),
                None,
            )
            if album is None or username != ACTIVE_USER["username"]:
                return JSONResponse(status_code=404, content={"message": "Album not found"})
            return {"album": album, "tracks": [], "owner": {"id": "user-1", "username": username}}

        # Playlists
        @app.get("/api/playlists")
        async def playlists():
            return self.playlists

        @app.post("/api/playlists")
        async def create_playlist(body: dict):
            playlist = {"id": f"playlist-{len(self.playlists) + 1}", "isPublic": False, **body}
            self.playlists.append(playlist)
            self.playlist_tracks[playlist["id"]] = []
            return playlist

        @app.patch("/api/playlists/{playlist_id}")
        async def update_playlist(playlist_id: str, body: dict):
            playlist = next(p for p in self.playlists if p["id"] == playlist_id)
            playlist.update(body)
            return playlist

        @app.delete("/api/playlists/{playlist_id}")
        async def delete_playlist(playlist_id: str):
            self.playlists = [p for p in self.playlists if p["id"] != playlist_id]
            self.playlist_tracks.pop(playlist_id, None)
            return Response(status_code=204)

        @app.get("/api/playlists/{playlist_id}/tracks")
        async def playlist_tracks(playlist_id: str):
            ids = self.playlist_tracks.get(playlist_id, [])
            # Newest first on the wire; position gives the playlist order.
            return [
                {**self._track(track_id), "position": ids.index(track_id)}
                for track_id in reversed(ids)
            ]

        @app.post("/api/playlists/{playlist_id}/tracks")
        async def add_playlist_track(playlist_id: str, body: dict):
            self.playlist_tracks[playlist_id].append(body["trackId"])
            return {"success": True}

        @app.delete("/api/playlists/{playlist_id}/tracks/{track_id}")
        async def remove_playlist_track(playlist_id: str, track_id: str):
            self.playlist_tracks[playlist_id].remove(track_id)
            return Response(status_code=204)

        # Uploads
        @app.post("/api/objects/upload")
        async def upload_target():
            return {"uploadURL": f"http://test/storage/upload-{len(self.uploaded) + 1}?sig=abc"}

        @app.put("/storage/{name}")
        async def storage_put(name: str, request: Request):
            self.uploaded[name] = (await request.body(), request.headers["content-type"])
            return Response(status_code=200)

        @app.post("/api/objects/normalize-path")
        async def normalize(body: dict):
            name = body["uploadURL"].split("/")[-1].split("?")[0]
            return {"objectPath": f"/objects/uploads/{name}"}

        # Band
        @app.get("/api/band")
        async def get_band():
            if self.band is None:
                return JSONResponse(status_code=404, content={"message": "No band"})
            return self.band

        @app.post("/api/band")
        async def create_band(body: dict):
            self.band = {"id": "band-1", "members": [], **body}
            return self.band

        @app.post("/api/band/members")
        async def add_member(body: dict):
            member = {"id": f"member-{body['position']}", "bandId": "band-1", **body}
            self.band["members"].append(member)
            return member

        @app.post("/api/band/members/generate-image")
        async def generate_member_image(body: dict):
            return {"requestId": "img-1"}

        @app.get("/api/band/members/image-status/{request_id}")
        async def member_image_status(request_id: str):
            entry = self._next(self.image_script)
            return self._scripted_error(entry) or entry

        @app.post("/api/band/members/{member_id}/save-image")
        async def save_member_image(member_id: str, body: dict):
            member = next(m for m in self.band["members"] if m["id"] == member_id)
            member["imageUrl"] = body["imageUrl"]
            return member

        @app.post("/api/band/generate-picture")
        async def generate_band_picture(body: dict):
            return {"requestId": "pic-1"}

        @app.get("/api/band/picture-status/{request_id}")
        async def band_picture_status(request_id: str):
            status = self._next(self.image_script)
            if status.get("status") == "completed" and self.band is not None:
                self.band["bandImageUrl"] = status.get("imageUrl")
            return status

        # Community
        @app.get("/api/community/tracks")
        async def community_tracks():
            return [
                {**t, "userLiked": t["id"] in self.likes, "likeCount": int(t["id"] in self.likes)}
                for t in self.tracks
                if t.get("visibility", "public") == "public"
            ]

        @app.post("/api/tracks/{track_id}/like")
        async def like(track_id: str):
            self.likes.add(track_id)
            return {"likeCount": 1, "userLiked": True}

        @app.delete("/api/tracks/{track_id}/like")
        async def unlike(track_id: str):
            self.likes.discard(track_id)
            return {"likeCount": 0, "userLiked": False}

        @app.get("/api/tracks/{track_id}/comments")
        async def comments(track_id: str):
            return [c for c in self.comments if c["trackId"] == track_id]

        @app.post("/api/tracks/{track_id}/comments")
        async def add_comment(track_id: str, body: dict):
            if self.user is None:
                return _unauthorized()
            comment = {
                "id": f"comment-{len(self.comments) + 1}",
                "trackId": track_id,
                "userId": self.user["id"],
                "comment": body["comment"],
            }
            self.comments.append(comment)
            return comment

        @app.delete("/api/tracks/{track_id}/comments/{comment_id}")
        async def delete_comment(track_id: str, comment_id: str):
            self.comments = [c for c in self.comments if c["id"] != comment_id]
            return Response(status_code=204)

        # Billing
        @app.get("/api/plans")
        async def plans():
            return [
                {"id": "plan-pro", "name": "Pro", "monthlyPriceId": "price_m", "sortOrder": 2},
                {"id": "plan-basic", "name": "Basic", "monthlyPriceId": "price_b", "sortOrder": 1},
                {"id": "plan-old", "name": "Legacy", "isActive": False},
            ]

        @app.post("/api/stripe/create-checkout-session")
        async def checkout(body: dict):
            return {"url": f"https://checkout.stripe.test/{body['planId']}/{body['billingCycle']}"}

        return app


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Isolate tests that read settings from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with fast polling and immediate redirects."""
    return Settings(
        api_base_url="http://test",
        music_poll_interval=0.01,
        image_poll_interval=0.01,
        poll_max_attempts=5,
        auth_redirect_delay=0,
    )


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
async def app(settings: Settings, backend: StubBackend) -> AsyncGenerator[NuSongApp]:
    """NuSong client application wired to the stub backend."""
    async with NuSongApp(settings=settings, transport=ASGITransport(app=backend.app)) as nusong:
        yield nusong
