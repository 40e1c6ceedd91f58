"""Pages reachable without signing in: public tracks, albums and profiles."""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, TypeVar

from nusong_client.schemas.album import PublicAlbum
from nusong_client.schemas.community import PublicProfile
from nusong_client.schemas.track import Track
from nusong_client.services.base import NotFoundError
from nusong_client.utils.slugs import is_valid_slug
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

T = TypeVar("T")


class PublicView(BaseView):
    """Missing or private resources set ``not_found`` instead of notifying."""

    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.not_found = False

    async def track(self, track_id: str) -> Track | None:
        return await self._load(self.app.tracks.public_track(track_id), "Failed to load track")

    async def tracks(self) -> list[Track]:
        return await self._load(self.app.tracks.public_tracks(), "Failed to load tracks") or []

    async def album(self, username: str, album_slug: str) -> PublicAlbum | None:
        if not is_valid_slug(album_slug):
            self.not_found = True
            return None
        return await self._load(
            self.app.albums.public_album(username, album_slug), "Failed to load album"
        )

    async def album_track(self, username: str, album_slug: str, track_id: str) -> Track | None:
        return await self._load(
            self.app.albums.public_album_track(username, album_slug, track_id),
            "Failed to load track",
        )

    async def shared_album(self, token: str) -> PublicAlbum | None:
        return await self._load(self.app.albums.shared_album(token), "Failed to load album")

    async def profile(self, username: str) -> PublicProfile | None:
        return await self._load(
            self.app.community.public_profile(username), "Failed to load profile"
        )

    async def _load(self, call: Awaitable[T], error_title: str) -> T | None:
        self.not_found = False
        return await self.perform(self._missing_is_none(call), error_title)

    async def _missing_is_none(self, call: Awaitable[T]) -> T | None:
        try:
            return await call
        except NotFoundError:
            self.not_found = True
            return None
