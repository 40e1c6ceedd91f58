"""My Library: tracks, albums, visibility and sharing."""

from typing import TYPE_CHECKING

from nusong_client.cache import ALBUMS, MY_GENERATIONS
from nusong_client.schemas.album import Album, AlbumForm
from nusong_client.schemas.track import Track, TrackStatus, Visibility
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp


class LibraryView(BaseView):
    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.share_url: str | None = None

    async def tracks(self) -> list[Track]:
        result = await self.perform(
            self.cache.fetch(MY_GENERATIONS, self.app.tracks.my_generations),
            "Failed to load tracks",
        )
        return result or []

    async def albums(self) -> list[Album]:
        result = await self.perform(
            self.cache.fetch(ALBUMS, self.app.albums.list_albums), "Failed to load albums"
        )
        return result or []

    async def default_album(self) -> Album | None:
        for album in await self.albums():
            if album.is_default:
                return album
        return None

    async def filter_tracks(
        self,
        search: str = "",
        album_id: str | None = None,
        status: TrackStatus | None = None,
        visibility: Visibility | None = None,
    ) -> list[Track]:
        """Tracks matching every given criterion; search matches title and tags."""
        needle = search.strip().lower()
        result = []
        for track in await self.tracks():
            if album_id is not None and track.album_id != album_id:
                continue
            if status is not None and track.status != status:
                continue
            if visibility is not None and track.visibility != visibility:
                continue
            if needle and needle not in f"{track.title or ''} {track.tags}".lower():
                continue
            result.append(track)
        return result

    async def toggle_visibility(self, track: Track) -> bool:
        target = Visibility.PRIVATE if track.visibility == Visibility.PUBLIC else Visibility.PUBLIC
        updated = await self.perform(
            self.app.tracks.set_visibility(track.id, target), "Failed to update visibility"
        )
        if updated is None:
            return False
        self.cache.invalidate(MY_GENERATIONS)
        self.notifier.notify("Visibility updated", f"Your track is now {target.value}.")
        return True

    async def rename_track(self, track: Track, title: str) -> bool:
        title = title.strip()
        if not title:
            self.errors = {"title": "Title cannot be empty"}
            return False
        updated = await self.perform(
            self.app.tracks.set_visibility(track.id, track.visibility, title=title),
            "Failed to rename track",
        )
        if updated is None:
            return False
        self.cache.invalidate(MY_GENERATIONS)
        return True

    async def move_to_album(self, track_id: str, album_id: str | None) -> bool:
        updated = await self.perform(
            self.app.tracks.set_album(track_id, album_id), "Failed to move track"
        )
        if updated is None:
            return False
        self.cache.invalidate(MY_GENERATIONS)
        self.cache.invalidate(ALBUMS)
        return True

    async def delete_track(self, track_id: str) -> bool:
        if await self.complete(self.app.tracks.delete(track_id), "Failed to delete track"):
            self.cache.invalidate(MY_GENERATIONS)
            self.cache.invalidate(ALBUMS)
            self.notifier.notify("Track deleted", "The track was removed from your library.")
            return True
        return False

    async def create_album(self, name: str) -> Album | None:
        form = self.validate(AlbumForm, name=name)
        if form is None:
            return None
        album = await self.perform(self.app.albums.create(form), "Failed to create album")
        if album is not None:
            self.cache.invalidate(ALBUMS)
            self.notifier.notify("Album created", album.name)
        return album

    async def rename_album(self, album_id: str, name: str) -> bool:
        form = self.validate(AlbumForm, name=name)
        if form is None:
            return False
        album = await self.perform(self.app.albums.rename(album_id, form), "Failed to rename album")
        if album is None:
            return False
        self.cache.invalidate(ALBUMS)
        return True

    async def upload_cover(self, album_id: str, data: bytes, content_type: str) -> bool:
        if not content_type.startswith("image/"):
            self.errors = {"cover": "Cover must be an image"}
            return False
        object_path = await self.perform(
            self.app.uploads.upload(data, content_type), "Cover upload failed"
        )
        if object_path is None:
            return False
        album = await self.perform(
            self.app.albums.set_cover(album_id, object_path), "Failed to save cover"
        )
        if album is None:
            return False
        self.cache.invalidate(ALBUMS)
        self.notifier.notify("Cover updated", "Your album cover has been updated.")
        return True

    async def generate_cover(self, album_id: str, prompt: str) -> bool:
        if not prompt.strip():
            self.errors = {"prompt": "Please describe the cover"}
            return False
        album = await self.perform(
            self.app.albums.generate_cover(album_id, prompt.strip()), "Cover generation failed"
        )
        if album is None:
            return False
        self.cache.invalidate(ALBUMS)
        return True

    async def share_album(self, album_id: str) -> str | None:
        """Return a public share URL, creating the share token on first use."""
        link = await self.perform(
            self.app.albums.get_share_link(album_id), "Failed to load share link"
        )
        if link is None:
            link = await self.perform(
                self.app.albums.create_share_link(album_id), "Failed to create share link"
            )
        if link is None:
            return None
        base = self.app.settings.api_base_url
        self.share_url = link.share_url or f"{base}/share/{link.share_token}"
        self.cache.invalidate(ALBUMS)
        return self.share_url
