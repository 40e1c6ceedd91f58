"""Playlists page and the add-to-playlist dialog."""

from nusong_client.cache import PLAYLISTS
from nusong_client.schemas.playlist import Playlist, PlaylistForm, PlaylistTrack
from nusong_client.views.base import BaseView

DEFAULT_PLAYLIST = "My Playlist"


def playlist_tracks_key(playlist_id: str) -> tuple[str, ...]:
    return (*PLAYLISTS, playlist_id, "tracks")


class PlaylistView(BaseView):
    """Every change invalidates the whole playlists prefix, track lists included."""

    async def playlists(self) -> list[Playlist]:
        result = await self.perform(
            self.cache.fetch(PLAYLISTS, self.app.playlists.list_playlists),
            "Failed to load playlists",
        )
        return result or []

    async def tracks(self, playlist_id: str) -> list[PlaylistTrack]:
        result = await self.perform(
            self.cache.fetch(
                playlist_tracks_key(playlist_id), lambda: self.app.playlists.tracks(playlist_id)
            ),
            "Failed to load playlist tracks",
        )
        return result or []

    async def playlists_for_adding(self) -> list[Playlist]:
        """Playlists to offer when adding a track, creating a first one if there are none."""
        playlists = await self.playlists()
        if playlists:
            return playlists
        form = PlaylistForm(name=DEFAULT_PLAYLIST, description="Your personal playlist")
        created = await self.perform(
            self.app.playlists.create(form), "Failed to create playlist"
        )
        if created is None:
            return []
        self.cache.invalidate(PLAYLISTS)
        self.notifier.notify("Playlist created", f"Created '{DEFAULT_PLAYLIST}' for you!")
        return [created]

    async def create_playlist(
        self, name: str, description: str | None = None, is_public: bool = False
    ) -> Playlist | None:
        form = self.validate(PlaylistForm, name=name, description=description, is_public=is_public)
        if form is None:
            self.notifier.error("Playlist name required", self.errors.get("name", ""))
            return None
        playlist = await self.perform(self.app.playlists.create(form), "Failed to create playlist")
        if playlist is not None:
            self.cache.invalidate(PLAYLISTS)
            self.notifier.notify(
                "Playlist created", f'"{playlist.name}" has been created successfully.'
            )
        return playlist

    async def update_playlist(
        self,
        playlist: Playlist,
        name: str | None = None,
        description: str | None = None,
        is_public: bool | None = None,
    ) -> Playlist | None:
        form = self.validate(
            PlaylistForm,
            name=playlist.name if name is None else name,
            description=playlist.description if description is None else description,
            is_public=playlist.is_public if is_public is None else is_public,
        )
        if form is None:
            return None
        updated = await self.perform(
            self.app.playlists.update(playlist.id, form), "Failed to update playlist"
        )
        if updated is not None:
            self.cache.invalidate(PLAYLISTS)
            self.notifier.notify("Playlist updated", "Playlist has been updated successfully.")
        return updated

    async def delete_playlist(self, playlist_id: str) -> bool:
        deleted = await self.complete(
            self.app.playlists.delete(playlist_id), "Failed to delete playlist"
        )
        if deleted:
            self.cache.invalidate(PLAYLISTS)
            self.notifier.notify("Playlist deleted", "Playlist has been deleted successfully.")
        return deleted

    async def add_track(self, playlist_id: str, track_id: str, title: str | None = None) -> bool:
        added = await self.complete(
            self.app.playlists.add_track(playlist_id, track_id), "Failed to add track"
        )
        if added:
            self.cache.invalidate(PLAYLISTS)
            self.notifier.notify(
                "Track added", f'"{title or "Track"}" has been added to the playlist.'
            )
        return added

    async def remove_track(self, playlist_id: str, track_id: str) -> bool:
        removed = await self.complete(
            self.app.playlists.remove_track(playlist_id, track_id), "Failed to remove track"
        )
        if removed:
            self.cache.invalidate(PLAYLISTS)
            self.notifier.notify("Track removed", "Track has been removed from playlist.")
        return removed
