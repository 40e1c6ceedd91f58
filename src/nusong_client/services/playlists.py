"""Playlist endpoints."""

from nusong_client.schemas.playlist import Playlist, PlaylistForm, PlaylistTrack
from nusong_client.services.base import BaseAPIClient


class PlaylistAPI:
    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def list_playlists(self) -> list[Playlist]:
        data = await self.client.get("/api/playlists")
        return [Playlist.model_validate(item) for item in data or []]

    async def create(self, form: PlaylistForm) -> Playlist:
        data = await self.client.post("/api/playlists", json=form.to_wire())
        return Playlist.model_validate(data)

    async def update(self, playlist_id: str, form: PlaylistForm) -> Playlist:
        data = await self.client.patch(f"/api/playlists/{playlist_id}", json=form.to_wire())
        return Playlist.model_validate(data)

    async def delete(self, playlist_id: str) -> None:
        await self.client.delete(f"/api/playlists/{playlist_id}")

    async def tracks(self, playlist_id: str) -> list[PlaylistTrack]:
        """Tracks in playlist order."""
        data = await self.client.get(f"/api/playlists/{playlist_id}/tracks")
        tracks = [PlaylistTrack.model_validate(item) for item in data or []]
        return sorted(tracks, key=lambda t: t.position)

    async def add_track(self, playlist_id: str, track_id: str) -> None:
        await self.client.post(f"/api/playlists/{playlist_id}/tracks", json={"trackId": track_id})

    async def remove_track(self, playlist_id: str, track_id: str) -> None:
        await self.client.delete(f"/api/playlists/{playlist_id}/tracks/{track_id}")
