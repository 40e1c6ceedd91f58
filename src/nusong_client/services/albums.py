"""Album and album sharing endpoints."""

from nusong_client.schemas.album import Album, AlbumForm, PublicAlbum, ShareLink
from nusong_client.schemas.track import Track
from nusong_client.services.base import BaseAPIClient, NotFoundError
from nusong_client.utils.slugs import create_slug


class AlbumAPI:
    """The user's albums plus the public/shared album pages."""

    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def list_albums(self) -> list[Album]:
        data = await self.client.get("/api/albums")
        return [Album.model_validate(item) for item in data or []]

    async def create(self, form: AlbumForm) -> Album:
        data = await self.client.post("/api/albums", json=form.to_wire())
        return Album.model_validate(data)

    async def rename(self, album_id: str, form: AlbumForm) -> Album:
        data = await self.client.patch(f"/api/albums/{album_id}", json=form.to_wire())
        return Album.model_validate(data)

    async def set_cover(self, album_id: str, cover_url: str) -> Album:
        data = await self.client.patch(f"/api/albums/{album_id}", json={"coverUrl": cover_url})
        return Album.model_validate(data)

    async def generate_cover(self, album_id: str, prompt: str) -> Album:
        data = await self.client.post(
            f"/api/albums/{album_id}/generate-cover", json={"prompt": prompt}
        )
        return Album.model_validate(data.get("album", data))

    async def get_share_link(self, album_id: str) -> ShareLink | None:
        """Existing share link, or None if the album was never shared."""
        try:
            data = await self.client.get(f"/api/albums/{album_id}/share")
        except NotFoundError:
            return None
        if not data or not data.get("shareToken"):
            return None
        return ShareLink.model_validate(data)

    async def create_share_link(self, album_id: str) -> ShareLink:
        data = await self.client.post(f"/api/albums/{album_id}/share")
        return ShareLink.model_validate(data)

    async def shared_album(self, token: str) -> PublicAlbum:
        data = await self.client.get(f"/api/share/{token}")
        return PublicAlbum.model_validate(data)

    async def public_album(self, username: str, album_name: str) -> PublicAlbum:
        data = await self.client.get(f"/api/u/{username}/{create_slug(album_name)}")
        return PublicAlbum.model_validate(data)

    async def public_album_track(self, username: str, album_name: str, track_id: str) -> Track:
        data = await self.client.get(f"/api/u/{username}/{create_slug(album_name)}/{track_id}")
        return Track.model_validate(data)
