"""Pydantic schemas for albums and share links."""

from datetime import datetime

from pydantic import Field, field_validator

from nusong_client.schemas.base import APIModel
from nusong_client.schemas.track import Track, TrackOwner


class Album(APIModel):
    """A user's album."""

    id: str = Field(description="Album ID")
    user_id: str | None = Field(default=None, description="Owner ID")
    name: str = Field(description="Album name")
    cover_url: str | None = Field(default=None, description="Cover image URL or object path")
    is_default: bool = Field(default=False, description="New tracks land here by default")
    share_token: str | None = Field(default=None, description="Public share token")
    view_count: int = Field(default=0)
    track_count: int = Field(default=0)
    created_at: datetime | None = Field(default=None)


class AlbumForm(APIModel):
    """Create/rename form."""

    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Album name is required")
        return v


class ShareLink(APIModel):
    """Share token for unauthenticated album access."""

    share_token: str
    share_url: str | None = None


class PublicAlbum(APIModel):
    """Album as seen through a share link or public profile."""

    album: Album
    tracks: list[Track] = Field(default_factory=list)
    owner: TrackOwner | None = None
