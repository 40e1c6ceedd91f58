"""Pydantic schemas for playlists."""

from datetime import datetime

from pydantic import Field, field_validator

from nusong_client.schemas.base import APIModel
from nusong_client.schemas.track import Track


class Playlist(APIModel):
    """A user's playlist."""

    id: str = Field(description="Playlist ID")
    user_id: str | None = Field(default=None, description="Owner ID")
    name: str = Field(description="Playlist name")
    description: str | None = Field(default=None)
    is_public: bool = Field(default=False)
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)


class PlaylistForm(APIModel):
    """Create/edit form."""

    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool = False

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a name for your playlist.")
        return v

    @field_validator("description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class PlaylistTrack(Track):
    """A track as listed in a playlist, with its place in the list."""

    added_at: datetime | None = None
    position: int = 0
