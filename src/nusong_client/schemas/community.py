"""Pydantic schemas for likes, comments and public profiles."""

from datetime import datetime

from pydantic import Field, field_validator

from nusong_client.schemas.base import APIModel
from nusong_client.schemas.track import Track, TrackOwner


class Comment(APIModel):
    id: str
    track_id: str | None = None
    user_id: str
    comment: str
    user: TrackOwner | None = None
    created_at: datetime | None = None


class CommentForm(APIModel):
    comment: str = Field(max_length=1000)

    @field_validator("comment")
    @classmethod
    def comment_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class LikeInfo(APIModel):
    like_count: int = 0
    user_liked: bool = False


class CommunityInfo(APIModel):
    like_count: int = 0
    comment_count: int = 0
    user_liked: bool = False


class PublicProfile(APIModel):
    user: TrackOwner
    tracks: list[Track] = Field(default_factory=list)
