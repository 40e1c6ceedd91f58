"""Pydantic schemas for music generations (tracks)."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field, field_validator

from nusong_client.schemas.base import APIModel


class TrackType(StrEnum):
    TEXT_TO_MUSIC = "text-to-music"
    AUDIO_TO_MUSIC = "audio-to-music"


class TrackStatus(StrEnum):
    """Lifecycle of a generation as stored by the backend."""

    PENDING = "pending"
    GENERATING = "generating"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Visibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


class TrackOwner(APIModel):
    """Public author info embedded in community and public track payloads."""

    id: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class Track(APIModel):
    """A music generation record."""

    id: str = Field(description="Generation ID")
    user_id: str | None = Field(default=None, description="Owner ID")
    type: TrackType = Field(default=TrackType.TEXT_TO_MUSIC, description="Generation type")
    tags: str = Field(default="", description="Comma separated genre tags")
    lyrics: str | None = Field(default=None, description="Lyrics or prompt")
    duration: int | None = Field(default=None, description="Requested length in seconds")
    input_audio_url: str | None = Field(default=None, description="Source audio (audio-to-music)")
    audio_url: str | None = Field(default=None, description="Generated audio")
    video_url: str | None = Field(default=None, description="Generated video")
    image_url: str | None = Field(default=None, description="Cover image")
    status: TrackStatus = Field(default=TrackStatus.PENDING, description="Generation status")
    error: str | None = Field(default=None, description="Failure message")
    visibility: Visibility = Field(default=Visibility.PUBLIC)
    show_in_gallery: bool = Field(default=True, description="Listed in the community gallery")
    title: str | None = Field(default=None)
    album_id: str | None = Field(default=None)
    like_count: int = Field(default=0)
    comment_count: int = Field(default=0)
    view_count: int = Field(default=0)
    user_liked: bool = Field(default=False)
    user: TrackOwner | None = Field(default=None)
    created_at: datetime | None = Field(default=None)

    @property
    def is_finished(self) -> bool:
        return self.status in (TrackStatus.COMPLETED, TrackStatus.FAILED)

    @property
    def display_title(self) -> str:
        return self.title or self.tags or "Untitled"


class TextToMusicRequest(APIModel):
    """Form for /api/generate-text-to-music."""

    tags: str = Field(description="Genre tags (required)")
    lyrics: str = Field(default="", description="Lyrics, may be empty for instrumentals")
    duration: int = Field(default=30, ge=5, le=240, description="Length in seconds")
    title: str | None = Field(default=None, max_length=200)
    visibility: Visibility = Field(default=Visibility.PUBLIC)
    album_id: str | None = Field(default=None)

    @field_validator("tags")
    @classmethod
    def tags_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter at least one genre tag.")
        return v

    @field_validator("lyrics")
    @classmethod
    def strip_lyrics(cls, v: str) -> str:
        return v.strip()

    @field_validator("title", "album_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class AudioToMusicRequest(APIModel):
    """Form for /api/generate-audio-to-music."""

    tags: str = Field(description="Genre tags (required)")
    prompt: str = Field(default="", description="Prompt or lyrics for the new arrangement")
    input_audio_url: str = Field(min_length=1, description="Object path of the uploaded source")
    title: str | None = Field(default=None, max_length=200)
    visibility: Visibility = Field(default=Visibility.PUBLIC)
    album_id: str | None = Field(default=None)

    @field_validator("tags")
    @classmethod
    def tags_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter at least one genre tag.")
        return v

    @field_validator("title", "album_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class GenerationStarted(APIModel):
    """Response of a generation start call."""

    generation_id: str
    request_id: str | None = None


class LyricsResult(APIModel):
    lyrics: str
    title: str | None = None
