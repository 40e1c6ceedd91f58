"""Pydantic schemas for bands, members and image jobs."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field, field_validator

from nusong_client.schemas.base import APIModel

LEAD_SINGER_POSITION = 1
MAX_BAND_MEMBERS = 4


class BandMember(APIModel):
    id: str
    band_id: str | None = None
    name: str
    role: str | None = None
    description: str | None = None
    image_url: str | None = None
    position: int = Field(ge=1, le=MAX_BAND_MEMBERS)

    @property
    def is_lead_singer(self) -> bool:
        return self.position == LEAD_SINGER_POSITION


class Band(APIModel):
    id: str
    user_id: str | None = None
    name: str
    description: str | None = None
    band_image_url: str | None = None
    members: list[BandMember] = Field(default_factory=list)
    created_at: datetime | None = None

    def member_at(self, position: int) -> BandMember | None:
        for member in self.members:
            if member.position == position:
                return member
        return None

    @property
    def free_positions(self) -> list[int]:
        taken = {member.position for member in self.members}
        return [p for p in range(1, MAX_BAND_MEMBERS + 1) if p not in taken]


class BandForm(APIModel):
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=1000)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Band name is required")
        return v


class BandMemberForm(APIModel):
    name: str = Field(max_length=100)
    role: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    image_url: str | None = None
    position: int = Field(ge=1, le=MAX_BAND_MEMBERS)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Member name is required")
        return v


class ImageJobState(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ImageJobStarted(APIModel):
    request_id: str


class ImageJobStatus(APIModel):
    """Status of a portrait or band picture job."""

    status: ImageJobState = ImageJobState.PENDING
    image_url: str | None = None
    error: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def unknown_is_processing(cls, v: str | None) -> str:
        """Provider states we do not know are still in flight."""
        if v in {state.value for state in ImageJobState}:
            return v
        return ImageJobState.PROCESSING
