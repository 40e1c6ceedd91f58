"""Pydantic schemas for users, sessions and account forms."""

from datetime import datetime
from enum import StrEnum

from pydantic import EmailStr, Field, field_validator

from nusong_client.schemas.base import APIModel


class PlanStatus(StrEnum):
    """Subscription state of a user account."""

    FREE = "free"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class User(APIModel):
    """The signed-in user as returned by /api/auth/user."""

    id: str = Field(description="User ID")
    email: str = Field(description="Email address")
    username: str | None = Field(default=None, description="Public username")
    first_name: str | None = Field(default=None, description="First name")
    last_name: str | None = Field(default=None, description="Last name")
    profile_image_url: str | None = Field(default=None, description="Selected avatar")
    email_verified: bool = Field(default=False, description="Whether the email is verified")
    subscription_plan_id: str | None = Field(default=None, description="Current plan")
    plan_status: PlanStatus = Field(default=PlanStatus.FREE, description="Plan status")
    plan_start_date: datetime | None = Field(default=None)
    plan_end_date: datetime | None = Field(default=None)
    audio_generations_used: int = Field(default=0, description="Audio generations this month")
    video_generations_used: int = Field(default=0, description="Video generations this month")
    max_audio_generations: int | None = Field(default=None, description="Plan audio quota")
    max_video_generations: int | None = Field(default=None, description="Plan video quota")
    created_at: datetime | None = Field(default=None)

    @field_validator("plan_status", mode="before")
    @classmethod
    def default_plan_status(cls, v: str | None) -> str:
        """Missing plan status means the free plan."""
        return v or PlanStatus.FREE

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username or self.email


class GenerationQuota(APIModel):
    """Answer of /api/user/generation-status."""

    can_generate: bool
    reason: str | None = None
    current_usage: int = 0
    max_generations: int = 0


class LoginForm(APIModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterForm(APIModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class PasswordChange(APIModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=100)
