"""Pydantic schemas for the admin panel."""

from datetime import datetime
from typing import Any

from pydantic import Field

from nusong_client.schemas.base import APIModel
from nusong_client.schemas.user import PlanStatus


class AdminUser(APIModel):
    id: str
    username: str
    email: str | None = None
    role: str = "admin"
    is_active: bool = True
    last_login_at: datetime | None = None


class AdminLogin(APIModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class DashboardStats(APIModel):
    total_users: int = 0
    new_users: int = 0
    active_subscriptions: int = 0
    total_generations: int = 0
    text_to_music_generations: int = 0
    audio_to_music_generations: int = 0
    public_tracks: int = 0
    private_tracks: int = 0


class ManagedUser(APIModel):
    """A regular user row in the admin user table."""

    id: str
    email: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    plan_status: PlanStatus = PlanStatus.FREE
    subscription_plan_id: str | None = None
    audio_generations_used: int = 0
    video_generations_used: int = 0
    email_verified: bool = False
    created_at: datetime | None = None


class UserUpdate(APIModel):
    first_name: str | None = None
    last_name: str | None = None
    plan_status: PlanStatus | None = None
    subscription_plan_id: str | None = None
    email_verified: bool | None = None


class DatabaseStats(APIModel):
    table_count: int = 0
    total_rows: int = 0
    database_size: str | None = None


class DatabaseTable(APIModel):
    name: str
    row_count: int = 0


class TablePage(APIModel):
    """One page of rows from a database table."""

    table: str
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 50


class SiteSetting(APIModel):
    key: str
    value: str | None = None
    description: str | None = None
    type: str = "text"
    category: str = "general"
