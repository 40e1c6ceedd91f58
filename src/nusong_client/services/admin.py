"""Admin panel endpoints.

Admins have their own session, separate from regular users; an expired
admin session redirects to the admin login page (see the auth interceptor).
"""

import logging
from typing import Any

from nusong_client.schemas.admin import (
    AdminLogin,
    AdminUser,
    DashboardStats,
    DatabaseStats,
    DatabaseTable,
    ManagedUser,
    SiteSetting,
    TablePage,
    UserUpdate,
)
from nusong_client.schemas.band import Band
from nusong_client.schemas.plan import PlanForm, SubscriptionPlan
from nusong_client.schemas.track import Track
from nusong_client.services.base import AuthenticationError, BaseAPIClient

logger = logging.getLogger(__name__)


def _items(data: Any, key: str) -> list[Any]:
    """Admin list endpoints answer either a bare list or {key: [...]}."""
    if isinstance(data, dict):
        return data.get(key, [])
    return data or []


class AdminAPI:
    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    # Session
    async def login(self, form: AdminLogin) -> AdminUser:
        data = await self.client.post("/api/admin/login", json=form.to_wire())
        logger.info("Admin %s signed in", form.username)
        return AdminUser.model_validate(data.get("admin", data))

    async def logout(self) -> None:
        await self.client.post("/api/admin/logout")

    async def me(self) -> AdminUser | None:
        try:
            data = await self.client.get("/api/admin/user")
        except AuthenticationError:
            return None
        return AdminUser.model_validate(data) if data else None

    async def change_password(self, current_password: str, new_password: str) -> None:
        if len(new_password) < 8:
            raise ValueError("New password must be at least 8 characters")
        await self.client.put(
            "/api/admin/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    # Dashboard
    async def dashboard_stats(self) -> DashboardStats:
        return DashboardStats.model_validate(await self.client.get("/api/admin/dashboard/stats"))

    # Users
    async def users(self) -> list[ManagedUser]:
        data = await self.client.get("/api/admin/regular-users")
        return [ManagedUser.model_validate(item) for item in _items(data, "users")]

    async def update_user(self, user_id: str, update: UserUpdate) -> ManagedUser:
        data = await self.client.put(f"/api/admin/regular-users/{user_id}", json=update.to_wire())
        return ManagedUser.model_validate(data)

    async def delete_user(self, user_id: str) -> None:
        await self.client.delete(f"/api/admin/regular-users/{user_id}")

    async def reset_generation_counts(self) -> None:
        await self.client.post("/api/admin/reset-generation-counts")

    # Plans
    async def plans(self) -> list[SubscriptionPlan]:
        data = await self.client.get("/api/admin/plans")
        plans = [SubscriptionPlan.model_validate(item) for item in _items(data, "plans")]
        return sorted(plans, key=lambda p: p.sort_order)

    async def create_plan(self, form: PlanForm) -> SubscriptionPlan:
        data = await self.client.post("/api/admin/plans", json=form.to_wire())
        return SubscriptionPlan.model_validate(data)

    async def update_plan(self, plan_id: str, form: PlanForm) -> SubscriptionPlan:
        data = await self.client.put(f"/api/admin/plans/{plan_id}", json=form.to_wire())
        return SubscriptionPlan.model_validate(data)

    async def delete_plan(self, plan_id: str) -> None:
        await self.client.delete(f"/api/admin/plans/{plan_id}")

    # Tracks and bands
    async def tracks(self) -> list[Track]:
        data = await self.client.get("/api/admin/tracks")
        return [Track.model_validate(item) for item in _items(data, "tracks")]

    async def set_track_title(self, track_id: str, title: str) -> Track:
        data = await self.client.patch(f"/api/admin/tracks/{track_id}/title", json={"title": title})
        return Track.model_validate(data)

    async def set_gallery_visibility(self, track_id: str, show_in_gallery: bool) -> Track:
        data = await self.client.patch(
            f"/api/admin/tracks/{track_id}/gallery-visibility",
            json={"showInGallery": show_in_gallery},
        )
        return Track.model_validate(data)

    async def bands(self) -> list[Band]:
        data = await self.client.get("/api/admin/bands")
        return [Band.model_validate(item) for item in _items(data, "bands")]

    # Database inspection
    async def database_stats(self) -> DatabaseStats:
        return DatabaseStats.model_validate(await self.client.get("/api/admin/database/stats"))

    async def database_tables(self) -> list[DatabaseTable]:
        data = await self.client.get("/api/admin/database/tables")
        return [DatabaseTable.model_validate(item) for item in _items(data, "tables")]

    async def backup_sql(self) -> bytes:
        """SQL dump of the whole database."""
        return await self.client.get_bytes("/api/admin/backup/sql")

    async def database_table(self, name: str, page: int = 1, page_size: int = 50) -> TablePage:
        if page < 1 or not 1 <= page_size <= 500:
            raise ValueError("page must be >= 1 and page_size between 1 and 500")
        data = await self.client.get(
            f"/api/admin/database/table/{name}", params={"page": page, "pageSize": page_size}
        )
        return TablePage.model_validate(data)

    # Site settings
    async def settings(self) -> list[SiteSetting]:
        data = await self.client.get("/api/admin/settings")
        return [SiteSetting.model_validate(item) for item in _items(data, "settings")]

    async def update_setting(self, key: str, value: str) -> SiteSetting:
        data = await self.client.put("/api/admin/settings", json={"key": key, "value": value})
        return SiteSetting.model_validate(data)
