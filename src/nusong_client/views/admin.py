"""Admin panel: dashboard, user/plan/content management and database browser."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

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
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

logger = logging.getLogger(__name__)

ADMIN_HOME = "/admin"


class AdminView(BaseView):
    """Every mutating operation reports its outcome with a notification."""

    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.admin: AdminUser | None = None
        self.backup_filename: str | None = None

    # Session
    async def login(self, username: str, password: str) -> AdminUser | None:
        form = self.validate(AdminLogin, username=username, password=password)
        if form is None:
            return None
        # A rejected login is a silent 401, so perform() returns None without a notice.
        admin = await self.perform(self.app.admin.login(form), "Admin login failed")
        if admin is None:
            self.errors.setdefault("__root__", "Invalid username or password")
            self.notifier.error("Admin login failed", "Invalid username or password")
            return None
        self.admin = admin
        self.app.interceptor.reset()
        self.app.navigator.navigate(ADMIN_HOME)
        return admin

    async def check_session(self) -> AdminUser | None:
        """Load the signed-in admin, sending the visitor to admin login if none."""
        self.admin = await self.perform(self.app.admin.me(), "Failed to load admin session")
        if self.admin is None:
            self.app.navigator.navigate(self.app.settings.admin_login_path)
        return self.admin

    async def logout(self) -> None:
        await self.complete(self.app.admin.logout(), "Logout failed")
        self.admin = None
        self.app.navigator.navigate(self.app.settings.admin_login_path)

    async def change_password(self, current_password: str, new_password: str) -> bool:
        if len(new_password) < 8:
            self.errors = {"new_password": "New password must be at least 8 characters"}
            return False
        if not await self.complete(
            self.app.admin.change_password(current_password, new_password),
            "Failed to change password",
        ):
            return False
        self.notifier.notify("Password changed", "Your admin password has been updated.")
        return True

    # Dashboard
    async def dashboard(self) -> DashboardStats | None:
        return await self.perform(self.app.admin.dashboard_stats(), "Failed to load stats")

    # Users
    async def users(self) -> list[ManagedUser]:
        return await self.perform(self.app.admin.users(), "Failed to load users") or []

    async def update_user(self, user_id: str, **changes) -> ManagedUser | None:
        update = self.validate(UserUpdate, **changes)
        if update is None:
            return None
        user = await self.perform(
            self.app.admin.update_user(user_id, update), "Failed to update user"
        )
        if user is not None:
            self.notifier.notify("User updated", user.email)
        return user

    async def delete_user(self, user_id: str) -> bool:
        deleted = await self.complete(self.app.admin.delete_user(user_id), "Failed to delete user")
        if deleted:
            self.notifier.notify("User deleted")
        return deleted

    async def reset_generation_counts(self) -> bool:
        reset = await self.complete(
            self.app.admin.reset_generation_counts(), "Failed to reset generation counts"
        )
        if reset:
            self.notifier.notify("Generation counts reset", "All users start from zero.")
        return reset

    # Plans
    async def plans(self) -> list[SubscriptionPlan]:
        return await self.perform(self.app.admin.plans(), "Failed to load plans") or []

    async def save_plan(self, plan_id: str | None = None, **fields) -> SubscriptionPlan | None:
        """Create a plan, or update it when plan_id is given."""
        form = self.validate(PlanForm, **fields)
        if form is None:
            return None
        if plan_id is None:
            call = self.app.admin.create_plan(form)
        else:
            call = self.app.admin.update_plan(plan_id, form)
        plan = await self.perform(call, "Failed to save plan")
        if plan is not None:
            self.notifier.notify("Plan saved", plan.name)
        return plan

    async def delete_plan(self, plan_id: str) -> bool:
        deleted = await self.complete(self.app.admin.delete_plan(plan_id), "Failed to delete plan")
        if deleted:
            self.notifier.notify("Plan deleted")
        return deleted

    # Tracks and bands
    async def tracks(self) -> list[Track]:
        return await self.perform(self.app.admin.tracks(), "Failed to load tracks") or []

    async def rename_track(self, track_id: str, title: str) -> Track | None:
        if not title.strip():
            self.errors = {"title": "Title cannot be empty"}
            return None
        track = await self.perform(
            self.app.admin.set_track_title(track_id, title.strip()), "Failed to rename track"
        )
        if track is not None:
            self.notifier.notify("Track renamed", track.display_title)
        return track

    async def set_gallery_visibility(self, track_id: str, show: bool) -> Track | None:
        track = await self.perform(
            self.app.admin.set_gallery_visibility(track_id, show),
            "Failed to update gallery visibility",
        )
        if track is not None:
            state = "shown in" if show else "hidden from"
            self.notifier.notify("Gallery updated", f"Track {state} the community gallery.")
        return track

    async def bands(self) -> list[Band]:
        return await self.perform(self.app.admin.bands(), "Failed to load bands") or []

    # Database inspection
    async def database_stats(self) -> DatabaseStats | None:
        return await self.perform(self.app.admin.database_stats(), "Failed to load database stats")

    async def database_tables(self) -> list[DatabaseTable]:
        return await self.perform(self.app.admin.database_tables(), "Failed to load tables") or []

    async def database_table(
        self, name: str, page: int = 1, page_size: int = 50
    ) -> TablePage | None:
        if page < 1 or not 1 <= page_size <= 500:
            self.errors = {"page": "Page must be at least 1 and page size between 1 and 500"}
            return None
        return await self.perform(
            self.app.admin.database_table(name, page, page_size), f"Failed to load {name}"
        )

    async def download_backup(self) -> bytes | None:
        """Fetch an SQL dump; backup_filename names the file to save it under."""
        dump = await self.perform(self.app.admin.backup_sql(), "Backup failed")
        if dump is None:
            return None
        stamp = datetime.now(UTC).isoformat().replace(":", "-").replace(".", "-")
        self.backup_filename = f"numusic_backup_{stamp}.sql"
        self.notifier.notify("Backup ready", self.backup_filename)
        return dump

    # Site settings
    async def settings(self) -> list[SiteSetting]:
        return await self.perform(self.app.admin.settings(), "Failed to load settings") or []

    async def update_setting(self, key: str, value: str) -> SiteSetting | None:
        setting = await self.perform(
            self.app.admin.update_setting(key, value), "Failed to update setting"
        )
        if setting is not None:
            logger.info("Site setting %s updated", key)
            self.notifier.notify("Setting saved", key)
        return setting
