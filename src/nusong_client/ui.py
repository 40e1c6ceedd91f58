"""User-facing notifications and navigation."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum

logger = logging.getLogger(__name__)


class Variant(StrEnum):
    """Visual style of a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A toast shown to the user."""

    title: str
    description: str = ""
    variant: Variant = Variant.DEFAULT


@dataclass
class Notifier:
    """Collects notifications in the order they were raised."""

    notifications: list[Notification] = field(default_factory=list)

    def notify(
        self, title: str, description: str = "", variant: Variant = Variant.DEFAULT
    ) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        logger.debug("Notification: %s - %s", title, description)
        return notification

    def error(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, Variant.DESTRUCTIVE)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()


class Navigator:
    """Tracks the current location and performs redirects.

    Redirects can be delayed so a notification is visible before the
    location changes. Only one delayed redirect is outstanding at a time.
    """

    def __init__(self, location: str = "/") -> None:
        self.location = location
        self.redirects: list[str] = []
        self._pending: asyncio.Task[None] | None = None

    @property
    def redirect_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def navigate(self, path: str) -> None:
        """Change location immediately."""
        logger.info("Navigating to %s", path)
        self.location = path
        self.redirects.append(path)

    def redirect(self, path: str, delay: float = 0.0) -> None:
        """Redirect to path, optionally after delay seconds."""
        if delay <= 0:
            self.navigate(path)
            return

        if self.redirect_pending:
            return

        async def _delayed() -> None:
            await asyncio.sleep(delay)
            self.navigate(path)

        self._pending = asyncio.get_running_loop().create_task(_delayed())

    async def wait(self) -> None:
        """Wait for an outstanding delayed redirect to happen."""
        if self._pending is not None:
            await self._pending
