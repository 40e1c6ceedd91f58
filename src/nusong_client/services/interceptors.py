"""Response interceptors shared by every backend call."""

import logging
from collections.abc import Iterable

import httpx

from nusong_client.services.base import AuthenticationError, QuotaExceededError, error_message
from nusong_client.ui import Navigator, Notifier

logger = logging.getLogger(__name__)

# Generation endpoints that are metered against the user's plan quota.
QUOTA_PATHS = (
    "/api/generate-text-to-music",
    "/api/generate-audio-to-music",
)

# Session lookups and credential checks: a 401 here is an answer, not an expired session.
SILENT_PATHS = (
    "/api/auth/user",
    "/api/auth/login",
    "/api/admin/login",
    "/api/admin/user",
)


class AuthRedirectInterceptor:
    """Turns auth failures into a single logout notice and login redirect.

    401 anywhere, and 403 outside the quota-metered endpoints, abort the
    current flow. A 403 from a quota-metered endpoint is a plan limit and is
    raised as QuotaExceededError without redirecting.
    """

    def __init__(
        self,
        navigator: Navigator,
        notifier: Notifier,
        login_path: str = "/auth",
        admin_login_path: str = "/admin/login",
        redirect_delay: float = 0.5,
        quota_paths: Iterable[str] = QUOTA_PATHS,
        silent_paths: Iterable[str] = SILENT_PATHS,
    ) -> None:
        self.navigator = navigator
        self.notifier = notifier
        self.login_path = login_path
        self.admin_login_path = admin_login_path
        self.redirect_delay = redirect_delay
        self.quota_paths = frozenset(quota_paths)
        self.silent_paths = frozenset(silent_paths)
        self._redirecting = False

    @property
    def redirecting(self) -> bool:
        return self._redirecting

    def login_target(self, path: str) -> str:
        """Login page for the area the rejected request belongs to."""
        if path.startswith("/api/admin"):
            return self.admin_login_path
        return self.login_path

    def reset(self) -> None:
        """Re-arm the redirect after a successful login."""
        self._redirecting = False

    def on_response(self, response: httpx.Response) -> None:
        status = response.status_code
        if status not in (401, 403):
            return

        path = response.request.url.path
        message = error_message(response)

        if status == 403 and path in self.quota_paths:
            logger.info("Generation quota reached on %s", path)
            if message:
                raise QuotaExceededError(message)
            raise QuotaExceededError()

        message = message or "Unauthorized"
        if path in self.silent_paths:
            raise AuthenticationError(message, status_code=status)

        if not self._redirecting:
            self._redirecting = True
            target = self.login_target(path)
            logger.warning("Session rejected by %s (%s); redirecting to %s", path, status, target)
            self.notifier.error("Unauthorized", "You are logged out. Logging in again...")
            self.navigator.redirect(target, delay=self.redirect_delay)

        raise AuthenticationError(message, status_code=status)
