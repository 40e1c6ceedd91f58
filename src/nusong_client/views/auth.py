"""Sign-in, registration and account recovery pages."""

import logging
from typing import TYPE_CHECKING

from nusong_client.schemas.user import LoginForm, RegisterForm, User
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

logger = logging.getLogger(__name__)

HOME = "/"
INVALID_CREDENTIALS = "Invalid email or password"


class AuthView(BaseView):
    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.user: User | None = None
        self.verification_sent = False
        self.reset_requested = False

    async def login(self, email: str, password: str) -> User | None:
        form = self.validate(LoginForm, email=email, password=password)
        if form is None:
            return None
        user = await self.perform(self.app.auth.login(form), "Login failed")
        if user is None:
            self.errors.setdefault("__root__", INVALID_CREDENTIALS)
            self.notifier.error("Login failed", INVALID_CREDENTIALS)
            return None
        return self._signed_in(user)

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> User | None:
        form = self.validate(
            RegisterForm,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        if form is None:
            return None
        user = await self.perform(self.app.auth.register(form), "Registration failed")
        if user is None:
            return None
        self.verification_sent = not user.email_verified
        self.notifier.notify("Welcome to NuSong!", "Check your inbox to verify your email.")
        return self._signed_in(user)

    async def google_sign_in(self, credential: str) -> User | None:
        user = await self.perform(self.app.auth.google_verify(credential), "Google sign-in failed")
        if user is None:
            return None
        return self._signed_in(user)

    async def logout(self) -> None:
        await self.complete(self.app.auth.logout(), "Logout failed")
        self.user = None
        self.cache.clear()
        self.app.navigator.navigate(self.app.settings.login_path)

    async def resend_verification(self) -> bool:
        sent = await self.complete(
            self.app.auth.resend_verification(), "Failed to send verification email"
        )
        if sent:
            self.verification_sent = True
            self.notifier.notify("Verification email sent", "Check your inbox.")
        return sent

    async def verify_email(self, token: str) -> bool:
        verified = await self.complete(self.app.auth.verify_email(token), "Verification failed")
        if verified:
            self.cache.clear()
            self.notifier.notify("Email verified", "Thanks for confirming your address.")
        return verified

    async def request_password_reset(self, email: str) -> bool:
        form = self.validate(LoginForm, email=email, password="-")
        if form is None:
            return False
        requested = await self.complete(
            self.app.auth.request_password_reset(str(form.email)), "Password reset failed"
        )
        # The same notice whether or not the address is registered.
        if requested:
            self.reset_requested = True
            self.notifier.notify(
                "Check your email", "If the address is registered, a reset link is on its way."
            )
        return requested

    async def reset_password(self, token: str, password: str, confirm_password: str) -> bool:
        if len(password) < 8:
            self.errors = {"password": "Password must be at least 8 characters"}
            return False
        if password != confirm_password:
            self.errors = {"confirm_password": "Passwords do not match"}
            return False
        done = await self.complete(
            self.app.auth.reset_password(token, password), "Password reset failed"
        )
        if done:
            self.notifier.notify("Password reset", "You can now sign in with your new password.")
            self.app.navigator.navigate(self.app.settings.login_path)
        return done

    def _signed_in(self, user: User) -> User:
        logger.info("User %s signed in", user.id)
        self.user = user
        # A new session: re-arm the logout redirect and drop the old user's data.
        self.app.interceptor.reset()
        self.cache.clear()
        self.app.navigator.navigate(HOME)
        return user
