"""Account and session endpoints."""

import logging

from nusong_client.schemas.user import LoginForm, RegisterForm, User
from nusong_client.services.base import AuthenticationError, BaseAPIClient

logger = logging.getLogger(__name__)


class AuthAPI:
    """Sign-in, registration and email verification."""

    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def current_user(self) -> User | None:
        """Return the signed-in user, or None when there is no session."""
        try:
            data = await self.client.get("/api/auth/user")
        except AuthenticationError:
            return None
        return User.model_validate(data) if data else None

    async def login(self, form: LoginForm) -> User:
        data = await self.client.post("/api/auth/login", json=form.to_wire())
        user = data.get("user", data) if isinstance(data, dict) else data
        logger.info("Signed in as %s", form.email)
        return User.model_validate(user)

    async def register(self, form: RegisterForm) -> User:
        data = await self.client.post("/api/auth/register", json=form.to_wire())
        user = data.get("user", data) if isinstance(data, dict) else data
        return User.model_validate(user)

    async def logout(self) -> None:
        await self.client.post("/api/auth/logout")

    async def google_verify(self, credential: str) -> User:
        data = await self.client.post("/api/auth/google/verify", json={"credential": credential})
        user = data.get("user", data) if isinstance(data, dict) else data
        return User.model_validate(user)

    async def resend_verification(self) -> None:
        await self.client.post("/api/auth/resend-verification")

    async def verify_email(self, token: str) -> None:
        await self.client.get(f"/api/auth/verify-email/{token}")

    async def request_password_reset(self, email: str) -> None:
        await self.client.post("/api/auth/forgot-password", json={"email": email})

    async def reset_password(self, token: str, password: str) -> None:
        await self.client.post(
            "/api/auth/reset-password", json={"token": token, "password": password}
        )
