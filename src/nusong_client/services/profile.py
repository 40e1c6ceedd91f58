"""Account settings endpoints."""

from pydantic import EmailStr, TypeAdapter

from nusong_client.schemas.user import PasswordChange, User
from nusong_client.services.base import BaseAPIClient

_email = TypeAdapter(EmailStr)


class ProfileAPI:
    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def update_avatar(self, avatar_path: str) -> User:
        data = await self.client.put("/api/user/avatar", json={"avatarPath": avatar_path})
        return User.model_validate(data)

    async def update_email(self, email: str) -> User:
        data = await self.client.put(
            "/api/user/email", json={"email": _email.validate_python(email)}
        )
        return User.model_validate(data)

    async def update_password(self, form: PasswordChange) -> None:
        await self.client.put("/api/user/password", json=form.to_wire())
