"""Profile page: account details, avatar and subscription management."""

import pydantic
from pydantic import EmailStr, TypeAdapter

from nusong_client.cache import CURRENT_USER, GENERATION_QUOTA, PLANS
from nusong_client.schemas.plan import BillingInterval, SubscriptionPlan
from nusong_client.schemas.user import PasswordChange, User
from nusong_client.views.base import BaseView

_email = TypeAdapter(EmailStr)


class ProfileView(BaseView):
    async def plans(self) -> list[SubscriptionPlan]:
        result = await self.perform(
            self.cache.fetch(PLANS, self.app.billing.plans), "Failed to load plans"
        )
        return result or []

    async def update_email(self, email: str) -> User | None:
        self.errors = {}
        try:
            _email.validate_python(email.strip())
        except pydantic.ValidationError:
            self.errors = {"email": "Please enter a valid email address"}
            return None
        user = await self.perform(
            self.app.profile.update_email(email.strip()), "Failed to update email"
        )
        if user is not None:
            self.cache.invalidate(CURRENT_USER)
            self.notifier.notify("Email updated", "Please verify your new email address.")
        return user

    async def update_password(
        self, current_password: str, new_password: str, confirm_password: str
    ) -> bool:
        form = self.validate(
            PasswordChange, current_password=current_password, new_password=new_password
        )
        if form is None:
            return False
        if new_password != confirm_password:
            self.errors = {"confirm_password": "Passwords do not match"}
            return False
        if not await self.complete(
            self.app.profile.update_password(form), "Failed to update password"
        ):
            return False
        self.notifier.notify("Password updated", "Your password has been changed.")
        return True

    async def update_avatar(self, avatar_path: str) -> User | None:
        user = await self.perform(
            self.app.profile.update_avatar(avatar_path), "Failed to update avatar"
        )
        if user is not None:
            self.cache.invalidate(CURRENT_USER)
        return user

    async def upload_avatar(self, data: bytes, content_type: str) -> User | None:
        if not content_type.startswith("image/"):
            self.errors = {"avatar": "Avatar must be an image"}
            return None
        object_path = await self.perform(
            self.app.uploads.upload(data, content_type), "Avatar upload failed"
        )
        if object_path is None:
            return None
        return await self.update_avatar(object_path)

    async def checkout(
        self, plan: SubscriptionPlan, interval: BillingInterval = BillingInterval.MONTHLY
    ) -> bool:
        """Send the user to the Stripe checkout page for plan."""
        if plan.price_id(interval) is None:
            self.notifier.error(
                "Plan unavailable", f"{plan.name} has no {interval.value} billing option."
            )
            return False
        session = await self.perform(
            self.app.billing.create_checkout_session(plan.id, interval), "Checkout failed"
        )
        if session is None:
            return False
        self.app.navigator.navigate(session.url)
        return True

    async def manage_billing(self) -> bool:
        session = await self.perform(
            self.app.billing.create_portal_session(), "Failed to open billing portal"
        )
        if session is None:
            return False
        self.app.navigator.navigate(session.url)
        return True

    async def cancel_subscription(self) -> bool:
        if not await self.complete(
            self.app.billing.cancel_subscription(), "Failed to cancel subscription"
        ):
            return False
        self.cache.invalidate(CURRENT_USER)
        self.cache.invalidate(GENERATION_QUOTA)
        self.notifier.notify(
            "Subscription cancelled", "You keep access until the end of the billing period."
        )
        return True
