"""Subscription plans and Stripe-hosted billing pages."""

from nusong_client.schemas.plan import BillingInterval, RedirectSession, SubscriptionPlan
from nusong_client.services.base import BaseAPIClient


class BillingAPI:
    """Plans plus the checkout, portal and cancellation calls.

    Payment itself happens on Stripe-hosted pages; the backend only hands
    back the URL to send the user to.
    """

    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def plans(self) -> list[SubscriptionPlan]:
        """Active plans in display order."""
        data = await self.client.get("/api/plans")
        plans = [SubscriptionPlan.model_validate(item) for item in data or []]
        return sorted((p for p in plans if p.is_active), key=lambda p: p.sort_order)

    async def create_checkout_session(
        self, plan_id: str, interval: BillingInterval = BillingInterval.MONTHLY
    ) -> RedirectSession:
        data = await self.client.post(
            "/api/stripe/create-checkout-session",
            json={"planId": plan_id, "billingCycle": interval.value},
        )
        return RedirectSession.model_validate(data)

    async def create_portal_session(self) -> RedirectSession:
        data = await self.client.post("/api/stripe/create-portal-session")
        return RedirectSession.model_validate(data)

    async def cancel_subscription(self) -> None:
        await self.client.post("/api/stripe/cancel-subscription")
