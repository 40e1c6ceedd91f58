"""Tests for the profile and subscription page."""

from conftest import StubBackend

from nusong_client.main import NuSongApp
from nusong_client.schemas.plan import BillingInterval


class TestPlans:
    async def test_lists_active_plans_in_order(self, app: NuSongApp) -> None:
        plans = await app.profile_view().plans()
        assert [p.id for p in plans] == ["plan-basic", "plan-pro"]

    async def test_checkout_navigates_to_stripe(self, app: NuSongApp) -> None:
        view = app.profile_view()
        pro = (await view.plans())[1]

        assert await view.checkout(pro, BillingInterval.MONTHLY)

        assert app.navigator.location == "https://checkout.stripe.test/plan-pro/monthly"

    async def test_checkout_needs_a_price_for_interval(
        self, app: NuSongApp, backend: StubBackend
    ) -> None:
        view = app.profile_view()
        pro = (await view.plans())[1]

        assert not await view.checkout(pro, BillingInterval.YEARLY)

        assert app.notifier.last.title == "Plan unavailable"
        assert backend.count("POST", "/api/stripe/create-checkout-session") == 0


class TestAccount:
    async def test_invalid_email(self, app: NuSongApp, backend: StubBackend) -> None:
        view = app.profile_view()

        assert await view.update_email("not-an-email") is None

        assert "email" in view.errors
        assert backend.count("PUT", "/api/user/email") == 0

    async def test_password_confirmation_must_match(
        self, app: NuSongApp, backend: StubBackend
    ) -> None:
        view = app.profile_view()

        assert not await view.update_password("old-password", "new-password", "new-passw0rd")

        assert view.errors == {"confirm_password": "Passwords do not match"}
        assert backend.count("PUT", "/api/user/password") == 0

    async def test_short_new_password(self, app: NuSongApp) -> None:
        view = app.profile_view()

        assert not await view.update_password("old-password", "short", "short")

        assert "new_password" in view.errors

    async def test_avatar_must_be_image(self, app: NuSongApp, backend: StubBackend) -> None:
        view = app.profile_view()

        assert await view.upload_avatar(b"%PDF", "application/pdf") is None

        assert "avatar" in view.errors
        assert backend.count("POST", "/api/objects/upload") == 0
