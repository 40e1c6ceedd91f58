"""Pydantic schemas for subscription plans and billing."""

from decimal import Decimal
from enum import StrEnum

from pydantic import Field

from nusong_client.schemas.base import APIModel


class BillingInterval(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionPlan(APIModel):
    id: str
    name: str
    description: str | None = None
    weekly_price: Decimal | None = None
    monthly_price: Decimal | None = None
    yearly_price: Decimal | None = None
    weekly_price_id: str | None = None
    monthly_price_id: str | None = None
    yearly_price_id: str | None = None
    max_audio_generations: int | None = None
    max_video_generations: int | None = None
    features: list[str] = Field(default_factory=list)
    is_active: bool = True
    sort_order: int = 0

    def price_id(self, interval: BillingInterval) -> str | None:
        return getattr(self, f"{interval.value}_price_id")

    def price(self, interval: BillingInterval) -> Decimal | None:
        return getattr(self, f"{interval.value}_price")


class PlanForm(APIModel):
    """Admin create/update form for a plan."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    weekly_price: Decimal | None = Field(default=None, ge=0)
    monthly_price: Decimal | None = Field(default=None, ge=0)
    yearly_price: Decimal | None = Field(default=None, ge=0)
    weekly_price_id: str | None = None
    monthly_price_id: str | None = None
    yearly_price_id: str | None = None
    max_audio_generations: int | None = Field(default=None, ge=0)
    max_video_generations: int | None = Field(default=None, ge=0)
    features: list[str] = Field(default_factory=list)
    is_active: bool = True
    sort_order: int = 0


class RedirectSession(APIModel):
    """A Stripe-hosted page to send the user to."""

    url: str
