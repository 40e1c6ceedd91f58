"""Derived user plan state, computed in one place for every view."""

from dataclasses import dataclass

from nusong_client.schemas.user import GenerationQuota, PlanStatus, User

UPGRADE_MESSAGE = "To generate tracks please subscribe (7 day trial)"


@dataclass(frozen=True)
class PlanState:
    is_authenticated: bool
    is_free_plan: bool
    has_active_subscription: bool
    can_generate: bool
    audio_used: int = 0
    audio_limit: int | None = None
    reason: str | None = None

    @classmethod
    def from_user(cls, user: User | None, quota: GenerationQuota | None = None) -> "PlanState":
        """Compute plan flags from the raw user record.

        A user is on the free plan when there is no user, the plan status is
        free, there is no subscription plan, or the status is anything other
        than active (expired, cancelled, inactive). When the backend's quota
        answer is known it decides whether generating is allowed.
        """
        if user is None:
            return cls(
                is_authenticated=False,
                is_free_plan=True,
                has_active_subscription=False,
                can_generate=False,
            )

        active = user.plan_status == PlanStatus.ACTIVE and bool(user.subscription_plan_id)

        if quota is not None:
            return cls(
                is_authenticated=True,
                is_free_plan=not active,
                has_active_subscription=active,
                can_generate=quota.can_generate,
                audio_used=quota.current_usage,
                audio_limit=quota.max_generations,
                reason=quota.reason,
            )

        return cls(
            is_authenticated=True,
            is_free_plan=not active,
            has_active_subscription=active,
            can_generate=active,
            audio_used=user.audio_generations_used,
            audio_limit=user.max_audio_generations,
        )

    @property
    def remaining_audio(self) -> int | None:
        if self.audio_limit is None:
            return None
        return max(self.audio_limit - self.audio_used, 0)

    @property
    def upgrade_message(self) -> str:
        return self.reason or UPGRADE_MESSAGE
