"""My Band: the user's virtual band, its members and their generated images."""

import asyncio
import logging
from typing import TYPE_CHECKING

from nusong_client.cache import BAND
from nusong_client.polling import GenerationPoller, JobStatus, PollResult
from nusong_client.schemas.band import (
    LEAD_SINGER_POSITION,
    Band,
    BandForm,
    BandMember,
    BandMemberForm,
)
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

logger = logging.getLogger(__name__)

POSITION_LABELS = {LEAD_SINGER_POSITION: "Lead Singer"}


def position_label(position: int) -> str:
    return POSITION_LABELS.get(position, f"Member {position}")


class BandView(BaseView):
    """Band page with portrait and band picture generation.

    A generated portrait is previewed first and only stored on a member when
    it is saved; a band picture is stored by the backend as soon as the job
    completes.
    """

    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.portrait_url: str | None = None
        self.portrait_error: str | None = None
        self.band_picture_url: str | None = None
        self.band_picture_error: str | None = None
        self._portrait_poll: asyncio.Task[PollResult] | None = None
        self._picture_poll: asyncio.Task[PollResult] | None = None

    @property
    def generating_portrait(self) -> bool:
        return self._portrait_poll is not None and not self._portrait_poll.done()

    @property
    def generating_band_picture(self) -> bool:
        return self._picture_poll is not None and not self._picture_poll.done()

    async def band(self) -> Band | None:
        return await self.perform(
            self.cache.fetch(BAND, self.app.band.get_band), "Failed to load band"
        )

    async def create_band(self, name: str, description: str | None = None) -> Band | None:
        form = self.validate(BandForm, name=name, description=description)
        if form is None:
            return None
        band = await self.perform(self.app.band.create_band(form), "Failed to create band")
        if band is not None:
            self.cache.invalidate(BAND)
            self.notifier.notify("Band created", f"{band.name} is ready for members.")
        return band

    async def add_member(
        self,
        name: str,
        position: int,
        role: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> BandMember | None:
        form = self.validate(
            BandMemberForm,
            name=name,
            position=position,
            role=role,
            description=description,
            image_url=image_url,
        )
        if form is None or not await self._position_free(form.position):
            return None
        member = await self.perform(self.app.band.add_member(form), "Failed to add member")
        if member is not None:
            self.cache.invalidate(BAND)
            label = position_label(position)
            self.notifier.notify("Member added", f"{member.name} joined as {label}.")
        return member

    async def update_member(
        self,
        member: BandMember,
        name: str | None = None,
        position: int | None = None,
        role: str | None = None,
        description: str | None = None,
    ) -> BandMember | None:
        form = self.validate(
            BandMemberForm,
            name=member.name if name is None else name,
            position=member.position if position is None else position,
            role=member.role if role is None else role,
            description=member.description if description is None else description,
            image_url=member.image_url,
        )
        if form is None or not await self._position_free(form.position, member.id):
            return None
        updated = await self.perform(
            self.app.band.update_member(member.id, form), "Failed to update member"
        )
        if updated is not None:
            self.cache.invalidate(BAND)
        return updated

    async def delete_member(self, member_id: str) -> bool:
        removed = await self.complete(
            self.app.band.delete_member(member_id), "Failed to remove member"
        )
        if not removed:
            return False
        self.cache.invalidate(BAND)
        return True

    async def generate_member_portrait(self, description: str) -> bool:
        """Start a portrait job; the result lands in portrait_url."""
        if not description.strip():
            self.errors = {"description": "Describe the member to generate a portrait"}
            return False
        if self.generating_portrait:
            return False

        self.portrait_url = None
        self.portrait_error = None
        started = await self.perform(
            self.app.band.generate_member_image(description.strip()), "Portrait generation failed"
        )
        if started is None:
            return False

        poller = self._image_poller(
            self.app.band.member_image_status,
            on_success=self._portrait_ready,
            on_error=self._portrait_failed,
            name="portrait",
        )
        self._portrait_poll = self.spawn(poller.run(started.request_id, self.token))
        return True

    async def save_member_portrait(self, member_id: str) -> BandMember | None:
        """Store the previewed portrait on a member."""
        if self.portrait_url is None:
            self.errors = {"portrait": "Generate a portrait first"}
            return None
        member = await self.perform(
            self.app.band.save_member_image(member_id, self.portrait_url), "Failed to save portrait"
        )
        if member is not None:
            self.portrait_url = None
            self.cache.invalidate(BAND)
            self.notifier.notify("Portrait saved", f"{member.name} has a new look.")
        return member

    async def generate_band_picture(self, prompt: str) -> bool:
        if not prompt.strip():
            self.errors = {"prompt": "Describe the band picture"}
            return False
        if self.generating_band_picture:
            return False

        self.band_picture_error = None
        started = await self.perform(
            self.app.band.generate_band_picture(prompt.strip()), "Band picture generation failed"
        )
        if started is None:
            return False

        poller = self._image_poller(
            self.app.band.band_picture_status,
            on_success=self._band_picture_ready,
            on_error=self._band_picture_failed,
            on_settled=lambda _result: self.cache.invalidate(BAND),
            name="band-picture",
        )
        self._picture_poll = self.spawn(poller.run(started.request_id, self.token))
        return True

    async def wait(self) -> None:
        """Wait for any running image job."""
        polls = [p for p in (self._portrait_poll, self._picture_poll) if p is not None]
        if polls:
            await asyncio.gather(*polls)

    def _image_poller(self, status_call, **callbacks) -> GenerationPoller:
        async def fetch_status(request_id: str) -> JobStatus:
            return JobStatus.from_image_job(await status_call(request_id))

        settings = self.app.settings
        return GenerationPoller(
            fetch_status,
            interval=settings.image_poll_interval,
            max_attempts=settings.poll_ceiling,
            **callbacks,
        )

    async def _position_free(self, position: int, member_id: str | None = None) -> bool:
        band = await self.band()
        if band is None:
            self.errors = {"band": "Create a band before adding members"}
            return False
        holder = band.member_at(position)
        if holder is not None and holder.id != member_id:
            message = f"{position_label(position)} is already taken by {holder.name}"
            self.errors = {"position": message}
            self.notifier.error("Position taken", message)
            return False
        return True

    def _portrait_ready(self, image_url: str | None) -> None:
        self.portrait_url = image_url
        self.notifier.notify("Portrait ready", "Save it to a band member to keep it.")

    def _portrait_failed(self, message: str) -> None:
        logger.warning("Member portrait failed: %s", message)
        self.portrait_error = message
        self.notifier.error("Portrait generation failed", message)

    def _band_picture_ready(self, image_url: str | None) -> None:
        self.band_picture_url = image_url
        self.notifier.notify("Band picture ready", "Your band has a new picture.")

    def _band_picture_failed(self, message: str) -> None:
        logger.warning("Band picture failed: %s", message)
        self.band_picture_error = message
        self.notifier.error("Band picture generation failed", message)
