"""Home page: start a music generation and follow it to a playable track."""

import asyncio
import logging
from collections.abc import Coroutine
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from nusong_client.cache import CURRENT_USER, GENERATION_QUOTA, MY_GENERATIONS
from nusong_client.polling import GenerationPoller, JobStatus, PollResult
from nusong_client.schemas.track import (
    AudioToMusicRequest,
    GenerationStarted,
    TextToMusicRequest,
    Track,
    Visibility,
)
from nusong_client.services.base import APIError, AuthenticationError, QuotaExceededError
from nusong_client.views.base import BaseView

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

logger = logging.getLogger(__name__)

GENERIC_START_ERROR = "There was an error generating your music. Please try again."


class Phase(StrEnum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationView(BaseView):
    """Text-to-music and audio-to-music forms plus the result player."""

    def __init__(self, app: "NuSongApp") -> None:
        super().__init__(app)
        self.phase = Phase.IDLE
        self.current: Track | None = None
        self.player_url: str | None = None
        self.error: str | None = None
        self.upgrade_prompt: str | None = None
        self.lyrics: str | None = None
        self._poll: asyncio.Task[PollResult] | None = None

    @property
    def is_generating(self) -> bool:
        return self.phase in (Phase.SUBMITTING, Phase.GENERATING)

    async def submit_text_to_music(
        self,
        tags: str,
        lyrics: str = "",
        duration: int = 30,
        title: str | None = None,
        visibility: Visibility = Visibility.PUBLIC,
        album_id: str | None = None,
    ) -> bool:
        """Validate and submit the text-to-music form.

        Returns True when a job was started.
        """
        if not await self._check_plan():
            return False

        form = self.validate(
            TextToMusicRequest,
            tags=tags,
            lyrics=lyrics,
            duration=duration,
            title=title,
            visibility=visibility,
            album_id=album_id,
        )
        if form is None:
            self._report_form_errors()
            return False

        return await self._start(self.app.tracks.generate_text_to_music(form))

    async def submit_audio_to_music(
        self,
        tags: str,
        prompt: str = "",
        audio: bytes | None = None,
        content_type: str = "audio/mpeg",
        input_audio_url: str | None = None,
        title: str | None = None,
        visibility: Visibility = Visibility.PUBLIC,
        album_id: str | None = None,
    ) -> bool:
        """Submit the audio-to-music form.

        Raw audio is uploaded first; an already uploaded object path can be
        passed as input_audio_url instead.
        """
        if not await self._check_plan():
            return False

        if audio is not None:
            input_audio_url = await self.perform(
                self.app.uploads.upload(audio, content_type), "Upload failed"
            )
            if input_audio_url is None:
                return False
            self.notifier.notify(
                "Upload successful", "Your audio file has been uploaded successfully!"
            )

        form = self.validate(
            AudioToMusicRequest,
            tags=tags,
            prompt=prompt,
            input_audio_url=input_audio_url or "",
            title=title,
            visibility=visibility,
            album_id=album_id,
        )
        if form is None:
            self._report_form_errors()
            return False

        return await self._start(self.app.tracks.generate_audio_to_music(form))

    async def wait(self) -> PollResult | None:
        """Wait for the running poll, if any."""
        if self._poll is None:
            return None
        return await self._poll

    async def generate_lyrics(self, prompt: str) -> str | None:
        if not prompt.strip():
            self.errors = {"prompt": "Please describe the song you want lyrics for"}
            return None
        result = await self.perform(
            self.app.tracks.generate_lyrics(prompt.strip()), "Lyrics generation failed"
        )
        if result is None:
            return None
        self.lyrics = result.lyrics
        return result.lyrics

    async def _check_plan(self) -> bool:
        plan = await self.perform(self.app.plan_state(), "Failed to load your plan")
        if plan is None:
            return False
        if plan.can_generate:
            self.upgrade_prompt = None
            return True
        self.upgrade_prompt = plan.upgrade_message
        self.notifier.error("Upgrade Required", plan.upgrade_message)
        return False

    def _report_form_errors(self) -> None:
        if "tags" in self.errors:
            self.notifier.error("Missing Tags", self.errors["tags"])
        else:
            self.notifier.error("Invalid Form", next(iter(self.errors.values())))

    async def _start(self, call: Coroutine[Any, Any, GenerationStarted]) -> bool:
        if self.is_generating:
            self.notifier.error("Generation in progress", "Please wait for the current track.")
            call.close()
            return False

        self.phase = Phase.SUBMITTING
        self.error = None
        self.player_url = None
        self.current = None

        try:
            started = await call
        except AuthenticationError:
            self.phase = Phase.IDLE
            return False
        except QuotaExceededError as e:
            self.phase = Phase.IDLE
            self.upgrade_prompt = str(e)
            self.notifier.error("Generation Limit Reached", str(e))
            return False
        except APIError as e:
            logger.warning("Generation request rejected: %s", e)
            self.phase = Phase.FAILED
            self.error = GENERIC_START_ERROR
            self.notifier.error("Generation Failed", GENERIC_START_ERROR)
            return False

        self.phase = Phase.GENERATING
        settings = self.app.settings
        poller = GenerationPoller(
            self._fetch_status,
            interval=settings.music_poll_interval,
            max_attempts=settings.poll_ceiling,
            on_success=self._on_success,
            on_error=self._on_error,
            on_settled=self._on_settled,
            name="track",
        )
        self._poll = self.spawn(self._run(poller, started.generation_id))
        return True

    async def _run(self, poller: GenerationPoller, generation_id: str) -> PollResult:
        result = await poller.run(generation_id, self.token)
        if self.phase == Phase.GENERATING:
            # Aborted by an auth failure or cancelled with the view.
            self.phase = Phase.IDLE
        return result

    async def _fetch_status(self, generation_id: str) -> JobStatus:
        track = await self.app.tracks.generation_status(generation_id)
        self.current = track
        return JobStatus.from_track(track)

    def _on_success(self, audio_url: str | None) -> None:
        self.phase = Phase.COMPLETED
        self.player_url = audio_url
        self.notifier.notify("Music Generated!", "Your track is ready to play.")

    def _on_error(self, message: str) -> None:
        self.phase = Phase.FAILED
        self.error = message
        self.notifier.error("Generation Failed", message)

    def _on_settled(self, _result: PollResult) -> None:
        self.cache.invalidate(MY_GENERATIONS)
        self.cache.invalidate(GENERATION_QUOTA)
        self.cache.invalidate(CURRENT_USER)
